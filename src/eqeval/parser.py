"""Parser for equation definition files.

Grammar:
    module      = (line NEWLINE)*
    line        = NAME "=" [term ("+" term)*]
    term        = INT | NAME

Whitespace is insignificant everywhere and blank lines are skipped. Later
definitions of a name replace earlier ones.
"""

import logging
import re
from pathlib import Path

from . import ast

logger = logging.getLogger(__name__)

WHITESPACE = re.compile(r"\s+")
INT = re.compile(r"[0-9]+")


class ParseError(Exception):
    def __init__(self, msg: str, line: int = 0, text: str = ""):
        if line:
            super().__init__(f"line {line}: {msg}: {text!r}")
        else:
            super().__init__(f"{msg}: {text!r}")
        self.line = line
        self.text = text


def parse_term(token: str) -> ast.Literal | ast.Reference:
    """Classify a single right-hand side token."""
    if INT.fullmatch(token):
        return ast.Literal(value=int(token))
    return ast.Reference(name=token)


def parse_line(line: str, lineno: int = 0) -> tuple[str, ast.Expression]:
    """Parse one definition line into (name, expression)."""
    compact = WHITESPACE.sub("", line)

    name, sep, rhs = compact.partition("=")
    if not sep:
        raise ParseError("missing '='", lineno, line)
    if not name:
        raise ParseError("missing variable name", lineno, line)

    if not rhs:
        return name, ast.Expression(terms=[])

    terms = []
    for token in rhs.split("+"):
        if not token:
            raise ParseError("empty term", lineno, line)
        terms.append(parse_term(token))

    return name, ast.Expression(terms=terms)


def parse(source: str, path: str = "") -> ast.Module:
    """Parse definition source text into a module."""
    definitions: dict[str, ast.Expression] = {}

    for lineno, line in enumerate(source.splitlines(), start=1):
        if not line.strip():
            continue
        name, expr = parse_line(line, lineno)
        if name in definitions:
            logger.debug("line %d redefines %s", lineno, name)
        definitions[name] = expr

    logger.debug("parsed %d definitions from %s", len(definitions), path or "<source>")
    return ast.Module(path=path, definitions=definitions)


def parse_file(filepath: str | Path) -> ast.Module:
    """Parse a definitions file."""
    filepath = Path(filepath)
    source = filepath.read_text(encoding="utf-8")
    return parse(source, str(filepath))
