"""eqeval: resolve linear variable definitions to integer values.

Pipeline: parse definition lines -> order by dependency -> evaluate -> write.

Example:
    from eqeval import parse, resolve

    module = parse("a = 1\\nb = a + 2\\nc = b + a")
    values = resolve(module)
    values.as_dict()  # {"a": 1, "b": 3, "c": 4}
"""

__version__ = "0.1.0"

import sys
from pathlib import Path

from .ast import Expression, Literal, Module, Reference, Term
from .graph import (
    CyclicDependencyError,
    DependencyGraph,
    ResolutionError,
    UnresolvableReferenceError,
)
from .output import format_values, write_output
from .parser import ParseError, parse, parse_file, parse_line
from .resolver import Resolver, ValueTable, evaluate, resolve, resolve_by_passes


def allow_long_integers() -> None:
    """Lift the interpreter's digit limit on int <-> str conversion."""
    if hasattr(sys, "set_int_max_str_digits"):
        sys.set_int_max_str_digits(0)


def run(input_path: str | Path, output_path: str | Path, strategy: str = "graph") -> ValueTable:
    """Parse `input_path`, resolve every variable, and write `output_path`.

    Values may have any number of digits. Nothing is written unless
    resolution succeeds.
    """
    allow_long_integers()
    values = resolve(parse_file(input_path), strategy=strategy)
    write_output(output_path, values)
    return values


__all__ = [
    # Parse
    "parse",
    "parse_file",
    "parse_line",
    "ParseError",
    # AST
    "Module",
    "Expression",
    "Term",
    "Literal",
    "Reference",
    # Resolve
    "resolve",
    "resolve_by_passes",
    "evaluate",
    "Resolver",
    "ValueTable",
    "DependencyGraph",
    "ResolutionError",
    "UnresolvableReferenceError",
    "CyclicDependencyError",
    # Output
    "format_values",
    "write_output",
    # High-level
    "run",
    "allow_long_integers",
]
