"""Resolver: computes the value of every variable from its definition.

Builds the dependency graph of the definition table, orders it topologically,
and evaluates each variable exactly once. A fixed-point strategy that
repeatedly sweeps unresolved variables is kept alongside for comparison; both
produce the same values.
"""

import logging
from collections.abc import Iterator, Mapping

from . import ast
from .graph import (
    CyclicDependencyError,
    DependencyGraph,
    ResolutionError,
    UnresolvableReferenceError,
    find_cycle,
)

logger = logging.getLogger(__name__)

STRATEGIES = ("graph", "passes")


class ValueTable:
    """Write-once mapping from variable name to resolved value.

    Iterates in ascending name order.
    """

    def __init__(self):
        self._values: dict[str, int] = {}

    def set(self, name: str, value: int) -> None:
        if name in self._values:
            raise ValueError(f"value for {name} already resolved")
        self._values[name] = value

    def get(self, name: str) -> int:
        if name not in self._values:
            raise ResolutionError(f"unresolved: {name}")
        return self._values[name]

    def __getitem__(self, name: str) -> int:
        return self._values[name]

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._values))

    def items(self) -> list[tuple[str, int]]:
        return [(name, self._values[name]) for name in self]

    def as_dict(self) -> dict[str, int]:
        return dict(self.items())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ValueTable):
            return self._values == other._values
        if isinstance(other, Mapping):
            return self._values == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"ValueTable({self.as_dict()!r})"


def _definitions(source: ast.Module | Mapping[str, ast.Expression]) -> Mapping[str, ast.Expression]:
    if isinstance(source, ast.Module):
        return source.definitions
    return source


def evaluate(expr: ast.Expression, values: ValueTable) -> int:
    """Sum an expression's terms against already resolved values."""
    total = 0
    for term in expr.terms:
        match term:
            case ast.Literal(value=v):
                total += v
            case ast.Reference(name=name):
                total += values.get(name)
            case _:
                raise ResolutionError(f"unknown term type: {type(term)}")
    return total


class Resolver:
    """Resolves a definition table in dependency order."""

    def __init__(self, definitions: ast.Module | Mapping[str, ast.Expression]):
        self.definitions = _definitions(definitions)
        self.graph = DependencyGraph()
        for name, expr in self.definitions.items():
            self.graph.add_node(name, expr.dependencies())

    def order(self) -> list[str]:
        """Evaluation order: every variable after the variables it references."""
        return self.graph.topological_sort()

    def resolve(self) -> ValueTable:
        values = ValueTable()
        for name in self.order():
            values.set(name, evaluate(self.definitions[name], values))
            logger.debug("resolved %s = %d", name, values[name])
        return values


def resolve_by_passes(definitions: ast.Module | Mapping[str, ast.Expression]) -> ValueTable:
    """Resolve by repeated sweeps until every variable has a value.

    Each sweep resolves the variables whose references are all valued. A
    sweep that resolves nothing means the remaining variables are stuck
    behind an undefined name or a cycle.
    """
    definitions = _definitions(definitions)
    values = ValueTable()
    sweeps = 0

    while len(values) < len(definitions):
        sweeps += 1
        progress = False
        for name, expr in definitions.items():
            if name in values:
                continue
            unresolved = sum(1 for ref in expr.references() if ref not in values)
            if unresolved == 0:
                values.set(name, evaluate(expr, values))
                progress = True

        if not progress:
            stuck = {name for name in definitions if name not in values}
            missing: dict[str, list[str]] = {}
            for name in sorted(stuck):
                for ref in definitions[name].dependencies():
                    if ref not in definitions:
                        missing.setdefault(ref, []).append(name)
            if missing:
                raise UnresolvableReferenceError(missing)
            adjacency = {name: definitions[name].dependencies() for name in stuck}
            raise CyclicDependencyError(find_cycle(adjacency, stuck), stuck)

    logger.debug("resolved %d variables in %d sweeps", len(values), sweeps)
    return values


def resolve(
    definitions: ast.Module | Mapping[str, ast.Expression], strategy: str = "graph"
) -> ValueTable:
    """Resolve every variable using the named strategy ("graph" or "passes")."""
    match strategy:
        case "graph":
            return Resolver(definitions).resolve()
        case "passes":
            return resolve_by_passes(definitions)
        case _:
            raise ValueError(f"unknown strategy: {strategy}")
