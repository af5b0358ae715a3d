"""Dependency graph over variable definitions.

Builds the graph implied by the references in each expression and provides
evaluation order via topological sort.

Example:
    graph = DependencyGraph()
    graph.add_node("b", dependencies=["a"])
    graph.add_node("a", dependencies=[])
    graph.topological_sort()  # ["a", "b"]
"""

import heapq
from collections.abc import Iterable
from dataclasses import dataclass, field


class ResolutionError(Exception):
    """Raised when definitions cannot be resolved to values."""
    pass


class UnresolvableReferenceError(ResolutionError):
    """Raised when an expression references a variable that is never defined."""

    def __init__(self, missing: dict[str, list[str]]):
        self.missing = missing
        details = "; ".join(
            f"{name} (used by {', '.join(users)})" for name, users in sorted(missing.items())
        )
        super().__init__(f"undefined variable: {details}")


class CyclicDependencyError(ResolutionError):
    """Raised when variables depend on each other in a loop."""

    def __init__(self, cycle: list[str], stuck: set[str]):
        self.cycle = cycle
        self.stuck = stuck
        super().__init__(
            f"circular dependency: {' -> '.join(cycle)}"
            f" (unresolved: {', '.join(sorted(stuck))})"
        )


def find_cycle(adjacency: dict[str, set[str]], nodes: set[str]) -> list[str]:
    """Walk dependencies inside `nodes` until a name repeats.

    Every node left over by Kahn's algorithm has at least one dependency that
    is also left over, so the walk always closes a loop.
    """
    start = min(nodes)
    path = [start]
    seen = {start: 0}
    node = start
    while True:
        node = min(dep for dep in adjacency[node] if dep in nodes)
        if node in seen:
            return path[seen[node]:] + [node]
        seen[node] = len(path)
        path.append(node)


@dataclass
class DependencyGraph:
    """Variables keyed by name, each mapped to the names it references.

    Edges point from a variable to its dependencies; names referenced but never
    added are reported by `missing()`.
    """

    _adjacency: dict[str, set[str]] = field(default_factory=dict)

    def add_node(self, name: str, dependencies: Iterable[str]) -> None:
        """Add a variable and the names its expression references.

        Args:
            name: Variable name
            dependencies: Names this variable depends on
        """
        self._adjacency[name] = set(dependencies)

    def __contains__(self, name: str) -> bool:
        return name in self._adjacency

    def __len__(self) -> int:
        return len(self._adjacency)

    def get_dependencies(self, name: str) -> set[str]:
        """Get direct dependencies of a variable."""
        return self._adjacency.get(name, set())

    def get_dependents(self, name: str) -> set[str]:
        """Get variables that directly reference `name`."""
        return {node for node, deps in self._adjacency.items() if name in deps}

    def missing(self) -> dict[str, list[str]]:
        """Map each undefined but referenced name to the variables using it."""
        result: dict[str, list[str]] = {}
        for node, deps in self._adjacency.items():
            for dep in deps:
                if dep not in self._adjacency:
                    result.setdefault(dep, []).append(node)
        return {name: sorted(users) for name, users in result.items()}

    def topological_sort(self) -> list[str]:
        """Return variables in topological order (dependencies first).

        Among variables that are ready at the same time, the lexicographically
        smallest comes first, so the order depends only on the definitions.

        Raises:
            UnresolvableReferenceError: If a referenced variable is undefined
            CyclicDependencyError: If circular dependencies exist
        """
        missing = self.missing()
        if missing:
            raise UnresolvableReferenceError(missing)

        # Kahn's algorithm
        dependents: dict[str, list[str]] = {node: [] for node in self._adjacency}
        for node, deps in self._adjacency.items():
            for dep in deps:
                dependents[dep].append(node)

        # Number of dependencies not yet ordered
        in_degree = {node: len(deps) for node, deps in self._adjacency.items()}

        queue = [node for node, degree in in_degree.items() if degree == 0]
        heapq.heapify(queue)
        result = []

        while queue:
            node = heapq.heappop(queue)
            result.append(node)

            for dependent in dependents[node]:
                in_degree[dependent] -= 1
                if in_degree[dependent] == 0:
                    heapq.heappush(queue, dependent)

        if len(result) != len(self._adjacency):
            # leftovers all wait on one another
            stuck = set(self._adjacency) - set(result)
            raise CyclicDependencyError(find_cycle(self._adjacency, stuck), stuck)

        return result
