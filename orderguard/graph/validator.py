"""Order validation by cycle detection over the dependency graph.

A candidate ordering of files is achievable exactly when no dependency cycle
is reachable from any of its files. The check is a depth-first traversal
with an explicit work stack, so long include chains never hit the
interpreter's recursion limit.
"""

from collections.abc import Iterable, Iterator
from enum import Enum, auto
from typing import TYPE_CHECKING

import structlog

from orderguard.errors import InvalidIdError

if TYPE_CHECKING:
    from orderguard.graph.dependency_graph import DependencyGraph
    from orderguard.graph.registry import IdentifierRegistry

logger = structlog.get_logger(__name__)


class _NodeState(Enum):
    """Traversal state of a single file: UNVISITED -> ON_STACK -> VISITED."""

    UNVISITED = auto()
    ON_STACK = auto()
    VISITED = auto()


class OrderValidator:
    """Checks candidate orderings against one dependency graph.

    Traversal state is created fresh for every call, so one validator may
    check several orderings. Within a call, a file explored from an earlier
    candidate is not explored again from a later one: a cycle is a property
    of the graph, not of the root it is reached from.

    Example:
        >>> from orderguard.graph.dependency_graph import DependencyGraph
        >>> from orderguard.graph.registry import IdentifierRegistry
        >>> registry = IdentifierRegistry.from_names(["a.h", "b.h"])
        >>> graph = DependencyGraph(registry, {0: [1], 1: [0]})
        >>> OrderValidator(graph).is_order_correct(["a.h"])
        False
    """

    def __init__(self, graph: "DependencyGraph"):
        self.graph = graph

    def is_order_correct(
        self,
        filenames: Iterable[str],
        registry: "IdentifierRegistry | None" = None,
    ) -> bool:
        """Decide whether a candidate ordering is achievable.

        Every filename is resolved before traversal starts, so an unknown
        name is reported regardless of whether a cycle would be found first.

        Args:
            filenames: Candidate ordering
            registry: Registry to resolve names with (defaults to the graph's)

        Returns:
            True if no cycle is reachable from any candidate, False otherwise

        Raises:
            UnknownNameError: If a candidate is not a known file
            InvalidIdError: If ``registry`` resolves a candidate outside the graph
        """
        registry = registry if registry is not None else self.graph.registry
        candidates = list(filenames)
        roots = [registry.id_of(name) for name in candidates]
        for root in roots:
            if root not in self.graph:
                raise InvalidIdError(root, len(self.graph))

        states: dict[int, _NodeState] = {}
        for name, root in zip(candidates, roots):
            if states.get(root, _NodeState.UNVISITED) is _NodeState.VISITED:
                continue
            if self._reaches_cycle(root, states):
                logger.info("cycle_detected", root=name)
                return False

        logger.debug(
            "order_validated",
            candidate_count=len(candidates),
            explored_count=len(states),
        )
        return True

    def _reaches_cycle(self, root: int, states: dict[int, _NodeState]) -> bool:
        """Explore everything reachable from ``root``; True on a back edge."""
        states[root] = _NodeState.ON_STACK
        stack: list[tuple[int, Iterator[int]]] = [
            (root, iter(self.graph.dependencies_of(root))),
        ]

        while stack:
            node, pending = stack[-1]
            for dep in pending:
                state = states.get(dep, _NodeState.UNVISITED)
                if state is _NodeState.ON_STACK:
                    return True
                if state is _NodeState.UNVISITED:
                    states[dep] = _NodeState.ON_STACK
                    stack.append((dep, iter(self.graph.dependencies_of(dep))))
                    break
            else:
                stack.pop()
                states[node] = _NodeState.VISITED

        return False


def validate_order(
    graph: "DependencyGraph",
    registry: "IdentifierRegistry",
    candidate_ordering: Iterable[str],
) -> bool:
    """Return whether ``candidate_ordering`` respects the graph's dependencies.

    Raises:
        UnknownNameError: If a candidate is not a known file
    """
    return OrderValidator(graph).is_order_correct(candidate_ordering, registry)
