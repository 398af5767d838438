"""Circular dependency detection by depth-first search.

Traversal starts from every unvisited service in sorted name order and
follows ``depends_on`` edges in declaration order.  Both orders are fixed
because they decide which back-edges are found, and so the exact cycle
list.  Cycles are not deduplicated: two back-edges into the same ancestor
through different paths record two cycles.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence

from composegraph.observability.logging import get_logger

_logger = get_logger("graph.cycles")


def detect_cycles(adjacency: Mapping[str, Sequence[str]]) -> list[tuple[str, ...]]:
    """Return every cycle reachable through a back-edge.

    Args:
        adjacency: service name -> names it depends on.  Every target must
            itself be a key.

    Returns:
        Cycles as name sequences closed by repeating the first name, e.g.
        ``("a", "b", "a")``.  A self-dependency yields ``("a", "a")``.
    """
    cycles: list[tuple[str, ...]] = []
    visited: set[str] = set()
    on_stack: set[str] = set()

    for start in sorted(adjacency):
        if start in visited:
            continue

        path: list[str] = [start]
        visited.add(start)
        on_stack.add(start)
        pending: list[Iterator[str]] = [iter(adjacency[start])]

        while pending:
            child = next(pending[-1], None)
            if child is None:
                pending.pop()
                on_stack.discard(path.pop())
                continue
            if child not in visited:
                visited.add(child)
                on_stack.add(child)
                path.append(child)
                pending.append(iter(adjacency[child]))
            elif child in on_stack:
                cycle = (*path[path.index(child) :], child)
                cycles.append(cycle)
                _logger.debug("cycle_detected", cycle=list(cycle))

    return cycles
