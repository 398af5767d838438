"""Topological ordering with Kahn's algorithm.

The in-degree of a service is the number of services that depend on it,
so the order starts at services nothing depends on and ends at the
shared foundations everything depends on.  This is the reverse of a
"start dependency-free services first" order; reverse the result for
startup sequencing.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Mapping, Sequence

from composegraph.graph.errors import CircularDependencyError


def topological_sort(adjacency: Mapping[str, Sequence[str]]) -> list[str]:
    """Order services so that every service precedes the services it depends on.

    Ties are broken alphabetically: the initial ready set is sorted, and
    each batch of newly ready services is sorted before it is queued.

    Raises:
        CircularDependencyError: if some services could not be placed.
    """
    in_degree = {name: 0 for name in adjacency}
    for deps in adjacency.values():
        for dep in deps:
            in_degree[dep] += 1

    queue = deque(sorted(name for name, degree in in_degree.items() if degree == 0))
    result: list[str] = []

    while queue:
        current = queue.popleft()
        result.append(current)

        ready: list[str] = []
        for dep in adjacency[current]:
            in_degree[dep] -= 1
            if in_degree[dep] == 0:
                ready.append(dep)
        queue.extend(sorted(ready))

    if len(result) != len(adjacency):
        placed = set(result)
        raise CircularDependencyError(sorted(name for name in adjacency if name not in placed))

    return result
