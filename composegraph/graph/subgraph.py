"""Subgraph extraction around a focal service.

The neighbourhood is collected by one depth-first walk that follows both
``depends_on`` and ``depended_by`` edges with a single depth counter.  The
collected services are then rebuilt into an independent graph: edges are
re-resolved against the reduced set (edges leaving it are dropped), and
peers, cycles and ordering are recomputed from scratch.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from composegraph.graph.builder import assemble_graph
from composegraph.graph.errors import ServiceNotFoundError
from composegraph.graph.models import DependencyGraph
from composegraph.observability.logging import get_logger
from composegraph.observability.metrics import graph_filters_total

_logger = get_logger("graph.subgraph")


@dataclass
class SubgraphResult:
    """Result of a neighbourhood extraction."""

    graph: DependencyGraph
    focus: str
    collected: list[str] = field(default_factory=list)  # visit order
    depth_reached: int = 0
    truncated: bool = False  # True if the depth bound excluded a reachable service


def collect_neighbourhood(graph: DependencyGraph, name: str, depth: int = -1) -> tuple[list[str], int, bool]:
    """Walk outward from *name* and return (visit order, depth reached, truncated).

    A service is claimed by the first path that reaches it, so with a depth
    bound the walk order decides membership.  Dependencies are explored
    before dependents, each in declaration order.
    """
    visited: set[str] = set()
    order: list[str] = []
    skipped: set[str] = set()
    depth_reached = 0

    stack: list[tuple[str, int]] = [(name, 0)]
    while stack:
        current, current_depth = stack.pop()
        if current in visited:
            continue
        if depth >= 0 and current_depth > depth:
            skipped.add(current)
            continue

        visited.add(current)
        order.append(current)
        depth_reached = max(depth_reached, current_depth)

        node = graph.services[current]
        neighbours = [*node.depends_on, *node.depended_by]
        stack.extend((n, current_depth + 1) for n in reversed(neighbours))

    return order, depth_reached, bool(skipped - visited)


def filter_by_service(graph: DependencyGraph, name: str, depth: int = -1) -> SubgraphResult:
    """Extract the neighbourhood of *name* as a brand-new graph.

    Args:
        graph: Source graph; never modified.
        name:  Focal service.
        depth: Maximum distance from *name*; negative means unlimited.

    Raises:
        ServiceNotFoundError: if *name* is not in *graph*.
    """
    if name not in graph.services:
        graph_filters_total.labels(outcome="service_not_found").inc()
        raise ServiceNotFoundError(name)

    order, depth_reached, truncated = collect_neighbourhood(graph, name, depth)
    included = set(order)

    definitions = {n: graph.services[n].service for n in order}
    adjacency = {n: tuple(d for d in definitions[n].depends_on if d in included) for n in order}
    subgraph = assemble_graph(definitions, adjacency)

    graph_filters_total.labels(outcome="success").inc()
    _logger.info(
        "graph_filtered",
        focus=name,
        depth=depth,
        nodes=subgraph.node_count,
        source_nodes=graph.node_count,
        truncated=truncated,
    )
    return SubgraphResult(
        graph=subgraph,
        focus=name,
        collected=order,
        depth_reached=depth_reached,
        truncated=truncated,
    )
