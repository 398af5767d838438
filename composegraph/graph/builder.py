"""Graph builder: turns a service map into a resolved DependencyGraph.

Build order: nodes -> depends_on resolution -> network peers -> volume
peers -> cycle detection -> topological order (acyclic graphs only).
Resolution is all-or-nothing; an unknown dependency aborts the build
before any graph is returned.
"""

from __future__ import annotations

import dataclasses
import time
from collections.abc import Mapping
from types import MappingProxyType

from composegraph.graph.cycles import detect_cycles
from composegraph.graph.errors import UnknownDependencyError
from composegraph.graph.indexer import index_network_peers, index_volume_peers
from composegraph.graph.models import DependencyGraph, ServiceNode
from composegraph.graph.ordering import topological_sort
from composegraph.models.services import ServiceDefinition
from composegraph.observability.logging import get_logger
from composegraph.observability.metrics import (
    cycles_detected_total,
    graph_build_duration_seconds,
    graph_builds_total,
)

_logger = get_logger("graph.builder")


def build_graph(services: Mapping[str, ServiceDefinition]) -> DependencyGraph:
    """Build a complete dependency graph from a service map.

    Args:
        services: service name -> definition.  The mapping key is the
            authoritative service name.

    Raises:
        UnknownDependencyError: if any ``depends_on`` entry names a service
            that is not in *services*.
    """
    t_start = time.monotonic()
    definitions = _normalise(services)

    adjacency: dict[str, tuple[str, ...]] = {}
    for name in sorted(definitions):
        for dep in definitions[name].depends_on:
            if dep not in definitions:
                graph_builds_total.labels(outcome="unknown_dependency").inc()
                _logger.info("unknown_dependency", service=name, dependency=dep)
                raise UnknownDependencyError(name, dep)
        adjacency[name] = tuple(definitions[name].depends_on)

    graph = assemble_graph(definitions, adjacency)

    duration = time.monotonic() - t_start
    graph_build_duration_seconds.observe(duration)
    graph_builds_total.labels(outcome="success").inc()
    _logger.info(
        "graph_built",
        nodes=graph.node_count,
        edges=graph.edge_count,
        cycles=len(graph.cycles),
        duration_ms=round(duration * 1000.0, 3),
    )
    return graph


def assemble_graph(
    definitions: Mapping[str, ServiceDefinition],
    adjacency: Mapping[str, tuple[str, ...]],
) -> DependencyGraph:
    """Derive reverse edges, peers, cycles and ordering for resolved edges.

    *adjacency* must only reference names present in *definitions*.  Used
    both for full builds and for rebuilding filtered subgraphs.
    """
    names = sorted(definitions)

    depended_by: dict[str, list[str]] = {name: [] for name in names}
    for name in names:
        for dep in adjacency[name]:
            depended_by[dep].append(name)

    network_peers = index_network_peers(definitions.values())
    volume_peers = index_volume_peers(definitions.values())

    cycles = detect_cycles(adjacency)
    if cycles:
        cycles_detected_total.inc(len(cycles))
    order = None if cycles else topological_sort(adjacency)

    nodes = {
        name: ServiceNode(
            name=name,
            service=definitions[name],
            depends_on=adjacency[name],
            depended_by=tuple(depended_by[name]),
            network_peers=network_peers[name],
            volume_peers=volume_peers[name],
        )
        for name in names
    }

    return DependencyGraph(
        services=MappingProxyType(nodes),
        cycles=tuple(cycles),
        topological_order=None if order is None else tuple(order),
    )


def _normalise(services: Mapping[str, ServiceDefinition]) -> dict[str, ServiceDefinition]:
    definitions: dict[str, ServiceDefinition] = {}
    for name, definition in services.items():
        if definition.name != name:
            definition = dataclasses.replace(definition, name=name)
        definitions[name] = definition
    return definitions
