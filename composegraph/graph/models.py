"""Data structures for the service dependency graph.

Nodes live in a single registry keyed by service name and refer to each
other by name only, so the bidirectional ``depends_on``/``depended_by``
views never form an object cycle.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING

from composegraph.graph.errors import ServiceNotFoundError
from composegraph.models.services import HealthCheck, ServiceDefinition

if TYPE_CHECKING:
    from composegraph.graph.subgraph import SubgraphResult

_EMPTY: Mapping[str, tuple[str, ...]] = MappingProxyType({})


class RelationshipKind(StrEnum):
    """Types of relationships between services."""

    DEPENDS_ON = "depends_on"
    NETWORK = "network"
    VOLUME = "volume"


@dataclass(frozen=True)
class Relationship:
    """A typed fact connecting two services.

    ``metadata`` carries the network name or volume identifier; it is empty
    for DEPENDS_ON.
    """

    source: str
    target: str
    kind: RelationshipKind
    metadata: str = ""


@dataclass(frozen=True)
class ServiceNode:
    """A service together with all of its resolved relationships.

    Peer lists include the node itself.
    """

    name: str
    service: ServiceDefinition
    depends_on: tuple[str, ...] = ()
    depended_by: tuple[str, ...] = ()
    network_peers: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: _EMPTY)
    volume_peers: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: _EMPTY)

    @property
    def networks(self) -> tuple[str, ...]:
        return self.service.networks

    @property
    def volumes(self) -> tuple[str, ...]:
        return self.service.volumes

    @property
    def has_health_check(self) -> bool:
        return self.service.healthcheck is not None

    @property
    def health_check(self) -> HealthCheck | None:
        return self.service.healthcheck

    def other_network_peers(self, network: str) -> list[str]:
        """Return the services sharing *network*, excluding this one."""
        return [p for p in self.network_peers.get(network, ()) if p != self.name]

    def other_volume_peers(self, identifier: str) -> list[str]:
        """Return the services sharing volume *identifier*, excluding this one."""
        return [p for p in self.volume_peers.get(identifier, ()) if p != self.name]


@dataclass(frozen=True)
class DependencyGraph:
    """An immutable, fully resolved dependency graph.

    ``cycles`` holds every back-edge cycle found, each closed by repeating
    its first name.  ``topological_order`` is None whenever a cycle exists.
    """

    services: Mapping[str, ServiceNode]
    cycles: tuple[tuple[str, ...], ...] = ()
    topological_order: tuple[str, ...] | None = None

    @property
    def has_cycles(self) -> bool:
        return len(self.cycles) > 0

    @property
    def node_count(self) -> int:
        return len(self.services)

    @property
    def edge_count(self) -> int:
        return sum(len(n.depends_on) for n in self.services.values())

    def sorted_names(self) -> list[str]:
        return sorted(self.services)

    def node(self, name: str) -> ServiceNode:
        """Return the node for *name*.

        Raises:
            ServiceNotFoundError: if no such service exists.
        """
        try:
            return self.services[name]
        except KeyError:
            raise ServiceNotFoundError(name) from None

    def root_services(self) -> list[str]:
        """Return services with no dependencies, sorted by name."""
        return sorted(name for name, node in self.services.items() if not node.depends_on)

    def is_in_cycle(self, name: str) -> bool:
        return any(name in cycle for cycle in self.cycles)

    def is_cycle_edge(self, source: str, target: str) -> bool:
        """Return True if source->target appears as consecutive entries of any cycle."""
        for cycle in self.cycles:
            for i in range(len(cycle) - 1):
                if cycle[i] == source and cycle[i + 1] == target:
                    return True
        return False

    def network_groups(self) -> dict[str, list[str]]:
        """Return network name -> sorted member names, in network-name order."""
        groups: dict[str, list[str]] = {}
        for name in self.sorted_names():
            for network in self.services[name].networks:
                members = groups.setdefault(network, [])
                if name not in members:
                    members.append(name)
        return {network: groups[network] for network in sorted(groups)}

    def relationships(self) -> list[Relationship]:
        """Return every relationship in the graph.

        Ordered by kind (depends_on, network, volume), then by source name.
        Peer relationships are emitted once per direction and exclude the
        source itself.
        """
        names = self.sorted_names()
        result: list[Relationship] = []
        for name in names:
            for dep in self.services[name].depends_on:
                result.append(Relationship(name, dep, RelationshipKind.DEPENDS_ON))
        for name in names:
            node = self.services[name]
            for network in node.network_peers:
                for peer in node.other_network_peers(network):
                    result.append(Relationship(name, peer, RelationshipKind.NETWORK, network))
        for name in names:
            node = self.services[name]
            for volume in node.volume_peers:
                for peer in node.other_volume_peers(volume):
                    result.append(Relationship(name, peer, RelationshipKind.VOLUME, volume))
        return result

    def filter_by_service(self, name: str, depth: int = -1) -> DependencyGraph:
        """Return the independent subgraph around *name*.

        A negative *depth* means unlimited.  See
        :func:`composegraph.graph.subgraph.filter_by_service`.
        """
        from composegraph.graph.subgraph import filter_by_service

        return filter_by_service(self, name, depth).graph

    def neighbourhood(self, name: str, depth: int = -1) -> SubgraphResult:
        """Like :meth:`filter_by_service` but also reports traversal details."""
        from composegraph.graph.subgraph import filter_by_service

        return filter_by_service(self, name, depth)
