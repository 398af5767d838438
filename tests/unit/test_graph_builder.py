"""Tests for build_graph(): node creation, edge resolution, peers, immutability."""

from __future__ import annotations

import dataclasses

import pytest

from composegraph.graph import (
    DependencyGraph,
    Relationship,
    RelationshipKind,
    ServiceNode,
    ServiceNotFoundError,
    UnknownDependencyError,
    build_graph,
)

from .factories import edges, service_map, svc

pytestmark = pytest.mark.unit


class TestEdgeResolution:
    """depends_on resolution and the reverse depended_by view."""

    def test_resolves_depends_on_and_depended_by(self) -> None:
        graph = build_graph(edges({"api": ["db", "cache"], "db": [], "cache": []}))

        assert graph.services["api"].depends_on == ("db", "cache")
        assert graph.services["db"].depended_by == ("api",)
        assert graph.services["cache"].depended_by == ("api",)
        assert graph.services["api"].depended_by == ()

    def test_depended_by_is_sorted_by_dependent_name(self) -> None:
        graph = build_graph(edges({"web": ["db"], "api": ["db"], "db": []}))

        assert graph.services["db"].depended_by == ("api", "web")

    def test_unknown_dependency_aborts_build(self) -> None:
        with pytest.raises(UnknownDependencyError) as exc_info:
            build_graph(edges({"api": ["db", "queue"], "db": []}))

        assert exc_info.value.service == "api"
        assert exc_info.value.dependency == "queue"
        assert "non-existent service 'queue'" in str(exc_info.value)

    def test_empty_service_map_builds_empty_graph(self) -> None:
        graph = build_graph({})

        assert graph.node_count == 0
        assert graph.cycles == ()
        assert graph.topological_order == ()

    def test_mapping_key_is_authoritative_name(self) -> None:
        graph = build_graph({"api": svc("something-else")})

        assert graph.services["api"].name == "api"
        assert graph.services["api"].service.name == "api"

    def test_edge_and_node_counts(self) -> None:
        graph = build_graph(edges({"a": ["b", "c"], "b": ["c"], "c": []}))

        assert graph.node_count == 3
        assert graph.edge_count == 3


class TestNetworkPeers:
    """Network peer grouping."""

    def test_shared_network_peers_include_self(self) -> None:
        graph = build_graph(service_map(svc("a", networks=["net1"]), svc("b", networks=["net1"])))

        assert graph.services["a"].network_peers["net1"] == ("a", "b")
        assert graph.services["b"].network_peers["net1"] == ("a", "b")
        assert graph.services["a"].other_network_peers("net1") == ["b"]

    def test_only_own_networks_are_indexed(self) -> None:
        graph = build_graph(
            service_map(
                svc("a", networks=["front"]),
                svc("b", networks=["front", "back"]),
                svc("c", networks=["back"]),
            )
        )

        assert set(graph.services["a"].network_peers) == {"front"}
        assert graph.services["b"].network_peers["back"] == ("b", "c")
        assert graph.services["c"].other_network_peers("front") == []

    def test_network_groups_sorted(self) -> None:
        graph = build_graph(
            service_map(
                svc("z", networks=["front"]),
                svc("a", networks=["front"]),
                svc("m", networks=["back"]),
            )
        )

        assert graph.network_groups() == {"back": ["m"], "front": ["a", "z"]}


class TestVolumePeers:
    """Named-volume sharing heuristic."""

    def test_same_identifier_makes_volume_peers(self) -> None:
        graph = build_graph(
            service_map(
                svc("a", volumes=["data:/var/lib/data"]),
                svc("b", volumes=["data:/opt/data"]),
                svc("c", volumes=["./local:/app"]),
            )
        )

        assert graph.services["a"].volume_peers["data"] == ("a", "b")
        assert graph.services["b"].other_volume_peers("data") == ["a"]
        assert dict(graph.services["c"].volume_peers) == {}

    def test_bind_mounts_never_share(self) -> None:
        graph = build_graph(
            service_map(
                svc("a", volumes=["/srv/data:/data"]),
                svc("b", volumes=["/srv/data:/data"]),
            )
        )

        assert dict(graph.services["a"].volume_peers) == {}
        assert dict(graph.services["b"].volume_peers) == {}

    def test_undeclared_identical_prefix_still_shares(self) -> None:
        graph = build_graph(service_map(svc("a", volumes=["scratch"]), svc("b", volumes=["scratch:/tmp/s:ro"])))

        assert graph.services["a"].volume_peers["scratch"] == ("a", "b")


class TestCyclesAndOrder:
    """Cycle detection and ordering as wired by the builder."""

    def test_acyclic_graph_gets_topological_order(self) -> None:
        graph = build_graph(edges({"api": ["db"], "db": []}))

        assert graph.has_cycles is False
        assert graph.topological_order == ("api", "db")

    def test_cyclic_graph_has_no_topological_order(self) -> None:
        graph = build_graph(edges({"a": ["b"], "b": ["a"]}))

        assert graph.has_cycles is True
        assert graph.cycles == (("a", "b", "a"),)
        assert graph.topological_order is None

    def test_self_dependency_is_a_cycle(self) -> None:
        graph = build_graph(edges({"a": ["a"]}))

        assert graph.cycles == (("a", "a"),)
        assert graph.is_in_cycle("a")
        assert graph.is_cycle_edge("a", "a")

    def test_cycle_edge_requires_consecutive_pair(self) -> None:
        graph = build_graph(edges({"a": ["b"], "b": ["c"], "c": ["a"]}))

        assert graph.is_cycle_edge("a", "b")
        assert graph.is_cycle_edge("c", "a")
        assert not graph.is_cycle_edge("a", "c")


class TestQueries:
    """Read-only graph queries."""

    def test_root_services_sorted(self) -> None:
        graph = build_graph(edges({"web": ["api"], "api": ["db"], "db": [], "cache": []}))

        assert graph.root_services() == ["cache", "db"]

    def test_node_lookup_raises_for_unknown(self) -> None:
        graph = build_graph(edges({"a": []}))

        with pytest.raises(ServiceNotFoundError) as exc_info:
            graph.node("missing")
        assert exc_info.value.service == "missing"

    def test_relationships_cover_all_kinds(self) -> None:
        graph = build_graph(
            service_map(
                svc("api", depends_on=["db"], networks=["back"], volumes=["logs:/logs"]),
                svc("db", networks=["back"], volumes=["logs:/var/log"]),
            )
        )

        assert graph.relationships() == [
            Relationship("api", "db", RelationshipKind.DEPENDS_ON),
            Relationship("api", "db", RelationshipKind.NETWORK, "back"),
            Relationship("db", "api", RelationshipKind.NETWORK, "back"),
            Relationship("api", "db", RelationshipKind.VOLUME, "logs"),
            Relationship("db", "api", RelationshipKind.VOLUME, "logs"),
        ]

    def test_relationships_exclude_self_peers(self) -> None:
        graph = build_graph(service_map(svc("solo", networks=["net"], volumes=["data:/d"])))

        assert graph.relationships() == []


class TestImmutability:
    """A built graph cannot be modified in place."""

    def test_services_mapping_is_read_only(self) -> None:
        graph = build_graph(edges({"a": []}))

        with pytest.raises(TypeError):
            graph.services["b"] = graph.services["a"]  # type: ignore[index]

    def test_nodes_are_frozen(self) -> None:
        graph = build_graph(edges({"a": [], "b": ["a"]}))

        with pytest.raises(dataclasses.FrozenInstanceError):
            graph.services["b"].depends_on = ()  # type: ignore[misc]

    def test_graph_is_frozen(self) -> None:
        graph = build_graph(edges({"a": []}))

        assert isinstance(graph, DependencyGraph)
        with pytest.raises(dataclasses.FrozenInstanceError):
            graph.cycles = ()  # type: ignore[misc]

    def test_peer_maps_are_read_only(self) -> None:
        graph = build_graph(service_map(svc("a", networks=["n"])))

        with pytest.raises(TypeError):
            graph.services["a"].network_peers["other"] = ("a",)  # type: ignore[index]

    def test_standalone_node_defaults_to_empty_read_only_peers(self) -> None:
        node = ServiceNode(name="a", service=svc("a"))

        assert dict(node.network_peers) == {}
        assert dict(node.volume_peers) == {}
        with pytest.raises(TypeError):
            node.volume_peers["data"] = ("a",)  # type: ignore[index]
