"""Service dependency graph.

Builds an immutable graph from a compose service map (depends_on edges,
shared networks, shared named volumes), records circular dependencies,
computes a topological order for acyclic graphs and extracts independent
subgraphs around a focal service.
"""

from composegraph.graph.builder import build_graph
from composegraph.graph.cycles import detect_cycles
from composegraph.graph.errors import (
    CircularDependencyError,
    GraphError,
    ServiceNotFoundError,
    UnknownDependencyError,
)
from composegraph.graph.highlight import HighlightKind, compute_highlights
from composegraph.graph.indexer import volume_identifier
from composegraph.graph.models import DependencyGraph, Relationship, RelationshipKind, ServiceNode
from composegraph.graph.ordering import topological_sort
from composegraph.graph.subgraph import SubgraphResult, filter_by_service

__all__ = [
    "CircularDependencyError",
    "DependencyGraph",
    "GraphError",
    "HighlightKind",
    "Relationship",
    "RelationshipKind",
    "ServiceNode",
    "ServiceNotFoundError",
    "SubgraphResult",
    "UnknownDependencyError",
    "build_graph",
    "compute_highlights",
    "detect_cycles",
    "filter_by_service",
    "topological_sort",
    "volume_identifier",
]
