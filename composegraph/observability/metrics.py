"""Prometheus instruments for graph construction and filtering."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

graph_builds_total = Counter(
    "composegraph_graph_builds_total",
    "Dependency graph builds by outcome.",
    ["outcome"],
)

graph_build_duration_seconds = Histogram(
    "composegraph_graph_build_duration_seconds",
    "Wall-clock time spent building a dependency graph.",
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
)

cycles_detected_total = Counter(
    "composegraph_cycles_detected_total",
    "Circular dependency chains recorded across all builds and filters.",
)

graph_filters_total = Counter(
    "composegraph_graph_filters_total",
    "Subgraph extractions by outcome.",
    ["outcome"],
)
