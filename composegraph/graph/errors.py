"""Errors raised by the dependency graph core.

Cycles are not errors: they are recorded on the graph and left to the
caller to report.
"""

from __future__ import annotations


class GraphError(Exception):
    """Base class for structural dependency-graph failures."""


class UnknownDependencyError(GraphError):
    """A ``depends_on`` entry names a service absent from the service map."""

    def __init__(self, service: str, dependency: str) -> None:
        super().__init__(f"service '{service}' depends on non-existent service '{dependency}'")
        self.service = service
        self.dependency = dependency


class ServiceNotFoundError(GraphError):
    """A filter or focused query referenced a service that is not in the graph."""

    def __init__(self, service: str) -> None:
        super().__init__(f"service '{service}' not found")
        self.service = service


class CircularDependencyError(GraphError):
    """Topological ordering could not place every service."""

    def __init__(self, remaining: list[str]) -> None:
        super().__init__(f"circular dependencies detected among: {', '.join(remaining)}")
        self.remaining = remaining
