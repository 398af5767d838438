"""composegraph: dependency-graph analysis for multi-service compose definitions."""

from composegraph.observability.logging import configure_default_logging

__version__ = "0.3.1"

configure_default_logging()
