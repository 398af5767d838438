"""Core data structures for composegraph."""

from composegraph.models.config import ComposeGraphConfig, LogConfig, RenderConfig
from composegraph.models.services import (
    BuildConfig,
    ComposeFileError,
    HealthCheck,
    ServiceDefinition,
    services_from_compose,
)

__all__ = [
    "BuildConfig",
    "ComposeFileError",
    "ComposeGraphConfig",
    "HealthCheck",
    "LogConfig",
    "RenderConfig",
    "ServiceDefinition",
    "services_from_compose",
]
