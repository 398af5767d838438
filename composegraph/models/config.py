"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class RenderConfig:
    """Default rendering options, overridable per CLI invocation."""

    format: str = "ascii"
    max_depth: int = 20
    show_networks: bool = True
    show_volumes: bool = True
    show_health_checks: bool = True
    highlight_cycles: bool = True


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"


@dataclass
class ComposeGraphConfig:
    """Top-level composegraph configuration."""

    compose_file: str = "docker-compose.yml"
    render: RenderConfig = field(default_factory=RenderConfig)
    log: LogConfig = field(default_factory=LogConfig)
