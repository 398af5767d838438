"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from composegraph.models.config import ComposeGraphConfig, LogConfig, RenderConfig


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"COMPOSEGRAPH_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _env_int(key: str, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    val = int(_env(key, str(default)))
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def _validate_format(value: str) -> str:
    valid = {"ascii", "dot"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid render format: {value}. Must be one of {valid}")
    return value.lower()


def load_config() -> ComposeGraphConfig:
    """Load configuration from COMPOSEGRAPH_* environment variables."""
    return ComposeGraphConfig(
        compose_file=_env("COMPOSE_FILE", "docker-compose.yml"),
        render=RenderConfig(
            format=_validate_format(_env("RENDER_FORMAT", "ascii")),
            max_depth=_env_int("RENDER_MAX_DEPTH", 20, min_val=1, max_val=100),
            show_networks=_env_bool("RENDER_SHOW_NETWORKS", True),
            show_volumes=_env_bool("RENDER_SHOW_VOLUMES", True),
            show_health_checks=_env_bool("RENDER_SHOW_HEALTH_CHECKS", True),
            highlight_cycles=_env_bool("RENDER_HIGHLIGHT_CYCLES", True),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
        ),
    )
