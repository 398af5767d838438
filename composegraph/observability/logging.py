"""Structured logging configuration using structlog."""

from __future__ import annotations

import logging
import sys

import structlog


def setup_logging(level: str = "info") -> None:
    """Configure structlog for JSON output to stderr.

    stdout is reserved for rendered graphs so that output can be piped
    straight into ``dot``.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        # bound loggers follow the stream of the most recent setup_logging() call;
        # the CLI reconfigures it on every invocation
        cache_logger_on_first_use=False,
    )


def configure_default_logging() -> None:
    """Install warning-level stderr logging unless structlog is already configured.

    Library callers that never call setup_logging() keep stdout clean; an
    application's own structlog configuration is left untouched.
    """
    if not structlog.is_configured():
        setup_logging("warning")


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Get a logger bound with a component name."""
    return structlog.get_logger(component=component)  # type: ignore[return-value]
