"""Shared pytest configuration."""

from __future__ import annotations

import pytest
import structlog

from composegraph.observability.logging import configure_default_logging


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Drop any logging configuration a CLI invocation installed."""
    yield
    structlog.reset_defaults()
    configure_default_logging()
