"""Entry point for `python -m composegraph`.

Usage:
    python -m composegraph graph --format=dot
    uv run python -m composegraph order
"""

from __future__ import annotations

from composegraph.cli import cli

cli()
