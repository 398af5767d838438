"""composegraph command-line interface.

Exposes:
    cli -- Click group entry point (registered as ``composegraph`` script).
"""

from composegraph.cli.main import cli

__all__ = ["cli"]
