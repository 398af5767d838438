"""Focused highlight classification for interactive callers.

Lets a terminal UI colour the services around a selection without
re-parsing rendered text.
"""

from __future__ import annotations

from enum import StrEnum

from composegraph.graph.models import DependencyGraph


class HighlightKind(StrEnum):
    """How a service relates to the selected service."""

    SELECTED = "selected"
    DEPENDENCY = "dependency"
    DEPENDENT = "dependent"
    NETWORK = "network"
    VOLUME = "volume"


def compute_highlights(graph: DependencyGraph, name: str) -> dict[str, HighlightKind]:
    """Classify every service directly related to *name*.

    Direct edges win over shared resources: dependents override
    dependencies, and network then volume peers only fill names that are
    still unclassified.

    Raises:
        ServiceNotFoundError: if *name* is not in *graph*.
    """
    node = graph.node(name)
    highlights: dict[str, HighlightKind] = {name: HighlightKind.SELECTED}

    for dep in node.depends_on:
        highlights[dep] = HighlightKind.DEPENDENCY
    for dependent in node.depended_by:
        highlights[dependent] = HighlightKind.DEPENDENT

    for network in node.network_peers:
        for peer in node.other_network_peers(network):
            highlights.setdefault(peer, HighlightKind.NETWORK)
    for volume in node.volume_peers:
        for peer in node.other_volume_peers(volume):
            highlights.setdefault(peer, HighlightKind.VOLUME)

    # a self-dependency must not demote the selection
    highlights[name] = HighlightKind.SELECTED
    return highlights
