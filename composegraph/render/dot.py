"""Graphviz DOT renderer.

Output can be piped straight into Graphviz::

    composegraph graph --format=dot | dot -Tpng > graph.png
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from composegraph.graph.models import DependencyGraph

_CLUSTER_ID_INVALID = re.compile(r"[^A-Za-z0-9_]")


@dataclass(frozen=True)
class DotOptions:
    """DOT rendering options."""

    show_networks: bool = True
    show_health_checks: bool = True
    highlight_cycles: bool = True


def render_dot(graph: DependencyGraph, options: DotOptions | None = None) -> str:
    """Render *graph* as a ``digraph`` description."""
    options = options or DotOptions()
    names = graph.sorted_names()

    lines = [
        "digraph dependencies {",
        "  rankdir=LR;",
        "  node [shape=box, style=rounded];",
        "",
        "  // Nodes",
    ]
    for name in names:
        node = graph.services[name]
        attrs: list[str] = []
        label = _escape(name)
        if options.show_health_checks and node.has_health_check:
            attrs += ["color=green", "penwidth=2"]
            label += "\\n⚡HealthCheck"
        if options.highlight_cycles and graph.is_in_cycle(name):
            attrs += ["color=red", "penwidth=3"]
        attrs.append(f'label="{label}"')
        lines.append(f"  {quote(name)} [{', '.join(attrs)}];")

    lines.append("")
    lines.append("  // Dependencies")
    for name in names:
        for dep in graph.services[name].depends_on:
            if options.highlight_cycles and graph.is_cycle_edge(name, dep):
                style = '[color=red, penwidth=2, label="CYCLE"]'
            else:
                style = "[color=blue]"
            lines.append(f"  {quote(name)} -> {quote(dep)} {style};")

    if options.show_networks:
        clusters = {net: members for net, members in graph.network_groups().items() if len(members) > 1}
        if clusters:
            lines.append("")
            lines.append("  // Network relationships")
            for network, members in clusters.items():
                lines.append(f"  subgraph cluster_{cluster_id(network)} {{")
                lines.append(f"    label={quote('Network: ' + network)};")
                lines.append("    style=dashed;")
                lines.append("    color=gray;")
                for member in members:
                    lines.append(f"    {quote(member)};")
                lines.append("  }")

    lines.append("}")
    return "\n".join(lines) + "\n"


def cluster_id(network: str) -> str:
    """Make *network* usable inside an unquoted ``cluster_`` identifier."""
    return _CLUSTER_ID_INVALID.sub("_", network)


def quote(value: str) -> str:
    """Return *value* as a double-quoted DOT string."""
    return f'"{_escape(value)}"'


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')
