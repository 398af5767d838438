"""Tree renderer: a terminal-friendly view of the dependency graph.

Roots are services with no dependencies, drawn in sorted order, each
followed depth-first by its dependencies and, optionally, its networks
and volumes.  A service reached a second time is drawn as a reference
leaf instead of being expanded again, which also guarantees termination
on cyclic graphs.  Services never reached from a root are drawn
afterwards as extra top-level entries.
"""

from __future__ import annotations

from dataclasses import dataclass

from composegraph.graph.indexer import volume_identifier
from composegraph.graph.models import DependencyGraph, ServiceNode

_BRANCH = "├── "
_LAST = "└── "
_PIPE = "│   "
_SPACE = "    "

HEADER = "Dependency Graph"
CYCLES_HEADER = "⚠️  Circular Dependencies Detected:"
CYCLE_ARROW = " → "


@dataclass(frozen=True)
class TreeOptions:
    """Tree rendering options."""

    show_networks: bool = True
    show_volumes: bool = True
    show_health_checks: bool = True
    max_depth: int = 20


def render_tree(graph: DependencyGraph, options: TreeOptions | None = None) -> str:
    """Render *graph* as a text tree."""
    return _TreeRenderer(graph, options or TreeOptions()).render()


def format_cycle(cycle: tuple[str, ...] | list[str]) -> str:
    return CYCLE_ARROW.join(cycle)


class _TreeRenderer:
    def __init__(self, graph: DependencyGraph, options: TreeOptions) -> None:
        self._graph = graph
        self._options = options
        self._visited: set[str] = set()
        self._lines: list[str] = []

    def render(self) -> str:
        self._lines = [HEADER, "=" * 80, ""]

        for name in self._graph.root_services():
            self._render_node(name, "", True, 0)

        # services only reachable "upwards" (dependents of roots, cycle members)
        for name in self._graph.sorted_names():
            if name not in self._visited:
                self._render_node(name, "", True, 0)

        if self._graph.cycles:
            self._lines.append("")
            self._lines.append(CYCLES_HEADER)
            for cycle in self._graph.cycles:
                self._lines.append("    " + format_cycle(cycle))

        return "\n".join(self._lines) + "\n"

    def _render_node(self, name: str, prefix: str, is_last: bool, depth: int) -> None:
        marker = _LAST if is_last else _BRANCH
        if depth > self._options.max_depth:
            self._lines.append(f"{prefix}{marker}⋯ {name} (depth limit reached)")
            return

        if name in self._visited and depth > 0:
            self._lines.append(f"{prefix}{marker}◆ {name} (see above)")
            return
        self._visited.add(name)

        node = self._graph.services[name]
        label = f"◆ {name}"
        if self._options.show_health_checks and node.has_health_check:
            label += " ⚡"

        if depth == 0:
            self._lines.append(label)
            child_prefix = ""
        else:
            self._lines.append(prefix + marker + label)
            child_prefix = prefix + (_SPACE if is_last else _PIPE)

        leaves = self._leaf_lines(node)
        deps = node.depends_on
        if deps:
            if depth == 0:
                for i, dep in enumerate(deps):
                    last = i == len(deps) - 1 and not leaves
                    self._render_node(dep, child_prefix, last, depth + 1)
            else:
                group_last = not leaves
                self._lines.append(child_prefix + (_LAST if group_last else _BRANCH) + "depends_on:")
                dep_prefix = child_prefix + (_SPACE if group_last else _PIPE)
                for i, dep in enumerate(deps):
                    self._render_node(dep, dep_prefix, i == len(deps) - 1, depth + 1)

        for i, text in enumerate(leaves):
            self._lines.append(child_prefix + (_LAST if i == len(leaves) - 1 else _BRANCH) + text)

    def _leaf_lines(self, node: ServiceNode) -> list[str]:
        lines: list[str] = []
        if self._options.show_networks:
            for network in node.networks:
                lines.append(f"🌐 network: {network}{shared_with(node.other_network_peers(network))}")
        if self._options.show_volumes:
            for volume in node.volumes:
                identifier = volume_identifier(volume)
                peers = node.other_volume_peers(identifier) if identifier is not None else []
                lines.append(f"💾 volume: {volume}{shared_with(peers)}")
        return lines


def shared_with(peers: list[str]) -> str:
    if not peers:
        return ""
    return f" (shared with: {', '.join(peers)})"
