"""Read-only renderers for a built (possibly filtered) dependency graph.

Exports:
    render_tree            -- Text tree with reference leaves for revisits.
    render_dot             -- Graphviz DOT description.
    render_service_details -- Detail view of one service.
"""

from composegraph.render.details import render_service_details
from composegraph.render.dot import DotOptions, render_dot
from composegraph.render.tree import TreeOptions, format_cycle, render_tree

__all__ = [
    "DotOptions",
    "TreeOptions",
    "format_cycle",
    "render_dot",
    "render_service_details",
    "render_tree",
]
