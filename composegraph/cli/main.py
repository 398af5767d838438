"""Click commands for building, filtering and rendering dependency graphs.

Examples::

    composegraph graph                           # ASCII tree
    composegraph graph --format=dot              # Graphviz DOT
    composegraph graph --service=api --depth=1   # neighbourhood of api
    composegraph graph -o graph.dot -F dot       # save to file
    composegraph order --reverse                 # startup order
    composegraph details api
"""

from __future__ import annotations

from pathlib import Path

import click

from composegraph import __version__
from composegraph.config import load_config
from composegraph.graph import DependencyGraph, GraphError, build_graph
from composegraph.loader import load_compose_file
from composegraph.models.config import ComposeGraphConfig
from composegraph.models.services import ComposeFileError
from composegraph.observability.logging import get_logger, setup_logging
from composegraph.render import (
    DotOptions,
    TreeOptions,
    format_cycle,
    render_dot,
    render_service_details,
    render_tree,
)

_LOG_LEVELS = ["debug", "info", "warning", "error"]

_file_option = click.option(
    "--file",
    "-f",
    "compose_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Compose file to analyse (default: $COMPOSEGRAPH_COMPOSE_FILE or docker-compose.yml).",
)


@click.group()
@click.option("--log-level", type=click.Choice(_LOG_LEVELS), default=None, help="Override COMPOSEGRAPH_LOG_LEVEL.")
@click.version_option(__version__, prog_name="composegraph")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Analyse service dependencies, networks and volumes in a compose file."""
    try:
        config = load_config()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    if log_level:
        config.log.level = log_level
    setup_logging(config.log.level)
    ctx.obj = config


@cli.command()
@_file_option
@click.option("--format", "-F", "fmt", type=click.Choice(["ascii", "dot"]), default=None, help="Output format.")
@click.option("--service", "-s", default=None, help="Show only this service and its neighbourhood.")
@click.option("--depth", type=int, default=-1, show_default=True, help="Neighbourhood depth; negative is unlimited.")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None, help="Write to a file instead of stdout.")
@click.option("--networks/--no-networks", default=None, help="Show network relationships.")
@click.option("--volumes/--no-volumes", default=None, help="Show volume relationships (ascii only).")
@click.option("--health/--no-health", default=None, help="Show health check indicators.")
@click.option("--highlight-cycles/--no-highlight-cycles", default=None, help="Highlight cycles (dot only).")
@click.pass_obj
def graph(
    config: ComposeGraphConfig,
    compose_file: str | None,
    fmt: str | None,
    service: str | None,
    depth: int,
    output: str | None,
    networks: bool | None,
    volumes: bool | None,
    health: bool | None,
    highlight_cycles: bool | None,
) -> None:
    """Visualise service dependencies and relationships."""
    render = config.render
    dependency_graph = _load_graph(config, compose_file)

    if service:
        try:
            dependency_graph = dependency_graph.filter_by_service(service, depth)
        except GraphError as exc:
            raise click.ClickException(str(exc)) from exc

    _warn_cycles(dependency_graph)

    if (fmt or render.format) == "dot":
        text = render_dot(
            dependency_graph,
            DotOptions(
                show_networks=_pick(networks, render.show_networks),
                show_health_checks=_pick(health, render.show_health_checks),
                highlight_cycles=_pick(highlight_cycles, render.highlight_cycles),
            ),
        )
    else:
        text = render_tree(
            dependency_graph,
            TreeOptions(
                show_networks=_pick(networks, render.show_networks),
                show_volumes=_pick(volumes, render.show_volumes),
                show_health_checks=_pick(health, render.show_health_checks),
                max_depth=render.max_depth,
            ),
        )

    if output:
        try:
            Path(output).write_text(text, encoding="utf-8")
        except OSError as exc:
            raise click.ClickException(f"failed to write output file: {exc}") from exc
        click.echo(f"Graph saved to {output}")
    else:
        click.echo(text, nl=False)


@cli.command()
@_file_option
@click.option("--reverse", is_flag=True, help="Print foundations first (startup order).")
@click.pass_obj
def order(config: ComposeGraphConfig, compose_file: str | None, reverse: bool) -> None:
    """Print the topological order, dependents before their dependencies."""
    dependency_graph = _load_graph(config, compose_file)
    if dependency_graph.topological_order is None:
        cycles = "\n".join(f"  Cycle: {format_cycle(c)}" for c in dependency_graph.cycles)
        raise click.ClickException(f"no topological order: circular dependencies detected\n{cycles}")

    names = list(dependency_graph.topological_order)
    if reverse:
        names.reverse()
    for name in names:
        click.echo(name)


@cli.command()
@_file_option
@click.argument("service")
@click.pass_obj
def details(config: ComposeGraphConfig, compose_file: str | None, service: str) -> None:
    """Show everything known about SERVICE."""
    dependency_graph = _load_graph(config, compose_file)
    try:
        click.echo(render_service_details(dependency_graph, service))
    except GraphError as exc:
        raise click.ClickException(str(exc)) from exc


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_graph(config: ComposeGraphConfig, compose_file: str | None) -> DependencyGraph:
    path = compose_file or config.compose_file
    log = get_logger("cli")
    try:
        services = load_compose_file(path)
        dependency_graph = build_graph(services)
    except ComposeFileError as exc:
        raise click.ClickException(str(exc)) from exc
    except GraphError as exc:
        raise click.ClickException(f"failed to build dependency graph: {exc}") from exc
    log.debug("graph_loaded", path=str(path), services=dependency_graph.node_count)
    return dependency_graph


def _warn_cycles(dependency_graph: DependencyGraph) -> None:
    if not dependency_graph.has_cycles:
        return
    click.echo("\n⚠️  WARNING: Circular dependencies detected!", err=True)
    click.echo("Compose will still start these services, but they may cause issues.\n", err=True)
    for cycle in dependency_graph.cycles:
        click.echo(f"  Cycle: {format_cycle(cycle)}", err=True)
    click.echo("", err=True)


def _pick(flag: bool | None, default: bool) -> bool:
    return default if flag is None else flag
