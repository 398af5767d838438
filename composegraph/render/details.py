"""Per-service detail view."""

from __future__ import annotations

from composegraph.graph.indexer import volume_identifier
from composegraph.graph.models import DependencyGraph
from composegraph.render.tree import shared_with


def render_service_details(graph: DependencyGraph, name: str) -> str:
    """Describe one service: image/build, edges, shared resources, ports, health check.

    Raises:
        ServiceNotFoundError: if *name* is not in *graph*.
    """
    node = graph.node(name)
    service = node.service
    lines = [f"Service: {name}", ""]

    if service.image:
        lines.append(f"Image: {service.image}")
    elif service.build is not None:
        lines.append(f"Build Context: {service.build.context}")
        if service.build.dockerfile:
            lines.append(f"Dockerfile: {service.build.dockerfile}")
    lines.append("")

    if node.depends_on:
        lines.append("Dependencies:")
        lines.extend(f"  • {dep}" for dep in node.depends_on)
        lines.append("")

    if node.depended_by:
        lines.append("Required By:")
        lines.extend(f"  • {dependent}" for dependent in node.depended_by)
        lines.append("")

    if node.networks:
        lines.append("Networks:")
        for network in node.networks:
            lines.append(f"  🌐 {network}{shared_with(node.other_network_peers(network))}")
        lines.append("")

    if node.volumes:
        lines.append("Volumes:")
        for volume in node.volumes:
            identifier = volume_identifier(volume)
            peers = node.other_volume_peers(identifier) if identifier is not None else []
            lines.append(f"  💾 {volume}{shared_with(peers)}")
        lines.append("")

    if service.ports:
        lines.append("Ports:")
        lines.extend(f"  • {port}" for port in service.ports)
        lines.append("")

    check = node.health_check
    if check is not None:
        lines.append("⚡ Health Check:")
        if check.test:
            lines.append(f"  Test: {' '.join(check.test)}")
        if check.interval:
            lines.append(f"  Interval: {check.interval}")
        if check.timeout:
            lines.append(f"  Timeout: {check.timeout}")
        if check.retries > 0:
            lines.append(f"  Retries: {check.retries}")
        lines.append("")

    return "\n".join(lines)
