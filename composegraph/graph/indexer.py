"""Relationship indexer: groups services by shared network and shared volume.

Volume sharing is a string heuristic.  Two services share a volume when the
identifiers derived from their raw mount strings are equal, whether or not
that identifier is declared as a top-level named volume.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType

from composegraph.models.services import ServiceDefinition

PeerMap = Mapping[str, tuple[str, ...]]


def volume_identifier(mount: str) -> str | None:
    """Derive the named-volume identifier from a raw mount string.

    ``data:/var/lib/data`` -> ``data``; ``cache`` -> ``cache``.  Host paths
    and relative paths (leading ``/`` or ``.``) are bind mounts and yield
    None, as does an empty identifier (``:/data``).
    """
    if not mount or mount[0] in "/.":
        return None
    name, _, _ = mount.partition(":")
    return name or None


def index_network_peers(services: Iterable[ServiceDefinition]) -> dict[str, PeerMap]:
    """Return service name -> {network: peer names} for every service."""
    return _index(services, lambda svc: list(svc.networks))


def index_volume_peers(services: Iterable[ServiceDefinition]) -> dict[str, PeerMap]:
    """Return service name -> {volume identifier: peer names} for every service."""

    def identifiers(svc: ServiceDefinition) -> list[str]:
        return [ident for ident in map(volume_identifier, svc.volumes) if ident is not None]

    return _index(services, identifiers)


def _index(
    services: Iterable[ServiceDefinition],
    keys_of: Callable[[ServiceDefinition], list[str]],
) -> dict[str, PeerMap]:
    ordered = sorted(services, key=lambda svc: svc.name)

    groups: dict[str, list[str]] = {}
    for svc in ordered:
        for key in keys_of(svc):
            members = groups.setdefault(key, [])
            if svc.name not in members:
                members.append(svc.name)

    result: dict[str, PeerMap] = {}
    for svc in ordered:
        peers = {key: tuple(groups[key]) for key in keys_of(svc)}
        result[svc.name] = MappingProxyType(peers)
    return result
