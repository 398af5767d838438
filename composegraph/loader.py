"""Compose file loading.

Reads a compose YAML file and adapts its ``services`` section into the
service map consumed by :func:`composegraph.graph.build_graph`.
"""

from __future__ import annotations

from pathlib import Path

import yaml

from composegraph.models.services import ComposeFileError, ServiceDefinition, services_from_compose
from composegraph.observability.logging import get_logger

_logger = get_logger("loader")


def load_compose_file(path: str | Path) -> dict[str, ServiceDefinition]:
    """Load *path* and return its service map.

    Raises:
        ComposeFileError: if the file is missing, is not valid YAML, or has
            no usable ``services`` section.
    """
    path = Path(path)
    if not path.is_file():
        raise ComposeFileError(f"{path} not found")

    try:
        with path.open("rb") as fh:
            document = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        raise ComposeFileError(f"failed to parse {path}: {exc}") from exc

    if document is None:
        raise ComposeFileError(f"{path} is empty")

    services = services_from_compose(document)
    _logger.debug("compose_file_loaded", path=str(path), services=len(services))
    return services
