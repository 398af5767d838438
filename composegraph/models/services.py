"""Service definition data structures and the compose-document adapter.

The graph core only reads ``name``, ``depends_on``, ``networks``,
``volumes`` and ``healthcheck``; the remaining fields are carried through
for the detail view.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any


class ComposeFileError(Exception):
    """Raised when a compose document cannot be adapted into a service map."""


@dataclass(frozen=True)
class HealthCheck:
    """Container health check configuration."""

    test: tuple[str, ...] = ()
    interval: str = ""
    timeout: str = ""
    retries: int = 0


@dataclass(frozen=True)
class BuildConfig:
    """Image build configuration for a service."""

    context: str = ""
    dockerfile: str = ""
    args: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ServiceDefinition:
    """A single service as declared in the compose document.

    Sequence fields are tuples in declaration order.  ``volumes`` holds raw
    mount specifications (``data:/var/lib/data``, ``./src:/app``).
    """

    name: str
    image: str = ""
    build: BuildConfig | None = None
    ports: tuple[str, ...] = ()
    environment: dict[str, str] = field(default_factory=dict)
    volumes: tuple[str, ...] = ()
    depends_on: tuple[str, ...] = ()
    networks: tuple[str, ...] = ()
    healthcheck: HealthCheck | None = None

    @property
    def has_health_check(self) -> bool:
        return self.healthcheck is not None


# ---------------------------------------------------------------------------
# Compose adapter
# ---------------------------------------------------------------------------


def services_from_compose(document: Mapping[str, Any]) -> dict[str, ServiceDefinition]:
    """Adapt an already-parsed compose document into a service map.

    Both the short (list) and long (mapping) compose syntaxes are accepted
    for ``depends_on``, ``networks``, ``volumes``, ``environment`` and
    ``build``.  Services are returned in document order.

    Raises:
        ComposeFileError: if ``services`` is missing, a service body is not
            a mapping, or a field has the wrong shape (a scalar where a list
            is expected, a non-integer ``healthcheck.retries``).
    """
    if not isinstance(document, Mapping):
        raise ComposeFileError("compose document must be a mapping")
    raw_services = document.get("services")
    if not isinstance(raw_services, Mapping):
        raise ComposeFileError("compose document has no 'services' mapping")

    services: dict[str, ServiceDefinition] = {}
    for name, body in raw_services.items():
        name = str(name)
        if body is None:
            body = {}
        if not isinstance(body, Mapping):
            raise ComposeFileError(f"service '{name}' must be a mapping, got {type(body).__name__}")
        services[name] = _service_from_body(name, body)
    return services


def _service_from_body(name: str, body: Mapping[str, Any]) -> ServiceDefinition:
    return ServiceDefinition(
        name=name,
        image=str(body.get("image") or ""),
        build=_build_config(name, body.get("build")),
        ports=tuple(str(p) for p in _sequence(name, "ports", body.get("ports"))),
        environment=_environment(name, "environment", body.get("environment")),
        volumes=tuple(_volume_spec(v) for v in _sequence(name, "volumes", body.get("volumes"))),
        depends_on=_names(body.get("depends_on")),
        networks=_names(body.get("networks")),
        healthcheck=_healthcheck(name, body.get("healthcheck")),
    )


def _sequence(service: str, key: str, value: Any) -> list[Any]:
    if not value:
        return []
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
        raise ComposeFileError(f"service '{service}': '{key}' must be a list, got {type(value).__name__}")
    return list(value)


def _names(value: Any) -> tuple[str, ...]:
    # list form: [a, b]; mapping form: {a: {condition: ...}, b: null}
    if not value:
        return ()
    if isinstance(value, Mapping):
        return tuple(str(k) for k in value)
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value)


def _volume_spec(value: Any) -> str:
    if isinstance(value, Mapping):
        source = str(value.get("source") or "")
        target = str(value.get("target") or "")
        return f"{source}:{target}" if source else target
    return str(value)


def _environment(service: str, key: str, value: Any) -> dict[str, str]:
    if not value:
        return {}
    if isinstance(value, Mapping):
        return {str(k): "" if v is None else str(v) for k, v in value.items()}
    env: dict[str, str] = {}
    for item in _sequence(service, key, value):
        name, _, val = str(item).partition("=")
        env[name] = val
    return env


def _build_config(service: str, value: Any) -> BuildConfig | None:
    if value is None:
        return None
    if isinstance(value, str):
        return BuildConfig(context=value)
    if isinstance(value, Mapping):
        return BuildConfig(
            context=str(value.get("context") or ""),
            dockerfile=str(value.get("dockerfile") or ""),
            args=_environment(service, "build.args", value.get("args")),
        )
    raise ComposeFileError(f"service '{service}': invalid build configuration: {value!r}")


def _healthcheck(service: str, value: Any) -> HealthCheck | None:
    if not isinstance(value, Mapping) or value.get("disable"):
        return None
    test = value.get("test") or ()
    if isinstance(test, str):
        test = (test,)
    return HealthCheck(
        test=tuple(str(t) for t in _sequence(service, "healthcheck.test", test)),
        interval=str(value.get("interval") or ""),
        timeout=str(value.get("timeout") or ""),
        retries=_retries(service, value.get("retries")),
    )


def _retries(service: str, value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ComposeFileError(f"service '{service}': 'healthcheck.retries' must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ComposeFileError(
            f"service '{service}': 'healthcheck.retries' must be an integer, got {value!r}"
        ) from exc
