"""Shared fixtures for composegraph integration tests.

Provides realistic compose files on disk so the tests can exercise the
whole path from YAML to rendered output.
"""

from __future__ import annotations

from pathlib import Path

import pytest

STACK_YAML = """\
services:
  proxy:
    image: nginx:1.27
    depends_on: [web]
    networks: [front]
    ports: ["80:80"]
  web:
    build:
      context: ./web
    depends_on:
      api:
        condition: service_healthy
    networks: [front]
    volumes:
      - ./web/src:/app
  api:
    image: acme/api:2.0
    depends_on: [db, cache]
    networks: [front, back-end]
    volumes:
      - logs:/var/log/api
    healthcheck:
      test: ["CMD", "curl", "-f", "http://localhost:8080/health"]
      interval: 10s
      retries: 3
  db:
    image: postgres:16
    networks: [back-end]
    volumes:
      - pgdata:/var/lib/postgresql/data
    healthcheck:
      test: pg_isready
  cache:
    image: redis:7
    networks: [back-end]
  shipper:
    image: fluent-bit:3
    volumes:
      - logs:/in:ro
volumes:
  pgdata: {}
  logs: {}
networks:
  front: {}
  back-end: {}
"""

CYCLIC_YAML = """\
services:
  a:
    depends_on: [b]
  b:
    depends_on: [c]
  c:
    depends_on: [a]
  d:
    depends_on: [a]
"""

BROKEN_YAML = """\
services:
  api:
    depends_on: [db]
"""


def _write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def stack_file(tmp_path: Path) -> Path:
    return _write(tmp_path, "docker-compose.yml", STACK_YAML)


@pytest.fixture
def cyclic_file(tmp_path: Path) -> Path:
    return _write(tmp_path, "cyclic.yml", CYCLIC_YAML)


@pytest.fixture
def broken_file(tmp_path: Path) -> Path:
    return _write(tmp_path, "broken.yml", BROKEN_YAML)
