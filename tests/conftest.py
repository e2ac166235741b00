"""Shared fixtures: a fixed config and TestClients for both variants."""
from __future__ import annotations

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.config import AppConfig
from app.domain.variants import Variant
from app.main import create_app

PREFIX = "v2"
GREETING = f"{PREFIX} - Hello World!"


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(prefix=PREFIX)


@pytest.fixture
def client_a(config: AppConfig) -> TestClient:
    return TestClient(create_app(Variant.A, config))


@pytest.fixture
def client_b(config: AppConfig) -> TestClient:
    return TestClient(create_app(Variant.B, config))


@pytest.fixture
def write_json(tmp_path: Path):
    """Write `data` (or raw text) to tmp_path/name and return the path."""

    def _write(name: str, data) -> Path:
        path = tmp_path / name
        text = data if isinstance(data, str) else json.dumps(data)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
