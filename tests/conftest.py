# tests/conftest.py

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from habityzer_cli.api.resources import TaskService
from habityzer_cli.config import Settings

from .fakes import FakeTaskServer, FakeTransport

FIXED_NOW = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@pytest.fixture()
def settings() -> Settings:
    """
    Settings built directly rather than from the environment,
    to keep unit tests isolated and deterministic.
    """
    return Settings(
        api_base_url="https://api.test/api",
        api_token="test-token",
        project_id=2,
    )


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def service(transport: FakeTransport) -> TaskService:
    return TaskService(transport, default_project_id=2, clock=lambda: FIXED_NOW)


@pytest.fixture()
def server() -> FakeTaskServer:
    return FakeTaskServer()
