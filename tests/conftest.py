"""Shared pytest fixtures for scuttle tests."""

from __future__ import annotations

import os
from collections.abc import Generator
from datetime import UTC, datetime
from pathlib import Path

import pytest
from click.testing import CliRunner

from scuttle.infrastructure.templates import TemplateRegistry, build_registry
from scuttle.services.broadcast import BroadcastService
from scuttle.services.stats import StatsService
from scuttle.services.telemetry import _current_span, disable_telemetry
from tests.fakes import FakeChannel, FakeGateway

# Wednesday
REFERENCE_NOW = datetime(2024, 5, 15, 18, 30, tzinfo=UTC)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def channel() -> FakeChannel:
    return FakeChannel()


@pytest.fixture
def registry() -> TemplateRegistry:
    return build_registry()


@pytest.fixture
def stats_service(gateway: FakeGateway) -> StatsService:
    return StatsService(gateway, clock=lambda: REFERENCE_NOW)


@pytest.fixture
def broadcast_service(
    gateway: FakeGateway, channel: FakeChannel, registry: TemplateRegistry
) -> BroadcastService:
    return BroadcastService(gateway, channel, registry)


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Run every test in an empty directory with no SCUTTLE_* overrides."""
    for key in list(os.environ):
        if key.startswith("SCUTTLE_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    yield
    disable_telemetry()
    _current_span.set(None)
