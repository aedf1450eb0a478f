"""Command-test fixtures: swap the HTTP collaborators for in-memory fakes."""

from __future__ import annotations

import pytest

from scuttle.commands._context import AppContext
from tests.fakes import FakeChannel, FakeGateway


@pytest.fixture
def fake_gateway(monkeypatch: pytest.MonkeyPatch) -> FakeGateway:
    fake = FakeGateway()
    monkeypatch.setattr(AppContext, "gateway", property(lambda self: fake))
    return fake


@pytest.fixture
def fake_channel(monkeypatch: pytest.MonkeyPatch) -> FakeChannel:
    fake = FakeChannel()
    monkeypatch.setattr(AppContext, "delivery", property(lambda self: fake))
    return fake
