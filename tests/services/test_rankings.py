"""Tests for StatsService.run_rankings_query."""

from __future__ import annotations

from datetime import date

import pytest

from scuttle.domain.periods import MONDAY
from scuttle.domain.types import FailureCode, Period
from scuttle.services.stats import StatsService
from tests.conftest import REFERENCE_NOW
from tests.fakes import FakeGateway


class TestRankingsSuccess:
    def test_weekly_starts_on_last_sunday(
        self, stats_service: StatsService, gateway: FakeGateway
    ) -> None:
        result = stats_service.run_rankings_query("G1", Period.WEEKLY)
        assert result.ok
        assert result.data["start_date"] == "2024-05-12"
        assert result.data["end_date"] == "2024-05-15"
        assert gateway.calls == [("fetch_rankings", ("G1", date(2024, 5, 12), "arena"))]

    def test_monthly_starts_on_first(self, stats_service: StatsService) -> None:
        result = stats_service.run_rankings_query("G1", Period.MONTHLY)
        assert result.data["start_date"] == "2024-05-01"

    def test_explicit_reference(self, stats_service: StatsService) -> None:
        result = stats_service.run_rankings_query(
            "G1", Period.WEEKLY, reference=date(2024, 5, 12)
        )
        assert result.data["start_date"] == "2024-05-12"
        assert result.data["end_date"] == "2024-05-12"

    def test_custom_anchor_weekday(self, gateway: FakeGateway) -> None:
        service = StatsService(gateway, anchor_weekday=MONDAY, clock=lambda: REFERENCE_NOW)
        result = service.run_rankings_query("G1", Period.WEEKLY)
        assert result.data["start_date"] == "2024-05-13"

    def test_entries_serialized(self, stats_service: StatsService) -> None:
        result = stats_service.run_rankings_query("G1", Period.WEEKLY)
        assert result.data["count"] == 1
        assert result.data["rankings"]["Win Rate"][0] == {
            "rank": 1,
            "name": "Faker #KR1",
            "value": "61%",
        }

    def test_empty_mapping_is_success_with_warning(self, gateway: FakeGateway) -> None:
        gateway.rankings = {}
        service = StatsService(gateway, clock=lambda: REFERENCE_NOW)
        result = service.run_rankings_query("G1", Period.MONTHLY)
        assert result.ok
        assert result.data["count"] == 0
        assert result.warnings == ["No ranking categories returned since 2024-05-01"]


class TestRankingsFailures:
    def test_guild_required(self, stats_service: StatsService, gateway: FakeGateway) -> None:
        result = stats_service.run_rankings_query("", Period.WEEKLY)
        assert result.error is not None
        assert result.error.code == FailureCode.GUILD_REQUIRED
        assert gateway.calls == []

    def test_daily_is_invalid(self, stats_service: StatsService, gateway: FakeGateway) -> None:
        result = stats_service.run_rankings_query("G1", Period.DAILY)
        assert result.error is not None
        assert result.error.code == FailureCode.INVALID_PERIOD
        assert gateway.calls == []

    def test_unknown_period_string_raises(self, stats_service: StatsService) -> None:
        with pytest.raises(ValueError):
            stats_service.run_rankings_query("G1", "yearly")  # type: ignore[arg-type]

    def test_not_found(self, gateway: FakeGateway) -> None:
        gateway.rankings = None
        result = StatsService(gateway, clock=lambda: REFERENCE_NOW).run_rankings_query(
            "G1", Period.WEEKLY
        )
        assert result.error is not None
        assert result.error.code == FailureCode.NO_RANKINGS_DATA
        assert result.error.detail["start_date"] == "2024-05-12"

    def test_upstream_error(self, gateway: FakeGateway) -> None:
        gateway.unavailable = {"fetch_rankings"}
        result = StatsService(gateway, clock=lambda: REFERENCE_NOW).run_rankings_query(
            "G1", Period.WEEKLY
        )
        assert result.error is not None
        assert result.error.code == FailureCode.UPSTREAM_ERROR
        assert "stage" not in result.error.detail
