"""Typed payload contracts for service results.

Payloads are validated before they leave the service layer so shape
regressions (for example ``stats`` vs ``metrics``) fail fast in tests.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


def dump_validated[T: BaseModel](model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


class StatsResultData(BaseModel):
    """Payload contract for ``StatsService.run_stats_query``."""

    riot_id: str
    puuid: str
    guild_id: str
    period: str
    range_days: int
    queue_type: str
    stats: dict[str, str] = Field(min_length=1)


class RankingItem(BaseModel):
    """One leaderboard row."""

    rank: int
    name: str
    value: str


class RankingsResultData(BaseModel):
    """Payload contract for ``StatsService.run_rankings_query``."""

    guild_id: str
    period: str
    queue_type: str
    start_date: str
    end_date: str
    count: int
    rankings: dict[str, list[RankingItem]]


class BroadcastResultData(BaseModel):
    """Payload contract for ``BroadcastService.run_broadcast``."""

    template: str
    test_mode: bool
    attempted: int
    succeeded: int
    failed: int
    failure_reasons: list[str]
    truncated: bool
    omitted_failures: int = 0
