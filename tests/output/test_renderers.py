"""Tests for the operation-specific Rich renderers."""

from __future__ import annotations

from typing import Any

from scuttle.output.renderers import render_quiet, render_result
from scuttle.services.result import ServiceResult


def _broadcast(**overrides: Any) -> ServiceResult:
    data = {
        "template": "arena_announcement",
        "test_mode": False,
        "attempted": 12,
        "succeeded": 9,
        "failed": 3,
        "failure_reasons": ["Guild 2: Missing Access"],
        "truncated": False,
        "omitted_failures": 0,
        **overrides,
    }
    return ServiceResult(ok=True, op="broadcast", data=data)


class TestRenderStats:
    def test_title_and_metrics(self) -> None:
        result = ServiceResult(
            ok=True,
            op="stats",
            data={
                "riot_id": "Faker #KR1",
                "puuid": "p",
                "guild_id": "G1",
                "period": "weekly",
                "range_days": 7,
                "queue_type": "arena",
                "stats": {"Win Rate": "55%", "KDA": "4.1"},
            },
        )
        output = render_result(result)
        assert "Faker #KR1's Arena stats for the past 7 day(s)" in output
        assert "Win Rate" in output
        assert "55%" in output
        assert "KDA" in output


class TestRenderRankings:
    def test_one_table_per_metric(self) -> None:
        result = ServiceResult(
            ok=True,
            op="rankings",
            data={
                "guild_id": "G1",
                "period": "weekly",
                "queue_type": "arena",
                "start_date": "2024-05-12",
                "end_date": "2024-05-15",
                "count": 2,
                "rankings": {
                    "Win Rate": [{"rank": 1, "name": "Faker #KR1", "value": "61%"}],
                    "Top 4 Rate": [{"rank": 1, "name": "Keria #KR1", "value": "80%"}],
                },
            },
        )
        output = render_result(result)
        assert "Top Arena players (2024-05-12 – 2024-05-15)" in output
        assert "Win Rate" in output
        assert "Top 4 Rate" in output
        assert "Keria #KR1" in output

    def test_empty_rankings(self) -> None:
        result = ServiceResult(
            ok=True,
            op="rankings",
            data={
                "guild_id": "G1",
                "period": "monthly",
                "queue_type": "arena",
                "start_date": "2024-05-01",
                "end_date": "2024-05-15",
                "count": 0,
                "rankings": {},
            },
        )
        assert "No ranking categories." in render_result(result)


class TestRenderBroadcast:
    def test_summary_and_failures(self) -> None:
        output = render_result(_broadcast())
        assert "Broadcast sent to 9/12 guilds" in output
        assert "Guild 2: Missing Access" in output
        assert "more" not in output

    def test_test_mode_prefix(self) -> None:
        output = render_result(
            _broadcast(test_mode=True, attempted=1, succeeded=1, failed=0, failure_reasons=[])
        )
        assert "TEST MODE — Broadcast sent to 1/1 guild" in output
        assert "guilds" not in output
        assert "failures:" not in output

    def test_truncated_failures(self) -> None:
        output = render_result(_broadcast(failed=13, truncated=True, omitted_failures=3))
        assert "... and 3 more" in output

    def test_quiet(self) -> None:
        assert render_quiet(_broadcast()) == "OK: broadcast 9/12"


class TestRenderTemplates:
    def test_lists_keys(self) -> None:
        result = ServiceResult(
            ok=True, op="templates", data={"count": 2, "items": ["alpha", "beta"]}
        )
        output = render_result(result)
        assert "alpha" in output
        assert "beta" in output


class TestRenderError:
    def test_message_only_by_default(self) -> None:
        result = ServiceResult.failure(
            "stats", "NOT_A_MEMBER", "Summoner is not part of this guild.", guild_id="G1"
        )
        output = render_result(result)
        assert output.startswith("ERROR  stats — Summoner is not part of this guild.")
        assert "NOT_A_MEMBER" not in output

    def test_verbose_shows_code_and_detail(self) -> None:
        result = ServiceResult.failure("stats", "NOT_A_MEMBER", "Nope", guild_id="G1")
        output = render_result(result, verbose=True)
        assert "code: NOT_A_MEMBER" in output
        assert "guild_id: G1" in output


class TestRenderMeta:
    def test_span_tree(self) -> None:
        result = ServiceResult(
            ok=True,
            op="custom",
            meta={
                "telemetry": {
                    "name": "StatsService.run_stats_query",
                    "duration_ms": 12.5,
                    "children": [
                        {
                            "name": "fetch_stats",
                            "duration_ms": 4.0,
                            "annotations": {"metrics": 3},
                        }
                    ],
                }
            },
        )
        output = render_result(result, verbose=True)
        assert "StatsService.run_stats_query" in output
        assert "fetch_stats  (metrics=3)" in output

    def test_meta_hidden_without_verbose(self) -> None:
        result = ServiceResult(ok=True, op="custom", meta={"telemetry": {"name": "x"}})
        assert "meta:" not in render_result(result)
