"""StatsService — guarded stats pipeline and guild rankings.

Stats pipeline:
    START → IDENTITY_RESOLVED → MEMBERSHIP_CONFIRMED → CACHE_READY
          → STATS_FETCHED → DONE

Each stage classifies its own failures and returns immediately; a later
stage never runs after an earlier one fails. Gateway unavailability at any
stage becomes ``UPSTREAM_ERROR`` and is not retried here.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, date, datetime

from scuttle.domain.models import Identity
from scuttle.domain.periods import SUNDAY, rankings_start, stats_range_days
from scuttle.domain.types import FailureCode, PipelineStage, Period
from scuttle.infrastructure.gateway import GatewayError, NotFoundError, StatsGateway
from scuttle.services.base import BaseService
from scuttle.services.contracts import RankingsResultData, StatsResultData, dump_validated
from scuttle.services.result import ServiceResult
from scuttle.services.telemetry import get_current_span, trace_span, traced

logger = logging.getLogger(__name__)

UPSTREAM_MESSAGE = "The stats service is unavailable right now. Please try again later."


def _utc_now() -> datetime:
    return datetime.now(UTC)


class StatsService(BaseService):
    """Per-player stats and per-guild rankings for one queue type.

    Parameters:
        gateway: Backend gateway.
        queue_type: Queue discriminator sent with every stats/rankings call.
        anchor_weekday: Weekday weekly rankings start on (``date.weekday()``).
        clock: Returns "now"; rankings windows are computed from its date.
    """

    def __init__(
        self,
        gateway: StatsGateway,
        *,
        queue_type: str = "arena",
        anchor_weekday: int = SUNDAY,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        super().__init__(gateway)
        self._queue_type = queue_type
        self._anchor_weekday = anchor_weekday
        self._clock = clock

    @property
    def _queue_label(self) -> str:
        return self._queue_type.replace("_", " ").title()

    # ------------------------------------------------------------------
    # stats
    # ------------------------------------------------------------------

    @traced
    def run_stats_query(self, identity: Identity, guild_id: str, period: Period) -> ServiceResult:
        """Resolve *identity* within *guild_id* and fetch its stats for *period*."""
        op = "stats"
        period = Period(period)
        range_days = stats_range_days(period)
        riot_id = identity.riot_id

        if not guild_id:
            return ServiceResult.failure(
                op,
                FailureCode.GUILD_REQUIRED,
                "This command must be used in a server.",
            )

        stage = PipelineStage.START

        # ── RESOLVE IDENTITY ─────────────────────────────────────
        with trace_span("resolve_identity"):
            try:
                puuid = self._gateway.resolve_identity(identity)
            except NotFoundError:
                return ServiceResult.failure(
                    op,
                    FailureCode.IDENTITY_UNKNOWN,
                    f"{riot_id} does not exist",
                    stage=stage.value,
                    riot_id=riot_id,
                )
            except GatewayError as exc:
                return self._upstream(op, stage, exc, riot_id=riot_id)
        stage = PipelineStage.IDENTITY_RESOLVED

        # ── CONFIRM MEMBERSHIP ───────────────────────────────────
        with trace_span("list_guild_members") as span:
            try:
                members = self._gateway.list_guild_members(guild_id)
            except GatewayError as exc:
                return self._upstream(op, stage, exc, riot_id=riot_id, guild_id=guild_id)
            if span is not None:
                span.annotate("members", len(members))

        if not members:
            return ServiceResult.failure(
                op,
                FailureCode.NO_GUILD_ROSTER,
                "There are currently no summoners in this guild. "
                "Add a summoner to view their stats.",
                stage=stage.value,
                guild_id=guild_id,
            )
        if puuid not in members:
            return ServiceResult.failure(
                op,
                FailureCode.NOT_A_MEMBER,
                f"Summoner {riot_id} is not part of this guild. "
                "Add them to view their stats.",
                stage=stage.value,
                riot_id=riot_id,
                guild_id=guild_id,
            )
        stage = PipelineStage.MEMBERSHIP_CONFIRMED

        # ── CHECK CACHE ──────────────────────────────────────────
        with trace_span("cache_status"):
            try:
                cache = self._gateway.cache_status(puuid, range_days, name=riot_id)
            except GatewayError as exc:
                return self._upstream(op, stage, exc, riot_id=riot_id)

        if not cache.is_cached:
            return ServiceResult.failure(
                op,
                FailureCode.DATA_NOT_READY,
                f"Summoner {riot_id} has been added recently and does not have "
                "match data yet. Please allow about 1 hour.",
                stage=stage.value,
                riot_id=riot_id,
            )
        stage = PipelineStage.CACHE_READY

        # ── FETCH STATS ──────────────────────────────────────────
        no_matches = (
            f"No {self._queue_label} stats found for {riot_id} "
            f"in the past {range_days} day(s)."
        )
        with trace_span("fetch_stats") as span:
            try:
                stats = self._gateway.fetch_stats(puuid, range_days, self._queue_type)
            except NotFoundError:
                return ServiceResult.failure(
                    op,
                    FailureCode.NO_MATCHES_IN_RANGE,
                    no_matches,
                    stage=stage.value,
                    reason="not_found",
                    riot_id=riot_id,
                )
            except GatewayError as exc:
                return self._upstream(op, stage, exc, riot_id=riot_id)
            if span is not None:
                span.annotate("metrics", len(stats))

        if not stats:
            return ServiceResult.failure(
                op,
                FailureCode.NO_MATCHES_IN_RANGE,
                no_matches,
                stage=stage.value,
                reason="empty",
                riot_id=riot_id,
            )
        stage = PipelineStage.STATS_FETCHED

        data = dump_validated(
            StatsResultData,
            {
                "riot_id": riot_id,
                "puuid": puuid,
                "guild_id": guild_id,
                "period": period.value,
                "range_days": range_days,
                "queue_type": self._queue_type,
                "stats": {str(k): str(v) for k, v in stats.items()},
            },
        )
        stage = PipelineStage.DONE

        root = get_current_span()
        if root is not None:
            root.annotate("stage", stage.value)
        logger.debug("Fetched %d metrics for %s", len(stats), riot_id)
        return ServiceResult(ok=True, op=op, data=data)

    # ------------------------------------------------------------------
    # rankings
    # ------------------------------------------------------------------

    @traced
    def run_rankings_query(
        self,
        guild_id: str,
        period: Period,
        *,
        reference: date | datetime | None = None,
    ) -> ServiceResult:
        """Fetch top-N leaderboards for *guild_id* since the *period* boundary.

        An empty leaderboard mapping is a success; only a 404 from the
        backend maps to ``NO_RANKINGS_DATA``.
        """
        op = "rankings"

        if not guild_id:
            return ServiceResult.failure(
                op,
                FailureCode.GUILD_REQUIRED,
                "This command must be used in a server.",
            )

        period = Period(period)
        today = reference if reference is not None else self._clock()
        if isinstance(today, datetime):
            today = today.date()
        try:
            start = rankings_start(period, today, anchor=self._anchor_weekday)
        except ValueError as exc:
            return ServiceResult.failure(
                op, FailureCode.INVALID_PERIOD, str(exc), period=period.value
            )

        with trace_span("fetch_rankings") as span:
            try:
                rankings = self._gateway.fetch_rankings(guild_id, start, self._queue_type)
            except NotFoundError:
                return ServiceResult.failure(
                    op,
                    FailureCode.NO_RANKINGS_DATA,
                    f"No {self._queue_label} rankings data found. Make sure summoners "
                    f"are added to this guild and have played {self._queue_type} games.",
                    guild_id=guild_id,
                    start_date=start.isoformat(),
                )
            except GatewayError as exc:
                return self._upstream(op, None, exc, guild_id=guild_id)
            if span is not None:
                span.annotate("metrics", len(rankings))

        warnings: list[str] = []
        if not rankings:
            warnings.append(f"No ranking categories returned since {start.isoformat()}")

        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(
                RankingsResultData,
                {
                    "guild_id": guild_id,
                    "period": period.value,
                    "queue_type": self._queue_type,
                    "start_date": start.isoformat(),
                    "end_date": today.isoformat(),
                    "count": len(rankings),
                    "rankings": {
                        metric: [entry.model_dump() for entry in entries]
                        for metric, entries in rankings.items()
                    },
                },
            ),
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _upstream(
        op: str,
        stage: PipelineStage | None,
        exc: GatewayError,
        **context: str,
    ) -> ServiceResult:
        """Log a transport failure and wrap it as ``UPSTREAM_ERROR``."""
        detail: dict[str, str] = {"reason": str(exc) or exc.__class__.__name__, **context}
        if stage is not None:
            detail["stage"] = stage.value
        logger.warning(
            "Stats backend unavailable during %s at stage %s: %s",
            op,
            detail.get("stage", "-"),
            detail["reason"],
        )
        return ServiceResult.failure(op, FailureCode.UPSTREAM_ERROR, UPSTREAM_MESSAGE, **detail)
