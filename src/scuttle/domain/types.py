"""Enumerations shared across the stats and broadcast flows."""

from __future__ import annotations

from enum import StrEnum


class Period(StrEnum):
    """Lookback keywords accepted by the stats and rankings commands."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class PipelineStage(StrEnum):
    """Stages of the stats query pipeline, in execution order."""

    START = "start"
    IDENTITY_RESOLVED = "identity_resolved"
    MEMBERSHIP_CONFIRMED = "membership_confirmed"
    CACHE_READY = "cache_ready"
    STATS_FETCHED = "stats_fetched"
    DONE = "done"


class FailureCode(StrEnum):
    """Error codes carried by ``ServiceError.code``.

    Everything except ``UPSTREAM_ERROR`` is an expected, user-facing outcome.
    """

    GUILD_REQUIRED = "GUILD_REQUIRED"
    INVALID_PERIOD = "INVALID_PERIOD"
    IDENTITY_UNKNOWN = "IDENTITY_UNKNOWN"
    NO_GUILD_ROSTER = "NO_GUILD_ROSTER"
    NOT_A_MEMBER = "NOT_A_MEMBER"
    DATA_NOT_READY = "DATA_NOT_READY"
    NO_MATCHES_IN_RANGE = "NO_MATCHES_IN_RANGE"
    NO_RANKINGS_DATA = "NO_RANKINGS_DATA"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"
    NO_TARGETS = "NO_TARGETS"
    TEST_TARGET_NOT_FOUND = "TEST_TARGET_NOT_FOUND"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
