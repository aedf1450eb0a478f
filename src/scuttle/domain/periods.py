"""Lookback windows for stats and rankings queries.

Stats use a day count (``range``) that the backend interprets; rankings use
a calendar start date: the most recent anchor weekday for ``weekly`` and the
first of the month for ``monthly``.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

from scuttle.domain.types import Period

MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(7)

_RANGE_DAYS: dict[Period, int] = {
    Period.DAILY: 1,
    Period.WEEKLY: 7,
    Period.MONTHLY: 30,
}


def _as_date(reference: date | datetime) -> date:
    if isinstance(reference, datetime):
        return reference.date()
    return reference


def stats_range_days(period: Period) -> int:
    """Number of days covered by a stats *period*."""
    return _RANGE_DAYS[Period(period)]


def last_anchor_weekday(reference: date | datetime, anchor: int = SUNDAY) -> date:
    """Most recent *anchor* weekday on or before *reference*.

    Examples:
        >>> last_anchor_weekday(date(2024, 5, 15))
        datetime.date(2024, 5, 12)
        >>> last_anchor_weekday(date(2024, 5, 12))
        datetime.date(2024, 5, 12)
    """
    day = _as_date(reference)
    offset = (day.weekday() - anchor) % 7
    return day - timedelta(days=offset)


def first_of_month(reference: date | datetime) -> date:
    """First calendar day of the month containing *reference*."""
    return _as_date(reference).replace(day=1)


def rankings_start(
    period: Period,
    reference: date | datetime,
    *,
    anchor: int = SUNDAY,
) -> date:
    """Start boundary of a rankings window.

    Raises:
        ValueError: *period* has no calendar boundary (``daily``).
    """
    period = Period(period)
    if period is Period.WEEKLY:
        return last_anchor_weekday(reference, anchor)
    if period is Period.MONTHLY:
        return first_of_month(reference)
    msg = f"Rankings are not available for period {period.value!r}"
    raise ValueError(msg)
