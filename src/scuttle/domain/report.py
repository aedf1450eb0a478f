"""Broadcast outcomes and the report folded from them.

``BroadcastReport.record`` is a pure reducer: it never mutates the report
it is called on. ``fold_outcomes`` applies it over outcomes in target order,
so a report built from concurrent deliveries is identical to a sequential one
as long as the outcomes are passed in the original order.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from functools import reduce

from pydantic import BaseModel

MAX_FAILURE_REASONS = 10


@dataclass(frozen=True)
class DeliveryOutcome:
    """Result of one delivery attempt."""

    target_name: str
    ok: bool
    reason: str | None = None

    @classmethod
    def success(cls, target_name: str) -> DeliveryOutcome:
        return cls(target_name=target_name, ok=True)

    @classmethod
    def failure(cls, target_name: str, reason: str) -> DeliveryOutcome:
        return cls(target_name=target_name, ok=False, reason=reason)

    @property
    def failure_line(self) -> str:
        return f"{self.target_name}: {self.reason}"


class BroadcastReport(BaseModel):
    """Aggregated delivery counts.

    INVARIANT: ``succeeded + failed == attempted``.
    INVARIANT: ``len(failure_reasons) == min(failed, MAX_FAILURE_REASONS)``
    and ``truncated`` is True iff ``failed > MAX_FAILURE_REASONS``.
    """

    model_config = {"frozen": True}

    attempted: int = 0
    succeeded: int = 0
    failed: int = 0
    failure_reasons: tuple[str, ...] = ()
    truncated: bool = False

    @property
    def omitted_failures(self) -> int:
        """Failures counted but not listed in ``failure_reasons``."""
        return self.failed - len(self.failure_reasons)

    def record(self, outcome: DeliveryOutcome) -> BroadcastReport:
        """Return a new report with *outcome* counted."""
        if outcome.ok:
            return self.model_copy(
                update={"attempted": self.attempted + 1, "succeeded": self.succeeded + 1}
            )

        failed = self.failed + 1
        reasons = self.failure_reasons
        if len(reasons) < MAX_FAILURE_REASONS:
            reasons = (*reasons, outcome.failure_line)
        return self.model_copy(
            update={
                "attempted": self.attempted + 1,
                "failed": failed,
                "failure_reasons": reasons,
                "truncated": failed > MAX_FAILURE_REASONS,
            }
        )


def fold_outcomes(outcomes: Iterable[DeliveryOutcome]) -> BroadcastReport:
    """Fold delivery outcomes, in order, into a single report."""
    return reduce(BroadcastReport.record, outcomes, BroadcastReport())
