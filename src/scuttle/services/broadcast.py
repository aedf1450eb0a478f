"""BroadcastService — deliver one template to many guilds.

Pipeline: AUTHORIZE → TEMPLATE → TARGETS → FAN-OUT → REPORT

Setup failures (permission, unknown template, no targets) are returned
before any delivery is attempted. Once fan-out starts, a failing target
only increments the failure count; every target is always attempted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from contextvars import copy_context
from typing import TYPE_CHECKING, Any

from scuttle.domain.models import BroadcastTarget
from scuttle.domain.report import DeliveryOutcome, fold_outcomes
from scuttle.domain.types import FailureCode
from scuttle.infrastructure.delivery import DeliveryChannel, DeliveryError
from scuttle.infrastructure.gateway import GatewayError, StatsGateway
from scuttle.services.base import BaseService
from scuttle.services.contracts import BroadcastResultData, dump_validated
from scuttle.services.result import ServiceResult
from scuttle.services.stats import UPSTREAM_MESSAGE
from scuttle.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from scuttle.infrastructure.templates import TemplateRegistry
    from scuttle.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

CHANNEL_UNAVAILABLE = "Channel not found or not text-based"


def owner_only(owner_id: str) -> Callable[[str | None], bool]:
    """Authorization predicate that admits only *owner_id*.

    An empty *owner_id* admits nobody.
    """

    def _is_owner(requester_id: str | None) -> bool:
        return bool(owner_id) and requester_id == owner_id

    return _is_owner


class BroadcastService(BaseService):
    """Fan-out of a broadcast template to guild main channels.

    Parameters:
        gateway: Source of broadcast targets when none are passed in.
        channel: Delivery capability (resolve + send).
        templates: Template lookup.
        authorize: Predicate over the requester id; None admits everyone.
        concurrency: Worker count for deliveries; 1 delivers sequentially.
        plugins: Receives the ``post_broadcast`` hook.
    """

    def __init__(
        self,
        gateway: StatsGateway,
        channel: DeliveryChannel,
        templates: TemplateRegistry,
        *,
        authorize: Callable[[str | None], bool] | None = None,
        concurrency: int = 1,
        plugins: PluginManager | None = None,
    ) -> None:
        super().__init__(gateway, plugins=plugins)
        self._channel = channel
        self._templates = templates
        self._authorize = authorize
        self._concurrency = max(1, concurrency)

    @traced
    def run_broadcast(
        self,
        template_key: str,
        *,
        requester_id: str | None = None,
        targets: Sequence[BroadcastTarget] | None = None,
        test_guild_id: str | None = None,
    ) -> ServiceResult:
        """Deliver *template_key* to *targets* (default: every registered guild).

        With *test_guild_id*, delivery is restricted to that one guild.
        """
        op = "broadcast"
        warnings: list[str] = []
        test_mode = bool(test_guild_id)

        # ── AUTHORIZE ────────────────────────────────────────────
        if self._authorize is not None and not self._authorize(requester_id):
            return ServiceResult.failure(
                op,
                FailureCode.PERMISSION_DENIED,
                "This command is only available to the bot owner.",
            )

        # ── TEMPLATE ─────────────────────────────────────────────
        template = self._templates.get(template_key)
        if template is None:
            return ServiceResult.failure(
                op,
                FailureCode.TEMPLATE_NOT_FOUND,
                f"Template '{template_key}' not found.",
                available=self._templates.keys(),
            )
        payload = template.to_payload()

        # ── TARGETS ──────────────────────────────────────────────
        if targets is None:
            with trace_span("list_broadcast_targets"):
                try:
                    targets = self._gateway.list_broadcast_targets()
                except GatewayError as exc:
                    logger.warning("Could not list broadcast targets: %s", exc)
                    return ServiceResult.failure(
                        op,
                        FailureCode.UPSTREAM_ERROR,
                        UPSTREAM_MESSAGE,
                        reason=str(exc) or exc.__class__.__name__,
                    )

        candidates = list(targets)
        if not candidates:
            return ServiceResult.failure(
                op,
                FailureCode.NO_TARGETS,
                "No guilds with main channels configured.",
            )

        if test_guild_id:
            candidates = [t for t in candidates if t.guild_id == test_guild_id]
            if not candidates:
                return ServiceResult.failure(
                    op,
                    FailureCode.TEST_TARGET_NOT_FOUND,
                    f"Guild ID {test_guild_id} not found or has no main channel configured.",
                    guild_id=test_guild_id,
                )

        # ── FAN-OUT ──────────────────────────────────────────────
        with trace_span("fan_out") as span:
            outcomes = self._deliver_all(candidates, payload)
            if span is not None:
                span.annotate("targets", len(candidates))

        # ── REPORT ───────────────────────────────────────────────
        report = fold_outcomes(outcomes)
        if report.failed:
            warnings.append(f"{report.failed} of {report.attempted} deliveries failed")
        logger.info(
            "Broadcast %s: %d/%d delivered",
            template_key,
            report.succeeded,
            report.attempted,
        )

        data = dump_validated(
            BroadcastResultData,
            {
                "template": template_key,
                "test_mode": test_mode,
                **report.model_dump(),
                "omitted_failures": report.omitted_failures,
            },
        )
        self._dispatch_event(
            "post_broadcast",
            {"template": template_key, "test_mode": test_mode, "report": data},
            warnings,
        )
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    def list_templates(self) -> ServiceResult:
        """Keys of every registered template, sorted."""
        keys = self._templates.keys()
        return ServiceResult(ok=True, op="templates", data={"count": len(keys), "items": keys})

    # ------------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------------

    def _deliver_all(
        self,
        targets: list[BroadcastTarget],
        payload: dict[str, Any],
    ) -> list[DeliveryOutcome]:
        """Attempt every target; outcomes are returned in target order."""
        if self._concurrency == 1 or len(targets) == 1:
            return [self._deliver(target, payload) for target in targets]

        # Each worker runs in a copy of the caller's context so spans attach.
        contexts = [copy_context() for _ in targets]
        workers = min(self._concurrency, len(targets))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(
                pool.map(
                    lambda ctx, target: ctx.run(self._deliver, target, payload),
                    contexts,
                    targets,
                )
            )

    def _deliver(self, target: BroadcastTarget, payload: dict[str, Any]) -> DeliveryOutcome:
        """Deliver to one target. Never raises."""
        with trace_span(f"deliver:{target.guild_id}") as span:
            outcome = self._attempt(target, payload)
            if span is not None:
                span.annotate("ok", outcome.ok)
        return outcome

    def _attempt(self, target: BroadcastTarget, payload: dict[str, Any]) -> DeliveryOutcome:
        try:
            channel = self._channel.resolve_target(target)
            if channel is None or not channel.writable:
                return DeliveryOutcome.failure(target.name, CHANNEL_UNAVAILABLE)
            self._channel.send(channel, payload)
        except DeliveryError as exc:
            return DeliveryOutcome.failure(target.name, str(exc) or CHANNEL_UNAVAILABLE)
        except Exception as exc:
            logger.warning("Delivery to %s failed", target.guild_id, exc_info=True)
            return DeliveryOutcome.failure(target.name, str(exc) or exc.__class__.__name__)
        return DeliveryOutcome.success(target.name)
