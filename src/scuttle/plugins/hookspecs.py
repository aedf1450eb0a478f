"""Pluggy hook specifications for scuttle."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from scuttle.domain.templates import BroadcastTemplate

hookspec = pluggy.HookspecMarker("scuttle")
hookimpl = pluggy.HookimplMarker("scuttle")


class ScuttleHookSpec:
    """Hook specifications for the scuttle plugin system."""

    @hookspec
    def register_broadcast_templates(self) -> dict[str, BroadcastTemplate] | None:
        """Return template key -> BroadcastTemplate mappings to add to the registry."""

    @hookspec
    def post_broadcast(
        self,
        template: str,
        test_mode: bool,
        report: dict[str, Any],
    ) -> None:
        """Called after a broadcast fan-out completes."""
