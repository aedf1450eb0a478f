"""Delivery channel — resolve a broadcast target and post a message to it.

``resolve_target`` returns None when the channel does not exist; a resolved
:class:`Channel` may still be unwritable (category, forum, directory).
Any other failure raises :class:`DeliveryError` with a human-readable reason.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import TracebackType
from typing import Any, Protocol

import httpx

from scuttle.domain.models import BroadcastTarget

logger = logging.getLogger(__name__)

DISCORD_API_BASE = "https://discord.com/api/v10"

# Channel types that carry a text chat, voice and stage channels included.
TEXT_BASED_CHANNEL_TYPES = frozenset({0, 2, 5, 10, 11, 12, 13})


class DeliveryError(Exception):
    """A target could not be resolved or a message was rejected."""


@dataclass(frozen=True)
class Channel:
    """A resolved delivery endpoint."""

    id: str
    guild_id: str | None
    writable: bool


class DeliveryChannel(Protocol):
    """Capability used by the broadcast fan-out."""

    def resolve_target(self, target: BroadcastTarget) -> Channel | None: ...

    def send(self, channel: Channel, payload: dict[str, Any]) -> None: ...


class DiscordDeliveryChannel:
    """:class:`DeliveryChannel` over the Discord REST API (bot token auth)."""

    def __init__(
        self,
        bot_token: str,
        *,
        api_base: str = DISCORD_API_BASE,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._client = client or httpx.Client(
            base_url=api_base,
            headers={"Authorization": f"Bot {bot_token}"},
            timeout=timeout,
        )

    def __enter__(self) -> DiscordDeliveryChannel:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def resolve_target(self, target: BroadcastTarget) -> Channel | None:
        try:
            response = self._client.get(f"/channels/{target.channel_id}")
        except httpx.HTTPError as exc:
            raise DeliveryError(f"Channel lookup failed: {exc.__class__.__name__}") from exc

        if response.status_code == 404:
            return None
        if response.is_error:
            raise DeliveryError(_error_message(response))

        try:
            body = response.json()
        except ValueError as exc:
            raise DeliveryError("Channel lookup returned invalid JSON") from exc
        guild_id = body.get("guild_id")
        if guild_id is not None and str(guild_id) != target.guild_id:
            raise DeliveryError("Channel does not belong to this guild")
        return Channel(
            id=str(body.get("id", target.channel_id)),
            guild_id=str(guild_id) if guild_id is not None else None,
            writable=body.get("type") in TEXT_BASED_CHANNEL_TYPES,
        )

    def send(self, channel: Channel, payload: dict[str, Any]) -> None:
        try:
            response = self._client.post(f"/channels/{channel.id}/messages", json=payload)
        except httpx.HTTPError as exc:
            raise DeliveryError(f"Send failed: {exc.__class__.__name__}") from exc

        if response.is_error:
            message = _error_message(response)
            logger.debug("Discord rejected message to %s: %s", channel.id, message)
            raise DeliveryError(message)


def _error_message(response: httpx.Response) -> str:
    """Discord's ``message`` field, falling back to the HTTP status."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {response.status_code}"
