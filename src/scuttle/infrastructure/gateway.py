"""Stats backend gateway — protocol, failure signals, and the httpx adapter.

Every backend response body has the shape ``{"data": {...}}``. A 404 is the
only status that means "not found"; everything else that is not a 2xx,
along with timeouts, connection errors and malformed bodies, is treated as
the backend being unavailable.

Failures are logged here at DEBUG only; the calling service decides whether
they are worth a warning.
"""

from __future__ import annotations

import logging
from datetime import date
from types import TracebackType
from typing import Any, Protocol

import httpx

from scuttle.domain.models import BroadcastTarget, CacheStatus, Identity, RankingEntry

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Base failure signal from the stats backend. Treated as unavailable."""


class NotFoundError(GatewayError):
    """The backend answered 404 for the requested resource."""


class UnavailableError(GatewayError):
    """The backend could not answer (non-404 error, timeout, bad payload)."""


class StatsGateway(Protocol):
    """Operations the stats and broadcast services consume."""

    def resolve_identity(self, identity: Identity) -> str: ...

    def list_guild_members(self, guild_id: str) -> set[str]: ...

    def cache_status(
        self, puuid: str, range_days: int, *, name: str | None = None
    ) -> CacheStatus: ...

    def fetch_stats(self, puuid: str, range_days: int, queue_type: str) -> dict[str, str]: ...

    def fetch_rankings(
        self, guild_id: str, start_date: date, queue_type: str
    ) -> dict[str, list[RankingEntry]]: ...

    def list_broadcast_targets(self) -> list[BroadcastTarget]: ...


class HttpStatsGateway:
    """:class:`StatsGateway` over the backend's REST API.

    Parameters:
        base_url: Backend root, e.g. ``https://api.scuttle.gg``.
        api_key: Sent as the ``x-api-key`` header on every request.
        timeout: Per-request timeout in seconds.
        client: Pre-built client (tests pass one with a mock transport).
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: str = "",
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        headers = {"Content-Type": "application/json"}
        if api_key:
            headers["x-api-key"] = api_key
        self._client = client or httpx.Client(base_url=base_url, headers=headers, timeout=timeout)

    def __enter__(self) -> HttpStatsGateway:
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

    # ------------------------------------------------------------------
    # StatsGateway
    # ------------------------------------------------------------------

    def resolve_identity(self, identity: Identity) -> str:
        data = self._get("/riot/puuid", params={"riotId": identity.riot_id})
        return str(_require(data, "puuid"))

    def list_guild_members(self, guild_id: str) -> set[str]:
        data = self._get(f"/summoners/guild/{guild_id}")
        if not data:
            return set()
        if not isinstance(data, list):
            raise UnavailableError("Malformed guild roster payload")
        return {str(row["puuid"]) for row in data if isinstance(row, dict) and row.get("puuid")}

    def cache_status(self, puuid: str, range_days: int, *, name: str | None = None) -> CacheStatus:
        params: dict[str, Any] = {"range": range_days}
        if name:
            params["name"] = name
        data = self._get(f"/summoners/cache/{puuid}", params=params)
        return CacheStatus(is_cached=bool(_require(data, "isCached")))

    def fetch_stats(self, puuid: str, range_days: int, queue_type: str) -> dict[str, str]:
        data = self._get(
            f"/stats/pretty/{puuid}",
            params={"range": range_days, "queueType": queue_type},
        )
        stats = _require(data, "stats") or {}
        if not isinstance(stats, dict):
            raise UnavailableError("Malformed stats payload")
        return {str(key): str(value) for key, value in stats.items()}

    def fetch_rankings(
        self, guild_id: str, start_date: date, queue_type: str
    ) -> dict[str, list[RankingEntry]]:
        data = self._get(
            "/rankings/pretty",
            params={
                "guildId": guild_id,
                "startDate": start_date.isoformat(),
                "queueType": queue_type,
            },
        )
        rankings = _require(data, "rankings") or {}
        if not isinstance(rankings, dict):
            raise UnavailableError("Malformed rankings payload")
        try:
            return {
                str(metric): [
                    RankingEntry(rank=i, name=row["name"], value=row["value"])
                    for i, row in enumerate(rows, start=1)
                ]
                for metric, rows in rankings.items()
            }
        except (KeyError, TypeError, ValueError) as exc:
            raise UnavailableError(f"Malformed rankings payload: {exc}") from exc

    def list_broadcast_targets(self) -> list[BroadcastTarget]:
        data = self._get("/guilds/with-main-channel")
        rows = _require(data, "guilds") or []
        try:
            return [
                BroadcastTarget(
                    guild_id=str(row["guild_id"]),
                    name=str(row.get("name") or row["guild_id"]),
                    channel_id=str(row["main_channel_id"]),
                )
                for row in rows
            ]
        except (KeyError, TypeError, AttributeError) as exc:
            raise UnavailableError(f"Malformed guild payload: {exc}") from exc

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _get(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        """GET *path* and return the body's ``data`` member."""
        try:
            response = self._client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status == 404:
                logger.debug("Not found: %s", path)
                raise NotFoundError(path) from exc
            logger.debug("API request failed: %s - HTTP %d", path, status)
            raise UnavailableError(f"HTTP {status} from {path}") from exc
        except httpx.HTTPError as exc:
            logger.debug("API request failed: %s - %s", path, exc)
            raise UnavailableError(f"{exc.__class__.__name__} on {path}") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise UnavailableError(f"Invalid JSON from {path}") from exc
        if not isinstance(body, dict) or "data" not in body:
            raise UnavailableError(f"Missing 'data' in response from {path}")
        return body["data"]


def _require(data: Any, key: str) -> Any:
    if not isinstance(data, dict) or key not in data:
        raise UnavailableError(f"Missing {key!r} in response")
    return data[key]
