"""BaseService — shared foundation for scuttle services.

Every service receives a :class:`StatsGateway` at construction time and,
optionally, a :class:`PluginManager` for lifecycle hooks.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from scuttle.infrastructure.gateway import StatsGateway
    from scuttle.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for service-layer classes.

    Usage::

        class StatsService(BaseService):
            def run_stats_query(self, identity, guild_id, period) -> ServiceResult:
                puuid = self._gateway.resolve_identity(identity)
                ...
    """

    def __init__(self, gateway: StatsGateway, *, plugins: PluginManager | None = None) -> None:
        self._gateway = gateway
        self._plugins = plugins

    def _dispatch_event(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Call a plugin hook synchronously. No-op without a plugin manager.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        if self._plugins is None:
            return
        try:
            getattr(self._plugins.hook, hook_name)(**payload)
        except Exception:
            logger.debug("Plugin hook failed for %s", hook_name, exc_info=True)
            warnings.append(f"Plugin hook failed for {hook_name}")
