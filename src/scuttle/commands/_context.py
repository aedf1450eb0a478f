"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed down via ``@click.pass_obj``.
HTTP clients and plugins are created lazily so ``--help`` and ``--version``
never touch the network or entry points.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from scuttle.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from scuttle.config.settings import ScuttleSettings
    from scuttle.infrastructure.delivery import DiscordDeliveryChannel
    from scuttle.infrastructure.gateway import HttpStatsGateway
    from scuttle.infrastructure.templates import TemplateRegistry
    from scuttle.plugins.manager import PluginManager
    from scuttle.services.broadcast import BroadcastService
    from scuttle.services.result import ServiceResult
    from scuttle.services.stats import StatsService


class AppContext:
    """Shared state for one CLI invocation."""

    def __init__(self, settings: ScuttleSettings) -> None:
        self.settings = settings
        self._gateway: HttpStatsGateway | None = None
        self._delivery: DiscordDeliveryChannel | None = None
        self._plugins: PluginManager | None = None
        self._templates: TemplateRegistry | None = None

        from scuttle.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from scuttle.services.telemetry import enable_telemetry

            enable_telemetry()

    # ------------------------------------------------------------------
    # Lazy collaborators
    # ------------------------------------------------------------------

    @property
    def gateway(self) -> HttpStatsGateway:
        if self._gateway is None:
            from scuttle.infrastructure.gateway import HttpStatsGateway

            api = self.settings.api
            self._gateway = HttpStatsGateway(api.base_url, api_key=api.api_key, timeout=api.timeout)
        return self._gateway

    @property
    def delivery(self) -> DiscordDeliveryChannel:
        if self._delivery is None:
            from scuttle.infrastructure.delivery import DiscordDeliveryChannel

            discord = self.settings.discord
            self._delivery = DiscordDeliveryChannel(
                discord.bot_token, api_base=discord.api_base, timeout=discord.timeout
            )
        return self._delivery

    @property
    def plugins(self) -> PluginManager:
        if self._plugins is None:
            from scuttle.plugins.manager import PluginManager

            self._plugins = PluginManager()
            self._plugins.discover_and_load()
        return self._plugins

    @property
    def templates(self) -> TemplateRegistry:
        if self._templates is None:
            from scuttle.infrastructure.templates import build_registry

            self._templates = build_registry(self.plugins)
        return self._templates

    def stats_service(self) -> StatsService:
        from scuttle.services.stats import StatsService

        return StatsService(
            self.gateway,
            queue_type=self.settings.stats.queue_type,
            anchor_weekday=self.settings.rankings.anchor_weekday,
        )

    def broadcast_service(self) -> BroadcastService:
        from scuttle.services.broadcast import BroadcastService, owner_only

        cfg = self.settings.broadcast
        return BroadcastService(
            self.gateway,
            self.delivery,
            self.templates,
            authorize=owner_only(cfg.owner_id),
            concurrency=cfg.concurrency,
            plugins=self.plugins,
        )

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout, warnings on stderr (JSON mode keeps them in the payload).
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def close(self) -> None:
        """Close any HTTP clients opened during the invocation."""
        if self._gateway is not None:
            self._gateway.close()
            self._gateway = None
        if self._delivery is not None:
            self._delivery.close()
            self._delivery = None
