"""Command group: per-player stats for a lookback window."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from scuttle.commands._base import ScuttleGroup
from scuttle.domain.types import Period

if TYPE_CHECKING:
    from scuttle.commands._context import AppContext

_STATS_EXAMPLES = """\
  scuttle stats daily Faker KR1 --guild-id 123456789
  scuttle stats weekly "Hide on bush" KR1 --guild-id 123456789
  scuttle --json stats monthly Faker KR1"""

_guild_option = click.option(
    "--guild-id",
    envvar="SCUTTLE_GUILD_ID",
    default="",
    help="Guild the summoner must belong to (env: SCUTTLE_GUILD_ID).",
)


@click.group(cls=ScuttleGroup, examples=_STATS_EXAMPLES)
def stats() -> None:
    """Show a summoner's stats for a lookback window."""


def _run(app: AppContext, period: Period, name: str, tag: str, guild_id: str) -> None:
    from scuttle.domain.models import Identity

    try:
        identity = Identity(name=name, tag=tag)
    except ValueError as exc:
        raise click.BadParameter("summoner name and tag must be non-empty") from exc
    app.emit(app.stats_service().run_stats_query(identity, guild_id, period))


@stats.command(examples="  scuttle stats daily Faker KR1 --guild-id 123456789")
@click.argument("name")
@click.argument("tag")
@_guild_option
@click.pass_obj
def daily(app: AppContext, name: str, tag: str, guild_id: str) -> None:
    """Stats for games played in the last 24 hours."""
    _run(app, Period.DAILY, name, tag, guild_id)


@stats.command(examples="  scuttle stats weekly Faker KR1 --guild-id 123456789")
@click.argument("name")
@click.argument("tag")
@_guild_option
@click.pass_obj
def weekly(app: AppContext, name: str, tag: str, guild_id: str) -> None:
    """Stats for games played in the last 7 days."""
    _run(app, Period.WEEKLY, name, tag, guild_id)


@stats.command(examples="  scuttle stats monthly Faker KR1 --guild-id 123456789")
@click.argument("name")
@click.argument("tag")
@_guild_option
@click.pass_obj
def monthly(app: AppContext, name: str, tag: str, guild_id: str) -> None:
    """Stats for games played in the last 30 days."""
    _run(app, Period.MONTHLY, name, tag, guild_id)
