"""Command group: guild leaderboards."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from scuttle.commands._base import ScuttleGroup
from scuttle.domain.types import Period

if TYPE_CHECKING:
    from scuttle.commands._context import AppContext

_RANKINGS_EXAMPLES = """\
  scuttle rankings weekly --guild-id 123456789
  SCUTTLE_GUILD_ID=123456789 scuttle --json rankings monthly"""

_guild_option = click.option(
    "--guild-id",
    envvar="SCUTTLE_GUILD_ID",
    default="",
    help="Guild to rank (env: SCUTTLE_GUILD_ID).",
)


@click.group(cls=ScuttleGroup, examples=_RANKINGS_EXAMPLES)
def rankings() -> None:
    """Show top summoners in a guild."""


@rankings.command()
@_guild_option
@click.pass_obj
def weekly(app: AppContext, guild_id: str) -> None:
    """Rankings since the start of the current week."""
    app.emit(app.stats_service().run_rankings_query(guild_id, Period.WEEKLY))


@rankings.command()
@_guild_option
@click.pass_obj
def monthly(app: AppContext, guild_id: str) -> None:
    """Rankings since the first of the month."""
    app.emit(app.stats_service().run_rankings_query(guild_id, Period.MONTHLY))
