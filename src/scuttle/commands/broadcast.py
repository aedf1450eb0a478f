"""Commands: broadcast a template to every guild, list templates."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from scuttle.commands._base import ScuttleCommand

if TYPE_CHECKING:
    from scuttle.commands._context import AppContext


@click.command(
    cls=ScuttleCommand,
    examples="""\
  scuttle broadcast arena_announcement --as-user 1234 --test-guild-id 5678
  SCUTTLE_USER_ID=1234 scuttle broadcast arena_announcement""",
)
@click.argument("template")
@click.option(
    "--test-guild-id",
    default=None,
    help="Test mode: only send to this guild ID.",
)
@click.option(
    "--as-user",
    "requester_id",
    envvar="SCUTTLE_USER_ID",
    default=None,
    help="User ID issuing the broadcast (env: SCUTTLE_USER_ID).",
)
@click.pass_obj
def broadcast(
    app: AppContext,
    template: str,
    test_guild_id: str | None,
    requester_id: str | None,
) -> None:
    """Send a broadcast template to every guild's main channel (owner only)."""
    app.emit(
        app.broadcast_service().run_broadcast(
            template,
            requester_id=requester_id,
            test_guild_id=test_guild_id,
        )
    )


@click.command(cls=ScuttleCommand)
@click.pass_obj
def templates(app: AppContext) -> None:
    """List registered broadcast templates."""
    app.emit(app.broadcast_service().list_templates())
