"""Subcommand modules for scuttle.

``register_commands`` imports command modules lazily so ``--help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register command groups and standalone commands on the root group."""
    # --- Groups ---
    from scuttle.commands.rankings import rankings
    from scuttle.commands.stats import stats

    cli.add_command(stats)
    cli.add_command(rankings)

    # --- Standalone commands ---
    from scuttle.commands.broadcast import broadcast, templates

    cli.add_command(broadcast)
    cli.add_command(templates)
