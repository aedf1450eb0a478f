"""``scuttle`` entry point: global output/config flags, then one subcommand."""

from __future__ import annotations

import click

from scuttle import __version__
from scuttle.commands import register_commands
from scuttle.commands._context import AppContext
from scuttle.config.settings import ScuttleSettings


@click.group(invoke_without_command=True)
@click.version_option(__version__, prog_name="scuttle")
@click.option("--json", "json_output", is_flag=True, help="Print the result as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print a one-line result.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logs and timing spans.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Read this TOML file instead of discovering scuttle.toml.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, **flags: bool) -> None:
    """Guild stats, rankings and broadcasts for the Scuttle bot."""
    app = AppContext(ScuttleSettings.from_cli(config_path=config_path, **flags))
    ctx.obj = app
    # HTTP clients are opened lazily and closed with the context.
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
