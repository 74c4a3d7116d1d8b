"""Root CLI group for resourcemap with global flags and command registration."""

from __future__ import annotations

import click

from resourcemap import __version__
from resourcemap.commands import register_commands
from resourcemap.commands._context import AppContext
from resourcemap.config.settings import MapSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="resourcemap")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging, including engine traces.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """resourcemap: inspect and convert tag-mapped shapes."""
    flags: dict[str, bool] = {"json_output": json_output, "log_json": log_json}
    if verbose:
        flags.update(verbose=True, trace=True)
    settings = MapSettings.from_cli(config_path=config_path, **flags)
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
