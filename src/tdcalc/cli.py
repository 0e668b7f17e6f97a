"""Root CLI group for tdcalc with global flags and command registration."""

from __future__ import annotations

import click

from tdcalc import __version__
from tdcalc.commands import register_commands
from tdcalc.commands._base import TdGroup
from tdcalc.commands._context import AppContext
from tdcalc.config.settings import TdcalcSettings


@click.group(
    cls=TdGroup,
    invoke_without_command=True,
    default_command="calc",
    examples="""\
  tdcalc 2024-01-01T00:00:00 2024-01-02T03:04:05
  tdcalc calc 2024-03-10T02:30:00-05:00 +1d
  tdcalc add 1d2h 30m --subtract
  tdcalc hours 9:00AM-5:30PM
  tdcalc --json batch pairs.txt""",
)
@click.version_option(version=__version__, prog_name="tdcalc")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the bare result.")
@click.option("-v", "--verbose", is_flag=True, help="Unit breakdown, timing and debug logs.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """tdcalc — elapsed time between timestamps, and duration arithmetic."""
    settings = TdcalcSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)


def main() -> None:
    """Console-script entry point."""
    cli()
