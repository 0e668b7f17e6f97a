"""Command: duration arithmetic."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tdcalc.commands._base import TdCommand

if TYPE_CHECKING:
    from tdcalc.commands._context import AppContext


@click.command(
    cls=TdCommand,
    context_settings={"ignore_unknown_options": True},
    examples="""\
  tdcalc add 1d2h 30m                  # 1d 02h 30m 00s
  tdcalc add 1h 90m --subtract         # -30m 00s
  tdcalc add -1.5s 2s                  # 00.5s""",
)
@click.argument("first")
@click.argument("second")
@click.option("--subtract", is_flag=True, help="Compute FIRST - SECOND instead of the sum.")
@click.pass_obj
def add(app: AppContext, first: str, second: str, subtract: bool) -> None:
    """Add two duration expressions (units d, h, m, s)."""
    app.emit(app.service.add(first, second, subtract=subtract))
