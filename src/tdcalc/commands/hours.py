"""Command: decimal hours across a same-day wall-clock range."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import click

from tdcalc.commands._base import TdCommand

if TYPE_CHECKING:
    from tdcalc.commands._context import AppContext

_NOW_PATTERN = re.compile(r"([01]?[0-9]|2[0-3]):([0-5][0-9])")


def _parse_now(
    _ctx: click.Context, _param: click.Parameter, value: str | None
) -> tuple[int, int] | None:
    if value is None:
        return None
    match = _NOW_PATTERN.fullmatch(value.strip())
    if match is None:
        raise click.BadParameter("expected 24-hour HH:MM, e.g. 17:45")
    return int(match.group(1)), int(match.group(2))


@click.command(
    cls=TdCommand,
    examples="""\
  tdcalc hours 9:00AM-5:30PM           # 8.50 hours
  tdcalc hours 9:00-5:30               # read as 9:00AM-5:30PM
  tdcalc hours 9:15                    # from 9:15AM until now
  tdcalc hours 9:15 --now 17:45        # 8.50 hours""",
)
@click.argument("time_range", metavar="RANGE")
@click.option(
    "--now",
    "now_clock",
    callback=_parse_now,
    default=None,
    help="Current local time as 24-hour HH:MM (default: system clock).",
)
@click.pass_obj
def hours(app: AppContext, time_range: str, now_clock: tuple[int, int] | None) -> None:
    """Hours between two clock times on the same day, e.g. 9:00AM-5:30PM.

    With a single time (no AM/PM), counts from that morning time until now.
    """
    if "-" not in time_range and now_clock is None:
        from tdcalc.services._helpers import local_wall_clock

        now_clock = local_wall_clock()
    app.emit(app.service.hours(time_range, now_clock=now_clock))
