"""Command: elapsed time between timestamps, or a timestamp shifted by a duration."""

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
  tdcalc calc 2024-01-01T00:00:00 2024-01-02T03:04:05      # 1d 03h 04m 05s
  tdcalc calc 2024-01-02 2024-01-01                        # -1d 00h 00m 00s
  tdcalc calc 2024-03-10T02:30:00-05:00 +1d                # 2024-03-11T02:30:00-05:00
  tdcalc calc 2024-06-01T12:00:00Z -1d2h30m
  tdcalc calc 2024-01-01 now
  tdcalc calc 1d12h 36h                                    # 3d 00h 00m 00s""",
)
@click.argument("first")
@click.argument("second")
@click.pass_obj
def calc(app: AppContext, first: str, second: str) -> None:
    """Combine FIRST and SECOND by kind.

    Two timestamps print the elapsed duration SECOND - FIRST (negative when
    FIRST is later). A timestamp and a duration print the shifted timestamp
    in the same UTC offset. Two durations print their sum. Timestamps
    without an offset are read as UTC; ``now`` is the current time.
    """
    from tdcalc.domain.parser import NOW_KEYWORD

    now = None
    if NOW_KEYWORD in (first.strip().lower(), second.strip().lower()):
        from tdcalc.services._helpers import utc_now_instant

        now = utc_now_instant()
    app.emit(app.service.calculate(first, second, now=now))
