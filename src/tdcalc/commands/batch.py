"""Command: many independent calculations, one ``A B`` pair per line."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from tdcalc.commands._base import TdCommand

if TYPE_CHECKING:
    from tdcalc.commands._context import AppContext


@click.command(
    cls=TdCommand,
    examples="""\
  tdcalc batch pairs.txt
  printf '2024-01-01 2024-01-02\\n2024-01-01T00:00Z +90m\\n' | tdcalc batch -
  tdcalc --json batch pairs.txt""",
)
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.pass_obj
def batch(app: AppContext, source: TextIO) -> None:
    """Run `calc` on each line of SOURCE (a file, or - for stdin).

    Blank lines and lines starting with # are skipped. Failed lines are
    reported on stderr; the exit code is the most severe failure
    (1 parse, 2 overflow). Set [batch] fail_fast to stop at the first one.
    """
    from tdcalc.services._helpers import utc_now_instant

    lines = source.read().splitlines()
    result = app.service.batch(lines, now=utc_now_instant())
    app.emit(result)
    exit_code = result.data.get("exit_code", 0)
    if exit_code:
        raise SystemExit(exit_code)
