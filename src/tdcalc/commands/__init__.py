"""Subcommand modules for tdcalc.

Provides register_commands() which uses deferred imports to keep
``tdcalc --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from tdcalc.commands.add import add
    from tdcalc.commands.batch import batch
    from tdcalc.commands.calc import calc
    from tdcalc.commands.hours import hours

    cli.add_command(calc)
    cli.add_command(add)
    cli.add_command(hours)
    cli.add_command(batch)
