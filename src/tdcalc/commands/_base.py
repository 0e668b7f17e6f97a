"""Custom Click base classes with --examples support.

Provides TdCommand and TdGroup that accept an ``examples`` parameter.
When ``--examples`` is passed, the command prints usage examples and exits.
This keeps ``--help`` concise while making examples available on demand.
TdGroup can also route bare arguments to a default subcommand.
"""

from __future__ import annotations

from typing import Any

import click


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class TdCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class TdGroup(click.Group):
    """Click Group subclass that supports an ``--examples`` flag.

    Sets ``command_class = TdCommand`` so subcommands accept the
    ``examples`` parameter without explicit ``cls=`` each time.

    With ``default_command`` set, arguments that do not start with a
    known command name are handed to that command unchanged, so
    ``tdcalc A B`` runs ``tdcalc calc A B``.
    """

    command_class = TdCommand

    def __init__(
        self,
        *args: Any,
        examples: str | None = None,
        default_command: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        self.default_command = default_command
        if examples:
            _add_examples_option(self, examples)

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        name = args[0]
        if (
            self.default_command is not None
            and self.get_command(ctx, name) is None
            and not name.startswith("-")
        ):
            return self.default_command, self.get_command(ctx, self.default_command), args
        return super().resolve_command(ctx, args)
