"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides the duration service and centralized result
emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tdcalc.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from tdcalc.config.settings import TdcalcSettings
    from tdcalc.services.duration import DurationService
    from tdcalc.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.
    """

    def __init__(self, settings: TdcalcSettings) -> None:
        self.settings = settings
        self._service: DurationService | None = None

        from tdcalc.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from tdcalc.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def service(self) -> DurationService:
        """The duration service (created lazily on first access)."""
        if self._service is None:
            from tdcalc.services.duration import DurationService

            self._service = DurationService(self.settings)
        return self._service

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with the error's exit code
          (1 for parse/normalization errors, 2 for arithmetic overflow).
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            if output:
                click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(result.error.exit_code if result.error else 1)
