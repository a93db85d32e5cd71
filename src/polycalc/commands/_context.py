"""AppContext -- shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Configures logging and centralizes result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from polycalc.config.logging import configure_logging
from polycalc.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from polycalc.config.settings import PolycalcSettings
    from polycalc.parsing.errors import Diagnostic
    from polycalc.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: PolycalcSettings) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @staticmethod
    def report(diagnostic: Diagnostic) -> None:
        """Write one ``ERROR <n> <message>`` line to stderr."""
        click.echo(str(diagnostic), err=True)

    def emit(self, result: ServiceResult, *, fail: bool = False) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally,
          unless *fail* asks for a non-zero exit anyway.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
            if fail:
                raise SystemExit(1)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
