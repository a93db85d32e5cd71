"""Command: parse input lines into commands and polynomials."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from polycalc.commands._base import PolycalcCommand

if TYPE_CHECKING:
    from polycalc.commands._context import AppContext


@click.command(
    cls=PolycalcCommand,
    examples="""\
  polycalc parse input.txt
  echo '(1,2)+(3,0)' | polycalc parse
  polycalc --json parse input.txt
  polycalc parse --strict input.txt""",
)
@click.argument("source", type=click.File("r"), default="-")
@click.option("--strict", is_flag=True, help="Exit 1 if any line is rejected.")
@click.pass_obj
def parse(app: AppContext, source: TextIO, strict: bool) -> None:
    """Parse every line of SOURCE (default: stdin).

    Rejected lines are reported on stderr as ``ERROR <line> <message>``.
    """
    from polycalc.services.parse import ParseService

    result = ParseService(app.settings, report=app.report).parse_stream(source)
    rejected = bool(result.data.get("rejected"))
    app.emit(result, fail=strict and rejected)
