"""Command: validate input lines without printing parsed values."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from polycalc.commands._base import PolycalcCommand

if TYPE_CHECKING:
    from polycalc.commands._context import AppContext


@click.command(
    cls=PolycalcCommand,
    examples="""\
  polycalc check input.txt
  polycalc -q check input.txt && echo clean""",
)
@click.argument("source", type=click.File("r"), default="-")
@click.pass_obj
def check(app: AppContext, source: TextIO) -> None:
    """Validate every line of SOURCE; exit 1 if any line is rejected."""
    from polycalc.services.parse import ParseService

    app.emit(ParseService(app.settings, report=app.report).check_stream(source))
