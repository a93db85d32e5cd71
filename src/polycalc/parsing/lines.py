"""Line classification -- the single entry point of the parser.

A line whose first character is an ASCII letter is a command; anything
else (digits, ``-``, ``(``, an empty line, ...) is a polynomial literal.
Rejections are reported exactly once through *report* and yield
:data:`INVALID`; accepted lines report nothing.
"""

from __future__ import annotations

import logging
import string
import sys
from collections.abc import Callable

from polycalc.parsing.commands import recognize_command
from polycalc.parsing.errors import CommandError, Diagnostic, ErrorMessage, PolySyntaxError
from polycalc.parsing.grammar import parse_poly
from polycalc.parsing.types import INVALID, ParsedLine, PolyValue

logger = logging.getLogger(__name__)

Reporter = Callable[[Diagnostic], None]

_LETTERS = frozenset(string.ascii_letters)


def report_to_stderr(diagnostic: Diagnostic) -> None:
    """Default reporter: one ``ERROR <n> <message>`` line on stderr.

    The parsing layer does not depend on click; the CLI passes its own
    ``click.echo`` reporter (see :meth:`AppContext.report`).
    """
    print(diagnostic, file=sys.stderr)


def is_command_line(text: str) -> bool:
    """True if *text* starts with an ASCII letter and so names a command."""
    return text[:1] in _LETTERS


def parse_line(text: str, line_no: int, report: Reporter = report_to_stderr) -> ParsedLine:
    """Parse one input line (trailing newline already stripped).

    Args:
        text: The raw line.
        line_no: 1-based line number used in the diagnostic.
        report: Receives the diagnostic when the line is rejected.
    """
    if is_command_line(text):
        try:
            return recognize_command(text)
        except CommandError as exc:
            logger.debug("Line %d rejected as command: %s", line_no, exc)
            report(Diagnostic(line_no, exc.message))
            return INVALID

    try:
        return PolyValue(parse_poly(text))
    except PolySyntaxError as exc:
        logger.debug("Line %d rejected as polynomial: %s", line_no, exc)
        report(Diagnostic(line_no, ErrorMessage.WRONG_POLY))
        return INVALID
