"""Input parsing -- line classification, commands, and polynomial grammar.

Depends only on the domain layer.  ``parse_line`` is the public entry
point; the submodules are importable for finer-grained use and tests.
"""

from polycalc.parsing.errors import Diagnostic, ErrorMessage
from polycalc.parsing.lines import parse_line
from polycalc.parsing.types import (
    INVALID,
    Command,
    CommandKind,
    CommandWithArg,
    Invalid,
    ParsedLine,
    PolyValue,
)

__all__ = [
    "INVALID",
    "Command",
    "CommandKind",
    "CommandWithArg",
    "Diagnostic",
    "ErrorMessage",
    "Invalid",
    "ParsedLine",
    "PolyValue",
    "parse_line",
]
