"""Diagnostic catalog and the internal failure channel of the parser.

Parser functions signal failure by raising a :class:`ParseError` subclass.
Only :func:`polycalc.parsing.lines.parse_line` catches them; it turns each
failure into exactly one :class:`Diagnostic`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ErrorMessage(StrEnum):
    """Fixed catalog of diagnostic messages."""

    WRONG_COMMAND = "WRONG COMMAND"
    WRONG_POLY = "WRONG POLY"
    DEG_BY_WRONG_VARIABLE = "DEG BY WRONG VARIABLE"
    AT_WRONG_VALUE = "AT WRONG VALUE"
    COMPOSE_WRONG_PARAMETER = "COMPOSE WRONG PARAMETER"


@dataclass(frozen=True)
class Diagnostic:
    """One rejected line, rendered as ``ERROR <line_no> <message>``."""

    line_no: int
    message: ErrorMessage

    def __str__(self) -> str:
        return f"ERROR {self.line_no} {self.message}"

    def to_dict(self) -> dict[str, object]:
        return {"line": self.line_no, "message": str(self.message)}


class ParseError(Exception):
    """Base class for all parser failures.

    Attributes:
        position: Index in the line where the failure was detected.
    """

    def __init__(self, position: int, reason: str) -> None:
        super().__init__(f"{reason} at position {position}")
        self.position = position
        self.reason = reason


class ConversionError(ParseError):
    """An integer literal is malformed, out of range, or badly terminated."""


class PolySyntaxError(ParseError):
    """A polynomial line violates the grammar or its lexical pre-checks."""


class CommandError(ParseError):
    """A command line is unknown or carries a malformed argument."""

    def __init__(self, message: ErrorMessage, position: int, reason: str) -> None:
        super().__init__(position, reason)
        self.message = message
