"""Parsed line variants handed to the command dispatcher.

Exactly one variant is produced per input line.  ``Invalid`` carries no
payload: its diagnostic has already been reported.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Final

from polycalc.domain.poly import Poly


class CommandKind(StrEnum):
    """Calculator command vocabulary."""

    ZERO = "ZERO"
    IS_COEFF = "IS_COEFF"
    IS_ZERO = "IS_ZERO"
    CLONE = "CLONE"
    ADD = "ADD"
    MUL = "MUL"
    NEG = "NEG"
    SUB = "SUB"
    IS_EQ = "IS_EQ"
    DEG = "DEG"
    PRINT = "PRINT"
    POP = "POP"
    DEG_BY = "DEG_BY"
    AT = "AT"
    COMPOSE = "COMPOSE"


@dataclass(frozen=True)
class Command:
    """A zero-argument command."""

    kind: CommandKind

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "command", "value": str(self.kind)}


@dataclass(frozen=True)
class CommandWithArg:
    """``DEG_BY`` / ``COMPOSE`` (unsigned) or ``AT`` (signed) with its argument."""

    kind: CommandKind
    value: int

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "command", "value": str(self.kind), "arg": self.value}


@dataclass(frozen=True)
class PolyValue:
    """A successfully parsed polynomial literal."""

    poly: Poly

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "poly", "value": self.poly.to_text()}


class Invalid:
    """Rejected line; use the :data:`INVALID` singleton."""

    _instance: Invalid | None = None

    def __new__(cls) -> Invalid:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "INVALID"


INVALID: Final = Invalid()

ParsedLine = Command | CommandWithArg | PolyValue | Invalid
