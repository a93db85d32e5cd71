"""Command recognition for lines that start with a letter.

Zero-argument commands must match the whole line exactly.  Parametrized
commands are recognized by keyword prefix when the keyword is not part of
a longer word (``DEGREE`` is not ``DEG``, ``DEG_BYX`` is not ``DEG_BY``);
the keyword must then be followed by exactly one space and an integer
argument running to end-of-line.
"""

from __future__ import annotations

import string
from collections.abc import Callable
from dataclasses import dataclass

from polycalc.parsing.errors import CommandError, ConversionError, ErrorMessage
from polycalc.parsing.integers import END, char_at, convert_signed, convert_unsigned, is_digit
from polycalc.parsing.types import Command, CommandKind, CommandWithArg

ZERO_ARG_COMMANDS: dict[str, CommandKind] = {
    kind.value: kind
    for kind in (
        CommandKind.ZERO,
        CommandKind.IS_COEFF,
        CommandKind.IS_ZERO,
        CommandKind.CLONE,
        CommandKind.ADD,
        CommandKind.MUL,
        CommandKind.NEG,
        CommandKind.SUB,
        CommandKind.IS_EQ,
        CommandKind.DEG,
        CommandKind.PRINT,
        CommandKind.POP,
    )
}

# Characters that continue a keyword into a longer (unknown) word.
_WORD_CHARACTERS = frozenset(string.ascii_letters + "_")
_ARG_TERMINATORS = frozenset({END})


@dataclass(frozen=True)
class ArgRule:
    """How a parametrized command reads and reports its argument."""

    kind: CommandKind
    error: ErrorMessage
    convert: Callable[[str, int, frozenset[str]], tuple[int, int]]
    allow_minus: bool = False


ARG_COMMANDS: tuple[ArgRule, ...] = (
    ArgRule(CommandKind.DEG_BY, ErrorMessage.DEG_BY_WRONG_VARIABLE, convert_unsigned),
    ArgRule(CommandKind.AT, ErrorMessage.AT_WRONG_VALUE, convert_signed, allow_minus=True),
    ArgRule(CommandKind.COMPOSE, ErrorMessage.COMPOSE_WRONG_PARAMETER, convert_unsigned),
)


def keyword_matches(text: str, keyword: str) -> bool:
    """True if *text* starts with *keyword* and the keyword ends a word there."""
    return text.startswith(keyword) and char_at(text, len(keyword)) not in _WORD_CHARACTERS


def _parse_argument(text: str, rule: ArgRule) -> CommandWithArg:
    sep = len(rule.kind.value)
    if char_at(text, sep) != " ":
        raise CommandError(rule.error, sep, "expected a single space before the argument")

    start = sep + 1
    first = char_at(text, start)
    if not (is_digit(first) or (rule.allow_minus and first == "-")):
        raise CommandError(rule.error, start, "argument must start with a digit")

    try:
        value, _ = rule.convert(text, start, _ARG_TERMINATORS)
    except ConversionError as exc:
        raise CommandError(rule.error, exc.position, exc.reason) from exc
    return CommandWithArg(kind=rule.kind, value=value)


def recognize_command(text: str) -> Command | CommandWithArg:
    """Map a command line to its parsed form.

    Raises:
        CommandError: Unknown keyword (``WRONG COMMAND``) or a known
            parametrized keyword with a malformed argument (the
            command-specific message).
    """
    kind = ZERO_ARG_COMMANDS.get(text)
    if kind is not None:
        return Command(kind=kind)

    for rule in ARG_COMMANDS:
        if keyword_matches(text, rule.kind.value):
            return _parse_argument(text, rule)

    raise CommandError(ErrorMessage.WRONG_COMMAND, 0, "unknown command")
