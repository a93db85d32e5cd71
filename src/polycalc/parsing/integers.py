"""Validated integer conversion from a position inside a line.

Both converters read an optional sign (signed only) and a run of ASCII
digits starting exactly at *start*, range-check the value, and require
the character right after the digits to be one of *terminators*.
``END`` in *terminators* stands for end-of-line, so *terminators* must be
a set of single characters rather than a string.

Leading zeros are accepted; leading whitespace and a unary ``+`` are not.
"""

from __future__ import annotations

from collections.abc import Container

from polycalc.domain.poly import COEFF_MAX, COEFF_MIN, INT_MAX
from polycalc.parsing.errors import ConversionError

END = ""
DIGITS = frozenset("0123456789")

# Longer digit runs are out of range for every target type.
_MAX_DIGITS = 19


def char_at(text: str, pos: int) -> str:
    """Character at *pos*, or ``END`` past the end of *text*."""
    return text[pos] if pos < len(text) else END


def is_digit(ch: str) -> bool:
    """ASCII-only digit test (``str.isdigit`` also accepts e.g. superscripts)."""
    return ch in DIGITS


def _scan_digits(text: str, start: int) -> int:
    end = start
    while end < len(text) and text[end] in DIGITS:
        end += 1
    return end


def _convert(
    text: str,
    start: int,
    terminators: Container[str],
    *,
    signed: bool,
    lo: int,
    hi: int,
) -> tuple[int, int]:
    pos = start
    negative = False
    if signed and char_at(text, pos) == "-":
        negative = True
        pos += 1
    if not is_digit(char_at(text, pos)):
        raise ConversionError(pos, "expected a digit")

    end = _scan_digits(text, pos)
    significant = text[pos:end].lstrip("0") or "0"
    if len(significant) > _MAX_DIGITS:
        raise ConversionError(start, f"value {text[start:end]} out of range")
    value = int(significant)
    if negative:
        value = -value
    if not lo <= value <= hi:
        raise ConversionError(start, f"value {text[start:end]} out of range")
    if char_at(text, end) not in terminators:
        raise ConversionError(end, f"unexpected character {char_at(text, end)!r}")
    return value, end


def convert_signed(text: str, start: int, terminators: Container[str]) -> tuple[int, int]:
    """Parse a signed 64-bit integer at *start*.

    Returns ``(value, end)`` where *end* is the index just past the digits.

    Raises:
        ConversionError: No digit where expected, value out of range, or
            the following character is not in *terminators*.
    """
    return _convert(text, start, terminators, signed=True, lo=COEFF_MIN, hi=COEFF_MAX)


def convert_unsigned(text: str, start: int, terminators: Container[str]) -> tuple[int, int]:
    """Parse an unsigned integer in ``0..=INT_MAX`` at *start*.

    Same contract as :func:`convert_signed`, without a sign.
    """
    return _convert(text, start, terminators, signed=False, lo=0, hi=INT_MAX)
