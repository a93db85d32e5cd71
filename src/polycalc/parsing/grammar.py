"""Descent parser for polynomial literals.

Grammar (the whole line must be consumed)::

    Poly    := Coeff | MonoSum
    Coeff   := ['-'] Digit+
    MonoSum := Mono ('+' Mono)*
    Mono    := '(' Poly ',' Exp ')'
    Exp     := Digit+

``Poly`` and ``Mono`` nest inside each other without limit.  Instead of
recursing, :func:`_parse_poly` keeps one list of finished monomials per
open ``MonoSum`` on an explicit stack, so nesting depth is bounded by
memory rather than by the interpreter's call stack.  Every step returns
a value together with the cursor just past the consumed text; the caller
decides what may follow by inspecting the character there.  There is no
backtracking.

A failure at any depth raises :class:`PolySyntaxError`.  Values built so
far are only referenced from the stack local to the failing call, so
nothing outlives the exception.
"""

from __future__ import annotations

import logging

from polycalc.domain.poly import Mono, Poly
from polycalc.parsing.errors import ConversionError, PolySyntaxError
from polycalc.parsing.integers import END, char_at, convert_signed, convert_unsigned, is_digit

logger = logging.getLogger(__name__)

LEGAL_CHARACTERS = frozenset("0123456789-+(),")

# What may follow a complete Poly: end-of-line, or the ',' of an enclosing Mono.
_POLY_TERMINATORS = frozenset({END, ","})
_EXP_TERMINATORS = frozenset({")"})


def find_illegal_character(text: str) -> int | None:
    """Index of the first character outside the polynomial alphabet, if any."""
    for i, ch in enumerate(text):
        if ch not in LEGAL_CHARACTERS:
            return i
    return None


def parentheses_balanced(text: str) -> bool:
    """Single scan with a depth counter that must never go negative."""
    depth = 0
    for ch in text:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def _parse_exp(text: str, pos: int) -> tuple[int, int]:
    try:
        return convert_unsigned(text, pos, _EXP_TERMINATORS)
    except ConversionError as exc:
        raise PolySyntaxError(exc.position, f"bad exponent: {exc.reason}") from exc


def _parse_coeff(text: str, pos: int) -> tuple[Poly, int]:
    try:
        value, end = convert_signed(text, pos, _POLY_TERMINATORS)
    except ConversionError as exc:
        raise PolySyntaxError(exc.position, f"bad coefficient: {exc.reason}") from exc
    return Poly.from_coeff(value), end


def _close_mono(text: str, pos: int, coeff: Poly) -> tuple[Mono, int]:
    """Finish a monomial whose coefficient ended at *pos*.

    Returns the monomial and the index just past its closing ``)``.
    """
    if char_at(text, pos) != ",":
        raise PolySyntaxError(pos, "expected ',' before exponent")
    exp, end = _parse_exp(text, pos + 1)
    return Mono.from_poly(coeff, exp), end + 1


def _parse_poly(text: str, pos: int) -> tuple[Poly, int]:
    """Parse a Poly starting at *pos*.

    Returns the polynomial and the index of the first unconsumed
    character, which is always ``END`` or ``,`` on success.
    """
    open_sums: list[list[Mono]] = []
    while True:
        # Descend: every '(' opens a MonoSum until a coefficient is reached.
        first = char_at(text, pos)
        while first == "(":
            open_sums.append([])
            pos += 1
            first = char_at(text, pos)
        if first == END:
            raise PolySyntaxError(pos, "empty polynomial")
        if not (is_digit(first) or first == "-"):
            raise PolySyntaxError(pos, "expected '('")
        poly, pos = _parse_coeff(text, pos)

        # Ascend: attach the finished Poly to the innermost open monomial.
        while open_sums:
            mono, pos = _close_mono(text, pos, poly)
            monos = open_sums[-1]
            monos.append(mono)
            follow = char_at(text, pos)
            if follow == "+":
                pos += 1
                if char_at(text, pos) != "(":
                    raise PolySyntaxError(pos, "expected '('")
                pos += 1
                break
            if follow not in _POLY_TERMINATORS:
                raise PolySyntaxError(pos, f"unexpected character {follow!r} after monomial")
            open_sums.pop()
            poly = Poly.add_monos(monos)
        else:
            return poly, pos


def parse_poly(text: str) -> Poly:
    """Parse a complete polynomial line.

    Raises:
        PolySyntaxError: The line has an illegal character, unbalanced
            parentheses, violates the grammar, or has trailing input.
    """
    illegal = find_illegal_character(text)
    if illegal is not None:
        raise PolySyntaxError(illegal, f"illegal character {text[illegal]!r}")
    if not parentheses_balanced(text):
        raise PolySyntaxError(0, "unbalanced parentheses")

    poly, end = _parse_poly(text, 0)
    if end != len(text):
        raise PolySyntaxError(end, "trailing input after polynomial")
    logger.debug("Parsed polynomial of %d characters", len(text))
    return poly
