"""Sparse multivariate polynomial values.

A polynomial is either a bare coefficient or a non-empty tuple of
monomials; each monomial's coefficient is itself a polynomial in the
next variable.  Values are immutable, so a parsed tree is owned by
whoever holds the root and released by the garbage collector.

INVARIANT: Values built through :meth:`Poly.add_monos` are canonical --
exponents strictly ascending, no zero terms, and a lone ``x^0`` term is
collapsed into its coefficient.  Structural equality is only meaningful
between canonical values.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

INT_MAX = 2**31 - 1
COEFF_MIN = -(2**63)
COEFF_MAX = 2**63 - 1


@dataclass(frozen=True)
class Mono:
    """A single term ``coeff * x^exp``."""

    exp: int
    coeff: Poly

    @classmethod
    def from_poly(cls, coeff: Poly, exp: int) -> Mono:
        """Pair *coeff* with *exp*; the monomial takes ownership of *coeff*."""
        return cls(exp=exp, coeff=coeff)


@dataclass(frozen=True)
class Poly:
    """A coefficient (``monos`` empty) or a sum of monomials."""

    coeff: int = 0
    monos: tuple[Mono, ...] = ()

    @classmethod
    def from_coeff(cls, coeff: int) -> Poly:
        return cls(coeff=coeff)

    @classmethod
    def zero(cls) -> Poly:
        return cls()

    @classmethod
    def add_monos(cls, monos: Iterable[Mono]) -> Poly:
        """Merge *monos* into a canonical polynomial.

        Terms with equal exponents are summed, zero terms dropped.  The
        input monomials are consumed; callers must not reuse them.
        """
        merged: dict[int, Poly] = {}
        for mono in monos:
            current = merged.get(mono.exp)
            merged[mono.exp] = mono.coeff if current is None else current + mono.coeff
        return cls._normalize(merged)

    @classmethod
    def _normalize(cls, terms: dict[int, Poly]) -> Poly:
        kept = tuple(
            Mono(exp=exp, coeff=coeff)
            for exp, coeff in sorted(terms.items())
            if not coeff.is_zero
        )
        if not kept:
            return cls.zero()
        if len(kept) == 1 and kept[0].exp == 0 and kept[0].coeff.is_coeff:
            return kept[0].coeff
        return cls(monos=kept)

    @property
    def is_coeff(self) -> bool:
        return not self.monos

    @property
    def is_zero(self) -> bool:
        return self.is_coeff and self.coeff == 0

    def _as_terms(self) -> dict[int, Poly]:
        if self.is_coeff:
            return {} if self.coeff == 0 else {0: self}
        return {m.exp: m.coeff for m in self.monos}

    def __add__(self, other: object) -> Poly:
        if not isinstance(other, Poly):
            return NotImplemented
        return _sum(self, other)

    def to_text(self) -> str:
        """Canonical literal form, e.g. ``(3,0)+(1,2)``.

        The text parses back to an equal value.  Built with an explicit
        work list, so nesting depth is not limited by the call stack.
        """
        out: list[str] = []
        todo: list[Poly | str] = [self]
        while todo:
            item = todo.pop()
            if isinstance(item, str):
                out.append(item)
            elif item.is_coeff:
                out.append(str(item.coeff))
            else:
                for i in range(len(item.monos) - 1, -1, -1):
                    mono = item.monos[i]
                    todo.append(f",{mono.exp})")
                    todo.append(mono.coeff)
                    todo.append("(" if i == 0 else "+(")
        return "".join(out)


@dataclass
class _SumFrame:
    terms: dict[int, Poly]
    clashes: list[tuple[int, Poly, Poly]]
    exp: int = 0


def _open_sum(left: Poly, right: Poly, frames: list[_SumFrame]) -> Poly | None:
    """Sum two coefficients directly, or push a frame for their shared exponents."""
    if left.is_coeff and right.is_coeff:
        return Poly.from_coeff(left.coeff + right.coeff)
    terms = left._as_terms()
    clashes: list[tuple[int, Poly, Poly]] = []
    for exp, coeff in right._as_terms().items():
        current = terms.get(exp)
        if current is None:
            terms[exp] = coeff
        else:
            clashes.append((exp, current, coeff))
    frames.append(_SumFrame(terms, clashes))
    return None


def _sum(left: Poly, right: Poly) -> Poly:
    # Terms sharing an exponent have their coefficients summed one level
    # down; pending levels live in ``frames`` rather than on the call stack.
    frames: list[_SumFrame] = []
    result = _open_sum(left, right, frames)
    while frames:
        frame = frames[-1]
        if result is not None:
            frame.terms[frame.exp] = result
            result = None
        if frame.clashes:
            frame.exp, a, b = frame.clashes.pop()
            result = _open_sum(a, b, frames)
        else:
            frames.pop()
            result = Poly._normalize(frame.terms)
    assert result is not None
    return result
