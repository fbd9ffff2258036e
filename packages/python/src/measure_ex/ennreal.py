"""
Extended Non-Negative Reals for measure-ex.

Every value a measure can take lives in [0, ∞].  Arithmetic on this
range differs from ordinary real arithmetic in a handful of places, and
all of them are handled here rather than at each call site:

    a + ∞ = ∞              saturating addition
    0 · ∞ = 0              measure-theoretic convention
    a − b                  truncated: max(a − b, 0), only for finite a
    Σ aᵢ                   supremum of the finite partial sums
    sup ∅ = 0, inf ∅ = ∞   empty-family conventions

Countable sums are taken over *eventually constant* series (a finite
prefix followed by a constant tail).  On such series the supremum of the
partial sums is exact:

    Σ aᵢ = a₀ + … + aₙ₋₁ + (∞ if tail > 0 else 0)

Values are kept in the numeric type they were given, so ``int`` and
``fractions.Fraction`` masses stay exact end to end.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction
from functools import total_ordering
from numbers import Real
from typing import Any, Iterable, Union

Number = Union[int, float, Fraction]


def _validate_value(value: Any) -> Number:
    """Validate a raw numeric value for ENNReal."""
    if isinstance(value, bool):
        raise TypeError("ENNReal value must be a number, got: bool")
    if not isinstance(value, Real):
        raise TypeError(
            f"ENNReal value must be a number, got: {type(value).__name__}"
        )
    if isinstance(value, float) and math.isnan(value):
        raise ValueError("ENNReal value must not be NaN")
    if value < 0:
        raise ValueError(f"ENNReal value must be in [0, ∞], got: {value}")
    if isinstance(value, float) and math.isinf(value):
        return math.inf
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


@total_ordering
@dataclass(frozen=True, eq=False)
class ENNReal:
    """A value in [0, ∞].

    Attributes:
        value: ``int``, ``Fraction`` or ``float``; ``math.inf`` for ∞.

    Compares and hashes equal to the plain number it wraps, so
    ``ENNReal(3) == 3`` holds.
    """

    value: Number

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _validate_value(self.value))

    # ── Construction ───────────────────────────────────────────────

    @classmethod
    def coerce(cls, other: Any) -> ENNReal:
        """Return *other* as an ENNReal (identity on ENNReal inputs)."""
        if isinstance(other, ENNReal):
            return other
        return cls(other)

    # ── Predicates ─────────────────────────────────────────────────

    @property
    def is_infinite(self) -> bool:
        return self.value == math.inf

    @property
    def is_finite(self) -> bool:
        return not self.is_infinite

    @property
    def is_zero(self) -> bool:
        return self.value == 0

    # ── Order ──────────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ENNReal):
            return self.value == other.value
        if isinstance(other, Real) and not isinstance(other, bool):
            return self.value == other
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, ENNReal):
            return self.value < other.value
        if isinstance(other, Real) and not isinstance(other, bool):
            return self.value < other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    # ── Arithmetic ─────────────────────────────────────────────────

    def __add__(self, other: Any) -> ENNReal:
        try:
            rhs = ENNReal.coerce(other)
        except TypeError:
            return NotImplemented
        if self.is_infinite or rhs.is_infinite:
            return INF
        return ENNReal(self.value + rhs.value)

    __radd__ = __add__

    def __mul__(self, other: Any) -> ENNReal:
        try:
            rhs = ENNReal.coerce(other)
        except TypeError:
            return NotImplemented
        # 0 · ∞ = 0
        if self.is_zero or rhs.is_zero:
            return ZERO
        if self.is_infinite or rhs.is_infinite:
            return INF
        return ENNReal(self.value * rhs.value)

    __rmul__ = __mul__

    def truncated_sub(self, other: Any) -> ENNReal:
        """Truncated subtraction ``max(self − other, 0)``.

        Only defined for a finite minuend: ∞ − b has no well-defined
        value once ∞ − ∞ must be excluded.

        Raises:
            ValueError: If ``self`` is ∞.
        """
        rhs = ENNReal.coerce(other)
        if self.is_infinite:
            raise ValueError(
                f"Truncated subtraction requires a finite minuend, got ∞ − {rhs}"
            )
        if rhs >= self:
            return ZERO
        return ENNReal(self.value - rhs.value)

    def __sub__(self, other: Any) -> ENNReal:
        try:
            rhs = ENNReal.coerce(other)
        except TypeError:
            return NotImplemented
        return self.truncated_sub(rhs)

    # ── Aggregates ─────────────────────────────────────────────────

    @staticmethod
    def supremum(values: Iterable[Any]) -> ENNReal:
        """Least upper bound; the supremum of an empty family is 0."""
        best = ZERO
        for v in values:
            v = ENNReal.coerce(v)
            if v > best:
                best = v
        return best

    @staticmethod
    def infimum(values: Iterable[Any]) -> ENNReal:
        """Greatest lower bound; the infimum of an empty family is ∞."""
        best = INF
        for v in values:
            v = ENNReal.coerce(v)
            if v < best:
                best = v
        return best

    @staticmethod
    def tsum(terms: Union[Series, Iterable[Any]]) -> ENNReal:
        """Countable sum as the supremum of finite partial sums.

        Accepts a :class:`Series` (exact over ℕ) or a finite iterable,
        which is treated as a series padded with zeros.
        """
        if not isinstance(terms, Series):
            terms = Series.of(terms)
        return terms.total()

    # ── Conversion / representation ────────────────────────────────

    def __float__(self) -> float:
        return float(self.value)

    def __repr__(self) -> str:
        if self.is_infinite:
            return "ENNReal(∞)"
        return f"ENNReal({self.value})"

    def __str__(self) -> str:
        return "∞" if self.is_infinite else str(self.value)


ZERO = ENNReal(0)
ONE = ENNReal(1)
INF = ENNReal(math.inf)


@dataclass(frozen=True)
class Series:
    """An eventually constant ℕ-indexed series of ENNReal terms.

    Terms ``0 … len(prefix) − 1`` come from ``prefix``; every later term
    equals ``tail``.  A finite family is a series with a zero tail.
    """

    prefix: tuple[ENNReal, ...] = ()
    tail: ENNReal = ZERO

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "prefix", tuple(ENNReal.coerce(t) for t in self.prefix)
        )
        object.__setattr__(self, "tail", ENNReal.coerce(self.tail))

    @classmethod
    def of(cls, terms: Iterable[Any], tail: Any = ZERO) -> Series:
        return cls(prefix=tuple(terms), tail=tail)

    def term(self, i: int) -> ENNReal:
        if i < 0:
            raise IndexError(f"Series index must be non-negative, got {i}")
        if i < len(self.prefix):
            return self.prefix[i]
        return self.tail

    def partial_sum(self, n: int) -> ENNReal:
        """Sum of the first *n* terms."""
        total = ZERO
        for i in range(n):
            total = total + self.term(i)
        return total

    def partial_sums(self, n: int) -> tuple[ENNReal, ...]:
        """The partial sums ``S₁ … Sₙ``."""
        sums = []
        total = ZERO
        for i in range(n):
            total = total + self.term(i)
            sums.append(total)
        return tuple(sums)

    def total(self) -> ENNReal:
        """The supremum of all partial sums."""
        head = self.partial_sum(len(self.prefix))
        if self.tail.is_zero:
            return head
        return INF

    def map(self, fn) -> Series:
        """Apply *fn* termwise (the tail is mapped once)."""
        return Series(
            prefix=tuple(fn(t) for t in self.prefix), tail=fn(self.tail)
        )

    def __add__(self, other: Series) -> Series:
        """Termwise sum of two series."""
        if not isinstance(other, Series):
            return NotImplemented
        n = max(len(self.prefix), len(other.prefix))
        return Series(
            prefix=tuple(self.term(i) + other.term(i) for i in range(n)),
            tail=self.tail + other.tail,
        )
