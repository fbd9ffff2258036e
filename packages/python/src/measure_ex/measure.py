"""
Completed Measures.

A :class:`Measure` pairs a pre-measure with the outer measure obtained
by feeding its outer extension value ``measure_of`` to
:meth:`OuterMeasure.of_function`.  The outer extension already vanishes
on ∅, which is the only requirement of the primitive, and the result

  - is defined on every subset (:meth:`Measure.measure`);
  - agrees exactly with the pre-measure on measurable sets;
  - is monotone and countably subadditive everywhere.

Measures are immutable values.  Two measures are equal when their
pre-measures agree on every measurable set the universe enumerates
(``probe_sets``), widened around the landmark points the two
pre-measures expose, and ``a <= b`` is the same pointwise comparison.
"""

from __future__ import annotations

from typing import Any, Hashable

from measure_ex.ennreal import ENNReal
from measure_ex.outer import OuterMeasure
from measure_ex.premeasure import PreMeasure
from measure_ex.spaces import MeasurableUniverse


class Measure:
    """A pre-measure together with its completion."""

    __slots__ = ("_premeasure", "_outer")

    def __init__(self, premeasure: PreMeasure) -> None:
        if not isinstance(premeasure, PreMeasure):
            raise TypeError(
                f"Measure requires a PreMeasure, got: {type(premeasure).__name__}"
            )
        self._premeasure = premeasure
        self._outer = OuterMeasure.of_function(
            premeasure.universe, premeasure.measure_of
        )

    # ── Accessors ──────────────────────────────────────────────────

    @property
    def premeasure(self) -> PreMeasure:
        return self._premeasure

    @property
    def outer(self) -> OuterMeasure:
        return self._outer

    @property
    def universe(self) -> MeasurableUniverse:
        return self._premeasure.universe

    # ── Queries ────────────────────────────────────────────────────

    def is_measurable(self, s: Any) -> bool:
        return self._premeasure.is_measurable(s)

    def value_of(self, s: Hashable) -> ENNReal:
        """Pre-measure value; *s* must be measurable."""
        return self._premeasure.value_of(s)

    def measure_of(self, s: Any) -> ENNReal:
        """Outer extension value (∞ off the measurable sets)."""
        return self._premeasure.measure_of(s)

    def measure(self, s: Any) -> ENNReal:
        """The completed measure of an arbitrary subset."""
        return self._outer(s)

    __call__ = measure

    def is_caratheodory(self, s: Hashable, tests=None) -> bool:
        return self._outer.is_caratheodory(s, tests)

    # ── Algebra ────────────────────────────────────────────────────

    def __add__(self, other: Any) -> Measure:
        if not isinstance(other, Measure):
            return NotImplemented
        from measure_ex.algebra import add
        return add(self, other)

    def __radd__(self, other: Any) -> Measure:
        # Lets the builtin sum() start from 0.
        if isinstance(other, int) and not isinstance(other, bool) and other == 0:
            return self
        return NotImplemented

    def _require_same_universe(self, other: Measure) -> None:
        if self.universe != other.universe:
            raise ValueError("Measures live on different universes")

    def _comparison_sets(self, other: Measure) -> list:
        landmarks = self._premeasure.landmarks() | other._premeasure.landmarks()
        return list(self.universe.probe_sets(landmarks))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Measure):
            return NotImplemented
        if self.universe != other.universe:
            return False
        return all(
            self.value_of(s) == other.value_of(s) for s in self._comparison_sets(other)
        )

    def __le__(self, other: Measure) -> bool:
        if not isinstance(other, Measure):
            return NotImplemented
        self._require_same_universe(other)
        return all(
            self.value_of(s) <= other.value_of(s) for s in self._comparison_sets(other)
        )

    def __ge__(self, other: Measure) -> bool:
        if not isinstance(other, Measure):
            return NotImplemented
        return other.__le__(self)

    def __lt__(self, other: Measure) -> bool:
        if not isinstance(other, Measure):
            return NotImplemented
        return self <= other and self != other

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Measure({self._premeasure!r})"
