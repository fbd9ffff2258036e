"""
Outer Measures from Set Functions.

``OuterMeasure.of_function(universe, m)`` turns any [0, ∞]-valued set
function with ``m(∅) = 0`` into a total set function on every subset:

    μ*(s) = inf { Σᵢ m(tᵢ) : (tᵢ) a countable measurable cover of s }

The infimum runs over the candidate covers the universe proposes
(:meth:`MeasurableUniverse.covers`); a set with no cover gets ``inf ∅ =
∞``.  The result is monotone and countably subadditive.

:meth:`OuterMeasure.is_caratheodory` is the completeness predicate: *s*
splits every test set additively,

    μ*(t) = μ*(t ∩ s) + μ*(t \\ s).
"""

from __future__ import annotations

from typing import Any, Callable, Hashable, Iterable, Optional

from measure_ex.ennreal import ENNReal
from measure_ex.spaces import MeasurableUniverse


class OuterMeasure:
    """Total, monotone, countably subadditive set function."""

    def __init__(
        self, universe: MeasurableUniverse, m: Callable[[Hashable], Any],
    ) -> None:
        self._universe = universe
        self._m = m

    @classmethod
    def of_function(
        cls, universe: MeasurableUniverse, m: Callable[[Hashable], Any],
    ) -> OuterMeasure:
        """Build the outer measure induced by *m*.

        Raises:
            ValueError: If ``m(∅) ≠ 0``.
        """
        at_empty = ENNReal.coerce(m(universe.empty))
        if not at_empty.is_zero:
            raise ValueError(
                f"Outer measure source must vanish on ∅, got m(∅) = {at_empty}"
            )
        return cls(universe, m)

    @property
    def universe(self) -> MeasurableUniverse:
        return self._universe

    def __call__(self, s: Hashable) -> ENNReal:
        if self._universe.is_empty(s):
            return ENNReal.coerce(self._m(s))
        return ENNReal.infimum(
            ENNReal.tsum(self._m(t) for t in cover)
            for cover in self._universe.covers(s)
        )

    def is_caratheodory(
        self, s: Hashable, tests: Optional[Iterable[Hashable]] = None,
    ) -> bool:
        """Whether *s* splits every test set additively.

        Args:
            s:     The candidate set.
            tests: Test sets; defaults to the universe's test sets.
        """
        u = self._universe
        if tests is None:
            tests = u.test_sets()
        for t in tests:
            whole = self(t)
            parts = self(u.intersection(t, s)) + self(u.difference(t, s))
            if whole != parts:
                return False
        return True

    def __repr__(self) -> str:
        return f"OuterMeasure({self._universe!r})"
