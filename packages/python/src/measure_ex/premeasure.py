"""
Pre-measures and their outer extension value.

A pre-measure is a [0, ∞]-valued function defined on the measurable sets
of a universe with

    value_of(∅) = 0
    value_of(⋃ sᵢ) = Σ value_of(sᵢ)     for pairwise-disjoint measurable sᵢ

The interface is deliberately narrow: one boolean query
(:meth:`PreMeasure.is_measurable`) and one value method
(:meth:`PreMeasure.value_of`) whose precondition is that query.  No
measurability evidence is stored or passed into the value computation,
so two independently built but structurally equal sets always receive
the same value.

:meth:`PreMeasure.measure_of` is the outer extension value: the infimum
of ``value_of(s)`` over all witnesses that *s* is measurable.  There is
exactly one witness for a measurable set and none otherwise, giving
``value_of(s)`` or ``inf ∅ = ∞``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Hashable, Iterator, Mapping, Optional

from measure_ex.ennreal import ENNReal, ZERO
from measure_ex.spaces import MeasurableUniverse


class PreMeasure(ABC):
    """Countably additive set function on a universe's measurable sets."""

    def __init__(self, universe: MeasurableUniverse) -> None:
        self._universe = universe

    @property
    def universe(self) -> MeasurableUniverse:
        return self._universe

    # ── Interface ──────────────────────────────────────────────────

    def is_measurable(self, s: Any) -> bool:
        """Whether :meth:`value_of` is defined at *s*."""
        return self._universe.is_measurable(s)

    @abstractmethod
    def _value(self, s: Hashable) -> ENNReal:
        """Value at a set already known to be measurable."""

    def value_of(self, s: Hashable) -> ENNReal:
        """The pre-measure of a measurable set.

        Raises:
            ValueError: If *s* is not measurable.
        """
        if not self.is_measurable(s):
            raise ValueError(f"{s!r} is not measurable in {self._universe!r}")
        return ENNReal.coerce(self._value(s))

    def landmarks(self) -> frozenset:
        """Points where this pre-measure places mass that the universe's
        default comparison sets may not reach.

        Extensional comparison on an infinite universe adds sets
        around these points.  A plain set function exposes none.
        """
        return frozenset()

    # ── Outer extension value ──────────────────────────────────────

    def _witnesses(self, s: Any) -> Iterator[bool]:
        """Measurability witnesses for *s*: one if measurable, none
        otherwise."""
        if self.is_measurable(s):
            yield True

    def measure_of(self, s: Any) -> ENNReal:
        """``inf { value_of(s) : s is measurable }``."""
        return ENNReal.infimum(
            ENNReal.coerce(self._value(s)) for _ in self._witnesses(s)
        )


class FunctionPreMeasure(PreMeasure):
    """A pre-measure given by a plain set function.

    Only the empty-set law is checked at construction; countable
    additivity can be checked with :func:`measure_ex.laws.check_premeasure`.
    """

    def __init__(
        self,
        universe: MeasurableUniverse,
        fn: Callable[[Hashable], Any],
        name: Optional[str] = None,
    ) -> None:
        super().__init__(universe)
        self._fn = fn
        self.name = name or getattr(fn, "__name__", "fn")
        at_empty = ENNReal.coerce(fn(universe.empty))
        if not at_empty.is_zero:
            raise ValueError(
                f"A pre-measure must vanish on ∅, got {self.name}(∅) = {at_empty}"
            )

    def _value(self, s: Hashable) -> ENNReal:
        return ENNReal.coerce(self._fn(s))

    def __repr__(self) -> str:
        return f"FunctionPreMeasure({self.name})"


def from_function(
    universe: MeasurableUniverse,
    fn: Callable[[Hashable], Any],
    name: Optional[str] = None,
) -> FunctionPreMeasure:
    """Wrap a set function as a pre-measure.

    Raises:
        ValueError: If ``fn(∅) ≠ 0``.
    """
    return FunctionPreMeasure(universe, fn, name=name)


def from_masses(
    universe: MeasurableUniverse, masses: Mapping[Hashable, Any],
) -> FunctionPreMeasure:
    """Pre-measure ``s ↦ Σ_{p∈s} masses[p]`` on a finite universe.

    Points missing from *masses* carry mass 0.
    """
    if not universe.is_finite:
        raise ValueError("from_masses() requires a finite universe")
    weights = {p: ENNReal.coerce(m) for p, m in masses.items()}

    def total_mass(s: Hashable) -> ENNReal:
        return ENNReal.tsum(
            weights.get(p, ZERO)
            for p in universe.points_before()
            if universe.contains(s, p)
        )

    return FunctionPreMeasure(universe, total_mass, name="masses")
