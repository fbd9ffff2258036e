"""
Algebra of Measures.

Every constructor builds a fresh pre-measure by structural composition
and returns its completion as a :class:`Measure`.  The pre-measure laws
carry over without side conditions because all values are in [0, ∞]:

    zero(U)              value ≡ 0
    add(a, b, …)         value = a + b + …   (sums of non-negative series
                                              can be rearranged freely)
    indexed_sum(F, I)    value = Σ_{i∈I} F(i), a supremum of finite
                                              partial sums for any index
    map_measure(f, μ)    value = μ(f⁻¹(s)) for measurable f, else 0
    dirac(U, p)          value = sup over the witnesses of p ∈ s of 1
    counting(U)          indexed_sum of dirac(p) over every point

Laws (checked in the test suite):
    - add is commutative and associative with zero as identity
    - ≤ is a partial order and a ≤ b ⇒ a + c ≤ b + c
    - map_measure(id, μ) = μ
    - map_measure(g ∘ f, μ) = map_measure(g, map_measure(f, μ))
      for measurable f and g
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Hashable, Mapping, Optional, Union

from measure_ex._constants import PROBE_BOUND
from measure_ex.ennreal import ENNReal, ONE, ZERO
from measure_ex.measure import Measure
from measure_ex.premeasure import PreMeasure
from measure_ex.reindex import FiniteIndex, IndexSet, PointIndex
from measure_ex.spaces import MeasurableMap, MeasurableUniverse

LOGGER = logging.getLogger(__name__)


def _require_measure(value: object, name: str) -> None:
    """Raise TypeError if *value* is not a Measure."""
    if not isinstance(value, Measure):
        raise TypeError(f"{name} must be a Measure, got: {type(value).__name__}")


# ═══════════════════════════════════════════════════════════════════
# PRE-MEASURES
# ═══════════════════════════════════════════════════════════════════


class ZeroPreMeasure(PreMeasure):
    def _value(self, s: Hashable) -> ENNReal:
        return ZERO

    def __repr__(self) -> str:
        return "Zero"


class SumPreMeasure(PreMeasure):
    """Pointwise sum of finitely many pre-measures."""

    def __init__(self, universe: MeasurableUniverse, terms: tuple[PreMeasure, ...]) -> None:
        super().__init__(universe)
        self.terms = terms

    def _value(self, s: Hashable) -> ENNReal:
        total = ZERO
        for term in self.terms:
            total = total + term.value_of(s)
        return total

    def landmarks(self) -> frozenset:
        return frozenset().union(*(t.landmarks() for t in self.terms))

    def __repr__(self) -> str:
        return " + ".join(repr(t) for t in self.terms)


class IndexedSumPreMeasure(PreMeasure):
    """``Σ_{i∈I} family(i)``, summed as the supremum of finite partial
    sums of the ℕ-reindexed series."""

    def __init__(
        self,
        universe: MeasurableUniverse,
        family: Callable[[Any], PreMeasure],
        index: IndexSet,
    ) -> None:
        super().__init__(universe)
        self.family = family
        self.index = index

    def _value(self, s: Hashable) -> ENNReal:
        return ENNReal.tsum(
            self.index.series(lambda i: self.family(i).value_of(s), s)
        )

    def landmarks(self) -> frozenset:
        return frozenset().union(
            *(self.family(i).landmarks() for i in self.index.representatives())
        )

    def __repr__(self) -> str:
        return f"Σ_{{{self.index!r}}}"


class PushforwardPreMeasure(PreMeasure):
    """``s ↦ base(f⁻¹(s))`` on the target universe of a measurable *f*."""

    def __init__(self, f: MeasurableMap, base: PreMeasure) -> None:
        super().__init__(f.target)
        self.f = f
        self.base = base

    def _value(self, s: Hashable) -> ENNReal:
        return self.base.value_of(self.f.preimage(s))

    def landmarks(self) -> frozenset:
        # Images of the base's landmarks and of the source points that
        # the default comparison sets reach.
        source = self.f.source
        if source.is_finite:
            points = set(source.points_before())
        else:
            points = set(source.points_before(PROBE_BOUND + 1))
        points |= self.base.landmarks()
        return frozenset(self.f(p) for p in points)

    def __repr__(self) -> str:
        return f"map({self.f.name}, {self.base!r})"


class DiracPreMeasure(PreMeasure):
    """Unit mass at a point."""

    def __init__(self, universe: MeasurableUniverse, point: Any) -> None:
        super().__init__(universe)
        self.point = point

    def _value(self, s: Hashable) -> ENNReal:
        # At most one witness of membership; sup ∅ = 0.
        witnesses = (ONE for _ in range(1) if self.universe.contains(s, self.point))
        return ENNReal.supremum(witnesses)

    def landmarks(self) -> frozenset:
        return frozenset((self.point,))

    def __repr__(self) -> str:
        return f"δ({self.point!r})"


# ═══════════════════════════════════════════════════════════════════
# CONSTRUCTORS
# ═══════════════════════════════════════════════════════════════════


def zero(universe: MeasurableUniverse) -> Measure:
    """The measure that is 0 on every set."""
    return Measure(ZeroPreMeasure(universe))


def add(*measures: Measure) -> Measure:
    """Pointwise sum ``a + b + …``.

    Raises:
        ValueError: If no measure is given or the measures live on
            different universes.
    """
    if not measures:
        raise ValueError("add() requires at least one measure")
    for i, mu in enumerate(measures):
        _require_measure(mu, f"measures[{i}]")
    universe = measures[0].universe
    for mu in measures[1:]:
        if mu.universe != universe:
            raise ValueError("Cannot add measures on different universes")
    if len(measures) == 1:
        return measures[0]
    return Measure(SumPreMeasure(universe, tuple(m.premeasure for m in measures)))


def indexed_sum(
    family: Union[Mapping[Hashable, Measure], Callable[[Any], Measure]],
    index: Optional[IndexSet] = None,
    universe: Optional[MeasurableUniverse] = None,
) -> Measure:
    """``Σ_{i∈I} family(i)`` over an index set of any size.

    Args:
        family:   A mapping ``index → Measure`` (its keys are the index
                  set) or a callable together with *index*.
        index:    Required when *family* is a callable: a
                  :class:`NaturalIndex`, :class:`PointIndex` or
                  :class:`FiniteIndex`.
        universe: Required when the index is empty.

    Raises:
        ValueError: If the index is missing or the universe cannot be
            determined.
    """
    if isinstance(family, Mapping):
        members = dict(family)
        if index is None:
            index = FiniteIndex(members)
        lookup = members.__getitem__
        if universe is None and members:
            first = next(iter(members.values()))
            _require_measure(first, "family member")
            universe = first.universe
    else:
        if index is None:
            raise ValueError("indexed_sum() needs an index for a callable family")
        lookup = family
        if universe is None and isinstance(index, PointIndex):
            universe = index.universe
    if universe is None:
        raise ValueError("indexed_sum() cannot infer the universe; pass universe=")

    def member(i: Any) -> PreMeasure:
        mu = lookup(i)
        _require_measure(mu, f"family[{i!r}]")
        return mu.premeasure

    return Measure(IndexedSumPreMeasure(universe, member, index))


def map_measure(f: MeasurableMap, mu: Measure) -> Measure:
    """Pushforward of *mu* along *f*: ``s ↦ mu(f⁻¹(s))``.

    A non-measurable *f* gives the zero measure on the target.

    Raises:
        ValueError: If *mu* does not live on the source of *f*.
    """
    _require_measure(mu, "mu")
    if mu.universe != f.source:
        raise ValueError(f"{mu!r} does not live on the source of {f!r}")
    if not f.is_measurable():
        LOGGER.debug("%r is not measurable; pushforward is the zero measure", f)
        return zero(f.target)
    return Measure(PushforwardPreMeasure(f, mu.premeasure))


def dirac(universe: MeasurableUniverse, point: Any) -> Measure:
    """Unit point mass at *point*."""
    return Measure(DiracPreMeasure(universe, point))


def counting(universe: MeasurableUniverse) -> Measure:
    """Counting measure: the sum of the point masses at every point.

    Gives the number of points of a finite set and ∞ for an infinite one.
    """
    return indexed_sum(lambda p: dirac(universe, p), PointIndex(universe))
