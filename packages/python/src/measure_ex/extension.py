"""
Outer Extension — derived facts about ``measure_of``.

Every fact here is obtained from the two pre-measure laws alone, in the
order a proof would derive them:

  1. Finite additivity — pad a finite disjoint family with ∅ to a
     countable one; countable additivity then collapses to the finitely
     many non-empty terms.
  2. Monotonicity — for ``a ⊆ b``: ``μ(b) = μ(a) + μ(b \\ a) ≥ μ(a)``.
  3. Countable subadditivity — disjointify, apply additivity to the
     disjoint family, bound each disjointified term by the original term
     through monotonicity and sum the bounds.

The functions compute both sides of each fact and return them, so the
fact can be inspected (and is checked by the test suite) for concrete
pre-measures.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Hashable, Mapping

from measure_ex.disjoint import disjointify
from measure_ex.ennreal import ENNReal
from measure_ex.premeasure import PreMeasure
from measure_ex.reindex import reindex
from measure_ex.sequences import EventuallyConstant, SetSequence


def _require_measurable(pre: PreMeasure, s: Hashable, what: str = "Set") -> None:
    if not pre.is_measurable(s):
        raise ValueError(f"{what} {s!r} is not measurable")


def _require_pairwise_disjoint(pre: PreMeasure, sets) -> None:
    u = pre.universe
    for a, b in combinations(sets, 2):
        if not u.is_disjoint(a, b):
            raise ValueError(f"Sets {a!r} and {b!r} are not disjoint")


# ═══════════════════════════════════════════════════════════════════
# FINITE ADDITIVITY
# ═══════════════════════════════════════════════════════════════════


def additive_union(pre: PreMeasure, *sets: Hashable) -> ENNReal:
    """``Σ μ(sᵢ)`` for pairwise-disjoint measurable sets, computed as the
    countable sum of the ∅-padded family.

    By countable additivity this equals ``μ(s₁ ∪ … ∪ sₙ)``.

    Raises:
        ValueError: If a set is not measurable or two sets intersect.
    """
    for s in sets:
        _require_measurable(pre, s)
    _require_pairwise_disjoint(pre, sets)
    family = EventuallyConstant.padded(sets, pre.universe.empty)
    return ENNReal.tsum(family.series(pre.measure_of))


def additive_over(pre: PreMeasure, family: Mapping[Hashable, Hashable]) -> ENNReal:
    """``Σ_{i∈I} μ(family[i])`` for a disjoint family over any countable
    index, by reindexing into ℕ with ∅ fill-in."""
    for s in family.values():
        _require_measurable(pre, s)
    _require_pairwise_disjoint(pre, list(family.values()))
    sequence, _ = reindex(pre.universe, family)
    return ENNReal.tsum(sequence.series(pre.measure_of))


# ═══════════════════════════════════════════════════════════════════
# MONOTONICITY
# ═══════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class MonotoneSplit:
    """``μ(b) = μ(a) + μ(b \\ a)`` for ``a ⊆ b``.

    Attributes:
        lower:     μ(a).
        remainder: μ(b \\ a).
        total:     μ(b), evaluated directly.
    """

    lower: ENNReal
    remainder: ENNReal
    total: ENNReal

    @property
    def additive(self) -> bool:
        return self.total == self.lower + self.remainder

    @property
    def holds(self) -> bool:
        return self.additive and self.lower <= self.total


def split_at(pre: PreMeasure, a: Hashable, b: Hashable) -> MonotoneSplit:
    """Split ``μ(b)`` along a measurable subset *a*.

    Raises:
        ValueError: If either set is not measurable or ``a ⊄ b``.
    """
    _require_measurable(pre, a)
    _require_measurable(pre, b)
    u = pre.universe
    if not u.is_subset(a, b):
        raise ValueError(f"{a!r} is not a subset of {b!r}")
    rest = u.difference(b, a)
    return MonotoneSplit(
        lower=pre.measure_of(a),
        remainder=pre.measure_of(rest),
        total=pre.measure_of(b),
    )


# ═══════════════════════════════════════════════════════════════════
# COUNTABLE SUBADDITIVITY
# ═══════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class SubadditivityReport:
    """``μ(⋃ sᵢ) = Σ μ(dᵢ) ≤ Σ μ(sᵢ)`` for the disjointification ``d``."""

    union_measure: ENNReal
    disjoint_sum: ENNReal
    bound: ENNReal

    @property
    def holds(self) -> bool:
        return self.union_measure == self.disjoint_sum <= self.bound


def subadditive_bound(pre: PreMeasure, sequence: SetSequence) -> SubadditivityReport:
    """Countable subadditivity over an eventually constant sequence.

    Raises:
        ValueError: If a term is not measurable, the sequence is not
            eventually constant, or the derivation fails on it (which
            means *pre* is not additive or not monotone).
    """
    u = pre.universe
    n = sequence.stable_from
    if n is None:
        raise ValueError("subadditive_bound() needs an eventually constant sequence")
    for i in range(n + 1):
        _require_measurable(pre, sequence.term(i), what=f"Term {i}")

    pieces = disjointify(u, sequence)
    for i in range(n + 2):
        split = split_at(pre, pieces.term(i), sequence.term(i))
        if not split.holds:
            raise ValueError(
                f"Term {i} splits as {split.lower} + {split.remainder} but "
                f"measures {split.total}; the pre-measure is not additive "
                f"or not monotone"
            )

    report = SubadditivityReport(
        union_measure=pre.measure_of(u.countable_union(sequence)),
        disjoint_sum=ENNReal.tsum(pieces.series(pre.measure_of)),
        bound=ENNReal.tsum(sequence.series(pre.measure_of)),
    )
    if not report.holds:
        raise ValueError(
            f"Countable subadditivity fails: μ(⋃ sᵢ) = {report.union_measure}, "
            f"Σ μ(dᵢ) = {report.disjoint_sum}, Σ μ(sᵢ) = {report.bound}; "
            f"the pre-measure is not additive"
        )
    return report
