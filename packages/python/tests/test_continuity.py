"""Tests for continuity of measures along monotone sequences."""

from fractions import Fraction

import pytest

from measure_ex.algebra import counting, dirac
from measure_ex.continuity import (
    ContinuityReport,
    decreasing_intersection,
    increasing_union,
    limit_of,
)
from measure_ex.ennreal import INF, ZERO
from measure_ex.measure import Measure
from measure_ex.naturals import IntervalProgression, IntervalSet, Naturals
from measure_ex.premeasure import from_function, from_masses
from measure_ex.sequences import EventuallyConstant
from measure_ex.spaces import FiniteUniverse

R = IntervalSet.range


@pytest.fixture
def nat():
    return Naturals()


@pytest.fixture
def mu(nat):
    return counting(nat)


# ═══════════════════════════════════════════════════════════════════
# Increasing union
# ═══════════════════════════════════════════════════════════════════


class TestIncreasingUnion:

    def test_initial_segments_reach_infinity(self, mu):
        """sᵢ = {0, …, i} ⇒ μ(⋃ sᵢ) = ∞ = supᵢ (i + 1)."""
        report = increasing_union(mu, IntervalProgression(0, 1, stop_step=1))
        assert isinstance(report, ContinuityReport)
        assert report.limit == INF
        assert report.approximants == tuple(range(1, 9))
        assert report.partial_sums == report.approximants

    def test_depth_controls_inspection(self, mu):
        report = increasing_union(mu, IntervalProgression(0, 1, stop_step=1), depth=3)
        assert report.approximants == (1, 2, 3)

    def test_stabilizing_sequence(self, nat, mu):
        seq = EventuallyConstant.stationary([R(0, 1), R(0, 3), R(0, 4)])
        report = increasing_union(mu, seq)
        assert report.limit == 4
        assert report.supremum == report.limit

    def test_finite_universe(self):
        u = FiniteUniverse(range(5))
        m = Measure(from_masses(u, {0: 1, 2: Fraction(1, 3), 4: 2}))
        seq = EventuallyConstant.stationary(
            [frozenset({0}), frozenset({0, 1, 2}), frozenset(range(5))]
        )
        report = increasing_union(m, seq)
        assert report.limit == Fraction(10, 3)
        assert report.approximants[:3] == (1, Fraction(4, 3), Fraction(10, 3))

    def test_finite_measure_bounded_growth(self, nat):
        m = dirac(nat, 4) + dirac(nat, 9)
        report = increasing_union(m, IntervalProgression(0, 1, stop_step=2))
        assert report.limit == 2
        assert report.supremum == 2

    def test_shrinking_sequence_rejected(self, mu):
        with pytest.raises(ValueError, match="not non-decreasing"):
            increasing_union(mu, IntervalProgression(0, 6, start_step=1))

    def test_non_measurable_term_rejected(self):
        u = FiniteUniverse("abcd", generators=[{"a", "b"}])
        m = counting(u)
        seq = EventuallyConstant.stationary([frozenset("a"), frozenset("ab")])
        with pytest.raises(ValueError, match="not measurable"):
            increasing_union(m, seq)

    def test_non_additive_function_detected(self):
        u = FiniteUniverse(range(3))
        # Not additive: the value of a set ignores its size beyond 1.
        m = Measure(from_function(u, lambda s: min(len(s), 1)))
        seq = EventuallyConstant.stationary([frozenset({0}), frozenset({0, 1})])
        with pytest.raises(ValueError, match="not additive"):
            increasing_union(m, seq)

    def test_depth_must_be_positive(self, mu):
        with pytest.raises(ValueError, match="at least 1"):
            increasing_union(mu, EventuallyConstant.stationary([R(0, 2), R(0, 3)]), depth=0)


# ═══════════════════════════════════════════════════════════════════
# Decreasing intersection
# ═══════════════════════════════════════════════════════════════════


class TestDecreasingIntersection:

    def test_tails_of_bounded_segment(self, mu):
        """sᵢ = {i, i+1, …} ∩ [0, 5] ⇒ μ(⋂ sᵢ) = 0 = infᵢ μ(sᵢ)."""
        report = decreasing_intersection(mu, IntervalProgression(0, 6, start_step=1))
        assert report.limit == ZERO
        assert report.approximants[:7] == (6, 5, 4, 3, 2, 1, 0)
        assert report.infimum == report.limit

    def test_infinite_base_rejected(self, mu):
        """sᵢ = {i, i+1, …} has μ(s₀) = ∞."""
        with pytest.raises(ValueError, match="requires μ\\(s₀\\) < ∞"):
            decreasing_intersection(mu, IntervalProgression(0, None, start_step=1))

    def test_infinite_base_logged(self, mu, caplog):
        with caplog.at_level("DEBUG", logger="measure_ex.continuity"):
            with pytest.raises(ValueError):
                decreasing_intersection(mu, IntervalProgression(0, None, start_step=1))
        assert "μ(s₀) = ∞" in caplog.text

    def test_nonempty_limit(self, nat, mu):
        seq = EventuallyConstant.stationary([R(0, 10), R(2, 10), R(2, 5)])
        report = decreasing_intersection(mu, seq)
        assert report.limit == 3
        assert report.limit == mu.measure(seq.intersection(nat))

    def test_growing_sequence_rejected(self, mu):
        with pytest.raises(ValueError, match="not non-increasing"):
            decreasing_intersection(mu, EventuallyConstant.stationary([R(0, 2), R(0, 3)]))

    def test_finite_measure_on_infinite_sets(self, nat):
        """μ(s₀) can be finite even though s₀ is infinite."""
        m = dirac(nat, 0) + dirac(nat, 7)
        report = decreasing_intersection(m, IntervalProgression(0, None, start_step=1))
        assert report.limit == ZERO
        assert report.approximants[:2] == (2, 1)

    def test_depth_must_be_positive(self, nat):
        m = dirac(nat, 3)
        with pytest.raises(ValueError, match="at least 1"):
            decreasing_intersection(m, IntervalProgression(0, None, start_step=1), depth=0)


class TestLimitOf:

    def test_detects_increasing(self, mu):
        assert limit_of(mu, IntervalProgression(0, 1, stop_step=1)) == INF

    def test_detects_decreasing(self, mu):
        assert limit_of(mu, IntervalProgression(0, 6, start_step=1)) == ZERO

    def test_explicit_direction(self, mu):
        seq = IntervalProgression(1, 3)
        assert limit_of(mu, seq, decreasing=True) == 2
        assert limit_of(mu, seq, decreasing=False) == 2
