"""Tests for pre-measures and the facts derived for their outer
extension value: evidence irrelevance, finite additivity by padding,
monotonicity and countable subadditivity."""

from fractions import Fraction

import pytest

from measure_ex.ennreal import INF, ZERO
from measure_ex.extension import (
    additive_over,
    additive_union,
    split_at,
    subadditive_bound,
)
from measure_ex.naturals import IntervalProgression, IntervalSet, Naturals
from measure_ex.premeasure import from_function, from_masses
from measure_ex.sequences import EventuallyConstant
from measure_ex.spaces import FiniteUniverse


@pytest.fixture
def coarse():
    return FiniteUniverse("abcd", generators=[{"a", "b"}])


@pytest.fixture
def weighted():
    u = FiniteUniverse(range(5))
    return from_masses(u, {0: 1, 1: 2, 2: Fraction(1, 2), 3: 0, 4: 4})


class TestPreMeasureInterface:

    def test_value_of_measurable_set(self, weighted):
        assert weighted.value_of(frozenset({0, 1})) == 3

    def test_value_of_empty(self, weighted):
        assert weighted.value_of(frozenset()) == ZERO

    def test_value_of_non_measurable_rejected(self, coarse):
        pre = from_function(coarse, len)
        with pytest.raises(ValueError, match="not measurable"):
            pre.value_of(frozenset("a"))

    def test_is_measurable_delegates_to_universe(self, coarse):
        pre = from_function(coarse, len)
        assert pre.is_measurable(frozenset("ab"))
        assert not pre.is_measurable(frozenset("a"))

    def test_nonzero_at_empty_rejected(self, coarse):
        with pytest.raises(ValueError, match="must vanish on ∅"):
            from_function(coarse, lambda s: len(s) + 1)

    def test_name_from_function(self, coarse):
        assert from_function(coarse, len).name == "len"
        assert "len" in repr(from_function(coarse, len))

    def test_from_masses_requires_finite_universe(self):
        with pytest.raises(ValueError, match="finite universe"):
            from_masses(Naturals(), {0: 1})


class TestMeasureOf:
    """measure_of = inf over measurability witnesses."""

    def test_agrees_on_measurable_sets(self, coarse):
        pre = from_function(coarse, len)
        for s in coarse.measurable_sets():
            assert pre.measure_of(s) == pre.value_of(s)

    def test_infinite_without_witness(self, coarse):
        pre = from_function(coarse, len)
        assert pre.measure_of(frozenset("a")) == INF

    def test_empty_is_zero(self, coarse):
        assert from_function(coarse, len).measure_of(frozenset()) == ZERO

    def test_evidence_irrelevance(self):
        """Structurally equal sets built independently get equal values."""
        nat = Naturals()
        pre = from_function(
            nat, lambda s: s.cardinality() if s.is_bounded else INF
        )
        built_once = IntervalSet.of(1, 2, 3)
        built_twice = nat.union(IntervalSet.range(1, 2), IntervalSet.range(2, 4))
        assert built_once is not built_twice
        assert pre.measure_of(built_once) == pre.measure_of(built_twice) == 3

    def test_recomputation_is_stable(self, weighted):
        s = frozenset({1, 2})
        assert weighted.measure_of(s) == weighted.measure_of(frozenset([2, 1]))


class TestFiniteAdditivity:

    def test_pair(self, weighted):
        a, b = frozenset({0}), frozenset({1, 4})
        assert additive_union(weighted, a, b) == weighted.value_of(a | b) == 7

    def test_single_set(self, weighted):
        assert additive_union(weighted, frozenset({4})) == 4

    def test_no_sets(self, weighted):
        assert additive_union(weighted) == ZERO

    def test_overlap_rejected(self, weighted):
        with pytest.raises(ValueError, match="not disjoint"):
            additive_union(weighted, frozenset({0, 1}), frozenset({1}))

    def test_non_measurable_rejected(self, coarse):
        pre = from_function(coarse, len)
        with pytest.raises(ValueError, match="not measurable"):
            additive_union(pre, frozenset("a"), frozenset("c"))

    def test_arbitrary_index(self, weighted):
        family = {"left": frozenset({0}), ("right", 1): frozenset({2, 3})}
        assert additive_over(weighted, family) == Fraction(3, 2)


class TestMonotonicity:

    def test_split(self, weighted):
        split = split_at(weighted, frozenset({0}), frozenset({0, 1, 4}))
        assert split.lower == 1
        assert split.remainder == 6
        assert split.total == 7
        assert split.holds

    def test_split_requires_subset(self, weighted):
        with pytest.raises(ValueError, match="not a subset"):
            split_at(weighted, frozenset({0, 1}), frozenset({1}))

    def test_split_of_non_monotone_function(self):
        pre = from_function(
            FiniteUniverse([1, 2]), lambda s: 1 if s == frozenset({1}) else 0,
        )
        split = split_at(pre, frozenset({1}), frozenset({1, 2}))
        assert split.lower == 1
        assert split.total == 0
        assert not split.additive
        assert not split.holds


class TestSubadditivity:

    def test_overlapping_family(self, weighted):
        seq = EventuallyConstant.padded(
            [frozenset({0, 1}), frozenset({1, 2}), frozenset({0, 4})],
            frozenset(),
        )
        report = subadditive_bound(weighted, seq)
        assert report.union_measure == Fraction(15, 2)
        assert report.disjoint_sum == report.union_measure
        assert report.bound == 3 + Fraction(5, 2) + 5
        assert report.holds

    def test_positive_tail_gives_infinite_bound(self, weighted):
        seq = EventuallyConstant(prefix=(frozenset({0}),), tail=frozenset({1}))
        report = subadditive_bound(weighted, seq)
        assert report.union_measure == 3
        assert report.bound == INF
        assert report.holds

    def test_requires_eventually_constant_sequence(self):
        nat = Naturals()
        pre = from_function(nat, lambda s: 0)
        with pytest.raises(ValueError, match="eventually constant"):
            subadditive_bound(pre, IntervalProgression(0, 1, stop_step=1))

    def test_non_monotone_function_rejected(self):
        pre = from_function(
            FiniteUniverse([1, 2]), lambda s: 1 if s == frozenset({1}) else 0,
        )
        seq = EventuallyConstant.padded(
            [frozenset({1}), frozenset({1, 2})], frozenset(),
        )
        with pytest.raises(ValueError, match="not additive"):
            subadditive_bound(pre, seq)
