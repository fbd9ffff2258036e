"""Tests for disjointification and for reindexing countable families
into ℕ."""

import pytest

from measure_ex.disjoint import DisjointSequence, disjointed, disjointify
from measure_ex.ennreal import INF, ZERO, Series
from measure_ex.naturals import IntervalProgression, IntervalSet, Naturals
from measure_ex.reindex import (
    FiniteIndex,
    NaturalIndex,
    PointIndex,
    enumerate_index,
    reindex,
    union_over,
)
from measure_ex.sequences import EventuallyConstant, RelativeComplements
from measure_ex.spaces import FiniteUniverse

R = IntervalSet.range


@pytest.fixture
def u():
    return FiniteUniverse(range(6))


@pytest.fixture
def nat():
    return Naturals()


# ═══════════════════════════════════════════════════════════════════
# Sequences
# ═══════════════════════════════════════════════════════════════════


class TestEventuallyConstant:

    def test_padded(self, u):
        seq = EventuallyConstant.padded([frozenset({1}), frozenset({2})], u.empty)
        assert seq.head(4) == (frozenset({1}), frozenset({2}), frozenset(), frozenset())
        assert seq.stable_from == 2
        assert seq.union(u) == frozenset({1, 2})

    def test_stationary(self, u):
        seq = EventuallyConstant.stationary([frozenset({1, 2}), frozenset({2})])
        assert seq[5] == frozenset({2})
        assert seq.intersection(u) == frozenset({2})

    def test_stationary_requires_a_set(self):
        with pytest.raises(ValueError, match="at least one"):
            EventuallyConstant.stationary([])

    def test_negative_index(self, u):
        seq = EventuallyConstant.padded([], u.empty)
        with pytest.raises(IndexError):
            seq[-1]

    def test_value_series(self, u):
        seq = EventuallyConstant.stationary([frozenset({1}), frozenset({1, 2})])
        series = seq.series(len)
        assert series.prefix == (1,)
        assert series.tail == 2
        assert series.total() == INF

    def test_non_constant_sequence_has_no_series(self):
        with pytest.raises(ValueError, match="not eventually constant"):
            IntervalProgression(0, 1, stop_step=1).series(lambda s: ZERO)


class TestRelativeComplements:

    def test_reverses_monotonicity(self, nat):
        seq = RelativeComplements(nat, R(0, 6), IntervalProgression(0, 6, start_step=1))
        assert seq.head(3) == (IntervalSet(), R(0, 1), R(0, 2))
        assert seq.union(nat) == R(0, 6)
        assert seq.intersection(nat) == IntervalSet()
        assert seq.stable_from == 6


# ═══════════════════════════════════════════════════════════════════
# Disjointification
# ═══════════════════════════════════════════════════════════════════


class TestDisjointed:

    def test_finite_family(self, u):
        sets = [frozenset({0, 1}), frozenset({1, 2}), frozenset({2, 3})]
        assert disjointed(u, sets) == [frozenset({0, 1}), frozenset({2}), frozenset({3})]

    def test_preserves_union(self, u):
        sets = [frozenset({0, 4}), frozenset({4, 5}), frozenset({0, 5})]
        pieces = disjointed(u, sets)
        assert u.union(*pieces) == u.union(*sets)

    def test_pieces_are_pairwise_disjoint(self, u):
        sets = [frozenset({0, 1, 2}), frozenset({1, 2, 3}), frozenset({0, 3, 5})]
        pieces = disjointed(u, sets)
        for i, a in enumerate(pieces):
            for b in pieces[i + 1:]:
                assert a.isdisjoint(b)

    def test_pieces_are_subsets(self, u):
        sets = [frozenset({1, 2}), frozenset({2, 3, 4})]
        for piece, s in zip(disjointed(u, sets), sets):
            assert piece <= s


class TestDisjointSequence:

    def test_increasing_sequence_gives_singletons(self, nat):
        pieces = disjointify(nat, IntervalProgression(0, 1, stop_step=1))
        assert isinstance(pieces, DisjointSequence)
        assert pieces.head(4) == tuple(IntervalSet.of(i) for i in range(4))
        assert pieces.stable_from is None

    def test_same_union(self, nat):
        seq = IntervalProgression(0, 1, stop_step=1)
        pieces = disjointify(nat, seq)
        assert pieces.union(nat) == seq.union(nat) == nat.whole
        assert pieces.intersection(nat) == IntervalSet()
        assert pieces.source is seq

    def test_eventually_constant_source(self, u):
        seq = EventuallyConstant.stationary([frozenset({0}), frozenset({0, 1})])
        pieces = disjointify(u, seq)
        assert pieces.stable_from == 2
        assert pieces.head(4) == (frozenset({0}), frozenset({1}), frozenset(), frozenset())
        assert pieces.series(len).total() == 2


# ═══════════════════════════════════════════════════════════════════
# Reindexing
# ═══════════════════════════════════════════════════════════════════


class TestReindex:

    def test_enumeration_is_injective(self):
        assert enumerate_index(["a", "b", "c"]) == {"a": 0, "b": 1, "c": 2}

    def test_duplicates_rejected(self):
        with pytest.raises(ValueError, match="occurs more than once"):
            enumerate_index(["a", "a"])

    def test_family_padded_with_empty(self, u):
        family = {"x": frozenset({1}), "y": frozenset({3, 4})}
        seq, encoding = reindex(u, family)
        assert encoding == {"x": 0, "y": 1}
        assert seq.term(encoding["y"]) == frozenset({3, 4})
        assert seq.term(7) == frozenset()

    def test_union_over(self, u):
        family = {(1, "a"): frozenset({0}), (2, "b"): frozenset({5})}
        assert union_over(u, family) == frozenset({0, 5})

    def test_union_over_empty_family(self, nat):
        assert union_over(nat, {}) == IntervalSet()


class TestIndexSets:

    def test_finite_index(self):
        index = FiniteIndex(["a", "b"])
        series = index.series(lambda i: 2 if i == "a" else 3, None)
        assert series == Series.of([2, 3])
        assert series.total() == 5
        assert len(index) == 2
        assert index.items == ("a", "b")

    def test_natural_index(self):
        series = NaturalIndex(2).series(lambda i: [1, 4, 0][min(i, 2)], None)
        assert series.prefix == (1, 4)
        assert series.tail == ZERO
        assert series.total() == 5

    def test_point_index_finite(self, u):
        s = frozenset({1, 2})
        series = PointIndex(u).series(lambda p: 1 if p in s else 0, s)
        assert series.total() == 2

    def test_point_index_cuts_at_settle_point(self, nat):
        s = R(2, 5)
        series = PointIndex(nat).series(lambda p: 1 if p in s else 0, s)
        assert len(series.prefix) == 5
        assert series.tail == ZERO
        assert series.total() == 3

    def test_point_index_unbounded_set(self, nat):
        s = R(3)
        series = PointIndex(nat).series(lambda p: 1 if p in s else 0, s)
        assert series.tail == 1
        assert series.total() == INF
