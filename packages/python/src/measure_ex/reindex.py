"""
Index Sets and Reindexing into ℕ.

Sums and unions over an arbitrary countable index set ``I`` are carried
out by enumerating ``I`` into ℕ and filling every unused natural with
the neutral element (∅ for unions, 0 for sums).  The result is always an
eventually constant ℕ-indexed object, which the rest of the package
knows how to sum or union exactly.

Index sets:

  - :class:`FiniteIndex`  — any finite collection of hashable indices.
  - :class:`NaturalIndex` — ℕ, for families that are constant from a
    known index on.
  - :class:`PointIndex`   — the points of a universe, for families whose
    term on a set depends only on whether the point belongs to it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Hashable, Iterable, Mapping

from measure_ex.ennreal import ENNReal, Series
from measure_ex.sequences import EventuallyConstant
from measure_ex.spaces import MeasurableUniverse


# ═══════════════════════════════════════════════════════════════════
# REINDEXING
# ═══════════════════════════════════════════════════════════════════


def enumerate_index(index: Iterable[Hashable]) -> dict[Hashable, int]:
    """Injective enumeration ``I → ℕ`` in iteration order.

    Raises:
        ValueError: If an index occurs twice.
    """
    encoding: dict[Hashable, int] = {}
    for i in index:
        if i in encoding:
            raise ValueError(f"Index {i!r} occurs more than once")
        encoding[i] = len(encoding)
    return encoding


def reindex(
    universe: MeasurableUniverse, family: Mapping[Hashable, Hashable],
) -> tuple[EventuallyConstant, dict[Hashable, int]]:
    """Turn an I-indexed family of sets into an ℕ-indexed sequence.

    Returns:
        The sequence (∅ at every natural not hit by the enumeration) and
        the enumeration used.
    """
    encoding = enumerate_index(family)
    prefix = [universe.empty] * len(encoding)
    for i, n in encoding.items():
        prefix[n] = family[i]
    return EventuallyConstant.padded(prefix, universe.empty), encoding


def union_over(universe: MeasurableUniverse, family: Mapping[Hashable, Hashable]) -> Hashable:
    """``⋃_{i∈I} family[i]`` via the ℕ-reindexed sequence."""
    sequence, _ = reindex(universe, family)
    return universe.countable_union(sequence)


# ═══════════════════════════════════════════════════════════════════
# INDEX SETS
# ═══════════════════════════════════════════════════════════════════


class IndexSet(ABC):
    """An index set over which families of measures can be summed."""

    @abstractmethod
    def series(self, term: Callable[[Any], ENNReal], s: Hashable) -> Series:
        """The ℕ-reindexed series of ``term(i)`` for the set *s*."""

    def representatives(self) -> tuple:
        """Finitely many indices whose members describe the whole family."""
        return ()


class FiniteIndex(IndexSet):
    """A finite collection of indices, reindexed with zero fill-in."""

    def __init__(self, items: Iterable[Hashable]) -> None:
        self._encoding = enumerate_index(items)

    @property
    def items(self) -> tuple:
        return tuple(self._encoding)

    def series(self, term: Callable[[Any], ENNReal], s: Hashable) -> Series:
        return Series.of(term(i) for i in self._encoding)

    def representatives(self) -> tuple:
        return self.items

    def __len__(self) -> int:
        return len(self._encoding)

    def __repr__(self) -> str:
        return f"FiniteIndex({list(self._encoding)!r})"


class NaturalIndex(IndexSet):
    """ℕ, for families with ``family(i) == family(stable_from)`` whenever
    ``i ≥ stable_from``."""

    def __init__(self, stable_from: int) -> None:
        if stable_from < 0:
            raise ValueError(f"stable_from must be non-negative, got {stable_from}")
        self.stable_from = stable_from

    def series(self, term: Callable[[Any], ENNReal], s: Hashable) -> Series:
        n = self.stable_from
        return Series(prefix=tuple(term(i) for i in range(n)), tail=term(n))

    def representatives(self) -> tuple:
        return tuple(range(self.stable_from + 1))

    def __repr__(self) -> str:
        return f"NaturalIndex(stable_from={self.stable_from})"


class PointIndex(IndexSet):
    """The points of *universe*.

    On an infinite universe the series is cut at the settle point of the
    set being measured: from there on every point has the same
    membership, so a family whose term depends only on membership is
    constant from that index.
    """

    def __init__(self, universe: MeasurableUniverse) -> None:
        self.universe = universe

    def series(self, term: Callable[[Any], ENNReal], s: Hashable) -> Series:
        u = self.universe
        if u.is_finite:
            return Series.of(term(p) for p in u.points_before())
        points = list(u.points_before(u.settle_point(s) + 1))
        return Series(
            prefix=tuple(term(p) for p in points[:-1]),
            tail=term(points[-1]),
        )

    # representatives() stays empty: a membership-only family has a
    # member at every point, so it marks none of them out.

    def __repr__(self) -> str:
        return f"PointIndex({self.universe!r})"
