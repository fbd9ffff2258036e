"""
Disjointification of countable set sequences.

Replaces each term by itself minus the union of all strictly earlier
terms:

    d₀ = s₀
    dᵢ = sᵢ \\ (s₀ ∪ … ∪ sᵢ₋₁)

The result is pairwise disjoint, satisfies ``dᵢ ⊆ sᵢ`` and has the same
finite and countable unions as the original.  For a non-decreasing
sequence it reduces to ``dᵢ = sᵢ \\ sᵢ₋₁``.

Used by countable subadditivity and by the increasing-union continuity
theorem.
"""

from __future__ import annotations

from typing import Hashable, Iterable, Optional

from measure_ex.sequences import SetSequence
from measure_ex.spaces import MeasurableUniverse


def disjointed(universe: MeasurableUniverse, sets: Iterable[Hashable]) -> list:
    """Disjointify a finite family, preserving order."""
    result = []
    seen = universe.empty
    for s in sets:
        result.append(universe.difference(s, seen))
        seen = universe.union(seen, s)
    return result


class DisjointSequence(SetSequence):
    """The disjointification of a :class:`SetSequence`."""

    def __init__(self, universe: MeasurableUniverse, sequence: SetSequence) -> None:
        self._universe = universe
        self._sequence = sequence

    @property
    def source(self) -> SetSequence:
        return self._sequence

    def term(self, i: int) -> Hashable:
        u = self._universe
        earlier = u.union(*(self._sequence.term(j) for j in range(i)))
        return u.difference(self._sequence.term(i), earlier)

    def union(self, universe: MeasurableUniverse) -> Hashable:
        return self._sequence.union(universe)

    def intersection(self, universe: MeasurableUniverse) -> Hashable:
        # d₀ ∩ d₁ = ∅ already.
        return universe.empty

    @property
    def stable_from(self) -> Optional[int]:
        n = self._sequence.stable_from
        if n is None:
            return None
        # Every term past the stable index is contained in an earlier one.
        return n + 1

    def __repr__(self) -> str:
        return f"DisjointSequence({self._sequence!r})"


def disjointify(universe: MeasurableUniverse, sequence: SetSequence) -> DisjointSequence:
    """Disjointify a countable sequence of sets."""
    return DisjointSequence(universe, sequence)
