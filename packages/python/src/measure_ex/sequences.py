"""
Countable sequences of sets.

A :class:`SetSequence` is an ℕ-indexed family ``s₀, s₁, …`` of subsets
of a universe.  Besides its terms, a sequence knows how to form its
countable union and intersection; together with the universe's finite
set operations this is the countable-union closure that measures rely
on.

Two shapes are provided here:

  - :class:`EventuallyConstant` — a finite prefix followed by a constant
    tail.  Finite families are padded with ∅; stabilising monotone
    sequences repeat their last term.
  - :class:`RelativeComplements` — ``base \\ sᵢ`` for a given sequence,
    which turns a decreasing sequence into an increasing one.

Infinite non-constant sequences come from concrete universes
(see :class:`measure_ex.naturals.IntervalProgression`).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Hashable, Iterable, Optional

from measure_ex.ennreal import ENNReal, Series

if TYPE_CHECKING:
    from measure_ex.spaces import MeasurableUniverse


class SetSequence(ABC):
    """An ℕ-indexed sequence of sets with computable limits."""

    @abstractmethod
    def term(self, i: int) -> Hashable:
        """The *i*-th set of the sequence."""

    @abstractmethod
    def union(self, universe: MeasurableUniverse) -> Hashable:
        """⋃ᵢ sᵢ."""

    @abstractmethod
    def intersection(self, universe: MeasurableUniverse) -> Hashable:
        """⋂ᵢ sᵢ."""

    @property
    def stable_from(self) -> Optional[int]:
        """Index from which every term equals ``term(stable_from)``.

        ``None`` when the sequence is not known to be eventually
        constant.
        """
        return None

    def __getitem__(self, i: int) -> Hashable:
        if i < 0:
            raise IndexError(f"Sequence index must be non-negative, got {i}")
        return self.term(i)

    def head(self, n: int) -> tuple:
        """The first *n* terms."""
        return tuple(self.term(i) for i in range(n))

    def series(self, fn: Callable[[Any], ENNReal]) -> Series:
        """The value series ``fn(s₀), fn(s₁), …``.

        Raises:
            ValueError: If the sequence is not eventually constant, in
                which case its value series has no finite description.
        """
        n = self.stable_from
        if n is None:
            raise ValueError(
                f"{type(self).__name__} is not eventually constant; "
                f"its value series cannot be summed term by term"
            )
        return Series(
            prefix=tuple(fn(self.term(i)) for i in range(n)),
            tail=fn(self.term(n)),
        )


@dataclass(frozen=True)
class EventuallyConstant(SetSequence):
    """``prefix[0], …, prefix[n−1], tail, tail, …``."""

    prefix: tuple
    tail: Hashable

    def __post_init__(self) -> None:
        object.__setattr__(self, "prefix", tuple(self.prefix))

    @classmethod
    def padded(cls, sets: Iterable[Hashable], empty: Hashable) -> EventuallyConstant:
        """A finite family extended with ∅ beyond its last member."""
        return cls(prefix=tuple(sets), tail=empty)

    @classmethod
    def stationary(cls, sets: Iterable[Hashable]) -> EventuallyConstant:
        """A finite sequence whose last member repeats forever."""
        sets = tuple(sets)
        if not sets:
            raise ValueError("stationary() requires at least one set")
        return cls(prefix=sets[:-1], tail=sets[-1])

    def term(self, i: int) -> Hashable:
        if i < len(self.prefix):
            return self.prefix[i]
        return self.tail

    def union(self, universe: MeasurableUniverse) -> Hashable:
        return universe.union(*self.prefix, self.tail)

    def intersection(self, universe: MeasurableUniverse) -> Hashable:
        return universe.intersection(*self.prefix, self.tail)

    @property
    def stable_from(self) -> int:
        return len(self.prefix)


class RelativeComplements(SetSequence):
    """``base \\ s₀, base \\ s₁, …``.

    When ``s`` is non-increasing this sequence is non-decreasing, and
    its union is ``base \\ ⋂ sᵢ``.
    """

    def __init__(
        self, universe: MeasurableUniverse, base: Hashable, sequence: SetSequence,
    ) -> None:
        self._universe = universe
        self._base = base
        self._sequence = sequence

    def term(self, i: int) -> Hashable:
        return self._universe.difference(self._base, self._sequence.term(i))

    def union(self, universe: MeasurableUniverse) -> Hashable:
        return universe.difference(self._base, self._sequence.intersection(universe))

    def intersection(self, universe: MeasurableUniverse) -> Hashable:
        return universe.difference(self._base, self._sequence.union(universe))

    @property
    def stable_from(self) -> Optional[int]:
        return self._sequence.stable_from

    def __repr__(self) -> str:
        return f"RelativeComplements(base={self._base!r}, sequence={self._sequence!r})"
