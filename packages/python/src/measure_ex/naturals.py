"""
The Natural Numbers as a Measurable Universe.

Subsets of ℕ are represented as :class:`IntervalSet` — finite unions of
half-open ranges ``[a, b)`` where ``b`` may be ∞.  This family is closed
under complement, finite union, intersection and difference, and every
member is measurable.

Each set has a *settle point*: the last finite boundary among its
ranges.  Beyond it membership is constant (all in for an unbounded set,
all out for a bounded one), which is what lets point-indexed sums such
as the counting measure be summed exactly.

Infinite sequences are provided by :class:`IntervalProgression`, the
monotone affine families ``sᵢ = [a + b·i, c + d·i)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import count
from typing import Any, Iterable, Iterator, Optional

from measure_ex._constants import PROBE_BOUND
from measure_ex.sequences import SetSequence
from measure_ex.spaces import MeasurableMap, MeasurableUniverse

Span = tuple[int, Optional[int]]


def _normalize(spans) -> tuple[Span, ...]:
    """Sort, clip at 0, drop empty spans and merge overlapping or
    adjacent ones."""
    cleaned = []
    for start, stop in spans:
        start = max(int(start), 0)
        if stop is not None:
            stop = int(stop)
            if stop <= start:
                continue
        cleaned.append((start, stop))
    cleaned.sort(key=lambda span: span[0])

    merged: list[list] = []
    for start, stop in cleaned:
        if merged:
            last = merged[-1]
            if last[1] is None or start <= last[1]:
                if last[1] is not None and (stop is None or stop > last[1]):
                    last[1] = stop
                continue
        merged.append([start, stop])
    return tuple((a, b) for a, b in merged)


@dataclass(frozen=True)
class IntervalSet:
    """A finite union of ranges ``[start, stop)`` of natural numbers.

    ``stop = None`` denotes ∞.  Instances are kept in canonical form, so
    structurally equal sets compare and hash equal however they were
    built.
    """

    spans: tuple[Span, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "spans", _normalize(self.spans))

    # ── Construction ───────────────────────────────────────────────

    @classmethod
    def range(cls, start: int, stop: Optional[int] = None) -> IntervalSet:
        """``[start, stop)``; ``stop=None`` gives the tail ``[start, ∞)``."""
        return cls(((start, stop),))

    @classmethod
    def of(cls, *points: int) -> IntervalSet:
        """The finite set of the given points."""
        return cls(tuple((p, p + 1) for p in points))

    # ── Queries ────────────────────────────────────────────────────

    def __contains__(self, n: Any) -> bool:
        if not isinstance(n, int) or isinstance(n, bool) or n < 0:
            return False
        for start, stop in self.spans:
            if n < start:
                return False
            if stop is None or n < stop:
                return True
        return False

    @property
    def is_bounded(self) -> bool:
        return not self.spans or self.spans[-1][1] is not None

    def cardinality(self) -> Optional[int]:
        """Number of points, or ``None`` for an unbounded set."""
        if not self.is_bounded:
            return None
        return sum(stop - start for start, stop in self.spans)

    @property
    def settle_point(self) -> int:
        """Last finite boundary; membership is constant from here on."""
        if not self.spans:
            return 0
        start, stop = self.spans[-1]
        return start if stop is None else stop

    def iter_points(self) -> Iterator[int]:
        """Enumerate members in increasing order (may be infinite)."""
        for start, stop in self.spans:
            yield from (count(start) if stop is None else range(start, stop))

    def __repr__(self) -> str:
        if not self.spans:
            return "IntervalSet(∅)"
        parts = [
            f"[{a}, {'∞' if b is None else b})" for a, b in self.spans
        ]
        return f"IntervalSet({' ∪ '.join(parts)})"


# ═══════════════════════════════════════════════════════════════════
# UNIVERSE
# ═══════════════════════════════════════════════════════════════════


class Naturals(MeasurableUniverse):
    """ℕ with every :class:`IntervalSet` measurable.

    Args:
        probe_bound: Endpoint bound for the probe sets used in
                     extensional comparison of measures.
    """

    def __init__(self, probe_bound: int = PROBE_BOUND) -> None:
        self.probe_bound = probe_bound

    def __repr__(self) -> str:
        return "Naturals()"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Naturals)

    def __hash__(self) -> int:
        return hash(Naturals)

    @property
    def empty(self) -> IntervalSet:
        return IntervalSet()

    @property
    def whole(self) -> IntervalSet:
        return IntervalSet.range(0)

    @property
    def is_finite(self) -> bool:
        return False

    def is_measurable(self, s: Any) -> bool:
        return isinstance(s, IntervalSet)

    def contains(self, s: IntervalSet, point: Any) -> bool:
        return point in s

    # ── Set operations ─────────────────────────────────────────────

    def complement(self, s: IntervalSet) -> IntervalSet:
        spans = []
        cursor: Optional[int] = 0
        for start, stop in s.spans:
            if start > cursor:
                spans.append((cursor, start))
            cursor = stop
            if cursor is None:
                break
        if cursor is not None:
            spans.append((cursor, None))
        return IntervalSet(tuple(spans))

    def union(self, *sets: IntervalSet) -> IntervalSet:
        return IntervalSet(tuple(span for s in sets for span in s.spans))

    def is_empty(self, s: Any) -> bool:
        return isinstance(s, IntervalSet) and not s.spans

    # ── Points ─────────────────────────────────────────────────────

    def points_before(self, n: Optional[int] = None) -> Iterator[int]:
        if n is None:
            raise ValueError("ℕ cannot be enumerated in full; pass a bound")
        return iter(range(n))

    def settle_point(self, s: IntervalSet) -> int:
        return s.settle_point

    def probe_sets(self, landmarks: Iterable[Any] = ()) -> list[IntervalSet]:
        """Ranges and tails up to ``probe_bound``, plus ``{p}``, ``[0, p]``
        and ``[p, ∞)`` for every landmark ``p``."""
        bound = self.probe_bound
        probes = [self.empty]
        probes.extend(
            IntervalSet.range(a, b)
            for a in range(bound)
            for b in range(a + 1, bound + 1)
        )
        probes.extend(IntervalSet.range(a) for a in range(bound + 1))
        for p in sorted({p for p in landmarks if self.singleton(p) is not None}):
            probes.append(IntervalSet.of(p))
            probes.append(IntervalSet.range(0, p + 1))
            probes.append(IntervalSet.range(p))
        return probes

    def singleton(self, point: Any) -> Optional[IntervalSet]:
        if not isinstance(point, int) or isinstance(point, bool) or point < 0:
            return None
        return IntervalSet.of(point)


# ═══════════════════════════════════════════════════════════════════
# INFINITE SEQUENCES
# ═══════════════════════════════════════════════════════════════════


class IntervalProgression(SetSequence):
    """The affine family ``sᵢ = [start + start_step·i, stop + stop_step·i)``.

    ``stop = None`` means every term is unbounded.  Only monotone
    families are accepted: either the start is fixed (non-decreasing
    sequence) or the stop is fixed (non-increasing sequence).

    Examples:
        ``IntervalProgression(0, 1, stop_step=1)`` is ``[0, i+1)``,
        increasing to ℕ.  ``IntervalProgression(0, 6, start_step=1)`` is
        ``[i, 6)``, decreasing to ∅.
    """

    def __init__(
        self,
        start: int,
        stop: Optional[int],
        start_step: int = 0,
        stop_step: int = 0,
    ) -> None:
        if start_step < 0 or stop_step < 0:
            raise ValueError("Progression steps must be non-negative")
        if start_step and stop_step:
            raise ValueError(
                "IntervalProgression must be monotone: fix either the start "
                "or the stop"
            )
        if stop is None and stop_step:
            raise ValueError("An unbounded progression cannot have a stop step")
        self.start = start
        self.stop = stop
        self.start_step = start_step
        self.stop_step = stop_step

    def term(self, i: int) -> IntervalSet:
        stop = None if self.stop is None else self.stop + self.stop_step * i
        return IntervalSet.range(self.start + self.start_step * i, stop)

    @property
    def stable_from(self) -> Optional[int]:
        if not self.start_step and not self.stop_step:
            return 0
        if self.start_step and self.stop is not None:
            # Empty once the start has passed the fixed stop.
            return max(0, -(-(self.stop - self.start) // self.start_step))
        return None

    def union(self, universe: MeasurableUniverse) -> IntervalSet:
        if self.stop_step:
            return IntervalSet.range(self.start)
        # Non-increasing or constant: the first term contains the rest.
        return self.term(0)

    def intersection(self, universe: MeasurableUniverse) -> IntervalSet:
        if self.start_step:
            # The start escapes to ∞, so every point eventually leaves.
            return IntervalSet()
        return self.term(0)

    def __repr__(self) -> str:
        stop = "∞" if self.stop is None else f"{self.stop}+{self.stop_step}i"
        return (
            f"IntervalProgression([{self.start}+{self.start_step}i, {stop}))"
        )


# ═══════════════════════════════════════════════════════════════════
# MAPS
# ═══════════════════════════════════════════════════════════════════


def shift(universe: Naturals, k: int) -> MeasurableMap:
    """The map ``n ↦ n + k`` on ℕ.

    Its preimage moves every range down by *k* and clips at 0.
    """
    if k < 0:
        raise ValueError(f"Shift must be non-negative on ℕ, got {k}")

    def preimage(s: IntervalSet) -> IntervalSet:
        return IntervalSet(tuple(
            (start - k, None if stop is None else stop - k)
            for start, stop in s.spans
        ))

    return MeasurableMap(
        universe, universe, lambda n: n + k, preimage=preimage, name=f"+{k}",
    )
