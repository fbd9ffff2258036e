"""
Measurable Universes and Measurable Maps.

A measurable universe is a ground set together with a predicate
``is_measurable`` on its subsets, closed under complement and countable
union (and hence under intersection, difference and finite union).
Measures never inspect how a universe represents its sets: they only
call the operations declared on :class:`MeasurableUniverse`.

Concrete universes:

  - :class:`FiniteUniverse` — a finite ground set whose σ-algebra is
    generated by a family of subsets.  Sets are ``frozenset``s.
  - :class:`measure_ex.naturals.Naturals` — the natural numbers with
    interval-union sets.

A :class:`MeasurableMap` carries a point function together with its
preimage operation; measurability of the map is decided by pulling back
the target's measurable sets.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from itertools import chain, combinations
from typing import Any, Callable, Hashable, Iterable, Iterator, Optional, Sequence

from measure_ex._constants import MAX_ENUMERATED_ATOMS
from measure_ex.sequences import SetSequence

LOGGER = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
# ABSTRACT UNIVERSE
# ═══════════════════════════════════════════════════════════════════


class MeasurableUniverse(ABC):
    """Ground set, measurability predicate and set operations."""

    # ── Required ───────────────────────────────────────────────────

    @property
    @abstractmethod
    def empty(self) -> Hashable:
        """∅."""

    @property
    @abstractmethod
    def whole(self) -> Hashable:
        """The ground set itself."""

    @abstractmethod
    def is_measurable(self, s: Any) -> bool:
        """The measurability predicate."""

    @abstractmethod
    def contains(self, s: Hashable, point: Any) -> bool:
        """Point membership ``point ∈ s``."""

    @abstractmethod
    def complement(self, s: Hashable) -> Hashable:
        """``whole \\ s``."""

    @abstractmethod
    def union(self, *sets: Hashable) -> Hashable:
        """Finite union; the union of no sets is ∅."""

    @property
    @abstractmethod
    def is_finite(self) -> bool:
        """Whether the ground set is finite."""

    @abstractmethod
    def points_before(self, n: Optional[int] = None) -> Iterator[Any]:
        """Enumerate the ground set in its canonical order.

        With *n*, only the first *n* points.  Without it, every point
        (finite universes only).
        """

    @abstractmethod
    def settle_point(self, s: Hashable) -> int:
        """Index in the point enumeration beyond which membership in
        *s* no longer changes."""

    @abstractmethod
    def probe_sets(self, landmarks: Iterable[Any] = ()) -> Iterable[Hashable]:
        """Measurable sets used to compare measures extensionally.

        Args:
            landmarks: Points at which the compared measures are known
                       to carry mass; universes that cannot enumerate
                       every measurable set add sets around them.
        """

    def singleton(self, point: Any) -> Optional[Hashable]:
        """The set ``{point}`` when it is measurable, else ``None``."""
        return None

    # ── Derived operations ─────────────────────────────────────────

    def intersection(self, *sets: Hashable) -> Hashable:
        """Finite intersection; the intersection of no sets is the whole."""
        if not sets:
            return self.whole
        return self.complement(self.union(*(self.complement(s) for s in sets)))

    def difference(self, a: Hashable, b: Hashable) -> Hashable:
        """``a \\ b``."""
        return self.intersection(a, self.complement(b))

    def is_empty(self, s: Hashable) -> bool:
        return s == self.empty

    def is_subset(self, a: Hashable, b: Hashable) -> bool:
        return self.is_empty(self.difference(a, b))

    def is_disjoint(self, a: Hashable, b: Hashable) -> bool:
        return self.is_empty(self.intersection(a, b))

    def countable_union(self, sequence: SetSequence) -> Hashable:
        return sequence.union(self)

    def countable_intersection(self, sequence: SetSequence) -> Hashable:
        return sequence.intersection(self)

    def measurable_hull(self, s: Hashable) -> Optional[Hashable]:
        """Smallest measurable superset of *s*, when the universe has one."""
        if self.is_measurable(s):
            return s
        return None

    def covers(self, s: Hashable) -> Iterator[tuple]:
        """Candidate countable measurable covers of *s*.

        The outer-measure primitive takes the infimum of ``Σ m(tᵢ)`` over
        these families.
        """
        hull = self.measurable_hull(s)
        if hull is not None:
            yield (hull,)

    def test_sets(self) -> Iterable[Hashable]:
        """Subsets used by the Caratheodory predicate."""
        return self.probe_sets()


# ═══════════════════════════════════════════════════════════════════
# FINITE UNIVERSE
# ═══════════════════════════════════════════════════════════════════


def _powerset(items: Sequence[Any]) -> Iterator[tuple]:
    return chain.from_iterable(combinations(items, k) for k in range(len(items) + 1))


class FiniteUniverse(MeasurableUniverse):
    """Finite ground set with the σ-algebra generated by *generators*.

    The atoms of a σ-algebra generated on a finite set are the classes
    of points sharing the same membership pattern across all
    generators; the measurable sets are exactly the unions of atoms.
    Without generators every subset is measurable.

    Args:
        points:     The ground set, in enumeration order.
        generators: Subsets generating the σ-algebra, or ``None`` for the
                    discrete σ-algebra.
    """

    def __init__(
        self,
        points: Iterable[Hashable],
        generators: Optional[Iterable[Iterable[Hashable]]] = None,
    ) -> None:
        self._points = tuple(dict.fromkeys(points))
        self._whole = frozenset(self._points)
        if generators is None:
            self._atoms = tuple(frozenset((p,)) for p in self._points)
        else:
            gens = [frozenset(g) for g in generators]
            for g in gens:
                if not g <= self._whole:
                    raise ValueError(
                        f"Generator {set(g)!r} is not a subset of the universe"
                    )
            classes: dict[tuple, list] = {}
            for p in self._points:
                classes.setdefault(tuple(p in g for g in gens), []).append(p)
            self._atoms = tuple(frozenset(c) for c in classes.values())
        LOGGER.debug(
            "Finite universe with %d points and %d atoms",
            len(self._points), len(self._atoms),
        )

    # ── Structure ──────────────────────────────────────────────────

    @property
    def points(self) -> tuple:
        return self._points

    @property
    def atoms(self) -> tuple[frozenset, ...]:
        return self._atoms

    @property
    def empty(self) -> frozenset:
        return frozenset()

    @property
    def whole(self) -> frozenset:
        return self._whole

    @property
    def is_finite(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"FiniteUniverse(points={len(self._points)}, atoms={len(self._atoms)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FiniteUniverse):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def _key(self) -> tuple:
        return (self._whole, frozenset(self._atoms))

    # ── Predicate ──────────────────────────────────────────────────

    def is_measurable(self, s: Any) -> bool:
        if not isinstance(s, frozenset) or not s <= self._whole:
            return False
        return all(atom <= s or atom.isdisjoint(s) for atom in self._atoms)

    def contains(self, s: frozenset, point: Any) -> bool:
        return point in s

    # ── Set operations ─────────────────────────────────────────────

    def complement(self, s: frozenset) -> frozenset:
        return self._whole - s

    def union(self, *sets: frozenset) -> frozenset:
        return frozenset().union(*sets)

    def intersection(self, *sets: frozenset) -> frozenset:
        if not sets:
            return self._whole
        return frozenset(sets[0]).intersection(*sets[1:])

    def difference(self, a: frozenset, b: frozenset) -> frozenset:
        return frozenset(a) - b

    def is_empty(self, s: frozenset) -> bool:
        return not s

    # ── Points ─────────────────────────────────────────────────────

    def points_before(self, n: Optional[int] = None) -> Iterator[Any]:
        if n is None:
            return iter(self._points)
        return iter(self._points[:n])

    def settle_point(self, s: frozenset) -> int:
        return len(self._points)

    # ── Covers and enumerations ────────────────────────────────────

    def measurable_hull(self, s: frozenset) -> frozenset:
        return frozenset().union(*(a for a in self._atoms if not a.isdisjoint(s)))

    def covers(self, s: frozenset) -> Iterator[tuple]:
        if self.is_measurable(s):
            yield (s,)
            return
        yield (self.measurable_hull(s),)
        yield tuple(a for a in self._atoms if not a.isdisjoint(s))

    def measurable_sets(self) -> list[frozenset]:
        """Every measurable set (all unions of atoms).

        Raises:
            ValueError: If the σ-algebra has more than
                ``MAX_ENUMERATED_ATOMS`` atoms.
        """
        if len(self._atoms) > MAX_ENUMERATED_ATOMS:
            raise ValueError(
                f"Refusing to enumerate 2^{len(self._atoms)} measurable sets "
                f"(limit is 2^{MAX_ENUMERATED_ATOMS})"
            )
        return [frozenset().union(*combo) for combo in _powerset(self._atoms)]

    def probe_sets(self, landmarks: Iterable[Any] = ()) -> list[frozenset]:
        # Already every measurable set.
        return self.measurable_sets()

    def singleton(self, point: Any) -> Optional[frozenset]:
        s = frozenset((point,))
        return s if self.is_measurable(s) else None

    def test_sets(self) -> list[frozenset]:
        """Every subset when the ground set is small, otherwise the
        measurable sets."""
        if len(self._points) > MAX_ENUMERATED_ATOMS:
            return self.measurable_sets()
        return [frozenset(c) for c in _powerset(self._points)]


# ═══════════════════════════════════════════════════════════════════
# MEASURABLE MAPS
# ═══════════════════════════════════════════════════════════════════


class MeasurableMap:
    """A point function ``f : source → target`` with its preimage.

    Args:
        source:   Domain universe.
        target:   Codomain universe.
        func:     The point function.
        preimage: ``s ↦ f⁻¹(s)`` on target sets.  Optional for finite
                  sources, where it is computed by enumerating points.
    """

    def __init__(
        self,
        source: MeasurableUniverse,
        target: MeasurableUniverse,
        func: Callable[[Any], Any],
        preimage: Optional[Callable[[Hashable], Hashable]] = None,
        name: str = "f",
    ) -> None:
        if preimage is None and not isinstance(source, FiniteUniverse):
            raise ValueError(
                "A preimage operation is required when the source universe "
                "is not finite"
            )
        self.source = source
        self.target = target
        self.func = func
        self.name = name
        self._preimage = preimage

    def __call__(self, point: Any) -> Any:
        return self.func(point)

    def preimage(self, s: Hashable) -> Hashable:
        """``f⁻¹(s)`` as a source set."""
        if self._preimage is not None:
            return self._preimage(s)
        return frozenset(
            p for p in self.source.points_before()
            if self.target.contains(s, self.func(p))
        )

    def is_measurable(self) -> bool:
        """Whether every target set in ``probe_sets()`` pulls back to a
        measurable source set.

        For a finite source the check is exact: besides those sets, the
        singleton of every image point is pulled back, and the preimage
        of any target set is a finite union of those.
        """
        tests = list(self.target.probe_sets())
        if self.source.is_finite:
            for y in {self.func(p) for p in self.source.points_before()}:
                point_set = self.target.singleton(y)
                if point_set is not None:
                    tests.append(point_set)
        return all(self.source.is_measurable(self.preimage(t)) for t in tests)

    def then(self, g: MeasurableMap) -> MeasurableMap:
        """``g ∘ self``: first this map, then *g*."""
        return compose(g, self)

    def __repr__(self) -> str:
        return f"MeasurableMap({self.name})"


def identity(universe: MeasurableUniverse) -> MeasurableMap:
    """The identity map of *universe*; its preimage is the set itself."""
    return MeasurableMap(
        universe, universe, lambda p: p, preimage=lambda s: s, name="id",
    )


def compose(g: MeasurableMap, f: MeasurableMap) -> MeasurableMap:
    """``g ∘ f``.

    The preimage of a composition is the composition of preimages:
    ``(g ∘ f)⁻¹(s) = f⁻¹(g⁻¹(s))``.
    """
    return MeasurableMap(
        f.source,
        g.target,
        lambda p: g.func(f.func(p)),
        preimage=lambda s: f.preimage(g.preimage(s)),
        name=f"{g.name}∘{f.name}",
    )
