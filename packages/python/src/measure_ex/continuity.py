"""
Continuity of Measures along Monotone Sequences.

Increasing union
    For measurable ``s₀ ⊆ s₁ ⊆ …``:  ``μ(⋃ sᵢ) = supᵢ μ(sᵢ)``.

    Disjointify (``d₀ = s₀``, ``dᵢ = sᵢ \\ sᵢ₋₁``).  Since
    ``dᵢ ∪ sᵢ₋₁ = sᵢ`` with the two parts disjoint, finite additivity
    telescopes ``μ(d₀) + … + μ(dᵢ)`` to exactly ``μ(sᵢ)``.  The countable
    sum ``Σ μ(dᵢ) = μ(⋃ sᵢ)`` is the supremum of those partial sums.

Decreasing intersection
    For measurable ``s₀ ⊇ s₁ ⊇ …`` with ``μ(s₀) < ∞``:
    ``μ(⋂ sᵢ) = infᵢ μ(sᵢ)``.

    Write ``⋂ sᵢ = s₀ \\ ⋃ (s₀ \\ sᵢ)``, apply the increasing-union case
    to ``s₀ \\ sᵢ`` and subtract from ``μ(s₀)`` twice, using
    ``a − (a − b) = b`` for ``b ≤ a < ∞``.  With ``μ(s₀) = ∞`` the
    subtraction would be ∞ − ∞, so that case is rejected.

Both theorems return a :class:`ContinuityReport` carrying the limit and
the explicitly evaluated leading terms.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Hashable, Optional

from measure_ex._constants import INSPECTION_DEPTH
from measure_ex.disjoint import disjointify
from measure_ex.ennreal import ENNReal, ZERO
from measure_ex.extension import additive_union
from measure_ex.measure import Measure
from measure_ex.sequences import RelativeComplements, SetSequence

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContinuityReport:
    """Result of a continuity theorem.

    Attributes:
        limit:        μ(⋃ sᵢ) or μ(⋂ sᵢ).
        approximants: μ(s₀), μ(s₁), … for the inspected prefix.
        partial_sums: μ(d₀) + … + μ(dᵢ) for the disjointified sequence
                      of the (possibly complemented) increasing sequence.
    """

    limit: ENNReal
    approximants: tuple[ENNReal, ...]
    partial_sums: tuple[ENNReal, ...]

    @property
    def supremum(self) -> ENNReal:
        """Supremum of the inspected approximants."""
        return ENNReal.supremum(self.approximants)

    @property
    def infimum(self) -> ENNReal:
        """Infimum of the inspected approximants."""
        return ENNReal.infimum(self.approximants)


def _inspected_terms(sequence: SetSequence, depth: int) -> tuple:
    if depth < 1:
        raise ValueError(f"Inspection depth must be at least 1, got {depth}")
    # An eventually constant sequence is inspected past its stable index,
    # which makes the prefix checks exhaustive.
    n = depth
    if sequence.stable_from is not None:
        n = max(depth, sequence.stable_from + 1)
    return sequence.head(n)


def _require_measurable_terms(mu: Measure, terms: tuple) -> None:
    for i, s in enumerate(terms):
        if not mu.is_measurable(s):
            raise ValueError(f"Term {i} of the sequence ({s!r}) is not measurable")


# ═══════════════════════════════════════════════════════════════════
# INCREASING UNION
# ═══════════════════════════════════════════════════════════════════


def increasing_union(
    mu: Measure, sequence: SetSequence, depth: int = INSPECTION_DEPTH,
) -> ContinuityReport:
    """``μ(⋃ sᵢ) = supᵢ μ(sᵢ)`` for a non-decreasing measurable sequence.

    Args:
        mu:       The measure.
        sequence: ``s₀ ⊆ s₁ ⊆ …``.
        depth:    Number of leading terms evaluated explicitly.

    Raises:
        ValueError: If *depth* is below 1, an inspected term is not
            measurable, the inspected prefix is not non-decreasing, or
            the telescoping identity fails (which means *mu* is not
            additive).
    """
    u = mu.universe
    terms = _inspected_terms(sequence, depth)
    _require_measurable_terms(mu, terms)
    for i in range(1, len(terms)):
        if not u.is_subset(terms[i - 1], terms[i]):
            LOGGER.debug("Rejecting increasing_union: term %d shrinks", i)
            raise ValueError(f"Sequence is not non-decreasing at index {i}")

    pieces = disjointify(u, sequence)
    approximants = tuple(mu.measure(s) for s in terms)

    partial_sums = []
    running = ZERO
    for i, s in enumerate(terms):
        piece = pieces.term(i)
        running = running + mu.measure(piece)
        if i:
            step = additive_union(mu.premeasure, piece, terms[i - 1])
            if step != approximants[i]:
                raise ValueError(
                    f"μ(d{i}) + μ(s{i - 1}) = {step} but μ(s{i}) = "
                    f"{approximants[i]}; the measure is not additive"
                )
        if running != approximants[i]:
            raise ValueError(
                f"Partial sum {i} is {running} but μ(s{i}) = {approximants[i]}; "
                f"the measure is not additive"
            )
        partial_sums.append(running)

    if sequence.stable_from is not None:
        limit = ENNReal.tsum(pieces.series(mu.measure))
    else:
        limit = mu.measure(u.countable_union(sequence))
    if ENNReal.supremum(approximants) > limit:
        raise ValueError(
            f"An approximant exceeds μ(⋃ sᵢ) = {limit}; the measure is not monotone"
        )
    return ContinuityReport(
        limit=limit, approximants=approximants, partial_sums=tuple(partial_sums),
    )


# ═══════════════════════════════════════════════════════════════════
# DECREASING INTERSECTION
# ═══════════════════════════════════════════════════════════════════


def decreasing_intersection(
    mu: Measure, sequence: SetSequence, depth: int = INSPECTION_DEPTH,
) -> ContinuityReport:
    """``μ(⋂ sᵢ) = infᵢ μ(sᵢ)`` for a non-increasing measurable sequence
    with ``μ(s₀) < ∞``.

    Raises:
        ValueError: If *depth* is below 1, ``μ(s₀) = ∞``, an inspected
            term is not measurable, or the inspected prefix is not
            non-increasing.
    """
    u = mu.universe
    terms = _inspected_terms(sequence, depth)
    _require_measurable_terms(mu, terms)
    base_set: Hashable = terms[0]
    base = mu.measure(base_set)
    if base.is_infinite:
        LOGGER.debug("Rejecting decreasing_intersection: μ(s₀) = ∞")
        raise ValueError(
            "decreasing_intersection() requires μ(s₀) < ∞; "
            "with μ(s₀) = ∞ the limit would need ∞ − ∞"
        )
    for i in range(1, len(terms)):
        if not u.is_subset(terms[i], terms[i - 1]):
            LOGGER.debug("Rejecting decreasing_intersection: term %d grows", i)
            raise ValueError(f"Sequence is not non-increasing at index {i}")

    inner = increasing_union(
        mu, RelativeComplements(u, base_set, sequence), depth=len(terms),
    )
    # μ(⋂ sᵢ) = μ(s₀) − μ(⋃ (s₀ \ sᵢ))
    limit = base - inner.limit

    approximants = []
    for i, complement_value in enumerate(inner.approximants):
        # μ(sᵢ) = μ(s₀) − (μ(s₀) − μ(sᵢ))
        value = base - complement_value
        if value != mu.measure(terms[i]):
            raise ValueError(
                f"μ(s0) − μ(s0 \\ s{i}) = {value} but μ(s{i}) = "
                f"{mu.measure(terms[i])}; the measure is not additive"
            )
        approximants.append(value)

    return ContinuityReport(
        limit=limit,
        approximants=tuple(approximants),
        partial_sums=inner.partial_sums,
    )


def limit_of(
    mu: Measure,
    sequence: SetSequence,
    decreasing: Optional[bool] = None,
    depth: int = INSPECTION_DEPTH,
) -> ENNReal:
    """Limit of ``μ(sᵢ)`` along a monotone sequence.

    Args:
        decreasing: Direction of the sequence; detected from its first
                    two terms when ``None``.
    """
    if decreasing is None:
        u = mu.universe
        first, second = sequence.term(0), sequence.term(1)
        decreasing = u.is_subset(second, first) and not u.is_subset(first, second)
    if decreasing:
        return decreasing_intersection(mu, sequence, depth).limit
    return increasing_union(mu, sequence, depth).limit
