"""
Shared constants and configuration for measure-ex.

Every constant here is a default: the functions that read one also
accept a keyword argument of the same meaning, so callers can override
it per call without touching module state.
"""

from __future__ import annotations

# ── Continuity theorems ────────────────────────────────────────────

INSPECTION_DEPTH = 8
"""Number of leading terms of a countable sequence that the continuity
theorems evaluate explicitly (monotonicity, telescoping partial sums,
approximants).  Must be at least 1."""

# ── Extensional comparison on ℕ ────────────────────────────────────

PROBE_BOUND = 6
"""Endpoints of the ``IntervalSet`` probes used when two measures on the
naturals are compared extensionally: every ``[a, b)`` with
``0 ≤ a < b ≤ PROBE_BOUND`` and every tail ``[a, ∞)`` with
``a ≤ PROBE_BOUND``, widened around the landmark points of the compared
pre-measures."""

# ── Finite universes ───────────────────────────────────────────────

MAX_ENUMERATED_ATOMS = 12
"""Upper bound on the number of atoms (or points) a finite universe will
expand into the full list of its measurable sets (or all its subsets).
The expansion is exponential in this number."""
