"""
measure-ex: Outer Extensions and an Algebra of Measures

Extends a countably additive pre-measure, defined only on the measurable
sets of a universe, to a total monotone countably subadditive set
function that agrees with it exactly on measurable sets.  Builds new
measures from old ones (zero, sums, indexed sums, pushforwards, point
masses, counting measure) and evaluates limits along monotone sequences
of sets.
"""

__version__ = "0.1.0"

from measure_ex.ennreal import ENNReal, Series, INF, ONE, ZERO
from measure_ex.spaces import (
    MeasurableUniverse,
    FiniteUniverse,
    MeasurableMap,
    identity,
    compose,
)
from measure_ex.naturals import IntervalSet, IntervalProgression, Naturals, shift
from measure_ex.sequences import EventuallyConstant, RelativeComplements, SetSequence
from measure_ex.disjoint import disjointed, disjointify
from measure_ex.reindex import (
    FiniteIndex,
    NaturalIndex,
    PointIndex,
    enumerate_index,
    reindex,
    union_over,
)
from measure_ex.premeasure import PreMeasure, from_function, from_masses
from measure_ex.extension import (
    additive_over,
    additive_union,
    split_at,
    subadditive_bound,
)
from measure_ex.outer import OuterMeasure
from measure_ex.measure import Measure
from measure_ex.algebra import (
    add,
    counting,
    dirac,
    indexed_sum,
    map_measure,
    zero,
)
from measure_ex.continuity import (
    ContinuityReport,
    decreasing_intersection,
    increasing_union,
    limit_of,
)
from measure_ex.laws import LawReport, check_premeasure

__all__ = [
    "__version__",
    # Extended non-negative reals
    "ENNReal",
    "Series",
    "INF",
    "ONE",
    "ZERO",
    # Universes
    "MeasurableUniverse",
    "FiniteUniverse",
    "MeasurableMap",
    "identity",
    "compose",
    "IntervalSet",
    "IntervalProgression",
    "Naturals",
    "shift",
    # Sequences & reindexing
    "EventuallyConstant",
    "RelativeComplements",
    "SetSequence",
    "disjointed",
    "disjointify",
    "FiniteIndex",
    "NaturalIndex",
    "PointIndex",
    "enumerate_index",
    "reindex",
    "union_over",
    # Pre-measures & extension
    "PreMeasure",
    "from_function",
    "from_masses",
    "additive_over",
    "additive_union",
    "split_at",
    "subadditive_bound",
    # Completion
    "OuterMeasure",
    "Measure",
    # Algebra
    "add",
    "counting",
    "dirac",
    "indexed_sum",
    "map_measure",
    "zero",
    # Continuity
    "ContinuityReport",
    "decreasing_intersection",
    "increasing_union",
    "limit_of",
    # Laws
    "LawReport",
    "check_premeasure",
]
