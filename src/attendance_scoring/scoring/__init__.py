"""Pure attendance scoring engine (no I/O, no shared state)."""

from .aggregation import advance, aggregate, delta, earned_minutes, initial_state, state_from_results, weighted_sum
from .model import (
    AggregationState,
    ArrivalEvent,
    CumulativeScore,
    EventAggregationConfig,
    SessionScore,
    SessionWindow,
    SkipOverride,
    WeightedSessionResult,
    clamp_percentage,
)
from .override import activate, resolve_cumulative
from .scorer import LinearLatenessScorer, ScorerFactory, SessionScorer, SteppedLatenessScorer, lateness_minutes
from .weekly import meets_weekly_requirement, weekly_attended_minutes

__all__ = [
    "AggregationState",
    "ArrivalEvent",
    "CumulativeScore",
    "EventAggregationConfig",
    "LinearLatenessScorer",
    "ScorerFactory",
    "SessionScore",
    "SessionScorer",
    "SessionWindow",
    "SkipOverride",
    "SteppedLatenessScorer",
    "WeightedSessionResult",
    "activate",
    "advance",
    "aggregate",
    "clamp_percentage",
    "delta",
    "earned_minutes",
    "initial_state",
    "lateness_minutes",
    "meets_weekly_requirement",
    "resolve_cumulative",
    "state_from_results",
    "weekly_attended_minutes",
    "weighted_sum",
]
