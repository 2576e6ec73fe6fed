"""Event-level aggregation of per-session results.

Two weighting regimes share one earned-minutes formula:

* constrained: earned minutes over the event's weekly quota
* unconstrained: earned minutes over the sum of session durations

``aggregate`` recomputes from the full history; ``delta``/``advance`` fold a
single new result into a running :class:`AggregationState`. Both produce the
same cumulative value (modulo float rounding) as long as the caller passes the
denominator that was in force when the previous state was computed.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from .model import (
    AggregationState,
    CumulativeScore,
    EventAggregationConfig,
    WeightedSessionResult,
    clamp_percentage,
)


def earned_minutes(duration_minutes: float, percentage: float) -> float:
    """Minutes of credited presence for one session."""
    return duration_minutes * percentage / 100


def weighted_sum(results: Iterable[WeightedSessionResult]) -> float:
    return sum(earned_minutes(r.duration_minutes, r.percentage) for r in results)


def aggregate(results: Sequence[WeightedSessionResult], config: EventAggregationConfig) -> CumulativeScore:
    if not results:
        return CumulativeScore(percentage=0.0)

    earned = weighted_sum(results)
    denominator = config.denominator(results)
    if denominator == 0:
        return CumulativeScore(percentage=0.0)

    return CumulativeScore(percentage=clamp_percentage(earned / denominator * 100))


def delta(
    new_percentage: float,
    new_duration_minutes: float,
    previous_cumulative: float,
    previous_weighted_sum: float,
    total_minutes: float,
) -> float:
    """Change in cumulative percentage caused by one additional session.

    ``total_minutes`` must be the denominator in force for the event's mode
    after the new session is counted.
    """
    if total_minutes == 0:
        return 0.0

    new_weighted_sum = previous_weighted_sum + earned_minutes(new_duration_minutes, new_percentage)
    new_cumulative = new_weighted_sum / total_minutes * 100
    return new_cumulative - previous_cumulative


def initial_state() -> AggregationState:
    return AggregationState()


def advance(
    state: AggregationState,
    result: WeightedSessionResult,
    config: EventAggregationConfig,
) -> tuple[AggregationState, float]:
    """Fold one new result into ``state``; returns the new state and the delta."""
    session_minutes = state.session_minutes + result.duration_minutes
    if config.is_constrained:
        total_minutes = float(config.minimum_minutes_per_week)
    else:
        total_minutes = session_minutes

    change = delta(
        result.percentage,
        result.duration_minutes,
        state.cumulative,
        state.weighted_sum,
        total_minutes,
    )
    new_state = AggregationState(
        cumulative=clamp_percentage(state.cumulative + change),
        weighted_sum=state.weighted_sum + earned_minutes(result.duration_minutes, result.percentage),
        session_minutes=session_minutes,
    )
    return new_state, change


def state_from_results(results: Sequence[WeightedSessionResult], config: EventAggregationConfig) -> AggregationState:
    """Full recomputation, packaged as a state the incremental path can continue from."""
    return AggregationState(
        cumulative=aggregate(results, config).percentage,
        weighted_sum=weighted_sum(results),
        session_minutes=float(sum(r.duration_minutes for r in results)),
    )
