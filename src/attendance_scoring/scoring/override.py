from __future__ import annotations

from typing import Sequence

from ..core.constants import SKIP_PERCENTAGE
from ..core.exceptions import ConflictError
from .aggregation import aggregate
from .model import CumulativeScore, EventAggregationConfig, SkipOverride, WeightedSessionResult


def resolve_cumulative(
    override: SkipOverride,
    results: Sequence[WeightedSessionResult],
    config: EventAggregationConfig,
) -> CumulativeScore:
    """Cumulative score for a (user, event) pair, honoring an admin skip.

    An active skip returns full credit without aggregating anything.
    """
    if override.active:
        return CumulativeScore(percentage=SKIP_PERCENTAGE)
    return aggregate(results, config)


def activate(override: SkipOverride) -> SkipOverride:
    if override.active:
        raise ConflictError("User is already skipped for this event")
    return SkipOverride(active=True)
