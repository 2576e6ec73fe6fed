from __future__ import annotations

from typing import Iterable

from ..core.constants import DEFAULT_MINIMUM_MINUTES_PER_WEEK
from .aggregation import weighted_sum
from .model import WeightedSessionResult


def weekly_attended_minutes(results: Iterable[WeightedSessionResult]) -> float:
    """Credited minutes across a week's sessions."""
    return weighted_sum(results)


def meets_weekly_requirement(
    weekly_minutes: float,
    minimum_minutes_required: float = DEFAULT_MINIMUM_MINUTES_PER_WEEK,
) -> bool:
    return weekly_minutes >= minimum_minutes_required
