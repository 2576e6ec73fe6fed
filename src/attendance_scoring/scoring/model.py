from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from ..common.datetime_utils import minutes_between
from ..core.constants import MAX_PERCENTAGE, MIN_PERCENTAGE


@dataclass(frozen=True)
class SessionWindow:
    """Scheduled start/end of one session.

    ``duration_minutes`` is authoritative; it may be stored rather than derived.
    """

    start: datetime
    end: datetime
    duration_minutes: float

    @classmethod
    def from_bounds(cls, start: datetime, end: datetime) -> "SessionWindow":
        return cls(start=start, end=end, duration_minutes=minutes_between(start, end))


@dataclass(frozen=True)
class ArrivalEvent:
    arrival_time: datetime


@dataclass(frozen=True)
class SessionScore:
    percentage: float


@dataclass(frozen=True)
class WeightedSessionResult:
    """A session percentage paired with the duration that weights it."""

    duration_minutes: float
    percentage: float


@dataclass(frozen=True)
class EventAggregationConfig:
    weekly_constraint: bool = False
    minimum_minutes_per_week: Optional[float] = None

    @property
    def is_constrained(self) -> bool:
        # A missing or non-positive quota falls back to the weighted average.
        return bool(
            self.weekly_constraint
            and self.minimum_minutes_per_week is not None
            and self.minimum_minutes_per_week > 0
        )

    def denominator(self, results: Iterable[WeightedSessionResult]) -> float:
        """Minutes that count as 100% for this config."""
        if self.is_constrained:
            return float(self.minimum_minutes_per_week)
        return float(sum(r.duration_minutes for r in results))


@dataclass(frozen=True)
class CumulativeScore:
    percentage: float


@dataclass(frozen=True)
class SkipOverride:
    active: bool = False


@dataclass(frozen=True)
class AggregationState:
    """Running values the incremental path needs between submissions."""

    cumulative: float = 0.0
    weighted_sum: float = 0.0
    session_minutes: float = 0.0


def clamp_percentage(value: float) -> float:
    return max(MIN_PERCENTAGE, min(MAX_PERCENTAGE, value))
