from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role
from ..scoring.model import EventAggregationConfig, SessionWindow


@dataclass(frozen=True)
class User:
    user_id: str
    full_name: str
    role: Role
    district_id: Optional[str] = None
    voice_part: Optional[str] = None


@dataclass(frozen=True)
class Event:
    event_id: str
    title: str
    start_date: datetime
    end_date: Optional[datetime] = None
    weekly_constraint: bool = False
    minimum_minutes_per_week: Optional[float] = None

    @property
    def aggregation_config(self) -> EventAggregationConfig:
        return EventAggregationConfig(
            weekly_constraint=self.weekly_constraint,
            minimum_minutes_per_week=self.minimum_minutes_per_week,
        )


@dataclass(frozen=True)
class Session:
    session_id: str
    event_id: str
    start_time: datetime
    end_time: datetime
    district_id: Optional[str] = None
    duration_minutes: Optional[float] = None

    @property
    def window(self) -> SessionWindow:
        if self.duration_minutes is None:
            return SessionWindow.from_bounds(self.start_time, self.end_time)
        return SessionWindow(start=self.start_time, end=self.end_time, duration_minutes=self.duration_minutes)


@dataclass(frozen=True)
class AttendanceRecord:
    """One (user, session) submission; leader re-submissions and edits replace it."""

    attendance_id: int
    user_id: str
    session_id: str
    arrival_time: datetime
    percentage_score: float
    created_by: str


@dataclass(frozen=True)
class EventAttendanceSummary:
    """Cached cumulative score for one (user, event) pair.

    ``config_snapshot`` is the event config the cached values were computed
    under; the incremental path is only valid while it still matches.
    """

    event_id: str
    user_id: str
    cumulative: float
    weighted_sum: float = 0.0
    session_minutes: float = 0.0
    skip: bool = False
    config_snapshot: Optional[EventAggregationConfig] = None
