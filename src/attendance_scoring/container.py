from __future__ import annotations

from dataclasses import dataclass

from .attendance.memory_repository import (
    InMemoryAttendanceRepository,
    InMemoryEventRepository,
    InMemorySessionRepository,
    InMemorySummaryRepository,
    InMemoryUserRepository,
)
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_SUBMISSION_WINDOW_DAYS
from .core.enums import ScoringRule
from .scoring.scorer import ScorerFactory


@dataclass(frozen=True)
class Container:
    users_repo: InMemoryUserRepository
    events_repo: InMemoryEventRepository
    sessions_repo: InMemorySessionRepository
    attendance_repo: InMemoryAttendanceRepository
    summaries_repo: InMemorySummaryRepository

    attendance_service: AttendanceService


def build_container(
    *,
    scoring_rule: ScoringRule | str = ScoringRule.LINEAR,
    submission_window_days: int = DEFAULT_SUBMISSION_WINDOW_DAYS,
    incremental_summary: bool = True,
) -> Container:
    users_repo = InMemoryUserRepository()
    events_repo = InMemoryEventRepository()
    sessions_repo = InMemorySessionRepository()
    attendance_repo = InMemoryAttendanceRepository()
    summaries_repo = InMemorySummaryRepository()

    attendance_service = AttendanceService(
        attendance_repo,
        summaries_repo,
        users_repo,
        events_repo,
        sessions_repo,
        scorer=ScorerFactory().for_rule(scoring_rule),
        submission_window_days=submission_window_days,
        incremental_summary=incremental_summary,
    )

    return Container(
        users_repo=users_repo,
        events_repo=events_repo,
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        summaries_repo=summaries_repo,
        attendance_service=attendance_service,
    )
