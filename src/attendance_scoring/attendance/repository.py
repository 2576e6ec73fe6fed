from __future__ import annotations

from datetime import datetime
from typing import ContextManager, Optional, Protocol, Sequence

from .model import AttendanceRecord, Event, EventAttendanceSummary, Session, User


class UserRepository(Protocol):
    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError


class EventRepository(Protocol):
    def get_by_id(self, event_id: str) -> Optional[Event]:
        raise NotImplementedError


class SessionRepository(Protocol):
    def get_by_id(self, session_id: str) -> Optional[Session]:
        raise NotImplementedError

    def list_for_event(self, event_id: str) -> Sequence[Session]:
        raise NotImplementedError


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_session(self, user_id: str, session_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_user(self, user_id: str, *, session_ids: Optional[Sequence[str]] = None) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        user_id: str,
        session_id: str,
        arrival_time: datetime,
        percentage_score: float,
        created_by: str,
    ) -> tuple[AttendanceRecord, bool]:
        """Insert or replace the (user, session) record; the flag is True on insert."""

        raise NotImplementedError

    def update_arrival(self, attendance_id: int, *, arrival_time: datetime, percentage_score: float) -> AttendanceRecord:
        raise NotImplementedError


class SummaryRepository(Protocol):
    def get(self, *, event_id: str, user_id: str) -> Optional[EventAttendanceSummary]:
        raise NotImplementedError

    def save(self, summary: EventAttendanceSummary) -> EventAttendanceSummary:
        raise NotImplementedError

    def list_for_event(self, event_id: str) -> Sequence[EventAttendanceSummary]:
        raise NotImplementedError

    def lock_for(self, *, event_id: str, user_id: str) -> ContextManager:
        """Lock held across a read-modify-write of one (event, user) summary."""

        raise NotImplementedError
