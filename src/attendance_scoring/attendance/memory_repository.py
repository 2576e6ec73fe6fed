from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from typing import Iterable, Optional, Sequence

from .model import AttendanceRecord, Event, EventAttendanceSummary, Session, User


class InMemoryUserRepository:
    def __init__(self, users: Iterable[User] = ()):
        self._users = {u.user_id: u for u in users}

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def add(self, user: User) -> None:
        self._users[user.user_id] = user


class InMemoryEventRepository:
    def __init__(self, events: Iterable[Event] = ()):
        self._events = {e.event_id: e for e in events}

    def get_by_id(self, event_id: str) -> Optional[Event]:
        return self._events.get(event_id)

    def add(self, event: Event) -> None:
        self._events[event.event_id] = event


class InMemorySessionRepository:
    def __init__(self, sessions: Iterable[Session] = ()):
        self._sessions = {s.session_id: s for s in sessions}

    def get_by_id(self, session_id: str) -> Optional[Session]:
        return self._sessions.get(session_id)

    def list_for_event(self, event_id: str) -> Sequence[Session]:
        items = [s for s in self._sessions.values() if s.event_id == event_id]
        items.sort(key=lambda s: s.start_time)
        return items

    def add(self, session: Session) -> None:
        self._sessions[session.session_id] = session


class InMemoryAttendanceRepository:
    """Attendance rows keyed by (user, session); writes are serialized."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_user_session: dict[tuple[str, str], AttendanceRecord] = {}
        self._id = 0

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        for rec in list(self._by_user_session.values()):
            if rec.attendance_id == attendance_id:
                return rec
        return None

    def get_for_user_and_session(self, user_id: str, session_id: str) -> Optional[AttendanceRecord]:
        return self._by_user_session.get((user_id, session_id))

    def list_for_user(self, user_id: str, *, session_ids: Optional[Sequence[str]] = None) -> Sequence[AttendanceRecord]:
        wanted = set(session_ids) if session_ids is not None else None
        items = [
            r
            for r in self._by_user_session.values()
            if r.user_id == user_id and (wanted is None or r.session_id in wanted)
        ]
        items.sort(key=lambda r: r.arrival_time)
        return items

    def upsert(
        self,
        *,
        user_id: str,
        session_id: str,
        arrival_time: datetime,
        percentage_score: float,
        created_by: str,
    ) -> tuple[AttendanceRecord, bool]:
        with self._lock:
            existing = self._by_user_session.get((user_id, session_id))
            if existing:
                rec = replace(existing, arrival_time=arrival_time, percentage_score=percentage_score)
                self._by_user_session[(user_id, session_id)] = rec
                return rec, False

            self._id += 1
            rec = AttendanceRecord(
                attendance_id=self._id,
                user_id=user_id,
                session_id=session_id,
                arrival_time=arrival_time,
                percentage_score=percentage_score,
                created_by=created_by,
            )
            self._by_user_session[(user_id, session_id)] = rec
            return rec, True

    def update_arrival(self, attendance_id: int, *, arrival_time: datetime, percentage_score: float) -> AttendanceRecord:
        with self._lock:
            existing = self.get_by_id(attendance_id)
            if existing is None:
                raise KeyError(attendance_id)
            rec = replace(existing, arrival_time=arrival_time, percentage_score=percentage_score)
            self._by_user_session[(rec.user_id, rec.session_id)] = rec
            return rec


class InMemorySummaryRepository:
    """Cached summaries plus one lock per (event, user) for callers that
    read, recompute and save a summary as one step."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_event_user: dict[tuple[str, str], EventAttendanceSummary] = {}
        self._pair_locks: dict[tuple[str, str], threading.Lock] = {}

    def get(self, *, event_id: str, user_id: str) -> Optional[EventAttendanceSummary]:
        return self._by_event_user.get((event_id, user_id))

    def save(self, summary: EventAttendanceSummary) -> EventAttendanceSummary:
        with self._lock:
            self._by_event_user[(summary.event_id, summary.user_id)] = summary
        return summary

    def list_for_event(self, event_id: str) -> Sequence[EventAttendanceSummary]:
        items = [s for (eid, _), s in self._by_event_user.items() if eid == event_id]
        items.sort(key=lambda s: s.cumulative, reverse=True)
        return items

    def lock_for(self, *, event_id: str, user_id: str) -> threading.Lock:
        with self._lock:
            return self._pair_locks.setdefault((event_id, user_id), threading.Lock())
