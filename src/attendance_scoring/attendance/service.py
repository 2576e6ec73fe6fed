from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import ensure_aware, now_utc, parse_iso_datetime
from ..common.validators import require_non_negative
from ..core.constants import DEFAULT_SUBMISSION_WINDOW_DAYS, SKIP_PERCENTAGE
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..scoring.aggregation import advance, state_from_results
from ..scoring.model import AggregationState, ArrivalEvent, SkipOverride, WeightedSessionResult
from ..scoring.override import activate, resolve_cumulative
from ..scoring.scorer import LinearLatenessScorer, SessionScorer
from .model import AttendanceRecord, Event, EventAttendanceSummary, Session, User
from .repository import AttendanceRepository, EventRepository, SessionRepository, SummaryRepository, UserRepository
from .submission_window import is_session_open

logger = logging.getLogger(__name__)


def _as_role(value: Role | str | None) -> Optional[Role]:
    try:
        return Role(value) if value is not None else None
    except ValueError:
        return None


def _check_leader_scope(actor: User, target: User, action: str) -> None:
    """Limit a leader acting on someone else's attendance to their own people."""
    if actor.role == Role.ADMIN:
        return
    if actor.role == Role.DISTRICT_LEADER:
        if actor.district_id != target.district_id:
            raise AuthorizationError(f"District leaders can only {action} attendance for users in their district")
        return
    if actor.role == Role.PART_LEADER:
        if actor.district_id != target.district_id or actor.voice_part != target.voice_part:
            raise AuthorizationError(
                f"Part leaders can only {action} attendance for users in their voice part and district"
            )
        return
    raise AuthorizationError(f"Not authorized to {action} attendance")


def _check_edit_permission(actor: User, target: User) -> None:
    if actor.role == Role.ADMIN:
        return
    if actor.user_id == target.user_id:
        if actor.role not in (Role.DISTRICT_LEADER, Role.PART_LEADER):
            raise AuthorizationError("Cannot edit your own attendance")
        return
    _check_leader_scope(actor, target, "edit")


@dataclass(frozen=True)
class SubmissionResult:
    record: AttendanceRecord
    summary: EventAttendanceSummary
    created: bool


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        summaries: SummaryRepository,
        users: UserRepository,
        events: EventRepository,
        sessions: SessionRepository,
        *,
        scorer: SessionScorer | None = None,
        submission_window_days: int = DEFAULT_SUBMISSION_WINDOW_DAYS,
        incremental_summary: bool = True,
    ):
        self._attendance = attendance
        self._summaries = summaries
        self._users = users
        self._events = events
        self._sessions = sessions
        self._scorer = scorer or LinearLatenessScorer()
        self._window_days = int(submission_window_days)
        self._incremental = bool(incremental_summary)

    # ----- lookups -----

    def _require_user(self, user_id: Optional[str]) -> User:
        user = self._users.get_by_id(user_id) if user_id else None
        if not user:
            raise NotFoundError("User not found")
        return user

    def _require_event(self, event_id: str) -> Event:
        event = self._events.get_by_id(event_id)
        if not event:
            raise NotFoundError("Event not found")
        return event

    def _require_session(self, session_id: str) -> Session:
        session = self._sessions.get_by_id(session_id)
        if not session:
            raise NotFoundError("Session not found")
        return session

    def _is_skipped(self, *, event_id: str, user_id: str) -> bool:
        summary = self._summaries.get(event_id=event_id, user_id=user_id)
        return bool(summary and summary.skip)

    # ----- submission -----

    def _check_eligibility(self, *, actor: User, target: User, session: Session, event: Event, now: datetime) -> None:
        if target.user_id != actor.user_id:
            if not actor.role.is_leader:
                raise AuthorizationError("You can only submit your own attendance")
            _check_leader_scope(actor, target, "submit")

        if actor.role.is_leader:
            if now < event.start_date:
                raise AuthorizationError("Event has not started yet")
            if event.end_date and now > event.end_date:
                raise AuthorizationError("Event has ended")
            return

        if session.district_id and target.district_id != session.district_id:
            raise AuthorizationError("You are not authorized to submit attendance for this session")
        if not is_session_open(session.start_time, now, self._window_days):
            raise AuthorizationError("Session is not open for submissions")

    @staticmethod
    def _parse_arrival(arrival_time: datetime | str, now: datetime) -> datetime:
        if isinstance(arrival_time, str):
            arrival = parse_iso_datetime(arrival_time)
        else:
            arrival = ensure_aware(arrival_time)
        if arrival > now:
            raise ValidationError("Arrival time cannot be in the future")
        return arrival

    def _score(self, session: Session, arrival: datetime) -> float:
        window = session.window
        require_non_negative(window.duration_minutes, "Session duration")
        return self._scorer.score(window, ArrivalEvent(arrival_time=arrival)).percentage

    def submit_attendance(
        self,
        actor_id: Optional[str],
        session_id: str,
        arrival_time: datetime | str,
        *,
        on_behalf_of: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> SubmissionResult:
        """Record a user's arrival for a session and refresh their event summary.

        Members submit once per session. Leaders may re-submit for the people
        they look after, which replaces the stored record.
        """
        if not actor_id:
            raise AuthenticationError("Unauthorized")

        now = ensure_aware(now) if now else now_utc()
        arrival = self._parse_arrival(arrival_time, now)

        actor = self._require_user(actor_id)
        target = self._require_user(on_behalf_of) if on_behalf_of else actor
        session = self._require_session(session_id)
        event = self._require_event(session.event_id)

        self._check_eligibility(actor=actor, target=target, session=session, event=event, now=now)

        with self._summaries.lock_for(event_id=event.event_id, user_id=target.user_id):
            if self._is_skipped(event_id=event.event_id, user_id=target.user_id):
                raise ConflictError("User is skipped for this event and does not need to submit attendance")

            existing = self._attendance.get_for_user_and_session(target.user_id, session.session_id)
            if existing and not actor.role.is_leader:
                raise ConflictError("Already submitted attendance for this session")

            record, created = self._attendance.upsert(
                user_id=target.user_id,
                session_id=session.session_id,
                arrival_time=arrival,
                percentage_score=self._score(session, arrival),
                created_by=actor.user_id,
            )
            summary = self._refresh_summary(target.user_id, event, session, record, created)

        logger.info(
            "attendance %s user=%s session=%s score=%.2f cumulative=%.2f",
            "recorded" if created else "updated",
            target.user_id,
            session.session_id,
            record.percentage_score,
            summary.cumulative,
        )
        return SubmissionResult(record=record, summary=summary, created=created)

    def update_attendance(
        self,
        actor_id: Optional[str],
        attendance_id: int,
        arrival_time: datetime | str,
        *,
        now: Optional[datetime] = None,
    ) -> SubmissionResult:
        """Correct the arrival time of a stored record, rescore it and rebuild the summary."""
        if not actor_id:
            raise AuthenticationError("Unauthorized")

        now = ensure_aware(now) if now else now_utc()
        arrival = self._parse_arrival(arrival_time, now)

        actor = self._require_user(actor_id)
        existing = self._attendance.get_by_id(attendance_id)
        if not existing:
            raise NotFoundError("Attendance record not found")
        target = self._require_user(existing.user_id)

        _check_edit_permission(actor, target)

        session = self._require_session(existing.session_id)
        event = self._require_event(session.event_id)

        with self._summaries.lock_for(event_id=event.event_id, user_id=target.user_id):
            record = self._attendance.update_arrival(
                attendance_id,
                arrival_time=arrival,
                percentage_score=self._score(session, arrival),
            )
            summary = self._recompute(event, target.user_id)

        logger.info(
            "attendance %s edited by=%s user=%s score=%.2f cumulative=%.2f",
            attendance_id,
            actor.user_id,
            target.user_id,
            record.percentage_score,
            summary.cumulative,
        )
        return SubmissionResult(record=record, summary=summary, created=False)

    # ----- summaries -----

    def _results_for(self, user_id: str, event_id: str) -> list[WeightedSessionResult]:
        sessions = {s.session_id: s for s in self._sessions.list_for_event(event_id)}
        if not sessions:
            return []

        records = self._attendance.list_for_user(user_id, session_ids=list(sessions))
        return [
            WeightedSessionResult(
                duration_minutes=sessions[r.session_id].window.duration_minutes,
                percentage=r.percentage_score,
            )
            for r in records
        ]

    def _save_state(self, *, event: Event, user_id: str, state: AggregationState) -> EventAttendanceSummary:
        return self._summaries.save(
            EventAttendanceSummary(
                event_id=event.event_id,
                user_id=user_id,
                cumulative=state.cumulative,
                weighted_sum=state.weighted_sum,
                session_minutes=state.session_minutes,
                skip=False,
                config_snapshot=event.aggregation_config,
            )
        )

    # Callers of _refresh_summary and _recompute hold lock_for(event, user).

    def _refresh_summary(
        self,
        user_id: str,
        event: Event,
        session: Session,
        record: AttendanceRecord,
        created: bool,
    ) -> EventAttendanceSummary:
        config = event.aggregation_config
        current = self._summaries.get(event_id=event.event_id, user_id=user_id)

        # Deltas are only valid on top of a cached state built under the same
        # config; an updated record would also double-count its old score.
        can_use_delta = (
            self._incremental
            and created
            and current is not None
            and not current.skip
            and current.config_snapshot == config
        )
        if not can_use_delta:
            logger.debug("full recompute user=%s event=%s", user_id, event.event_id)
            return self._save_state(
                event=event,
                user_id=user_id,
                state=state_from_results(self._results_for(user_id, event.event_id), config),
            )

        previous = AggregationState(
            cumulative=current.cumulative,
            weighted_sum=current.weighted_sum,
            session_minutes=current.session_minutes,
        )
        result = WeightedSessionResult(duration_minutes=session.window.duration_minutes, percentage=record.percentage_score)
        state, change = advance(previous, result, config)
        logger.debug("incremental update user=%s event=%s delta=%.4f", user_id, event.event_id, change)
        return self._save_state(event=event, user_id=user_id, state=state)

    def _recompute(self, event: Event, user_id: str) -> EventAttendanceSummary:
        current = self._summaries.get(event_id=event.event_id, user_id=user_id)

        override = SkipOverride(active=bool(current and current.skip))
        if override.active:
            cumulative = resolve_cumulative(override, (), event.aggregation_config)
            return self._summaries.save(
                EventAttendanceSummary(
                    event_id=event.event_id,
                    user_id=user_id,
                    cumulative=cumulative.percentage,
                    weighted_sum=current.weighted_sum,
                    session_minutes=current.session_minutes,
                    skip=True,
                    config_snapshot=current.config_snapshot,
                )
            )

        state = state_from_results(self._results_for(user_id, event.event_id), event.aggregation_config)
        return self._save_state(event=event, user_id=user_id, state=state)

    def recompute_summary(
        self, *, actor_role: Role | str | None, event_id: str, user_id: Optional[str]
    ) -> EventAttendanceSummary:
        """Rebuild the cached cumulative score from every stored record."""
        if _as_role(actor_role) != Role.ADMIN:
            raise AuthorizationError("Only administrators can recompute scores")
        if not user_id:
            raise ValidationError("User ID is required")

        event = self._require_event(event_id)
        with self._summaries.lock_for(event_id=event.event_id, user_id=user_id):
            return self._recompute(event, user_id)

    def skip_user(self, *, actor_role: Role | str | None, event_id: str, user_id: Optional[str]) -> EventAttendanceSummary:
        """Grant a user direct entry: cumulative fixed at 100 regardless of attendance."""
        if _as_role(actor_role) != Role.ADMIN:
            raise AuthorizationError("Only administrators can skip users")
        if not user_id:
            raise ValidationError("User ID is required")

        event = self._require_event(event_id)
        self._require_user(user_id)

        with self._summaries.lock_for(event_id=event.event_id, user_id=user_id):
            current = self._summaries.get(event_id=event_id, user_id=user_id)
            activate(SkipOverride(active=bool(current and current.skip)))

            summary = self._summaries.save(
                EventAttendanceSummary(
                    event_id=event.event_id,
                    user_id=user_id,
                    cumulative=SKIP_PERCENTAGE,
                    weighted_sum=current.weighted_sum if current else 0.0,
                    session_minutes=current.session_minutes if current else 0.0,
                    skip=True,
                    config_snapshot=event.aggregation_config,
                )
            )
        logger.info("user=%s skipped for event=%s", user_id, event_id)
        return summary

    def get_summary(self, *, user_id: str, event_id: str) -> Optional[EventAttendanceSummary]:
        self._require_event(event_id)
        return self._summaries.get(event_id=event_id, user_id=user_id)

    def list_event_summaries(self, *, actor_role: Role | str | None, event_id: str) -> Sequence[EventAttendanceSummary]:
        role = _as_role(actor_role)
        if role is None or not role.is_leader:
            raise AuthorizationError("Only leaders can view event statistics")
        self._require_event(event_id)
        return self._summaries.list_for_event(event_id)

    def list_user_attendance(self, user_id: str, *, event_id: Optional[str] = None) -> Sequence[AttendanceRecord]:
        if event_id is None:
            return self._attendance.list_for_user(user_id)

        self._require_event(event_id)
        session_ids = [s.session_id for s in self._sessions.list_for_event(event_id)]
        if not session_ids:
            return []
        return self._attendance.list_for_user(user_id, session_ids=session_ids)
