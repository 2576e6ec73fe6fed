from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.validators import require_non_empty
from ..container import Container
from ..core.exceptions import DomainError
from .model import AttendanceRecord, EventAttendanceSummary

logger = logging.getLogger(__name__)


def _record_to_json(r: AttendanceRecord) -> dict:
    return {
        "id": r.attendance_id,
        "userId": r.user_id,
        "sessionId": r.session_id,
        "arrivalTime": r.arrival_time.isoformat(),
        "percentageScore": r.percentage_score,
        "createdById": r.created_by,
    }


def _summary_to_json(s: EventAttendanceSummary | None) -> dict | None:
    if s is None:
        return None
    return {
        "eventId": s.event_id,
        "userId": s.user_id,
        "cumulative": s.cumulative,
        "skip": s.skip,
    }


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "error": "Unauthorized"}), 401
            return view(*args, **kwargs)

        return wrapper

    def _error(e: Exception):
        if isinstance(e, DomainError):
            return jsonify({"success": False, "error": str(e)}), e.status_code
        logger.exception("unhandled error on %s %s", request.method, request.path)
        return jsonify({"success": False, "error": "Internal server error"}), 500

    @app.route("/api/v1/attendance", methods=["GET"], endpoint="attendance_list")
    @login_required
    def attendance_list():
        try:
            rows = service.list_user_attendance(session["user_id"])
        except Exception as e:
            return _error(e)
        data = [_record_to_json(r) for r in rows]
        return jsonify({"success": True, "data": data, "total": len(data)})

    @app.route("/api/v1/attendance", methods=["POST"], endpoint="attendance_submit")
    @login_required
    def attendance_submit():
        """Submit attendance for a session (leaders may re-submit to replace it).

        Body: ``{"sessionId", "arrivalTime", "userId"?}``; ``userId`` lets a
        leader report on behalf of a member.
        """
        body = request.get_json(silent=True) or {}
        try:
            session_id = require_non_empty(body.get("sessionId"), "sessionId")
            result = service.submit_attendance(
                session["user_id"],
                session_id,
                str(body.get("arrivalTime") or ""),
                on_behalf_of=body.get("userId") or None,
            )
        except Exception as e:
            return _error(e)

        return (
            jsonify(
                {
                    "success": True,
                    "data": {**_record_to_json(result.record), "summary": _summary_to_json(result.summary)},
                    "message": f"Attendance recorded at {result.record.percentage_score:.2f}%",
                }
            ),
            201 if result.created else 200,
        )

    @app.route("/api/v1/attendance/<int:attendance_id>", methods=["PATCH"], endpoint="attendance_update")
    @login_required
    def attendance_update(attendance_id: int):
        """Correct a stored record's arrival time. Body: ``{"arrivalTime"}``."""
        body = request.get_json(silent=True) or {}
        try:
            arrival = require_non_empty(body.get("arrivalTime"), "arrivalTime")
            result = service.update_attendance(session["user_id"], attendance_id, arrival)
        except Exception as e:
            return _error(e)

        return jsonify(
            {
                "success": True,
                "data": {**_record_to_json(result.record), "summary": _summary_to_json(result.summary)},
                "message": "Attendance updated successfully",
            }
        )

    @app.route("/api/v1/events/<event_id>/attendance", methods=["GET"], endpoint="event_attendance")
    @login_required
    def event_attendance(event_id: str):
        user_id = session["user_id"]
        try:
            rows = service.list_user_attendance(user_id, event_id=event_id)
            summary = service.get_summary(user_id=user_id, event_id=event_id)
        except Exception as e:
            return _error(e)

        data = [_record_to_json(r) for r in rows]
        return jsonify({"success": True, "data": data, "total": len(data), "summary": _summary_to_json(summary)})

    @app.route("/api/v1/events/<event_id>/summaries", methods=["GET"], endpoint="event_summaries")
    @login_required
    def event_summaries(event_id: str):
        try:
            rows = service.list_event_summaries(actor_role=session.get("role"), event_id=event_id)
        except Exception as e:
            return _error(e)
        data = [_summary_to_json(s) for s in rows]
        return jsonify({"success": True, "data": data, "total": len(data)})

    @app.route("/api/v1/events/<event_id>/skip", methods=["POST"], endpoint="event_skip")
    @login_required
    def event_skip(event_id: str):
        """Admin grants a user direct entry to the event without attendance."""
        body = request.get_json(silent=True) or {}
        try:
            summary = service.skip_user(actor_role=session.get("role"), event_id=event_id, user_id=body.get("userId"))
        except Exception as e:
            return _error(e)
        return jsonify(
            {
                "success": True,
                "data": _summary_to_json(summary),
                "message": "User skipped successfully with direct entry granted",
            }
        )

    @app.route("/api/v1/events/<event_id>/recompute", methods=["POST"], endpoint="event_recompute")
    @login_required
    def event_recompute(event_id: str):
        """Admin: rebuild a user's cached cumulative score from stored records."""
        body = request.get_json(silent=True) or {}
        try:
            summary = service.recompute_summary(actor_role=session.get("role"), event_id=event_id, user_id=body.get("userId"))
        except Exception as e:
            return _error(e)
        return jsonify({"success": True, "data": _summary_to_json(summary)})
