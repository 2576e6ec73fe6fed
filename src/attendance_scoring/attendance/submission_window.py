"""Submission window for member self-reporting.

A session opens for submissions at its start time and closes
``window_days`` later.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta

from ..common.datetime_utils import minutes_between
from ..core.constants import DEFAULT_SUBMISSION_WINDOW_DAYS


def closing_time(session_start: datetime, window_days: int = DEFAULT_SUBMISSION_WINDOW_DAYS) -> datetime:
    return session_start + timedelta(days=window_days)


def is_session_open(
    session_start: datetime,
    now: datetime,
    window_days: int = DEFAULT_SUBMISSION_WINDOW_DAYS,
) -> bool:
    return session_start <= now <= closing_time(session_start, window_days)


def minutes_remaining_to_submit(
    session_start: datetime,
    now: datetime,
    window_days: int = DEFAULT_SUBMISSION_WINDOW_DAYS,
) -> float:
    """Minutes until the session opens, -1 once closed, else minutes left (rounded up)."""
    if now < session_start:
        return minutes_between(now, session_start)

    closes = closing_time(session_start, window_days)
    if now > closes:
        return -1
    return math.ceil(minutes_between(now, closes))


def format_time_remaining(minutes: float) -> str:
    if minutes < 0:
        return "Closed"
    if minutes == 0:
        return "Closing now"

    days = int(minutes // (60 * 24))
    hours = int((minutes % (60 * 24)) // 60)
    mins = int(minutes % 60)

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if mins > 0 and len(parts) < 2:
        parts.append(f"{mins}m")
    return " ".join(parts)
