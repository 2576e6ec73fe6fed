from __future__ import annotations

from datetime import datetime, timezone

from ..core.exceptions import ValidationError


def minutes_between(start: datetime, end: datetime) -> float:
    """Signed number of minutes from ``start`` to ``end``."""
    return (end - start).total_seconds() / 60


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Naive timestamps are rejected: the scoring engine only ever sees one
    consistent instant representation.
    """
    if not value or not str(value).strip():
        raise ValidationError("arrivalTime is required")
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValidationError(f"Invalid timestamp: {value}") from exc
    return ensure_aware(parsed)


def ensure_aware(value: datetime) -> datetime:
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValidationError("Timestamps must carry a timezone")
    return value.astimezone(timezone.utc)


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)
