from datetime import datetime, timezone

import pytest

from attendance_scoring.common.datetime_utils import ensure_aware, minutes_between, parse_iso_datetime
from attendance_scoring.core.exceptions import ValidationError


def test_parse_zulu_timestamp():
    assert parse_iso_datetime("2026-02-02T09:00:00Z") == datetime(2026, 2, 2, 9, 0, tzinfo=timezone.utc)


def test_parse_offset_is_normalized_to_utc():
    parsed = parse_iso_datetime("2026-02-02T09:00:00+02:00")
    assert parsed.tzinfo == timezone.utc
    assert parsed.hour == 7


@pytest.mark.parametrize("value", ["", "   ", "yesterday", "2026-02-02T09:00:00"])
def test_parse_rejects_missing_garbage_and_naive(value):
    with pytest.raises(ValidationError):
        parse_iso_datetime(value)


def test_ensure_aware_rejects_naive():
    with pytest.raises(ValidationError):
        ensure_aware(datetime(2026, 2, 2, 9, 0))


def test_minutes_between_is_signed():
    a = datetime(2026, 2, 2, 9, 0, tzinfo=timezone.utc)
    b = datetime(2026, 2, 2, 9, 45, tzinfo=timezone.utc)
    assert minutes_between(a, b) == 45
    assert minutes_between(b, a) == -45
