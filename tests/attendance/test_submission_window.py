from datetime import datetime, timedelta, timezone

import pytest

from attendance_scoring.attendance.submission_window import (
    format_time_remaining,
    is_session_open,
    minutes_remaining_to_submit,
)

START = datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)


def test_session_opens_at_start_and_closes_three_days_later():
    assert not is_session_open(START, START - timedelta(seconds=1))
    assert is_session_open(START, START)
    assert is_session_open(START, START + timedelta(days=3))
    assert not is_session_open(START, START + timedelta(days=3, seconds=1))


def test_custom_window_length():
    assert not is_session_open(START, START + timedelta(days=2), window_days=1)


def test_minutes_remaining():
    assert minutes_remaining_to_submit(START, START - timedelta(minutes=30)) == pytest.approx(30)
    assert minutes_remaining_to_submit(START, START) == 3 * 24 * 60
    assert minutes_remaining_to_submit(START, START + timedelta(minutes=59, seconds=30)) == 3 * 24 * 60 - 59
    assert minutes_remaining_to_submit(START, START + timedelta(days=4)) == -1


@pytest.mark.parametrize(
    "minutes,expected",
    [
        (-1, "Closed"),
        (0, "Closing now"),
        (45, "45m"),
        (61, "1h 1m"),
        (3 * 24 * 60, "3d"),
        (24 * 60 + 60, "1d 1h"),
        (24 * 60 + 61, "1d 1h"),
        (24 * 60 + 5, "1d 5m"),
    ],
)
def test_format_time_remaining(minutes, expected):
    assert format_time_remaining(minutes) == expected
