from datetime import datetime, timedelta, timezone

import pytest

from attendance_scoring.core.enums import ScoringRule
from attendance_scoring.core.exceptions import ValidationError
from attendance_scoring.scoring.model import ArrivalEvent, SessionWindow
from attendance_scoring.scoring.scorer import LinearLatenessScorer, ScorerFactory, SteppedLatenessScorer

START = datetime(2026, 2, 2, 9, 0, tzinfo=timezone.utc)
WINDOW = SessionWindow.from_bounds(START, START + timedelta(hours=2))


@pytest.mark.parametrize(
    "seconds_late,expected",
    [
        (-60, 100),
        (0, 100),
        (150, 95),
        (300, 95),
        (450, 90),
        (600, 90),
        (119 * 60, 0),
        (200 * 60, 0),
    ],
)
def test_stepped_deduction(seconds_late, expected):
    arrival = ArrivalEvent(arrival_time=START + timedelta(seconds=seconds_late))
    assert SteppedLatenessScorer().score(WINDOW, arrival).percentage == expected


def test_stepped_zero_duration_scores_zero():
    window = SessionWindow(start=START, end=START, duration_minutes=0)
    assert SteppedLatenessScorer().score(window, ArrivalEvent(arrival_time=START)).percentage == 0


def test_custom_step_size():
    scorer = SteppedLatenessScorer(step_minutes=10, step_percent=10)
    arrival = ArrivalEvent(arrival_time=START + timedelta(minutes=11))
    assert scorer.score(WINDOW, arrival).percentage == 80


def test_factory_picks_scorer_by_rule():
    factory = ScorerFactory()
    assert isinstance(factory.for_rule(ScoringRule.LINEAR), LinearLatenessScorer)
    assert isinstance(factory.for_rule("stepped"), SteppedLatenessScorer)


def test_factory_rejects_unknown_rule():
    with pytest.raises(ValidationError):
        ScorerFactory().for_rule("exponential")
