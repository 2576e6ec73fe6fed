from __future__ import annotations

import math

from ...core.constants import STEP_MINUTES, STEP_PERCENT
from ..model import ArrivalEvent, SessionScore, SessionWindow, clamp_percentage
from .base import SessionScorer, lateness_minutes


class SteppedLatenessScorer(SessionScorer):
    """Deduct ``step_percent`` for every started ``step_minutes`` of lateness.

    2.5 minutes late costs one step, 5 minutes one step, 7.5 minutes two.
    """

    def __init__(self, *, step_minutes: int = STEP_MINUTES, step_percent: int = STEP_PERCENT):
        self._step_minutes = int(step_minutes)
        self._step_percent = int(step_percent)

    def score(self, window: SessionWindow, arrival: ArrivalEvent) -> SessionScore:
        late = lateness_minutes(window, arrival)
        if window.duration_minutes == 0 or late >= window.duration_minutes:
            return SessionScore(percentage=0.0)
        if late == 0:
            return SessionScore(percentage=100.0)

        deduction = math.ceil(late / self._step_minutes) * self._step_percent
        return SessionScore(percentage=round(clamp_percentage(100 - deduction), 2))
