from __future__ import annotations

from ..model import ArrivalEvent, SessionScore, SessionWindow, clamp_percentage
from .base import SessionScorer, lateness_minutes


class LinearLatenessScorer(SessionScorer):
    """Straight-line decay: 100 when on time, 0 at or after the end."""

    def score(self, window: SessionWindow, arrival: ArrivalEvent) -> SessionScore:
        duration = window.duration_minutes
        late = lateness_minutes(window, arrival)

        if duration == 0 or late >= duration:
            return SessionScore(percentage=0.0)

        percentage = 100 - (late / duration) * 100
        return SessionScore(percentage=clamp_percentage(percentage))
