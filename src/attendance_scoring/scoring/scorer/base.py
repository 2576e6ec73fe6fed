from __future__ import annotations

from abc import ABC, abstractmethod

from ...common.datetime_utils import minutes_between
from ..model import ArrivalEvent, SessionScore, SessionWindow


def lateness_minutes(window: SessionWindow, arrival: ArrivalEvent) -> float:
    """Minutes after ``window.start``; early arrivals count as zero."""
    return max(0.0, minutes_between(window.start, arrival.arrival_time))


class SessionScorer(ABC):
    """Scorer interface (Strategy Pattern for session scoring)."""

    @abstractmethod
    def score(self, window: SessionWindow, arrival: ArrivalEvent) -> SessionScore:
        raise NotImplementedError
