from .base import SessionScorer, lateness_minutes
from .factory import ScorerFactory
from .linear_scorer import LinearLatenessScorer
from .stepped_scorer import SteppedLatenessScorer

__all__ = [
    "LinearLatenessScorer",
    "ScorerFactory",
    "SessionScorer",
    "SteppedLatenessScorer",
    "lateness_minutes",
]
