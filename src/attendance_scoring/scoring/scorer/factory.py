from __future__ import annotations

from dataclasses import dataclass

from ...core.enums import ScoringRule
from ...core.exceptions import ValidationError
from .base import SessionScorer
from .linear_scorer import LinearLatenessScorer
from .stepped_scorer import SteppedLatenessScorer


@dataclass
class ScorerFactory:
    """Factory Pattern: choose the scorer configured for the deployment."""

    def for_rule(self, rule: ScoringRule | str) -> SessionScorer:
        try:
            rule = ScoringRule(rule)
        except ValueError as exc:
            raise ValidationError(f"Unknown scoring rule: {rule}") from exc

        if rule == ScoringRule.STEPPED:
            return SteppedLatenessScorer()
        return LinearLatenessScorer()
