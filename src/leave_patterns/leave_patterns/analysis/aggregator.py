from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..core import constants as c
from ..core.enums import Severity
from .config import AnalyzerConfig
from .model import PatternFlag


@dataclass(frozen=True)
class RiskAssessment:
    score: float
    risk_level: Severity
    flags: tuple[PatternFlag, ...]


def flag_sort_key(flag: PatternFlag) -> tuple:
    """Severity descending, then canonical kind order."""
    return (-flag.severity.rank, flag.kind.order)


class RiskAggregator:
    """Fan-in: weighted, capped sum of flag contributions.

    ``score = min(100, sum(weight[severity] * confidence))``. Weights are
    non-negative, so adding a flag or raising a severity/confidence never
    lowers the score.
    """

    def __init__(self, config: AnalyzerConfig):
        self._config = config

    def score(self, flags: Iterable[PatternFlag]) -> float:
        weights = self._config.severity_weights
        total = sum(weights[f.severity] * f.confidence for f in flags)
        return round(min(c.MAX_RISK_SCORE, total), 2)

    def classify(self, score: float) -> Severity:
        if score >= self._config.high_risk_threshold:
            return Severity.HIGH
        if score >= self._config.medium_risk_threshold:
            return Severity.MEDIUM
        return Severity.LOW

    def aggregate(self, flags: Iterable[PatternFlag]) -> RiskAssessment:
        ordered = tuple(sorted((f for f in flags if f is not None), key=flag_sort_key))
        score = self.score(ordered)
        return RiskAssessment(score=score, risk_level=self.classify(score), flags=ordered)
