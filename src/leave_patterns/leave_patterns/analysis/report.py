from __future__ import annotations

from datetime import datetime
from typing import Iterable

from .aggregator import RiskAssessment
from .model import AnalysisResult, AnalysisWindow


class ReportBuilder:
    """Assembles the final, immutable ``AnalysisResult``.

    Everything is copied into tuples so the result holds no reference to the
    normalizer's or detectors' working lists.
    """

    def build(
        self,
        *,
        employee_id: str,
        window: AnalysisWindow,
        generated_at: datetime,
        assessment: RiskAssessment,
        warnings: Iterable[str] = (),
        notes: Iterable[str] = (),
    ) -> AnalysisResult:
        return AnalysisResult(
            employee_id=str(employee_id),
            window=window,
            generated_at=generated_at,
            overall_risk_score=float(assessment.score),
            risk_level=assessment.risk_level,
            flags=tuple(assessment.flags),
            warnings=_unique(warnings),
            notes=_unique(notes),
        )


def _unique(messages: Iterable[str]) -> tuple[str, ...]:
    seen = []
    for message in messages:
        if message not in seen:
            seen.append(message)
    return tuple(seen)
