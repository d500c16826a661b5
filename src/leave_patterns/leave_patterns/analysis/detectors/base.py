from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Optional, Sequence

from ...core.enums import FlagKind, Severity
from ..config import AnalyzerConfig
from ..model import AnalysisWindow, Evidence, LeaveEvent, PatternFlag


class PatternDetector(ABC):
    """Strategy Pattern: one category of irregularity per detector.

    Implementations are stateless and must not mutate the timeline. Returning
    None means "no signal"; raising a ``DetectorAbstained`` subclass means the
    data cannot support a verdict either way.
    """

    kind: FlagKind
    title: str = ""
    suggestion: str = ""

    @property
    def name(self) -> str:
        return self.kind.value

    @abstractmethod
    def detect(
        self,
        timeline: Sequence[LeaveEvent],
        window: AnalysisWindow,
        config: AnalyzerConfig,
    ) -> Optional[PatternFlag]:
        raise NotImplementedError

    def _flag(self, *, severity: Severity, confidence: float, events: Iterable[LeaveEvent], summary: str) -> PatternFlag:
        return PatternFlag(
            kind=self.kind,
            severity=severity,
            confidence=round(min(max(confidence, 0.0), 1.0), 4),
            evidence=Evidence(event_ids=tuple(e.event_id for e in events), summary=summary),
            title=self.title,
            suggestion=self.suggestion,
        )


def sample_confidence(sample_size: float, full_at: float) -> float:
    """Linear ramp from 0 to 1, reaching 1 once the sample reaches ``full_at``."""
    if full_at <= 0:
        return 1.0
    return min(1.0, sample_size / full_at)


def is_notice_exempt(event: LeaveEvent, config: AnalyzerConfig) -> bool:
    leave_type = event.leave_type_id.lower()
    return any(token and token in leave_type for token in config.notice_exempt_leave_types)
