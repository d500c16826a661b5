from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import FlagKind, LeaveStatus, Severity
from ..core.exceptions import InvalidWindowError


@dataclass(frozen=True)
class AnalysisWindow:
    """Time span under examination (inclusive on both ends)."""

    start: date
    end: date

    def __post_init__(self):
        if self.start > self.end:
            raise InvalidWindowError(
                f"Analysis window starts after it ends ({self.start.isoformat()} > {self.end.isoformat()})"
            )

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def overlaps(self, start: date, end: date) -> bool:
        return start <= self.end and end >= self.start

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def to_dict(self) -> dict:
        return {"from": self.start.isoformat(), "to": self.end.isoformat()}


@dataclass(frozen=True)
class LeaveEvent:
    """Thực thể miền (domain): one approved or pending leave instance.

    Only produced by the normalizer; detectors treat it as read-only.
    """

    event_id: str
    employee_id: str
    leave_type_id: str
    start_date: date
    end_date: date
    status: LeaveStatus
    duration_days: float
    requested_at: Optional[datetime] = None

    @property
    def is_single_day(self) -> bool:
        return self.start_date == self.end_date

    @property
    def has_valid_notice(self) -> bool:
        """False when the request timestamp is missing or filed after the start date."""
        return self.requested_at is not None and self.requested_at.date() <= self.start_date

    @property
    def notice_days(self) -> Optional[int]:
        if not self.has_valid_notice:
            return None
        return (self.start_date - self.requested_at.date()).days

    @property
    def dedup_key(self) -> tuple:
        return (self.employee_id, self.start_date, self.end_date, self.leave_type_id)


@dataclass(frozen=True)
class PeerBaseline:
    """Peer-group leave-days-per-month summary supplied by the caller."""

    mean: float
    std_dev: float


@dataclass(frozen=True)
class Evidence:
    event_ids: tuple[str, ...]
    summary: str


@dataclass(frozen=True)
class PatternFlag:
    kind: FlagKind
    severity: Severity
    confidence: float
    evidence: Evidence
    title: str = ""
    suggestion: str = ""

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "title": self.title,
            "severity": self.severity.value,
            "confidence": round(self.confidence, 4),
            "evidence": {
                "event_ids": list(self.evidence.event_ids),
                "summary": self.evidence.summary,
            },
            "suggestion": self.suggestion,
        }


@dataclass(frozen=True)
class AnalysisResult:
    employee_id: str
    window: AnalysisWindow
    generated_at: datetime
    overall_risk_score: float
    risk_level: Severity
    flags: tuple[PatternFlag, ...] = ()
    warnings: tuple[str, ...] = ()
    notes: tuple[str, ...] = field(default=())

    @property
    def has_flags(self) -> bool:
        return bool(self.flags)

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "window": self.window.to_dict(),
            "generated_at": self.generated_at.isoformat(),
            "overall_risk_score": round(self.overall_risk_score, 2),
            "risk_level": self.risk_level.value,
            "flags": [f.to_dict() for f in self.flags],
            "warnings": list(self.warnings),
            "notes": list(self.notes),
        }
