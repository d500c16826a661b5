from __future__ import annotations

from datetime import date, datetime, timezone

from src.leave_patterns.leave_patterns.analysis.aggregator import RiskAssessment
from src.leave_patterns.leave_patterns.analysis.model import AnalysisWindow, Evidence, PatternFlag
from src.leave_patterns.leave_patterns.analysis.report import ReportBuilder
from src.leave_patterns.leave_patterns.core.enums import FlagKind, Severity


def test_report_copies_lists_and_drops_repeated_messages():
    window = AnalysisWindow(start=date(2026, 1, 1), end=date(2026, 3, 31))
    flag = PatternFlag(
        kind=FlagKind.SHORT_NOTICE_SPIKE,
        severity=Severity.MEDIUM,
        confidence=0.66666,
        evidence=Evidence(("a", "b"), "2 short-notice requests"),
        title="Short-notice spike",
        suggestion="Talk to the employee",
    )
    warnings = ["1 event skipped: missing dates", "1 event skipped: missing dates"]

    result = ReportBuilder().build(
        employee_id=42,
        window=window,
        generated_at=datetime(2026, 4, 1, 8, 0, tzinfo=timezone.utc),
        assessment=RiskAssessment(score=16.67, risk_level=Severity.LOW, flags=(flag,)),
        warnings=warnings,
        notes=[],
    )
    warnings.append("later")

    assert result.employee_id == "42"
    assert result.warnings == ("1 event skipped: missing dates",)
    assert result.has_flags


def test_result_serializes_to_plain_json_types():
    window = AnalysisWindow(start=date(2026, 1, 1), end=date(2026, 3, 31))
    flag = PatternFlag(
        kind=FlagKind.WEEKEND_BRIDGING,
        severity=Severity.HIGH,
        confidence=0.123456,
        evidence=Evidence(("x",), "summary"),
    )
    result = ReportBuilder().build(
        employee_id="E1",
        window=window,
        generated_at=datetime(2026, 4, 1, 8, 0, tzinfo=timezone.utc),
        assessment=RiskAssessment(score=45.0, risk_level=Severity.MEDIUM, flags=(flag,)),
        notes=["DAY_OF_WEEK_BIAS abstained: not enough events"],
    )

    assert result.to_dict() == {
        "employee_id": "E1",
        "window": {"from": "2026-01-01", "to": "2026-03-31"},
        "generated_at": "2026-04-01T08:00:00+00:00",
        "overall_risk_score": 45.0,
        "risk_level": "MEDIUM",
        "flags": [
            {
                "kind": "WEEKEND_BRIDGING",
                "title": "",
                "severity": "HIGH",
                "confidence": 0.1235,
                "evidence": {"event_ids": ["x"], "summary": "summary"},
                "suggestion": "",
            }
        ],
        "warnings": [],
        "notes": ["DAY_OF_WEEK_BIAS abstained: not enough events"],
    }
