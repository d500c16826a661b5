from __future__ import annotations

import logging
import threading

from src.leave_patterns.leave_patterns.analysis.config import AnalyzerConfig
from src.leave_patterns.leave_patterns.analysis.detectors.base import PatternDetector
from src.leave_patterns.leave_patterns.analysis.detectors.bridging import WeekendBridgingDetector
from src.leave_patterns.leave_patterns.analysis.service import LeavePatternService
from src.leave_patterns.leave_patterns.core.enums import FlagKind, Severity
from tests.conftest import leave

# 4 Fridays and 2 Wednesdays, one per week
BRIDGING_DATES = ["2026-01-09", "2026-01-14", "2026-01-23", "2026-02-06", "2026-02-11", "2026-02-20"]
# Tuesday, Wednesday, Thursday in different months
QUIET_DATES = ["2026-01-13", "2026-02-18", "2026-03-19"]


def bridging_records(employee_id="E1"):
    return [leave(f"s{i}", day, employee_id=employee_id) for i, day in enumerate(BRIDGING_DATES)]


def quiet_records(employee_id="E1"):
    return [leave(f"q{i}", day, employee_id=employee_id) for i, day in enumerate(QUIET_DATES)]


class ExplodingDetector(PatternDetector):
    kind = FlagKind.DAY_OF_WEEK_BIAS

    def detect(self, timeline, window, config):
        raise RuntimeError("boom")


class CancellingDetector(PatternDetector):
    kind = FlagKind.SHORT_NOTICE_SPIKE

    def __init__(self, cancel_event: threading.Event):
        self.cancel_event = cancel_event
        self.calls = 0

    def detect(self, timeline, window, config):
        self.calls += 1
        self.cancel_event.set()
        return None


def test_weekend_bridging_is_flagged(half_year, fixed_now):
    result = LeavePatternService().analyze("E1", bridging_records(), half_year, now=fixed_now)

    bridging = [f for f in result.flags if f.kind == FlagKind.WEEKEND_BRIDGING]
    assert len(bridging) == 1
    assert bridging[0].severity >= Severity.MEDIUM
    assert bridging[0].evidence.event_ids == ("s0", "s2", "s3", "s5")
    assert result.overall_risk_score > 0


def test_short_notice_spike_is_flagged(half_year, fixed_now):
    records = [leave(f"n{i}", day, notice_days=0) for i, day in enumerate(
        ["2026-03-03", "2026-03-10", "2026-03-17", "2026-03-24"]
    )]

    result = LeavePatternService().analyze("E1", records, half_year, now=fixed_now)

    kinds = [f.kind for f in result.flags]
    assert FlagKind.SHORT_NOTICE_SPIKE in kinds


def test_well_planned_leave_has_no_signal(half_year, fixed_now):
    result = LeavePatternService().analyze("E1", quiet_records(), half_year, now=fixed_now)

    assert result.flags == ()
    assert result.overall_risk_score == 0
    assert result.risk_level == Severity.LOW
    assert result.warnings == ()


def test_zero_peer_std_dev_abstains_with_one_warning(half_year, fixed_now):
    config = AnalyzerConfig.from_mapping({"peerBaseline": {"mean": 1.0, "stdDev": 0}})

    result = LeavePatternService(config).analyze("E1", quiet_records(), half_year, now=fixed_now)

    assert FlagKind.FREQUENCY_DEVIATION not in [f.kind for f in result.flags]
    assert len(result.warnings) == 1
    assert result.warnings[0].startswith(f"{FlagKind.FREQUENCY_DEVIATION.value} skipped:")


def test_empty_history_is_a_clean_result(half_year, fixed_now):
    result = LeavePatternService().analyze("E1", [], half_year, now=fixed_now)

    assert result.employee_id == "E1"
    assert result.flags == ()
    assert result.overall_risk_score == 0
    assert result.warnings == ()
    assert result.generated_at == fixed_now


def test_malformed_record_warns_and_never_reaches_evidence(half_year, fixed_now):
    records = bridging_records() + [leave("broken", "2026-03-06", "2026-03-05")]

    result = LeavePatternService().analyze("E1", records, half_year, now=fixed_now)

    assert result.warnings == ("1 event skipped: end date before start date",)
    for flag in result.flags:
        assert "broken" not in flag.evidence.event_ids


def test_same_input_gives_same_result(half_year, fixed_now):
    service = LeavePatternService()

    first = service.analyze("E1", bridging_records(), half_year, now=fixed_now)
    second = service.analyze("E1", list(reversed(bridging_records())), half_year, now=fixed_now)

    assert first == second
    assert first.to_dict() == second.to_dict()


def test_injected_clock_sets_generated_at(half_year, fixed_now):
    service = LeavePatternService(clock=lambda: fixed_now)

    assert service.analyze("E1", [], half_year).generated_at == fixed_now


def test_failing_detector_does_not_stop_the_others(half_year, fixed_now):
    exploding = ExplodingDetector()
    service = LeavePatternService(detectors=[exploding, WeekendBridgingDetector()])

    result = service.analyze("E1", bridging_records(), half_year, now=fixed_now)

    assert [f.kind for f in result.flags] == [FlagKind.WEEKEND_BRIDGING]
    assert result.warnings == (f"{exploding.name} failed: RuntimeError: boom",)


def test_per_call_config_overrides_service_default(half_year, fixed_now):
    service = LeavePatternService()
    strict = service.resolve_config({"bridgingMinCount": 5})

    result = service.analyze("E1", bridging_records(), half_year, config=strict, now=fixed_now)

    assert FlagKind.WEEKEND_BRIDGING not in [f.kind for f in result.flags]
    assert service.config.bridging_min_count == 3


def test_analysis_logs_a_summary_line(half_year, fixed_now, caplog):
    caplog.set_level(logging.INFO)

    LeavePatternService().analyze("E7", [], half_year, now=fixed_now)

    assert any("employee=E7" in r.getMessage() for r in caplog.records)


def test_team_results_sorted_by_risk_then_id(half_year, fixed_now):
    records = {
        "E3": [],
        "E2": bridging_records("E2"),
        "E1": quiet_records("E1"),
    }

    results = LeavePatternService().analyze_team(records, half_year, now=fixed_now)

    assert [r.employee_id for r in results] == ["E2", "E1", "E3"]
    assert all(r.generated_at == fixed_now for r in results)


def test_team_only_flagged(half_year, fixed_now):
    records = {"E1": quiet_records("E1"), "E2": bridging_records("E2")}

    results = LeavePatternService().analyze_team(records, half_year, now=fixed_now, only_flagged=True)

    assert [r.employee_id for r in results] == ["E2"]


def test_team_matches_individual_analysis(half_year, fixed_now):
    service = LeavePatternService(max_workers=3)
    records = {f"E{i}": bridging_records(f"E{i}") for i in range(5)}

    results = service.analyze_team(records, half_year, now=fixed_now)

    for result in results:
        assert result == service.analyze(result.employee_id, records[result.employee_id], half_year, now=fixed_now)


def test_team_cancel_before_start_returns_nothing(half_year, fixed_now):
    cancel = threading.Event()
    cancel.set()

    results = LeavePatternService().analyze_team(
        {"E1": quiet_records("E1")}, half_year, now=fixed_now, cancel_event=cancel
    )

    assert results == []


def test_team_cancel_stops_pending_employees(half_year, fixed_now):
    cancel = threading.Event()
    detector = CancellingDetector(cancel)
    service = LeavePatternService(detectors=[detector])
    records = {"A": [], "B": [], "C": []}

    results = service.analyze_team(records, half_year, now=fixed_now, cancel_event=cancel, max_workers=1)

    assert [r.employee_id for r in results] == ["A"]
    assert detector.calls == 1
