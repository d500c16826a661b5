from __future__ import annotations

from datetime import date, timedelta
from typing import Optional, Sequence

from ...core import constants as c
from ...core.enums import FlagKind, Severity
from ..config import AnalyzerConfig
from ..model import AnalysisWindow, LeaveEvent, PatternFlag
from .base import PatternDetector, sample_confidence


def is_bridging_day(day: date, config: AnalyzerConfig) -> bool:
    """Working day next to a weekend (per ``bridging_weekdays``) or a configured holiday."""
    if day.weekday() not in c.WORKING_WEEKDAYS or day in config.holidays:
        return False
    if day.weekday() in config.bridging_weekdays:
        return True
    one_day = timedelta(days=1)
    return (day - one_day) in config.holidays or (day + one_day) in config.holidays


class WeekendBridgingDetector(PatternDetector):
    """Single days off used to stretch a weekend or public holiday."""

    kind = FlagKind.WEEKEND_BRIDGING
    title = "Weekend / holiday bridging"
    suggestion = "Verify whether these are pre-planned breaks or a habit of extending weekends and holidays"

    def detect(
        self,
        timeline: Sequence[LeaveEvent],
        window: AnalysisWindow,
        config: AnalyzerConfig,
    ) -> Optional[PatternFlag]:
        single_days = [e for e in timeline if e.is_single_day]
        if not single_days:
            return None

        bridging = [e for e in single_days if is_bridging_day(e.start_date, config)]
        count = len(bridging)
        ratio = count / len(single_days)
        if count < config.bridging_min_count or ratio <= config.bridging_ratio_threshold:
            return None

        severity = Severity.HIGH if ratio >= c.BRIDGING_HIGH_RATIO else Severity.MEDIUM
        summary = (
            f"{count} of {len(single_days)} single-day leaves sit next to a weekend or holiday "
            f"(bridging ratio {ratio:.2f}, threshold {config.bridging_ratio_threshold:.2f})"
        )
        return self._flag(
            severity=severity,
            confidence=sample_confidence(len(single_days), 2 * config.bridging_min_count),
            events=bridging,
            summary=summary,
        )
