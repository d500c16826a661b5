from __future__ import annotations

from datetime import timedelta
from typing import Optional, Sequence

from ...core.enums import FlagKind, Severity
from ..config import AnalyzerConfig
from ..model import AnalysisWindow, LeaveEvent, PatternFlag
from .base import PatternDetector, is_notice_exempt, sample_confidence


class ShortNoticeSpikeDetector(PatternDetector):
    """Bursts of leave requested with little or no notice.

    Notice is ``start_date - requested_at`` in whole days. Sick leave (any
    type matching ``notice_exempt_leave_types``) and requests filed after the
    start date are ignored. The busiest rolling sub-window decides the flag.
    """

    kind = FlagKind.SHORT_NOTICE_SPIKE
    title = "Short-notice spike"
    suggestion = "Discuss the importance of advance notice with the employee"

    def detect(
        self,
        timeline: Sequence[LeaveEvent],
        window: AnalysisWindow,
        config: AnalyzerConfig,
    ) -> Optional[PatternFlag]:
        eligible = [e for e in timeline if e.has_valid_notice and not is_notice_exempt(e, config)]
        short = [e for e in eligible if e.notice_days < config.short_notice_threshold_days]
        if len(short) < config.short_notice_count_threshold:
            return None

        span = timedelta(days=config.short_notice_window_days - 1)
        best: list[LeaveEvent] = []
        # timeline is sorted by start date, so each window is a contiguous run
        for i, first in enumerate(short):
            run = [e for e in short[i:] if e.start_date <= first.start_date + span]
            if len(run) > len(best):
                best = run

        count = len(best)
        if count < config.short_notice_count_threshold:
            return None

        severity = Severity.HIGH if count >= 2 * config.short_notice_count_threshold else Severity.MEDIUM
        summary = (
            f"{count} leaves requested with under {config.short_notice_threshold_days} day(s) notice "
            f"between {best[0].start_date.isoformat()} and {best[-1].start_date.isoformat()} "
            f"({config.short_notice_window_days}-day window, threshold {config.short_notice_count_threshold})"
        )
        return self._flag(
            severity=severity,
            confidence=sample_confidence(len(eligible), 2 * config.short_notice_count_threshold),
            events=best,
            summary=summary,
        )
