from __future__ import annotations

from typing import Optional, Sequence

from ...common.datetime_utils import overlap_days
from ...core import constants as c
from ...core.enums import FlagKind, Severity
from ...core.exceptions import DegenerateBaselineError, InsufficientSampleError
from ..config import AnalyzerConfig
from ..model import AnalysisWindow, LeaveEvent, PatternFlag
from .base import PatternDetector, sample_confidence


def leave_days_in_window(event: LeaveEvent, window: AnalysisWindow) -> float:
    """Share of the event's leave days that fall inside the window."""
    span = (event.end_date - event.start_date).days + 1
    inside = overlap_days(event.start_date, event.end_date, window.start, window.end)
    return event.duration_days * inside / span


class FrequencyDeviationDetector(PatternDetector):
    """Leave-days-per-month rate compared with a caller-supplied peer baseline."""

    kind = FlagKind.FREQUENCY_DEVIATION
    title = "Frequency deviation"
    suggestion = "Check in with the employee to understand what is driving the change in leave usage"

    def detect(
        self,
        timeline: Sequence[LeaveEvent],
        window: AnalysisWindow,
        config: AnalyzerConfig,
    ) -> Optional[PatternFlag]:
        baseline = config.peer_baseline
        if baseline is None:
            raise InsufficientSampleError("no peer baseline supplied")
        if baseline.std_dev <= 0:
            raise DegenerateBaselineError(
                f"peer baseline standard deviation is {baseline.std_dev:g}; cannot compute a z-score"
            )
        if not timeline:
            raise InsufficientSampleError("no leave events in the window")

        # windows shorter than a month are rated as one month
        months = max(window.days / c.AVERAGE_DAYS_PER_MONTH, 1.0)
        total_days = sum(leave_days_in_window(e, window) for e in timeline)
        rate = total_days / months
        z = (rate - baseline.mean) / baseline.std_dev
        if abs(z) <= config.frequency_z_threshold:
            return None

        magnitude = abs(z)
        if magnitude >= c.FREQUENCY_HIGH_Z:
            severity = Severity.HIGH
        elif magnitude >= c.FREQUENCY_MEDIUM_Z:
            severity = Severity.MEDIUM
        else:
            severity = Severity.LOW

        direction = "above" if z > 0 else "below"
        summary = (
            f"{rate:.2f} leave days/month vs peer mean {baseline.mean:.2f} "
            f"(sd {baseline.std_dev:.2f}); z-score {z:+.2f}, {direction} the peer group"
        )
        return self._flag(
            severity=severity,
            confidence=sample_confidence(months, c.FREQUENCY_FULL_CONFIDENCE_MONTHS),
            events=timeline,
            summary=summary,
        )
