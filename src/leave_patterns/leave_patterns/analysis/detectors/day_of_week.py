from __future__ import annotations

import calendar
from typing import Optional, Sequence

from ...core import constants as c
from ...core.enums import FlagKind, Severity
from ...core.exceptions import InsufficientSampleError
from ..config import AnalyzerConfig
from ..model import AnalysisWindow, LeaveEvent, PatternFlag
from .base import PatternDetector, sample_confidence


class DayOfWeekBiasDetector(PatternDetector):
    """Leave start days concentrated on particular weekdays.

    Compares the weekday distribution of first leave days against a uniform
    spread over the five working days:
    ``deviation = max_i |observed_i / n - 1/5| / (1/5)``.
    """

    kind = FlagKind.DAY_OF_WEEK_BIAS
    title = "Day-of-week bias"
    suggestion = "Review whether absences on these weekdays are planned or indicate a recurring pattern"

    def detect(
        self,
        timeline: Sequence[LeaveEvent],
        window: AnalysisWindow,
        config: AnalyzerConfig,
    ) -> Optional[PatternFlag]:
        sample = [e for e in timeline if e.start_date.weekday() in c.WORKING_WEEKDAYS]
        n = len(sample)
        if n < config.min_sample_size:
            raise InsufficientSampleError(
                f"{n} weekday leave {'start' if n == 1 else 'starts'} (minimum {config.min_sample_size})"
            )

        counts = {weekday: 0 for weekday in c.WORKING_WEEKDAYS}
        for event in sample:
            counts[event.start_date.weekday()] += 1

        expected = 1 / len(c.WORKING_WEEKDAYS)
        deviations = {wd: abs(count / n - expected) / expected for wd, count in counts.items()}
        deviation = max(deviations.values())
        if deviation <= config.day_of_week_deviation_threshold:
            return None

        # most frequent start day; ties resolve to the earliest weekday
        peak = max(c.WORKING_WEEKDAYS, key=lambda wd: (counts[wd], -wd))
        supporting = [e for e in sample if e.start_date.weekday() == peak]

        if deviation >= c.DAY_OF_WEEK_HIGH_DEVIATION:
            severity = Severity.HIGH
        elif deviation >= c.DAY_OF_WEEK_MEDIUM_DEVIATION:
            severity = Severity.MEDIUM
        else:
            severity = Severity.LOW

        distribution = ", ".join(f"{calendar.day_abbr[wd]} {counts[wd]}" for wd in c.WORKING_WEEKDAYS)
        summary = (
            f"{counts[peak]} of {n} leave starts on {calendar.day_name[peak]}; "
            f"deviation {deviation:.2f} from a uniform weekday spread ({distribution})"
        )
        return self._flag(
            severity=severity,
            confidence=sample_confidence(n, 2 * config.min_sample_size),
            events=supporting,
            summary=summary,
        )
