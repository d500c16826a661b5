from __future__ import annotations

from datetime import timedelta
from typing import Optional, Sequence

from ...core import constants as c
from ...core.enums import FlagKind, Severity
from ...core.exceptions import InsufficientSampleError
from ..config import AnalyzerConfig
from ..model import AnalysisWindow, LeaveEvent, PatternFlag
from .base import PatternDetector, sample_confidence


def isolated_single_days(timeline: Sequence[LeaveEvent]) -> list[LeaveEvent]:
    """Full single-day events (duration 1) with no other leave within ``ISOLATION_GAP_DAYS``."""
    gap = timedelta(days=c.ISOLATION_GAP_DAYS)
    isolated = []
    for event in timeline:
        if not event.is_single_day or event.duration_days != 1:
            continue
        lo = event.start_date - gap
        hi = event.start_date + gap
        neighbour = any(
            other is not event and other.start_date <= hi and other.end_date >= lo
            for other in timeline
        )
        if not neighbour:
            isolated.append(event)
    return isolated


class SingleDayClusteringDetector(PatternDetector):
    """Many scattered one-day absences instead of consolidated leave."""

    kind = FlagKind.SINGLE_DAY_CLUSTERING
    title = "Single-day clustering"
    suggestion = "Review whether scattered single-day absences are avoiding longer, documented leave"

    def detect(
        self,
        timeline: Sequence[LeaveEvent],
        window: AnalysisWindow,
        config: AnalyzerConfig,
    ) -> Optional[PatternFlag]:
        total = len(timeline)
        if total < config.clustering_min_events:
            raise InsufficientSampleError(f"{total} leave events (minimum {config.clustering_min_events})")

        isolated = isolated_single_days(timeline)
        ratio = len(isolated) / total
        if ratio <= config.isolation_ratio_threshold:
            return None

        if ratio >= c.CLUSTERING_HIGH_RATIO:
            severity = Severity.HIGH
        elif ratio >= c.CLUSTERING_MEDIUM_RATIO:
            severity = Severity.MEDIUM
        else:
            severity = Severity.LOW

        on_bridging_weekdays = sum(1 for e in isolated if e.start_date.weekday() in config.bridging_weekdays)
        if on_bridging_weekdays * 2 >= len(isolated):
            severity = severity.raised()

        summary = (
            f"{len(isolated)} of {total} leave events are isolated single days "
            f"(ratio {ratio:.2f}, threshold {config.isolation_ratio_threshold:.2f}); "
            f"{on_bridging_weekdays} fall on a bridging weekday"
        )
        return self._flag(
            severity=severity,
            confidence=sample_confidence(total, 2 * config.clustering_min_events),
            events=isolated,
            summary=summary,
        )
