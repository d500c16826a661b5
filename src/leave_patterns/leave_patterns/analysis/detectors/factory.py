from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ...core.enums import FlagKind
from ...core.exceptions import ConfigurationError
from .base import PatternDetector
from .bridging import WeekendBridgingDetector
from .clustering import SingleDayClusteringDetector
from .day_of_week import DayOfWeekBiasDetector
from .frequency import FrequencyDeviationDetector
from .short_notice import ShortNoticeSpikeDetector

_DETECTORS = {
    FlagKind.DAY_OF_WEEK_BIAS: DayOfWeekBiasDetector,
    FlagKind.WEEKEND_BRIDGING: WeekendBridgingDetector,
    FlagKind.SHORT_NOTICE_SPIKE: ShortNoticeSpikeDetector,
    FlagKind.FREQUENCY_DEVIATION: FrequencyDeviationDetector,
    FlagKind.SINGLE_DAY_CLUSTERING: SingleDayClusteringDetector,
}


@dataclass
class DetectorFactory:
    """Factory Pattern: build the detector set, optionally restricted to some kinds."""

    def for_kind(self, kind: FlagKind) -> PatternDetector:
        return _DETECTORS[kind]()

    def build(self, kinds: Optional[Iterable] = None) -> tuple[PatternDetector, ...]:
        if kinds is None:
            return tuple(self.for_kind(kind) for kind in FlagKind)

        selected = []
        for raw in kinds:
            try:
                kind = raw if isinstance(raw, FlagKind) else FlagKind(str(raw).upper())
            except ValueError as exc:
                raise ConfigurationError(f"Unknown detector: {raw}") from exc
            if kind not in selected:
                selected.append(kind)
        return tuple(self.for_kind(kind) for kind in sorted(selected, key=lambda k: k.order))
