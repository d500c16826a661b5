from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping, Optional

from ..common.datetime_utils import coerce_date
from ..common.validators import (
    require_non_negative,
    require_number,
    require_positive_int,
    require_ratio,
)
from ..core import constants as c
from ..core.enums import Severity
from ..core.exceptions import ConfigurationError
from .model import PeerBaseline


def _default_weights() -> dict:
    return {Severity(k): v for k, v in c.DEFAULT_SEVERITY_WEIGHTS.items()}


@dataclass(frozen=True)
class AnalyzerConfig:
    """Every threshold used by the pipeline.

    Passed explicitly into each detector and the aggregator; nothing is read
    from module-level state at analysis time.
    """

    day_of_week_deviation_threshold: float = c.DEFAULT_DAY_OF_WEEK_DEVIATION_THRESHOLD
    min_sample_size: int = c.DEFAULT_MIN_SAMPLE_SIZE
    bridging_ratio_threshold: float = c.DEFAULT_BRIDGING_RATIO_THRESHOLD
    short_notice_threshold_days: int = c.DEFAULT_SHORT_NOTICE_THRESHOLD_DAYS
    short_notice_count_threshold: int = c.DEFAULT_SHORT_NOTICE_COUNT_THRESHOLD
    frequency_z_threshold: float = c.DEFAULT_FREQUENCY_Z_THRESHOLD
    isolation_ratio_threshold: float = c.DEFAULT_ISOLATION_RATIO_THRESHOLD

    bridging_min_count: int = c.DEFAULT_BRIDGING_MIN_COUNT
    bridging_weekdays: tuple[int, ...] = c.DEFAULT_BRIDGING_WEEKDAYS
    holidays: frozenset = frozenset()
    short_notice_window_days: int = c.DEFAULT_SHORT_NOTICE_WINDOW_DAYS
    notice_exempt_leave_types: tuple[str, ...] = c.DEFAULT_NOTICE_EXEMPT_LEAVE_TYPES
    clustering_min_events: int = c.DEFAULT_CLUSTERING_MIN_EVENTS
    peer_baseline: Optional[PeerBaseline] = None
    severity_weights: Mapping[Severity, float] = field(default_factory=_default_weights)
    medium_risk_threshold: float = c.DEFAULT_MEDIUM_RISK_THRESHOLD
    high_risk_threshold: float = c.DEFAULT_HIGH_RISK_THRESHOLD

    def __post_init__(self):
        require_non_negative(self.day_of_week_deviation_threshold, "day_of_week_deviation_threshold")
        require_positive_int(self.min_sample_size, "min_sample_size")
        require_ratio(self.bridging_ratio_threshold, "bridging_ratio_threshold")
        require_non_negative(self.short_notice_threshold_days, "short_notice_threshold_days")
        require_positive_int(self.short_notice_count_threshold, "short_notice_count_threshold")
        require_non_negative(self.frequency_z_threshold, "frequency_z_threshold")
        require_ratio(self.isolation_ratio_threshold, "isolation_ratio_threshold")
        require_positive_int(self.bridging_min_count, "bridging_min_count")
        require_positive_int(self.short_notice_window_days, "short_notice_window_days")
        require_positive_int(self.clustering_min_events, "clustering_min_events")

        for weekday in self.bridging_weekdays:
            if weekday not in c.WORKING_WEEKDAYS:
                raise ConfigurationError("bridging_weekdays must be working weekdays (0=Monday .. 4=Friday)")

        for severity in Severity:
            if severity not in self.severity_weights:
                raise ConfigurationError(f"severity_weights is missing {severity.value}")
            require_non_negative(self.severity_weights[severity], f"severity_weights[{severity.value}]")

        medium = require_non_negative(self.medium_risk_threshold, "medium_risk_threshold")
        high = require_non_negative(self.high_risk_threshold, "high_risk_threshold")
        if medium > high:
            raise ConfigurationError("medium_risk_threshold must not exceed high_risk_threshold")

    def with_overrides(self, **overrides) -> "AnalyzerConfig":
        return AnalyzerConfig.from_mapping(overrides, base=self)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]], *, base: Optional["AnalyzerConfig"] = None) -> "AnalyzerConfig":
        """Build a config from a (possibly camelCase) mapping of overrides."""
        base = base or cls()
        if not data:
            return base
        if not isinstance(data, Mapping):
            raise ConfigurationError("Analyzer options must be an object of name: value pairs")

        known = {f.name for f in fields(cls)}
        changes: dict[str, Any] = {}
        for raw_key, value in data.items():
            key = _ALIASES.get(raw_key, raw_key)
            if key not in known:
                raise ConfigurationError(f"Unknown analyzer option: {raw_key}")
            changes[key] = _coerce_option(key, value)
        return replace(base, **changes)


_ALIASES = {
    "dayOfWeekDeviationThreshold": "day_of_week_deviation_threshold",
    "minSampleSize": "min_sample_size",
    "bridgingRatioThreshold": "bridging_ratio_threshold",
    "shortNoticeThresholdDays": "short_notice_threshold_days",
    "shortNoticeCountThreshold": "short_notice_count_threshold",
    "frequencyZThreshold": "frequency_z_threshold",
    "isolationRatioThreshold": "isolation_ratio_threshold",
    "bridgingMinCount": "bridging_min_count",
    "bridgingWeekdays": "bridging_weekdays",
    "shortNoticeWindowDays": "short_notice_window_days",
    "noticeExemptLeaveTypes": "notice_exempt_leave_types",
    "clusteringMinEvents": "clustering_min_events",
    "peerBaseline": "peer_baseline",
    "severityWeights": "severity_weights",
    "mediumRiskThreshold": "medium_risk_threshold",
    "highRiskThreshold": "high_risk_threshold",
}


def _coerce_option(key: str, value: Any) -> Any:
    if key == "holidays":
        days = set()
        for raw in value or ():
            day = coerce_date(raw)
            if day is None:
                raise ConfigurationError(f"Invalid holiday date: {raw!r}")
            days.add(day)
        return frozenset(days)
    if key == "bridging_weekdays":
        try:
            return tuple(int(v) for v in value)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError("bridging_weekdays must be a list of weekday numbers") from exc
    if key == "notice_exempt_leave_types":
        if isinstance(value, str):
            value = [value]
        return tuple(str(v).lower() for v in value)
    if key == "peer_baseline":
        return _coerce_peer_baseline(value)
    if key == "severity_weights":
        try:
            return {_as_severity(k): float(v) for k, v in dict(value).items()}
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid severity_weights: {exc}") from exc
    return value


def _coerce_peer_baseline(value: Any) -> Optional[PeerBaseline]:
    if value is None or isinstance(value, PeerBaseline):
        return value
    if isinstance(value, Mapping):
        mean = value.get("mean", value.get("peerMean"))
        std_dev = value.get("std_dev", value.get("stdDev", value.get("peerStdDev")))
    else:
        try:
            mean, std_dev = value
        except (TypeError, ValueError) as exc:
            raise ConfigurationError("peer_baseline must be a {mean, std_dev} mapping or pair") from exc
    return PeerBaseline(
        mean=require_number(mean, "peer_baseline.mean"),
        std_dev=require_number(std_dev, "peer_baseline.std_dev"),
    )


def _as_severity(value: Any) -> Severity:
    if isinstance(value, Severity):
        return value
    return Severity(str(value).upper())
