import os

# Environment variable -> analyzer option, with the type each value is read as
_ANALYZER_ENV = {
    "LEAVE_PATTERN_DOW_DEVIATION_THRESHOLD": ("day_of_week_deviation_threshold", float),
    "LEAVE_PATTERN_MIN_SAMPLE_SIZE": ("min_sample_size", int),
    "LEAVE_PATTERN_BRIDGING_RATIO_THRESHOLD": ("bridging_ratio_threshold", float),
    "LEAVE_PATTERN_BRIDGING_MIN_COUNT": ("bridging_min_count", int),
    "LEAVE_PATTERN_SHORT_NOTICE_DAYS": ("short_notice_threshold_days", int),
    "LEAVE_PATTERN_SHORT_NOTICE_COUNT": ("short_notice_count_threshold", int),
    "LEAVE_PATTERN_SHORT_NOTICE_WINDOW_DAYS": ("short_notice_window_days", int),
    "LEAVE_PATTERN_FREQUENCY_Z_THRESHOLD": ("frequency_z_threshold", float),
    "LEAVE_PATTERN_ISOLATION_RATIO_THRESHOLD": ("isolation_ratio_threshold", float),
    "LEAVE_PATTERN_CLUSTERING_MIN_EVENTS": ("clustering_min_events", int),
    "LEAVE_PATTERN_MEDIUM_RISK_THRESHOLD": ("medium_risk_threshold", float),
    "LEAVE_PATTERN_HIGH_RISK_THRESHOLD": ("high_risk_threshold", float),
}


def _csv(value: str) -> list:
    return [v.strip() for v in value.split(",") if v.strip()]


def analyzer_overrides_from_env(environ=None) -> dict:
    """Collect analyzer overrides from LEAVE_PATTERN_* variables (unset ones keep defaults)."""
    environ = os.environ if environ is None else environ
    overrides = {}
    for env_name, (option, cast) in _ANALYZER_ENV.items():
        raw = environ.get(env_name)
        if raw not in (None, ""):
            overrides[option] = cast(raw)

    if environ.get("LEAVE_PATTERN_HOLIDAYS"):
        overrides["holidays"] = _csv(environ["LEAVE_PATTERN_HOLIDAYS"])
    if environ.get("LEAVE_PATTERN_BRIDGING_WEEKDAYS"):
        overrides["bridging_weekdays"] = [int(v) for v in _csv(environ["LEAVE_PATTERN_BRIDGING_WEEKDAYS"])]
    if environ.get("LEAVE_PATTERN_NOTICE_EXEMPT_TYPES"):
        overrides["notice_exempt_leave_types"] = _csv(environ["LEAVE_PATTERN_NOTICE_EXEMPT_TYPES"])
    if environ.get("LEAVE_PATTERN_PEER_MEAN") and environ.get("LEAVE_PATTERN_PEER_STD_DEV"):
        overrides["peer_baseline"] = {
            "mean": float(environ["LEAVE_PATTERN_PEER_MEAN"]),
            "std_dev": float(environ["LEAVE_PATTERN_PEER_STD_DEV"]),
        }
    return overrides


def detectors_from_env(environ=None):
    environ = os.environ if environ is None else environ
    raw = environ.get("LEAVE_PATTERN_DETECTORS", "")
    return _csv(raw) or None

