from __future__ import annotations

from datetime import date

import pytest

from config import get_settings_module
from config.config import analyzer_overrides_from_env, detectors_from_env
from src.leave_patterns.leave_patterns.analysis.config import AnalyzerConfig
from src.leave_patterns.leave_patterns.analysis.model import PeerBaseline
from src.leave_patterns.leave_patterns.core.enums import Severity
from src.leave_patterns.leave_patterns.core.exceptions import ConfigurationError


def test_defaults_match_documented_thresholds():
    config = AnalyzerConfig()

    assert config.day_of_week_deviation_threshold == 0.6
    assert config.min_sample_size == 6
    assert config.bridging_ratio_threshold == 0.5
    assert config.short_notice_threshold_days == 1
    assert config.short_notice_count_threshold == 3
    assert config.frequency_z_threshold == 2.0
    assert config.isolation_ratio_threshold == 0.7
    assert config.severity_weights == {Severity.LOW: 10.0, Severity.MEDIUM: 25.0, Severity.HIGH: 45.0}
    assert config.peer_baseline is None


def test_camel_case_overrides_keep_other_defaults():
    config = AnalyzerConfig.from_mapping({
        "minSampleSize": 10,
        "peerBaseline": {"mean": 1.5, "stdDev": 0.4},
        "holidays": ["2026-12-25"],
    })

    assert config.min_sample_size == 10
    assert config.peer_baseline == PeerBaseline(mean=1.5, std_dev=0.4)
    assert config.holidays == frozenset({date(2026, 12, 25)})
    assert config.bridging_ratio_threshold == 0.5


def test_overrides_apply_on_top_of_base():
    base = AnalyzerConfig(frequency_z_threshold=3.0)

    config = base.with_overrides(isolation_ratio_threshold=0.9)

    assert config.frequency_z_threshold == 3.0
    assert config.isolation_ratio_threshold == 0.9
    assert base.isolation_ratio_threshold == 0.7


def test_unknown_option_is_rejected():
    with pytest.raises(ConfigurationError):
        AnalyzerConfig.from_mapping({"paydayBias": 1})


@pytest.mark.parametrize(
    "overrides",
    [
        {"bridging_ratio_threshold": 1.5},
        {"min_sample_size": 0},
        {"bridging_weekdays": [5]},
        {"medium_risk_threshold": 60, "high_risk_threshold": 50},
        {"severity_weights": {"LOW": 10, "MEDIUM": 25}},
        {"holidays": ["someday"]},
        {"peer_baseline": {"mean": "a lot", "std_dev": 1}},
    ],
)
def test_out_of_range_values_are_rejected(overrides):
    with pytest.raises(ConfigurationError):
        AnalyzerConfig.from_mapping(overrides)


def test_overrides_read_from_environment():
    environ = {
        "LEAVE_PATTERN_MIN_SAMPLE_SIZE": "8",
        "LEAVE_PATTERN_BRIDGING_RATIO_THRESHOLD": "0.4",
        "LEAVE_PATTERN_HOLIDAYS": "2026-01-01, 2026-12-25",
        "LEAVE_PATTERN_PEER_MEAN": "1.2",
        "LEAVE_PATTERN_PEER_STD_DEV": "0.3",
        "LEAVE_PATTERN_SHORT_NOTICE_DAYS": "",
    }

    overrides = analyzer_overrides_from_env(environ)
    config = AnalyzerConfig.from_mapping(overrides)

    assert overrides["min_sample_size"] == 8
    assert "short_notice_threshold_days" not in overrides
    assert config.bridging_ratio_threshold == 0.4
    assert config.holidays == frozenset({date(2026, 1, 1), date(2026, 12, 25)})
    assert config.peer_baseline == PeerBaseline(mean=1.2, std_dev=0.3)


def test_detector_selection_from_environment():
    assert detectors_from_env({}) is None
    assert detectors_from_env({"LEAVE_PATTERN_DETECTORS": "weekend_bridging, short_notice_spike"}) == [
        "weekend_bridging",
        "short_notice_spike",
    ]


@pytest.mark.parametrize(
    "env, module",
    [("production", "config.production"), ("TEST", "config.testing"), ("staging", "config.development")],
)
def test_app_env_selects_settings_module(monkeypatch, env, module):
    monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == module


@pytest.mark.parametrize("data", ["strict", ["minSampleSize", 3], 7])
def test_non_mapping_options_are_rejected(data):
    with pytest.raises(ConfigurationError):
        AnalyzerConfig.from_mapping(data)
