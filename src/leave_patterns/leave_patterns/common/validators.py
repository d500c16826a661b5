from __future__ import annotations

import math

from ..core.exceptions import ConfigurationError


def require_ratio(value, field_name: str) -> float:
    value = require_number(value, field_name)
    if value < 0 or value > 1:
        raise ConfigurationError(f"{field_name} must be between 0 and 1")
    return value


def require_non_negative(value, field_name: str) -> float:
    value = require_number(value, field_name)
    if value < 0:
        raise ConfigurationError(f"{field_name} must be >= 0")
    return value


def require_positive_int(value, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigurationError(f"{field_name} must be a positive integer")
    return value


def require_number(value, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
        raise ConfigurationError(f"{field_name} must be a number")
    return float(value)
