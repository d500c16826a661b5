from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD (or a full ISO timestamp) into a date."""
    value = value.strip()
    if len(value) > 10:
        return parse_iso_datetime(value).date()
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str) -> datetime:
    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def coerce_date(value: Any) -> Optional[date]:
    """Best-effort conversion of a raw field into a date; None when impossible."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            return parse_iso_date(value)
        except ValueError:
            return None
    return None


def coerce_datetime(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            return parse_iso_datetime(value)
        except ValueError:
            return None
    return None


def overlap_days(start: date, end: date, window_start: date, window_end: date) -> int:
    """Number of calendar days [start, end] shares with [window_start, window_end]."""
    lo = max(start, window_start)
    hi = min(end, window_end)
    if hi < lo:
        return 0
    return (hi - lo).days + 1


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/inject a fixed clock.
    """
    return datetime.now(timezone.utc)
