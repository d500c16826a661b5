from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from src.leave_patterns.leave_patterns.analysis.model import AnalysisWindow


def leave(
    event_id: str,
    start: str,
    end: str | None = None,
    *,
    leave_type: str = "annual",
    status: str = "APPROVED",
    notice_days: int | None = 14,
    employee_id: str = "E1",
    **extra,
) -> dict:
    """Raw leave record the way the leave subsystem hands it over."""
    start_d = date.fromisoformat(start)
    record = {
        "id": event_id,
        "employeeId": employee_id,
        "leaveTypeId": leave_type,
        "startDate": start,
        "endDate": end or start,
        "status": status,
    }
    if notice_days is not None:
        requested = datetime.combine(start_d - timedelta(days=notice_days), datetime.min.time()).replace(hour=9)
        record["requestedAt"] = requested.isoformat()
    record.update(extra)
    return record


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 7, 1, 8, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def half_year() -> AnalysisWindow:
    return AnalysisWindow(start=date(2026, 1, 1), end=date(2026, 6, 30))


@pytest.fixture
def make_leave():
    return leave
