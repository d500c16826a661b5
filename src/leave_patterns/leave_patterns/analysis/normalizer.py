"""Normalizer: raw leave-like records -> immutable canonical timeline.

Raw records come from the leave-management subsystem in whatever shape it
stores them (snake_case or camelCase keys, nested ``dates: {from, to}``, ISO
strings or date objects). This is the single boundary where they are parsed
into ``LeaveEvent``; anything that cannot be parsed becomes a warning.
"""
from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional

from ..common.datetime_utils import coerce_date, coerce_datetime
from ..core.enums import LeaveStatus
from .model import AnalysisWindow, LeaveEvent

logger = logging.getLogger(__name__)

SKIP_MISSING_DATES = "missing dates"
SKIP_END_BEFORE_START = "end date before start date"
SKIP_INVALID_STATUS = "unknown status"
SKIP_OTHER_EMPLOYEE = "belong to another employee"
SKIP_UNREADABLE = "unreadable record"

_SKIP_ORDER = (
    SKIP_MISSING_DATES,
    SKIP_END_BEFORE_START,
    SKIP_INVALID_STATUS,
    SKIP_OTHER_EMPLOYEE,
    SKIP_UNREADABLE,
)

_FIELD_ALIASES = {
    "event_id": ("event_id", "eventId", "id", "_id", "request_id", "requestId"),
    "employee_id": ("employee_id", "employeeId"),
    "leave_type_id": ("leave_type_id", "leaveTypeId", "leave_type", "leaveType", "leaveTypeName"),
    "start_date": ("start_date", "startDate", "from"),
    "end_date": ("end_date", "endDate", "to"),
    "requested_at": ("requested_at", "requestedAt", "created_at", "createdAt"),
    "status": ("status",),
    "duration_days": ("duration_days", "durationDays"),
}


@dataclass(frozen=True)
class NormalizedTimeline:
    events: tuple[LeaveEvent, ...]
    warnings: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self):
        return iter(self.events)


class _Skip(Exception):
    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class LeaveNormalizer:
    """Cleans, filters, orders and de-duplicates one employee's leave records."""

    def normalize(
        self,
        records: Optional[Iterable[Any]],
        window: AnalysisWindow,
        *,
        employee_id: Optional[str] = None,
    ) -> NormalizedTimeline:
        skipped: Counter = Counter()
        late_filed = 0
        parsed: list[LeaveEvent] = []

        for index, record in enumerate(records or ()):
            try:
                event = self._parse(record, index=index, employee_id=employee_id)
            except _Skip as skip:
                skipped[skip.reason] += 1
                logger.debug("Skipping leave record #%s: %s", index, skip.reason)
                continue

            if not event.status.is_taken:
                continue
            if not window.overlaps(event.start_date, event.end_date):
                continue
            if event.requested_at is not None and not event.has_valid_notice:
                late_filed += 1
            parsed.append(event)

        parsed.sort(key=_sort_key)

        events: list[LeaveEvent] = []
        seen = set()
        duplicates = 0
        for event in parsed:
            if event.dedup_key in seen:
                duplicates += 1
                continue
            seen.add(event.dedup_key)
            events.append(event)

        warnings = []
        for reason in _SKIP_ORDER:
            count = skipped.get(reason)
            if count:
                warnings.append(f"{count} {_plural(count, 'event')} skipped: {reason}")
        if duplicates:
            warnings.append(f"{duplicates} duplicate {_plural(duplicates, 'record')} removed")
        if late_filed:
            warnings.append(
                f"{late_filed} {_plural(late_filed, 'event')} filed after the start date; "
                "excluded from notice-period computation"
            )

        return NormalizedTimeline(events=tuple(events), warnings=tuple(warnings))

    def _parse(self, record: Any, *, index: int, employee_id: Optional[str]) -> LeaveEvent:
        if isinstance(record, LeaveEvent):
            if record.end_date < record.start_date:
                raise _Skip(SKIP_END_BEFORE_START)
            if employee_id is not None and record.employee_id != employee_id:
                raise _Skip(SKIP_OTHER_EMPLOYEE)
            return record

        get = _field_reader(record)
        if get is None:
            raise _Skip(SKIP_UNREADABLE)

        start = coerce_date(get("start_date"))
        end = coerce_date(get("end_date"))
        if start is None or end is None:
            raise _Skip(SKIP_MISSING_DATES)
        if end < start:
            raise _Skip(SKIP_END_BEFORE_START)

        status = _parse_status(get("status"))
        if status is None:
            raise _Skip(SKIP_INVALID_STATUS)

        owner = get("employee_id")
        owner = str(owner) if owner not in (None, "") else employee_id
        if employee_id is not None and owner != employee_id:
            raise _Skip(SKIP_OTHER_EMPLOYEE)

        event_id = get("event_id")
        leave_type = get("leave_type_id")
        span = (end - start).days + 1

        return LeaveEvent(
            event_id=str(event_id) if event_id not in (None, "") else f"record-{index}",
            employee_id=owner or "",
            leave_type_id=str(leave_type) if leave_type not in (None, "") else "unspecified",
            start_date=start,
            end_date=end,
            status=status,
            duration_days=_duration(get("duration_days"), span),
            requested_at=coerce_datetime(get("requested_at")),
        )


def _field_reader(record: Any):
    if isinstance(record, Mapping):
        nested = record.get("dates")
        nested = nested if isinstance(nested, Mapping) else {}

        def get(name: str):
            for alias in _FIELD_ALIASES[name]:
                if alias in record and record[alias] is not None:
                    return record[alias]
                if alias in nested and nested[alias] is not None:
                    return nested[alias]
            return None

        return get

    if record is None or isinstance(record, (str, bytes, int, float)):
        return None

    def get_attr(name: str):
        for alias in _FIELD_ALIASES[name]:
            value = getattr(record, alias, None)
            if value is not None:
                return value
        return None

    return get_attr


def _parse_status(value: Any) -> Optional[LeaveStatus]:
    if isinstance(value, LeaveStatus):
        return value
    if not isinstance(value, str):
        return None
    key = value.strip().upper()
    if key == "CANCELED":
        key = "CANCELLED"
    try:
        return LeaveStatus(key)
    except ValueError:
        return None


def _duration(value: Any, span: int) -> float:
    """Supplied duration rounded to half days; the calendar span when unusable."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        return float(span)
    halves = round(float(value) * 2) / 2
    if halves <= 0 or halves > span:
        return float(span)
    return halves


def _sort_key(event: LeaveEvent) -> tuple:
    requested = event.requested_at.replace(tzinfo=None) if event.requested_at else datetime.max
    return (event.start_date, requested, event.end_date, event.leave_type_id, event.event_id)


def _plural(count: int, word: str) -> str:
    return word if count == 1 else word + "s"
