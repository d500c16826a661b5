from __future__ import annotations

from enum import Enum


class LeaveStatus(str, Enum):
    """Workflow status of a leave request as supplied by the leave subsystem."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"

    @property
    def is_taken(self) -> bool:
        return self in (LeaveStatus.PENDING, LeaveStatus.APPROVED)


class FlagKind(str, Enum):
    """Category of irregularity. Declaration order is the canonical output order."""

    DAY_OF_WEEK_BIAS = "DAY_OF_WEEK_BIAS"
    WEEKEND_BRIDGING = "WEEKEND_BRIDGING"
    SHORT_NOTICE_SPIKE = "SHORT_NOTICE_SPIKE"
    FREQUENCY_DEVIATION = "FREQUENCY_DEVIATION"
    SINGLE_DAY_CLUSTERING = "SINGLE_DAY_CLUSTERING"

    @property
    def order(self) -> int:
        return _KIND_ORDER[self]


_KIND_ORDER = {kind: index for index, kind in enumerate(FlagKind)}


class Severity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    def raised(self) -> "Severity":
        """One step up, saturating at HIGH."""
        if self == Severity.LOW:
            return Severity.MEDIUM
        return Severity.HIGH

    def __lt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank


_SEVERITY_RANK = {Severity.LOW: 0, Severity.MEDIUM: 1, Severity.HIGH: 2}
