from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Day-level attendance classification (derived, never set by callers)."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    HALF_DAY = "half-day"


class EventType(str, Enum):
    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"


class MarkOutcome(str, Enum):
    """What a mark_attendance call did to the day record."""

    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"
    DUPLICATE_CHECKIN = "duplicate-checkin"
    DUPLICATE_CHECKOUT = "duplicate-checkout"
    ORPHAN_CHECKOUT = "orphan-checkout"

    @property
    def changed(self) -> bool:
        return self in (MarkOutcome.CHECKED_IN, MarkOutcome.CHECKED_OUT)


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
