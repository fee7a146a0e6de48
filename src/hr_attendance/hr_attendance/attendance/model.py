from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from ..common.datetime_utils import day_key, parse_iso_date, parse_timestamp
from ..core.enums import AttendanceStatus, EventType, MarkOutcome


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day."""

    id: str
    employee_id: str
    work_date: date
    check_in: Optional[str]
    check_out: Optional[str]
    status: AttendanceStatus
    working_hours: Optional[float] = None
    note: Optional[str] = None

    @property
    def key(self) -> tuple[str, date]:
        return (self.employee_id, self.work_date)

    @property
    def day(self) -> str:
        return day_key(self.work_date)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "employee_id": self.employee_id,
            "date": self.day,
            "check_in": self.check_in,
            "check_out": self.check_out,
            "status": self.status.value,
            "working_hours": self.working_hours,
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AttendanceRecord":
        hours = data.get("working_hours")
        return cls(
            id=str(data["id"]),
            employee_id=str(data["employee_id"]),
            work_date=parse_iso_date(data["date"]),
            check_in=data.get("check_in") or None,
            check_out=data.get("check_out") or None,
            status=AttendanceStatus(data["status"]),
            working_hours=float(hours) if hours is not None else None,
            note=data.get("note") or None,
        )


@dataclass(frozen=True)
class MarkResult:
    """Outcome of one mark_attendance call.

    ``synced`` is False when the change only exists in local state and is
    waiting in the resync queue.
    """

    record: Optional[AttendanceRecord]
    outcome: MarkOutcome
    synced: bool

    def to_dict(self) -> dict:
        return {
            "record": self.record.to_dict() if self.record else None,
            "outcome": self.outcome.value,
            "synced": self.synced,
        }


@dataclass(frozen=True)
class PendingEvent:
    """A change applied locally that the remote store has not confirmed yet."""

    employee_id: str
    event_type: EventType
    timestamp: datetime

    @property
    def key(self) -> tuple[str, date]:
        return (self.employee_id, self.timestamp.date())

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "type": self.event_type.value,
            "timestamp": self.timestamp.isoformat(timespec="minutes"),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PendingEvent":
        return cls(
            employee_id=str(data["employee_id"]),
            event_type=EventType(data["type"]),
            timestamp=parse_timestamp(data["timestamp"]),
        )
