from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Storage for day records, keyed by (employee_id, work_date)."""

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_if_absent(
        self,
        *,
        employee_id: str,
        work_date: date,
        check_in: str,
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> AttendanceRecord:
        """Insert the day record unless one exists; return whichever is stored."""

        raise NotImplementedError

    def save(self, record: AttendanceRecord) -> AttendanceRecord:
        """Upsert by (employee_id, work_date)."""

        raise NotImplementedError

    def close_day(self, record: AttendanceRecord) -> AttendanceRecord:
        """Write the check-out fields only if the stored record has no check-out yet.

        Returns the stored record, which is the earlier check-out when one won.
        """

        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_range(
        self,
        *,
        employee_id: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def delete_for_employee(self, employee_id: str) -> int:
        raise NotImplementedError
