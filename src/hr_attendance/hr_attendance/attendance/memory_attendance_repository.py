from __future__ import annotations

import itertools
import threading
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    """Local attendance state (kiosk/offline side, tests, memory backend)."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_key: dict[tuple[str, date], AttendanceRecord] = {}
        self._ids = itertools.count(1)

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_key.get((employee_id, work_date))

    def create_if_absent(
        self,
        *,
        employee_id: str,
        work_date: date,
        check_in: str,
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> AttendanceRecord:
        with self._lock:
            existing = self._by_key.get((employee_id, work_date))
            if existing:
                return existing
            rec = AttendanceRecord(
                id=str(next(self._ids)),
                employee_id=employee_id,
                work_date=work_date,
                check_in=check_in,
                check_out=None,
                status=status,
                note=note,
            )
            self._by_key[rec.key] = rec
            return rec

    def save(self, record: AttendanceRecord) -> AttendanceRecord:
        with self._lock:
            if not record.id:
                current = self._by_key.get(record.key)
                record = replace(record, id=current.id if current else str(next(self._ids)))
            self._by_key[record.key] = record
            return record

    def close_day(self, record: AttendanceRecord) -> AttendanceRecord:
        with self._lock:
            current = self._by_key.get(record.key)
            if current is None or current.check_out is not None:
                return current
            closed = replace(record, id=current.id)
            self._by_key[record.key] = closed
            return closed

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        return self.list_range(date_from=work_date, date_to=work_date)

    def list_range(
        self,
        *,
        employee_id: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        with self._lock:
            items = list(self._by_key.values())
        if employee_id is not None:
            items = [r for r in items if r.employee_id == employee_id]
        if date_from is not None:
            items = [r for r in items if r.work_date >= date_from]
        if date_to is not None:
            items = [r for r in items if r.work_date <= date_to]
        items.sort(key=lambda r: (r.work_date, r.employee_id))
        return items

    def delete_for_employee(self, employee_id: str) -> int:
        with self._lock:
            keys = [k for k in self._by_key if k[0] == employee_id]
            for k in keys:
                del self._by_key[k]
            return len(keys)
