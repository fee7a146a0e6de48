from __future__ import annotations

from datetime import date, time, timedelta
from typing import Any, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, execute, query_all, query_one
from .model import AttendanceRecord
from .repository import AttendanceRepository

_SELECT = """
    SELECT attendance_id, employee_id, work_date, check_in, check_out, status, working_hours, note
    FROM attendance_records
"""
_BY_KEY = _SELECT + " WHERE employee_id=%s AND work_date=%s"


def _hhmm(value: Any) -> Optional[str]:
    """TIME column as ``HH:MM``; the connector may hand back time, timedelta or str."""
    if value is None:
        return None
    if isinstance(value, time):
        return f"{value.hour:02d}:{value.minute:02d}"
    if isinstance(value, timedelta):
        minutes = int(value.total_seconds()) // 60 % (24 * 60)
        return f"{minutes // 60:02d}:{minutes % 60:02d}"
    hours, minutes = str(value).strip().split(":")[:2]
    return f"{int(hours):02d}:{int(minutes):02d}"


def _to_record(r: dict) -> AttendanceRecord:
    hours = r.get("working_hours")
    return AttendanceRecord(
        id=str(r["attendance_id"]),
        employee_id=str(r["employee_id"]),
        work_date=r["work_date"],
        check_in=_hhmm(r.get("check_in")),
        check_out=_hhmm(r.get("check_out")),
        status=AttendanceStatus(r["status"]),
        working_hours=float(hours) if hours is not None else None,
        note=r.get("note") or None,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    """Server-side store. UNIQUE(employee_id, work_date) backs the one-record-per-day rule."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        r = query_one(self._conn_factory, _BY_KEY, (employee_id, work_date))
        return _to_record(r) if r else None

    def create_if_absent(
        self,
        *,
        employee_id: str,
        work_date: date,
        check_in: str,
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT IGNORE INTO attendance_records(employee_id, work_date, check_in, status, note)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (employee_id, work_date, check_in, status.value, note),
            )
            cur.execute(_BY_KEY, (employee_id, work_date))
            return _to_record(cur.fetchone())

    def save(self, record: AttendanceRecord) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO attendance_records(employee_id, work_date, check_in, check_out, status, working_hours, note)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    check_in=VALUES(check_in),
                    check_out=VALUES(check_out),
                    status=VALUES(status),
                    working_hours=VALUES(working_hours),
                    note=VALUES(note)
                """,
                (
                    record.employee_id,
                    record.work_date,
                    record.check_in,
                    record.check_out,
                    record.status.value,
                    record.working_hours,
                    record.note,
                ),
            )
            cur.execute(_BY_KEY, (record.employee_id, record.work_date))
            return _to_record(cur.fetchone())

    def close_day(self, record: AttendanceRecord) -> AttendanceRecord:
        # Guarded on check_out IS NULL so a second process cannot overwrite the first check-out.
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out=%s, working_hours=%s, status=%s, note=%s
                WHERE employee_id=%s AND work_date=%s AND check_out IS NULL
                """,
                (
                    record.check_out,
                    record.working_hours,
                    record.status.value,
                    record.note,
                    record.employee_id,
                    record.work_date,
                ),
            )
            cur.execute(_BY_KEY, (record.employee_id, record.work_date))
            row = cur.fetchone()
            return _to_record(row) if row else None

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        return self.list_range(date_from=work_date, date_to=work_date)

    def list_range(
        self,
        *,
        employee_id: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses: list[str] = []
        params: list[object] = []

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(employee_id)
        if date_from is not None:
            clauses.append("work_date>=%s")
            params.append(date_from)
        if date_to is not None:
            clauses.append("work_date<=%s")
            params.append(date_to)

        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        rows = query_all(self._conn_factory, _SELECT + where + " ORDER BY work_date ASC, employee_id ASC", params)
        return [_to_record(r) for r in rows]

    def delete_for_employee(self, employee_id: str) -> int:
        return execute(self._conn_factory, "DELETE FROM attendance_records WHERE employee_id=%s", (employee_id,))
