from __future__ import annotations

from datetime import date, time, timedelta

import pytest

from src.hr_attendance.hr_attendance.attendance.model import AttendanceRecord
from src.hr_attendance.hr_attendance.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from src.hr_attendance.hr_attendance.core.enums import AttendanceStatus

DAY = date(2024, 6, 1)


class FakeCursor:
    def __init__(self, rows):
        self.statements: list[tuple[str, tuple]] = []
        self.rowcount = 0
        self._rows = list(rows)

    def execute(self, sql, params=()):
        if "boom" in tuple(params):
            raise RuntimeError("lost connection")
        self.statements.append((" ".join(sql.split()), tuple(params)))

    def fetchone(self):
        return self._rows.pop(0) if self._rows else None

    def fetchall(self):
        rows, self._rows = self._rows, []
        return rows

    def close(self):
        pass


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnectionFactory:
    def __init__(self, *rows):
        self.cursor = FakeCursor(rows)
        self.conn = FakeConnection(self.cursor)

    def connect(self):
        return self.conn


def _row(**overrides):
    row = {
        "attendance_id": 7,
        "employee_id": "EMP001",
        "work_date": DAY,
        "check_in": timedelta(hours=9),
        "check_out": None,
        "status": "present",
        "working_hours": None,
        "note": None,
    }
    row.update(overrides)
    return row


def test_close_day_only_updates_open_day():
    stored = _row(check_out="17:00:00", working_hours=8.0)
    factory = FakeConnectionFactory(stored)
    attempt = AttendanceRecord("7", "EMP001", DAY, "09:00", "19:00", AttendanceStatus.PRESENT, 10.0)

    result = MySQLAttendanceRepository(factory).close_day(attempt)

    update_sql, params = factory.cursor.statements[0]
    assert update_sql.startswith("UPDATE attendance_records SET check_out=%s")
    assert update_sql.endswith("AND check_out IS NULL")
    assert params[:2] == ("19:00", 10.0)
    # The stored check-out wins over the late attempt.
    assert result.check_out == "17:00"
    assert result.working_hours == 8.0
    assert factory.conn.committed and factory.conn.closed


@pytest.mark.parametrize(
    "value, expected",
    [
        (time(8, 30, 12), "08:30"),
        (timedelta(hours=17, minutes=5), "17:05"),
        ("9:07:00", "09:07"),
        (None, None),
    ],
)
def test_time_columns_decode_to_hhmm(value, expected):
    factory = FakeConnectionFactory(_row(check_in=value))

    record = MySQLAttendanceRepository(factory).get_for_employee_and_date("EMP001", DAY)

    assert record.check_in == expected


def test_failed_statement_rolls_back():
    factory = FakeConnectionFactory()
    repo = MySQLAttendanceRepository(factory)

    with pytest.raises(RuntimeError):
        repo.list_range(employee_id="boom")

    assert factory.conn.rolled_back
    assert not factory.conn.committed
    assert factory.conn.closed
