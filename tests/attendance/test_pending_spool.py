from __future__ import annotations

import json
from datetime import date, datetime

import pytest

from src.hr_attendance.hr_attendance.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from src.hr_attendance.hr_attendance.attendance.model import PendingEvent
from src.hr_attendance.hr_attendance.attendance.service import AttendanceEngine
from src.hr_attendance.hr_attendance.attendance.spool import PendingSpool, mark_with_spool
from src.hr_attendance.hr_attendance.core.enums import EventType, MarkOutcome
from src.hr_attendance.hr_attendance.core.exceptions import RemoteUnavailable, UnknownEmployee


class SwitchableRemote:
    """Remote store backed by a server engine; ``up`` toggles reachability."""

    def __init__(self, employees):
        self.up = True
        self.server = AttendanceEngine(InMemoryAttendanceRepository(), employees)

    def mark(self, *, employee_id, event_type, timestamp):
        if not self.up:
            raise RemoteUnavailable("connection refused")
        return self.server.mark_attendance(employee_id, event_type, timestamp).record

    def list_records(self, *, employee_id=None, date_from=None, date_to=None):
        if not self.up:
            raise RemoteUnavailable("connection refused")
        return self.server.list_records(employee_id=employee_id, date_from=date_from, date_to=date_to)


@pytest.fixture
def remote(employees):
    return SwitchableRemote(employees)


@pytest.fixture
def spool(tmp_path):
    return PendingSpool(tmp_path / "kiosk" / "pending.json")


def _kiosk(employees, remote, clock) -> AttendanceEngine:
    # Each call stands for a separate CLI run: nothing survives but the spool.
    return AttendanceEngine(InMemoryAttendanceRepository(), employees, gateway=remote, clock=clock)


def test_saved_events_load_back(spool):
    events = [PendingEvent("EMP001", EventType.CHECK_IN, datetime(2024, 6, 1, 9, 15))]

    assert spool.save(events) == 1
    assert json.loads(spool.path.read_text(encoding="utf-8")) == [
        {"employee_id": "EMP001", "type": "check-in", "timestamp": "2024-06-01T09:15"}
    ]
    assert spool.load() == events


def test_empty_queue_removes_spool(spool):
    spool.save([PendingEvent("EMP001", EventType.CHECK_IN, datetime(2024, 6, 1, 9, 15))])

    assert spool.save([]) == 0
    assert not spool.path.exists()
    assert spool.load() == []


def test_checkout_in_a_later_run(employees, remote, clock, spool):
    mark_with_spool(_kiosk(employees, remote, clock), spool, "EMP001", "check-in", "2024-06-01T09:15")
    result = mark_with_spool(_kiosk(employees, remote, clock), spool, "EMP001", "check-out", "2024-06-01T17:00")

    assert result.outcome == MarkOutcome.CHECKED_OUT
    assert result.synced is True
    assert remote.server.get_status("EMP001", date(2024, 6, 1)).check_out == "17:00"
    assert not spool.path.exists()


def test_offline_run_is_resynced_by_the_next_run(employees, remote, clock, spool):
    remote.up = False
    offline = mark_with_spool(_kiosk(employees, remote, clock), spool, "EMP001", "check-in", "2024-06-01T09:15")
    assert offline.synced is False
    assert [e.employee_id for e in spool.load()] == ["EMP001"]

    remote.up = True
    result = mark_with_spool(_kiosk(employees, remote, clock), spool, "EMP001", "check-out", "2024-06-01T17:00")

    assert result.outcome == MarkOutcome.CHECKED_OUT
    assert result.synced is True
    server_rec = remote.server.get_status("EMP001", date(2024, 6, 1))
    assert (server_rec.check_in, server_rec.check_out) == ("09:15", "17:00")
    assert spool.load() == []


def test_spool_is_written_even_when_the_mark_fails(employees, remote, clock, spool):
    remote.up = False
    mark_with_spool(_kiosk(employees, remote, clock), spool, "EMP002", "check-in", "2024-06-01T09:00")

    with pytest.raises(UnknownEmployee):
        mark_with_spool(_kiosk(employees, remote, clock), spool, "EMP404", "check-in", "2024-06-01T09:05")

    assert [e.employee_id for e in spool.load()] == ["EMP002"]
