from __future__ import annotations

from datetime import date

import pytest

from src.hr_attendance.hr_attendance.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from src.hr_attendance.hr_attendance.attendance.service import AttendanceEngine
from src.hr_attendance.hr_attendance.core.enums import MarkOutcome
from src.hr_attendance.hr_attendance.core.exceptions import RemoteRejected, RemoteUnavailable, UnknownEmployee
from src.hr_attendance.hr_attendance.employees.memory_employee_repository import InMemoryEmployeeDirectory


class FakeGateway:
    """Remote side backed by a real server-role engine; can be switched off."""

    def __init__(self, employees):
        self.up = True
        self.calls: list[tuple[str, str]] = []
        self.server_repo = InMemoryAttendanceRepository()
        self.server = AttendanceEngine(self.server_repo, employees)

    def mark(self, *, employee_id, event_type, timestamp):
        self.calls.append((employee_id, event_type.value))
        if not self.up:
            raise RemoteUnavailable("connection refused")
        try:
            result = self.server.mark_attendance(employee_id, event_type, timestamp)
        except UnknownEmployee as exc:
            raise RemoteRejected(str(exc)) from exc
        if result.record is None:
            raise RemoteRejected("remote stored nothing")
        return result.record

    def list_records(self, *, employee_id=None, date_from=None, date_to=None):
        if not self.up:
            raise RemoteUnavailable("connection refused")
        return self.server.list_records(employee_id=employee_id, date_from=date_from, date_to=date_to)


@pytest.fixture
def gateway(employees):
    return FakeGateway(employees)


@pytest.fixture
def local_repo():
    return InMemoryAttendanceRepository()


@pytest.fixture
def client(local_repo, employees, gateway, clock):
    return AttendanceEngine(local_repo, employees, gateway=gateway, clock=clock)


def test_remote_success_adopts_server_record(client, gateway, local_repo):
    result = client.mark_attendance("EMP001", "check-in", "2024-06-01T09:15")

    assert result.synced is True
    server_rec = gateway.server_repo.get_for_employee_and_date("EMP001", date(2024, 6, 1))
    assert result.record == server_rec
    assert local_repo.get_for_employee_and_date("EMP001", date(2024, 6, 1)) == server_rec


def test_remote_failure_falls_back_locally(client, gateway, local_repo):
    gateway.up = False

    first = client.mark_attendance("EMP001", "check-in", "2024-06-01T09:15")
    second = client.mark_attendance("EMP001", "check-out", "2024-06-01T17:00")

    assert first.synced is False
    assert first.record.check_in == "09:15"
    assert second.synced is False
    assert second.record.check_out == "17:00"
    assert second.record.working_hours == 7.75
    assert client.pending_count() == 2
    assert gateway.server_repo.list_range() == []
    # Check-out is queued behind the unsynced check-in instead of being sent.
    assert gateway.calls == [("EMP001", "check-in")]


def test_sync_pending_replays_in_order(client, gateway):
    gateway.up = False
    client.mark_attendance("EMP001", "check-in", "2024-06-01T09:15")
    client.mark_attendance("EMP001", "check-out", "2024-06-01T17:00")

    gateway.up = True
    assert client.sync_pending() == 2
    assert client.pending_count() == 0

    server_rec = gateway.server_repo.get_for_employee_and_date("EMP001", date(2024, 6, 1))
    assert server_rec.check_in == "09:15"
    assert server_rec.check_out == "17:00"
    assert server_rec.working_hours == 7.75
    assert client.get_status("EMP001", "2024-06-01") == server_rec


def test_sync_pending_stops_at_first_failure(client, gateway):
    gateway.up = False
    client.mark_attendance("EMP001", "check-in", "2024-06-01T09:00")
    client.mark_attendance("EMP002", "check-in", "2024-06-01T09:05")

    assert client.sync_pending() == 0
    assert client.pending_count() == 2


def test_noop_reports_pending_state(client, gateway):
    gateway.up = False
    client.mark_attendance("EMP001", "check-in", "2024-06-01T09:00")

    gateway.up = True
    again = client.mark_attendance("EMP001", "check-in", "2024-06-01T09:30")
    assert again.outcome == MarkOutcome.DUPLICATE_CHECKIN
    assert again.synced is False

    client.sync_pending()
    again = client.mark_attendance("EMP001", "check-in", "2024-06-01T09:45")
    assert again.synced is True


def test_orphan_checkout_never_reaches_remote(client, gateway):
    result = client.mark_attendance("EMP001", "check-out", "2024-06-01T17:00")

    assert result.outcome == MarkOutcome.ORPHAN_CHECKOUT
    assert gateway.calls == []


def test_pull_remote_adopts_records_without_local_changes(client, gateway, local_repo):
    gateway.server.mark_attendance("EMP002", "check-in", "2024-06-01T08:50")
    gateway.server.mark_attendance("EMP003", "check-in", "2024-06-01T09:10")

    gateway.up = False
    client.mark_attendance("EMP003", "check-in", "2024-06-01T09:20")
    gateway.up = True

    adopted = client.pull_remote(date_from=date(2024, 6, 1), date_to=date(2024, 6, 1))

    assert adopted == 1
    assert local_repo.get_for_employee_and_date("EMP002", date(2024, 6, 1)).check_in == "08:50"
    assert local_repo.get_for_employee_and_date("EMP003", date(2024, 6, 1)).check_in == "09:20"


def test_pull_remote_keeps_local_state_when_down(client, gateway):
    gateway.up = False

    assert client.pull_remote() == 0


def test_server_role_is_always_synced(employees):
    server = AttendanceEngine(InMemoryAttendanceRepository(), employees)

    assert server.mark_attendance("EMP001", "check-in", "2024-06-01T09:00").synced is True
    assert server.sync_pending() == 0
    assert server.pending_count() == 0


def test_fresh_client_checks_out_against_remote_day(employees, gateway, clock):
    first_run = AttendanceEngine(InMemoryAttendanceRepository(), employees, gateway=gateway, clock=clock)
    first_run.mark_attendance("EMP001", "check-in", "2024-06-01T09:15")

    second_run = AttendanceEngine(InMemoryAttendanceRepository(), employees, gateway=gateway, clock=clock)
    result = second_run.mark_attendance("EMP001", "check-out", "2024-06-01T17:00")

    assert result.outcome == MarkOutcome.CHECKED_OUT
    assert result.synced is True
    server_rec = gateway.server_repo.get_for_employee_and_date("EMP001", date(2024, 6, 1))
    assert server_rec.check_out == "17:00"
    assert server_rec.working_hours == 7.75


def test_fresh_client_sees_remote_checkin_as_duplicate(employees, gateway, clock):
    gateway.server.mark_attendance("EMP002", "check-in", "2024-06-01T08:50")
    client = AttendanceEngine(InMemoryAttendanceRepository(), employees, gateway=gateway, clock=clock)

    result = client.mark_attendance("EMP002", "check-in", "2024-06-01T09:30")

    assert result.outcome == MarkOutcome.DUPLICATE_CHECKIN
    assert result.record.check_in == "08:50"
    assert gateway.calls == []


def test_refused_event_is_not_queued(employees, clock):
    server_directory = InMemoryEmployeeDirectory([e for e in employees.list_all() if e.employee_id != "EMP003"])
    gateway = FakeGateway(server_directory)
    client = AttendanceEngine(InMemoryAttendanceRepository(), employees, gateway=gateway, clock=clock)

    result = client.mark_attendance("EMP003", "check-in", "2024-06-01T09:00")

    assert result.synced is False
    assert result.record.check_in == "09:00"
    assert client.pending_count() == 0
    assert [e.employee_id for e in client.rejected_events()] == ["EMP003"]
    # A refused day never reports itself as synced.
    assert client.mark_attendance("EMP003", "check-in", "2024-06-01T09:30").synced is False


def test_refused_event_does_not_block_resync(employees, clock):
    server_directory = InMemoryEmployeeDirectory([e for e in employees.list_all() if e.employee_id != "EMP003"])
    gateway = FakeGateway(server_directory)
    client = AttendanceEngine(InMemoryAttendanceRepository(), employees, gateway=gateway, clock=clock)

    gateway.up = False
    client.mark_attendance("EMP003", "check-in", "2024-06-01T09:00")
    client.mark_attendance("EMP001", "check-in", "2024-06-01T09:10")
    assert client.pending_count() == 2

    gateway.up = True
    assert client.sync_pending() == 1
    assert client.pending_count() == 0
    assert [e.employee_id for e in client.rejected_events()] == ["EMP003"]
    assert gateway.server.get_status("EMP001", "2024-06-01").check_in == "09:10"


def test_restore_pending_carries_events_into_a_new_engine(employees, gateway, clock):
    gateway.up = False
    first_run = AttendanceEngine(InMemoryAttendanceRepository(), employees, gateway=gateway, clock=clock)
    first_run.mark_attendance("EMP001", "check-in", "2024-06-01T09:15")
    first_run.mark_attendance("EMP001", "check-out", "2024-06-01T17:00")
    saved = first_run.export_pending()

    second_run = AttendanceEngine(InMemoryAttendanceRepository(), employees, gateway=gateway, clock=clock)
    assert second_run.restore_pending(saved) == 2
    assert second_run.pending_count() == 2
    assert second_run.get_status("EMP001", "2024-06-01").check_out == "17:00"

    gateway.up = True
    assert second_run.sync_pending() == 2
    assert gateway.server.get_status("EMP001", "2024-06-01").working_hours == 7.75


def test_restore_lone_checkout_uses_remote_checkin(employees, gateway, clock):
    first_run = AttendanceEngine(InMemoryAttendanceRepository(), employees, gateway=gateway, clock=clock)
    first_run.mark_attendance("EMP002", "check-in", "2024-06-01T09:00")
    gateway.up = False
    first_run.mark_attendance("EMP002", "check-out", "2024-06-01T16:30")
    saved = first_run.export_pending()
    assert [e.event_type.value for e in saved] == ["check-out"]

    gateway.up = True
    second_run = AttendanceEngine(InMemoryAttendanceRepository(), employees, gateway=gateway, clock=clock)
    second_run.restore_pending(saved)

    assert second_run.get_status("EMP002", "2024-06-01").check_out == "16:30"
    assert second_run.sync_pending() == 1
    assert gateway.server.get_status("EMP002", "2024-06-01").check_out == "16:30"
