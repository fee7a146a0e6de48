from __future__ import annotations

import logging
import threading
from collections import Counter, deque
from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Optional, Sequence, Union

from ..common.datetime_utils import (
    Clock,
    SystemClock,
    TimestampLike,
    parse_iso_date,
    parse_time_of_day,
    parse_timestamp,
    time_of_day,
)
from ..core.constants import LOCK_STRIPES
from ..core.enums import AttendanceStatus, EventType, MarkOutcome
from ..core.exceptions import (
    DuplicateCheckin,
    OrphanCheckout,
    RemoteRejected,
    RemoteUnavailable,
    UnknownEmployee,
    ValidationError,
)
from ..employees.repository import EmployeeDirectory
from ..gateway.base import PersistenceGateway
from ..shifts.model import WorkSchedule
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, MarkResult, PendingEvent
from .repository import AttendanceRepository
from .strategies.base import StatusDecision

logger = logging.getLogger(__name__)

DayKey = tuple[str, date]


def compute_working_hours(check_in: str, check_out: str) -> float:
    """Hours between two ``HH:MM`` times taken on the same calendar day.

    A check-out earlier than the check-in gives a negative result; overnight
    shifts are not folded into the next day.
    """
    start = parse_time_of_day(check_in)
    end = parse_time_of_day(check_out)
    minutes = (end.hour * 60 + end.minute) - (start.hour * 60 + start.minute)
    return minutes / 60


class AttendanceEngine:
    """Single authority turning check-in/check-out events into day records.

    With a gateway the engine reconciles against the remote store and falls
    back to local state when it is unavailable; without one the local store
    is the system of record.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeDirectory,
        *,
        gateway: Optional[PersistenceGateway] = None,
        clock: Optional[Clock] = None,
        schedule: Optional[WorkSchedule] = None,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
        strict_events: bool = False,
    ):
        self._attendance = attendance
        self._employees = employees
        self._gateway = gateway
        self._clock = clock or SystemClock()
        self._schedule = schedule
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._strict = bool(strict_events)

        self._locks = tuple(threading.Lock() for _ in range(LOCK_STRIPES))
        self._pending: deque[PendingEvent] = deque()
        self._pending_keys: Counter[DayKey] = Counter()
        self._rejected: list[PendingEvent] = []
        self._rejected_keys: set[DayKey] = set()
        self._pending_guard = threading.Lock()
        self._sync_lock = threading.Lock()

    compute_working_hours = staticmethod(compute_working_hours)

    def _lock_for(self, key: DayKey) -> threading.Lock:
        return self._locks[hash(key) % len(self._locks)]

    def _is_synced(self, key: DayKey) -> bool:
        if self._gateway is None:
            return True
        with self._pending_guard:
            return self._pending_keys[key] == 0 and key not in self._rejected_keys

    def today(self) -> date:
        return self._clock.now().date()

    def pending_count(self) -> int:
        with self._pending_guard:
            return len(self._pending)

    def export_pending(self) -> list[PendingEvent]:
        """Snapshot of the resync queue, oldest first."""
        with self._pending_guard:
            return list(self._pending)

    def rejected_events(self) -> list[PendingEvent]:
        """Events the remote store refused for good; they are never retried."""
        with self._pending_guard:
            return list(self._rejected)

    def decide_status(
        self,
        *,
        check_in: str,
        working_hours: Optional[float] = None,
        current: Optional[AttendanceStatus] = None,
    ) -> StatusDecision:
        """Derive the day status and its reason; the only place status rules are applied."""
        at = parse_time_of_day(check_in)
        strategy = self._factory.for_checkin(check_in=at, schedule=self._schedule)
        decision = strategy.decide_checkin(check_in=at, schedule=self._schedule)
        if working_hours is None:
            return decision

        current = current or decision.status
        strategy = self._factory.for_checkout(working_hours=working_hours, current=current)
        return strategy.decide_checkout(working_hours=working_hours, current=current)

    def compute_status(
        self,
        *,
        check_in: str,
        working_hours: Optional[float] = None,
        current: Optional[AttendanceStatus] = None,
    ) -> AttendanceStatus:
        return self.decide_status(check_in=check_in, working_hours=working_hours, current=current).status

    def mark_attendance(
        self,
        employee_id: str,
        event_type: Union[EventType, str],
        timestamp: Optional[TimestampLike] = None,
    ) -> MarkResult:
        try:
            event = EventType(event_type)
        except ValueError as exc:
            raise ValidationError(f"Unsupported attendance event: {event_type!r}") from exc

        if self._employees.find_by_id(employee_id) is None:
            raise UnknownEmployee(employee_id)

        at = parse_timestamp(timestamp) if timestamp is not None else self._clock.now()
        key: DayKey = (employee_id, at.date())

        with self._lock_for(key):
            existing = self._load_day(key)
            outcome = self._classify(existing, event)

            if not outcome.changed:
                if self._strict and outcome == MarkOutcome.ORPHAN_CHECKOUT:
                    raise OrphanCheckout(f"{employee_id} has not checked in on {key[1]}")
                if self._strict and outcome == MarkOutcome.DUPLICATE_CHECKIN:
                    raise DuplicateCheckin(f"{employee_id} already checked in on {key[1]}")
                logger.info("Ignored %s for %s on %s (%s)", event.value, employee_id, key[1], outcome.value)
                return MarkResult(record=existing, outcome=outcome, synced=self._is_synced(key))

            pending = PendingEvent(employee_id=employee_id, event_type=event, timestamp=at)
            record, synced = self._commit(pending, existing)
            return MarkResult(record=record, outcome=outcome, synced=synced)

    def _load_day(self, key: DayKey) -> Optional[AttendanceRecord]:
        """Local record for the day; a client with nothing local asks the remote store first."""
        existing = self._attendance.get_for_employee_and_date(*key)
        if existing is not None or self._gateway is None or not self._is_synced(key):
            return existing

        employee_id, work_date = key
        try:
            records = self._gateway.list_records(employee_id=employee_id, date_from=work_date, date_to=work_date)
        except RemoteUnavailable as exc:
            logger.debug("No remote view of %s on %s: %s", employee_id, work_date, exc)
            return None

        for record in records:
            if record.key == key:
                return self._attendance.save(record)
        return None

    @staticmethod
    def _classify(existing: Optional[AttendanceRecord], event: EventType) -> MarkOutcome:
        if existing is None:
            if event == EventType.CHECK_IN:
                return MarkOutcome.CHECKED_IN
            return MarkOutcome.ORPHAN_CHECKOUT

        if event == EventType.CHECK_IN:
            return MarkOutcome.DUPLICATE_CHECKIN
        if existing.check_out is not None:
            return MarkOutcome.DUPLICATE_CHECKOUT
        return MarkOutcome.CHECKED_OUT

    def _commit(self, event: PendingEvent, existing: Optional[AttendanceRecord]) -> tuple[AttendanceRecord, bool]:
        if self._gateway is None:
            return self._apply_locally(event, existing), True

        # Keep per-day event order on the remote side: queue behind earlier local-only changes.
        if not self._is_synced(event.key):
            self._enqueue(event)
            return self._apply_locally(event, existing), False

        try:
            remote = self._gateway.mark(
                employee_id=event.employee_id,
                event_type=event.event_type,
                timestamp=event.timestamp,
            )
        except RemoteRejected as exc:
            self._dead_letter(event, exc)
            return self._apply_locally(event, existing), False
        except RemoteUnavailable as exc:
            logger.warning(
                "Remote %s for %s failed, applied locally only: %s",
                event.event_type.value,
                event.employee_id,
                exc,
            )
            self._enqueue(event)
            return self._apply_locally(event, existing), False

        return self._adopt(remote, event), True

    def _apply_locally(self, event: PendingEvent, existing: Optional[AttendanceRecord]) -> AttendanceRecord:
        hhmm = time_of_day(event.timestamp)

        if event.event_type == EventType.CHECK_IN:
            decision = self.decide_status(check_in=hhmm)
            return self._attendance.create_if_absent(
                employee_id=event.employee_id,
                work_date=event.timestamp.date(),
                check_in=hhmm,
                status=decision.status,
                note=decision.reason,
            )

        hours = compute_working_hours(existing.check_in, hhmm)
        if hours < 0:
            logger.warning(
                "Check-out %s before check-in %s for %s on %s; working hours are negative",
                hhmm,
                existing.check_in,
                existing.employee_id,
                existing.day,
            )
        decision = self.decide_status(check_in=existing.check_in, working_hours=hours, current=existing.status)
        closed = replace(
            existing,
            check_out=hhmm,
            working_hours=hours,
            status=decision.status,
            note=decision.reason or existing.note,
        )
        return self._attendance.close_day(closed)

    def _adopt(self, remote: AttendanceRecord, event: PendingEvent) -> AttendanceRecord:
        if remote.key != event.key:
            logger.warning("Remote returned record for %s, expected %s; kept as is", remote.key, event.key)
        return self._attendance.save(remote)

    def _enqueue(self, event: PendingEvent) -> None:
        with self._pending_guard:
            self._pending.append(event)
            self._pending_keys[event.key] += 1

    def _dead_letter(self, event: PendingEvent, exc: Exception) -> None:
        logger.warning(
            "Remote refused %s for %s on %s, dropped from resync: %s",
            event.event_type.value,
            event.employee_id,
            event.timestamp.date(),
            exc,
        )
        with self._pending_guard:
            self._rejected.append(event)
            self._rejected_keys.add(event.key)

    def _pop_head(self, event: PendingEvent) -> None:
        with self._pending_guard:
            self._pending.popleft()
            self._pending_keys[event.key] -= 1
            if self._pending_keys[event.key] <= 0:
                del self._pending_keys[event.key]

    def restore_pending(self, events: Iterable[PendingEvent]) -> int:
        """Queue events saved by an earlier run and replay them onto local state."""
        restored = 0
        for event in events:
            if self._employees.find_by_id(event.employee_id) is None:
                logger.warning("Dropping saved event for unknown employee %s", event.employee_id)
                continue
            with self._lock_for(event.key):
                existing = self._load_day(event.key)
                if self._classify(existing, event.event_type).changed:
                    self._apply_locally(event, existing)
                self._enqueue(event)
            restored += 1
        if restored:
            logger.info("Restored %d unsynced attendance event(s)", restored)
        return restored

    def sync_pending(self) -> int:
        """Replay local-only events to the remote store, oldest first.

        Events the remote refuses for good are dead-lettered and skipped;
        replay stops at the first temporary failure. Returns how many were
        synced.
        """
        if self._gateway is None:
            return 0

        synced = 0
        with self._sync_lock:
            while True:
                with self._pending_guard:
                    if not self._pending:
                        break
                    event = self._pending[0]

                with self._lock_for(event.key):
                    try:
                        remote = self._gateway.mark(
                            employee_id=event.employee_id,
                            event_type=event.event_type,
                            timestamp=event.timestamp,
                        )
                    except RemoteRejected as exc:
                        self._pop_head(event)
                        self._dead_letter(event, exc)
                        continue
                    except RemoteUnavailable as exc:
                        logger.warning("Resync stopped with %d event(s) pending: %s", self.pending_count(), exc)
                        break
                    self._adopt(remote, event)
                    self._pop_head(event)
                synced += 1

        if synced:
            logger.info("Resynced %d attendance event(s)", synced)
        return synced

    def pull_remote(
        self,
        *,
        employee_id: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> int:
        """Adopt remote records into local state, skipping days with local-only changes."""
        if self._gateway is None:
            return 0

        try:
            records = self._gateway.list_records(employee_id=employee_id, date_from=date_from, date_to=date_to)
        except RemoteUnavailable as exc:
            logger.warning("Could not pull remote attendance, keeping local state: %s", exc)
            return 0

        adopted = 0
        for record in records:
            with self._lock_for(record.key):
                if not self._is_synced(record.key):
                    continue
                self._attendance.save(record)
                adopted += 1
        return adopted

    def get_status(self, employee_id: str, on: Union[date, str]) -> Union[AttendanceRecord, AttendanceStatus]:
        """The stored day record, or ``AttendanceStatus.ABSENT`` when there is none."""
        if isinstance(on, str):
            work_date = parse_iso_date(on)
        elif isinstance(on, datetime):
            work_date = on.date()
        else:
            work_date = on
        record = self._attendance.get_for_employee_and_date(employee_id, work_date)
        return record if record is not None else AttendanceStatus.ABSENT

    def list_records(
        self,
        *,
        employee_id: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        return self._attendance.list_range(employee_id=employee_id, date_from=date_from, date_to=date_to)

    def records_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_date(work_date)
