from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..attendance.model import AttendanceRecord
from ..core.enums import EventType


class PersistenceGateway(Protocol):
    """Remote attendance store.

    Implementations raise ``RemoteUnavailable`` for every kind of failure
    (transport error, timeout, non-success response, unusable payload).
    """

    def list_records(
        self,
        *,
        employee_id: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def mark(self, *, employee_id: str, event_type: EventType, timestamp: datetime) -> AttendanceRecord:
        raise NotImplementedError
