from __future__ import annotations

from datetime import time
from typing import Optional

from ...core.enums import AttendanceStatus
from ...shifts.model import WorkSchedule
from .base import AttendanceStrategy, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """Present on check-in, status kept on check-out."""

    def decide_checkin(self, *, check_in: time, schedule: Optional[WorkSchedule]) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)

    def decide_checkout(self, *, working_hours: float, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=current)
