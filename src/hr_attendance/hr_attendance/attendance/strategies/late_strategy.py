from __future__ import annotations

from datetime import time
from typing import Optional

from ...core.enums import AttendanceStatus
from ...shifts.model import WorkSchedule
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Check-in after work start plus the late threshold."""

    def decide_checkin(self, *, check_in: time, schedule: Optional[WorkSchedule]) -> StatusDecision:
        reason = None
        if schedule:
            reason = f"checked in {check_in:%H:%M}, start {schedule.start_time:%H:%M}"
        return StatusDecision(status=AttendanceStatus.LATE, reason=reason)

    def decide_checkout(self, *, working_hours: float, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=current)
