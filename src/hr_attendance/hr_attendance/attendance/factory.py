from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Optional

from ..core.constants import DEFAULT_HALF_DAY_HOURS
from ..core.enums import AttendanceStatus
from ..shifts.model import WorkSchedule
from .strategies.base import AttendanceStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules.

    Both rules are off by default, so every check-in is ``present`` and
    check-out never changes the status.
    """

    apply_late_rule: bool = False
    apply_half_day_rule: bool = False
    half_day_hours: float = DEFAULT_HALF_DAY_HOURS

    def for_checkin(self, *, check_in: time, schedule: Optional[WorkSchedule]) -> AttendanceStrategy:
        if not self.apply_late_rule or not schedule:
            return NormalStrategy()

        day = datetime(2000, 1, 1)
        start = datetime.combine(day, schedule.start_time)
        if datetime.combine(day, check_in) <= start + timedelta(minutes=schedule.late_threshold_minutes):
            return NormalStrategy()
        return LateStrategy()

    def for_checkout(self, *, working_hours: float, current: AttendanceStatus) -> AttendanceStrategy:
        if self.apply_half_day_rule and 0 <= working_hours < self.half_day_hours:
            return HalfDayStrategy()
        return NormalStrategy()
