from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from ..common.datetime_utils import parse_time_of_day
from ..core.constants import DEFAULT_LATE_THRESHOLD_MINUTES, DEFAULT_WORK_END, DEFAULT_WORK_START


@dataclass(frozen=True)
class WorkSchedule:
    """The configured work day that status rules are measured against."""

    start_time: time
    end_time: time
    late_threshold_minutes: int = DEFAULT_LATE_THRESHOLD_MINUTES

    @classmethod
    def from_strings(
        cls,
        start: str = DEFAULT_WORK_START,
        end: str = DEFAULT_WORK_END,
        late_threshold_minutes: int = DEFAULT_LATE_THRESHOLD_MINUTES,
    ) -> "WorkSchedule":
        return cls(
            start_time=parse_time_of_day(start),
            end_time=parse_time_of_day(end),
            late_threshold_minutes=int(late_threshold_minutes),
        )
