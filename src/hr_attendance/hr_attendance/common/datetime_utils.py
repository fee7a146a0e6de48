from __future__ import annotations

from datetime import date, datetime, time
from typing import Protocol, Union

from ..core.constants import DAY_KEY_FORMAT, TIME_OF_DAY_FORMAT
from ..core.exceptions import ValidationError

TimestampLike = Union[datetime, str]


class Clock(Protocol):
    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock:
    """Local wall clock.

    Note: Wrapped so tests can inject a fixed clock instead.
    """

    def now(self) -> datetime:
        return datetime.now()


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, DAY_KEY_FORMAT).date()
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid date: {value!r}") from exc


def parse_timestamp(value: TimestampLike) -> datetime:
    """Accept a datetime or an ISO-8601 string (``2024-06-01T09:15``)."""
    if isinstance(value, datetime):
        return value
    try:
        parsed = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
    except ValueError as exc:
        raise ValidationError(f"Invalid timestamp: {value!r}") from exc
    # Times are compared as local wall-clock values.
    return parsed.replace(tzinfo=None)


def parse_time_of_day(value: str) -> time:
    try:
        return datetime.strptime(value, TIME_OF_DAY_FORMAT).time()
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid time of day: {value!r}") from exc


def day_key(value: date | datetime) -> str:
    return value.strftime(DAY_KEY_FORMAT)


def time_of_day(value: datetime | time) -> str:
    return value.strftime(TIME_OF_DAY_FORMAT)
