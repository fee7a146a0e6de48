from __future__ import annotations

from datetime import date, datetime

import pytest

from src.hr_attendance.hr_attendance.employees.memory_employee_repository import InMemoryEmployeeDirectory
from src.hr_attendance.hr_attendance.employees.model import Employee


class FixedClock:
    def __init__(self, now: datetime):
        self._now = now

    def now(self) -> datetime:
        return self._now

    def set(self, now: datetime) -> None:
        self._now = now


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 6, 1, 9, 15)


@pytest.fixture
def clock(fixed_now) -> FixedClock:
    return FixedClock(fixed_now)


@pytest.fixture
def employees() -> InMemoryEmployeeDirectory:
    return InMemoryEmployeeDirectory(
        [
            Employee("EMP001", "John Doe", "Engineering", "john.doe@afraexpress.com", "Senior Developer", date(2023, 1, 15)),
            Employee("EMP002", "Sarah Smith", "HR", "sarah.smith@afraexpress.com", "HR Manager", date(2022, 11, 20)),
            Employee("EMP003", "Mike Johnson", "Marketing"),
        ]
    )
