from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date


@dataclass(frozen=True)
class DailySummary:
    """Dashboard counters for one day.

    ``present_count`` counts ``present`` records only, and ``absent_count`` is
    its complement over all employees, so late and half-day records land in
    the absent bucket.
    """

    date: date
    total_employees: int
    present_count: int
    absent_count: int
    late_count: int
    half_day_count: int
    attendance_rate: float

    def to_dict(self) -> dict:
        data = asdict(self)
        data["date"] = self.date.isoformat()
        return data


@dataclass(frozen=True)
class WeeklySummary:
    start: date
    end: date
    days: list[DailySummary]
    average_attendance_rate: float

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "days": [d.to_dict() for d in self.days],
            "average_attendance_rate": self.average_attendance_rate,
        }


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


@dataclass(frozen=True)
class ExecutiveSummary:
    """Record-level totals over a date range.

    Unlike the daily dashboard, the rate here is present records over all
    stored records, and days nobody recorded do not count.
    """

    start: date
    end: date
    total_records: int
    present_records: int
    late_records: int
    half_day_records: int
    attendance_rate: float
    avg_working_hours: float

    def to_dict(self) -> dict:
        data = asdict(self)
        data["start"] = self.start.isoformat()
        data["end"] = self.end.isoformat()
        return data


@dataclass(frozen=True)
class EmployeePerformance:
    employee_id: str
    name: str
    department: str
    present: int
    late: int
    half_day: int
    total: int
    total_working_hours: float
    attendance_rate: float
    avg_working_hours: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class MonthlyTrend:
    month: str  # YYYY-MM
    present: int
    late: int
    half_day: int
    total: int
    attendance_rate: float

    def to_dict(self) -> dict:
        return asdict(self)
