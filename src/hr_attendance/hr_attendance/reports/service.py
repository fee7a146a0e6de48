from __future__ import annotations

from collections import Counter, defaultdict
from datetime import date, timedelta
from typing import Iterable, Optional

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..core.constants import DEFAULT_REPORT_DAYS
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeDirectory
from .model import (
    DailySummary,
    EmployeePerformance,
    ExecutiveSummary,
    MonthlyTrend,
    ReportData,
    WeeklySummary,
)


def _hhmm(minutes: int) -> str:
    sign = "-" if minutes < 0 else ""
    minutes = abs(minutes)
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def attendance_rate(present: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return round(present / total * 100, 1)


def _worked_hours(records: Iterable[AttendanceRecord]) -> list[float]:
    # Open days (no check-out) and zero-length days carry no hours.
    return [r.working_hours for r in records if r.working_hours]


def _avg_hours(records: Iterable[AttendanceRecord]) -> float:
    worked = _worked_hours(records)
    return round(sum(worked) / len(worked), 2) if worked else 0.0


def _check_range(start: date, end: date) -> None:
    if end < start:
        raise ValidationError("date_to must not be before date_from")


class AttendanceReportService:
    """Derived aggregates over day records, labelled from the employee directory."""

    def __init__(self, attendance: AttendanceRepository, employees: EmployeeDirectory):
        self._attendance = attendance
        self._employees = employees

    def daily_summary(self, day: date) -> DailySummary:
        records = self._attendance.list_for_date(day)
        total = len(self._employees.list_all())

        present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
        late = sum(1 for r in records if r.status == AttendanceStatus.LATE)
        half_day = sum(1 for r in records if r.status == AttendanceStatus.HALF_DAY)

        return DailySummary(
            date=day,
            total_employees=total,
            present_count=present,
            absent_count=total - present,
            late_count=late,
            half_day_count=half_day,
            attendance_rate=attendance_rate(present, total),
        )

    def weekly_summary(self, start: date, *, days: int = DEFAULT_REPORT_DAYS) -> WeeklySummary:
        if days <= 0:
            raise ValidationError("days must be positive")

        summaries = [self.daily_summary(start + timedelta(days=i)) for i in range(days)]
        average = round(sum(s.attendance_rate for s in summaries) / len(summaries), 1)
        return WeeklySummary(
            start=start,
            end=start + timedelta(days=days - 1),
            days=summaries,
            average_attendance_rate=average,
        )

    def build_attendance_report(
        self,
        *,
        start: date,
        end: date,
        employee_id: Optional[str] = None,
        department: Optional[str] = None,
    ) -> ReportData:
        _check_range(start, end)

        employees = {e.employee_id: e for e in self._employees.list_all()}
        records = self._attendance.list_range(employee_id=employee_id, date_from=start, date_to=end)

        summary_map: dict[str, dict] = {}
        out_rows: list[dict] = []

        for r in records:
            emp = employees.get(r.employee_id)
            dept = emp.department if emp else None
            if department and dept != department:
                continue

            minutes = round(r.working_hours * 60) if r.working_hours is not None else 0
            out_rows.append(
                {
                    "employee_id": r.employee_id,
                    "name": emp.name if emp else "Unknown Employee",
                    "department": dept or "-",
                    "date": r.day,
                    "check_in": r.check_in or "-",
                    "check_out": r.check_out or "-",
                    "worked_hours": _hhmm(minutes),
                    "status": r.status.value,
                }
            )

            s = summary_map.get(r.employee_id)
            if not s:
                s = {
                    "employee_id": r.employee_id,
                    "name": emp.name if emp else "Unknown Employee",
                    "records": [],
                    "total_minutes": 0,
                }
                summary_map[r.employee_id] = s
            s["records"].append(r)
            s["total_minutes"] += minutes

        ordered = sorted(summary_map.values(), key=lambda x: x["total_minutes"], reverse=True)
        summary = []
        for s in ordered:
            days = s["records"]
            present = sum(1 for r in days if r.status == AttendanceStatus.PRESENT)
            summary.append(
                {
                    "employee_id": s["employee_id"],
                    "name": s["name"],
                    "days": len(days),
                    "total_hours": _hhmm(int(s["total_minutes"])),
                    "attendance_rate": attendance_rate(present, len(days)),
                    "avg_working_hours": _avg_hours(days),
                }
            )
        return ReportData(rows=out_rows, summary=summary)

    def executive_summary(self, *, start: date, end: date) -> ExecutiveSummary:
        _check_range(start, end)
        records = self._attendance.list_range(date_from=start, date_to=end)
        counts = Counter(r.status for r in records)

        return ExecutiveSummary(
            start=start,
            end=end,
            total_records=len(records),
            present_records=counts[AttendanceStatus.PRESENT],
            late_records=counts[AttendanceStatus.LATE],
            half_day_records=counts[AttendanceStatus.HALF_DAY],
            attendance_rate=attendance_rate(counts[AttendanceStatus.PRESENT], len(records)),
            avg_working_hours=_avg_hours(records),
        )

    def employee_performance(
        self,
        *,
        start: date,
        end: date,
        department: Optional[str] = None,
    ) -> list[EmployeePerformance]:
        """Per-employee counts over the range; employees without records are left out."""
        _check_range(start, end)
        employees = {e.employee_id: e for e in self._employees.list_all()}

        by_employee: dict[str, list[AttendanceRecord]] = defaultdict(list)
        for r in self._attendance.list_range(date_from=start, date_to=end):
            by_employee[r.employee_id].append(r)

        out: list[EmployeePerformance] = []
        for employee_id in sorted(by_employee):
            emp = employees.get(employee_id)
            dept = emp.department if emp else "-"
            if department and dept != department:
                continue

            records = by_employee[employee_id]
            counts = Counter(r.status for r in records)
            out.append(
                EmployeePerformance(
                    employee_id=employee_id,
                    name=emp.name if emp else "Unknown Employee",
                    department=dept,
                    present=counts[AttendanceStatus.PRESENT],
                    late=counts[AttendanceStatus.LATE],
                    half_day=counts[AttendanceStatus.HALF_DAY],
                    total=len(records),
                    total_working_hours=round(sum(_worked_hours(records)), 2),
                    attendance_rate=attendance_rate(counts[AttendanceStatus.PRESENT], len(records)),
                    avg_working_hours=_avg_hours(records),
                )
            )
        return out

    def monthly_trends(self, *, start: date, end: date) -> list[MonthlyTrend]:
        _check_range(start, end)

        by_month: dict[str, Counter] = defaultdict(Counter)
        for r in self._attendance.list_range(date_from=start, date_to=end):
            by_month[r.work_date.strftime("%Y-%m")][r.status] += 1

        trends = []
        for month in sorted(by_month):
            counts = by_month[month]
            total = sum(counts.values())
            trends.append(
                MonthlyTrend(
                    month=month,
                    present=counts[AttendanceStatus.PRESENT],
                    late=counts[AttendanceStatus.LATE],
                    half_day=counts[AttendanceStatus.HALF_DAY],
                    total=total,
                    attendance_rate=attendance_rate(counts[AttendanceStatus.PRESENT], total),
                )
            )
        return trends
