from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceEngine
from .common.datetime_utils import Clock
from .core.constants import (
    DEFAULT_HALF_DAY_HOURS,
    DEFAULT_LATE_THRESHOLD_MINUTES,
    DEFAULT_REMOTE_TIMEOUT_SECONDS,
    DEFAULT_WORK_END,
    DEFAULT_WORK_START,
)
from .database.connection import DBConfig, DatabaseConnection
from .employees.memory_employee_repository import InMemoryEmployeeDirectory
from .employees.model import Employee
from .employees.mysql_employee_repository import MySQLEmployeeDirectory
from .employees.repository import EmployeeDirectory
from .employees.service import EmployeeService
from .gateway.http_gateway import HttpPersistenceGateway
from .reports.service import AttendanceReportService
from .shifts.model import WorkSchedule

DEMO_EMPLOYEES = (
    Employee("EMP001", "John Doe", "Engineering", "john.doe@afraexpress.com", "Senior Developer", date(2023, 1, 15)),
    Employee("EMP002", "Sarah Smith", "HR", "sarah.smith@afraexpress.com", "HR Manager", date(2022, 11, 20)),
    Employee("EMP003", "Mike Johnson", "Marketing", "mike.johnson@afraexpress.com", "Marketing Specialist", date(2023, 3, 10)),
)


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeDirectory
    attendance_repo: AttendanceRepository

    employee_service: EmployeeService
    attendance_engine: AttendanceEngine
    report_service: AttendanceReportService

    conn: Optional[DatabaseConnection] = None


def _rules(settings) -> tuple[WorkSchedule, AttendanceStrategyFactory]:
    schedule = WorkSchedule.from_strings(
        getattr(settings, "WORK_START_TIME", DEFAULT_WORK_START),
        getattr(settings, "WORK_END_TIME", DEFAULT_WORK_END),
        int(getattr(settings, "LATE_THRESHOLD_MINUTES", DEFAULT_LATE_THRESHOLD_MINUTES)),
    )
    factory = AttendanceStrategyFactory(
        apply_late_rule=bool(getattr(settings, "APPLY_LATE_RULE", False)),
        apply_half_day_rule=bool(getattr(settings, "APPLY_HALF_DAY_RULE", False)),
        half_day_hours=float(getattr(settings, "HALF_DAY_HOURS", DEFAULT_HALF_DAY_HOURS)),
    )
    return schedule, factory


def _assemble(
    employees_repo: EmployeeDirectory,
    attendance_repo: AttendanceRepository,
    *,
    settings=None,
    clock: Optional[Clock] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    schedule, factory = _rules(settings)
    engine = AttendanceEngine(
        attendance_repo,
        employees_repo,
        clock=clock,
        schedule=schedule,
        strategy_factory=factory,
    )
    return Container(
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        employee_service=EmployeeService(employees_repo, attendance_repo),
        attendance_engine=engine,
        report_service=AttendanceReportService(attendance_repo, employees_repo),
        conn=conn,
    )


def build_container(*, db_config: dict, settings=None, clock: Optional[Clock] = None) -> Container:
    """Server role: MySQL is the system of record."""
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return _assemble(
        MySQLEmployeeDirectory(conn),
        MySQLAttendanceRepository(conn),
        settings=settings,
        clock=clock,
        conn=conn,
    )


def build_memory_container(
    *,
    employees: Iterable[Employee] = DEMO_EMPLOYEES,
    settings=None,
    clock: Optional[Clock] = None,
) -> Container:
    return _assemble(
        InMemoryEmployeeDirectory(employees),
        InMemoryAttendanceRepository(),
        settings=settings,
        clock=clock,
    )


def build_client_engine(
    *,
    employees: EmployeeDirectory,
    settings=None,
    base_url: Optional[str] = None,
    clock: Optional[Clock] = None,
    gateway: Optional[HttpPersistenceGateway] = None,
) -> AttendanceEngine:
    """Kiosk role: local in-memory state reconciled against the remote API."""
    if gateway is None:
        gateway = HttpPersistenceGateway(
            base_url or getattr(settings, "REMOTE_API_URL"),
            timeout=float(getattr(settings, "REMOTE_TIMEOUT_SECONDS", DEFAULT_REMOTE_TIMEOUT_SECONDS)),
        )
    schedule, factory = _rules(settings)
    return AttendanceEngine(
        InMemoryAttendanceRepository(),
        employees,
        gateway=gateway,
        clock=clock,
        schedule=schedule,
        strategy_factory=factory,
    )
