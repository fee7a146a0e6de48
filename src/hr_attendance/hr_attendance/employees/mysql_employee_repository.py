from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import execute, query_all, query_one
from .model import Employee
from .repository import EmployeeDirectory

_COLUMNS = "employee_id, name, department, email, position, join_date, status"


def _to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=str(row["employee_id"]),
        name=row["name"],
        department=row["department"],
        email=row.get("email"),
        position=row.get("position"),
        join_date=row.get("join_date"),
        status=EmployeeStatus(row.get("status") or EmployeeStatus.ACTIVE.value),
    )


class MySQLEmployeeDirectory(EmployeeDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_by_id(self, employee_id: str) -> Optional[Employee]:
        row = query_one(self._conn_factory, f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (employee_id,))
        return _to_employee(row) if row else None

    def list_all(self) -> Sequence[Employee]:
        rows = query_all(self._conn_factory, f"SELECT {_COLUMNS} FROM employees ORDER BY employee_id")
        return [_to_employee(r) for r in rows]

    def create(self, employee: Employee) -> None:
        execute(
            self._conn_factory,
            """
            INSERT INTO employees(employee_id, name, department, email, position, join_date, status)
            VALUES(%s,%s,%s,%s,%s,%s,%s)
            """,
            (
                employee.employee_id,
                employee.name,
                employee.department,
                employee.email,
                employee.position,
                employee.join_date,
                employee.status.value,
            ),
        )

    def update(self, employee: Employee) -> bool:
        changed = execute(
            self._conn_factory,
            """
            UPDATE employees
            SET name=%s, department=%s, email=%s, position=%s, join_date=%s, status=%s
            WHERE employee_id=%s
            """,
            (
                employee.name,
                employee.department,
                employee.email,
                employee.position,
                employee.join_date,
                employee.status.value,
                employee.employee_id,
            ),
        )
        return changed > 0

    def delete_by_id(self, employee_id: str) -> bool:
        # attendance_records rows go with it (ON DELETE CASCADE).
        return execute(self._conn_factory, "DELETE FROM employees WHERE employee_id=%s", (employee_id,)) > 0
