from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.validators import require_email, require_non_empty
from ..core.enums import EmployeeStatus
from ..core.exceptions import UnknownEmployee, ValidationError
from .model import Employee
from .repository import EmployeeDirectory

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = {"name", "department", "email", "position", "join_date", "status"}


class EmployeeService:
    """Use case: manage employee records (admin)."""

    def __init__(self, employees: EmployeeDirectory, attendance: AttendanceRepository):
        self._employees = employees
        self._attendance = attendance

    def list_employees(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def get_employee(self, employee_id: str) -> Employee:
        employee = self._employees.find_by_id(employee_id)
        if employee is None:
            raise UnknownEmployee(employee_id)
        return employee

    def add_employee(
        self,
        *,
        employee_id: str,
        name: str,
        department: str,
        email: Optional[str] = None,
        position: Optional[str] = None,
        join_date: Optional[date] = None,
        status: EmployeeStatus = EmployeeStatus.ACTIVE,
    ) -> Employee:
        employee_id = require_non_empty(employee_id, "employee_id")
        if self._employees.find_by_id(employee_id):
            raise ValidationError(f"Employee {employee_id} already exists")

        employee = Employee(
            employee_id=employee_id,
            name=require_non_empty(name, "name"),
            department=require_non_empty(department, "department"),
            email=require_email(email) if email else None,
            position=position or None,
            join_date=join_date,
            status=EmployeeStatus(status),
        )
        self._employees.create(employee)
        logger.info("Added employee %s (%s)", employee.employee_id, employee.department)
        return employee

    def update_employee(self, employee_id: str, /, **changes) -> Employee:
        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be changed: {', '.join(sorted(unknown))}")

        current = self.get_employee(employee_id)
        if "name" in changes:
            changes["name"] = require_non_empty(changes["name"], "name")
        if "department" in changes:
            changes["department"] = require_non_empty(changes["department"], "department")
        if changes.get("email"):
            changes["email"] = require_email(changes["email"])
        if "status" in changes:
            changes["status"] = EmployeeStatus(changes["status"])

        updated = replace(current, **changes)
        if not self._employees.update(updated):
            raise UnknownEmployee(employee_id)
        return updated

    def delete_employee(self, employee_id: str) -> int:
        """Delete an employee and their attendance records; returns records removed."""
        self.get_employee(employee_id)
        removed = self._attendance.delete_for_employee(employee_id)
        self._employees.delete_by_id(employee_id)
        logger.info("Deleted employee %s with %d attendance record(s)", employee_id, removed)
        return removed
