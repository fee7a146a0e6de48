from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: Plain data object (no DB access). The attendance engine only reads
    identity and labels from it.
    """

    employee_id: str
    name: str
    department: str
    email: Optional[str] = None
    position: Optional[str] = None
    join_date: Optional[date] = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "name": self.name,
            "department": self.department,
            "email": self.email,
            "position": self.position,
            "join_date": self.join_date.isoformat() if self.join_date else None,
            "status": self.status.value,
        }
