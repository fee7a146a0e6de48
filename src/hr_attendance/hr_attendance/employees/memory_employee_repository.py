from __future__ import annotations

import threading
from typing import Iterable, Optional, Sequence

from .model import Employee
from .repository import EmployeeDirectory


class InMemoryEmployeeDirectory(EmployeeDirectory):
    def __init__(self, employees: Iterable[Employee] = ()):
        self._lock = threading.Lock()
        self._by_id: dict[str, Employee] = {e.employee_id: e for e in employees}

    def find_by_id(self, employee_id: str) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def list_all(self) -> Sequence[Employee]:
        with self._lock:
            return sorted(self._by_id.values(), key=lambda e: e.employee_id)

    def create(self, employee: Employee) -> None:
        with self._lock:
            self._by_id[employee.employee_id] = employee

    def update(self, employee: Employee) -> bool:
        with self._lock:
            if employee.employee_id not in self._by_id:
                return False
            self._by_id[employee.employee_id] = employee
            return True

    def delete_by_id(self, employee_id: str) -> bool:
        with self._lock:
            return self._by_id.pop(employee_id, None) is not None
