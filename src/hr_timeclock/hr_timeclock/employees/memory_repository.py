from __future__ import annotations

import threading
from dataclasses import fields, replace
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..core.enums import EmployeeStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import Employee
from .repository import EmployeeStore

UPDATABLE_FIELDS = frozenset(f.name for f in fields(Employee)) - {"employee_id"}


class InMemoryEmployeeStore(EmployeeStore):
    def __init__(self, seed: Iterable[Employee] = ()):
        self._employees: dict[int, Employee] = {}
        self._lock = threading.Lock()
        for employee in seed:
            if employee.employee_id is None:
                employee = replace(employee, employee_id=max(self._employees, default=0) + 1)
            self._employees[employee.employee_id] = employee

    def create(self, employee: Employee) -> Employee:
        with self._lock:
            stored = replace(employee, employee_id=max(self._employees, default=0) + 1)
            self._employees[stored.employee_id] = stored
            return stored

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with self._lock:
            return self._employees.get(int(employee_id))

    def list_employees(
        self,
        *,
        status: Optional[EmployeeStatus] = None,
        department: Optional[str] = None,
    ) -> Sequence[Employee]:
        with self._lock:
            items = list(self._employees.values())

        items.sort(key=lambda e: e.employee_id, reverse=True)
        if status is not None:
            items = [e for e in items if e.status == status]
        if department is not None:
            items = [e for e in items if e.department == department]
        return items

    def update(self, employee_id: int, patch: Mapping[str, Any]) -> Employee:
        unknown = set(patch) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown employee fields: {', '.join(sorted(unknown))}")

        with self._lock:
            current = self._employees.get(int(employee_id))
            if current is None:
                raise NotFoundError("Employee not found")
            self._employees[current.employee_id] = replace(current, **dict(patch))
            return self._employees[current.employee_id]

    def delete(self, employee_id: int) -> bool:
        with self._lock:
            if self._employees.pop(int(employee_id), None) is None:
                raise NotFoundError("Employee not found")
            return True
