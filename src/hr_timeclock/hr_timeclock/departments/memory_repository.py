from __future__ import annotations

import threading
from dataclasses import fields, replace
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..core.exceptions import NotFoundError, ValidationError
from .model import Department
from .repository import DepartmentStore

UPDATABLE_FIELDS = frozenset(f.name for f in fields(Department)) - {"department_id"}


class InMemoryDepartmentStore(DepartmentStore):
    def __init__(self, seed: Iterable[Department] = ()):
        self._departments: dict[int, Department] = {}
        self._lock = threading.Lock()
        for department in seed:
            if department.department_id is None:
                department = replace(department, department_id=max(self._departments, default=0) + 1)
            self._departments[department.department_id] = department

    def create(self, department: Department) -> Department:
        with self._lock:
            stored = replace(department, department_id=max(self._departments, default=0) + 1)
            self._departments[stored.department_id] = stored
            return stored

    def get_by_id(self, department_id: int) -> Optional[Department]:
        with self._lock:
            return self._departments.get(int(department_id))

    def list_departments(self) -> Sequence[Department]:
        with self._lock:
            items = list(self._departments.values())
        return sorted(items, key=lambda d: (d.name.lower(), d.department_id))

    def update(self, department_id: int, patch: Mapping[str, Any]) -> Department:
        unknown = set(patch) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown department fields: {', '.join(sorted(unknown))}")

        with self._lock:
            current = self._departments.get(int(department_id))
            if current is None:
                raise NotFoundError("Department not found")
            self._departments[current.department_id] = replace(current, **dict(patch))
            return self._departments[current.department_id]

    def delete(self, department_id: int) -> bool:
        with self._lock:
            if self._departments.pop(int(department_id), None) is None:
                raise NotFoundError("Department not found")
            return True
