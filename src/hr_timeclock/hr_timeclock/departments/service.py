from __future__ import annotations

from collections import Counter
from dataclasses import asdict
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import collect_text
from ..core.enums import EmployeeStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..core.logging import get_logger
from ..employees.model import Employee
from ..employees.repository import EmployeeStore
from .model import Department, DepartmentOverview
from .repository import DepartmentStore

logger = get_logger(__name__)

EDITABLE_FIELDS = frozenset({"name", "description", "manager_id"})


class DepartmentService:
    """Departments and the head counts of employees assigned to them.

    Employees reference a department by name, so counts are matched on the
    exact department name.
    """

    def __init__(self, store: DepartmentStore, employees: EmployeeStore):
        self._store = store
        self._employees = employees

    def _clean(self, values: Mapping[str, Any], *, department_id: Optional[int] = None) -> dict[str, Any]:
        errors: dict[str, str] = {}
        name = collect_text(errors, "name", values.get("name"), "Department name")
        description = collect_text(errors, "description", values.get("description"), "Description")

        if name and "name" not in errors:
            taken = any(
                d.name.lower() == name.lower() and d.department_id != department_id
                for d in self._store.list_departments()
            )
            if taken:
                errors["name"] = "A department with this name already exists"

        manager_id = values.get("manager_id")
        if manager_id in (None, ""):
            manager_id = None
        else:
            try:
                manager_id = int(manager_id)
            except (TypeError, ValueError):
                errors["managerId"] = "Manager must be an employee id"
            else:
                if manager_id <= 0 or not self._employees.get_by_id(manager_id):
                    errors["managerId"] = "Manager must be an existing employee"

        if errors:
            logger.warning("Rejected department: %s", errors)
            raise ValidationError("Please fix the errors before saving", errors=errors)
        return {"name": name, "description": description, "manager_id": manager_id}

    def _overviews(self, departments: Sequence[Department]) -> list[DepartmentOverview]:
        employees = self._employees.list_employees()
        total = Counter(e.department for e in employees)
        active = Counter(e.department for e in employees if e.status == EmployeeStatus.ACTIVE)
        return [
            DepartmentOverview(
                department=d,
                employee_count=total[d.name],
                active_employee_count=active[d.name],
            )
            for d in departments
        ]

    def _get_department(self, department_id: int) -> Department:
        department = self._store.get_by_id(int(department_id))
        if not department:
            raise NotFoundError("Department not found")
        return department

    def list_departments(self) -> Sequence[DepartmentOverview]:
        return self._overviews(self._store.list_departments())

    def get(self, department_id: int) -> DepartmentOverview:
        return self._overviews([self._get_department(department_id)])[0]

    def members(self, department_id: int) -> Sequence[Employee]:
        department = self._get_department(department_id)
        return list(self._employees.list_employees(department=department.name))

    def create(self, values: Mapping[str, Any]) -> DepartmentOverview:
        created = self._store.create(Department(department_id=None, **self._clean(values)))
        logger.info("Department %s created (%s)", created.department_id, created.name)
        return self._overviews([created])[0]

    def update(self, department_id: int, changes: Mapping[str, Any]) -> DepartmentOverview:
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown department fields: {', '.join(sorted(unknown))}")

        existing = self._get_department(department_id)
        merged = {**asdict(existing), **dict(changes)}
        updated = self._store.update(
            existing.department_id,
            self._clean(merged, department_id=existing.department_id),
        )
        logger.info("Department %s updated", updated.department_id)
        return self._overviews([updated])[0]

    def delete(self, department_id: int) -> bool:
        deleted = self._store.delete(int(department_id))
        logger.info("Department %s deleted", department_id)
        return deleted
