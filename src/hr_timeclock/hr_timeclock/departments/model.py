from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Department:
    department_id: Optional[int]
    name: str
    description: str
    manager_id: Optional[int] = None


@dataclass(frozen=True)
class DepartmentOverview:
    """A department with head counts of the employees assigned to it by name."""

    department: Department
    employee_count: int
    active_employee_count: int


def department_to_dict(o: DepartmentOverview) -> dict:
    d = o.department
    return {
        "id": d.department_id,
        "name": d.name,
        "description": d.description,
        "managerId": d.manager_id,
        "employeeCount": o.employee_count,
        "activeEmployeeCount": o.active_employee_count,
    }
