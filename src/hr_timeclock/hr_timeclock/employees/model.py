from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Employee:
    employee_id: Optional[int]
    first_name: str
    last_name: str
    email: str
    phone: str
    role: str
    department: str
    hire_date: date
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    photo_url: str = ""
    emergency_contact_name: str = ""
    emergency_contact_phone: str = ""
    emergency_contact_relationship: str = ""
    tags: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


def employee_to_dict(e: Employee) -> dict:
    return {
        "id": e.employee_id,
        "name": e.full_name,
        "firstName": e.first_name,
        "lastName": e.last_name,
        "email": e.email,
        "phone": e.phone,
        "role": e.role,
        "department": e.department,
        "hireDate": e.hire_date.strftime("%Y-%m-%d"),
        "status": e.status.value,
        "photoUrl": e.photo_url,
        "emergencyContact": {
            "name": e.emergency_contact_name,
            "phone": e.emergency_contact_phone,
            "relationship": e.emergency_contact_relationship,
        },
        "tags": e.tags,
    }
