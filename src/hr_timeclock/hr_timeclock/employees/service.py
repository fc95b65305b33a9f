from __future__ import annotations

import re
from dataclasses import asdict
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import collect_text
from ..core.constants import EMAIL_PATTERN
from ..core.enums import EmployeeStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..core.logging import get_logger
from .model import Employee
from .repository import EmployeeStore

logger = get_logger(__name__)

_EMAIL = re.compile(EMAIL_PATTERN)

# (attribute, error key, label, required)
_TEXT_FIELDS = (
    ("first_name", "firstName", "First name", True),
    ("last_name", "lastName", "Last name", True),
    ("email", "email", "Email", True),
    ("phone", "phone", "Phone", True),
    ("role", "role", "Role", True),
    ("department", "department", "Department", True),
    ("photo_url", "photoUrl", "Photo URL", False),
    ("emergency_contact_name", "emergencyContact.name", "Emergency contact name", False),
    ("emergency_contact_phone", "emergencyContact.phone", "Emergency contact phone", False),
    ("emergency_contact_relationship", "emergencyContact.relationship", "Emergency contact relationship", False),
    ("tags", "tags", "Tags", False),
)

_SEARCHABLE = ("first_name", "last_name", "email", "role", "department")

EDITABLE_FIELDS = frozenset(attr for attr, *_ in _TEXT_FIELDS) | {"hire_date", "status"}


def parse_status_filter(status: Optional[str]) -> Optional[EmployeeStatus]:
    """``None``, ``""`` and ``"all"`` mean no filter."""
    if not status or status == "all":
        return None
    try:
        return EmployeeStatus(status)
    except ValueError:
        raise ValidationError(f"Unknown status filter: {status}")


def clean_employee(values: Mapping[str, Any]) -> dict[str, Any]:
    """Validate a complete set of employee fields and return them normalized.

    Every problem is reported at once in ``ValidationError.errors``, keyed by
    the camelCase field name the client sent.
    """
    errors: dict[str, str] = {}
    cleaned: dict[str, Any] = {
        attr: collect_text(errors, key, values.get(attr), label, required=required)
        for attr, key, label, required in _TEXT_FIELDS
    }

    if cleaned["email"] and "email" not in errors and not _EMAIL.search(cleaned["email"]):
        errors["email"] = "Invalid email format"

    hire_date = values.get("hire_date")
    if hire_date is None:
        errors["hireDate"] = "Hire date is required"
    elif not isinstance(hire_date, date):
        errors["hireDate"] = "Hire date must be a date"
    cleaned["hire_date"] = hire_date

    try:
        cleaned["status"] = EmployeeStatus(values.get("status") or EmployeeStatus.ACTIVE.value)
    except ValueError:
        errors["status"] = f"Unknown status: {values.get('status')}"

    if errors:
        logger.warning("Rejected employee record: %s", errors)
        raise ValidationError("Please fix the errors before saving", errors=errors)
    return cleaned


def matches_query(employee: Employee, query: str) -> bool:
    """Case-insensitive substring match on name, email, role and department."""
    term = query.strip().lower()
    if not term:
        return True
    return any(term in str(getattr(employee, attr)).lower() for attr in _SEARCHABLE)


class EmployeeService:
    def __init__(self, store: EmployeeStore):
        self._store = store

    def get(self, employee_id: int) -> Employee:
        employee = self._store.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def list_employees(self, *, status: Optional[str] = None, department: Optional[str] = None) -> Sequence[Employee]:
        return list(self._store.list_employees(status=parse_status_filter(status), department=department or None))

    def search(self, query: str, *, status: Optional[str] = None) -> Sequence[Employee]:
        if not isinstance(query, str):
            raise ValidationError("Search query must be text")
        return [e for e in self.list_employees(status=status) if matches_query(e, query)]

    def create(self, values: Mapping[str, Any]) -> Employee:
        created = self._store.create(Employee(employee_id=None, **clean_employee(values)))
        logger.info("Employee %s created (%s, %s)", created.employee_id, created.full_name, created.department)
        return created

    def update(self, employee_id: int, changes: Mapping[str, Any]) -> Employee:
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown employee fields: {', '.join(sorted(unknown))}")

        existing = self.get(employee_id)
        merged = {**asdict(existing), **dict(changes)}
        merged.pop("employee_id")
        updated = self._store.update(existing.employee_id, clean_employee(merged))
        logger.info("Employee %s updated", updated.employee_id)
        return updated

    def delete(self, employee_id: int) -> bool:
        deleted = self._store.delete(int(employee_id))
        logger.info("Employee %s deleted", employee_id)
        return deleted
