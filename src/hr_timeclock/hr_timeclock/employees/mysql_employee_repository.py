from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..core.enums import EmployeeStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeStore

_COLUMNS = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "role",
    "department",
    "hire_date",
    "status",
    "photo_url",
    "emergency_contact_name",
    "emergency_contact_phone",
    "emergency_contact_relationship",
    "tags",
)

_SELECT = f"SELECT employee_id, {', '.join(_COLUMNS)} FROM employees"


def _row_to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        first_name=r["first_name"],
        last_name=r["last_name"],
        email=r["email"],
        phone=r.get("phone") or "",
        role=r.get("role") or "",
        department=r.get("department") or "",
        hire_date=r["hire_date"],
        status=EmployeeStatus(r.get("status") or EmployeeStatus.ACTIVE.value),
        photo_url=r.get("photo_url") or "",
        emergency_contact_name=r.get("emergency_contact_name") or "",
        emergency_contact_phone=r.get("emergency_contact_phone") or "",
        emergency_contact_relationship=r.get("emergency_contact_relationship") or "",
        tags=r.get("tags") or "",
    )


def _db_value(value: Any) -> Any:
    return value.value if isinstance(value, EmployeeStatus) else value


class MySQLEmployeeStore(EmployeeStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, employee: Employee) -> Employee:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO employees({', '.join(_COLUMNS)}) VALUES({', '.join(['%s'] * len(_COLUMNS))})",
                tuple(_db_value(getattr(employee, c)) for c in _COLUMNS),
            )
            employee_id = int(cur.lastrowid)

        created = self.get_by_id(employee_id)
        if not created:
            raise NotFoundError("Employee not found after insert")
        return created

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def list_employees(
        self,
        *,
        status: Optional[EmployeeStatus] = None,
        department: Optional[str] = None,
    ) -> Sequence[Employee]:
        where, params = build_where(
            [
                ("status=%s", status.value if status else None),
                ("department=%s", department),
            ]
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + f" WHERE {where} ORDER BY employee_id DESC", params)
            return [_row_to_employee(r) for r in fetchall(cur)]

    def update(self, employee_id: int, patch: Mapping[str, Any]) -> Employee:
        unknown = set(patch) - set(_COLUMNS)
        if unknown:
            raise ValidationError(f"Unknown employee fields: {', '.join(sorted(unknown))}")

        if patch:
            assignments = ", ".join(f"{k}=%s" for k in patch)
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"UPDATE employees SET {assignments} WHERE employee_id=%s",
                    tuple(_db_value(v) for v in patch.values()) + (int(employee_id),),
                )

        updated = self.get_by_id(employee_id)
        if not updated:
            raise NotFoundError("Employee not found")
        return updated

    def delete(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
            deleted = cur.rowcount > 0
        if not deleted:
            raise NotFoundError("Employee not found")
        return True
