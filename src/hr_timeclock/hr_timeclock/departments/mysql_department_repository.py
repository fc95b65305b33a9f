from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..core.exceptions import NotFoundError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Department
from .repository import DepartmentStore

_COLUMNS = ("name", "description", "manager_id")

_SELECT = "SELECT department_id, name, description, manager_id FROM departments"


def _row_to_department(r: dict) -> Department:
    manager_id = r.get("manager_id")
    return Department(
        department_id=int(r["department_id"]),
        name=r["name"],
        description=r.get("description") or "",
        manager_id=int(manager_id) if manager_id is not None else None,
    )


class MySQLDepartmentStore(DepartmentStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, department: Department) -> Department:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO departments(name, description, manager_id) VALUES(%s,%s,%s)",
                (department.name, department.description, department.manager_id),
            )
            department_id = int(cur.lastrowid)
        return Department(
            department_id=department_id,
            name=department.name,
            description=department.description,
            manager_id=department.manager_id,
        )

    def get_by_id(self, department_id: int) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE department_id=%s", (int(department_id),))
            r = fetchone(cur)
            return _row_to_department(r) if r else None

    def list_departments(self) -> Sequence[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY name ASC, department_id ASC")
            return [_row_to_department(r) for r in fetchall(cur)]

    def update(self, department_id: int, patch: Mapping[str, Any]) -> Department:
        unknown = set(patch) - set(_COLUMNS)
        if unknown:
            raise ValidationError(f"Unknown department fields: {', '.join(sorted(unknown))}")

        if patch:
            assignments = ", ".join(f"{k}=%s" for k in patch)
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"UPDATE departments SET {assignments} WHERE department_id=%s",
                    tuple(patch.values()) + (int(department_id),),
                )

        updated = self.get_by_id(department_id)
        if not updated:
            raise NotFoundError("Department not found")
        return updated

    def delete(self, department_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM departments WHERE department_id=%s", (int(department_id),))
            deleted = cur.rowcount > 0
        if not deleted:
            raise NotFoundError("Department not found")
        return True
