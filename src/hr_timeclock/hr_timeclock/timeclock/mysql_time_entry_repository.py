from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from ..core.exceptions import NotFoundError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import TimeEntry
from .repository import TimeEntryStore

_COLUMNS = {
    "employee_id": "employee_id",
    "clock_in": "clock_in",
    "clock_out": "clock_out",
    "total_hours": "total_hours",
    "work_date": "work_date",
}

_SELECT = """
    SELECT entry_id, employee_id, clock_in, clock_out, total_hours, work_date
    FROM time_entries
"""


def _row_to_entry(r: dict) -> TimeEntry:
    return TimeEntry(
        entry_id=int(r["entry_id"]),
        employee_id=int(r["employee_id"]),
        clock_in=r["clock_in"],
        clock_out=r.get("clock_out"),
        total_hours=Decimal(r.get("total_hours") or 0),
        work_date=r["work_date"],
    )


class MySQLTimeEntryStore(TimeEntryStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, entry: TimeEntry) -> TimeEntry:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_entries(employee_id, clock_in, clock_out, total_hours, work_date)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (entry.employee_id, entry.clock_in, entry.clock_out, entry.total_hours, entry.work_date),
            )
            new_id = int(cur.lastrowid)
        return TimeEntry(
            entry_id=new_id,
            employee_id=entry.employee_id,
            clock_in=entry.clock_in,
            clock_out=entry.clock_out,
            total_hours=entry.total_hours,
            work_date=entry.work_date,
        )

    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE entry_id=%s", (int(entry_id),))
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def list_entries(
        self,
        *,
        employee_id: Optional[int] = None,
        work_date: Optional[date] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[TimeEntry]:
        where, params = build_where(
            [
                ("employee_id=%s", int(employee_id) if employee_id is not None else None),
                ("work_date=%s", work_date),
                ("work_date>=%s", start_date),
                ("work_date<=%s", end_date),
            ]
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + f" WHERE {where} ORDER BY clock_in ASC", params)
            return [_row_to_entry(r) for r in fetchall(cur)]

    def update(self, entry_id: int, patch: Mapping[str, Any]) -> TimeEntry:
        unknown = set(patch) - set(_COLUMNS)
        if unknown:
            raise ValidationError(f"Unknown time entry fields: {', '.join(sorted(unknown))}")

        if patch:
            assignments = ", ".join(f"{_COLUMNS[k]}=%s" for k in patch)
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"UPDATE time_entries SET {assignments} WHERE entry_id=%s",
                    tuple(patch.values()) + (int(entry_id),),
                )

        updated = self.get_by_id(entry_id)
        if not updated:
            raise NotFoundError("Time entry not found")
        return updated

    def delete(self, entry_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM time_entries WHERE entry_id=%s", (int(entry_id),))
            deleted = cur.rowcount > 0
        if not deleted:
            raise NotFoundError("Time entry not found")
        return True
