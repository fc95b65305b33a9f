from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType, Urgency
from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import LeaveRequest, NewLeaveRequest
from .repository import LeaveRequestStore

_SELECT = """
    SELECT request_id, employee_name, leave_type, start_date, end_date, total_days,
           reason, urgency, status, created_at, manager_id, reviewed_at, reviewed_by, tags
    FROM leave_requests
"""


def _row_to_request(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["request_id"]),
        employee_name=r["employee_name"],
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        total_days=int(r["total_days"]),
        reason=r["reason"],
        urgency=Urgency(r.get("urgency") or Urgency.NORMAL.value),
        status=LeaveStatus(r["status"]),
        created_at=r["created_at"],
        manager_id=int(r.get("manager_id") or 1),
        reviewed_at=r.get("reviewed_at"),
        reviewed_by=r.get("reviewed_by") or "",
        tags=r.get("tags") or "",
    )


class MySQLLeaveRequestStore(LeaveRequestStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, request: NewLeaveRequest) -> LeaveRequest:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(
                    employee_name, leave_type, start_date, end_date, total_days,
                    reason, urgency, status, created_at, manager_id, tags
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    request.employee_name,
                    request.leave_type.value,
                    request.start_date,
                    request.end_date,
                    int(request.total_days),
                    request.reason,
                    request.urgency.value,
                    LeaveStatus.PENDING.value,
                    request.created_at,
                    int(request.manager_id),
                    request.tags,
                ),
            )
            request_id = int(cur.lastrowid)

        created = self.get_by_id(request_id)
        if not created:
            raise NotFoundError("Leave request not found after insert")
        return created

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _row_to_request(r) if r else None

    def list_requests(self, *, status: Optional[LeaveStatus] = None) -> Sequence[LeaveRequest]:
        where, params = build_where([("status=%s", status.value if status else None)])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + f" WHERE {where} ORDER BY request_id DESC", params)
            return [_row_to_request(r) for r in fetchall(cur)]

    def decide(self, *, request_id: int, status: LeaveStatus, reviewed_by: str, reviewed_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, reviewed_by=%s, reviewed_at=%s
                WHERE request_id=%s AND status=%s
                """,
                (status.value, reviewed_by, reviewed_at, int(request_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def delete(self, request_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM leave_requests WHERE request_id=%s", (int(request_id),))
            deleted = cur.rowcount > 0
        if not deleted:
            raise NotFoundError("Leave request not found")
        return True
