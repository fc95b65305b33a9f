from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.constants import DEFAULT_MANAGER_ID
from ..core.enums import LeaveStatus, LeaveType, Urgency


@dataclass(frozen=True)
class NewLeaveRequest:
    employee_name: str
    leave_type: LeaveType
    start_date: date
    end_date: date
    total_days: int
    reason: str
    urgency: Urgency
    created_at: datetime
    manager_id: int = DEFAULT_MANAGER_ID
    tags: str = ""


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    employee_name: str
    leave_type: LeaveType
    start_date: date
    end_date: date
    total_days: int
    reason: str
    urgency: Urgency
    status: LeaveStatus
    created_at: datetime
    manager_id: int = DEFAULT_MANAGER_ID
    reviewed_at: Optional[datetime] = None
    reviewed_by: str = ""
    tags: str = ""


def leave_to_dict(r: LeaveRequest) -> dict:
    return {
        "id": r.request_id,
        "employeeName": r.employee_name,
        "leaveType": r.leave_type.value,
        "startDate": r.start_date.strftime("%Y-%m-%d"),
        "endDate": r.end_date.strftime("%Y-%m-%d"),
        "totalDays": r.total_days,
        "reason": r.reason,
        "urgency": r.urgency.value,
        "status": r.status.value,
        "createdAt": r.created_at.isoformat(),
        "managerId": r.manager_id,
        "reviewedAt": r.reviewed_at.isoformat() if r.reviewed_at else None,
        "reviewedBy": r.reviewed_by,
        "tags": r.tags,
    }
