from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DashboardStats:
    day: date
    total_employees: int
    departments: int
    active_employees: int
    present_today: int
    on_leave: int
    approved_leave_today: int
    pending_leave_requests: int


def stats_to_dict(s: DashboardStats) -> dict:
    return {
        "date": s.day.strftime("%Y-%m-%d"),
        "totalEmployees": s.total_employees,
        "departments": s.departments,
        "activeEmployees": s.active_employees,
        "presentToday": s.present_today,
        "onLeave": s.on_leave,
        "approvedLeaveToday": s.approved_leave_today,
        "pendingLeaveRequests": s.pending_leave_requests,
    }
