from __future__ import annotations

from datetime import datetime

from ..core.enums import EmployeeStatus, LeaveStatus
from ..departments.repository import DepartmentStore
from ..employees.repository import EmployeeStore
from ..leave.repository import LeaveRequestStore
from ..timeclock.service import TimeTrackingService
from .model import DashboardStats


class DashboardService:
    """Head-count summary for the current day.

    An employee counts as present once they have clocked in today, whether
    the session is still open or already closed.
    """

    def __init__(
        self,
        *,
        employees: EmployeeStore,
        departments: DepartmentStore,
        leave: LeaveRequestStore,
        time_tracking: TimeTrackingService,
    ):
        self._employees = employees
        self._departments = departments
        self._leave = leave
        self._time_tracking = time_tracking

    def stats(self, *, now: datetime | None = None) -> DashboardStats:
        today = self._time_tracking.today(now=now)
        employees = self._employees.list_employees()

        present = {e.employee_id for e in self._time_tracking.get_todays_entries(now=now)}
        present.update(e.employee_id for e in self._time_tracking.open_sessions() if e.work_date == today)

        requests = self._leave.list_requests()
        approved_today = [
            r for r in requests if r.status == LeaveStatus.APPROVED and r.start_date <= today <= r.end_date
        ]

        return DashboardStats(
            day=today,
            total_employees=len(employees),
            departments=len(self._departments.list_departments()),
            active_employees=sum(1 for e in employees if e.status == EmployeeStatus.ACTIVE),
            present_today=len(present),
            on_leave=sum(1 for e in employees if e.status == EmployeeStatus.ON_LEAVE),
            approved_leave_today=len(approved_today),
            pending_leave_requests=sum(1 for r in requests if r.status == LeaveStatus.PENDING),
        )
