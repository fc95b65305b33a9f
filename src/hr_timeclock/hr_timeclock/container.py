from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .common.datetime_utils import resolve_timezone
from .core.constants import DEFAULT_HOURS_DECIMALS
from .core.enums import StoreBackend
from .dashboard.service import DashboardService
from .database.connection import DatabaseConnection, DBConfig
from .departments.memory_repository import InMemoryDepartmentStore
from .departments.mysql_department_repository import MySQLDepartmentStore
from .departments.repository import DepartmentStore
from .departments.service import DepartmentService
from .employees.memory_repository import InMemoryEmployeeStore
from .employees.mysql_employee_repository import MySQLEmployeeStore
from .employees.repository import EmployeeStore
from .employees.service import EmployeeService
from .leave.memory_repository import InMemoryLeaveRequestStore
from .leave.mysql_leave_repository import MySQLLeaveRequestStore
from .leave.repository import LeaveRequestStore
from .leave.service import LeaveRequestService
from .timeclock.calculator import HoursCalculator
from .timeclock.memory_repository import InMemoryTimeEntryStore
from .timeclock.mysql_time_entry_repository import MySQLTimeEntryStore
from .timeclock.repository import TimeEntryStore
from .timeclock.service import TimeTrackingService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employee_store: EmployeeStore
    department_store: DepartmentStore
    time_entry_store: TimeEntryStore
    leave_store: LeaveRequestStore

    employee_service: EmployeeService
    department_service: DepartmentService
    time_tracking_service: TimeTrackingService
    leave_service: LeaveRequestService
    dashboard_service: DashboardService


def build_container(
    *,
    store_backend: str = StoreBackend.MEMORY.value,
    db_config: Optional[dict] = None,
    timezone: str = "",
    hours_decimals: int = DEFAULT_HOURS_DECIMALS,
) -> Container:
    backend = StoreBackend(store_backend)
    tz = resolve_timezone(timezone)

    conn: Optional[DatabaseConnection] = None
    if backend == StoreBackend.MYSQL:
        if not db_config:
            raise ValueError("DB_CONFIG is required for the mysql store backend")
        conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
        employee_store: EmployeeStore = MySQLEmployeeStore(conn)
        department_store: DepartmentStore = MySQLDepartmentStore(conn)
        time_entry_store: TimeEntryStore = MySQLTimeEntryStore(conn)
        leave_store: LeaveRequestStore = MySQLLeaveRequestStore(conn)
    else:
        employee_store = InMemoryEmployeeStore()
        department_store = InMemoryDepartmentStore()
        time_entry_store = InMemoryTimeEntryStore()
        leave_store = InMemoryLeaveRequestStore()

    time_tracking_service = TimeTrackingService(
        time_entry_store,
        calculator=HoursCalculator(hours_decimals),
        tz=tz,
    )

    return Container(
        conn=conn,
        employee_store=employee_store,
        department_store=department_store,
        time_entry_store=time_entry_store,
        leave_store=leave_store,
        employee_service=EmployeeService(employee_store),
        department_service=DepartmentService(department_store, employee_store),
        time_tracking_service=time_tracking_service,
        leave_service=LeaveRequestService(leave_store, tz=tz),
        dashboard_service=DashboardService(
            employees=employee_store,
            departments=department_store,
            leave=leave_store,
            time_tracking=time_tracking_service,
        ),
    )
