from __future__ import annotations

from enum import Enum


class StoreBackend(str, Enum):
    """Where employee, department, time entry and leave records are persisted."""

    MEMORY = "memory"
    MYSQL = "mysql"


class LeaveType(str, Enum):
    VACATION = "vacation"
    SICK = "sick"
    PERSONAL = "personal"
    MATERNITY = "maternity"
    PATERNITY = "paternity"
    EMERGENCY = "emergency"


class Urgency(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class LeaveStatus(str, Enum):
    """Approval workflow state of a leave request."""

    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ON_LEAVE = "on-leave"
