from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class TimeEntry:
    """Domain entity: one attendance session of an employee.

    ``entry_id`` is None until the record store persists the entry, and
    ``clock_out`` is None while the session is open.
    """

    entry_id: Optional[int]
    employee_id: int
    clock_in: datetime
    clock_out: Optional[datetime]
    total_hours: Decimal
    work_date: date

    @property
    def is_open(self) -> bool:
        return self.clock_out is None


@dataclass(frozen=True)
class WeeklyAggregate:
    """Read-model: hours of one employee over a 7-day window."""

    employee_id: int
    week_start: date
    week_end: date
    entries: list[TimeEntry]
    total_hours: Decimal
    daily_hours: dict[date, Decimal] = field(default_factory=dict)


def entry_to_dict(entry: TimeEntry) -> dict:
    return {
        "id": entry.entry_id,
        "employeeId": entry.employee_id,
        "clockIn": entry.clock_in.isoformat(),
        "clockOut": entry.clock_out.isoformat() if entry.clock_out else None,
        "totalHours": float(entry.total_hours),
        "date": entry.work_date.strftime("%Y-%m-%d"),
    }


def weekly_to_dict(aggregate: WeeklyAggregate) -> dict:
    return {
        "employeeId": aggregate.employee_id,
        "weekStart": aggregate.week_start.strftime("%Y-%m-%d"),
        "weekEnd": aggregate.week_end.strftime("%Y-%m-%d"),
        "totalHours": float(aggregate.total_hours),
        "entries": [entry_to_dict(e) for e in aggregate.entries],
        "dailyHours": {d.strftime("%Y-%m-%d"): float(h) for d, h in aggregate.daily_hours.items()},
    }
