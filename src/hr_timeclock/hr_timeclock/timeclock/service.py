from __future__ import annotations

import threading
from contextlib import contextmanager
from datetime import date, datetime, timedelta, tzinfo
from decimal import Decimal
from typing import Iterator, Optional, Sequence

from ..common.datetime_utils import date_range, in_zone, local_date, monday_of, now_local
from ..core.constants import DAYS_PER_WEEK
from ..core.exceptions import (
    AlreadyClockedInError,
    NotClockedInError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from ..core.logging import get_logger
from .calculator import HoursCalculator
from .model import TimeEntry, WeeklyAggregate
from .repository import TimeEntryStore

logger = get_logger(__name__)


class TimeTrackingService:
    """Clock-in/clock-out sessions and hour totals.

    Open sessions live in memory, keyed by employee; an entry reaches the
    record store only when its session is closed. Each employee has a lock so
    overlapping calls for the same employee run one after another.
    """

    def __init__(
        self,
        store: TimeEntryStore,
        *,
        calculator: HoursCalculator | None = None,
        tz: tzinfo | None = None,
    ):
        self._store = store
        self._calculator = calculator or HoursCalculator()
        self._tz = tz
        self._open: dict[int, TimeEntry] = {}
        self._locks: dict[int, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def _employee_lock(self, employee_id: int) -> Iterator[None]:
        with self._locks_guard:
            lock = self._locks.setdefault(employee_id, threading.Lock())
        with lock:
            yield

    def _now(self, now: datetime | None) -> datetime:
        return now or now_local(self._tz)

    def today(self, *, now: datetime | None = None) -> date:
        return local_date(self._now(now), self._tz)

    def clock_in(self, employee_id: int, *, now: datetime | None = None) -> TimeEntry:
        employee_id = int(employee_id)
        now = self._now(now)

        with self._employee_lock(employee_id):
            if employee_id in self._open:
                logger.warning("Employee %s tried to clock in while already clocked in", employee_id)
                raise AlreadyClockedInError("Already clocked in")

            entry = TimeEntry(
                entry_id=None,
                employee_id=employee_id,
                clock_in=now,
                clock_out=None,
                total_hours=Decimal(0),
                work_date=local_date(now, self._tz),
            )
            with self._locks_guard:
                self._open[employee_id] = entry

        logger.info("Employee %s clocked in at %s", employee_id, now.isoformat())
        return entry

    def clock_out(self, employee_id: int, *, now: datetime | None = None) -> TimeEntry:
        employee_id = int(employee_id)
        now = self._now(now)

        with self._employee_lock(employee_id):
            current = self._open.get(employee_id)
            if current is None:
                logger.warning("Employee %s tried to clock out without an open session", employee_id)
                raise NotClockedInError("Not currently clocked in")

            completed = TimeEntry(
                entry_id=None,
                employee_id=employee_id,
                clock_in=current.clock_in,
                clock_out=now,
                total_hours=self._calculator.between(current.clock_in, now),
                work_date=current.work_date,
            )
            try:
                persisted = self._store.create(completed)
            except StoreUnavailableError:
                logger.error("Could not persist time entry for employee %s; session kept open", employee_id)
                raise
            with self._locks_guard:
                del self._open[employee_id]

        logger.info(
            "Employee %s clocked out at %s (%s h, entry %s)",
            employee_id,
            now.isoformat(),
            persisted.total_hours,
            persisted.entry_id,
        )
        return persisted

    def get_current_entry(self, employee_id: int) -> Optional[TimeEntry]:
        return self._open.get(int(employee_id))

    def open_sessions(self) -> Sequence[TimeEntry]:
        """Every session currently clocked in, across employees."""
        with self._locks_guard:
            return list(self._open.values())

    def get_todays_entries(
        self,
        *,
        employee_id: int | None = None,
        now: datetime | None = None,
    ) -> Sequence[TimeEntry]:
        return list(self._store.list_entries(employee_id=employee_id, work_date=self.today(now=now)))

    def get_weekly_hours(self, employee_id: int, week_start: date) -> WeeklyAggregate:
        employee_id = int(employee_id)
        week_end = week_start + timedelta(days=DAYS_PER_WEEK - 1)
        entries = list(self._store.list_entries(employee_id=employee_id, start_date=week_start, end_date=week_end))

        daily: dict[date, Decimal] = {}
        for day in date_range(week_start, DAYS_PER_WEEK):
            daily[day] = self._calculator.total(e.total_hours for e in entries if e.work_date == day)

        return WeeklyAggregate(
            employee_id=employee_id,
            week_start=week_start,
            week_end=week_end,
            entries=entries,
            total_hours=self._calculator.total(e.total_hours for e in entries),
            daily_hours=daily,
        )

    @staticmethod
    def week_start_for(day: date) -> date:
        """Monday of the week containing ``day``."""
        return monday_of(day)

    def list_entries(self, *, employee_id: int | None = None) -> Sequence[TimeEntry]:
        return list(self._store.list_entries(employee_id=employee_id))

    def update_entry(
        self,
        entry_id: int,
        *,
        clock_in: datetime | None = None,
        clock_out: datetime | None = None,
    ) -> TimeEntry:
        existing = self._store.get_by_id(int(entry_id))
        if not existing:
            raise NotFoundError("Time entry not found")

        new_in = in_zone(clock_in or existing.clock_in, self._tz)
        new_out = in_zone(clock_out or existing.clock_out, self._tz)
        if new_out is not None and new_out < new_in:
            raise ValidationError("Clock-out cannot be earlier than clock-in")

        patch = {
            "clock_in": new_in,
            "clock_out": new_out,
            "total_hours": self._calculator.between(new_in, new_out) if new_out else Decimal(0),
            "work_date": local_date(new_in, self._tz),
        }
        updated = self._store.update(int(entry_id), patch)
        logger.info("Time entry %s updated (%s h)", updated.entry_id, updated.total_hours)
        return updated

    def delete_entry(self, entry_id: int) -> bool:
        deleted = self._store.delete(int(entry_id))
        logger.info("Time entry %s deleted", entry_id)
        return deleted
