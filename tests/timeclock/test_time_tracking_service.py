from __future__ import annotations

import threading
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from src.hr_timeclock.hr_timeclock.core.exceptions import (
    AlreadyClockedInError,
    NotClockedInError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from src.hr_timeclock.hr_timeclock.timeclock.calculator import HoursCalculator
from src.hr_timeclock.hr_timeclock.timeclock.memory_repository import InMemoryTimeEntryStore
from src.hr_timeclock.hr_timeclock.timeclock.model import TimeEntry
from src.hr_timeclock.hr_timeclock.timeclock.service import TimeTrackingService


class FlakyStore(InMemoryTimeEntryStore):
    """Fails the first ``failures`` create calls."""

    def __init__(self, failures: int = 1):
        super().__init__()
        self.failures = failures

    def create(self, entry: TimeEntry) -> TimeEntry:
        if self.failures > 0:
            self.failures -= 1
            raise StoreUnavailableError("backend down")
        return super().create(entry)


def _closed(employee_id: int, day: date, hours: str) -> TimeEntry:
    start = datetime.combine(day, datetime.min.time()).replace(hour=9)
    return TimeEntry(
        entry_id=None,
        employee_id=employee_id,
        clock_in=start,
        clock_out=start + timedelta(hours=float(hours)),
        total_hours=Decimal(hours),
        work_date=day,
    )


def test_clock_in_opens_session_without_persisting(fixed_now):
    store = InMemoryTimeEntryStore()
    svc = TimeTrackingService(store)

    entry = svc.clock_in(1, now=fixed_now)

    assert entry.is_open
    assert entry.entry_id is None
    assert entry.total_hours == Decimal(0)
    assert entry.work_date == fixed_now.date()
    assert svc.get_current_entry(1) == entry
    assert store.list_entries() == []


def test_clock_out_full_day_is_eight_and_a_half_hours(fixed_now):
    store = InMemoryTimeEntryStore()
    svc = TimeTrackingService(store)

    svc.clock_in(1, now=fixed_now)
    entry = svc.clock_out(1, now=fixed_now.replace(hour=17, minute=30))

    assert entry.total_hours == Decimal("8.50")
    assert entry.entry_id == 1
    assert entry.clock_out == fixed_now.replace(hour=17, minute=30)
    assert svc.get_current_entry(1) is None
    assert store.list_entries() == [entry]


def test_immediate_clock_out_has_non_negative_hours():
    svc = TimeTrackingService(InMemoryTimeEntryStore())

    svc.clock_in(1)
    entry = svc.clock_out(1)

    assert entry.total_hours >= 0
    assert entry.total_hours == HoursCalculator().between(entry.clock_in, entry.clock_out)


def test_clock_in_twice_keeps_original_session(fixed_now):
    svc = TimeTrackingService(InMemoryTimeEntryStore())
    first = svc.clock_in(1, now=fixed_now)

    with pytest.raises(AlreadyClockedInError):
        svc.clock_in(1, now=fixed_now + timedelta(hours=1))

    assert svc.get_current_entry(1) == first


def test_clock_out_without_clock_in_creates_nothing(fixed_now):
    store = InMemoryTimeEntryStore()
    svc = TimeTrackingService(store)

    with pytest.raises(NotClockedInError):
        svc.clock_out(1, now=fixed_now)

    assert store.list_entries() == []


def test_second_clock_out_fails(fixed_now):
    store = InMemoryTimeEntryStore()
    svc = TimeTrackingService(store)
    svc.clock_in(1, now=fixed_now)
    svc.clock_out(1, now=fixed_now + timedelta(hours=1))

    with pytest.raises(NotClockedInError):
        svc.clock_out(1, now=fixed_now + timedelta(hours=2))

    assert len(store.list_entries()) == 1


def test_sessions_are_scoped_per_employee(fixed_now):
    svc = TimeTrackingService(InMemoryTimeEntryStore())

    svc.clock_in(1, now=fixed_now)
    svc.clock_in(2, now=fixed_now + timedelta(minutes=5))
    out = svc.clock_out(2, now=fixed_now + timedelta(hours=1, minutes=5))

    assert out.employee_id == 2
    assert svc.get_current_entry(1) is not None
    assert svc.get_current_entry(2) is None


def test_store_failure_keeps_session_open_for_retry(fixed_now):
    store = FlakyStore(failures=1)
    svc = TimeTrackingService(store)
    opened = svc.clock_in(1, now=fixed_now)

    with pytest.raises(StoreUnavailableError):
        svc.clock_out(1, now=fixed_now + timedelta(hours=2))

    assert svc.get_current_entry(1) == opened
    assert store.list_entries() == []

    entry = svc.clock_out(1, now=fixed_now + timedelta(hours=3))
    assert entry.total_hours == Decimal("3.00")
    assert svc.get_current_entry(1) is None


def test_hours_round_half_up(fixed_now):
    svc = TimeTrackingService(InMemoryTimeEntryStore())
    svc.clock_in(1, now=fixed_now)

    # 1h 0m 18s == 1.005h exactly
    entry = svc.clock_out(1, now=fixed_now + timedelta(hours=1, seconds=18))

    assert entry.total_hours == Decimal("1.01")


def test_concurrent_clock_in_allows_a_single_open_session(fixed_now):
    svc = TimeTrackingService(InMemoryTimeEntryStore())
    barrier = threading.Barrier(8)
    results: list[str] = []
    results_lock = threading.Lock()

    def worker():
        barrier.wait()
        try:
            svc.clock_in(7, now=fixed_now)
            outcome = "ok"
        except AlreadyClockedInError:
            outcome = "rejected"
        with results_lock:
            results.append(outcome)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count("ok") == 1
    assert results.count("rejected") == 7


def test_todays_entries_empty_day_returns_empty_list(fixed_now):
    svc = TimeTrackingService(InMemoryTimeEntryStore())

    assert svc.get_todays_entries(now=fixed_now) == []


def test_todays_entries_only_returns_today(fixed_now):
    today = fixed_now.date()
    store = InMemoryTimeEntryStore(
        [
            _closed(1, today, "4.0"),
            _closed(2, today, "6.0"),
            _closed(1, today - timedelta(days=1), "8.0"),
        ]
    )
    svc = TimeTrackingService(store)

    assert len(svc.get_todays_entries(now=fixed_now)) == 2
    assert [e.employee_id for e in svc.get_todays_entries(employee_id=2, now=fixed_now)] == [2]


def test_work_date_follows_configured_timezone():
    eastern = timezone(timedelta(hours=-5))
    svc = TimeTrackingService(InMemoryTimeEntryStore(), tz=eastern)

    # 02:00 UTC on the 3rd is still the 2nd in UTC-5
    entry = svc.clock_in(1, now=datetime(2026, 3, 3, 2, 0, tzinfo=timezone.utc))

    assert entry.work_date == date(2026, 3, 2)


def test_update_entry_recomputes_hours_and_date(fixed_now):
    store = InMemoryTimeEntryStore([_closed(1, fixed_now.date(), "8.0")])
    svc = TimeTrackingService(store)
    entry = store.list_entries()[0]

    updated = svc.update_entry(entry.entry_id, clock_out=entry.clock_in + timedelta(hours=6, minutes=15))

    assert updated.total_hours == Decimal("6.25")
    assert updated.work_date == entry.work_date
    assert store.get_by_id(entry.entry_id) == updated


def test_update_entry_rejects_clock_out_before_clock_in(fixed_now):
    store = InMemoryTimeEntryStore([_closed(1, fixed_now.date(), "8.0")])
    svc = TimeTrackingService(store)
    entry = store.list_entries()[0]

    with pytest.raises(ValidationError):
        svc.update_entry(entry.entry_id, clock_out=entry.clock_in - timedelta(minutes=1))


def test_update_entry_accepts_offset_timestamp_against_naive_stored_row(fixed_now):
    # Rows read back from MySQL DATETIME columns carry no offset.
    store = InMemoryTimeEntryStore([_closed(1, fixed_now.date(), "8.0")])
    svc = TimeTrackingService(store, tz=timezone.utc)
    entry = store.list_entries()[0]

    updated = svc.update_entry(entry.entry_id, clock_out=datetime(2026, 2, 2, 15, 30, tzinfo=timezone.utc))

    assert updated.total_hours == Decimal("6.50")
    assert updated.clock_in == datetime(2026, 2, 2, 9, 0, tzinfo=timezone.utc)
    assert updated.work_date == date(2026, 2, 2)


def test_update_entry_accepts_naive_timestamp_against_zoned_session(fixed_now):
    svc = TimeTrackingService(InMemoryTimeEntryStore(), tz=timezone.utc)
    start = fixed_now.replace(tzinfo=timezone.utc)
    svc.clock_in(1, now=start)
    entry = svc.clock_out(1, now=start + timedelta(hours=1))

    updated = svc.update_entry(entry.entry_id, clock_out=datetime(2026, 2, 2, 11, 45))

    assert updated.total_hours == Decimal("2.75")
    assert updated.clock_out.tzinfo is timezone.utc
    with pytest.raises(ValidationError):
        svc.update_entry(entry.entry_id, clock_out=datetime(2026, 2, 2, 8, 0))


def test_update_entry_converts_offsets_into_configured_zone(fixed_now):
    eastern = timezone(timedelta(hours=-5))
    store = InMemoryTimeEntryStore([_closed(1, fixed_now.date(), "8.0")])
    svc = TimeTrackingService(store, tz=eastern)
    entry = store.list_entries()[0]

    updated = svc.update_entry(
        entry.entry_id,
        clock_in=datetime(2026, 2, 3, 2, 0, tzinfo=timezone.utc),
        clock_out=datetime(2026, 2, 3, 4, 0, tzinfo=timezone.utc),
    )

    assert updated.clock_in == datetime(2026, 2, 2, 21, 0, tzinfo=eastern)
    assert updated.total_hours == Decimal("2.00")
    assert updated.work_date == date(2026, 2, 2)


def test_update_and_delete_unknown_entry_raise_not_found():
    svc = TimeTrackingService(InMemoryTimeEntryStore())

    with pytest.raises(NotFoundError):
        svc.update_entry(99, clock_out=datetime(2026, 2, 2, 17, 0))
    with pytest.raises(NotFoundError):
        svc.delete_entry(99)


def test_list_entries_filters_by_employee(fixed_now):
    day = fixed_now.date()
    svc = TimeTrackingService(InMemoryTimeEntryStore([_closed(1, day, "1.0"), _closed(2, day, "2.0")]))

    assert [e.employee_id for e in svc.list_entries(employee_id=1)] == [1]
    assert len(svc.list_entries()) == 2
