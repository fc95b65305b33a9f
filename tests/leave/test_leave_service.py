from __future__ import annotations

import threading
from datetime import date, datetime, timedelta

import pytest

from src.hr_timeclock.hr_timeclock.core.enums import LeaveStatus, LeaveType, Urgency
from src.hr_timeclock.hr_timeclock.core.exceptions import NotFoundError, ValidationError
from src.hr_timeclock.hr_timeclock.leave.memory_repository import InMemoryLeaveRequestStore
from src.hr_timeclock.hr_timeclock.leave.service import LeaveRequestService, count_leave_days


def _submit(svc: LeaveRequestService, now: datetime, **overrides):
    params = dict(
        employee_name="John Doe",
        leave_type="vacation",
        start_date=now.date() + timedelta(days=7),
        end_date=now.date() + timedelta(days=9),
        reason="Family trip to the coast",
        now=now,
    )
    params.update(overrides)
    return svc.submit(**params)


def test_count_leave_days_is_inclusive():
    assert count_leave_days(date(2026, 3, 2), date(2026, 3, 2)) == 1
    assert count_leave_days(date(2026, 3, 2), date(2026, 3, 6)) == 5
    assert count_leave_days(date(2026, 2, 27), date(2026, 3, 2)) == 4


def test_submit_creates_pending_request(fixed_now):
    svc = LeaveRequestService(InMemoryLeaveRequestStore())

    created = _submit(svc, fixed_now)

    assert created.request_id == 1
    assert created.status == LeaveStatus.PENDING
    assert created.leave_type == LeaveType.VACATION
    assert created.urgency == Urgency.NORMAL
    assert created.total_days == 3
    assert created.created_at == fixed_now
    assert created.reviewed_at is None


def test_submit_collects_every_field_error(fixed_now):
    svc = LeaveRequestService(InMemoryLeaveRequestStore())

    with pytest.raises(ValidationError) as exc:
        _submit(svc, fixed_now, leave_type="", start_date=None, end_date=None, reason="  short ")

    assert set(exc.value.errors) == {"leaveType", "startDate", "endDate", "reason"}


def test_submit_rejects_past_start_and_inverted_range(fixed_now):
    svc = LeaveRequestService(InMemoryLeaveRequestStore())

    with pytest.raises(ValidationError) as exc:
        _submit(
            svc,
            fixed_now,
            start_date=fixed_now.date() - timedelta(days=1),
            end_date=fixed_now.date() - timedelta(days=3),
        )

    assert exc.value.errors["startDate"] == "Start date cannot be in the past"
    assert exc.value.errors["endDate"] == "End date must be after start date"


def test_submit_accepts_today_as_start(fixed_now):
    svc = LeaveRequestService(InMemoryLeaveRequestStore())

    created = _submit(svc, fixed_now, start_date=fixed_now.date(), end_date=fixed_now.date())

    assert created.total_days == 1


def test_submit_rejects_unknown_leave_type(fixed_now):
    svc = LeaveRequestService(InMemoryLeaveRequestStore())

    with pytest.raises(ValidationError) as exc:
        _submit(svc, fixed_now, leave_type="sabbatical")

    assert "leaveType" in exc.value.errors


def test_approve_sets_reviewer_and_timestamp(fixed_now):
    svc = LeaveRequestService(InMemoryLeaveRequestStore())
    created = _submit(svc, fixed_now)
    later = fixed_now + timedelta(hours=2)

    approved = svc.approve(created.request_id, reviewer="Jane Manager", now=later)

    assert approved.status == LeaveStatus.APPROVED
    assert approved.reviewed_by == "Jane Manager"
    assert approved.reviewed_at == later


def test_cannot_review_twice(fixed_now):
    svc = LeaveRequestService(InMemoryLeaveRequestStore())
    created = _submit(svc, fixed_now)
    svc.deny(created.request_id, now=fixed_now)

    with pytest.raises(ValidationError):
        svc.approve(created.request_id, now=fixed_now)


def test_review_unknown_request_raises_not_found(fixed_now):
    svc = LeaveRequestService(InMemoryLeaveRequestStore())

    with pytest.raises(NotFoundError):
        svc.approve(404, now=fixed_now)


def test_list_is_newest_first_and_filterable(fixed_now):
    svc = LeaveRequestService(InMemoryLeaveRequestStore())
    first = _submit(svc, fixed_now)
    second = _submit(svc, fixed_now, leave_type="sick")
    svc.approve(first.request_id, now=fixed_now)

    assert [r.request_id for r in svc.list_requests()] == [second.request_id, first.request_id]
    assert [r.request_id for r in svc.list_requests(status="approved")] == [first.request_id]
    assert len(svc.list_requests(status="all")) == 2
    with pytest.raises(ValidationError):
        svc.list_requests(status="archived")


def test_stats_count_by_status(fixed_now):
    svc = LeaveRequestService(InMemoryLeaveRequestStore())
    a = _submit(svc, fixed_now)
    b = _submit(svc, fixed_now)
    _submit(svc, fixed_now)
    svc.approve(a.request_id, now=fixed_now)
    svc.deny(b.request_id, now=fixed_now)

    assert svc.stats() == {"pending": 1, "approved": 1, "denied": 1}


def test_delete_unknown_request_raises_not_found():
    svc = LeaveRequestService(InMemoryLeaveRequestStore())

    with pytest.raises(NotFoundError):
        svc.delete(1)


def test_submit_reports_non_text_fields(fixed_now):
    svc = LeaveRequestService(InMemoryLeaveRequestStore())

    with pytest.raises(ValidationError) as exc:
        _submit(svc, fixed_now, employee_name=5, reason=["Family", "trip"], tags=7)

    assert exc.value.errors == {
        "employeeName": "Employee name must be text",
        "reason": "Reason must be text",
        "tags": "Tags must be text",
    }


def test_review_with_non_text_reviewer_leaves_request_pending(fixed_now):
    svc = LeaveRequestService(InMemoryLeaveRequestStore())
    created = _submit(svc, fixed_now)

    with pytest.raises(ValidationError):
        svc.approve(created.request_id, reviewer=5, now=fixed_now)

    assert svc.list_requests(status="pending")[0].request_id == created.request_id


def test_store_reads_are_consistent_while_requests_are_added(fixed_now):
    store = InMemoryLeaveRequestStore()
    svc = LeaveRequestService(store)
    failures: list[BaseException] = []
    done = threading.Event()

    def writer():
        for _ in range(200):
            _submit(svc, fixed_now)

    def reader():
        while not done.is_set():
            try:
                listed = store.list_requests()
                assert listed == sorted(listed, key=lambda r: r.request_id, reverse=True)
                store.get_by_id(1)
            except BaseException as exc:
                failures.append(exc)
                return

    writers = [threading.Thread(target=writer) for _ in range(4)]
    readers = [threading.Thread(target=reader) for _ in range(2)]
    for t in readers + writers:
        t.start()
    for t in writers:
        t.join()
    done.set()
    for t in readers:
        t.join()

    assert failures == []
    assert len(store.list_requests()) == 800
    assert {r.request_id for r in store.list_requests()} == set(range(1, 801))
