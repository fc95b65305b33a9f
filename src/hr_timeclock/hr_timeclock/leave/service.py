from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Optional, Sequence

from ..common.datetime_utils import local_date, now_local
from ..common.validators import collect_text, require_non_empty
from ..core.constants import DEFAULT_MANAGER_ID, DEFAULT_REVIEWER, MIN_LEAVE_REASON_LENGTH
from ..core.enums import LeaveStatus, LeaveType, Urgency
from ..core.exceptions import NotFoundError, ValidationError
from ..core.logging import get_logger
from .model import LeaveRequest, NewLeaveRequest
from .repository import LeaveRequestStore

logger = get_logger(__name__)


def count_leave_days(start: date, end: date) -> int:
    """Calendar days covered by ``start``..``end``, both inclusive."""
    return abs((end - start).days) + 1


class LeaveRequestService:
    def __init__(self, store: LeaveRequestStore, *, tz: tzinfo | None = None):
        self._store = store
        self._tz = tz

    def _now(self, now: datetime | None) -> datetime:
        return now or now_local(self._tz)

    def submit(
        self,
        *,
        employee_name: str,
        leave_type: str,
        start_date: Optional[date],
        end_date: Optional[date],
        reason: str,
        urgency: str = Urgency.NORMAL.value,
        manager_id: int = DEFAULT_MANAGER_ID,
        tags: str = "",
        now: datetime | None = None,
    ) -> LeaveRequest:
        now = self._now(now)
        today = local_date(now, self._tz)
        errors: dict[str, str] = {}

        cleaned_name = collect_text(errors, "employeeName", employee_name, "Employee name")

        parsed_type: Optional[LeaveType] = None
        if not leave_type:
            errors["leaveType"] = "Leave type is required"
        else:
            try:
                parsed_type = LeaveType(leave_type)
            except ValueError:
                errors["leaveType"] = f"Unknown leave type: {leave_type}"

        try:
            parsed_urgency = Urgency(urgency or Urgency.NORMAL.value)
        except ValueError:
            errors["urgency"] = f"Unknown urgency: {urgency}"
            parsed_urgency = Urgency.NORMAL

        if start_date is None:
            errors["startDate"] = "Start date is required"
        if end_date is None:
            errors["endDate"] = "End date is required"
        if start_date is not None and end_date is not None:
            if start_date < today:
                errors["startDate"] = "Start date cannot be in the past"
            if end_date < start_date:
                errors["endDate"] = "End date must be after start date"

        cleaned_reason = collect_text(errors, "reason", reason, "Reason")
        cleaned_tags = collect_text(errors, "tags", tags, "Tags", required=False)
        if cleaned_reason and len(cleaned_reason) < MIN_LEAVE_REASON_LENGTH:
            errors["reason"] = f"Reason must be at least {MIN_LEAVE_REASON_LENGTH} characters long"

        if errors:
            logger.warning("Rejected leave request: %s", errors)
            raise ValidationError("Please fix the errors before submitting", errors=errors)

        created = self._store.create(
            NewLeaveRequest(
                employee_name=cleaned_name,
                leave_type=parsed_type,
                start_date=start_date,
                end_date=end_date,
                total_days=count_leave_days(start_date, end_date),
                reason=cleaned_reason,
                urgency=parsed_urgency,
                created_at=now,
                manager_id=int(manager_id),
                tags=cleaned_tags,
            )
        )
        logger.info("Leave request %s submitted by %s (%s days)", created.request_id, created.employee_name, created.total_days)
        return created

    def _decide(self, request_id: int, status: LeaveStatus, reviewer: str, now: datetime | None) -> LeaveRequest:
        req = self._store.get_by_id(int(request_id))
        if not req:
            raise NotFoundError("Leave request not found")
        if req.status != LeaveStatus.PENDING:
            raise ValidationError("Leave request has already been reviewed")

        reviewer = require_non_empty(reviewer, "Reviewer")
        decided = self._store.decide(
            request_id=int(request_id),
            status=status,
            reviewed_by=reviewer,
            reviewed_at=self._now(now),
        )
        if not decided:
            raise ValidationError("Leave request has already been reviewed")

        logger.info("Leave request %s %s by %s", request_id, status.value, reviewer)
        return self._store.get_by_id(int(request_id))

    def approve(self, request_id: int, *, reviewer: str = DEFAULT_REVIEWER, now: datetime | None = None) -> LeaveRequest:
        return self._decide(request_id, LeaveStatus.APPROVED, reviewer, now)

    def deny(self, request_id: int, *, reviewer: str = DEFAULT_REVIEWER, now: datetime | None = None) -> LeaveRequest:
        return self._decide(request_id, LeaveStatus.DENIED, reviewer, now)

    def list_requests(self, *, status: Optional[str] = None) -> Sequence[LeaveRequest]:
        parsed = None
        if status and status != "all":
            try:
                parsed = LeaveStatus(status)
            except ValueError:
                raise ValidationError(f"Unknown status filter: {status}")
        return list(self._store.list_requests(status=parsed))

    def stats(self) -> dict[str, int]:
        counts = {s.value: 0 for s in LeaveStatus}
        for r in self._store.list_requests():
            counts[r.status.value] += 1
        return counts

    def delete(self, request_id: int) -> bool:
        deleted = self._store.delete(int(request_id))
        logger.info("Leave request %s deleted", request_id)
        return deleted
