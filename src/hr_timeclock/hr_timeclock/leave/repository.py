from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveRequest, NewLeaveRequest


class LeaveRequestStore(Protocol):
    def create(self, request: NewLeaveRequest) -> LeaveRequest:
        raise NotImplementedError

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_requests(self, *, status: Optional[LeaveStatus] = None) -> Sequence[LeaveRequest]:
        """Newest first."""

        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: LeaveStatus,
        reviewed_by: str,
        reviewed_at: datetime,
    ) -> bool:
        """Apply a decision to a PENDING request; False if none was pending."""

        raise NotImplementedError

    def delete(self, request_id: int) -> bool:
        raise NotImplementedError
