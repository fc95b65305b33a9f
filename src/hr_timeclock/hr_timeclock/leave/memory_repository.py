from __future__ import annotations

import threading
from dataclasses import asdict, replace
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..core.enums import LeaveStatus
from ..core.exceptions import NotFoundError
from .model import LeaveRequest, NewLeaveRequest
from .repository import LeaveRequestStore


class InMemoryLeaveRequestStore(LeaveRequestStore):
    def __init__(self, seed: Iterable[LeaveRequest] = ()):
        self._requests: dict[int, LeaveRequest] = {r.request_id: r for r in seed}
        self._lock = threading.Lock()

    def create(self, request: NewLeaveRequest) -> LeaveRequest:
        with self._lock:
            request_id = max(self._requests, default=0) + 1
            stored = LeaveRequest(request_id=request_id, status=LeaveStatus.PENDING, **asdict(request))
            self._requests[request_id] = stored
            return stored

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        with self._lock:
            return self._requests.get(int(request_id))

    def list_requests(self, *, status: Optional[LeaveStatus] = None) -> Sequence[LeaveRequest]:
        with self._lock:
            items = list(self._requests.values())

        items = sorted(items, key=lambda r: r.request_id, reverse=True)
        if status is not None:
            items = [r for r in items if r.status == status]
        return items

    def decide(self, *, request_id: int, status: LeaveStatus, reviewed_by: str, reviewed_at: datetime) -> bool:
        with self._lock:
            current = self._requests.get(int(request_id))
            if not current or current.status != LeaveStatus.PENDING:
                return False
            self._requests[current.request_id] = replace(
                current, status=status, reviewed_by=reviewed_by, reviewed_at=reviewed_at
            )
            return True

    def delete(self, request_id: int) -> bool:
        with self._lock:
            if self._requests.pop(int(request_id), None) is None:
                raise NotFoundError("Leave request not found")
            return True
