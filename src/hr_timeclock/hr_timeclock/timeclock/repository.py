from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import TimeEntry


class TimeEntryStore(Protocol):
    """Record store for completed time entries.

    Implementations raise ``StoreUnavailableError`` when the backend fails and
    ``NotFoundError`` when ``update``/``delete`` target an unknown id.
    """

    def create(self, entry: TimeEntry) -> TimeEntry:
        raise NotImplementedError

    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        raise NotImplementedError

    def list_entries(
        self,
        *,
        employee_id: Optional[int] = None,
        work_date: Optional[date] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[TimeEntry]:
        raise NotImplementedError

    def update(self, entry_id: int, patch: Mapping[str, Any]) -> TimeEntry:
        raise NotImplementedError

    def delete(self, entry_id: int) -> bool:
        raise NotImplementedError
