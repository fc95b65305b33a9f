from __future__ import annotations

import threading
from dataclasses import fields, replace
from datetime import date
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..core.exceptions import NotFoundError, ValidationError
from .model import TimeEntry
from .repository import TimeEntryStore

UPDATABLE_FIELDS = frozenset(f.name for f in fields(TimeEntry)) - {"entry_id"}


class InMemoryTimeEntryStore(TimeEntryStore):
    """Offline record store backed by a list, optionally seeded."""

    def __init__(self, seed: Iterable[TimeEntry] = ()):
        self._entries: list[TimeEntry] = []
        self._lock = threading.Lock()
        for entry in seed:
            if entry.entry_id is None:
                entry = replace(entry, entry_id=self._next_id())
            self._entries.append(entry)

    def _next_id(self) -> int:
        return max((e.entry_id or 0 for e in self._entries), default=0) + 1

    def create(self, entry: TimeEntry) -> TimeEntry:
        with self._lock:
            stored = replace(entry, entry_id=self._next_id())
            self._entries.append(stored)
            return stored

    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        with self._lock:
            for e in self._entries:
                if e.entry_id == int(entry_id):
                    return e
            return None

    def list_entries(
        self,
        *,
        employee_id: Optional[int] = None,
        work_date: Optional[date] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[TimeEntry]:
        with self._lock:
            items = list(self._entries)

        if employee_id is not None:
            items = [e for e in items if e.employee_id == int(employee_id)]
        if work_date is not None:
            items = [e for e in items if e.work_date == work_date]
        if start_date is not None:
            items = [e for e in items if e.work_date >= start_date]
        if end_date is not None:
            items = [e for e in items if e.work_date <= end_date]
        return items

    def update(self, entry_id: int, patch: Mapping[str, Any]) -> TimeEntry:
        unknown = set(patch) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown time entry fields: {', '.join(sorted(unknown))}")

        with self._lock:
            for i, e in enumerate(self._entries):
                if e.entry_id == int(entry_id):
                    self._entries[i] = replace(e, **dict(patch))
                    return self._entries[i]
        raise NotFoundError("Time entry not found")

    def delete(self, entry_id: int) -> bool:
        with self._lock:
            for i, e in enumerate(self._entries):
                if e.entry_id == int(entry_id):
                    del self._entries[i]
                    return True
        raise NotFoundError("Time entry not found")
