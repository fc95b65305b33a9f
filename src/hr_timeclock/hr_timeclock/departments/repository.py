from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Department


class DepartmentStore(Protocol):
    def create(self, department: Department) -> Department:
        raise NotImplementedError

    def get_by_id(self, department_id: int) -> Optional[Department]:
        raise NotImplementedError

    def list_departments(self) -> Sequence[Department]:
        """Ordered by name."""

        raise NotImplementedError

    def update(self, department_id: int, patch: Mapping[str, Any]) -> Department:
        raise NotImplementedError

    def delete(self, department_id: int) -> bool:
        raise NotImplementedError
