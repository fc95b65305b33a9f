from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import EmployeeStatus
from .model import Employee


class EmployeeStore(Protocol):
    def create(self, employee: Employee) -> Employee:
        raise NotImplementedError

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_employees(
        self,
        *,
        status: Optional[EmployeeStatus] = None,
        department: Optional[str] = None,
    ) -> Sequence[Employee]:
        """Newest first."""

        raise NotImplementedError

    def update(self, employee_id: int, patch: Mapping[str, Any]) -> Employee:
        raise NotImplementedError

    def delete(self, employee_id: int) -> bool:
        raise NotImplementedError
