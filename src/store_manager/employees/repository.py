from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self, *, store_id: Optional[int] = None) -> Sequence[Employee]:
        """All employees, or only those assigned to ``store_id``."""
        raise NotImplementedError

    def create(self, employee: Employee) -> Employee:
        raise NotImplementedError

    def update(self, employee: Employee) -> bool:
        raise NotImplementedError

    def delete(self, employee_id: int) -> bool:
        raise NotImplementedError
