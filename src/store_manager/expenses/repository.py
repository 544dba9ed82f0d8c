from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ExpenseStatus
from .model import Expense, ExpenseFilter


class ExpenseRepository(Protocol):
    def get_by_id(self, expense_id: int) -> Optional[Expense]:
        raise NotImplementedError

    def list(self, flt: ExpenseFilter, *, limit: Optional[int] = None) -> Sequence[Expense]:
        raise NotImplementedError

    def create(self, expense: Expense) -> Expense:
        raise NotImplementedError

    def update(self, expense: Expense) -> bool:
        raise NotImplementedError

    def set_status(self, expense_id: int, status: ExpenseStatus) -> bool:
        raise NotImplementedError

    def delete(self, expense_id: int) -> bool:
        raise NotImplementedError
