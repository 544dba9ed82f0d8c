from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import Currency, ExpenseStatus


@dataclass(frozen=True)
class Expense:
    """Domain entity: money a store owes or has paid a vendor."""

    expense_id: int
    store_id: int
    vendor_id: int
    amount: int
    currency: Currency
    status: ExpenseStatus
    expense_date: date
    description: Optional[str] = None


@dataclass(frozen=True)
class ExpenseFilter:
    store_id: Optional[int] = None
    vendor_id: Optional[int] = None
    currency: Optional[Currency] = None
    start: Optional[date] = None
    end: Optional[date] = None
