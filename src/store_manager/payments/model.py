from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import Currency, PaymentMethod


@dataclass(frozen=True)
class Payment:
    """Domain entity: money disbursed to an employee against earned wages."""

    payment_id: int
    employee_id: int
    amount_paid: int
    currency: Currency
    payment_method: PaymentMethod
    paid_date: date
    notes: Optional[str] = None


@dataclass(frozen=True)
class PaymentFilter:
    employee_id: Optional[int] = None
    currency: Optional[Currency] = None
    start: Optional[date] = None
    end: Optional[date] = None
