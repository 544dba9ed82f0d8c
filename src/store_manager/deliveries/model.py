from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import Currency


@dataclass(frozen=True)
class DeliveryRecord:
    """Domain entity: a driver's delivery run for one store and day."""

    delivery_id: int
    driver_id: int
    store_id: int
    delivery_date: date
    check_in: datetime
    check_out: datetime
    hours_worked: Decimal
    number_of_deliveries: int
    currency: Currency
    expense_amount: int
    notes: Optional[str] = None


@dataclass(frozen=True)
class DeliveryFilter:
    driver_id: Optional[int] = None
    store_id: Optional[int] = None
    start: Optional[date] = None
    end: Optional[date] = None
