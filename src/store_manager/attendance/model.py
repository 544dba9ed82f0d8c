from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import Currency


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one recorded shift and what it earns.

    ``hours_worked`` and ``amount_to_pay`` are derived from the times and the
    employee's wage policy when the record is written.
    """

    attendance_id: int
    employee_id: int
    store_id: int
    check_in: datetime
    check_out: datetime
    currency: Currency
    hours_worked: Decimal
    amount_to_pay: int
    notes: Optional[str] = None


@dataclass(frozen=True)
class AttendanceFilter:
    employee_id: Optional[int] = None
    store_id: Optional[int] = None
    start: Optional[date] = None
    end: Optional[date] = None
