from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..core.enums import Currency, WageType


@dataclass(frozen=True)
class Employee:
    """Domain entity: a member of staff paid from attendance records.

    HOURLY employees use ``hourly_rate_*``; FIXED employees use
    ``daily_wage_*`` (a flat amount per worked day, not per week).
    """

    employee_id: int
    name: str
    wage_type: WageType = WageType.HOURLY
    hourly_rate_eur: Optional[Decimal] = None
    hourly_rate_gbp: Optional[Decimal] = None
    daily_wage_eur: Optional[Decimal] = None
    daily_wage_gbp: Optional[Decimal] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    def hourly_rate(self, currency: Currency) -> Optional[Decimal]:
        return self.hourly_rate_eur if Currency(currency) == Currency.EUR else self.hourly_rate_gbp

    def daily_wage(self, currency: Currency) -> Optional[Decimal]:
        return self.daily_wage_eur if Currency(currency) == Currency.EUR else self.daily_wage_gbp
