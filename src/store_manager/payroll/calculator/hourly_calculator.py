from __future__ import annotations

from decimal import Decimal
from typing import Optional

from .base import WageCalculator
from ...common.money import round_half_up, to_decimal
from ...core.constants import MINOR_UNITS_PER_MAJOR
from ...core.enums import Currency
from ...employees.model import Employee


class HourlyWageCalculator(WageCalculator):
    """HOURLY rule: hours * hourly rate for the currency."""

    def rate_for(self, employee: Employee, currency: Currency) -> Optional[Decimal]:
        return employee.hourly_rate(currency)

    def amount_to_pay(self, employee: Employee, hours: Decimal, currency: Currency) -> int:
        rate = self.rate_for(employee, currency)
        # no rate for this currency pays nothing; services reject it before we get here
        if not rate:
            return 0
        return round_half_up(to_decimal(hours, "hours") * rate * MINOR_UNITS_PER_MAJOR)
