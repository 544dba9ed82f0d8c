from __future__ import annotations

from decimal import Decimal
from typing import Optional

from .base import WageCalculator
from ...common.durations import days_from_hours
from ...common.money import round_half_up
from ...core.constants import MINOR_UNITS_PER_MAJOR
from ...core.enums import Currency
from ...employees.model import Employee


class FixedWageCalculator(WageCalculator):
    """FIXED rule: daily wage per started 24h block, at least one day."""

    def rate_for(self, employee: Employee, currency: Currency) -> Optional[Decimal]:
        return employee.daily_wage(currency)

    def amount_to_pay(self, employee: Employee, hours: Decimal, currency: Currency) -> int:
        wage = self.rate_for(employee, currency)
        if not wage:
            return 0
        return round_half_up(wage * days_from_hours(hours) * MINOR_UNITS_PER_MAJOR)
