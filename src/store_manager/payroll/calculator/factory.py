from __future__ import annotations

from dataclasses import dataclass

from ...core.enums import WageType
from .base import WageCalculator
from .fixed_calculator import FixedWageCalculator
from .hourly_calculator import HourlyWageCalculator


@dataclass
class WageCalculatorFactory:
    """Factory Pattern: one calculator per wage policy."""

    def for_wage_type(self, wage_type: WageType) -> WageCalculator:
        if WageType(wage_type) == WageType.FIXED:
            return FixedWageCalculator()
        return HourlyWageCalculator()
