from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

from ...core.enums import Currency
from ...employees.model import Employee


class WageCalculator(ABC):
    """Calculator interface (Strategy Pattern for wage policies)."""

    @abstractmethod
    def rate_for(self, employee: Employee, currency: Currency) -> Optional[Decimal]:
        raise NotImplementedError

    @abstractmethod
    def amount_to_pay(self, employee: Employee, hours: Decimal, currency: Currency) -> int:
        """Minor units owed for ``hours`` worked in ``currency``."""
        raise NotImplementedError
