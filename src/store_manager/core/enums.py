from __future__ import annotations

from enum import Enum


class Currency(str, Enum):
    """Currencies a store can trade in."""

    EUR = "EUR"
    GBP = "GBP"


class WageType(str, Enum):
    """How an employee is paid for a recorded shift."""

    HOURLY = "HOURLY"
    FIXED = "FIXED"


class ExpenseStatus(str, Enum):
    RAISED = "RAISED"
    PAID = "PAID"


class PaymentMethod(str, Enum):
    CASH = "CASH"
    ACCOUNT = "ACCOUNT"


class ReconciliationStatus(str, Enum):
    """Outcome of comparing recorded sales with the counted till."""

    BALANCED = "BALANCED"
    OVER = "OVER"
    UNDER = "UNDER"
