"""End-of-day till reconciliation.

``difference`` is ``total_sales - cash_in_till`` in minor units. Positive means
more sales were recorded than cash counted, negative means the opposite.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import ReconciliationStatus

_MESSAGES = {
    ReconciliationStatus.BALANCED: "Balanced",
    ReconciliationStatus.OVER: "Sales recorded exceed cash in till",
    ReconciliationStatus.UNDER: "Cash in till exceeds sales recorded",
}


@dataclass(frozen=True)
class Reconciliation:
    difference: int
    status: ReconciliationStatus
    message: str


def reconcile(total_sales: int, cash_in_till: int) -> Reconciliation:
    difference = int(total_sales) - int(cash_in_till)
    if difference > 0:
        status = ReconciliationStatus.OVER
    elif difference < 0:
        status = ReconciliationStatus.UNDER
    else:
        status = ReconciliationStatus.BALANCED
    return Reconciliation(difference=difference, status=status, message=_MESSAGES[status])
