import pytest

from store_manager.core.enums import ReconciliationStatus
from store_manager.sales.reconciliation import reconcile


def test_sales_over_cash():
    result = reconcile(1500, 1400)
    assert result.difference == 100
    assert result.status == ReconciliationStatus.OVER
    assert result.message == "Sales recorded exceed cash in till"


def test_cash_over_sales():
    result = reconcile(1400, 1500)
    assert result.difference == -100
    assert result.status == ReconciliationStatus.UNDER
    assert result.message == "Cash in till exceeds sales recorded"


@pytest.mark.parametrize("amount", [0, 1, 98765])
def test_balanced(amount):
    result = reconcile(amount, amount)
    assert result.difference == 0
    assert result.status == ReconciliationStatus.BALANCED
    assert result.message == "Balanced"
