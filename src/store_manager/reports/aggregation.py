"""Per-currency folds over records.

Every function here is pure and order independent: the input is summed, never
de-duplicated, and a currency only appears in the output when at least one
record carries it. Amounts stay in integer minor units; hours are Decimal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Iterable, Mapping, TypeVar

from ..attendance.model import AttendanceRecord
from ..core.enums import Currency, ExpenseStatus
from ..deliveries.model import DeliveryRecord
from ..expenses.model import Expense
from ..payments.model import Payment
from ..sales.model import Sale, SaleChannels

T = TypeVar("T")


@dataclass
class AttendanceTotals:
    amount: int = 0
    hours: Decimal = Decimal("0.00")
    shifts: int = 0


@dataclass
class SalesTotals:
    total: int = 0
    cash_in_till: int = 0
    difference: int = 0
    channels: dict[str, int] = field(default_factory=lambda: dict.fromkeys(SaleChannels.names(), 0))


@dataclass
class ExpenseTotals:
    total: int = 0
    paid: int = 0
    pending: int = 0


@dataclass
class DeliveryTotals:
    expense: int = 0
    deliveries: int = 0
    hours: Decimal = Decimal("0.00")
    runs: int = 0


@dataclass
class Balance:
    earned: int = 0
    paid: int = 0
    remaining: int = 0


def totals_by_currency(records: Iterable[T], value: Callable[[T], int]) -> dict[Currency, int]:
    out: dict[Currency, int] = {}
    for record in records:
        currency = Currency(record.currency)
        out[currency] = out.get(currency, 0) + value(record)
    return out


def attendance_totals(records: Iterable[AttendanceRecord]) -> dict[Currency, AttendanceTotals]:
    out: dict[Currency, AttendanceTotals] = {}
    for r in records:
        bucket = out.setdefault(Currency(r.currency), AttendanceTotals())
        bucket.amount += r.amount_to_pay
        bucket.hours += r.hours_worked
        bucket.shifts += 1
    return out


def attendance_totals_by_store(records: Iterable[AttendanceRecord]) -> dict[int, dict[Currency, AttendanceTotals]]:
    by_store: dict[int, list[AttendanceRecord]] = {}
    for r in records:
        by_store.setdefault(r.store_id, []).append(r)
    return {store_id: attendance_totals(rows) for store_id, rows in by_store.items()}


def payment_totals(payments: Iterable[Payment]) -> dict[Currency, int]:
    return totals_by_currency(payments, lambda p: p.amount_paid)


def payment_totals_by_employee(payments: Iterable[Payment]) -> dict[int, dict[Currency, int]]:
    by_employee: dict[int, list[Payment]] = {}
    for p in payments:
        by_employee.setdefault(p.employee_id, []).append(p)
    return {employee_id: payment_totals(rows) for employee_id, rows in by_employee.items()}


def sales_totals(sales: Iterable[Sale]) -> dict[Currency, SalesTotals]:
    out: dict[Currency, SalesTotals] = {}
    for s in sales:
        bucket = out.setdefault(Currency(s.currency), SalesTotals())
        bucket.total += s.total
        bucket.cash_in_till += s.cash_in_till
        bucket.difference += s.difference
        for name, amount in s.channels.as_dict().items():
            bucket.channels[name] += amount
    return out


def sales_by_store(sales: Iterable[Sale]) -> dict[int, dict[Currency, int]]:
    out: dict[int, dict[Currency, int]] = {}
    for s in sales:
        bucket = out.setdefault(s.store_id, {})
        currency = Currency(s.currency)
        bucket[currency] = bucket.get(currency, 0) + s.total
    return out


def expense_totals(expenses: Iterable[Expense]) -> dict[Currency, ExpenseTotals]:
    """Total plus paid/pending split; ``paid + pending == total`` per currency."""
    out: dict[Currency, ExpenseTotals] = {}
    for e in expenses:
        bucket = out.setdefault(Currency(e.currency), ExpenseTotals())
        bucket.total += e.amount
        if ExpenseStatus(e.status) == ExpenseStatus.PAID:
            bucket.paid += e.amount
        else:
            bucket.pending += e.amount
    return out


def delivery_totals(deliveries: Iterable[DeliveryRecord]) -> dict[Currency, DeliveryTotals]:
    out: dict[Currency, DeliveryTotals] = {}
    for d in deliveries:
        bucket = out.setdefault(Currency(d.currency), DeliveryTotals())
        bucket.expense += d.expense_amount
        bucket.deliveries += d.number_of_deliveries
        bucket.hours += d.hours_worked
        bucket.runs += 1
    return out


def employee_balance(
    attendance: Iterable[AttendanceRecord],
    payments: Iterable[Payment],
) -> dict[Currency, Balance]:
    """Earned vs paid per currency. A EUR debt is never offset by a GBP payment."""
    earned = totals_by_currency(attendance, lambda r: r.amount_to_pay)
    paid = payment_totals(payments)

    out: dict[Currency, Balance] = {}
    for currency in sorted(set(earned) | set(paid), key=lambda c: c.value):
        e = earned.get(currency, 0)
        p = paid.get(currency, 0)
        out[currency] = Balance(earned=e, paid=p, remaining=e - p)
    return out


def profit(
    sales: Mapping[Currency, int],
    expenses: Mapping[Currency, ExpenseTotals],
    payroll: Mapping[Currency, int],
    delivery_expenses: Mapping[Currency, int],
) -> dict[Currency, int]:
    """sales - expenses - payroll - delivery costs over the union of currencies."""
    currencies = set(sales) | set(expenses) | set(payroll) | set(delivery_expenses)
    out: dict[Currency, int] = {}
    for currency in sorted(currencies, key=lambda c: Currency(c).value):
        expense = expenses.get(currency)
        out[Currency(currency)] = (
            sales.get(currency, 0)
            - (expense.total if expense else 0)
            - payroll.get(currency, 0)
            - delivery_expenses.get(currency, 0)
        )
    return out
