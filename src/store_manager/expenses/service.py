from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..common.validators import (
    assert_currency_supported,
    assert_non_negative,
    merge_partial,
    optional_text,
    parse_currency,
    parse_date,
    parse_integer,
    require_id,
)
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import ExpenseStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..stores.repository import StoreRepository
from .model import Expense, ExpenseFilter
from .repository import ExpenseRepository
from .vendor_repository import VendorRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExpenseInput:
    store_id: Any = None
    vendor_id: Any = None
    amount: Any = None
    currency: Any = None
    status: Any = None
    description: Any = None
    expense_date: Any = None

    @classmethod
    def from_record(cls, expense: Expense) -> ExpenseInput:
        return cls(
            store_id=expense.store_id,
            vendor_id=expense.vendor_id,
            amount=expense.amount,
            currency=expense.currency,
            status=expense.status,
            description=expense.description,
            expense_date=expense.expense_date,
        )


def parse_expense_status(value: Any) -> ExpenseStatus:
    if isinstance(value, ExpenseStatus):
        return value
    if value is None or value == "":
        return ExpenseStatus.RAISED
    try:
        return ExpenseStatus(str(value).strip().upper())
    except ValueError:
        raise ValidationError("Valid status (RAISED or PAID) is required")


def parse_expense_amount(value: Any) -> int:
    if value is None or value == "":
        raise ValidationError("Valid amount is required")
    try:
        amount = parse_integer(value, "amount")
    except ValidationError:
        raise ValidationError("Valid amount is required")
    assert_non_negative(amount, "Amount")
    return amount


class ExpenseService:
    """Use cases: bills raised against vendors, and paying them."""

    def __init__(self, expenses: ExpenseRepository, vendors: VendorRepository, stores: StoreRepository):
        self._expenses = expenses
        self._vendors = vendors
        self._stores = stores

    def _build(self, expense_id: int, data: ExpenseInput) -> Expense:
        store_id = require_id(data.store_id, "storeId", "Store is required")
        vendor_id = require_id(data.vendor_id, "vendorId", "Vendor is required")
        amount = parse_expense_amount(data.amount)
        currency = parse_currency(data.currency)

        store = self._stores.get_by_id(store_id)
        if not store:
            raise NotFoundError("Store not found")
        if not self._vendors.get_by_id(vendor_id):
            raise NotFoundError("Vendor not found")
        assert_currency_supported(store, currency)

        expense_date = parse_date(data.expense_date, "expenseDate") if data.expense_date else now_utc().date()
        return Expense(
            expense_id=expense_id,
            store_id=store_id,
            vendor_id=vendor_id,
            amount=amount,
            currency=currency,
            status=parse_expense_status(data.status),
            expense_date=expense_date,
            description=optional_text(data.description, max_length=255, field_name="description"),
        )

    def record_expense(self, data: ExpenseInput) -> Expense:
        expense = self._expenses.create(self._build(0, data))
        logger.info(
            "Recorded expense %s: store=%s vendor=%s amount=%s %s (%s)",
            expense.expense_id, expense.store_id, expense.vendor_id,
            expense.amount, expense.currency.value, expense.status.value,
        )
        return expense

    def update_expense(self, expense_id: int, data: ExpenseInput) -> Expense:
        current = self.get(expense_id)
        expense = self._build(current.expense_id, merge_partial(ExpenseInput.from_record(current), data))
        self._expenses.update(expense)
        logger.info("Updated expense %s", expense_id)
        return expense

    def mark_paid(self, expense_id: int) -> Expense:
        expense = self.get(expense_id)
        if expense.status == ExpenseStatus.PAID:
            return expense
        self._expenses.set_status(expense.expense_id, ExpenseStatus.PAID)
        logger.info("Expense %s marked as paid", expense_id)
        return replace(expense, status=ExpenseStatus.PAID)

    def get(self, expense_id: int) -> Expense:
        expense = self._expenses.get_by_id(int(expense_id))
        if not expense:
            raise NotFoundError("Expense not found")
        return expense

    def list(self, flt: Optional[ExpenseFilter] = None, *, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[Expense]:
        return self._expenses.list(flt or ExpenseFilter(), limit=limit)

    def delete(self, expense_id: int) -> None:
        if not self._expenses.delete(int(expense_id)):
            raise NotFoundError("Expense not found")
        logger.info("Deleted expense %s", expense_id)
