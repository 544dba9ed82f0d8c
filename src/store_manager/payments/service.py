from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Sequence

from ..common.validators import merge_partial, optional_text, parse_currency, parse_date, parse_integer, require_id
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import Currency, PaymentMethod
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import Payment, PaymentFilter
from .repository import PaymentRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentInput:
    employee_id: Any = None
    amount_paid: Any = None
    currency: Any = None
    payment_method: Any = None
    paid_date: Any = None
    notes: Any = None

    @classmethod
    def from_record(cls, payment: Payment) -> PaymentInput:
        return cls(
            employee_id=payment.employee_id,
            amount_paid=payment.amount_paid,
            currency=payment.currency,
            payment_method=payment.payment_method,
            paid_date=payment.paid_date,
            notes=payment.notes,
        )


@dataclass(frozen=True)
class PaymentUpdate:
    """Editable fields of a recorded payment; ``None`` keeps the stored value."""

    amount_paid: Any = None
    currency: Any = None
    payment_method: Any = None
    paid_date: Any = None
    notes: Any = None


def _parse_amount_paid(value: Any) -> int:
    try:
        amount = parse_integer(value, "amountPaid")
    except ValidationError:
        raise ValidationError("amountPaid must be greater than 0")
    if amount <= 0:
        raise ValidationError("amountPaid must be greater than 0")
    return amount


def _parse_method(value: Any) -> PaymentMethod:
    if isinstance(value, PaymentMethod):
        return value
    try:
        return PaymentMethod(str(value).strip().upper())
    except ValueError:
        raise ValidationError("Valid paymentMethod (CASH or ACCOUNT) is required")


class PaymentService:
    """Use cases: money handed to employees against what they earned."""

    def __init__(self, payments: PaymentRepository, employees: EmployeeRepository):
        self._payments = payments
        self._employees = employees

    def _build(self, payment_id: int, data: PaymentInput) -> Payment:
        employee_id = require_id(data.employee_id, "employeeId", "employeeId is required")
        amount = _parse_amount_paid(data.amount_paid)
        currency = parse_currency(data.currency)
        method = _parse_method(data.payment_method)
        if not data.paid_date:
            raise ValidationError("paidDate is required")
        paid_date = parse_date(data.paid_date, "paidDate")

        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")

        return Payment(
            payment_id=payment_id,
            employee_id=employee_id,
            amount_paid=amount,
            currency=currency,
            payment_method=method,
            paid_date=paid_date,
            notes=optional_text(data.notes, max_length=255, field_name="notes"),
        )

    def record_payment(self, data: PaymentInput) -> Payment:
        payment = self._payments.create(self._build(0, data))
        logger.info(
            "Recorded payment %s: employee=%s amount=%s %s via %s",
            payment.payment_id, payment.employee_id, payment.amount_paid,
            payment.currency.value, payment.payment_method.value,
        )
        return payment

    def update_payment(self, payment_id: int, data: PaymentUpdate) -> Payment:
        current = self.get(payment_id)
        payment = self._build(current.payment_id, merge_partial(PaymentInput.from_record(current), data))
        self._payments.update(payment)
        logger.info("Updated payment %s: amount=%s %s", payment_id, payment.amount_paid, payment.currency.value)
        return payment

    def list_for_employee(
        self,
        employee_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        currency: Optional[Currency] = None,
    ) -> Sequence[Payment]:
        if not self._employees.get_by_id(int(employee_id)):
            raise NotFoundError("Employee not found")
        return self._payments.list(PaymentFilter(employee_id=int(employee_id), currency=currency, start=start, end=end))

    def list_all(self, flt: Optional[PaymentFilter] = None, *, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[Payment]:
        return self._payments.list(flt or PaymentFilter(), limit=limit)

    def get(self, payment_id: int) -> Payment:
        payment = self._payments.get_by_id(int(payment_id))
        if not payment:
            raise NotFoundError("Payment not found")
        return payment

    def delete(self, payment_id: int) -> None:
        if not self._payments.delete(int(payment_id)):
            raise NotFoundError("Payment not found")
        logger.info("Deleted payment %s", payment_id)
