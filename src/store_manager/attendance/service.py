from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional, Sequence

from ..common.durations import hours_between
from ..common.validators import (
    assert_currency_supported,
    assert_valid_date_range,
    optional_text,
    parse_currency,
    parse_datetime,
    require_id,
)
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import Currency, WageType
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..payments.model import PaymentFilter
from ..payments.repository import PaymentRepository
from ..payroll.calculator.factory import WageCalculatorFactory
from ..reports.aggregation import AttendanceTotals, Balance, attendance_totals, employee_balance
from ..stores.model import Store
from ..stores.repository import StoreRepository
from .model import AttendanceFilter, AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewAttendance:
    employee_id: Any = None
    store_id: Any = None
    check_in: Any = None
    check_out: Any = None
    currency: Any = None
    notes: Any = None


@dataclass(frozen=True)
class AttendanceUpdate:
    """Partial edit: ``None`` keeps the stored value."""

    employee_id: Any = None
    store_id: Any = None
    check_in: Any = None
    check_out: Any = None
    currency: Any = None
    notes: Any = None

    def touches_pay(self) -> bool:
        return any(
            v is not None for v in (self.employee_id, self.store_id, self.check_in, self.check_out, self.currency)
        )


@dataclass(frozen=True)
class EmployeeSummary:
    employee: Employee
    totals: dict[Currency, AttendanceTotals]
    balance: dict[Currency, Balance]
    recent: Sequence[AttendanceRecord]


class AttendanceService:
    """Use cases: record shifts and work out what they earn."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        stores: StoreRepository,
        payments: Optional[PaymentRepository] = None,
        *,
        calculator_factory: Optional[WageCalculatorFactory] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._stores = stores
        self._payments = payments
        self._factory = calculator_factory or WageCalculatorFactory()

    def _require_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def _require_store(self, store_id: int) -> Store:
        store = self._stores.get_by_id(store_id)
        if not store:
            raise NotFoundError("Store not found")
        return store

    def _price_shift(
        self,
        employee: Employee,
        store: Store,
        check_in: datetime,
        check_out: datetime,
        currency: Currency,
    ) -> tuple[Decimal, int]:
        assert_currency_supported(store, currency)

        calculator = self._factory.for_wage_type(employee.wage_type)
        if not calculator.rate_for(employee, currency):
            kind = "daily wage" if employee.wage_type == WageType.FIXED else "hourly rate"
            raise ValidationError(f"Employee does not have {kind} set for {currency.value}")

        assert_valid_date_range(check_in, check_out)
        hours = hours_between(check_in, check_out)
        return hours, calculator.amount_to_pay(employee, hours, currency)

    def record_shift(self, data: NewAttendance) -> AttendanceRecord:
        employee_id = require_id(data.employee_id, "employeeId", "Employee is required")
        store_id = require_id(data.store_id, "storeId", "Store is required")
        if not data.check_in or not data.check_out:
            raise ValidationError("Check-in and check-out times are required")
        currency = parse_currency(data.currency)

        employee = self._require_employee(employee_id)
        store = self._require_store(store_id)
        check_in = parse_datetime(data.check_in, "checkIn")
        check_out = parse_datetime(data.check_out, "checkOut")

        hours, amount = self._price_shift(employee, store, check_in, check_out, currency)

        record = self._attendance.create(
            AttendanceRecord(
                attendance_id=0,
                employee_id=employee_id,
                store_id=store_id,
                check_in=check_in,
                check_out=check_out,
                currency=currency,
                hours_worked=hours,
                amount_to_pay=amount,
                notes=optional_text(data.notes, max_length=255, field_name="notes"),
            )
        )
        logger.info(
            "Recorded shift %s: employee=%s store=%s hours=%s amount=%s %s",
            record.attendance_id, employee_id, store_id, hours, amount, currency.value,
        )
        return record

    def update_shift(self, attendance_id: int, data: AttendanceUpdate) -> AttendanceRecord:
        current = self.get(attendance_id)
        notes = current.notes if data.notes is None else optional_text(data.notes, max_length=255, field_name="notes")

        if not data.touches_pay():
            updated = replace(current, notes=notes)
            self._attendance.update(updated)
            return updated

        employee_id = current.employee_id if data.employee_id is None else require_id(
            data.employee_id, "employeeId", "Employee is required"
        )
        store_id = current.store_id if data.store_id is None else require_id(data.store_id, "storeId", "Store is required")
        currency = current.currency if data.currency is None else parse_currency(data.currency)
        check_in = current.check_in if data.check_in is None else parse_datetime(data.check_in, "checkIn")
        check_out = current.check_out if data.check_out is None else parse_datetime(data.check_out, "checkOut")

        employee = self._require_employee(employee_id)
        store = self._require_store(store_id)
        hours, amount = self._price_shift(employee, store, check_in, check_out, currency)

        updated = replace(
            current,
            employee_id=employee_id,
            store_id=store_id,
            check_in=check_in,
            check_out=check_out,
            currency=currency,
            hours_worked=hours,
            amount_to_pay=amount,
            notes=notes,
        )
        self._attendance.update(updated)
        logger.info("Updated shift %s: hours=%s amount=%s %s", attendance_id, hours, amount, currency.value)
        return updated

    def get(self, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(int(attendance_id))
        if not record:
            raise NotFoundError("Attendance record not found")
        return record

    def list(self, flt: Optional[AttendanceFilter] = None, *, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.list(flt or AttendanceFilter(), limit=limit)

    def delete(self, attendance_id: int) -> None:
        if not self._attendance.delete(int(attendance_id)):
            raise NotFoundError("Attendance record not found")
        logger.info("Deleted shift %s", attendance_id)

    def employee_summary(self, employee_id: int, *, recent_limit: int = 10) -> EmployeeSummary:
        """Earnings, payments and what is still owed, per currency."""
        employee = self._require_employee(int(employee_id))
        records = self._attendance.list(AttendanceFilter(employee_id=employee.employee_id))
        payments = self._payments.list(PaymentFilter(employee_id=employee.employee_id)) if self._payments else []

        return EmployeeSummary(
            employee=employee,
            totals=attendance_totals(records),
            balance=employee_balance(records, payments),
            recent=list(records[:recent_limit]),
        )
