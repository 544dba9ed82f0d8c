from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional, Sequence

from ..attendance.model import AttendanceFilter
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_utc
from ..core.constants import DEFAULT_REPORT_DAYS
from ..core.enums import Currency
from ..core.exceptions import ValidationError
from ..deliveries.driver_repository import DriverRepository
from ..deliveries.model import DeliveryFilter
from ..deliveries.repository import DeliveryRepository
from ..employees.repository import EmployeeRepository
from ..expenses.model import ExpenseFilter
from ..expenses.repository import ExpenseRepository
from ..expenses.vendor_repository import VendorRepository
from ..payments.model import Payment, PaymentFilter
from ..payments.repository import PaymentRepository
from ..sales.model import SaleFilter
from ..sales.repository import SaleRepository
from ..stores.repository import StoreRepository
from .aggregation import (
    DeliveryTotals,
    ExpenseTotals,
    SalesTotals,
    attendance_totals,
    delivery_totals,
    expense_totals,
    payment_totals,
    payment_totals_by_employee,
    profit,
    sales_by_store,
    sales_totals,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardReport:
    start: date
    end: date
    store_id: Optional[int]
    counts: dict[str, int]
    sales: dict[Currency, SalesTotals]
    sales_by_store: dict[int, dict[Currency, int]]
    payroll: dict[Currency, int]
    hours: dict[Currency, Decimal]
    expenses: dict[Currency, ExpenseTotals]
    deliveries: dict[Currency, DeliveryTotals]
    profit: dict[Currency, int]


@dataclass(frozen=True)
class EmployeePayments:
    employee_id: int
    employee_name: str
    payments: int
    totals: dict[Currency, int]


@dataclass(frozen=True)
class PaymentsReport:
    start: date
    end: date
    payments: Sequence[Payment]
    totals: dict[Currency, int]
    by_employee: Sequence[EmployeePayments]
    employee_names: dict[int, str]


def default_period(today: Optional[date] = None, *, days: int = DEFAULT_REPORT_DAYS) -> tuple[date, date]:
    end = today or now_utc().date()
    return end - timedelta(days=days - 1), end


class ReportService:
    """Read-only summaries built from the aggregation folds."""

    def __init__(
        self,
        *,
        stores: StoreRepository,
        employees: EmployeeRepository,
        drivers: DriverRepository,
        vendors: VendorRepository,
        attendance: AttendanceRepository,
        sales: SaleRepository,
        expenses: ExpenseRepository,
        deliveries: DeliveryRepository,
        payments: PaymentRepository,
    ):
        self._stores = stores
        self._employees = employees
        self._drivers = drivers
        self._vendors = vendors
        self._attendance = attendance
        self._sales = sales
        self._expenses = expenses
        self._deliveries = deliveries
        self._payments = payments

    def build_dashboard(self, *, start: date, end: date, store_id: Optional[int] = None) -> DashboardReport:
        if end < start:
            raise ValidationError("End date must not be before start date")

        shifts = self._attendance.list(AttendanceFilter(store_id=store_id, start=start, end=end))
        sales = self._sales.list(SaleFilter(store_id=store_id, start=start, end=end))
        expenses = self._expenses.list(ExpenseFilter(store_id=store_id, start=start, end=end))
        runs = self._deliveries.list(DeliveryFilter(store_id=store_id, start=start, end=end))

        sales_sum = sales_totals(sales)
        expense_sum = expense_totals(expenses)
        shift_sum = attendance_totals(shifts)
        delivery_sum = delivery_totals(runs)

        payroll = {c: t.amount for c, t in shift_sum.items()}
        delivery_costs = {c: t.expense for c, t in delivery_sum.items()}

        counts = {
            "stores": 1 if store_id is not None else len(self._stores.list_all()),
            "employees": len(self._employees.list_all(store_id=store_id)),
            "drivers": len(self._drivers.list_all(store_id=store_id)),
            "vendors": len(self._vendors.list_all()),
            "sales": len(sales),
            "shifts": len(shifts),
            "expenses": len(expenses),
            "deliveries": len(runs),
        }
        logger.debug("Dashboard %s..%s store=%s counts=%s", start, end, store_id, counts)

        return DashboardReport(
            start=start,
            end=end,
            store_id=store_id,
            counts=counts,
            sales=sales_sum,
            sales_by_store=sales_by_store(sales),
            payroll=payroll,
            hours={c: t.hours for c, t in shift_sum.items()},
            expenses=expense_sum,
            deliveries=delivery_sum,
            profit=profit({c: t.total for c, t in sales_sum.items()}, expense_sum, payroll, delivery_costs),
        )

    def payments_report(
        self,
        *,
        start: date,
        end: date,
        employee_id: Optional[int] = None,
        currency: Optional[Currency] = None,
    ) -> PaymentsReport:
        if end < start:
            raise ValidationError("End date must not be before start date")

        payments = self._payments.list(PaymentFilter(employee_id=employee_id, currency=currency, start=start, end=end))
        names = {e.employee_id: e.name for e in self._employees.list_all()}

        counts: dict[int, int] = {}
        for p in payments:
            counts[p.employee_id] = counts.get(p.employee_id, 0) + 1

        by_employee = [
            EmployeePayments(
                employee_id=emp_id,
                employee_name=names.get(emp_id, f"#{emp_id}"),
                payments=counts[emp_id],
                totals=totals,
            )
            for emp_id, totals in payment_totals_by_employee(payments).items()
        ]
        by_employee.sort(key=lambda row: row.employee_name.lower())

        return PaymentsReport(
            start=start,
            end=end,
            payments=list(payments),
            totals=payment_totals(payments),
            by_employee=by_employee,
            employee_names=names,
        )
