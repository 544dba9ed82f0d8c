from datetime import date, datetime, timezone

import pytest

from store_manager.core.enums import Currency, ExpenseStatus, PaymentMethod
from store_manager.core.exceptions import ValidationError
from store_manager.expenses.model import Expense
from store_manager.payments.model import Payment
from store_manager.reports.export import PAYMENT_COLUMNS, payment_rows, to_csv_bytes
from store_manager.reports.service import ReportService, default_period
from store_manager.sales.model import Sale, SaleChannels


def _service(repos):
    return ReportService(
        stores=repos.stores,
        employees=repos.employees,
        drivers=repos.drivers,
        vendors=repos.vendors,
        attendance=repos.attendance,
        sales=repos.sales,
        expenses=repos.expenses,
        deliveries=repos.deliveries,
        payments=repos.payments,
    )


def _sale(store_id, day, cash, currency=Currency.EUR):
    channels = SaleChannels(cash=cash)
    return Sale(sale_id=0, store_id=store_id, sale_date=day, currency=currency, channels=channels,
                total=cash, cash_in_till=cash, difference=0)


def test_default_period_is_inclusive():
    start, end = default_period(date(2024, 3, 30), days=30)
    assert (start, end) == (date(2024, 3, 1), date(2024, 3, 30))


def test_dashboard_profit_per_currency(repos):
    store = repos.add_store(currencies=(Currency.EUR, Currency.GBP))
    emp = repos.add_employee(hourly_rate_eur=15)
    vendor = repos.add_vendor()
    repos.sales.upsert_daily(_sale(store.store_id, date(2024, 3, 1), 10000))
    repos.sales.upsert_daily(_sale(store.store_id, date(2024, 3, 1), 800, Currency.GBP))
    repos.add_shift(emp.employee_id, store.store_id, datetime(2024, 3, 1, 9, tzinfo=timezone.utc), 8, 12000)
    repos.expenses.create(Expense(expense_id=0, store_id=store.store_id, vendor_id=vendor.vendor_id, amount=1500,
                                  currency=Currency.EUR, status=ExpenseStatus.PAID, expense_date=date(2024, 3, 1)))

    report = _service(repos).build_dashboard(start=date(2024, 3, 1), end=date(2024, 3, 31))

    assert report.sales[Currency.EUR].total == 10000
    assert report.payroll == {Currency.EUR: 12000}
    assert report.profit == {Currency.EUR: 10000 - 1500 - 12000, Currency.GBP: 800}
    assert report.counts["stores"] == 1
    assert report.counts["shifts"] == 1


def test_dashboard_respects_period_and_store(repos):
    a = repos.add_store("A")
    b = repos.add_store("B")
    repos.sales.upsert_daily(_sale(a.store_id, date(2024, 3, 1), 100))
    repos.sales.upsert_daily(_sale(b.store_id, date(2024, 3, 1), 200))
    repos.sales.upsert_daily(_sale(a.store_id, date(2024, 4, 1), 400))

    report = _service(repos).build_dashboard(start=date(2024, 3, 1), end=date(2024, 3, 31), store_id=a.store_id)

    assert report.sales[Currency.EUR].total == 100
    assert report.sales_by_store == {a.store_id: {Currency.EUR: 100}}


def test_reversed_period_is_rejected(repos):
    with pytest.raises(ValidationError, match="End date must not be before start date"):
        _service(repos).build_dashboard(start=date(2024, 3, 2), end=date(2024, 3, 1))


def test_payments_report_and_csv(repos):
    alice = repos.add_employee("Alice")
    bob = repos.add_employee("Bob")
    for emp, amount, currency in ((alice, 5000, Currency.EUR), (bob, 700, Currency.GBP), (alice, 1000, Currency.EUR)):
        repos.payments.create(Payment(payment_id=0, employee_id=emp.employee_id, amount_paid=amount, currency=currency,
                                      payment_method=PaymentMethod.ACCOUNT, paid_date=date(2024, 3, 5)))

    report = _service(repos).payments_report(start=date(2024, 3, 1), end=date(2024, 3, 31))

    assert report.totals == {Currency.EUR: 6000, Currency.GBP: 700}
    assert [row.employee_name for row in report.by_employee] == ["Alice", "Bob"]
    assert report.by_employee[0].payments == 2

    rows = payment_rows(report)
    assert rows[0]["Employee"] in {"Alice", "Bob"}
    assert {r["Amount"] for r in rows} == {"50.00", "7.00", "10.00"}

    data = to_csv_bytes(rows, PAYMENT_COLUMNS)
    assert data.startswith(b"\xef\xbb\xbf")
    assert data.decode("utf-8-sig").splitlines()[0] == ",".join(PAYMENT_COLUMNS)
