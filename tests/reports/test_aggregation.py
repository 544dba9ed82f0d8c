import random
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from store_manager.attendance.model import AttendanceRecord
from store_manager.core.enums import Currency, ExpenseStatus, PaymentMethod
from store_manager.deliveries.model import DeliveryRecord
from store_manager.expenses.model import Expense
from store_manager.payments.model import Payment
from store_manager.reports.aggregation import (
    ExpenseTotals,
    attendance_totals,
    attendance_totals_by_store,
    delivery_totals,
    employee_balance,
    expense_totals,
    payment_totals_by_employee,
    profit,
    sales_by_store,
    sales_totals,
)
from store_manager.sales.model import Sale, SaleChannels

T0 = datetime(2024, 3, 1, 9, tzinfo=timezone.utc)
EUR, GBP = Currency.EUR, Currency.GBP


def _shift(i, amount, currency=EUR, hours="8", store_id=1, employee_id=1):
    return AttendanceRecord(
        attendance_id=i,
        employee_id=employee_id,
        store_id=store_id,
        check_in=T0,
        check_out=T0 + timedelta(hours=float(hours)),
        currency=currency,
        hours_worked=Decimal(hours),
        amount_to_pay=amount,
    )


def _payment(i, amount, currency=EUR, employee_id=1):
    return Payment(payment_id=i, employee_id=employee_id, amount_paid=amount, currency=currency,
                   payment_method=PaymentMethod.CASH, paid_date=date(2024, 3, 2))


def _sale(i, currency=EUR, store_id=1, cash=0, online=0, till=0):
    channels = SaleChannels(cash=cash, online=online)
    return Sale(sale_id=i, store_id=store_id, sale_date=date(2024, 3, i), currency=currency, channels=channels,
                total=channels.total(), cash_in_till=till, difference=channels.total() - till)


def _expense(i, amount, currency=EUR, status=ExpenseStatus.RAISED):
    return Expense(expense_id=i, store_id=1, vendor_id=1, amount=amount, currency=currency, status=status,
                   expense_date=date(2024, 3, 1))


def test_currencies_never_mix():
    totals = attendance_totals([_shift(1, 12000), _shift(2, 2400, GBP, "2"), _shift(3, 6000, hours="4")])

    assert totals[EUR].amount == 18000
    assert totals[EUR].hours == Decimal("12.00")
    assert totals[EUR].shifts == 2
    assert totals[GBP].amount == 2400


def test_absent_currency_is_absent_not_zero():
    assert GBP not in attendance_totals([_shift(1, 100)])
    assert attendance_totals([]) == {}


def test_totals_do_not_depend_on_order():
    shifts = [_shift(i, 100 * i, EUR if i % 2 else GBP) for i in range(1, 30)]
    shuffled = shifts[:]
    random.Random(7).shuffle(shuffled)

    assert attendance_totals(shifts) == attendance_totals(shuffled)


def test_group_by_store():
    by_store = attendance_totals_by_store([_shift(1, 100, store_id=1), _shift(2, 50, store_id=2), _shift(3, 25, store_id=1)])
    assert by_store[1][EUR].amount == 125
    assert by_store[2][EUR].amount == 50


def test_sales_totals_sum_every_channel():
    totals = sales_totals([_sale(1, cash=1000, online=500, till=1400), _sale(2, cash=200, till=250)])

    assert totals[EUR].total == 1700
    assert totals[EUR].cash_in_till == 1650
    assert totals[EUR].difference == 50
    assert totals[EUR].channels["cash"] == 1200
    assert totals[EUR].channels["online"] == 500
    assert totals[EUR].channels["uber_eats"] == 0


def test_sales_by_store():
    out = sales_by_store([_sale(1, cash=100), _sale(2, GBP, cash=70), _sale(3, store_id=2, cash=5)])
    assert out == {1: {EUR: 100, GBP: 70}, 2: {EUR: 5}}


def test_expense_split_adds_up():
    totals = expense_totals([_expense(1, 300), _expense(2, 700, status=ExpenseStatus.PAID), _expense(3, 50, GBP)])

    assert totals[EUR] == ExpenseTotals(total=1000, paid=700, pending=300)
    assert totals[GBP].pending == 50


def test_delivery_totals():
    run = DeliveryRecord(delivery_id=1, driver_id=1, store_id=1, delivery_date=date(2024, 3, 1), check_in=T0,
                         check_out=T0 + timedelta(hours=3), hours_worked=Decimal("3.00"), number_of_deliveries=12,
                         currency=EUR, expense_amount=2500)
    totals = delivery_totals([run, run])

    assert totals[EUR].expense == 5000
    assert totals[EUR].deliveries == 24
    assert totals[EUR].runs == 2


def test_balance_identity_per_currency():
    balance = employee_balance(
        [_shift(1, 12000), _shift(2, 2400, GBP)],
        [_payment(1, 5000), _payment(2, 3000, GBP)],
    )

    for b in balance.values():
        assert b.remaining == b.earned - b.paid
    assert balance[EUR].remaining == 7000
    assert balance[GBP].remaining == -600


def test_payment_only_currency_still_shows_up_in_balance():
    balance = employee_balance([], [_payment(1, 100, GBP)])
    assert list(balance) == [GBP]
    assert balance[GBP].earned == 0


def test_payments_by_employee():
    out = payment_totals_by_employee([_payment(1, 100), _payment(2, 50, employee_id=2), _payment(3, 25)])
    assert out == {1: {EUR: 125}, 2: {EUR: 50}}


def test_profit_identity_over_union_of_currencies():
    result = profit(
        sales={EUR: 10000},
        expenses={EUR: ExpenseTotals(total=2000, paid=2000), GBP: ExpenseTotals(total=300, pending=300)},
        payroll={EUR: 3000},
        delivery_expenses={EUR: 500},
    )

    assert result == {EUR: 4500, GBP: -300}
