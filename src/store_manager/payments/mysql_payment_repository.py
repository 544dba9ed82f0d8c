from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from ..core.enums import Currency, PaymentMethod
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, where_clause
from .model import Payment, PaymentFilter
from .repository import PaymentRepository

_COLUMNS = "payment_id, employee_id, amount_paid, currency, payment_method, paid_date, notes"


def _row_to_payment(r: dict) -> Payment:
    return Payment(
        payment_id=int(r["payment_id"]),
        employee_id=int(r["employee_id"]),
        amount_paid=int(r["amount_paid"]),
        currency=Currency(r["currency"]),
        payment_method=PaymentMethod(r["payment_method"]),
        paid_date=r["paid_date"],
        notes=r.get("notes"),
    )


class MySQLPaymentRepository(PaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, payment_id: int) -> Optional[Payment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payments WHERE payment_id=%s", (int(payment_id),))
            row = fetchone(cur)
            return _row_to_payment(row) if row else None

    def list(self, flt: PaymentFilter, *, limit: Optional[int] = None) -> Sequence[Payment]:
        where, params = where_clause(
            [
                ("employee_id=%s", flt.employee_id),
                ("currency=%s", flt.currency.value if flt.currency else None),
                ("paid_date >= %s", flt.start),
                ("paid_date <= %s", flt.end),
            ]
        )
        sql = f"SELECT {_COLUMNS} FROM payments {where} ORDER BY paid_date DESC, payment_id DESC"
        if limit is not None:
            sql += " LIMIT %s"
            params = params + (int(limit),)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_row_to_payment(r) for r in fetchall(cur)]

    def create(self, payment: Payment) -> Payment:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payments(employee_id, amount_paid, currency, payment_method, paid_date, notes)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(payment.employee_id),
                    int(payment.amount_paid),
                    payment.currency.value,
                    payment.payment_method.value,
                    payment.paid_date,
                    payment.notes,
                ),
            )
            return replace(payment, payment_id=int(cur.lastrowid))

    def update(self, payment: Payment) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payments
                SET amount_paid=%s, currency=%s, payment_method=%s, paid_date=%s, notes=%s
                WHERE payment_id=%s
                """,
                (
                    int(payment.amount_paid),
                    payment.currency.value,
                    payment.payment_method.value,
                    payment.paid_date,
                    payment.notes,
                    int(payment.payment_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, payment_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payments WHERE payment_id=%s", (int(payment_id),))
            return cur.rowcount > 0
