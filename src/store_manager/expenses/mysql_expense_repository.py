from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from ..core.enums import Currency, ExpenseStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, where_clause
from .model import Expense, ExpenseFilter
from .repository import ExpenseRepository

_COLUMNS = "expense_id, store_id, vendor_id, amount, currency, status, description, expense_date"


def _row_to_expense(r: dict) -> Expense:
    return Expense(
        expense_id=int(r["expense_id"]),
        store_id=int(r["store_id"]),
        vendor_id=int(r["vendor_id"]),
        amount=int(r["amount"]),
        currency=Currency(r["currency"]),
        status=ExpenseStatus(r["status"]),
        expense_date=r["expense_date"],
        description=r.get("description"),
    )


def _params(e: Expense) -> tuple:
    return (
        int(e.store_id),
        int(e.vendor_id),
        int(e.amount),
        e.currency.value,
        e.status.value,
        e.description,
        e.expense_date,
    )


class MySQLExpenseRepository(ExpenseRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, expense_id: int) -> Optional[Expense]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM expenses WHERE expense_id=%s", (int(expense_id),))
            row = fetchone(cur)
            return _row_to_expense(row) if row else None

    def list(self, flt: ExpenseFilter, *, limit: Optional[int] = None) -> Sequence[Expense]:
        where, params = where_clause(
            [
                ("store_id=%s", flt.store_id),
                ("vendor_id=%s", flt.vendor_id),
                ("currency=%s", flt.currency.value if flt.currency else None),
                ("expense_date >= %s", flt.start),
                ("expense_date <= %s", flt.end),
            ]
        )
        sql = f"SELECT {_COLUMNS} FROM expenses {where} ORDER BY expense_date DESC, expense_id DESC"
        if limit is not None:
            sql += " LIMIT %s"
            params = params + (int(limit),)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_row_to_expense(r) for r in fetchall(cur)]

    def create(self, expense: Expense) -> Expense:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO expenses(store_id, vendor_id, amount, currency, status, description, expense_date)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                _params(expense),
            )
            return replace(expense, expense_id=int(cur.lastrowid))

    def update(self, expense: Expense) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE expenses
                SET store_id=%s, vendor_id=%s, amount=%s, currency=%s, status=%s, description=%s, expense_date=%s
                WHERE expense_id=%s
                """,
                _params(expense) + (int(expense.expense_id),),
            )
            return cur.rowcount > 0

    def set_status(self, expense_id: int, status: ExpenseStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE expenses SET status=%s WHERE expense_id=%s", (status.value, int(expense_id)))
            return cur.rowcount > 0

    def delete(self, expense_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM expenses WHERE expense_id=%s", (int(expense_id),))
            return cur.rowcount > 0
