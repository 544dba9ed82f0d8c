from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import Optional, Sequence

from ..common.datetime_utils import to_naive_utc, to_utc
from ..core.enums import Currency
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, where_clause
from .model import DeliveryFilter, DeliveryRecord
from .repository import DeliveryRepository

_COLUMNS = (
    "delivery_id, driver_id, store_id, delivery_date, check_in, check_out, hours_worked, "
    "number_of_deliveries, currency, expense_amount, notes"
)


def _row_to_delivery(r: dict) -> DeliveryRecord:
    return DeliveryRecord(
        delivery_id=int(r["delivery_id"]),
        driver_id=int(r["driver_id"]),
        store_id=int(r["store_id"]),
        delivery_date=r["delivery_date"],
        check_in=to_utc(r["check_in"]),
        check_out=to_utc(r["check_out"]),
        hours_worked=Decimal(str(r["hours_worked"])),
        number_of_deliveries=int(r["number_of_deliveries"]),
        currency=Currency(r["currency"]),
        expense_amount=int(r["expense_amount"]),
        notes=r.get("notes"),
    )


def _params(d: DeliveryRecord) -> tuple:
    return (
        int(d.driver_id),
        int(d.store_id),
        d.delivery_date,
        to_naive_utc(d.check_in),
        to_naive_utc(d.check_out),
        d.hours_worked,
        int(d.number_of_deliveries),
        d.currency.value,
        int(d.expense_amount),
        d.notes,
    )


class MySQLDeliveryRepository(DeliveryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, delivery_id: int) -> Optional[DeliveryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM deliveries WHERE delivery_id=%s", (int(delivery_id),))
            row = fetchone(cur)
            return _row_to_delivery(row) if row else None

    def list(self, flt: DeliveryFilter, *, limit: Optional[int] = None) -> Sequence[DeliveryRecord]:
        where, params = where_clause(
            [
                ("driver_id=%s", flt.driver_id),
                ("store_id=%s", flt.store_id),
                ("delivery_date >= %s", flt.start),
                ("delivery_date <= %s", flt.end),
            ]
        )
        sql = f"SELECT {_COLUMNS} FROM deliveries {where} ORDER BY delivery_date DESC, delivery_id DESC"
        if limit is not None:
            sql += " LIMIT %s"
            params = params + (int(limit),)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_row_to_delivery(r) for r in fetchall(cur)]

    def create(self, record: DeliveryRecord) -> DeliveryRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO deliveries(driver_id, store_id, delivery_date, check_in, check_out, hours_worked,
                                       number_of_deliveries, currency, expense_amount, notes)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _params(record),
            )
            return replace(record, delivery_id=int(cur.lastrowid))

    def update(self, record: DeliveryRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE deliveries
                SET driver_id=%s, store_id=%s, delivery_date=%s, check_in=%s, check_out=%s, hours_worked=%s,
                    number_of_deliveries=%s, currency=%s, expense_amount=%s, notes=%s
                WHERE delivery_id=%s
                """,
                _params(record) + (int(record.delivery_id),),
            )
            return cur.rowcount > 0

    def delete(self, delivery_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM deliveries WHERE delivery_id=%s", (int(delivery_id),))
            return cur.rowcount > 0
