from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import to_utc
from ..core.enums import Currency
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, where_clause
from .model import Sale, SaleChannels, SaleFilter
from .repository import SaleRepository

_CHANNELS = SaleChannels.names()
_COLUMNS = (
    "sale_id, store_id, sale_date, currency, "
    + ", ".join(_CHANNELS)
    + ", total, cash_in_till, difference, notes, created_at"
)


def _row_to_sale(r: dict) -> Sale:
    return Sale(
        sale_id=int(r["sale_id"]),
        store_id=int(r["store_id"]),
        sale_date=r["sale_date"],
        currency=Currency(r["currency"]),
        channels=SaleChannels(**{name: int(r[name] or 0) for name in _CHANNELS}),
        total=int(r["total"]),
        cash_in_till=int(r["cash_in_till"]),
        difference=int(r["difference"]),
        notes=r.get("notes"),
        created_at=to_utc(r["created_at"]) if r.get("created_at") else None,
    )


def _value_params(sale: Sale) -> tuple:
    return tuple(int(v) for v in sale.channels.as_dict().values()) + (
        int(sale.total),
        int(sale.cash_in_till),
        int(sale.difference),
        sale.notes,
    )


class MySQLSaleRepository(SaleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, sale_id: int) -> Optional[Sale]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM sales WHERE sale_id=%s", (int(sale_id),))
            row = fetchone(cur)
            return _row_to_sale(row) if row else None

    def find_daily(self, store_id: int, currency: Currency, sale_date: date) -> Optional[Sale]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM sales WHERE store_id=%s AND currency=%s AND sale_date=%s",
                (int(store_id), Currency(currency).value, sale_date),
            )
            row = fetchone(cur)
            return _row_to_sale(row) if row else None

    def list(self, flt: SaleFilter, *, limit: Optional[int] = None) -> Sequence[Sale]:
        where, params = where_clause(
            [
                ("store_id=%s", flt.store_id),
                ("currency=%s", flt.currency.value if flt.currency else None),
                ("sale_date >= %s", flt.start),
                ("sale_date <= %s", flt.end),
            ]
        )
        sql = f"SELECT {_COLUMNS} FROM sales {where} ORDER BY sale_date DESC, sale_id DESC"
        if limit is not None:
            sql += " LIMIT %s"
            params = params + (int(limit),)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_row_to_sale(r) for r in fetchall(cur)]

    def upsert_daily(self, sale: Sale) -> Sale:
        columns = ", ".join(_CHANNELS) + ", total, cash_in_till, difference, notes"
        updates = ", ".join(f"{c}=VALUES({c})" for c in columns.split(", "))
        placeholders = ",".join(["%s"] * (3 + len(_CHANNELS) + 4))

        with db_cursor(self._conn_factory) as (_, cur):
            # LAST_INSERT_ID(sale_id) makes lastrowid point at the existing row on update
            cur.execute(
                f"""
                INSERT INTO sales(store_id, currency, sale_date, {columns})
                VALUES({placeholders})
                ON DUPLICATE KEY UPDATE {updates}, sale_id=LAST_INSERT_ID(sale_id)
                """,
                (int(sale.store_id), sale.currency.value, sale.sale_date) + _value_params(sale),
            )
            sale_id = int(cur.lastrowid)
            cur.execute(f"SELECT {_COLUMNS} FROM sales WHERE sale_id=%s", (sale_id,))
            return _row_to_sale(fetchone(cur))

    def update(self, sale: Sale) -> bool:
        assignments = ", ".join(f"{c}=%s" for c in _CHANNELS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE sales
                SET store_id=%s, currency=%s, sale_date=%s, {assignments},
                    total=%s, cash_in_till=%s, difference=%s, notes=%s
                WHERE sale_id=%s
                """,
                (int(sale.store_id), sale.currency.value, sale.sale_date)
                + _value_params(sale)
                + (int(sale.sale_id),),
            )
            return cur.rowcount > 0

    def delete(self, sale_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM sales WHERE sale_id=%s", (int(sale_id),))
            return cur.rowcount > 0

    def delete_many(self, sale_ids: Sequence[int]) -> int:
        ids = [int(i) for i in sale_ids]
        if not ids:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM sales WHERE sale_id IN ({','.join(['%s'] * len(ids))})", tuple(ids))
            return int(cur.rowcount)
