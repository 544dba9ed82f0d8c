from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from ..core.enums import Currency
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Store
from .repository import StoreRepository

_COLUMNS = "store_id, name, supported_currencies, default_currency, address, phone, manager_name"


def _encode_currencies(currencies) -> str:
    return ",".join(sorted(Currency(c).value for c in currencies))


def _row_to_store(r: dict) -> Store:
    codes = [c for c in str(r["supported_currencies"] or "").split(",") if c]
    return Store(
        store_id=int(r["store_id"]),
        name=r["name"],
        supported_currencies=frozenset(Currency(c) for c in codes),
        default_currency=Currency(r["default_currency"]),
        address=r.get("address"),
        phone=r.get("phone"),
        manager_name=r.get("manager_name"),
    )


class MySQLStoreRepository(StoreRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, store_id: int) -> Optional[Store]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM stores WHERE store_id=%s", (int(store_id),))
            row = fetchone(cur)
            return _row_to_store(row) if row else None

    def list_all(self) -> Sequence[Store]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM stores ORDER BY name")
            return [_row_to_store(r) for r in fetchall(cur)]

    def create(self, store: Store) -> Store:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO stores(name, supported_currencies, default_currency, address, phone, manager_name)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    store.name,
                    _encode_currencies(store.supported_currencies),
                    store.default_currency.value,
                    store.address,
                    store.phone,
                    store.manager_name,
                ),
            )
            return replace(store, store_id=int(cur.lastrowid))

    def update(self, store: Store) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE stores
                SET name=%s, supported_currencies=%s, default_currency=%s, address=%s, phone=%s, manager_name=%s
                WHERE store_id=%s
                """,
                (
                    store.name,
                    _encode_currencies(store.supported_currencies),
                    store.default_currency.value,
                    store.address,
                    store.phone,
                    store.manager_name,
                    int(store.store_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, store_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM stores WHERE store_id=%s", (int(store_id),))
            return cur.rowcount > 0

    def assign_employee(self, store_id: int, employee_id: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT IGNORE INTO store_employees(store_id, employee_id) VALUES(%s,%s)",
                (int(store_id), int(employee_id)),
            )

    def unassign_employee(self, store_id: int, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM store_employees WHERE store_id=%s AND employee_id=%s",
                (int(store_id), int(employee_id)),
            )
            return cur.rowcount > 0

    def assign_driver(self, store_id: int, driver_id: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT IGNORE INTO store_drivers(store_id, driver_id) VALUES(%s,%s)",
                (int(store_id), int(driver_id)),
            )

    def unassign_driver(self, store_id: int, driver_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM store_drivers WHERE store_id=%s AND driver_id=%s",
                (int(store_id), int(driver_id)),
            )
            return cur.rowcount > 0
