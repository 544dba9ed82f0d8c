from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .driver_model import Driver
from .driver_repository import DriverRepository


def _row_to_driver(r: dict) -> Driver:
    return Driver(driver_id=int(r["driver_id"]), name=r["name"], email=r.get("email"), phone=r.get("phone"))


class MySQLDriverRepository(DriverRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, driver_id: int) -> Optional[Driver]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT driver_id, name, email, phone FROM drivers WHERE driver_id=%s", (int(driver_id),))
            row = fetchone(cur)
            return _row_to_driver(row) if row else None

    def list_all(self, *, store_id: Optional[int] = None) -> Sequence[Driver]:
        with db_cursor(self._conn_factory) as (_, cur):
            if store_id is None:
                cur.execute("SELECT driver_id, name, email, phone FROM drivers ORDER BY name")
            else:
                cur.execute(
                    """
                    SELECT d.driver_id, d.name, d.email, d.phone
                    FROM drivers d
                    JOIN store_drivers sd ON sd.driver_id = d.driver_id
                    WHERE sd.store_id=%s
                    ORDER BY d.name
                    """,
                    (int(store_id),),
                )
            return [_row_to_driver(r) for r in fetchall(cur)]

    def create(self, driver: Driver) -> Driver:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO drivers(name, email, phone) VALUES(%s,%s,%s)",
                (driver.name, driver.email, driver.phone),
            )
            return replace(driver, driver_id=int(cur.lastrowid))

    def update(self, driver: Driver) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE drivers SET name=%s, email=%s, phone=%s WHERE driver_id=%s",
                (driver.name, driver.email, driver.phone, int(driver.driver_id)),
            )
            return cur.rowcount > 0

    def delete(self, driver_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM drivers WHERE driver_id=%s", (int(driver_id),))
            return cur.rowcount > 0
