from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .vendor_model import Vendor
from .vendor_repository import VendorRepository


class MySQLVendorRepository(VendorRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, vendor_id: int) -> Optional[Vendor]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT vendor_id, name, email, phone FROM vendors WHERE vendor_id=%s", (int(vendor_id),))
            r = fetchone(cur)
            if not r:
                return None
            return Vendor(vendor_id=int(r["vendor_id"]), name=r["name"], email=r.get("email"), phone=r.get("phone"))

    def list_all(self) -> Sequence[Vendor]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT vendor_id, name, email, phone FROM vendors ORDER BY name")
            return [
                Vendor(vendor_id=int(r["vendor_id"]), name=r["name"], email=r.get("email"), phone=r.get("phone"))
                for r in fetchall(cur)
            ]

    def create(self, vendor: Vendor) -> Vendor:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO vendors(name, email, phone) VALUES(%s,%s,%s)",
                (vendor.name, vendor.email, vendor.phone),
            )
            return replace(vendor, vendor_id=int(cur.lastrowid))

    def update(self, vendor: Vendor) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE vendors SET name=%s, email=%s, phone=%s WHERE vendor_id=%s",
                (vendor.name, vendor.email, vendor.phone, int(vendor.vendor_id)),
            )
            return cur.rowcount > 0

    def delete(self, vendor_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM vendors WHERE vendor_id=%s", (int(vendor_id),))
            return cur.rowcount > 0
