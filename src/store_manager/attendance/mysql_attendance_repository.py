from __future__ import annotations

from dataclasses import replace
from datetime import datetime, time, timedelta
from decimal import Decimal
from typing import Optional, Sequence

from ..common.datetime_utils import to_naive_utc, to_utc
from ..core.enums import Currency
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, where_clause
from .model import AttendanceFilter, AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, employee_id, store_id, check_in, check_out, currency, hours_worked, amount_to_pay, notes"


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        store_id=int(r["store_id"]),
        check_in=to_utc(r["check_in"]),
        check_out=to_utc(r["check_out"]),
        currency=Currency(r["currency"]),
        hours_worked=Decimal(str(r["hours_worked"])),
        amount_to_pay=int(r["amount_to_pay"]),
        notes=r.get("notes"),
    )


def _params(record: AttendanceRecord) -> tuple:
    return (
        int(record.employee_id),
        int(record.store_id),
        to_naive_utc(record.check_in),
        to_naive_utc(record.check_out),
        record.currency.value,
        record.hours_worked,
        int(record.amount_to_pay),
        record.notes,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            row = fetchone(cur)
            return _row_to_record(row) if row else None

    def list(self, flt: AttendanceFilter, *, limit: Optional[int] = None) -> Sequence[AttendanceRecord]:
        where, params = where_clause(
            [
                ("employee_id=%s", flt.employee_id),
                ("store_id=%s", flt.store_id),
                ("check_in >= %s", datetime.combine(flt.start, time.min) if flt.start else None),
                ("check_in < %s", datetime.combine(flt.end + timedelta(days=1), time.min) if flt.end else None),
            ]
        )
        sql = f"SELECT {_COLUMNS} FROM attendance_records {where} ORDER BY check_in DESC"
        if limit is not None:
            sql += " LIMIT %s"
            params = params + (int(limit),)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_row_to_record(r) for r in fetchall(cur)]

    def create(self, record: AttendanceRecord) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(employee_id, store_id, check_in, check_out, currency,
                                               hours_worked, amount_to_pay, notes)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _params(record),
            )
            return replace(record, attendance_id=int(cur.lastrowid))

    def update(self, record: AttendanceRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET employee_id=%s, store_id=%s, check_in=%s, check_out=%s, currency=%s,
                    hours_worked=%s, amount_to_pay=%s, notes=%s
                WHERE attendance_id=%s
                """,
                _params(record) + (int(record.attendance_id),),
            )
            return cur.rowcount > 0

    def delete(self, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            return cur.rowcount > 0
