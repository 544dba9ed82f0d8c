from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from ..core.enums import WageType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, decimal_or_none, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = (
    "e.employee_id, e.name, e.email, e.phone, e.wage_type, "
    "e.hourly_rate_eur, e.hourly_rate_gbp, e.daily_wage_eur, e.daily_wage_gbp"
)


def _row_to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        name=r["name"],
        wage_type=WageType(r["wage_type"]),
        hourly_rate_eur=decimal_or_none(r.get("hourly_rate_eur")),
        hourly_rate_gbp=decimal_or_none(r.get("hourly_rate_gbp")),
        daily_wage_eur=decimal_or_none(r.get("daily_wage_eur")),
        daily_wage_gbp=decimal_or_none(r.get("daily_wage_gbp")),
        email=r.get("email"),
        phone=r.get("phone"),
    )


def _params(e: Employee) -> tuple:
    return (
        e.name,
        e.email,
        e.phone,
        e.wage_type.value,
        e.hourly_rate_eur,
        e.hourly_rate_gbp,
        e.daily_wage_eur,
        e.daily_wage_gbp,
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees e WHERE e.employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def list_all(self, *, store_id: Optional[int] = None) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            if store_id is None:
                cur.execute(f"SELECT {_COLUMNS} FROM employees e ORDER BY e.name")
            else:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM employees e
                    JOIN store_employees se ON se.employee_id = e.employee_id
                    WHERE se.store_id=%s
                    ORDER BY e.name
                    """,
                    (int(store_id),),
                )
            return [_row_to_employee(r) for r in fetchall(cur)]

    def create(self, employee: Employee) -> Employee:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(name, email, phone, wage_type,
                                      hourly_rate_eur, hourly_rate_gbp, daily_wage_eur, daily_wage_gbp)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _params(employee),
            )
            return replace(employee, employee_id=int(cur.lastrowid))

    def update(self, employee: Employee) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET name=%s, email=%s, phone=%s, wage_type=%s,
                    hourly_rate_eur=%s, hourly_rate_gbp=%s, daily_wage_eur=%s, daily_wage_gbp=%s
                WHERE employee_id=%s
                """,
                _params(employee) + (int(employee.employee_id),),
            )
            return cur.rowcount > 0

    def delete(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
            return cur.rowcount > 0
