from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Tuple

from mysql.connector.errors import Error as MySQLError

from .connection import DatabaseConnection
from .errors import translate_db_error


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except MySQLError as exc:
        conn.rollback()
        domain_error = translate_db_error(exc)
        if domain_error is not None:
            raise domain_error from exc
        raise
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def where_clause(conditions: Iterable[Tuple[str, Any]]) -> Tuple[str, tuple]:
    """Build ``WHERE`` from (sql, param) pairs, skipping ``None`` params."""
    clauses: list[str] = []
    params: list[Any] = []
    for sql, value in conditions:
        if value is None:
            continue
        clauses.append(sql)
        params.append(value)
    if not clauses:
        return "", ()
    return "WHERE " + " AND ".join(clauses), tuple(params)


def decimal_or_none(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    return value if isinstance(value, Decimal) else Decimal(str(value))
