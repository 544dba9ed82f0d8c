"""Schema setup for a fresh (or existing) MySQL database.

``schema.sql`` is idempotent, so applying it on every start is safe when
``AUTO_INIT_DB`` is on.
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"

# a ';' only ends a statement when an even number of quotes follows it
_STATEMENT_END = re.compile(r";(?=(?:[^']*'[^']*')*[^']*$)")


def split_statements(script: str) -> list[str]:
    """Statements of a SQL script, ``--`` comment lines removed."""
    body = "\n".join(line for line in script.splitlines() if not line.lstrip().startswith("--"))
    return [stmt.strip() for stmt in _STATEMENT_END.split(body) if stmt.strip()]


@contextmanager
def _server(db_config: dict, *, with_database: bool = True) -> Iterator:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect(with_database=with_database)
    try:
        yield conn
    finally:
        conn.close()


def create_database(db_config: dict) -> None:
    name = DBConfig.from_dict(db_config).database
    with _server(db_config, with_database=False) as conn:
        conn.cursor().execute(
            f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    create_database(db_config)
    statements = split_statements(Path(schema_path).read_text(encoding="utf-8"))

    with _server(db_config) as conn:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    logger.info("Applied %d schema statements from %s", len(statements), schema_path)


def list_tables(db_config: dict) -> list[str]:
    with _server(db_config) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())
