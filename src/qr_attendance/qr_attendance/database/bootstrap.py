"""Create the MySQL database and the snapshot table used by the mysql backend."""

from __future__ import annotations

import re
from pathlib import Path

from .connection import DatabaseConnection

# schema.sql names its own database; the configured one wins.
_DB_LINES = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b.*?;\s*$")


def schema_statements(sql: str) -> list[str]:
    sql = _DB_LINES.sub("", sql)
    lines = [line for line in sql.splitlines() if not line.strip().startswith("--")]
    return [stmt.strip() for stmt in "\n".join(lines).split(";") if stmt.strip()]


def _run(conn, statements: list[str], *, fetch: bool = False) -> list:
    rows: list = []
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
            if fetch:
                rows.extend(cur.fetchall())
        conn.commit()
    finally:
        conn.close()
    return rows


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path) -> None:
    name = conn_factory.config.database
    _run(
        conn_factory.connect(with_database=False),
        [f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"],
    )
    _run(conn_factory.connect(), schema_statements(Path(schema_path).read_text(encoding="utf-8")))


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    return [row[0] for row in _run(conn_factory.connect(), ["SHOW TABLES"], fetch=True)]
