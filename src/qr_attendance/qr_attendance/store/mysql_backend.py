from __future__ import annotations

import json
from typing import Optional

import mysql.connector

from ..core.exceptions import PersistenceError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .backends import SnapshotBackend


class MySQLSnapshotBackend(SnapshotBackend):
    """Keeps the snapshot blob in `app_snapshots`, one row per storage key."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load(self, key: str) -> Optional[dict]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("SELECT payload FROM app_snapshots WHERE storage_key=%s", (key,))
                row = fetchone(cur)
        except mysql.connector.Error as e:
            raise PersistenceError(f"Cannot load snapshot: {e}") from e
        if not row:
            return None
        return json.loads(row["payload"])

    def save(self, key: str, data: dict) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO app_snapshots(storage_key, payload)
                    VALUES(%s,%s)
                    ON DUPLICATE KEY UPDATE payload=VALUES(payload)
                    """,
                    (key, json.dumps(data, ensure_ascii=False)),
                )
        except mysql.connector.Error as e:
            raise PersistenceError(f"Cannot save snapshot: {e}") from e

    def delete(self, key: str) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("DELETE FROM app_snapshots WHERE storage_key=%s", (key,))
        except mysql.connector.Error as e:
            raise PersistenceError(f"Cannot delete snapshot: {e}") from e
