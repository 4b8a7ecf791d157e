"""Prepare MySQL for STORAGE_BACKEND=mysql and report what is stored.

Usage: python scripts/init_db.py [--seed]

--seed writes the demo snapshot when the storage key is still empty.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.qr_attendance.qr_attendance.core.constants import STORAGE_KEY
from src.qr_attendance.qr_attendance.database.bootstrap import apply_schema, list_tables
from src.qr_attendance.qr_attendance.database.connection import DatabaseConnection, DBConfig
from src.qr_attendance.qr_attendance.store.mysql_backend import MySQLSnapshotBackend
from src.qr_attendance.qr_attendance.store.record_store import COLLECTIONS, RecordStore
from src.qr_attendance.qr_attendance.store.seed import demo_snapshot


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--seed", action="store_true", help="write demo data if nothing is stored yet")
    args = parser.parse_args(argv)

    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(settings.DB_CONFIG))
    key = getattr(settings, "STORAGE_KEY", STORAGE_KEY)

    apply_schema(conn, schema_path=REPO_ROOT / "database" / "schema.sql")
    print(f"Schema applied on {conn.config.describe()} (tables: {', '.join(list_tables(conn))})")

    backend = MySQLSnapshotBackend(conn)
    if backend.load(key) is None and not args.seed:
        print(f"No snapshot stored under {key!r}; the app seeds it on first start when AUTO_SEED is on.")
        return

    # Reading through the store seeds an empty key.
    snapshot = RecordStore(backend, storage_key=key, seed=demo_snapshot).read()
    counts = ", ".join(f"{name}={len(snapshot[name])}" for name in COLLECTIONS)
    print(f"Snapshot {key!r}: {counts}")


if __name__ == "__main__":
    main()
