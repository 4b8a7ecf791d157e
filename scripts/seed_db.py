"""Replace the stored snapshot with the demo accounts, classes and subjects.

Existing sessions and attendance records are dropped.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.qr_attendance.qr_attendance.container import build_container
from src.qr_attendance.qr_attendance.store.seed import demo_snapshot


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    config = {name: getattr(settings, name) for name in dir(settings) if name.isupper()}

    store = build_container(config=config).store
    store.reset()
    store.mutate(lambda data: data.update(demo_snapshot()))

    counts = {name: len(store.rows(name)) for name in ("users", "classes", "subjects")}
    print(f"OK: Seeded {config.get('STORAGE_BACKEND')} store '{store.storage_key}' {counts}")


if __name__ == "__main__":
    main()
