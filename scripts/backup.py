"""Dump the current snapshot to backups/ as a timestamped JSON file.

Works for every storage backend, the MySQL one included.
"""

from __future__ import annotations

import importlib
import json
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.qr_attendance.qr_attendance.container import build_backend
from src.qr_attendance.qr_attendance.core.constants import STORAGE_KEY


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    config = {name: getattr(settings, name) for name in dir(settings) if name.isupper()}
    key = str(config.get("STORAGE_KEY", STORAGE_KEY))

    snapshot = build_backend(config).load(key)
    if snapshot is None:
        raise SystemExit(f"Nothing stored under '{key}' yet.")

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"{key}_{ts}.json"
    out_file.write_text(json.dumps(snapshot, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
