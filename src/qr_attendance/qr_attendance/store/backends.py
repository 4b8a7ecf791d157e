from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

from ..core.exceptions import PersistenceError


class SnapshotBackend(Protocol):
    """Local persistence for the whole snapshot, addressed by storage key."""

    def load(self, key: str) -> Optional[dict]:
        raise NotImplementedError

    def save(self, key: str, data: dict) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class JsonFileBackend(SnapshotBackend):
    """One JSON document on disk: `{storage_key: snapshot}`.

    Writes go to a temp file in the same directory and are moved into place,
    so a crash mid-write leaves the previous snapshot intact.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def _read_all(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            return json.loads(self._path.read_text(encoding="utf-8") or "{}")
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Cannot read {self._path}: {e}") from e

    def _write_all(self, documents: dict) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=self._path.name, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(documents, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self._path)
        except OSError as e:
            raise PersistenceError(f"Cannot write {self._path}: {e}") from e

    def load(self, key: str) -> Optional[dict]:
        return self._read_all().get(key)

    def save(self, key: str, data: dict) -> None:
        documents = self._read_all()
        documents[key] = data
        self._write_all(documents)

    def delete(self, key: str) -> None:
        documents = self._read_all()
        if documents.pop(key, None) is not None:
            self._write_all(documents)


class InMemoryBackend(SnapshotBackend):
    """Process-local backend used by the testing settings."""

    def __init__(self):
        self._documents: dict[str, str] = {}

    def load(self, key: str) -> Optional[dict]:
        raw = self._documents.get(key)
        return json.loads(raw) if raw is not None else None

    def save(self, key: str, data: dict) -> None:
        self._documents[key] = json.dumps(data)

    def delete(self, key: str) -> None:
        self._documents.pop(key, None)
