from __future__ import annotations

import copy
import logging
import threading
from typing import Any, Callable, Optional, TypeVar

from ..core.constants import STORAGE_KEY
from .backends import SnapshotBackend
from .mirror import NullMirror, RemoteMirror

logger = logging.getLogger(__name__)

T = TypeVar("T")

COLLECTIONS = ("users", "classes", "subjects", "sessions", "attendance")


def empty_snapshot() -> dict:
    return {name: [] for name in COLLECTIONS}


def _normalize(data: Optional[dict]) -> dict:
    # Remote stores drop empty lists, so missing collections mean "no rows".
    data = dict(data or {})
    for name in COLLECTIONS:
        rows = data.get(name) or []
        if isinstance(rows, dict):
            rows = list(rows.values())
        data[name] = list(rows)
    return data


class RecordStore:
    """Single owner of the five collections.

    Every write is a full read-modify-write of the snapshot followed by a
    push of the whole snapshot to the remote mirror. There are no partial
    writes and no cross-device transactions: the last writer wins.
    """

    def __init__(
        self,
        backend: SnapshotBackend,
        *,
        mirror: Optional[RemoteMirror] = None,
        storage_key: str = STORAGE_KEY,
        seed: Optional[Callable[[], dict]] = None,
    ):
        self._backend = backend
        self._mirror = mirror or NullMirror()
        self._key = storage_key
        self._seed = seed
        self._lock = threading.RLock()

    @property
    def storage_key(self) -> str:
        return self._key

    def _load(self) -> dict:
        stored = self._backend.load(self._key)
        if stored is not None:
            return _normalize(stored)

        initial = _normalize(self._seed() if self._seed else empty_snapshot())
        logger.info("No stored snapshot under %r, initializing", self._key)
        self._persist(initial)
        return initial

    def _persist(self, data: dict) -> None:
        self._backend.save(self._key, data)
        self._mirror.push(self._key, copy.deepcopy(data))

    def read(self) -> dict:
        """Fresh copy of the whole snapshot."""
        with self._lock:
            return self._load()

    def rows(self, collection: str) -> list[dict]:
        return self.read()[collection]

    def find(self, collection: str, row_id: str) -> Optional[dict]:
        return next((r for r in self.rows(collection) if r.get("id") == row_id), None)

    def mutate(self, fn: Callable[[dict], T]) -> T:
        with self._lock:
            data = self._load()
            before = copy.deepcopy(data)
            result = fn(data)
            # Unchanged snapshots are not written or mirrored.
            if data != before:
                self._persist(data)
            return result

    def add(self, collection: str, row: dict) -> dict:
        def _add(data: dict) -> dict:
            data[collection].append(row)
            return row

        return self.mutate(_add)

    def update(self, collection: str, row_id: str, updates: dict[str, Any]) -> bool:
        with self._lock:
            data = self._load()
            for i, row in enumerate(data[collection]):
                if row.get("id") == row_id:
                    data[collection][i] = {**row, **updates}
                    self._persist(data)
                    return True
            return False

    def delete(self, collection: str, row_id: str) -> bool:
        with self._lock:
            data = self._load()
            kept = [r for r in data[collection] if r.get("id") != row_id]
            if len(kept) == len(data[collection]):
                return False
            data[collection] = kept
            self._persist(data)
            return True

    def add_attendance(self, row: dict) -> tuple[dict, bool]:
        """Insert unless (sessionId, studentId) already has a record.

        Returns the stored row and whether it was created.
        """
        with self._lock:
            data = self._load()
            existing = next(
                (
                    a
                    for a in data["attendance"]
                    if a.get("sessionId") == row["sessionId"] and a.get("studentId") == row["studentId"]
                ),
                None,
            )
            if existing:
                return existing, False
            data["attendance"].append(row)
            self._persist(data)
            return row, True

    def pull_remote(self) -> bool:
        """Replace the local snapshot with the mirror's copy, if it has one."""
        remote = self._mirror.pull(self._key)
        if remote is None:
            return False
        with self._lock:
            self._backend.save(self._key, _normalize(remote))
        logger.info("Local snapshot replaced from mirror")
        return True

    def reset(self) -> None:
        with self._lock:
            self._backend.delete(self._key)
