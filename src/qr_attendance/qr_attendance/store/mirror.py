from __future__ import annotations

import logging
import queue
import threading
from typing import Optional, Protocol

import requests

from ..core.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class RemoteMirror(Protocol):
    """Remote copy of the snapshot shared by every device."""

    def push(self, key: str, data: dict) -> None:
        raise NotImplementedError

    def pull(self, key: str) -> Optional[dict]:
        raise NotImplementedError


class NullMirror(RemoteMirror):
    def push(self, key: str, data: dict) -> None:
        return None

    def pull(self, key: str) -> Optional[dict]:
        return None


class HttpMirror(RemoteMirror):
    """Realtime-database style REST mirror: `PUT {base_url}/{key}.json`.

    Pushes go through one worker thread in write order. Only the newest
    pending snapshot per key is sent; older ones still queued are dropped.
    A failed push is logged and never reaches the caller.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 5,
        http: Optional[requests.Session] = None,
        background: bool = True,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = float(timeout)
        self._http = http or requests.Session()
        self._background = background

        self._latest: dict[str, dict] = {}
        self._lock = threading.Lock()
        self._queue: "queue.Queue[str]" = queue.Queue()
        self._worker: Optional[threading.Thread] = None

    def _url(self, key: str) -> str:
        return f"{self._base_url}/{key}.json"

    def push(self, key: str, data: dict) -> None:
        if not self._background:
            self._put(key, data)
            return

        with self._lock:
            self._latest[key] = data
            if self._worker is None:
                self._worker = threading.Thread(target=self._drain, name="mirror-push", daemon=True)
                self._worker.start()
        self._queue.put(key)

    def flush(self) -> None:
        """Block until every queued push has been handled."""
        self._queue.join()

    def _drain(self) -> None:
        while True:
            key = self._queue.get()
            try:
                with self._lock:
                    data = self._latest.pop(key, None)
                if data is not None:
                    self._put(key, data)
            except Exception:
                logger.exception("Mirror push crashed")
            finally:
                self._queue.task_done()

    def _put(self, key: str, data: dict) -> None:
        try:
            resp = self._http.put(self._url(key), json=data, timeout=self._timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.warning("%s", PersistenceError(f"Mirror push failed: {e}"))

    def pull(self, key: str) -> Optional[dict]:
        try:
            resp = self._http.get(self._url(key), timeout=self._timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as e:
            raise PersistenceError(f"Mirror pull failed: {e}") from e
        except ValueError as e:
            raise PersistenceError(f"Mirror returned a non-JSON body: {e}") from e
