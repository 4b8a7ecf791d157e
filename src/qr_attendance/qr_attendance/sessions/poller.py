from __future__ import annotations

import logging
import threading
from typing import Optional

from ..core.constants import DEFAULT_EXPIRY_POLL_SECONDS
from .service import SessionManager

logger = logging.getLogger(__name__)


class ExpiryPoller:
    """Recurring timer that closes sessions whose TTL has elapsed.

    Each tick reschedules the next one; `stop()` cancels the pending timer.
    Expiry is therefore detected within one interval after `expires_at`.
    """

    def __init__(self, manager: SessionManager, *, interval_seconds: float = DEFAULT_EXPIRY_POLL_SECONDS):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._manager = manager
        self._interval = float(interval_seconds)
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        with self._lock:
            if self._running:
                return
            self._running = True
            self._schedule()
        logger.info("Expiry poller started (every %.1fs)", self._interval)

    def stop(self) -> None:
        with self._lock:
            self._running = False
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def tick(self):
        return self._manager.expire_elapsed()

    def _schedule(self) -> None:
        self._timer = threading.Timer(self._interval, self._run)
        self._timer.daemon = True
        self._timer.start()

    def _run(self) -> None:
        try:
            self.tick()
        except Exception:
            logger.exception("Expiry check failed")
        finally:
            with self._lock:
                if self._running:
                    self._schedule()
