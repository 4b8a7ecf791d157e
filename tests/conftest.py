from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.qr_attendance.qr_attendance.container import build_container
from src.qr_attendance.qr_attendance.store.backends import InMemoryBackend

T0 = datetime(2025, 3, 3, 9, 0, 0)


class FakeClock:
    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_container(clock):
    def _make(**config):
        settings = {"AUTO_SEED": True, "SESSION_TTL_SECONDS": 300, **config}
        return build_container(config=settings, backend=InMemoryBackend(), clock_fn=clock)

    return _make


@pytest.fixture
def container(make_container):
    return make_container()
