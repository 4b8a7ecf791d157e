from __future__ import annotations

from datetime import datetime


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def to_epoch_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def from_epoch_ms(value: int) -> datetime:
    return datetime.fromtimestamp(int(value) / 1000)


def iso_day(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%d")


def clock(moment: datetime) -> str:
    """HH:MM as shown next to a session or record."""
    return moment.strftime("%H:%M")
