from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ClosedReason


@dataclass(frozen=True)
class TokenPayload:
    """What a QR code (or a resolved manual code) carries."""

    session_id: str
    subject_id: str
    class_id: str
    teacher_id: str = ""
    timestamp: int = 0


@dataclass(frozen=True)
class Session:
    """Domain entity: a time-bounded attendance window for one class meeting.

    `expires_at` is epoch milliseconds. `superseded_by` is set when the
    teacher opened a newer session for the same subject while this one was
    still live; the old row stays active until its own TTL lapses.
    """

    session_id: str
    subject_id: str
    teacher_id: str
    class_id: str
    payload: str
    date: str
    start_time: str
    end_time: str
    expires_at: int
    is_active: bool
    superseded_by: Optional[str] = None
    closed_reason: Optional[ClosedReason] = None


@dataclass(frozen=True)
class LiveRoster:
    """Read-model polled by the teacher's screen while a session runs."""

    session: Session
    students: list[dict]
    present_ids: list[str]
    seconds_left: int

    @property
    def present_count(self) -> int:
        return len(self.present_ids)

    @property
    def total(self) -> int:
        return len(self.students)
