from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's attendance for one session.

    Unique on (session_id, student_id). `time` is empty for absentees
    back-filled when the session closes.
    """

    record_id: str
    session_id: str
    student_id: str
    subject_id: str
    class_id: str
    date: str
    time: str
    status: AttendanceStatus


@dataclass(frozen=True)
class Redemption:
    """Outcome of a successful token redemption."""

    record: AttendanceRecord
    created: bool
    lenient: bool = False
