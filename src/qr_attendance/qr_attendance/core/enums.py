from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for access control."""

    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"


class AttendanceStatus(str, Enum):
    """Attendance status as stored in the snapshot."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


class SessionState(str, Enum):
    """Derived lifecycle state of an attendance session."""

    ACTIVE = "active"
    EXPIRED = "expired"
    ENDED = "ended"


class ClosedReason(str, Enum):
    ENDED = "ended"
    EXPIRED = "expired"
