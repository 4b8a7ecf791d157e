from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_session_and_student(self, session_id: str, student_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_by_session(self, session_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_by_student(self, student_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_by_subject(self, subject_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_student_and_subject(self, student_id: str, subject_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def add(self, record: AttendanceRecord) -> tuple[AttendanceRecord, bool]:
        """Insert unless the (session, student) pair already has a record.

        Returns the stored record and whether it was created.
        """

        raise NotImplementedError

    def update_status(self, record_id: str, status: AttendanceStatus) -> bool:
        """Admin-only correction; the reconciler never mutates records."""

        raise NotImplementedError
