from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..store.record_store import RecordStore
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=r["id"],
        session_id=r.get("sessionId", ""),
        student_id=r.get("studentId", ""),
        subject_id=r.get("subjectId", ""),
        class_id=r.get("classId", ""),
        date=r.get("date", ""),
        time=r.get("time", ""),
        status=AttendanceStatus(r["status"]),
    )


def _to_row(a: AttendanceRecord) -> dict:
    return {
        "id": a.record_id,
        "sessionId": a.session_id,
        "studentId": a.student_id,
        "subjectId": a.subject_id,
        "classId": a.class_id,
        "date": a.date,
        "time": a.time,
        "status": a.status.value,
    }


class StoreAttendanceRepository(AttendanceRepository):
    def __init__(self, store: RecordStore):
        self._store = store

    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        r = self._store.find("attendance", record_id)
        return _to_record(r) if r else None

    def get_for_session_and_student(self, session_id: str, student_id: str) -> Optional[AttendanceRecord]:
        for r in self._store.rows("attendance"):
            if r.get("sessionId") == session_id and r.get("studentId") == student_id:
                return _to_record(r)
        return None

    def list_all(self) -> Sequence[AttendanceRecord]:
        return [_to_record(r) for r in self._store.rows("attendance")]

    def list_by_session(self, session_id: str) -> Sequence[AttendanceRecord]:
        return [a for a in self.list_all() if a.session_id == session_id]

    def list_by_student(self, student_id: str) -> Sequence[AttendanceRecord]:
        return [a for a in self.list_all() if a.student_id == student_id]

    def list_by_subject(self, subject_id: str) -> Sequence[AttendanceRecord]:
        return [a for a in self.list_all() if a.subject_id == subject_id]

    def list_for_student_and_subject(self, student_id: str, subject_id: str) -> Sequence[AttendanceRecord]:
        return [a for a in self.list_all() if a.student_id == student_id and a.subject_id == subject_id]

    def add(self, record: AttendanceRecord) -> tuple[AttendanceRecord, bool]:
        row, created = self._store.add_attendance(_to_row(record))
        return _to_record(row), created

    def update_status(self, record_id: str, status: AttendanceStatus) -> bool:
        return self._store.update("attendance", record_id, {"status": status.value})
