from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import ClosedReason
from ..store.record_store import RecordStore
from .model import Session
from .repository import SessionRepository


def _to_session(r: dict) -> Session:
    reason = r.get("closedReason")
    return Session(
        session_id=r["id"],
        subject_id=r.get("subjectId", ""),
        teacher_id=r.get("teacherId", ""),
        class_id=r.get("classId", ""),
        payload=r.get("payload", ""),
        date=r.get("date", ""),
        start_time=r.get("startTime", ""),
        end_time=r.get("endTime", ""),
        expires_at=int(r.get("expiresAt") or 0),
        is_active=bool(r.get("isActive", False)),
        superseded_by=r.get("supersededBy"),
        closed_reason=ClosedReason(reason) if reason else None,
    )


def _to_row(s: Session) -> dict:
    return {
        "id": s.session_id,
        "subjectId": s.subject_id,
        "teacherId": s.teacher_id,
        "classId": s.class_id,
        "payload": s.payload,
        "date": s.date,
        "startTime": s.start_time,
        "endTime": s.end_time,
        "expiresAt": s.expires_at,
        "isActive": s.is_active,
        "supersededBy": s.superseded_by,
        "closedReason": s.closed_reason.value if s.closed_reason else None,
    }


class StoreSessionRepository(SessionRepository):
    def __init__(self, store: RecordStore):
        self._store = store

    def get_by_id(self, session_id: str) -> Optional[Session]:
        r = self._store.find("sessions", session_id)
        return _to_session(r) if r else None

    def list_all(self) -> Sequence[Session]:
        return [_to_session(r) for r in self._store.rows("sessions")]

    def list_by_subject(self, subject_id: str) -> Sequence[Session]:
        return [s for s in self.list_all() if s.subject_id == subject_id]

    def list_active(self) -> Sequence[Session]:
        return [s for s in self.list_all() if s.is_active]

    def create(self, session: Session) -> str:
        self._store.add("sessions", _to_row(session))
        return session.session_id

    def mark_superseded(self, session_id: str, *, superseded_by: str) -> bool:
        return self._store.update("sessions", session_id, {"supersededBy": superseded_by})

    def close(self, session_id: str, *, end_time: str, reason: ClosedReason) -> Optional[Session]:
        def _close(data: dict) -> Optional[Session]:
            for i, row in enumerate(data["sessions"]):
                if row.get("id") != session_id:
                    continue
                if not row.get("isActive"):
                    return None
                closed = {**row, "isActive": False, "endTime": end_time, "closedReason": reason.value}
                data["sessions"][i] = closed
                return _to_session(closed)
            return None

        return self._store.mutate(_close)
