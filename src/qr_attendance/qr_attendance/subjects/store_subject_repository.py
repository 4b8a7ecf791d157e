from __future__ import annotations

from typing import Optional, Sequence

from ..store.record_store import RecordStore
from .model import Subject
from .repository import SubjectRepository


def _to_subject(r: dict) -> Subject:
    return Subject(
        subject_id=r["id"],
        name=r.get("name", ""),
        code=r.get("code", ""),
        class_id=r.get("classId", ""),
        teacher_id=r.get("teacherId", ""),
        semester=int(r.get("semester") or 0),
    )


class StoreSubjectRepository(SubjectRepository):
    def __init__(self, store: RecordStore):
        self._store = store

    def get_by_id(self, subject_id: str) -> Optional[Subject]:
        r = self._store.find("subjects", subject_id)
        return _to_subject(r) if r else None

    def list_all(self) -> Sequence[Subject]:
        return [_to_subject(r) for r in self._store.rows("subjects")]

    def list_by_teacher(self, teacher_id: str) -> Sequence[Subject]:
        return [s for s in self.list_all() if s.teacher_id == teacher_id]

    def list_by_class(self, class_id: str) -> Sequence[Subject]:
        return [s for s in self.list_all() if s.class_id == class_id]

    def create(self, subject: Subject) -> str:
        self._store.add(
            "subjects",
            {
                "id": subject.subject_id,
                "name": subject.name,
                "code": subject.code,
                "classId": subject.class_id,
                "teacherId": subject.teacher_id,
                "semester": subject.semester,
            },
        )
        return subject.subject_id

    def delete_by_id(self, subject_id: str) -> bool:
        return self._store.delete("subjects", subject_id)
