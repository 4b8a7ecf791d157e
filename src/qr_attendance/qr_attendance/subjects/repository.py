from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Subject


class SubjectRepository(Protocol):
    def get_by_id(self, subject_id: str) -> Optional[Subject]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Subject]:
        raise NotImplementedError

    def list_by_teacher(self, teacher_id: str) -> Sequence[Subject]:
        raise NotImplementedError

    def list_by_class(self, class_id: str) -> Sequence[Subject]:
        raise NotImplementedError

    def create(self, subject: Subject) -> str:
        raise NotImplementedError

    def delete_by_id(self, subject_id: str) -> bool:
        raise NotImplementedError
