from __future__ import annotations

from typing import Sequence

from ..classes.repository import ClassRepository
from ..common.ids import generate_id
from ..common.validators import optional_int, require_non_empty
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..users.repository import UserRepository
from .model import Subject
from .repository import SubjectRepository


class SubjectService:
    def __init__(self, subjects: SubjectRepository, classes: ClassRepository, users: UserRepository):
        self._subjects = subjects
        self._classes = classes
        self._users = users

    def create_subject(self, *, name: str, code: str, class_id: str, teacher_id: str, semester=None) -> Subject:
        name = require_non_empty(name, "Subject name")
        code = require_non_empty(code, "Subject code").upper()
        class_id = require_non_empty(class_id, "Class")
        teacher_id = require_non_empty(teacher_id, "Teacher")

        cls = self._classes.get_by_id(class_id)
        if not cls:
            raise ValidationError("Class does not exist")
        teacher = self._users.get_by_id(teacher_id)
        if not teacher or teacher.role != Role.TEACHER:
            raise ValidationError("Teacher does not exist")

        subject = Subject(
            subject_id=generate_id(),
            name=name,
            code=code,
            class_id=class_id,
            teacher_id=teacher_id,
            semester=optional_int(semester, "Semester") or cls.semester,
        )
        self._subjects.create(subject)
        return subject

    def list_subjects(self) -> Sequence[Subject]:
        return self._subjects.list_all()

    def subjects_for_teacher(self, teacher_id: str) -> Sequence[Subject]:
        return self._subjects.list_by_teacher(teacher_id)

    def subjects_for_class(self, class_id: str) -> Sequence[Subject]:
        return self._subjects.list_by_class(class_id)

    def delete_subject(self, subject_id: str) -> None:
        if not self._subjects.delete_by_id(subject_id):
            raise ValidationError("Subject not found")
