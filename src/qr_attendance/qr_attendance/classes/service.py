from __future__ import annotations

from typing import Sequence

from ..common.ids import generate_id
from ..common.validators import optional_int, require_non_empty
from ..core.exceptions import ValidationError
from ..subjects.repository import SubjectRepository
from ..users.repository import UserRepository
from .model import ClassSection
from .repository import ClassRepository


class ClassService:
    def __init__(self, classes: ClassRepository, users: UserRepository, subjects: SubjectRepository):
        self._classes = classes
        self._users = users
        self._subjects = subjects

    def create_class(self, *, name: str, department: str, semester=None, section: str = "") -> ClassSection:
        cls = ClassSection(
            class_id=generate_id(),
            name=require_non_empty(name, "Class name"),
            department=require_non_empty(department, "Department"),
            semester=optional_int(semester, "Semester") or 1,
            section=(section or "").strip(),
        )
        self._classes.create(cls)
        return cls

    def list_classes(self) -> Sequence[ClassSection]:
        return self._classes.list_all()

    def delete_class(self, class_id: str) -> None:
        if not self._classes.get_by_id(class_id):
            raise ValidationError("Class not found")
        if self._users.list_students_by_class(class_id):
            raise ValidationError("Class still has enrolled students")
        if self._subjects.list_by_class(class_id):
            raise ValidationError("Class still has subjects")
        self._classes.delete_by_id(class_id)
