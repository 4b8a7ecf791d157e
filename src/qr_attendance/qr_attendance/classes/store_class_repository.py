from __future__ import annotations

from typing import Optional, Sequence

from ..store.record_store import RecordStore
from .model import ClassSection
from .repository import ClassRepository


def _to_class(r: dict) -> ClassSection:
    return ClassSection(
        class_id=r["id"],
        name=r.get("name", ""),
        department=r.get("department", ""),
        semester=int(r.get("semester") or 0),
        section=r.get("section", ""),
    )


class StoreClassRepository(ClassRepository):
    def __init__(self, store: RecordStore):
        self._store = store

    def get_by_id(self, class_id: str) -> Optional[ClassSection]:
        r = self._store.find("classes", class_id)
        return _to_class(r) if r else None

    def list_all(self) -> Sequence[ClassSection]:
        return [_to_class(r) for r in self._store.rows("classes")]

    def create(self, cls: ClassSection) -> str:
        self._store.add(
            "classes",
            {
                "id": cls.class_id,
                "name": cls.name,
                "department": cls.department,
                "semester": cls.semester,
                "section": cls.section,
            },
        )
        return cls.class_id

    def delete_by_id(self, class_id: str) -> bool:
        return self._store.delete("classes", class_id)
