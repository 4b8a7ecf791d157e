from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ClassSection


class ClassRepository(Protocol):
    def get_by_id(self, class_id: str) -> Optional[ClassSection]:
        raise NotImplementedError

    def list_all(self) -> Sequence[ClassSection]:
        raise NotImplementedError

    def create(self, cls: ClassSection) -> str:
        raise NotImplementedError

    def delete_by_id(self, class_id: str) -> bool:
        raise NotImplementedError
