from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ClassSection:
    class_id: str
    name: str
    department: str
    semester: int
    section: str
