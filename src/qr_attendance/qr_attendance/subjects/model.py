from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Subject:
    """Static configuration entity owned by the admin."""

    subject_id: str
    name: str
    code: str
    class_id: str
    teacher_id: str
    semester: int
