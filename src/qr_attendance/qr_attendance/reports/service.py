from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..classes.repository import ClassRepository
from ..core.constants import GOOD_ATTENDANCE_PERCENT, WARNING_ATTENDANCE_PERCENT
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import ValidationError
from ..sessions.repository import SessionRepository
from ..subjects.repository import SubjectRepository
from ..users.repository import UserRepository
from .aggregator import PercentageAggregator, round_percent


@dataclass(frozen=True)
class SubjectReport:
    subject: dict
    rows: list[dict]
    average: int
    above_threshold: int
    below_threshold: int


@dataclass(frozen=True)
class ClassReport:
    subjects: list[dict]
    rows: list[dict]
    overall: int


@dataclass(frozen=True)
class SessionSheet:
    subject: dict
    dates: list[str]
    rows: list[dict]


def band(percentage: int) -> str:
    if percentage >= GOOD_ATTENDANCE_PERCENT:
        return "Good"
    if percentage >= WARNING_ATTENDANCE_PERCENT:
        return "Warning"
    return "Critical"


def _mean(values: list[int]) -> int:
    if not values:
        return 0
    return round_percent(sum(values), 100 * len(values))


class ReportService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        classes: ClassRepository,
        subjects: SubjectRepository,
        sessions: SessionRepository,
        *,
        aggregator: Optional[PercentageAggregator] = None,
    ):
        self._attendance = attendance
        self._users = users
        self._classes = classes
        self._subjects = subjects
        self._sessions = sessions
        self._aggregator = aggregator or PercentageAggregator(attendance)

    def _subject_or_fail(self, subject_id: str):
        subject = self._subjects.get_by_id(subject_id)
        if not subject:
            raise ValidationError("Subject not found")
        return subject

    def student_summary(self, student_id: str) -> list[dict]:
        """Per-subject percentages for a student's own dashboard."""
        student = self._users.get_by_id(student_id)
        if not student or not student.class_id:
            return []
        out = []
        for s in self._subjects.list_by_class(student.class_id):
            pct = self._aggregator.percentage(student_id, s.subject_id)
            out.append({"subject_id": s.subject_id, "name": s.name, "code": s.code, "percentage": pct, "band": band(pct)})
        return out

    def subject_report(self, subject_id: str) -> SubjectReport:
        subject = self._subject_or_fail(subject_id)

        rows = []
        for student in self._users.list_students_by_class(subject.class_id):
            pct = self._aggregator.percentage(student.user_id, subject.subject_id)
            rows.append(
                {
                    "student_id": student.user_id,
                    "name": student.name,
                    "roll_no": student.roll_no or "",
                    "percentage": pct,
                    "status": band(pct),
                }
            )
        rows.sort(key=lambda r: r["percentage"], reverse=True)

        percentages = [r["percentage"] for r in rows]
        return SubjectReport(
            subject={"id": subject.subject_id, "name": subject.name, "code": subject.code},
            rows=rows,
            average=_mean(percentages),
            above_threshold=sum(1 for p in percentages if p >= GOOD_ATTENDANCE_PERCENT),
            below_threshold=sum(1 for p in percentages if 0 < p < GOOD_ATTENDANCE_PERCENT),
        )

    def class_report(self, class_id: Optional[str] = None) -> ClassReport:
        students = self._users.list_all(role=Role.STUDENT)
        subjects = self._subjects.list_all()
        if class_id:
            students = [s for s in students if s.class_id == class_id]
            subjects = [s for s in subjects if s.class_id == class_id]

        class_names = {c.class_id: c.name for c in self._classes.list_all()}
        rows = []
        for student in students:
            percentages = [self._aggregator.percentage(student.user_id, s.subject_id) for s in subjects]
            rows.append(
                {
                    "student_id": student.user_id,
                    "name": student.name,
                    "roll_no": student.roll_no or "",
                    "class_name": class_names.get(student.class_id or "", ""),
                    "percentages": percentages,
                    "overall": _mean(percentages),
                }
            )

        return ClassReport(
            subjects=[{"id": s.subject_id, "name": s.name, "code": s.code} for s in subjects],
            rows=rows,
            overall=_mean([r["overall"] for r in rows]),
        )

    def session_sheet(self, subject_id: str) -> SessionSheet:
        """Attendance split by session date: one column per date."""
        subject = self._subject_or_fail(subject_id)

        by_student: dict[str, dict[str, str]] = {}
        dates: set[str] = set()
        for record in self._attendance.list_by_subject(subject_id):
            dates.add(record.date)
            cells = by_student.setdefault(record.student_id, {})
            # Several sessions on one day: any attendance wins over absence.
            if cells.get(record.date) in (AttendanceStatus.PRESENT.value, AttendanceStatus.LATE.value):
                continue
            cells[record.date] = record.status.value

        ordered = sorted(dates)
        rows = []
        for student in self._users.list_students_by_class(subject.class_id):
            cells = by_student.get(student.user_id, {})
            rows.append(
                {
                    "name": student.name,
                    "roll_no": student.roll_no or "",
                    "cells": [cells.get(d, "") for d in ordered],
                    "percentage": self._aggregator.percentage(student.user_id, subject_id),
                }
            )

        return SessionSheet(
            subject={"id": subject.subject_id, "name": subject.name, "code": subject.code},
            dates=ordered,
            rows=rows,
        )

    def overview(self, *, today: Optional[date] = None) -> dict:
        today_s = (today or date.today()).strftime("%Y-%m-%d")
        users = self._users.list_all()
        records = self._attendance.list_all()
        attended = sum(1 for r in records if r.status != AttendanceStatus.ABSENT)
        return {
            "students": sum(1 for u in users if u.role == Role.STUDENT),
            "teachers": sum(1 for u in users if u.role == Role.TEACHER),
            "classes": len(self._classes.list_all()),
            "subjects": len(self._subjects.list_all()),
            "sessions_today": sum(1 for s in self._sessions.list_all() if s.date == today_s),
            "overall_percentage": round_percent(attended, len(records)),
        }
