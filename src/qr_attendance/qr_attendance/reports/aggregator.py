from __future__ import annotations

from ..attendance.repository import AttendanceRepository
from ..core.enums import AttendanceStatus

_ATTENDED = (AttendanceStatus.PRESENT, AttendanceStatus.LATE)


def round_percent(numerator: int, denominator: int) -> int:
    """round(100 * n / d) with halves rounded up; 0 when d is 0."""
    if denominator <= 0:
        return 0
    return (200 * numerator + denominator) // (2 * denominator)


class PercentageAggregator:
    """Read-only attendance ratio, recomputed on every call."""

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def percentage(self, student_id: str, subject_id: str) -> int:
        records = self._attendance.list_for_student_and_subject(student_id, subject_id)
        attended = sum(1 for r in records if r.status in _ATTENDED)
        return round_percent(attended, len(records))
