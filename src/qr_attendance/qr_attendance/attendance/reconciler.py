from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import clock, from_epoch_ms, iso_day, now_local, to_epoch_ms
from ..common.ids import generate_id
from ..core.enums import AttendanceStatus
from ..core.exceptions import (
    ClassMismatchError,
    MalformedTokenError,
    SessionEndedError,
    SessionExpiredError,
    SessionNotFoundError,
    ValidationError,
)
from ..sessions.chain import chain_head, chain_ids, session_chain
from ..sessions.model import Session, TokenPayload
from ..sessions.qr import decode_image
from ..sessions.repository import SessionRepository
from ..sessions.token import parse_token
from ..users.repository import UserRepository
from .factory import RedemptionStrategyFactory
from .model import AttendanceRecord, Redemption
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceReconciler:
    """Turns presented tokens into attendance records.

    Guarantees at most one record per (session, student) and back-fills
    absentees when a session closes.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        sessions: SessionRepository,
        users: UserRepository,
        *,
        strategy_factory: Optional[RedemptionStrategyFactory] = None,
        trust_unknown_tokens: bool = False,
        image_decoder: Callable[[bytes], Optional[str]] = decode_image,
        clock_fn: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._sessions = sessions
        self._users = users
        self._factory = strategy_factory or RedemptionStrategyFactory()
        self._trust_unknown_tokens = bool(trust_unknown_tokens)
        self._decode_image = image_decoder
        self._now = clock_fn

    def redeem(self, token: str, student_id: str, *, now: Optional[datetime] = None) -> Redemption:
        now = now or self._now()
        payload = parse_token(token)

        session = self._sessions.get_by_id(payload.session_id)
        if session is None:
            if not self._trust_unknown_tokens:
                raise SessionNotFoundError()
            return self._redeem_unknown(payload, student_id, now=now)

        if not session.is_active:
            raise SessionEndedError()
        head = chain_head(self._sessions, session)
        if head is not None and not head.is_active:
            raise SessionEndedError()
        if to_epoch_ms(now) >= session.expires_at:
            raise SessionExpiredError()

        self._check_class(student_id, session.class_id)

        existing = self._existing_in_chain(session, student_id)
        if existing:
            return Redemption(record=existing, created=False)

        started_at = self._started_at(session)
        decision = self._factory.for_redemption(now=now, started_at=started_at).decide(now=now, started_at=started_at)

        record, created = self._attendance.add(
            AttendanceRecord(
                record_id=generate_id(),
                session_id=session.session_id,
                student_id=student_id,
                subject_id=session.subject_id,
                class_id=session.class_id,
                date=iso_day(now),
                time=clock(now),
                status=decision.status,
            )
        )
        if created:
            logger.info("Student %s marked %s for session %s", student_id, record.status.value, session.session_id)
        return Redemption(record=record, created=created)

    def _redeem_unknown(self, payload: TokenPayload, student_id: str, *, now: datetime) -> Redemption:
        logger.warning(
            "Lenient mode: accepting token for unknown session %s (student %s)",
            payload.session_id,
            student_id,
        )
        self._check_class(student_id, payload.class_id)

        record, created = self._attendance.add(
            AttendanceRecord(
                record_id=generate_id(),
                session_id=payload.session_id,
                student_id=student_id,
                subject_id=payload.subject_id,
                class_id=payload.class_id,
                date=iso_day(now),
                time=clock(now),
                status=AttendanceStatus.PRESENT,
            )
        )
        return Redemption(record=record, created=created, lenient=True)

    def redeem_code(self, code: str, student_id: str, *, now: Optional[datetime] = None) -> Redemption:
        """Manual entry: the student typed the raw session id."""

        code = (code or "").strip()
        if not code:
            raise ValidationError("Please enter a session code")

        session = self._sessions.get_by_id(code)
        if session is None:
            raise SessionNotFoundError()
        return self.redeem(session.payload, student_id, now=now)

    def redeem_image(self, image_bytes: bytes, student_id: str, *, now: Optional[datetime] = None) -> Redemption:
        token = self._decode_image(image_bytes)
        if not token:
            raise MalformedTokenError("No QR code found in the image")
        return self.redeem(token, student_id, now=now)

    @staticmethod
    def _started_at(session: Session) -> Optional[datetime]:
        # Lateness is measured from the stored session, never the presented token.
        stamp = parse_token(session.payload).timestamp
        return from_epoch_ms(stamp) if stamp else None

    def _check_class(self, student_id: str, class_id: str) -> None:
        student = self._users.get_by_id(student_id)
        if student and student.class_id and student.class_id != class_id:
            raise ClassMismatchError()

    def _existing_in_chain(self, session: Session, student_id: str) -> Optional[AttendanceRecord]:
        for s in session_chain(self._sessions, session):
            record = self._attendance.get_for_session_and_student(s.session_id, student_id)
            if record:
                return record
        return None

    def sweep_absentees(self, session_id: str, *, now: Optional[datetime] = None) -> list[AttendanceRecord]:
        """Mark every enrolled student without a record absent.

        Safe to call repeatedly: students who already have a record anywhere
        in the session's chain are skipped, and the store ignores duplicates.
        """

        session = self._sessions.get_by_id(session_id)
        if session is None:
            raise SessionNotFoundError()

        responded = set(self.responded_student_ids(session, include_absent=True))
        created: list[AttendanceRecord] = []
        for student in self._users.list_students_by_class(session.class_id):
            if student.user_id in responded:
                continue
            record, was_created = self._attendance.add(
                AttendanceRecord(
                    record_id=generate_id(),
                    session_id=session.session_id,
                    student_id=student.user_id,
                    subject_id=session.subject_id,
                    class_id=session.class_id,
                    date=session.date,
                    time="",
                    status=AttendanceStatus.ABSENT,
                )
            )
            if was_created:
                created.append(record)

        if created:
            logger.info("Session %s closed: %d student(s) marked absent", session_id, len(created))
        return created

    def responded_student_ids(self, session: Session, *, include_absent: bool = False) -> list[str]:
        ids = chain_ids(session_chain(self._sessions, session))
        out: list[str] = []
        for record in self._attendance.list_all():
            if record.session_id not in ids:
                continue
            if record.status == AttendanceStatus.ABSENT and not include_absent:
                continue
            if record.student_id not in out:
                out.append(record.student_id)
        return out

    def history_for_student(self, student_id: str) -> Sequence[AttendanceRecord]:
        records = list(self._attendance.list_by_student(student_id))
        records.sort(key=lambda r: (r.date, r.time), reverse=True)
        return records

    def correct_status(self, record_id: str, status: AttendanceStatus) -> AttendanceRecord:
        """Admin correction of a stored record's status."""

        if not self._attendance.update_status(record_id, status):
            raise ValidationError("Attendance record not found")
        record = self._attendance.get_by_id(record_id)
        logger.info("Attendance record %s corrected to %s", record_id, status.value)
        return record
