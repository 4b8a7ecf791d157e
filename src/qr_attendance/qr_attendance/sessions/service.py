from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..attendance.reconciler import AttendanceReconciler
from ..common.datetime_utils import clock, iso_day, now_local, to_epoch_ms
from ..common.ids import generate_id
from ..core.constants import DEFAULT_SESSION_TTL_SECONDS
from ..core.enums import ClosedReason, SessionState
from ..core.exceptions import AuthorizationError, ValidationError
from ..subjects.repository import SubjectRepository
from ..users.repository import UserRepository
from .model import LiveRoster, Session, TokenPayload
from .repository import SessionRepository
from .token import encode_token

logger = logging.getLogger(__name__)


class SessionManager:
    """Creates, ends and expires attendance sessions.

    Lifecycle: Active on creation, then Ended (teacher) or Expired (TTL).
    A closed session is never reopened.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        subjects: SubjectRepository,
        users: UserRepository,
        reconciler: AttendanceReconciler,
        *,
        ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS,
        clock_fn: Callable[[], datetime] = now_local,
    ):
        self._sessions = sessions
        self._subjects = subjects
        self._users = users
        self._reconciler = reconciler
        self._ttl_ms = int(ttl_seconds) * 1000
        self._now = clock_fn

    @staticmethod
    def is_expired(session: Session, now: datetime) -> bool:
        return to_epoch_ms(now) >= session.expires_at

    def state_of(self, session: Session, now: Optional[datetime] = None) -> SessionState:
        now = now or self._now()
        if not session.is_active:
            if session.closed_reason == ClosedReason.EXPIRED:
                return SessionState.EXPIRED
            return SessionState.ENDED
        if self.is_expired(session, now):
            return SessionState.EXPIRED
        return SessionState.ACTIVE

    def get(self, session_id: str) -> Session:
        session = self._sessions.get_by_id(session_id)
        if session is None:
            raise ValidationError("Session not found")
        return session

    def create_session(self, subject_id: str, teacher_id: str, *, now: Optional[datetime] = None) -> Session:
        now = now or self._now()

        subject = self._subjects.get_by_id(subject_id)
        if not subject:
            raise ValidationError("Please select a subject first")
        if subject.teacher_id != teacher_id:
            raise AuthorizationError("You do not teach this subject")

        if not self._users.list_students_by_class(subject.class_id):
            logger.info("Subject %s: class %s has no enrolled students", subject.code, subject.class_id)

        live = [
            s
            for s in self._sessions.list_by_subject(subject_id)
            if s.is_active and not s.superseded_by and not self.is_expired(s, now)
        ]

        session_id = generate_id()
        created_ms = to_epoch_ms(now)
        payload = encode_token(
            TokenPayload(
                session_id=session_id,
                subject_id=subject.subject_id,
                class_id=subject.class_id,
                teacher_id=teacher_id,
                timestamp=created_ms,
            )
        )
        session = Session(
            session_id=session_id,
            subject_id=subject.subject_id,
            teacher_id=teacher_id,
            class_id=subject.class_id,
            payload=payload,
            date=iso_day(now),
            start_time=clock(now),
            end_time="",
            expires_at=created_ms + self._ttl_ms,
            is_active=True,
        )
        self._sessions.create(session)

        # The old row keeps isActive=true until its own TTL lapses, so its QR
        # stays redeemable while the new session is live.
        for old in live:
            self._sessions.mark_superseded(old.session_id, superseded_by=session_id)
            logger.info("Session %s superseded by %s", old.session_id, session_id)

        logger.info("Session %s opened for %s by %s", session_id, subject.code, teacher_id)
        return session

    def regenerate_session(self, session_id: str, teacher_id: str, *, now: Optional[datetime] = None) -> Session:
        old = self.get(session_id)
        if old.teacher_id != teacher_id:
            raise AuthorizationError("This session belongs to another teacher")
        return self.create_session(old.subject_id, teacher_id, now=now)

    def end_session(
        self,
        session_id: str,
        *,
        now: Optional[datetime] = None,
        teacher_id: Optional[str] = None,
    ) -> Session:
        """End a session. Ending an already closed session is a no-op."""

        now = now or self._now()
        session = self.get(session_id)
        if teacher_id is not None and session.teacher_id != teacher_id:
            raise AuthorizationError("This session belongs to another teacher")

        closed = self._sessions.close(session_id, end_time=clock(now), reason=ClosedReason.ENDED)
        if closed is None:
            return session

        logger.info("Session %s ended", session_id)
        self._after_close(closed, now)
        return closed

    def expire_elapsed(self, *, now: Optional[datetime] = None) -> list[Session]:
        """Close every active session whose TTL has elapsed."""

        now = now or self._now()
        closed_now: list[Session] = []
        for session in self._sessions.list_active():
            if not self.is_expired(session, now):
                continue
            closed = self._sessions.close(session.session_id, end_time=clock(now), reason=ClosedReason.EXPIRED)
            if closed is None:
                continue
            logger.info("Session %s expired", session.session_id)
            self._after_close(closed, now)
            closed_now.append(closed)
        return closed_now

    def _after_close(self, session: Session, now: datetime) -> None:
        # A superseded session's roster is covered by its successor's sweep.
        if session.superseded_by:
            return
        self._reconciler.sweep_absentees(session.session_id, now=now)

    def live_roster(self, session_id: str, *, now: Optional[datetime] = None) -> LiveRoster:
        now = now or self._now()
        self.expire_elapsed(now=now)

        session = self.get(session_id)
        students = [
            {"id": s.user_id, "name": s.name, "roll_no": s.roll_no or ""}
            for s in self._users.list_students_by_class(session.class_id)
        ]
        present_ids = self._reconciler.responded_student_ids(session)

        seconds_left = 0
        if session.is_active:
            seconds_left = max(0, (session.expires_at - to_epoch_ms(now)) // 1000)

        return LiveRoster(session=session, students=students, present_ids=present_ids, seconds_left=int(seconds_left))

    def active_sessions_for_teacher(self, teacher_id: str, *, now: Optional[datetime] = None) -> Sequence[Session]:
        now = now or self._now()
        return [
            s
            for s in self._sessions.list_active()
            if s.teacher_id == teacher_id and not s.superseded_by and not self.is_expired(s, now)
        ]

    def sessions_for_subject(self, subject_id: str) -> Sequence[Session]:
        sessions = list(self._sessions.list_by_subject(subject_id))
        sessions.sort(key=lambda s: s.expires_at, reverse=True)
        return sessions
