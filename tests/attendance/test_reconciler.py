from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta

import pytest

from src.qr_attendance.qr_attendance.attendance.reconciler import AttendanceReconciler
from src.qr_attendance.qr_attendance.common.datetime_utils import to_epoch_ms
from src.qr_attendance.qr_attendance.core.enums import AttendanceStatus
from src.qr_attendance.qr_attendance.core.exceptions import (
    ClassMismatchError,
    MalformedTokenError,
    SessionEndedError,
    SessionExpiredError,
    SessionNotFoundError,
    ValidationError,
)
from src.qr_attendance.qr_attendance.reports.aggregator import PercentageAggregator

T0 = datetime(2025, 3, 3, 9, 0, 0)


def at(seconds: float):
    return T0 + timedelta(seconds=seconds)


def _unknown_token(class_id="class-1"):
    return json.dumps({"sessionId": "gone-1", "subjectId": "sub-1", "classId": class_id, "teacherId": "teacher-1"})


@pytest.fixture
def session(container):
    return container.session_manager.create_session("sub-1", "teacher-1", now=T0)


def test_redeem_creates_present_record(container, session):
    result = container.reconciler.redeem(session.payload, "student-1", now=at(10))

    assert result.created
    assert not result.lenient
    assert result.record.status == AttendanceStatus.PRESENT
    assert result.record.session_id == session.session_id
    assert result.record.subject_id == "sub-1"
    assert result.record.date == "2025-03-03"
    assert result.record.time == "09:00"


def test_redeem_twice_keeps_one_record(container, session):
    first = container.reconciler.redeem(session.payload, "student-1", now=at(10))
    second = container.reconciler.redeem(session.payload, "student-1", now=at(20))

    assert not second.created
    assert second.record.record_id == first.record.record_id
    assert len(container.attendance_repo.list_by_session(session.session_id)) == 1


def test_redeem_on_expiry_boundary(container, session):
    assert container.reconciler.redeem(session.payload, "student-1", now=at(299)).created

    with pytest.raises(SessionExpiredError) as exc:
        container.reconciler.redeem(session.payload, "student-2", now=at(300))
    assert exc.value.code == "SessionExpired"
    assert container.attendance_repo.get_for_session_and_student(session.session_id, "student-2") is None


def test_redeem_after_end(container, session):
    container.session_manager.end_session(session.session_id, now=at(30))

    with pytest.raises(SessionEndedError):
        container.reconciler.redeem(session.payload, "student-1", now=at(40))


def test_redeem_from_other_class(container, session):
    with pytest.raises(ClassMismatchError) as exc:
        container.reconciler.redeem(session.payload, "student-5", now=at(10))

    assert exc.value.code == "ClassMismatch"
    assert container.attendance_repo.list_all() == []


def test_redeem_unknown_session(container):
    with pytest.raises(SessionNotFoundError) as exc:
        container.reconciler.redeem(_unknown_token(), "student-1", now=at(10))

    assert exc.value.code == "SessionNotFound"


def test_redeem_not_json(container):
    with pytest.raises(MalformedTokenError):
        container.reconciler.redeem("not-json", "student-1", now=at(10))


def test_lenient_mode_accepts_unknown_session(make_container, caplog):
    container = make_container(TRUST_UNKNOWN_TOKENS=True)

    with caplog.at_level(logging.WARNING):
        result = container.reconciler.redeem(_unknown_token(), "student-1", now=at(10))

    assert result.created
    assert result.lenient
    assert result.record.session_id == "gone-1"
    assert result.record.status == AttendanceStatus.PRESENT
    assert "Lenient mode" in caplog.text


def test_lenient_mode_still_checks_class(make_container):
    container = make_container(TRUST_UNKNOWN_TOKENS=True)

    with pytest.raises(ClassMismatchError):
        container.reconciler.redeem(_unknown_token("class-2"), "student-1", now=at(10))


def test_late_rule(make_container):
    container = make_container(LATE_AFTER_MINUTES=5, SESSION_TTL_SECONDS=900)
    session = container.session_manager.create_session("sub-1", "teacher-1", now=T0)

    on_time = container.reconciler.redeem(session.payload, "student-1", now=at(5 * 60))
    late = container.reconciler.redeem(session.payload, "student-2", now=at(6 * 60))

    assert on_time.record.status == AttendanceStatus.PRESENT
    assert late.record.status == AttendanceStatus.LATE
    assert PercentageAggregator(container.attendance_repo).percentage("student-2", "sub-1") == 100


def test_late_rule_ignores_start_time_in_presented_token(make_container):
    container = make_container(LATE_AFTER_MINUTES=1, SESSION_TTL_SECONDS=900)
    session = container.session_manager.create_session("sub-1", "teacher-1", now=T0)
    now = at(4 * 60)

    forged = json.loads(session.payload)
    forged["timestamp"] = to_epoch_ms(now)
    stripped = json.loads(session.payload)
    del stripped["timestamp"]

    statuses = [
        container.reconciler.redeem(json.dumps(forged), "student-1", now=now).record.status,
        container.reconciler.redeem(json.dumps(stripped), "student-2", now=now).record.status,
        container.reconciler.redeem(session.payload, "student-3", now=now).record.status,
    ]

    assert statuses == [AttendanceStatus.LATE] * 3


def test_redeem_code(container, session):
    result = container.reconciler.redeem_code(f"  {session.session_id} ", "student-1", now=at(10))

    assert result.created
    assert result.record.session_id == session.session_id


def test_redeem_code_errors(container, session):
    with pytest.raises(ValidationError):
        container.reconciler.redeem_code("   ", "student-1", now=at(10))
    with pytest.raises(SessionNotFoundError):
        container.reconciler.redeem_code("no-such-session", "student-1", now=at(10))


def test_redeem_image_uses_decoder(container, session):
    seen = []

    def decoder(image_bytes):
        seen.append(image_bytes)
        return session.payload

    reconciler = AttendanceReconciler(
        container.attendance_repo,
        container.sessions_repo,
        container.users_repo,
        image_decoder=decoder,
    )
    result = reconciler.redeem_image(b"png-bytes", "student-3", now=at(10))

    assert seen == [b"png-bytes"]
    assert result.created


def test_redeem_image_without_qr(container):
    reconciler = AttendanceReconciler(
        container.attendance_repo,
        container.sessions_repo,
        container.users_repo,
        image_decoder=lambda image_bytes: None,
    )

    with pytest.raises(MalformedTokenError):
        reconciler.redeem_image(b"blank", "student-1", now=at(10))


def test_sweep_is_idempotent(container, session):
    container.reconciler.redeem(session.payload, "student-1", now=at(10))

    created = container.reconciler.sweep_absentees(session.session_id, now=at(60))
    again = container.reconciler.sweep_absentees(session.session_id, now=at(61))

    assert sorted(r.student_id for r in created) == ["student-2", "student-3", "student-4"]
    assert all(r.time == "" and r.date == session.date for r in created)
    assert again == []
    assert len(container.attendance_repo.list_by_session(session.session_id)) == 4


def test_sweep_unknown_session(container):
    with pytest.raises(SessionNotFoundError):
        container.reconciler.sweep_absentees("missing", now=at(0))


def test_history_newest_first(container, session):
    container.reconciler.redeem(session.payload, "student-1", now=at(10))
    container.session_manager.end_session(session.session_id, now=at(20))
    later = container.session_manager.create_session("sub-4", "teacher-1", now=at(3600))
    container.reconciler.redeem(later.payload, "student-1", now=at(3610))

    history = container.reconciler.history_for_student("student-1")

    assert [r.subject_id for r in history] == ["sub-4", "sub-1"]


def test_correct_status(container, session):
    container.session_manager.end_session(session.session_id, now=at(30))
    record = container.attendance_repo.get_for_session_and_student(session.session_id, "student-4")
    aggregator = PercentageAggregator(container.attendance_repo)
    assert aggregator.percentage("student-4", "sub-1") == 0

    updated = container.reconciler.correct_status(record.record_id, AttendanceStatus.PRESENT)

    assert updated.status == AttendanceStatus.PRESENT
    assert aggregator.percentage("student-4", "sub-1") == 100


def test_correct_status_unknown_record(container):
    with pytest.raises(ValidationError):
        container.reconciler.correct_status("nope", AttendanceStatus.PRESENT)
