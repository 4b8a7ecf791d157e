from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.qr_attendance.qr_attendance.common.datetime_utils import to_epoch_ms
from src.qr_attendance.qr_attendance.core.enums import AttendanceStatus, ClosedReason, SessionState
from src.qr_attendance.qr_attendance.core.exceptions import (
    AuthorizationError,
    SessionEndedError,
    ValidationError,
)
from src.qr_attendance.qr_attendance.reports.aggregator import PercentageAggregator
from src.qr_attendance.qr_attendance.sessions.token import parse_token

T0 = datetime(2025, 3, 3, 9, 0, 0)


def at(seconds: float):
    return T0 + timedelta(seconds=seconds)


def test_create_session_is_active_with_ttl(container):
    session = container.session_manager.create_session("sub-1", "teacher-1", now=T0)

    assert session.is_active
    assert session.class_id == "class-1"
    assert session.expires_at == to_epoch_ms(T0) + 300_000
    assert session.date == "2025-03-03"
    assert session.start_time == "09:00"
    assert session.end_time == ""

    payload = parse_token(session.payload)
    assert payload.session_id == session.session_id
    assert payload.subject_id == "sub-1"
    assert payload.class_id == "class-1"
    assert payload.timestamp == to_epoch_ms(T0)


def test_create_session_unknown_subject(container):
    with pytest.raises(ValidationError):
        container.session_manager.create_session("sub-404", "teacher-1", now=T0)


def test_create_session_by_other_teacher_is_refused(container):
    with pytest.raises(AuthorizationError):
        container.session_manager.create_session("sub-1", "teacher-2", now=T0)


def test_state_reflects_elapsed_ttl_before_any_poll(container):
    manager = container.session_manager
    session = manager.create_session("sub-1", "teacher-1", now=T0)

    assert manager.state_of(session, at(299)) == SessionState.ACTIVE
    assert manager.state_of(session, at(300)) == SessionState.EXPIRED
    assert manager.is_expired(session, at(300))


def test_end_session_is_idempotent(container):
    manager = container.session_manager
    session = manager.create_session("sub-1", "teacher-1", now=T0)

    first = manager.end_session(session.session_id, now=at(60))
    records_after_first = len(container.attendance_repo.list_all())
    second = manager.end_session(session.session_id, now=at(90))

    assert not first.is_active
    assert first.closed_reason == ClosedReason.ENDED
    assert first.end_time == "09:01"
    assert second.end_time == "09:01"
    assert manager.state_of(second, at(90)) == SessionState.ENDED
    assert records_after_first == 4
    assert len(container.attendance_repo.list_all()) == 4


def test_end_session_of_other_teacher_is_refused(container):
    session = container.session_manager.create_session("sub-1", "teacher-1", now=T0)

    with pytest.raises(AuthorizationError):
        container.session_manager.end_session(session.session_id, now=at(10), teacher_id="teacher-2")


def test_expire_elapsed_closes_and_sweeps_once(container):
    manager = container.session_manager
    session = manager.create_session("sub-1", "teacher-1", now=T0)

    assert manager.expire_elapsed(now=at(299)) == []

    closed = manager.expire_elapsed(now=at(300))
    assert [s.session_id for s in closed] == [session.session_id]
    assert closed[0].closed_reason == ClosedReason.EXPIRED
    assert manager.state_of(closed[0], at(300)) == SessionState.EXPIRED

    records = container.attendance_repo.list_by_session(session.session_id)
    assert len(records) == 4
    assert {r.status for r in records} == {AttendanceStatus.ABSENT}

    assert manager.expire_elapsed(now=at(400)) == []
    assert len(container.attendance_repo.list_all()) == 4


def test_one_redemption_then_end_marks_the_rest_absent(container):
    manager = container.session_manager
    session = manager.create_session("sub-1", "teacher-1", now=T0)

    container.reconciler.redeem(session.payload, "student-1", now=at(10))
    manager.end_session(session.session_id, now=at(300))

    records = {r.student_id: r.status for r in container.attendance_repo.list_by_session(session.session_id)}
    assert records == {
        "student-1": AttendanceStatus.PRESENT,
        "student-2": AttendanceStatus.ABSENT,
        "student-3": AttendanceStatus.ABSENT,
        "student-4": AttendanceStatus.ABSENT,
    }

    aggregator = PercentageAggregator(container.attendance_repo)
    assert aggregator.percentage("student-1", "sub-1") == 100
    assert aggregator.percentage("student-2", "sub-1") == 0


def test_new_session_supersedes_live_one(container):
    manager = container.session_manager
    reconciler = container.reconciler

    first = manager.create_session("sub-1", "teacher-1", now=T0)
    reconciler.redeem(first.payload, "student-1", now=at(5))

    second = manager.create_session("sub-1", "teacher-1", now=at(60))
    old = container.sessions_repo.get_by_id(first.session_id)
    assert old.superseded_by == second.session_id
    assert old.is_active

    # Same meeting: a student who already checked in is not recorded twice.
    again = reconciler.redeem(second.payload, "student-1", now=at(65))
    assert not again.created
    assert again.record.session_id == first.session_id

    # The old QR still works while the new session is live.
    assert reconciler.redeem(first.payload, "student-2", now=at(70)).created

    manager.end_session(second.session_id, now=at(120))
    with pytest.raises(SessionEndedError):
        reconciler.redeem(first.payload, "student-3", now=at(130))

    absent = [r for r in container.attendance_repo.list_all() if r.status == AttendanceStatus.ABSENT]
    assert sorted(r.student_id for r in absent) == ["student-3", "student-4"]
    assert {r.session_id for r in absent} == {second.session_id}

    # The superseded session lapses later without a second sweep.
    expired = manager.expire_elapsed(now=at(300))
    assert [s.session_id for s in expired] == [first.session_id]
    assert len(container.attendance_repo.list_all()) == 4


def test_regenerate_session(container):
    manager = container.session_manager
    first = manager.create_session("sub-1", "teacher-1", now=T0)

    with pytest.raises(AuthorizationError):
        manager.regenerate_session(first.session_id, "teacher-2", now=at(30))

    second = manager.regenerate_session(first.session_id, "teacher-1", now=at(30))
    assert second.session_id != first.session_id
    assert second.subject_id == "sub-1"
    assert [s.session_id for s in manager.active_sessions_for_teacher("teacher-1", now=at(30))] == [second.session_id]


def test_live_roster(container):
    manager = container.session_manager
    session = manager.create_session("sub-1", "teacher-1", now=T0)
    container.reconciler.redeem(session.payload, "student-2", now=at(10))

    roster = manager.live_roster(session.session_id, now=at(10))

    assert roster.total == 4
    assert roster.present_ids == ["student-2"]
    assert roster.present_count == 1
    assert roster.seconds_left == 290
    assert {"id": "student-2", "name": "Rahul Verma", "roll_no": "CS2024002"} in roster.students


def test_live_roster_after_expiry(container):
    manager = container.session_manager
    session = manager.create_session("sub-1", "teacher-1", now=T0)

    roster = manager.live_roster(session.session_id, now=at(301))

    assert not roster.session.is_active
    assert roster.seconds_left == 0
    assert roster.present_count == 0


def test_active_sessions_skip_expired(container):
    manager = container.session_manager
    manager.create_session("sub-1", "teacher-1", now=T0)
    later = manager.create_session("sub-3", "teacher-1", now=at(200))

    active = manager.active_sessions_for_teacher("teacher-1", now=at(310))
    assert [s.session_id for s in active] == [later.session_id]


def test_sessions_for_subject_newest_first(container):
    manager = container.session_manager
    a = manager.create_session("sub-1", "teacher-1", now=T0)
    manager.end_session(a.session_id, now=at(10))
    b = manager.create_session("sub-1", "teacher-1", now=at(20))

    assert [s.session_id for s in manager.sessions_for_subject("sub-1")] == [b.session_id, a.session_id]
