from datetime import datetime

import pytest

from src.qr_attendance.qr_attendance.sessions.poller import ExpiryPoller

T0 = datetime(2025, 3, 3, 9, 0, 0)


def test_tick_expires_elapsed_sessions(container, clock):
    session = container.session_manager.create_session("sub-1", "teacher-1", now=T0)
    poller = ExpiryPoller(container.session_manager, interval_seconds=1)

    assert poller.tick() == []
    clock.advance(300)
    closed = poller.tick()

    assert [s.session_id for s in closed] == [session.session_id]
    assert not container.sessions_repo.get_by_id(session.session_id).is_active


def test_start_and_stop(container):
    poller = ExpiryPoller(container.session_manager, interval_seconds=60)

    poller.start()
    assert poller.running
    poller.stop()
    assert not poller.running


def test_interval_must_be_positive(container):
    with pytest.raises(ValueError):
        ExpiryPoller(container.session_manager, interval_seconds=0)
