"""Example: drive a whole session through the service layer, without Flask.

Controllers stay thin; the session lifecycle and reconciliation live in services.
"""

from datetime import timedelta

from src.qr_attendance.qr_attendance.common.datetime_utils import now_local
from src.qr_attendance.qr_attendance.container import build_container
from src.qr_attendance.qr_attendance.store.backends import InMemoryBackend


def main():
    container = build_container(config={"AUTO_SEED": True}, backend=InMemoryBackend())
    manager = container.session_manager

    start = now_local()
    session = manager.create_session("sub-1", "teacher-1", now=start)
    print(container.reconciler.redeem(session.payload, "student-1", now=start + timedelta(seconds=10)))

    manager.end_session(session.session_id, now=start + timedelta(minutes=2))
    for row in container.report_service.subject_report("sub-1").rows:
        print(f"{row['name']:<15} {row['percentage']:>3}%  {row['status']}")


if __name__ == "__main__":
    main()
