from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from .attendance.factory import RedemptionStrategyFactory
from .attendance.reconciler import AttendanceReconciler
from .attendance.store_attendance_repository import StoreAttendanceRepository
from .classes.service import ClassService
from .classes.store_class_repository import StoreClassRepository
from .common.datetime_utils import now_local
from .core.constants import DEFAULT_EXPIRY_POLL_SECONDS, DEFAULT_MIRROR_TIMEOUT_SECONDS, DEFAULT_SESSION_TTL_SECONDS, STORAGE_KEY
from .database.connection import DatabaseConnection, DBConfig
from .reports.aggregator import PercentageAggregator
from .reports.service import ReportService
from .sessions.poller import ExpiryPoller
from .sessions.service import SessionManager
from .sessions.store_session_repository import StoreSessionRepository
from .store.backends import InMemoryBackend, JsonFileBackend, SnapshotBackend
from .store.mirror import HttpMirror, NullMirror, RemoteMirror
from .store.mysql_backend import MySQLSnapshotBackend
from .store.record_store import RecordStore
from .store.seed import demo_snapshot
from .subjects.service import SubjectService
from .subjects.store_subject_repository import StoreSubjectRepository
from .users.service import AuthService, UserService
from .users.store_user_repository import StoreUserRepository


@dataclass(frozen=True)
class Container:
    store: RecordStore

    users_repo: StoreUserRepository
    classes_repo: StoreClassRepository
    subjects_repo: StoreSubjectRepository
    sessions_repo: StoreSessionRepository
    attendance_repo: StoreAttendanceRepository

    auth_service: AuthService
    user_service: UserService
    class_service: ClassService
    subject_service: SubjectService
    reconciler: AttendanceReconciler
    session_manager: SessionManager
    aggregator: PercentageAggregator
    report_service: ReportService
    poller: ExpiryPoller


def build_backend(config: Mapping[str, Any]) -> SnapshotBackend:
    kind = str(config.get("STORAGE_BACKEND", "json")).lower()
    if kind == "memory":
        return InMemoryBackend()
    if kind == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_settings(config["DB_CONFIG"]))
        return MySQLSnapshotBackend(conn)
    if kind == "json":
        return JsonFileBackend(config.get("DATA_FILE", "data/qr_attendance.json"))
    raise ValueError(f"Unknown STORAGE_BACKEND: {kind!r}")


def build_mirror(config: Mapping[str, Any]) -> RemoteMirror:
    url = config.get("MIRROR_URL")
    if not url:
        return NullMirror()
    return HttpMirror(str(url), timeout=float(config.get("MIRROR_TIMEOUT", DEFAULT_MIRROR_TIMEOUT_SECONDS)))


def build_container(
    *,
    config: Mapping[str, Any],
    backend: Optional[SnapshotBackend] = None,
    mirror: Optional[RemoteMirror] = None,
    clock_fn: Callable[[], datetime] = now_local,
) -> Container:
    store = RecordStore(
        backend or build_backend(config),
        mirror=mirror or build_mirror(config),
        storage_key=str(config.get("STORAGE_KEY", STORAGE_KEY)),
        seed=demo_snapshot if config.get("AUTO_SEED", False) else None,
    )

    users_repo = StoreUserRepository(store)
    classes_repo = StoreClassRepository(store)
    subjects_repo = StoreSubjectRepository(store)
    sessions_repo = StoreSessionRepository(store)
    attendance_repo = StoreAttendanceRepository(store)

    late_after = config.get("LATE_AFTER_MINUTES")
    reconciler = AttendanceReconciler(
        attendance_repo,
        sessions_repo,
        users_repo,
        strategy_factory=RedemptionStrategyFactory(late_after_minutes=int(late_after) if late_after else None),
        trust_unknown_tokens=bool(config.get("TRUST_UNKNOWN_TOKENS", False)),
        clock_fn=clock_fn,
    )
    session_manager = SessionManager(
        sessions_repo,
        subjects_repo,
        users_repo,
        reconciler,
        ttl_seconds=int(config.get("SESSION_TTL_SECONDS", DEFAULT_SESSION_TTL_SECONDS)),
        clock_fn=clock_fn,
    )
    aggregator = PercentageAggregator(attendance_repo)

    return Container(
        store=store,
        users_repo=users_repo,
        classes_repo=classes_repo,
        subjects_repo=subjects_repo,
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo, classes_repo),
        class_service=ClassService(classes_repo, users_repo, subjects_repo),
        subject_service=SubjectService(subjects_repo, classes_repo, users_repo),
        reconciler=reconciler,
        session_manager=session_manager,
        aggregator=aggregator,
        report_service=ReportService(
            attendance_repo, users_repo, classes_repo, subjects_repo, sessions_repo, aggregator=aggregator
        ),
        poller=ExpiryPoller(
            session_manager,
            interval_seconds=float(config.get("EXPIRY_POLL_SECONDS") or DEFAULT_EXPIRY_POLL_SECONDS),
        ),
    )
