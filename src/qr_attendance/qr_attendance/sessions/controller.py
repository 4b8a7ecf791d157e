from __future__ import annotations

import io

from flask import Flask, request, send_file

from ..common.web import current_user_id, fail, ok, role_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from .qr import render_png


def register(app: Flask, container: Container) -> None:
    manager = container.session_manager

    def _own_session(session_id: str):
        session = manager.get(session_id)
        if session.teacher_id != current_user_id():
            raise AuthorizationError("This session belongs to another teacher")
        return session

    @app.route("/teacher/sessions", methods=["GET"], endpoint="teacher_sessions")
    @role_required(Role.TEACHER)
    def teacher_sessions():
        return ok(sessions=list(manager.active_sessions_for_teacher(current_user_id())))

    @app.route("/teacher/sessions", methods=["POST"], endpoint="create_session")
    @role_required(Role.TEACHER)
    def create_session():
        data = request.get_json(silent=True) or request.form.to_dict()
        session = manager.create_session(data.get("subjectId", ""), current_user_id())
        return ok("QR code generated! Session is active.", 201, session=session)

    @app.route("/teacher/sessions/<session_id>/regenerate", methods=["POST"], endpoint="regenerate_session")
    @role_required(Role.TEACHER)
    def regenerate_session(session_id: str):
        session = manager.regenerate_session(session_id, current_user_id())
        return ok("New QR code generated", 201, session=session)

    @app.route("/teacher/sessions/<session_id>/end", methods=["POST"], endpoint="end_session")
    @role_required(Role.TEACHER)
    def end_session(session_id: str):
        session = manager.end_session(session_id, teacher_id=current_user_id())
        roster = manager.live_roster(session_id)
        return ok(
            f"Session ended. {roster.present_count}/{roster.total} students attended.",
            session=session,
        )

    @app.route("/teacher/sessions/<session_id>/roster", methods=["GET"], endpoint="session_roster")
    @role_required(Role.TEACHER)
    def session_roster(session_id: str):
        _own_session(session_id)
        roster = manager.live_roster(session_id)
        return ok(
            session=roster.session,
            state=manager.state_of(roster.session),
            students=roster.students,
            present_ids=roster.present_ids,
            present_count=roster.present_count,
            total=roster.total,
            seconds_left=roster.seconds_left,
        )

    @app.route("/teacher/sessions/<session_id>/qr.png", methods=["GET"], endpoint="session_qr_image")
    @role_required(Role.TEACHER)
    def session_qr_image(session_id: str):
        session = _own_session(session_id)
        if not session.is_active:
            return fail("Session is no longer active", 410)
        return send_file(io.BytesIO(render_png(session.payload)), mimetype="image/png")
