from __future__ import annotations

from flask import Flask, request

from ..common.web import current_role, current_user_id, ok, role_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/subjects", methods=["GET"], endpoint="admin_subjects")
    @role_required(Role.ADMIN, Role.TEACHER)
    def admin_subjects():
        if current_role() == Role.TEACHER:
            subjects = container.subject_service.subjects_for_teacher(current_user_id())
        else:
            subjects = container.subject_service.list_subjects()
        return ok(subjects=list(subjects))

    @app.route("/admin/subjects", methods=["POST"], endpoint="add_subject")
    @role_required(Role.ADMIN)
    def add_subject():
        data = request.get_json(silent=True) or request.form.to_dict()
        subject = container.subject_service.create_subject(
            name=data.get("name", ""),
            code=data.get("code", ""),
            class_id=data.get("classId", ""),
            teacher_id=data.get("teacherId", ""),
            semester=data.get("semester"),
        )
        return ok("Subject added", 201, subject=subject)

    @app.route("/admin/subjects/<subject_id>", methods=["DELETE"], endpoint="delete_subject")
    @role_required(Role.ADMIN)
    def delete_subject(subject_id: str):
        container.subject_service.delete_subject(subject_id)
        return ok("Subject deleted")
