from __future__ import annotations

from flask import Flask, request

from ..common.web import current_user_id, fail, ok, role_required
from ..container import Container
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import ValidationError
from .model import Redemption


def _redeemed(result: Redemption):
    if result.created:
        message = "Attendance marked successfully!"
    else:
        message = "Attendance already recorded for this session"
    return ok(message, record=result.record, created=result.created, lenient=result.lenient)


def register(app: Flask, container: Container) -> None:
    reconciler = container.reconciler

    @app.route("/student/attendance/scan", methods=["POST"], endpoint="redeem_token")
    @role_required(Role.STUDENT)
    def redeem_token():
        data = request.get_json(silent=True) or {}
        return _redeemed(reconciler.redeem(data.get("token", ""), current_user_id()))

    @app.route("/student/attendance/code", methods=["POST"], endpoint="redeem_code")
    @role_required(Role.STUDENT)
    def redeem_code():
        data = request.get_json(silent=True) or request.form.to_dict()
        return _redeemed(reconciler.redeem_code(data.get("code", ""), current_user_id()))

    @app.route("/student/attendance/image", methods=["POST"], endpoint="redeem_image")
    @role_required(Role.STUDENT)
    def redeem_image():
        if "image" not in request.files:
            return fail("Image file is missing", 400)
        image_bytes = request.files["image"].read()
        return _redeemed(reconciler.redeem_image(image_bytes, current_user_id()))

    @app.route("/student/attendance", methods=["GET"], endpoint="student_attendance")
    @role_required(Role.STUDENT)
    def student_attendance():
        student_id = current_user_id()
        return ok(
            records=list(reconciler.history_for_student(student_id)),
            subjects=container.report_service.student_summary(student_id),
        )

    @app.route("/admin/attendance/<record_id>", methods=["PUT"], endpoint="correct_attendance")
    @role_required(Role.ADMIN)
    def correct_attendance(record_id: str):
        data = request.get_json(silent=True) or request.form.to_dict()
        try:
            status = AttendanceStatus(data.get("status", ""))
        except ValueError:
            raise ValidationError("Invalid attendance status")
        record = reconciler.correct_status(record_id, status)
        return ok("Attendance updated", record=record)
