from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.web import current_role, current_user_id, ok, role_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from .csv_export import class_report_csv, session_sheet_csv, subject_report_csv


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    def _check_subject_access(subject_id: str) -> None:
        if current_role() != Role.TEACHER:
            return
        subject = container.subjects_repo.get_by_id(subject_id)
        if subject and subject.teacher_id != current_user_id():
            raise AuthorizationError("You do not teach this subject")

    def _csv(body: str, filename: str):
        return app.response_class(
            body.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/reports/subjects/<subject_id>", methods=["GET"], endpoint="subject_report")
    @role_required(Role.ADMIN, Role.TEACHER)
    def subject_report(subject_id: str):
        _check_subject_access(subject_id)
        report = reports.subject_report(subject_id)
        return ok(
            subject=report.subject,
            rows=report.rows,
            average=report.average,
            above_threshold=report.above_threshold,
            below_threshold=report.below_threshold,
        )

    @app.route("/reports/subjects/<subject_id>/report.csv", methods=["GET"], endpoint="subject_report_csv")
    @role_required(Role.ADMIN, Role.TEACHER)
    def subject_report_csv_view(subject_id: str):
        _check_subject_access(subject_id)
        report = reports.subject_report(subject_id)
        return _csv(subject_report_csv(report), f"{report.subject['code']}_report.csv")

    @app.route("/reports/subjects/<subject_id>/sheet.csv", methods=["GET"], endpoint="session_sheet_csv")
    @role_required(Role.ADMIN, Role.TEACHER)
    def session_sheet_csv_view(subject_id: str):
        _check_subject_access(subject_id)
        sheet = reports.session_sheet(subject_id)
        return _csv(session_sheet_csv(sheet), f"{sheet.subject['code']}_attendance_by_date.csv")

    @app.route("/reports/classes", methods=["GET"], endpoint="class_report")
    @role_required(Role.ADMIN)
    def class_report():
        report = reports.class_report(request.args.get("classId") or None)
        return ok(subjects=report.subjects, rows=report.rows, overall=report.overall)

    @app.route("/reports/classes.csv", methods=["GET"], endpoint="class_report_csv")
    @role_required(Role.ADMIN)
    def class_report_csv_view():
        report = reports.class_report(request.args.get("classId") or None)
        filename = f"attendance_report_{date.today().strftime('%Y-%m-%d')}.csv"
        return _csv(class_report_csv(report), filename)

    @app.route("/reports/overview", methods=["GET"], endpoint="overview")
    @role_required(Role.ADMIN)
    def overview():
        return ok(**reports.overview())

    @app.route("/admin/sync", methods=["POST"], endpoint="sync_from_mirror")
    @role_required(Role.ADMIN)
    def sync_from_mirror():
        if container.store.pull_remote():
            return ok("Local data replaced from the shared copy")
        return ok("The shared copy is empty; nothing to sync")
