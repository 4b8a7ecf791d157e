from __future__ import annotations

from flask import Flask, request

from ..common.web import ok, role_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/classes", methods=["GET"], endpoint="admin_classes")
    @role_required(Role.ADMIN, Role.TEACHER)
    def admin_classes():
        return ok(classes=list(container.class_service.list_classes()))

    @app.route("/admin/classes", methods=["POST"], endpoint="add_class")
    @role_required(Role.ADMIN)
    def add_class():
        data = request.get_json(silent=True) or request.form.to_dict()
        cls = container.class_service.create_class(
            name=data.get("name", ""),
            department=data.get("department", ""),
            semester=data.get("semester"),
            section=data.get("section", ""),
        )
        return ok("Class added", 201, **{"class": cls})

    @app.route("/admin/classes/<class_id>", methods=["DELETE"], endpoint="delete_class")
    @role_required(Role.ADMIN)
    def delete_class(class_id: str):
        container.class_service.delete_class(class_id)
        return ok("Class deleted")
