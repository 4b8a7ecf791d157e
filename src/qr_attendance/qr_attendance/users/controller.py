from __future__ import annotations

from flask import Flask, request, session

from ..common.web import current_role, current_user_id, fail, ok, role_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError


def _body() -> dict:
    return request.get_json(silent=True) or request.form.to_dict()


def _parse_role(value) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise ValidationError("Invalid role")


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = _body()
        user = container.auth_service.authenticate(
            data.get("email", ""),
            data.get("password", ""),
            _parse_role(data.get("role", "")),
        )

        session.clear()
        session["user_id"] = user.user_id
        session["name"] = user.name
        session["role"] = user.role.value
        session["class_id"] = user.class_id
        return ok(f"Welcome, {user.name}!", user=user)

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok("Logged out")

    @app.route("/me", endpoint="me")
    @role_required()
    def me():
        user = container.users_repo.get_by_id(current_user_id())
        if not user:
            session.clear()
            return fail("Account no longer exists", 401)
        return ok(user=user)

    @app.route("/admin/users", methods=["GET"], endpoint="admin_users")
    @role_required(Role.ADMIN)
    def admin_users():
        role = request.args.get("role")
        users = container.user_service.list_users(role=_parse_role(role) if role else None)
        return ok(users=list(users))

    @app.route("/admin/users", methods=["POST"], endpoint="add_user")
    @role_required(Role.ADMIN)
    def add_user():
        data = _body()
        user = container.user_service.create_account(
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            role=_parse_role(data.get("role", "")),
            department=data.get("department"),
            class_id=data.get("classId"),
            semester=data.get("semester"),
            roll_no=data.get("rollNo"),
            phone=data.get("phone"),
        )
        return ok("User added", 201, user=user)

    @app.route("/admin/users/<user_id>", methods=["PUT"], endpoint="update_user")
    @role_required(Role.ADMIN)
    def update_user(user_id: str):
        data = _body()
        keys = {
            "name": "name",
            "email": "email",
            "password": "password",
            "department": "department",
            "classId": "class_id",
            "semester": "semester",
            "rollNo": "roll_no",
            "phone": "phone",
        }
        fields = {attr: data[key] for key, attr in keys.items() if key in data}
        user = container.user_service.update_account(user_id, **fields)
        return ok("User updated", user=user)

    @app.route("/admin/users/<user_id>", methods=["DELETE"], endpoint="delete_user")
    @role_required(Role.ADMIN)
    def delete_user(user_id: str):
        container.user_service.delete_user(current_role=current_role(), user_id=user_id)
        return ok("User deleted")
