from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..classes.repository import ClassRepository
from ..common.ids import generate_id
from ..common.validators import optional_int, require_email, require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from .model import User
from .repository import UserRepository


class AuthService:
    """Use case: authenticate user (login).

    Passwords are compared as stored, in plaintext. Not secure; hardening
    authentication is outside this system's scope.
    """

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str, role: Role) -> User:
        user = self._users.get_by_email(email or "")
        if not user or user.password != (password or "") or user.role != role:
            raise AuthenticationError("Invalid email, password or role")
        return user


class UserService:
    """Use case: manage users (admin)."""

    def __init__(self, users: UserRepository, classes: ClassRepository):
        self._users = users
        self._classes = classes

    def _check_class(self, role: Role, class_id: Optional[str]) -> Optional[str]:
        if role != Role.STUDENT:
            return None
        class_id = require_non_empty(class_id, "Class")
        if not self._classes.get_by_id(class_id):
            raise ValidationError("Class does not exist")
        return class_id

    def create_account(
        self,
        *,
        name: str,
        email: str,
        password: str,
        role: Role,
        department: Optional[str] = None,
        class_id: Optional[str] = None,
        semester=None,
        roll_no: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> User:
        name = require_non_empty(name, "Name")
        email = require_email(email)
        password = require_min_length(require_non_empty(password, "Password"), "Password", 6)

        if self._users.get_by_email(email):
            raise ValidationError("Email is already registered")

        user = User(
            user_id=generate_id(),
            name=name,
            email=email,
            password=password,
            role=role,
            department=(department or "").strip() or None,
            class_id=self._check_class(role, class_id),
            semester=optional_int(semester, "Semester"),
            roll_no=(roll_no or "").strip() or None,
            phone=(phone or "").strip() or None,
            created_at=date.today().strftime("%Y-%m-%d"),
        )
        self._users.create(user)
        return user

    def update_account(self, user_id: str, **fields) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("User not found")

        updates = {}
        if "name" in fields:
            updates["name"] = require_non_empty(fields["name"], "Name")
        if "email" in fields:
            email = require_email(fields["email"])
            other = self._users.get_by_email(email)
            if other and other.user_id != user_id:
                raise ValidationError("Email is already registered")
            updates["email"] = email
        if "password" in fields and fields["password"]:
            updates["password"] = require_min_length(fields["password"], "Password", 6)
        if "class_id" in fields:
            updates["class_id"] = self._check_class(user.role, fields["class_id"])
        if "semester" in fields:
            updates["semester"] = optional_int(fields["semester"], "Semester")
        for key in ("department", "roll_no", "phone"):
            if key in fields:
                updates[key] = (fields[key] or "").strip() or None

        if updates and not self._users.update(user_id, **updates):
            raise ValidationError("Updating user failed")
        return self._users.get_by_id(user_id)

    def list_users(self, *, role: Optional[Role] = None) -> Sequence[User]:
        return self._users.list_all(role=role)

    def students_by_class(self, class_id: str) -> Sequence[User]:
        return self._users.list_students_by_class(class_id)

    def delete_user(self, *, current_role: Role, user_id: str) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("User not found")
        if user.role == Role.ADMIN:
            raise ValidationError("Admin accounts cannot be deleted")

        if not self._users.delete_by_id(user_id):
            raise ValidationError("Deleting user failed")
