from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.enums import Role
from ..store.record_store import RecordStore
from .model import User
from .repository import UserRepository

_FIELD_KEYS = {
    "name": "name",
    "email": "email",
    "password": "password",
    "role": "role",
    "department": "department",
    "class_id": "classId",
    "semester": "semester",
    "roll_no": "rollNo",
    "phone": "phone",
}


def _to_user(r: dict) -> User:
    semester = r.get("semester")
    return User(
        user_id=r["id"],
        name=r.get("name", ""),
        email=r.get("email", ""),
        password=r.get("password", ""),
        role=Role(r["role"]),
        department=r.get("department"),
        class_id=r.get("classId"),
        semester=int(semester) if semester not in (None, "") else None,
        roll_no=r.get("rollNo"),
        phone=r.get("phone"),
        created_at=r.get("createdAt", ""),
    )


def _to_row(u: User) -> dict:
    row = {
        "id": u.user_id,
        "name": u.name,
        "email": u.email,
        "password": u.password,
        "role": u.role.value,
        "createdAt": u.created_at,
    }
    for attr in ("department", "class_id", "semester", "roll_no", "phone"):
        value = getattr(u, attr)
        if value is not None:
            row[_FIELD_KEYS[attr]] = value
    return row


class StoreUserRepository(UserRepository):
    def __init__(self, store: RecordStore):
        self._store = store

    def get_by_id(self, user_id: str) -> Optional[User]:
        r = self._store.find("users", user_id)
        return _to_user(r) if r else None

    def get_by_email(self, email: str) -> Optional[User]:
        email = (email or "").strip().lower()
        for r in self._store.rows("users"):
            if str(r.get("email", "")).lower() == email:
                return _to_user(r)
        return None

    def list_all(self, *, role: Optional[Role] = None) -> Sequence[User]:
        users = [_to_user(r) for r in self._store.rows("users")]
        if role is not None:
            users = [u for u in users if u.role == role]
        return users

    def list_students_by_class(self, class_id: str) -> Sequence[User]:
        return [
            _to_user(r)
            for r in self._store.rows("users")
            if r.get("role") == Role.STUDENT.value and r.get("classId") == class_id
        ]

    def create(self, user: User) -> str:
        self._store.add("users", _to_row(user))
        return user.user_id

    def update(self, user_id: str, **fields: Any) -> bool:
        updates = {}
        for attr, value in fields.items():
            if attr not in _FIELD_KEYS:
                raise KeyError(attr)
            updates[_FIELD_KEYS[attr]] = value.value if isinstance(value, Role) else value
        return self._store.update("users", user_id, updates)

    def delete_by_id(self, user_id: str) -> bool:
        return self._store.delete("users", user_id)
