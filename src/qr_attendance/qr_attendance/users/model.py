from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object (no storage access). The password is kept in
    plaintext; hardening authentication is out of scope for this system.
    """

    user_id: str
    name: str
    email: str
    password: str
    role: Role
    department: Optional[str] = None
    class_id: Optional[str] = None
    semester: Optional[int] = None
    roll_no: Optional[str] = None
    phone: Optional[str] = None
    created_at: str = ""
