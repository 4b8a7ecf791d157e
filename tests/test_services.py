from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pytest

from src.qr_attendance.qr_attendance.core.enums import Role
from src.qr_attendance.qr_attendance.core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from src.qr_attendance.qr_attendance.users.model import User
from src.qr_attendance.qr_attendance.users.service import AuthService


@dataclass
class InMemoryUsers:
    users_by_email: dict[str, User]

    def get_by_email(self, email: str) -> Optional[User]:
        return self.users_by_email.get(email)


def _auth():
    teacher = User(
        user_id="teacher-1",
        name="Prof. Anita Sharma",
        email="anita@university.edu",
        password="teacher123",
        role=Role.TEACHER,
    )
    return AuthService(InMemoryUsers({teacher.email: teacher}))


def test_authenticate_success():
    user = _auth().authenticate("anita@university.edu", "teacher123", Role.TEACHER)

    assert user.user_id == "teacher-1"


@pytest.mark.parametrize(
    "email,password,role",
    [
        ("anita@university.edu", "wrong", Role.TEACHER),
        ("anita@university.edu", "teacher123", Role.ADMIN),
        ("nobody@university.edu", "teacher123", Role.TEACHER),
        ("", "", Role.STUDENT),
    ],
)
def test_authenticate_rejects_bad_credentials(email, password, role):
    with pytest.raises(AuthenticationError):
        _auth().authenticate(email, password, role)


def test_create_student_account(container):
    user = container.user_service.create_account(
        name=" Kavya Iyer ",
        email="Kavya@Student.edu",
        password="secret1",
        role=Role.STUDENT,
        class_id="class-3",
        semester="2",
        roll_no="CS2025001",
    )

    stored = container.users_repo.get_by_id(user.user_id)
    assert stored.name == "Kavya Iyer"
    assert stored.email == "kavya@student.edu"
    assert stored.semester == 2
    assert [s.user_id for s in container.user_service.students_by_class("class-3")] == [user.user_id]


@pytest.mark.parametrize(
    "overrides,message",
    [
        ({"name": ""}, "Name is required"),
        ({"email": "not-an-email"}, "Email is not a valid address"),
        ({"email": "priya@student.edu"}, "Email is already registered"),
        ({"password": "123"}, "Password must be at least 6 characters"),
        ({"class_id": None}, "Class is required"),
        ({"class_id": "class-404"}, "Class does not exist"),
        ({"semester": "four"}, "Semester must be a number"),
    ],
)
def test_create_account_validation(container, overrides, message):
    fields = {
        "name": "Kavya Iyer",
        "email": "kavya@student.edu",
        "password": "secret1",
        "role": Role.STUDENT,
        "class_id": "class-3",
        **overrides,
    }

    with pytest.raises(ValidationError, match=message):
        container.user_service.create_account(**fields)


def test_teacher_account_ignores_class(container):
    user = container.user_service.create_account(
        name="Prof. Meera Das",
        email="meera@university.edu",
        password="teacher123",
        role=Role.TEACHER,
        class_id="class-1",
    )

    assert user.class_id is None


def test_update_account(container):
    updated = container.user_service.update_account("student-1", name="Priya P.", class_id="class-2", phone="")

    assert updated.name == "Priya P."
    assert updated.class_id == "class-2"
    assert updated.phone is None
    assert updated.password == "student123"

    with pytest.raises(ValidationError):
        container.user_service.update_account("student-1", email="rahul@student.edu")
    with pytest.raises(ValidationError):
        container.user_service.update_account("nobody", name="X")


def test_delete_user_rules(container):
    service = container.user_service

    with pytest.raises(AuthorizationError):
        service.delete_user(current_role=Role.TEACHER, user_id="student-1")
    with pytest.raises(ValidationError):
        service.delete_user(current_role=Role.ADMIN, user_id="admin-1")

    service.delete_user(current_role=Role.ADMIN, user_id="student-6")
    assert container.users_repo.get_by_id("student-6") is None
    assert [u.user_id for u in service.list_users(role=Role.TEACHER)] == ["teacher-1", "teacher-2"]


def test_class_lifecycle(container):
    service = container.class_service
    cls = service.create_class(name="CS-8A", department="Computer Science", semester="8", section="A")

    assert cls.semester == 8
    assert any(c.class_id == cls.class_id for c in service.list_classes())

    service.delete_class(cls.class_id)
    assert container.classes_repo.get_by_id(cls.class_id) is None


def test_class_in_use_cannot_be_deleted(container):
    with pytest.raises(ValidationError, match="students"):
        container.class_service.delete_class("class-1")
    with pytest.raises(ValidationError):
        container.class_service.create_class(name="", department="CS")


def test_create_subject(container):
    subject = container.subject_service.create_subject(
        name="Operating Systems", code="cs304", class_id="class-3", teacher_id="teacher-2"
    )

    assert subject.code == "CS304"
    assert subject.semester == 2
    assert subject in container.subject_service.subjects_for_teacher("teacher-2")
    assert [s.subject_id for s in container.subject_service.subjects_for_class("class-3")] == [subject.subject_id]


@pytest.mark.parametrize(
    "class_id,teacher_id",
    [("class-404", "teacher-1"), ("class-1", "student-1"), ("class-1", "teacher-404")],
)
def test_create_subject_requires_class_and_teacher(container, class_id, teacher_id):
    with pytest.raises(ValidationError):
        container.subject_service.create_subject(name="OS", code="CS304", class_id=class_id, teacher_id=teacher_id)


def test_delete_subject(container):
    container.subject_service.delete_subject("sub-5")

    assert container.subjects_repo.get_by_id("sub-5") is None
    with pytest.raises(ValidationError):
        container.subject_service.delete_subject("sub-5")
