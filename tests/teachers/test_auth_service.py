from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from sunday_attendance.core.exceptions import AuthenticationError, ValidationError
from sunday_attendance.teachers.model import Teacher
from sunday_attendance.teachers.service import AuthService


class InMemoryTeachers:
    def __init__(self):
        self.by_email = {}

    def get_by_email(self, email):
        return self.by_email.get(email)

    def create(self, *, email, password_hash):
        teacher_id = len(self.by_email) + 1
        self.by_email[email] = Teacher(teacher_id=teacher_id, email=email, password_hash=password_hash)
        return teacher_id


def test_sign_up_then_sign_in():
    repo = InMemoryTeachers()
    svc = AuthService(repo)

    created = svc.sign_up(" Teacher@Church.org ", "secret1")
    signed_in = svc.sign_in("teacher@church.org", "secret1")

    assert created.email == "teacher@church.org"
    assert signed_in.teacher_id == created.teacher_id
    assert repo.by_email["teacher@church.org"].password_hash != "secret1"


@pytest.mark.parametrize("email,password", [("", "secret1"), ("not-an-email", "secret1"), ("a@b.c", "short")])
def test_sign_up_validates_input(email, password):
    with pytest.raises(ValidationError):
        AuthService(InMemoryTeachers()).sign_up(email, password)


def test_sign_up_rejects_duplicate_email():
    svc = AuthService(InMemoryTeachers())
    svc.sign_up("a@b.c", "secret1")

    with pytest.raises(ValidationError):
        svc.sign_up("A@B.C", "secret2")


def test_wrong_password_and_unknown_email_fail_the_same_way():
    repo = InMemoryTeachers()
    repo.by_email["a@b.c"] = Teacher(teacher_id=1, email="a@b.c", password_hash=generate_password_hash("secret1"))
    svc = AuthService(repo)

    with pytest.raises(AuthenticationError, match="Invalid login credentials"):
        svc.sign_in("a@b.c", "wrong")
    with pytest.raises(AuthenticationError, match="Invalid login credentials"):
        svc.sign_in("nobody@b.c", "secret1")


def test_placeholder_hash_never_matches():
    repo = InMemoryTeachers()
    repo.by_email["a@b.c"] = Teacher(teacher_id=1, email="a@b.c", password_hash="not-a-hash")

    with pytest.raises(AuthenticationError):
        AuthService(repo).sign_in("a@b.c", "not-a-hash")
