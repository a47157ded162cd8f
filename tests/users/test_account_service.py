from __future__ import annotations

import pytest

from src.school_attendance.school_attendance.core.enums import Entity, Role
from src.school_attendance.school_attendance.core.exceptions import RecordStoreError, ValidationError
from src.school_attendance.school_attendance.store.memory_record_store import InMemoryRecordStore
from src.school_attendance.school_attendance.users.service import AccountService


def test_existing_email_returns_first_match_without_writes(school):
    svc = AccountService(school)
    users_before = school.count(Entity.USERS)

    user = svc.resolve("parent", "Someone Else", "s1@student.edu")

    assert user.id == "s1"
    assert user.role == Role.STUDENT
    assert school.count(Entity.USERS) == users_before


def test_new_student_gets_class_and_role_prefixed_id(store, fixed_now):
    user = AccountService(store).resolve("student", "Alice", "alice@student.edu", class_id="class_3", now=fixed_now)

    assert user.id.startswith("student_")
    assert user.class_id == "class_3"
    assert user.created_at == user.updated_at == "2024-03-15T08:30:00"
    assert store.list(Entity.USERS, {"email": "alice@student.edu"})[0]["class_id"] == "class_3"


def test_new_teacher_with_grade_owns_a_class(store):
    teacher = AccountService(store).resolve("teacher", "Jane Doe", "jane@school.edu", grade="Grade 3", class_id="ignored")

    assert teacher.class_id is None
    classes = store.list(Entity.CLASSES, {"teacher_id": teacher.id})
    assert len(classes) == 1
    assert classes[0]["name"] == "Grade 3 - Jane Doe"
    assert classes[0]["grade"] == "Grade 3"
    assert classes[0]["id"].startswith("class_")


def test_new_teacher_without_grade_has_no_class(store):
    AccountService(store).resolve("teacher", "Jane Doe", "jane@school.edu")

    assert store.count(Entity.CLASSES) == 0


def test_new_parent_is_linked_to_first_student(school):
    parent = AccountService(school).resolve("parent", "Carol", "carol@parent.com")

    links = school.list(Entity.PARENT_CHILD, {"parent_id": parent.id})
    assert [link["child_id"] for link in links] == ["s1"]
    assert links[0]["id"].startswith("pc_")


def test_new_parent_without_students_has_no_link(store):
    AccountService(store).resolve("parent", "Carol", "carol@parent.com")

    assert store.count(Entity.PARENT_CHILD) == 0


def test_quick_login_teacher_creates_demo_class_once(store):
    svc = AccountService(store)

    first = svc.quick_login("teacher")
    again = svc.quick_login(Role.TEACHER)

    assert first.id == again.id
    assert first.email == "john.smith@school.edu"
    classes = store.list(Entity.CLASSES)
    assert len(classes) == 1
    assert classes[0]["name"] == "Grade 1A - John Smith"
    assert classes[0]["grade"] == "Grade 1"


def test_quick_login_student_joins_class_1(store):
    student = AccountService(store).quick_login("student")

    assert student.name == "Alice Brown"
    assert student.class_id == "class_1"


@pytest.mark.parametrize("role", ["admin", "", None])
def test_unknown_role_is_rejected(store, role):
    with pytest.raises(ValidationError):
        AccountService(store).resolve(role, "X", "x@school.edu")


def test_invalid_email_is_rejected(store):
    with pytest.raises(ValidationError):
        AccountService(store).resolve("student", "X", "not-an-email")


def test_failed_follow_up_write_keeps_created_user():
    class NoClasses(InMemoryRecordStore):
        def create(self, entity, record):
            if entity == Entity.CLASSES:
                raise RecordStoreError("classes unavailable")
            super().create(entity, record)

    store = NoClasses()

    with pytest.raises(RecordStoreError):
        AccountService(store).resolve("teacher", "Jane", "jane@school.edu", grade="Grade 2")

    assert store.list(Entity.USERS, {"email": "jane@school.edu"})
