from __future__ import annotations

from datetime import datetime

import pytest

from src.school_attendance.school_attendance.container import build_container
from src.school_attendance.school_attendance.core.enums import Entity
from src.school_attendance.school_attendance.store.memory_record_store import InMemoryRecordStore


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 15, 8, 30, 0)


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def container(store):
    return build_container(store=store)


@pytest.fixture
def school(store):
    """One teacher with one class of two students, and a parent linked to the first student."""
    stamp = "2024-03-01T08:00:00"
    store.create(Entity.USERS, {"id": "t1", "email": "t1@school.edu", "name": "Teacher One", "role": "teacher",
                                "created_at": stamp, "updated_at": stamp})
    store.create(Entity.CLASSES, {"id": "c1", "name": "Grade 1A - Teacher One", "grade": "Grade 1",
                                  "teacher_id": "t1", "created_at": stamp})
    for sid, name in (("s1", "Alice"), ("s2", "Bob")):
        store.create(Entity.USERS, {"id": sid, "email": f"{sid}@student.edu", "name": name, "role": "student",
                                    "class_id": "c1", "created_at": stamp, "updated_at": stamp})
    store.create(Entity.USERS, {"id": "p1", "email": "p1@parent.com", "name": "Parent One", "role": "parent",
                                "created_at": stamp, "updated_at": stamp})
    store.create(Entity.PARENT_CHILD, {"id": "pc1", "parent_id": "p1", "child_id": "s1", "created_at": stamp})
    return store
