from datetime import date

import pytest

from src.school_attendance.school_attendance.core.enums import Entity
from src.school_attendance.school_attendance.core.exceptions import RecordStoreError
from src.school_attendance.school_attendance.store.memory_record_store import InMemoryRecordStore


def _attendance(rid, student_id="s1", day="2024-03-15", status="present"):
    return {"id": rid, "student_id": student_id, "class_id": "c1", "date": day, "status": status,
            "marked_by": "t1", "created_at": "2024-03-15T08:00:00"}


def test_list_filters_on_every_field_and_matches_dates_as_strings():
    store = InMemoryRecordStore({Entity.ATTENDANCE: [_attendance("a1"), _attendance("a2", student_id="s2")]})

    rows = store.list(Entity.ATTENDANCE, {"student_id": "s1", "date": date(2024, 3, 15)})

    assert [r["id"] for r in rows] == ["a1"]
    assert len(store.list("attendance")) == 2


def test_list_returns_copies():
    store = InMemoryRecordStore({Entity.ATTENDANCE: [_attendance("a1")]})

    store.list(Entity.ATTENDANCE)[0]["status"] = "absent"

    assert store.list(Entity.ATTENDANCE)[0]["status"] == "present"


def test_unknown_entity_or_field_is_a_store_error():
    store = InMemoryRecordStore()

    with pytest.raises(RecordStoreError):
        store.list("grades")
    with pytest.raises(RecordStoreError):
        store.list(Entity.USERS, {"password": "x"})


def test_create_rejects_duplicate_ids():
    store = InMemoryRecordStore({Entity.ATTENDANCE: [_attendance("a1")]})

    with pytest.raises(RecordStoreError):
        store.create(Entity.ATTENDANCE, _attendance("a1"))


def test_update_missing_record_fails():
    with pytest.raises(RecordStoreError):
        InMemoryRecordStore().update(Entity.ATTENDANCE, "nope", {"status": "late"})


def test_upsert_updates_on_key_and_keeps_identity():
    store = InMemoryRecordStore({Entity.ATTENDANCE: [_attendance("a1", status="absent")]})
    replacement = dict(_attendance("a2", status="late"), created_at="2024-03-15T10:00:00")

    store.upsert(Entity.ATTENDANCE, replacement, key=("student_id", "date"))

    rows = store.list(Entity.ATTENDANCE)
    assert len(rows) == 1
    assert (rows[0]["id"], rows[0]["status"], rows[0]["created_at"]) == ("a1", "late", "2024-03-15T08:00:00")


def test_upsert_inserts_when_key_is_new():
    store = InMemoryRecordStore({Entity.ATTENDANCE: [_attendance("a1")]})

    store.upsert(Entity.ATTENDANCE, _attendance("a2", day="2024-03-16"), key=("student_id", "date"))

    assert store.count(Entity.ATTENDANCE) == 2
