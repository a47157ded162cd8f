from __future__ import annotations

import pytest

from src.school_attendance.school_attendance.core.enums import Entity
from src.school_attendance.school_attendance.core.exceptions import RecordStoreError
from src.school_attendance.school_attendance.main import create_app
from src.school_attendance.school_attendance.store.memory_record_store import InMemoryRecordStore


@pytest.fixture
def make_client(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")

    def _make(store):
        return create_app(store=store).test_client()

    return _make


@pytest.fixture
def client(make_client, school):
    return make_client(school)


def _login(client, email, role):
    resp = client.post("/login", json={"role": role, "name": "ignored", "email": email})
    assert resp.status_code == 200
    return resp.get_json()


def test_index_lists_roles_and_demo_accounts(client):
    data = client.get("/").get_json()

    assert [r["id"] for r in data["roles"]] == ["student", "teacher", "parent"]
    assert {a["email"] for a in data["quick_login"]} >= {"john.smith@school.edu"}
    assert data["current_user"] is None


def test_login_existing_user_points_to_role_dashboard(client):
    data = _login(client, "t1@school.edu", "teacher")

    assert data["user"]["id"] == "t1"
    assert data["dashboard"] == "/teacher/dashboard"


def test_login_with_bad_role_is_400(client):
    resp = client.post("/login", json={"role": "janitor", "name": "X", "email": "x@school.edu"})

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_quick_login_creates_demo_student(make_client):
    store = InMemoryRecordStore()
    client = make_client(store)

    resp = client.post("/login/quick/student")

    assert resp.status_code == 200
    assert store.list(Entity.USERS, {"email": "alice.brown@student.edu"})


def test_dashboard_requires_login(client):
    assert client.get("/student/dashboard").status_code == 401
    assert client.get("/dashboard").status_code == 401


def test_dashboard_redirects_to_session_role(client):
    _login(client, "s1@student.edu", "student")

    resp = client.get("/dashboard?date=2024-03-15")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/student/dashboard?date=2024-03-15")


def test_other_roles_dashboard_is_forbidden(client):
    _login(client, "s1@student.edu", "student")

    assert client.get("/teacher/dashboard").status_code == 403
    assert client.post("/teacher/attendance", json={"student_id": "s1", "status": "present"}).status_code == 403


def test_teacher_marks_and_student_sees_stats(client):
    _login(client, "t1@school.edu", "teacher")

    resp = client.post("/teacher/attendance", json={"student_id": "s1", "status": "late", "date": "2024-03-15"})
    assert resp.status_code == 200
    summary = resp.get_json()["dashboard"]["summary"]
    assert (summary["total"], summary["late"], summary["unmarked"]) == (2, 1, 1)

    client.post("/logout")
    _login(client, "s1@student.edu", "student")
    data = client.get("/student/dashboard?date=2024-03-20").get_json()

    assert data["stats"] == {"total": 1, "present": 0, "absent": 0, "late": 1, "percentage": 0}
    assert data["calendar"]["late"] == ["2024-03-15"]


def test_parent_dashboard_lists_children(client):
    _login(client, "p1@parent.com", "parent")

    data = client.get("/parent/dashboard?date=2024-03-15").get_json()

    assert [c["id"] for c in data["children"]] == ["s1"]
    assert data["attendance"]["stats"]["total"] == 0


def test_bad_date_is_400(client):
    _login(client, "s1@student.edu", "student")

    assert client.get("/student/dashboard?date=15/03/2024").status_code == 400


def test_store_failure_while_marking_is_500_and_changes_nothing(make_client, school):
    class BrokenWrites(InMemoryRecordStore):
        def upsert(self, entity, record, *, key):
            raise RecordStoreError("backend unavailable")

    store = BrokenWrites({entity: school.list(entity) for entity in Entity})
    client = make_client(store)
    _login(client, "t1@school.edu", "teacher")

    resp = client.post("/teacher/attendance", json={"student_id": "s1", "status": "present", "date": "2024-03-15"})

    assert resp.status_code == 500
    assert store.count(Entity.ATTENDANCE) == 0


def test_numeric_json_values_get_json_400(client):
    _login(client, "t1@school.edu", "teacher")

    resp = client.post("/teacher/attendance", json={"student_id": "s1", "status": "present", "date": 20240315})

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_numeric_student_id_is_read_as_text(client, school):
    _login(client, "t1@school.edu", "teacher")

    resp = client.post("/teacher/attendance", json={"student_id": 42, "status": "late", "date": "2024-03-15"})

    assert resp.status_code == 200
    assert school.list(Entity.ATTENDANCE, {"student_id": "42"})[0]["status"] == "late"


def test_nested_json_value_is_400(client):
    resp = client.post("/login", json={"role": ["teacher"], "name": "X", "email": "x@school.edu"})

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False
