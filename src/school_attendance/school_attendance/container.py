from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.service import AttendanceService
from .dashboards.service import ParentDashboardService, StudentDashboardService, TeacherDashboardService
from .database.connection import DatabaseConnection, DBConfig
from .store.memory_record_store import InMemoryRecordStore
from .store.mysql_record_store import MySQLRecordStore
from .store.repository import RecordStore
from .users.service import AccountService

STORE_BACKENDS = ("mysql", "memory")


@dataclass(frozen=True)
class Container:
    store: RecordStore

    account_service: AccountService
    attendance_service: AttendanceService
    teacher_dashboard: TeacherDashboardService
    student_dashboard: StudentDashboardService
    parent_dashboard: ParentDashboardService


def build_store(backend: str, *, db_config: Optional[dict] = None) -> RecordStore:
    if backend == "memory":
        return InMemoryRecordStore()
    if backend == "mysql":
        if not db_config:
            raise ValueError("mysql record store needs DB_CONFIG")
        return MySQLRecordStore(DatabaseConnection.get_instance(DBConfig.from_dict(db_config)))
    raise ValueError(f"Unknown record store backend {backend!r} (expected one of {', '.join(STORE_BACKENDS)})")


def build_container(*, store: RecordStore) -> Container:
    attendance_service = AttendanceService(store)

    return Container(
        store=store,
        account_service=AccountService(store),
        attendance_service=attendance_service,
        teacher_dashboard=TeacherDashboardService(store, attendance_service),
        student_dashboard=StudentDashboardService(store, attendance_service),
        parent_dashboard=ParentDashboardService(store, attendance_service),
    )
