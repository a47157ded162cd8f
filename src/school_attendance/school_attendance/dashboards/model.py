from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Optional

from ..attendance.model import AttendanceRecord, AttendanceStats, CalendarMarkers
from ..attendance.service import status_ui, to_ui
from ..core.enums import AttendanceStatus
from ..users.model import SchoolClass, User


def _user_ui(u: User) -> dict:
    return {"id": u.id, "name": u.name, "email": u.email, "role": u.role.value, "class_id": u.class_id}


def _class_ui(c: SchoolClass) -> dict:
    return {"id": c.id, "name": c.name, "grade": c.grade}


@dataclass(frozen=True)
class RosterEntry:
    student: User
    record: Optional[AttendanceRecord] = None

    @property
    def status(self) -> Optional[AttendanceStatus]:
        return self.record.status if self.record else None


@dataclass(frozen=True)
class DailySummary:
    total: int = 0
    present: int = 0
    absent: int = 0
    late: int = 0
    unmarked: int = 0


@dataclass(frozen=True)
class TeacherDashboard:
    teacher: User
    on: date
    classes: list[SchoolClass]
    selected_class: Optional[SchoolClass]
    roster: list[RosterEntry]
    attendance: list[AttendanceRecord]
    summary: DailySummary

    def as_dict(self) -> dict:
        return {
            "teacher": _user_ui(self.teacher),
            "date": self.on.isoformat(),
            "classes": [_class_ui(c) for c in self.classes],
            "selected_class": _class_ui(self.selected_class) if self.selected_class else None,
            "roster": [{"student": _user_ui(e.student), **status_ui(e.status)} for e in self.roster],
            "summary": asdict(self.summary),
        }


@dataclass(frozen=True)
class MonthlyAttendance:
    """One student's attendance for the month around a selected day."""

    student: User
    on: date
    day_records: list[AttendanceRecord]
    month_records: list[AttendanceRecord]
    stats: AttendanceStats
    markers: CalendarMarkers
    recent: list[AttendanceRecord]

    def as_dict(self) -> dict:
        return {
            "student": _user_ui(self.student),
            "date": self.on.isoformat(),
            "month": self.on.strftime("%B %Y"),
            "day": [to_ui(r) for r in self.day_records],
            "stats": self.stats.as_dict(),
            "calendar": self.markers.as_dict(),
            "recent": [to_ui(r) for r in self.recent],
        }


@dataclass(frozen=True)
class ParentDashboard:
    parent: User
    on: date
    children: list[User]
    selected_child: Optional[User]
    child_attendance: Optional[MonthlyAttendance]

    def as_dict(self) -> dict:
        return {
            "parent": _user_ui(self.parent),
            "date": self.on.isoformat(),
            "children": [_user_ui(c) for c in self.children],
            "selected_child": _user_ui(self.selected_child) if self.selected_child else None,
            "attendance": self.child_attendance.as_dict() if self.child_attendance else None,
        }
