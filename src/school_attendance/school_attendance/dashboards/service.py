from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..attendance.service import AttendanceService
from ..attendance.stats import aggregate, build_markers, in_month, recent
from ..core.enums import AttendanceStatus, Entity, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..store.repository import RecordStore
from ..users.model import ParentChild, SchoolClass, User
from .model import DailySummary, MonthlyAttendance, ParentDashboard, RosterEntry, TeacherDashboard


def _require_role(user: Optional[User], role: Role) -> User:
    if user is None:
        raise ValidationError("User does not exist")
    if user.role != role:
        raise AuthorizationError(f"{role.value.capitalize()} dashboard is not available for {user.role.value}s")
    return user


class _DashboardBase:
    def __init__(self, store: RecordStore, attendance: AttendanceService):
        self._store = store
        self._attendance = attendance

    def _user(self, user_id: str) -> Optional[User]:
        rows = self._store.list(Entity.USERS, {"id": user_id})
        return User.from_row(rows[0]) if rows else None

    def _monthly(self, student: User, on: date) -> MonthlyAttendance:
        day_records = self._attendance.for_student_and_date(student.id, on)
        month_records = in_month(self._attendance.for_student(student.id), on)
        return MonthlyAttendance(
            student=student,
            on=on,
            day_records=day_records,
            month_records=month_records,
            stats=aggregate(month_records),
            markers=build_markers(month_records),
            recent=recent(month_records),
        )


class TeacherDashboardService(_DashboardBase):
    """Classes of a teacher, the selected class roster and its attendance for a day."""

    def _classes(self, teacher_id: str) -> list[SchoolClass]:
        return [SchoolClass.from_row(r) for r in self._store.list(Entity.CLASSES, {"teacher_id": teacher_id})]

    def _select_class(self, classes: list[SchoolClass], class_id: Optional[str]) -> Optional[SchoolClass]:
        if not classes:
            return None
        if not class_id:
            return classes[0]
        for c in classes:
            if c.id == class_id:
                return c
        raise ValidationError(f"Class {class_id} does not belong to this teacher")

    def load(self, teacher_id: str, *, on: date, class_id: Optional[str] = None) -> TeacherDashboard:
        teacher = _require_role(self._user(teacher_id), Role.TEACHER)
        classes = self._classes(teacher.id)
        selected = self._select_class(classes, class_id)

        students: list[User] = []
        attendance: list[AttendanceRecord] = []
        if selected:
            students = [
                User.from_row(r)
                for r in self._store.list(Entity.USERS, {"role": Role.STUDENT.value, "class_id": selected.id})
            ]
            attendance = self._attendance.for_class_and_date(selected.id, on)

        by_student: dict[str, AttendanceRecord] = {}
        for r in attendance:
            # first record per student, the one decide_mark corrects
            by_student.setdefault(r.student_id, r)
        roster = [RosterEntry(student=s, record=by_student.get(s.id)) for s in students]
        counts = Counter(r.status for r in by_student.values())

        return TeacherDashboard(
            teacher=teacher,
            on=on,
            classes=classes,
            selected_class=selected,
            roster=roster,
            attendance=attendance,
            summary=DailySummary(
                total=len(students),
                present=counts[AttendanceStatus.PRESENT],
                absent=counts[AttendanceStatus.ABSENT],
                late=counts[AttendanceStatus.LATE],
                unmarked=sum(1 for e in roster if e.record is None),
            ),
        )

    def mark(
        self,
        teacher_id: str,
        *,
        student_id: str,
        status: AttendanceStatus | str,
        on: date,
        class_id: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> TeacherDashboard:
        """Mark one student and return the refreshed dashboard."""
        view = self.load(teacher_id, on=on, class_id=class_id)
        if view.selected_class is None:
            raise ValidationError("Teacher has no class to mark attendance for")

        self._attendance.mark(
            student_id=student_id,
            class_id=view.selected_class.id,
            on=on,
            status=status,
            marked_by=view.teacher.id,
            loaded=view.attendance,
            notes=notes,
        )
        return self.load(teacher_id, on=on, class_id=view.selected_class.id)


class StudentDashboardService(_DashboardBase):
    def load(self, student_id: str, *, on: date) -> MonthlyAttendance:
        student = _require_role(self._user(student_id), Role.STUDENT)
        return self._monthly(student, on)


class ParentDashboardService(_DashboardBase):
    """Children linked to a parent and the selected child's month."""

    def children(self, parent_id: str) -> list[User]:
        links = [ParentChild.from_row(r) for r in self._store.list(Entity.PARENT_CHILD, {"parent_id": parent_id})]
        if not links:
            return []
        child_ids = {link.child_id for link in links}
        students = self._store.list(Entity.USERS, {"role": Role.STUDENT.value})
        return [User.from_row(r) for r in students if r["id"] in child_ids]

    def load(self, parent_id: str, *, on: date, child_id: Optional[str] = None) -> ParentDashboard:
        parent = _require_role(self._user(parent_id), Role.PARENT)
        children = self.children(parent.id)

        selected: Optional[User] = None
        if children:
            selected = children[0]
            if child_id:
                selected = next((c for c in children if c.id == child_id), None)
                if selected is None:
                    raise AuthorizationError("That student is not linked to this parent")

        return ParentDashboard(
            parent=parent,
            on=on,
            children=children,
            selected_child=selected,
            child_attendance=self._monthly(selected, on) if selected else None,
        )
