from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles a user can pick on the login screen."""

    STUDENT = "student"
    TEACHER = "teacher"
    PARENT = "parent"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


class Entity(str, Enum):
    """Named collections exposed by the Record Store."""

    USERS = "users"
    CLASSES = "classes"
    ATTENDANCE = "attendance"
    PARENT_CHILD = "parentChild"
