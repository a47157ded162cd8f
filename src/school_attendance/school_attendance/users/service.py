from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import iso_timestamp
from ..common.ids import new_id
from ..common.validators import require_choice, require_email, require_non_empty
from ..core.constants import DEMO_ACCOUNTS, DEMO_STUDENT_CLASS_ID, DEMO_TEACHER_CLASS_PREFIX, DEMO_TEACHER_GRADE
from ..core.enums import Entity, Role
from ..store.repository import RecordStore
from .model import ParentChild, SchoolClass, User

logger = logging.getLogger(__name__)


class AccountService:
    """Use case: resolve the account behind a role + email login.

    Demo-grade: the first user with the email wins, new parents are linked to the
    first student found, and nothing is rolled back if a follow-up write fails.
    """

    def __init__(self, store: RecordStore):
        self._store = store

    def find_by_email(self, email: str) -> Optional[User]:
        rows = self._store.list(Entity.USERS, {"email": email})
        return User.from_row(rows[0]) if rows else None

    def resolve(
        self,
        role: Role | str,
        name: str,
        email: str,
        *,
        class_id: Optional[str] = None,
        grade: Optional[str] = None,
        class_name: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> User:
        role = require_choice(role, Role, "Role")
        email = require_email(email)

        existing = self.find_by_email(email)
        if existing:
            return existing

        name = require_non_empty(name, "Name")
        stamp = iso_timestamp(now)
        user = User(
            id=new_id(role.value),
            email=email,
            name=name,
            role=role,
            class_id=(class_id or None) if role == Role.STUDENT else None,
            created_at=stamp,
            updated_at=stamp,
        )
        self._store.create(Entity.USERS, user.to_row())
        logger.info("Created %s account %s for %s", role.value, user.id, email)

        if role == Role.TEACHER and grade:
            self._create_class(user, grade=grade, name=class_name or f"{grade} - {name}", stamp=stamp)
        elif role == Role.PARENT:
            self._link_first_student(user, stamp=stamp)

        return user

    def quick_login(self, role: Role | str, *, now: Optional[datetime] = None) -> User:
        """Log in as the fixed demo account of a role, creating it on first use."""
        role = require_choice(role, Role, "Role")
        name, email = DEMO_ACCOUNTS[role.value]
        return self.resolve(
            role,
            name,
            email,
            class_id=DEMO_STUDENT_CLASS_ID,
            grade=DEMO_TEACHER_GRADE,
            class_name=f"{DEMO_TEACHER_CLASS_PREFIX} - {name}",
            now=now,
        )

    def _create_class(self, teacher: User, *, grade: str, name: str, stamp: str) -> SchoolClass:
        school_class = SchoolClass(
            id=new_id("class"),
            name=name,
            grade=grade,
            teacher_id=teacher.id,
            created_at=stamp,
        )
        self._store.create(Entity.CLASSES, school_class.to_row())
        return school_class

    def _link_first_student(self, parent: User, *, stamp: str) -> Optional[ParentChild]:
        # TODO: replace with an explicit child selection step once parents can search students
        students = self._store.list(Entity.USERS, {"role": Role.STUDENT.value})
        if not students:
            logger.info("No student to link parent %s to", parent.id)
            return None

        link = ParentChild(
            id=new_id("pc"),
            parent_id=parent.id,
            child_id=str(students[0]["id"]),
            created_at=stamp,
        )
        self._store.create(Entity.PARENT_CHILD, link.to_row())
        return link
