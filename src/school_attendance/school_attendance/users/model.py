from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a student, teacher or parent.

    Plain data object; the Record Store row is a dict with the same field names.
    """

    id: str
    email: str
    name: str
    role: Role
    created_at: str
    updated_at: str
    class_id: Optional[str] = None
    parent_id: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "User":
        return cls(
            id=str(row["id"]),
            email=row["email"],
            name=row["name"],
            role=Role(row["role"]),
            created_at=str(row["created_at"]),
            updated_at=str(row["updated_at"]),
            class_id=row.get("class_id"),
            parent_id=row.get("parent_id"),
        )

    def to_row(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role.value,
            "class_id": self.class_id,
            "parent_id": self.parent_id,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass(frozen=True)
class SchoolClass:
    id: str
    name: str
    grade: str
    created_at: str
    teacher_id: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "SchoolClass":
        return cls(
            id=str(row["id"]),
            name=row["name"],
            grade=row["grade"],
            created_at=str(row["created_at"]),
            teacher_id=row.get("teacher_id"),
        )

    def to_row(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "grade": self.grade,
            "teacher_id": self.teacher_id,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class ParentChild:
    """Link between a parent user and a student user."""

    id: str
    parent_id: str
    child_id: str
    created_at: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ParentChild":
        return cls(
            id=str(row["id"]),
            parent_id=row["parent_id"],
            child_id=row["child_id"],
            created_at=str(row["created_at"]),
        )

    def to_row(self) -> dict:
        return {
            "id": self.id,
            "parent_id": self.parent_id,
            "child_id": self.child_id,
            "created_at": self.created_at,
        }
