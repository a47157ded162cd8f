from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import Entity
from ..core.exceptions import RecordStoreError

# Columns each entity carries; filters and writes are checked against these.
ENTITY_FIELDS: dict[Entity, tuple[str, ...]] = {
    Entity.USERS: ("id", "email", "name", "role", "class_id", "parent_id", "created_at", "updated_at"),
    Entity.CLASSES: ("id", "name", "grade", "teacher_id", "created_at"),
    Entity.ATTENDANCE: ("id", "student_id", "class_id", "date", "status", "marked_by", "notes", "created_at"),
    Entity.PARENT_CHILD: ("id", "parent_id", "child_id", "created_at"),
}

# Attendance is unique per student and day.
ATTENDANCE_KEY = ("student_id", "date")


def as_entity(entity: Entity | str) -> Entity:
    try:
        return Entity(entity)
    except ValueError:
        raise RecordStoreError(f"Unknown entity: {entity!r}") from None


def check_fields(entity: Entity, names: Sequence[str]) -> None:
    allowed = ENTITY_FIELDS[entity]
    unknown = [n for n in names if n not in allowed]
    if unknown:
        raise RecordStoreError(f"Unknown field(s) for {entity.value}: {', '.join(unknown)}")


class RecordStore(Protocol):
    """Document-style store interface: list/create/update by entity name.

    Services depend on this interface only; the concrete backend (MySQL, in-memory)
    is chosen in the container.
    """

    def list(self, entity: Entity, where: Optional[Mapping[str, Any]] = None) -> Sequence[dict]:
        """Records whose fields equal every value in ``where``."""

        raise NotImplementedError

    def create(self, entity: Entity, record: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def update(self, entity: Entity, record_id: str, fields: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def upsert(self, entity: Entity, record: Mapping[str, Any], *, key: Sequence[str]) -> None:
        """Insert ``record`` or, when a record with the same ``key`` values exists, update it.

        The existing record keeps its ``id`` and ``created_at``.
        """

        raise NotImplementedError
