from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import as_date
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's status for one class on one day."""

    id: str
    student_id: str
    class_id: str
    date: date
    status: AttendanceStatus
    marked_by: str
    created_at: str
    notes: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "AttendanceRecord":
        return cls(
            id=str(row["id"]),
            student_id=row["student_id"],
            class_id=row["class_id"],
            date=as_date(row["date"]),
            status=AttendanceStatus(row["status"]),
            marked_by=row["marked_by"],
            created_at=str(row["created_at"]),
            notes=row.get("notes"),
        )

    def to_row(self) -> dict:
        return {
            "id": self.id,
            "student_id": self.student_id,
            "class_id": self.class_id,
            "date": self.date.isoformat(),
            "status": self.status.value,
            "marked_by": self.marked_by,
            "notes": self.notes,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class AttendanceStats:
    total: int = 0
    present: int = 0
    absent: int = 0
    late: int = 0
    percentage: int = 0

    def as_dict(self) -> dict:
        return {
            "total": self.total,
            "present": self.present,
            "absent": self.absent,
            "late": self.late,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class CalendarMarkers:
    """Dates to highlight on a month calendar, bucketed by status."""

    present: frozenset[date] = field(default_factory=frozenset)
    absent: frozenset[date] = field(default_factory=frozenset)
    late: frozenset[date] = field(default_factory=frozenset)

    def for_status(self, status: AttendanceStatus) -> frozenset[date]:
        return getattr(self, status.value)

    def as_dict(self) -> dict:
        return {s.value: sorted(d.isoformat() for d in self.for_status(s)) for s in AttendanceStatus}


@dataclass(frozen=True)
class MarkDecision:
    """Outcome of the update-or-create check for one mark request.

    ``existing`` is None when a new record has to be created.
    """

    existing: Optional[AttendanceRecord]

    @property
    def is_update(self) -> bool:
        return self.existing is not None
