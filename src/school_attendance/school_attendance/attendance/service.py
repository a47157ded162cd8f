from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import iso_timestamp
from ..common.ids import new_id
from ..common.validators import require_choice, require_non_empty
from ..core.enums import AttendanceStatus, Entity
from ..core.exceptions import AttendanceWriteError, RecordStoreError
from ..store.repository import ATTENDANCE_KEY, RecordStore
from .model import AttendanceRecord, MarkDecision

logger = logging.getLogger(__name__)

STATUS_LABELS = {
    AttendanceStatus.PRESENT: "Present",
    AttendanceStatus.ABSENT: "Absent",
    AttendanceStatus.LATE: "Late",
}

STATUS_CSS = {
    AttendanceStatus.PRESENT: "bg-green-100 text-green-800",
    AttendanceStatus.ABSENT: "bg-red-100 text-red-800",
    AttendanceStatus.LATE: "bg-yellow-100 text-yellow-800",
}
UNMARKED_CSS = "bg-gray-100 text-gray-800"


def decide_mark(loaded: Iterable[AttendanceRecord], *, student_id: str, on: date) -> MarkDecision:
    """Find the record to correct for ``(student_id, on)``, if the loaded set has one."""
    for r in loaded:
        if r.student_id == student_id and r.date == on:
            return MarkDecision(existing=r)
    return MarkDecision(existing=None)


def status_ui(status: Optional[AttendanceStatus]) -> dict:
    if status is None:
        return {"status": None, "label": "Not marked", "css_class": UNMARKED_CSS}
    return {"status": status.value, "label": STATUS_LABELS[status], "css_class": STATUS_CSS[status]}


def to_ui(r: AttendanceRecord) -> dict:
    return {
        "id": r.id,
        "date": r.date.strftime("%Y-%m-%d"),
        "weekday": r.date.strftime("%A"),
        "marked_at": r.created_at,
        "notes": r.notes,
        **status_ui(r.status),
    }


class AttendanceService:
    """Use case: read and mark attendance through the Record Store."""

    def __init__(self, store: RecordStore):
        self._store = store

    def _list(self, **where) -> list[AttendanceRecord]:
        return [AttendanceRecord.from_row(row) for row in self._store.list(Entity.ATTENDANCE, where)]

    def for_class_and_date(self, class_id: str, on: date) -> list[AttendanceRecord]:
        return self._list(class_id=class_id, date=on.isoformat())

    def for_student_and_date(self, student_id: str, on: date) -> list[AttendanceRecord]:
        return self._list(student_id=student_id, date=on.isoformat())

    def for_student(self, student_id: str) -> list[AttendanceRecord]:
        """Every record of a student; date-range filtering happens in memory."""
        return self._list(student_id=student_id)

    def mark(
        self,
        *,
        student_id: str,
        class_id: str,
        on: date,
        status: AttendanceStatus | str,
        marked_by: str,
        loaded: Optional[Sequence[AttendanceRecord]] = None,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        """Set a student's status for a day, correcting the existing record if there is one.

        ``loaded`` is the attendance already on screen for this class and day; when omitted
        it is fetched. One write attempt is made; store failures surface as
        AttendanceWriteError.
        """
        student_id = require_non_empty(student_id, "Student")
        class_id = require_non_empty(class_id, "Class")
        status = require_choice(status, AttendanceStatus, "Status")

        try:
            if loaded is None:
                loaded = self.for_class_and_date(class_id, on)
            decision = decide_mark(loaded, student_id=student_id, on=on)

            if decision.is_update:
                existing = decision.existing
                fields: dict = {"status": status.value}
                if notes is not None:
                    fields["notes"] = notes
                self._store.update(Entity.ATTENDANCE, existing.id, fields)
                record = AttendanceRecord(
                    id=existing.id,
                    student_id=existing.student_id,
                    class_id=existing.class_id,
                    date=existing.date,
                    status=status,
                    marked_by=existing.marked_by,
                    created_at=existing.created_at,
                    notes=notes if notes is not None else existing.notes,
                )
            else:
                record = AttendanceRecord(
                    id=new_id("att"),
                    student_id=student_id,
                    class_id=class_id,
                    date=on,
                    status=status,
                    marked_by=marked_by,
                    created_at=iso_timestamp(now),
                    notes=notes,
                )
                self._store.upsert(Entity.ATTENDANCE, record.to_row(), key=ATTENDANCE_KEY)
                # a stale ``loaded`` set means the upsert may have hit an existing row; return what is stored
                stored = self.for_student_and_date(student_id, on)
                if stored:
                    record = stored[0]
        except RecordStoreError as e:
            raise AttendanceWriteError(f"Attendance write failed for {student_id} on {on.isoformat()}") from e

        logger.info(
            "Marked %s %s on %s (%s)",
            student_id,
            status.value,
            on.isoformat(),
            "updated" if decision.is_update else "created",
        )
        return record
