"""Monthly attendance statistics and calendar markers.

Pure functions over records that were already fetched from the store.
"""
from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Iterable, Sequence

from ..common.datetime_utils import month_bounds
from ..core.constants import RECENT_ATTENDANCE_LIMIT
from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceStats, CalendarMarkers


def rate_percent(part: int, total: int) -> int:
    """``round(part / total * 100)`` with halves rounded up; 0 when total is 0."""
    if total <= 0:
        return 0
    return (part * 200 + total) // (2 * total)


def in_month(records: Iterable[AttendanceRecord], reference: date) -> list[AttendanceRecord]:
    start, end = month_bounds(reference)
    return [r for r in records if start <= r.date <= end]


def aggregate(records: Iterable[AttendanceRecord]) -> AttendanceStats:
    """Count records by status.

    Callers pass one student's records for one month (see ``in_month``).
    """
    counts = Counter(r.status for r in records)
    present = counts[AttendanceStatus.PRESENT]
    absent = counts[AttendanceStatus.ABSENT]
    late = counts[AttendanceStatus.LATE]
    total = present + absent + late
    return AttendanceStats(
        total=total,
        present=present,
        absent=absent,
        late=late,
        percentage=rate_percent(present, total),
    )


def build_markers(records: Iterable[AttendanceRecord]) -> CalendarMarkers:
    # last record for a date wins, so a date never lands in two buckets
    by_date: dict[date, AttendanceStatus] = {}
    for r in records:
        by_date[r.date] = r.status

    buckets: dict[AttendanceStatus, set[date]] = {s: set() for s in AttendanceStatus}
    for day, status in by_date.items():
        buckets[status].add(day)

    return CalendarMarkers(
        present=frozenset(buckets[AttendanceStatus.PRESENT]),
        absent=frozenset(buckets[AttendanceStatus.ABSENT]),
        late=frozenset(buckets[AttendanceStatus.LATE]),
    )


def recent(records: Sequence[AttendanceRecord], limit: int = RECENT_ATTENDANCE_LIMIT) -> list[AttendanceRecord]:
    """Newest records first."""
    return sorted(records, key=lambda r: r.date, reverse=True)[:limit]
