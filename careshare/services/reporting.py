"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
"""

import enum
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Mapping, Optional, Tuple

from careshare.db.models import ActivityType, ShiftRecord, ShiftStatus


class WindowKind(str, enum.Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


@dataclass
class ReportRow:
    shift_id: int
    volunteer_id: int
    volunteer_name: Optional[str]
    activity_type: str
    start_time: datetime
    hours: float


@dataclass
class ShiftReport:
    total_hours: float = 0.0
    distinct_volunteers: int = 0
    session_count: int = 0
    rows: List[ReportRow] = field(default_factory=list)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def window_bounds(window_kind: WindowKind, reference_date: datetime) -> Tuple[datetime, datetime]:
    """
    Inclusive UTC ``(start, end)`` of the window around ``reference_date``:
    the trailing seven days for weekly, otherwise the calendar month or year
    that contains it.
    """
    window_kind = WindowKind(window_kind)
    reference_date = _as_utc(reference_date)
    if window_kind == WindowKind.WEEKLY:
        return reference_date - timedelta(days=7), reference_date

    if window_kind == WindowKind.MONTHLY:
        start = reference_date.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        if start.month == 12:
            next_start = start.replace(year=start.year + 1, month=1)
        else:
            next_start = start.replace(month=start.month + 1)
    else:
        start = reference_date.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0)
        next_start = start.replace(year=start.year + 1)
    return start, next_start - timedelta(microseconds=1)


def in_window(start_time: datetime, window_kind: WindowKind, reference_date: datetime) -> bool:
    start, end = window_bounds(window_kind, reference_date)
    return start <= _as_utc(start_time) <= end


def aggregate(
    shifts: Iterable[ShiftRecord],
    window_kind: WindowKind,
    reference_date: datetime,
    volunteers: Optional[Mapping[int, object]] = None,
) -> ShiftReport:
    """
    Folds approved shifts that started inside the window into totals.
    Missing hours count as zero. Rows are most recent first and carry the
    volunteer's name when ``volunteers`` maps ids to volunteer records.
    """
    window_kind = WindowKind(window_kind)
    volunteers = volunteers or {}

    selected = [
        shift
        for shift in shifts
        if shift.status == ShiftStatus.APPROVED and in_window(shift.start_time, window_kind, reference_date)
    ]
    selected.sort(key=lambda shift: _as_utc(shift.start_time), reverse=True)

    rows = []
    for shift in selected:
        volunteer = volunteers.get(shift.volunteer_id)
        rows.append(
            ReportRow(
                shift_id=shift.id,
                volunteer_id=shift.volunteer_id,
                volunteer_name=volunteer.full_name if volunteer is not None else None,
                activity_type=ActivityType(shift.activity_type).value,
                start_time=shift.start_time,
                hours=shift.hours or 0.0,
            )
        )

    return ShiftReport(
        total_hours=round(sum(row.hours for row in rows), 2),
        distinct_volunteers=len({shift.volunteer_id for shift in selected}),
        session_count=len(selected),
        rows=rows,
    )
