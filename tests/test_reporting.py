# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

from datetime import datetime, timezone

import pytest

from careshare.db import models
from careshare.db.models import ActivityType, ShiftStatus
from careshare.services.reporting import ShiftReport, WindowKind, aggregate, window_bounds

REFERENCE = datetime(2025, 10, 15, 12, 0, tzinfo=timezone.utc)


def _shift(shift_id, volunteer_id, start, hours, status=ShiftStatus.APPROVED):
    return models.ShiftRecord(
        id=shift_id,
        volunteer_id=volunteer_id,
        activity_type=ActivityType.SANDWICH_MAKING,
        status=status,
        start_time=start,
        hours=hours,
    )


def test_aggregate_empty_input():
    report = aggregate([], WindowKind.MONTHLY, REFERENCE)

    assert report == ShiftReport(total_hours=0, distinct_volunteers=0, session_count=0, rows=[])


def test_aggregate_current_month_scenario():
    shifts = [
        _shift(1, "A", datetime(2025, 10, 2, 9, 0, tzinfo=timezone.utc), 1.5),
        _shift(2, "B", datetime(2025, 10, 8, 9, 0, tzinfo=timezone.utc), 2.0),
        _shift(3, "A", datetime(2025, 10, 14, 9, 0, tzinfo=timezone.utc), 1.5),
    ]

    report = aggregate(shifts, WindowKind.MONTHLY, REFERENCE)

    assert report.total_hours == 5.0
    assert report.distinct_volunteers == 2
    assert report.session_count == 3


def test_monthly_excludes_previous_month_within_thirty_days():
    shifts = [
        _shift(1, 1, datetime(2025, 9, 28, 9, 0, tzinfo=timezone.utc), 3.0),
        _shift(2, 1, datetime(2025, 10, 1, 9, 0, tzinfo=timezone.utc), 1.0),
    ]

    report = aggregate(shifts, WindowKind.MONTHLY, REFERENCE)

    assert [row.shift_id for row in report.rows] == [2]
    assert report.total_hours == 1.0


def test_weekly_window_is_the_last_seven_days():
    shifts = [
        _shift(1, 1, datetime(2025, 10, 8, 12, 0, tzinfo=timezone.utc), 1.0),  # exactly 7 days back
        _shift(2, 1, datetime(2025, 10, 8, 11, 59, tzinfo=timezone.utc), 1.0),
        _shift(3, 2, datetime(2025, 10, 15, 11, 0, tzinfo=timezone.utc), 2.0),
        _shift(4, 2, datetime(2025, 10, 15, 13, 0, tzinfo=timezone.utc), 2.0),  # after the reference
    ]

    report = aggregate(shifts, WindowKind.WEEKLY, REFERENCE)

    assert sorted(row.shift_id for row in report.rows) == [1, 3]


def test_yearly_window_is_the_calendar_year():
    shifts = [
        _shift(1, 1, datetime(2025, 1, 1, 0, 0, tzinfo=timezone.utc), 1.0),
        _shift(2, 1, datetime(2024, 12, 31, 23, 0, tzinfo=timezone.utc), 1.0),
    ]

    report = aggregate(shifts, "yearly", REFERENCE)

    assert [row.shift_id for row in report.rows] == [1]


def test_only_approved_shifts_count_and_null_hours_are_zero():
    shifts = [
        _shift(1, 1, datetime(2025, 10, 3, tzinfo=timezone.utc), None),
        _shift(2, 2, datetime(2025, 10, 4, tzinfo=timezone.utc), 4.0, status=ShiftStatus.PENDING_REVIEW),
        _shift(3, 3, datetime(2025, 10, 5, tzinfo=timezone.utc), 4.0, status=ShiftStatus.REJECTED),
        _shift(4, 4, datetime(2025, 10, 6, tzinfo=timezone.utc), 0.75),
    ]

    report = aggregate(shifts, WindowKind.MONTHLY, REFERENCE)

    assert report.total_hours == 0.75
    assert report.session_count == 2
    assert report.distinct_volunteers == 2


def test_rows_are_most_recent_first_with_volunteer_names():
    volunteers = {
        1: models.Volunteer(id=1, first_name="Ada", last_name="Lovelace"),
        2: models.Volunteer(id=2, first_name="Alan", last_name="Turing"),
    }
    shifts = [
        _shift(1, 1, datetime(2025, 10, 2, tzinfo=timezone.utc), 1.0),
        _shift(2, 2, datetime(2025, 10, 9, tzinfo=timezone.utc), 1.0),
        _shift(3, 3, datetime(2025, 10, 5, tzinfo=timezone.utc), 1.0),
    ]

    report = aggregate(shifts, WindowKind.MONTHLY, REFERENCE, volunteers=volunteers)

    assert [row.shift_id for row in report.rows] == [2, 3, 1]
    assert [row.volunteer_name for row in report.rows] == ["Alan Turing", None, "Ada Lovelace"]
    assert report.rows[0].activity_type == "sandwich_making"


def test_naive_start_times_are_treated_as_utc():
    shifts = [_shift(1, 1, datetime(2025, 10, 10, 8, 0), 2.0)]

    report = aggregate(shifts, WindowKind.WEEKLY, REFERENCE)

    assert report.session_count == 1


def test_unknown_window_kind_is_rejected():
    with pytest.raises(ValueError):
        aggregate([], "daily", REFERENCE)


@pytest.mark.parametrize(
    "window_kind, reference, expected_start, expected_end",
    [
        (
            WindowKind.WEEKLY,
            datetime(2025, 10, 15, 12, 0, tzinfo=timezone.utc),
            datetime(2025, 10, 8, 12, 0, tzinfo=timezone.utc),
            datetime(2025, 10, 15, 12, 0, tzinfo=timezone.utc),
        ),
        (
            WindowKind.MONTHLY,
            datetime(2025, 12, 20, 8, 30, tzinfo=timezone.utc),
            datetime(2025, 12, 1, tzinfo=timezone.utc),
            datetime(2025, 12, 31, 23, 59, 59, 999999, tzinfo=timezone.utc),
        ),
        (
            WindowKind.YEARLY,
            datetime(2024, 2, 29, tzinfo=timezone.utc),
            datetime(2024, 1, 1, tzinfo=timezone.utc),
            datetime(2024, 12, 31, 23, 59, 59, 999999, tzinfo=timezone.utc),
        ),
    ],
)
def test_window_bounds(window_kind, reference, expected_start, expected_end):
    assert window_bounds(window_kind, reference) == (expected_start, expected_end)
