"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
"""

from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional

from careshare.core.exceptions import (
    DuplicateActiveShiftError,
    InvalidTransitionError,
    PermissionDeniedError,
    ShiftNotFoundError,
    StoreConflictError,
)
from careshare.core.permissions import can_review_shifts
from careshare.db.models import ActivityType, ShiftRecord, ShiftStatus, Volunteer
from careshare.db.store import DocumentStore
from careshare.logging_config import get_logger

logger = get_logger(__name__)

REVIEW_DECISIONS = frozenset({ShiftStatus.APPROVED, ShiftStatus.REJECTED})
HISTORY_LIMIT = 20


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without tzinfo; they are stored as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def compute_hours(start_time: datetime, end_time: datetime) -> float:
    """
    Elapsed time between two timestamps in hours, rounded to two decimals.
    A clock that runs backwards yields 0.0 rather than negative hours.
    """
    elapsed = (_as_utc(end_time) - _as_utc(start_time)).total_seconds()
    return round(max(elapsed, 0.0) / 3600, 2)


class ShiftTracker:
    """
    Records check-in and check-out events and moves shift records through
    ``active -> pending_review -> approved | rejected``.
    """

    def __init__(self, store: DocumentStore, now_fn: Callable[[], datetime] = utcnow):
        self.store = store
        self.now_fn = now_fn

    def get_active_shift(self, volunteer_id: int) -> Optional[ShiftRecord]:
        active = self.store.query(
            "shifts",
            filters={"volunteer_id": volunteer_id, "status": ShiftStatus.ACTIVE},
            limit=1,
        )
        return active[0] if active else None

    def check_in(
        self, volunteer_id: int, activity_type: ActivityType, center_id: Optional[int] = None
    ) -> ShiftRecord:
        if self.get_active_shift(volunteer_id) is not None:
            raise DuplicateActiveShiftError(volunteer_id)

        try:
            shift = self.store.insert(
                "shifts",
                {
                    "volunteer_id": volunteer_id,
                    "center_id": center_id,
                    "activity_type": ActivityType(activity_type),
                    "status": ShiftStatus.ACTIVE,
                    "start_time": self.now_fn(),
                    "hours": None,
                },
            )
        except StoreConflictError as exc:
            # Another check-in for this volunteer won the race past the pre-check.
            raise DuplicateActiveShiftError(volunteer_id) from exc

        logger.info("Volunteer %s checked in (shift %s, %s)", volunteer_id, shift.id, shift.activity_type.value)
        return shift

    def _close(self, shift: ShiftRecord) -> ShiftRecord:
        end_time = self.now_fn()
        hours = compute_hours(shift.start_time, end_time)
        closed = self.store.update(
            "shifts",
            shift.id,
            {"end_time": end_time, "hours": hours, "status": ShiftStatus.PENDING_REVIEW},
        )
        logger.info("Volunteer %s checked out (shift %s, %.2f hours)", shift.volunteer_id, shift.id, hours)
        return closed

    def check_out(self, shift_id: int) -> ShiftRecord:
        shift = self.store.get("shifts", shift_id)
        if shift is None or shift.status != ShiftStatus.ACTIVE:
            raise ShiftNotFoundError(f"No active shift with id {shift_id}")
        return self._close(shift)

    def check_out_group(self, volunteer_ids: Iterable[int]) -> List[ShiftRecord]:
        """
        Checks out every active shift belonging to the given volunteers, as a
        guardian does for the dependents they dropped off.
        """
        active = self.store.query(
            "shifts",
            filters={"volunteer_id": set(volunteer_ids), "status": ShiftStatus.ACTIVE},
        )
        if not active:
            raise ShiftNotFoundError("No active shifts for the given volunteers")
        return [self._close(shift) for shift in active]

    def review_shift(self, shift_id: int, decision: ShiftStatus, reviewer: Volunteer) -> ShiftRecord:
        if not can_review_shifts(reviewer):
            raise PermissionDeniedError("Reviewing shifts requires an admin role")

        decision = ShiftStatus(decision)
        if decision not in REVIEW_DECISIONS:
            raise InvalidTransitionError(f"'{decision.value}' is not a review decision")

        shift = self.store.get("shifts", shift_id)
        if shift is None or shift.status != ShiftStatus.PENDING_REVIEW:
            raise ShiftNotFoundError(f"No shift pending review with id {shift_id}")

        reviewed = self.store.update(
            "shifts",
            shift_id,
            {"status": decision, "reviewed_by": reviewer.id, "reviewed_at": self.now_fn()},
        )
        logger.info("Shift %s %s by volunteer %s", shift_id, decision.value, reviewer.id)
        return reviewed

    def list_history(self, volunteer_id: int, limit: int = HISTORY_LIMIT) -> List[ShiftRecord]:
        return self.store.query(
            "shifts", filters={"volunteer_id": volunteer_id}, order_by="-start_time", limit=limit
        )

    def list_by_status(
        self,
        status: ShiftStatus,
        limit: Optional[int] = None,
        started_from: Optional[datetime] = None,
        started_until: Optional[datetime] = None,
    ) -> List[ShiftRecord]:
        ranges = None
        if started_from is not None or started_until is not None:
            ranges = {"start_time": (started_from, started_until)}
        return self.store.query(
            "shifts",
            filters={"status": ShiftStatus(status)},
            ranges=ranges,
            order_by="-start_time",
            limit=limit,
        )
