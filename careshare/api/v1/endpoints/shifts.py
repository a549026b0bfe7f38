"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from careshare.core.exceptions import PermissionDeniedError, ShiftNotFoundError, VolunteerNotFoundError
from careshare.core.permissions import can_act_for, can_review_shifts
from careshare.crud import crud_volunteer
from careshare.db.database import get_db
from careshare.db.models import ShiftStatus, Volunteer
from careshare.dependencies import (
    get_current_active_volunteer,
    get_current_approved_volunteer,
    get_shift_tracker,
    require_capability,
)
from careshare.schemas import schemas
from careshare.services.shift_tracker import ShiftTracker

router = APIRouter(
    prefix="/shifts",
    tags=["Shifts"],
    responses={404: {"description": "Not found"}},
)

get_current_reviewer = require_capability(can_review_shifts, "Admin access required")


def _resolve_volunteer(db: Session, current_volunteer: Volunteer, volunteer_id: Optional[int]) -> Volunteer:
    """
    Returns the volunteer an operation targets: the caller, or a dependent the
    caller manages.
    """
    if volunteer_id is None or volunteer_id == current_volunteer.id:
        return current_volunteer
    volunteer = crud_volunteer.get_volunteer(db, volunteer_id)
    if volunteer is None:
        raise VolunteerNotFoundError(f"Volunteer {volunteer_id} not found")
    if not can_act_for(current_volunteer, volunteer):
        raise PermissionDeniedError("You can only act for yourself or your dependents")
    return volunteer


@router.post("/check-in", response_model=schemas.Shift, status_code=status.HTTP_201_CREATED)
def check_in(
    request: schemas.CheckInRequest,
    current_volunteer: Volunteer = Depends(get_current_approved_volunteer),
    tracker: ShiftTracker = Depends(get_shift_tracker),
    db: Session = Depends(get_db),
):
    """
    Starts a shift for the caller or for one of their dependents.
    """
    volunteer = _resolve_volunteer(db, current_volunteer, request.volunteer_id)
    if not volunteer.is_approved:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Volunteer not approved yet")
    return tracker.check_in(volunteer.id, request.activity_type, center_id=request.center_id)


@router.post("/{shift_id}/check-out", response_model=schemas.Shift)
def check_out(
    shift_id: int,
    current_volunteer: Volunteer = Depends(get_current_active_volunteer),
    tracker: ShiftTracker = Depends(get_shift_tracker),
):
    """
    Ends an active shift and submits its hours for review.
    """
    shift = tracker.store.get("shifts", shift_id)
    if shift is None:
        raise ShiftNotFoundError(f"No active shift with id {shift_id}")
    if not (can_act_for(current_volunteer, shift.volunteer) or can_review_shifts(current_volunteer)):
        raise PermissionDeniedError("You can only check out your own shifts")
    return tracker.check_out(shift_id)


@router.post("/check-out/group", response_model=List[schemas.Shift])
def check_out_group(
    request: schemas.GroupCheckOutRequest,
    current_volunteer: Volunteer = Depends(get_current_active_volunteer),
    tracker: ShiftTracker = Depends(get_shift_tracker),
    db: Session = Depends(get_db),
):
    """
    Ends the active shifts of several volunteers at once, e.g. a parent
    picking up their dependents.
    """
    volunteer_ids = {_resolve_volunteer(db, current_volunteer, vid).id for vid in request.volunteer_ids}
    return tracker.check_out_group(volunteer_ids)


@router.get("/active", response_model=Optional[schemas.Shift])
def read_active_shift(
    volunteer_id: Optional[int] = None,
    current_volunteer: Volunteer = Depends(get_current_active_volunteer),
    tracker: ShiftTracker = Depends(get_shift_tracker),
    db: Session = Depends(get_db),
):
    volunteer = _resolve_volunteer(db, current_volunteer, volunteer_id)
    return tracker.get_active_shift(volunteer.id)


@router.get("/history", response_model=List[schemas.Shift])
def read_shift_history(
    volunteer_id: Optional[int] = None,
    limit: int = 20,
    current_volunteer: Volunteer = Depends(get_current_active_volunteer),
    tracker: ShiftTracker = Depends(get_shift_tracker),
    db: Session = Depends(get_db),
):
    """
    Most recent shifts first.
    """
    volunteer = _resolve_volunteer(db, current_volunteer, volunteer_id)
    return tracker.list_history(volunteer.id, limit=limit)


@router.get("/", response_model=List[schemas.Shift])
def read_shifts_by_status(
    shift_status: ShiftStatus = Query(ShiftStatus.PENDING_REVIEW, alias="status"),
    limit: int = 100,
    current_reviewer: Volunteer = Depends(get_current_reviewer),
    tracker: ShiftTracker = Depends(get_shift_tracker),
):
    """
    Admin queues: shifts currently active or waiting for review. (Admin access required)
    """
    return tracker.list_by_status(shift_status, limit=limit)


@router.post("/{shift_id}/review", response_model=schemas.Shift)
def review_shift(
    shift_id: int,
    review: schemas.ReviewRequest,
    current_volunteer: Volunteer = Depends(get_current_active_volunteer),
    tracker: ShiftTracker = Depends(get_shift_tracker),
):
    """
    Approves or rejects a shift pending review. (Admin access required)
    """
    return tracker.review_shift(shift_id, ShiftStatus(review.decision), reviewer=current_volunteer)
