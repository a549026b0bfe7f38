# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.orm import Session

from careshare.core.exceptions import PermissionDeniedError
from careshare.core.permissions import can_approve_volunteers, can_manage_roles, outranks
from careshare.crud import crud_volunteer
from careshare.db.database import get_db
from careshare.db.models import Volunteer
from careshare.dependencies import get_current_active_volunteer, require_capability
from careshare.events import notification_handlers
from careshare.schemas import schemas

router = APIRouter(
    prefix="/volunteers",
    tags=["Volunteers"],
    responses={404: {"description": "Not found"}},
)

get_current_approver = require_capability(can_approve_volunteers, "Admin access required")
get_current_super_admin = require_capability(can_manage_roles, "Super admin access required")


@router.get("/", response_model=List[schemas.Volunteer])
def read_volunteers(
    is_approved: Optional[bool] = None,
    skip: int = 0,
    limit: int = 100,
    current_admin: Volunteer = Depends(get_current_approver),
    db: Session = Depends(get_db),
):
    """
    Lists volunteers, optionally only the approved or the pending ones. (Admin access required)
    """
    return crud_volunteer.get_volunteers(db, skip=skip, limit=limit, is_approved=is_approved)


@router.get("/me", response_model=schemas.Volunteer)
def read_volunteers_me(current_volunteer: Volunteer = Depends(get_current_active_volunteer)):
    """
    Retrieves the current authenticated volunteer's profile.
    """
    return current_volunteer


@router.put("/me", response_model=schemas.Volunteer)
def update_volunteers_me(
    volunteer: schemas.VolunteerUpdate,
    current_volunteer: Volunteer = Depends(get_current_active_volunteer),
    db: Session = Depends(get_db),
):
    """
    Updates the current volunteer's own profile.
    """
    return crud_volunteer.update_volunteer(db, current_volunteer.id, volunteer)


@router.get("/{volunteer_id}", response_model=schemas.Volunteer)
def read_volunteer(
    volunteer_id: int,
    current_admin: Volunteer = Depends(get_current_approver),
    db: Session = Depends(get_db),
):
    """
    Retrieves a single volunteer profile by ID. (Admin access required)
    """
    db_volunteer = crud_volunteer.get_volunteer(db, volunteer_id=volunteer_id)
    if db_volunteer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Volunteer not found")
    return db_volunteer


@router.post("/{volunteer_id}/approve", response_model=schemas.Volunteer)
def approve_volunteer(
    volunteer_id: int,
    background_tasks: BackgroundTasks,
    current_admin: Volunteer = Depends(get_current_approver),
    db: Session = Depends(get_db),
):
    """
    Approves a pending volunteer and emails them. (Admin access required)
    """
    db_volunteer = crud_volunteer.approve_volunteer(db, volunteer_id)
    if db_volunteer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Volunteer not found")
    background_tasks.add_task(notification_handlers.notify_registration_approved, db_volunteer.id)
    return db_volunteer


@router.put("/{volunteer_id}/role", response_model=schemas.Volunteer)
def update_volunteer_role(
    volunteer_id: int,
    role_update: schemas.RoleUpdate,
    current_super_admin: Volunteer = Depends(get_current_super_admin),
    db: Session = Depends(get_db),
):
    """
    Promotes or demotes a volunteer. (Super admin access required)
    """
    if volunteer_id == current_super_admin.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot change your own role")
    db_volunteer = crud_volunteer.set_role(db, volunteer_id, role_update.role)
    if db_volunteer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Volunteer not found")
    return db_volunteer


@router.delete("/{volunteer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_volunteer(
    volunteer_id: int,
    current_admin: Volunteer = Depends(get_current_approver),
    db: Session = Depends(get_db),
):
    """
    Deletes a volunteer and their shift records. Admins cannot delete
    themselves or anyone of equal or higher role. (Admin access required)
    """
    if volunteer_id == current_admin.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot delete your own account")
    db_volunteer = crud_volunteer.get_volunteer(db, volunteer_id=volunteer_id)
    if db_volunteer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Volunteer not found")
    if not outranks(current_admin, db_volunteer):
        raise PermissionDeniedError("You cannot delete a volunteer with an equal or higher role")
    crud_volunteer.delete_volunteer(db, volunteer_id)
