"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from careshare.core.permissions import can_act_for, can_manage_dependents
from careshare.crud import crud_volunteer
from careshare.db.database import get_db
from careshare.db.models import Volunteer
from careshare.dependencies import require_capability
from careshare.schemas import schemas

router = APIRouter(
    prefix="/dependents",
    tags=["Dependents"],
    responses={404: {"description": "Not found"}},
)

get_current_guardian = require_capability(can_manage_dependents, "Parent access required")


def _get_managed_dependent(db: Session, guardian: Volunteer, dependent_id: int) -> Volunteer:
    dependent = crud_volunteer.get_volunteer(db, dependent_id)
    if dependent is None or dependent.id == guardian.id or not can_act_for(guardian, dependent):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Dependent not found")
    return dependent


@router.get("/", response_model=List[schemas.Volunteer])
def read_dependents(
    current_guardian: Volunteer = Depends(get_current_guardian),
    db: Session = Depends(get_db),
):
    return crud_volunteer.get_dependents(db, current_guardian)


@router.post("/", response_model=schemas.Volunteer, status_code=status.HTTP_201_CREATED)
def create_dependent(
    dependent: schemas.DependentCreate,
    current_guardian: Volunteer = Depends(get_current_guardian),
    db: Session = Depends(get_db),
):
    """
    Adds a student dependent managed by the current parent. Dependents have no
    login of their own and still need admin approval.
    """
    db_dependent = crud_volunteer.create_dependent(db, current_guardian, dependent)
    if db_dependent is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")
    return db_dependent


@router.put("/{dependent_id}", response_model=schemas.Volunteer)
def update_dependent(
    dependent_id: int,
    dependent: schemas.VolunteerUpdate,
    current_guardian: Volunteer = Depends(get_current_guardian),
    db: Session = Depends(get_db),
):
    _get_managed_dependent(db, current_guardian, dependent_id)
    return crud_volunteer.update_volunteer(db, dependent_id, dependent)


@router.delete("/{dependent_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_dependent(
    dependent_id: int,
    current_guardian: Volunteer = Depends(get_current_guardian),
    db: Session = Depends(get_db),
):
    _get_managed_dependent(db, current_guardian, dependent_id)
    crud_volunteer.delete_volunteer(db, dependent_id)
