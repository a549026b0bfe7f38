# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

from typing import List

from fastapi import APIRouter, Depends, status

from careshare.core.exceptions import CenterNotFoundError
from careshare.core.permissions import can_manage_centers
from careshare.crud import crud_center
from careshare.db.models import Volunteer
from careshare.db.store import DocumentStore
from careshare.dependencies import get_current_active_volunteer, get_store, require_capability
from careshare.schemas import schemas
from careshare.services.proximity import distance_meters, evaluate_regions

router = APIRouter(
    prefix="/centers",
    tags=["Centers"],
    responses={404: {"description": "Not found"}},
)

get_current_center_manager = require_capability(can_manage_centers, "Super admin access required")


@router.get("/", response_model=List[schemas.Center])
def read_centers(
    skip: int = 0,
    limit: int = 100,
    current_volunteer: Volunteer = Depends(get_current_active_volunteer),
    store: DocumentStore = Depends(get_store),
):
    return crud_center.get_centers(store, skip=skip, limit=limit)


@router.post("/nearby", response_model=List[schemas.NearbyCenter])
def read_nearby_centers(
    position: schemas.PositionIn,
    current_volunteer: Volunteer = Depends(get_current_active_volunteer),
    store: DocumentStore = Depends(get_store),
):
    """
    Centers whose geofence contains the posted position, nearest first.
    """
    entered = evaluate_regions(position.latitude, position.longitude, crud_center.get_centers(store, limit=None))
    nearby = [
        schemas.NearbyCenter(
            id=center.id,
            name=center.name,
            latitude=center.latitude,
            longitude=center.longitude,
            radius=center.radius,
            created_by=center.created_by,
            distance_m=round(
                distance_meters(position.latitude, position.longitude, center.latitude, center.longitude), 1
            ),
        )
        for center in entered
    ]
    return sorted(nearby, key=lambda center: center.distance_m)


@router.get("/{center_id}", response_model=schemas.Center)
def read_center(
    center_id: int,
    current_volunteer: Volunteer = Depends(get_current_active_volunteer),
    store: DocumentStore = Depends(get_store),
):
    db_center = crud_center.get_center(store, center_id)
    if db_center is None:
        raise CenterNotFoundError(f"Center {center_id} not found")
    return db_center


@router.post("/", response_model=schemas.Center, status_code=status.HTTP_201_CREATED)
def create_center(
    center: schemas.CenterCreate,
    current_manager: Volunteer = Depends(get_current_center_manager),
    store: DocumentStore = Depends(get_store),
):
    """
    Registers a geofenced center. (Super admin access required)
    """
    return crud_center.create_center(store, center, created_by=current_manager.id)


@router.put("/{center_id}", response_model=schemas.Center)
def update_center(
    center_id: int,
    center: schemas.CenterCreate,
    current_manager: Volunteer = Depends(get_current_center_manager),
    store: DocumentStore = Depends(get_store),
):
    db_center = crud_center.update_center(store, center_id, center)
    if db_center is None:
        raise CenterNotFoundError(f"Center {center_id} not found")
    return db_center


@router.delete("/{center_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_center(
    center_id: int,
    current_manager: Volunteer = Depends(get_current_center_manager),
    store: DocumentStore = Depends(get_store),
):
    if not crud_center.delete_center(store, center_id):
        raise CenterNotFoundError(f"Center {center_id} not found")
