"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
"""

from datetime import timedelta

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from careshare.config import settings
from careshare.crud import crud_volunteer
from careshare.db.database import get_db
from careshare.events import notification_handlers
from careshare.schemas import schemas
from careshare.utils.security import create_access_token, verify_password

router = APIRouter(
    tags=["Authentication"],
    responses={404: {"description": "Not found"}},
)


@router.post("/register", response_model=schemas.Volunteer, status_code=status.HTTP_201_CREATED)
def register_volunteer(
    volunteer: schemas.VolunteerCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    """
    Registers a new volunteer. The account stays pending until an admin approves it.
    """
    db_volunteer = crud_volunteer.get_volunteer_by_email(db, email=volunteer.email)
    if db_volunteer:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")

    db_volunteer = crud_volunteer.create_volunteer(db, volunteer)
    if db_volunteer is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")

    background_tasks.add_task(notification_handlers.notify_registration_pending, db_volunteer.id)
    return db_volunteer


@router.post("/login", response_model=schemas.Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)
):
    """
    Authenticates a volunteer and returns an access token.
    """
    volunteer = crud_volunteer.get_volunteer_by_email(db, email=form_data.username)
    if not volunteer or not verify_password(form_data.password, volunteer.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not volunteer.is_active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive volunteer")

    access_token_expires = timedelta(minutes=settings.access_token_expire_minutes)
    access_token = create_access_token(data={"sub": volunteer.email}, expires_delta=access_token_expires)
    return {"access_token": access_token, "token_type": "bearer"}
