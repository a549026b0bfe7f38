"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
"""

from typing import Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from careshare.core.exceptions import PermissionDeniedError
from careshare.crud import crud_volunteer
from careshare.db.database import get_db
from careshare.db.models import Volunteer
from careshare.db.store import DocumentStore
from careshare.services.shift_tracker import ShiftTracker
from careshare.utils.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/v1/login")


def get_store(db: Session = Depends(get_db)) -> DocumentStore:
    return DocumentStore(db)


def get_shift_tracker(store: DocumentStore = Depends(get_store)) -> ShiftTracker:
    return ShiftTracker(store)


def get_current_volunteer(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> Volunteer:
    """
    FastAPI dependency to get the current authenticated volunteer.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    email = decode_access_token(token)
    if email is None:
        raise credentials_exception
    volunteer = crud_volunteer.get_volunteer_by_email(db, email=email)
    if volunteer is None:
        raise credentials_exception
    return volunteer


def get_current_active_volunteer(current_volunteer: Volunteer = Depends(get_current_volunteer)) -> Volunteer:
    if not current_volunteer.is_active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive volunteer")
    return current_volunteer


def get_current_approved_volunteer(
    current_volunteer: Volunteer = Depends(get_current_active_volunteer),
) -> Volunteer:
    if not current_volunteer.is_approved:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Volunteer not approved yet")
    return current_volunteer


def require_capability(capability: Callable[[Volunteer], bool], detail: str):
    """
    Builds a dependency that admits the current volunteer only when
    ``capability(volunteer)`` holds.
    """

    def dependency(current_volunteer: Volunteer = Depends(get_current_active_volunteer)) -> Volunteer:
        if not capability(current_volunteer):
            raise PermissionDeniedError(detail)
        return current_volunteer

    return dependency
