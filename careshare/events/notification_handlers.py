"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
"""

from sqlalchemy.orm import Session

from careshare.crud import crud_volunteer
from careshare.db.database import get_db
from careshare.logging_config import get_logger
from careshare.services.email_service import EmailService

logger = get_logger(__name__)


async def notify_registration_pending(volunteer_id: int):
    """
    Emails a new volunteer that their registration awaits approval.
    This function is designed to run as a background task.
    """
    db: Session = next(get_db())
    try:
        volunteer = crud_volunteer.get_volunteer(db, volunteer_id)
        if volunteer:
            await EmailService().send_pending_email(volunteer)
        else:
            logger.warning("Background Task Warning: Volunteer with ID %s not found for pending email.", volunteer_id)
    finally:
        db.close()


async def notify_registration_approved(volunteer_id: int):
    """
    Emails a volunteer that an administrator approved their account.
    This function is designed to run as a background task.
    """
    db: Session = next(get_db())
    try:
        volunteer = crud_volunteer.get_volunteer(db, volunteer_id)
        if volunteer:
            await EmailService().send_approval_email(volunteer)
        else:
            logger.warning("Background Task Warning: Volunteer with ID %s not found for approval email.", volunteer_id)
    finally:
        db.close()
