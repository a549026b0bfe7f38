# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from careshare.db import models
from careshare.schemas import schemas
from careshare.utils.security import get_password_hash


def get_volunteer(db: Session, volunteer_id: int):
    return db.query(models.Volunteer).filter(models.Volunteer.id == volunteer_id).first()


def get_volunteer_by_email(db: Session, email: str):
    return db.query(models.Volunteer).filter(models.Volunteer.email == email).first()


def get_volunteers(db: Session, skip: int = 0, limit: int = 100, is_approved: Optional[bool] = None):
    query = db.query(models.Volunteer)
    if is_approved is not None:
        query = query.filter(models.Volunteer.is_approved == is_approved)
    return query.order_by(models.Volunteer.id).offset(skip).limit(limit).all()


def get_volunteers_by_ids(db: Session, volunteer_ids):
    volunteer_ids = list(volunteer_ids)
    if not volunteer_ids:
        return {}
    volunteers = db.query(models.Volunteer).filter(models.Volunteer.id.in_(volunteer_ids)).all()
    return {volunteer.id: volunteer for volunteer in volunteers}


def create_volunteer(db: Session, volunteer: schemas.VolunteerCreate):
    db_volunteer = models.Volunteer(
        first_name=volunteer.first_name,
        last_name=volunteer.last_name,
        email=volunteer.email,
        password=get_password_hash(volunteer.password),
        phone=volunteer.phone,
        role=models.Role(volunteer.role),
        volunteer_category=volunteer.volunteer_category,
        grade=volunteer.grade,
        school_name=volunteer.school_name,
        is_approved=False,
        is_active=True,
    )
    try:
        db.add(db_volunteer)
        db.commit()
        db.refresh(db_volunteer)
        return db_volunteer
    except IntegrityError:
        db.rollback()
        return None  # Indicate that creation failed, likely due to duplicate email


def update_volunteer(db: Session, volunteer_id: int, volunteer: schemas.VolunteerUpdate):
    db_volunteer = get_volunteer(db, volunteer_id)
    if db_volunteer:
        for key, value in volunteer.model_dump(exclude_unset=True).items():
            setattr(db_volunteer, key, value)
        db.commit()
        db.refresh(db_volunteer)
        return db_volunteer
    return None


def approve_volunteer(db: Session, volunteer_id: int):
    db_volunteer = get_volunteer(db, volunteer_id)
    if db_volunteer:
        db_volunteer.is_approved = True
        db.commit()
        db.refresh(db_volunteer)
        return db_volunteer
    return None


def set_role(db: Session, volunteer_id: int, role: models.Role):
    db_volunteer = get_volunteer(db, volunteer_id)
    if db_volunteer:
        db_volunteer.role = role
        db.commit()
        db.refresh(db_volunteer)
        return db_volunteer
    return None


def delete_volunteer(db: Session, volunteer_id: int):
    db_volunteer = get_volunteer(db, volunteer_id)
    if db_volunteer:
        db.query(models.Volunteer).filter(models.Volunteer.managed_by == volunteer_id).update(
            {models.Volunteer.managed_by: None}, synchronize_session=False
        )
        db.delete(db_volunteer)
        db.commit()
        return True
    return False


def get_dependents(db: Session, guardian: models.Volunteer, limit: int = 100):
    return (
        db.query(models.Volunteer)
        .filter(models.Volunteer.managed_by == guardian.id)
        .order_by(models.Volunteer.id)
        .limit(limit)
        .all()
    )


def create_dependent(db: Session, guardian: models.Volunteer, dependent: schemas.DependentCreate):
    db_dependent = models.Volunteer(
        first_name=dependent.first_name,
        last_name=dependent.last_name,
        email=dependent.email or _dependent_email(guardian, dependent),
        password=None,
        phone=dependent.phone,
        role=models.Role.VOLUNTEER,
        volunteer_category=models.VolunteerCategory.STUDENT,
        grade=dependent.grade,
        school_name=dependent.school_name,
        contact_email=guardian.email,
        managed_by=guardian.id,
        is_approved=False,
        is_active=True,
    )
    try:
        db.add(db_dependent)
        db.commit()
        db.refresh(db_dependent)
        return db_dependent
    except IntegrityError:
        db.rollback()
        return None


def _dependent_email(guardian: models.Volunteer, dependent: schemas.DependentCreate) -> str:
    # Email is unique per volunteer, so a dependent without one gets a
    # plus-address under the guardian's mailbox.
    local, _, domain = guardian.email.partition("@")
    tag = f"{dependent.first_name}.{dependent.last_name}".lower().replace(" ", "")
    return f"{local}+{tag}@{domain}"
