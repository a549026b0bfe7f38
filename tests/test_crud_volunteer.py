# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

from sqlalchemy.orm import Session

from careshare.crud import crud_volunteer
from careshare.db import models
from careshare.schemas import schemas


def test_create_volunteer_starts_unapproved(db_session: Session):
    volunteer = crud_volunteer.create_volunteer(
        db_session,
        schemas.VolunteerCreate(first_name="Ada", last_name="Lovelace", email="ada@example.com", password="pw"),
    )

    assert volunteer.id is not None
    assert volunteer.is_approved is False
    assert volunteer.is_active is True
    assert volunteer.role == models.Role.VOLUNTEER
    assert volunteer.password != "pw"
    assert volunteer.full_name == "Ada Lovelace"


def test_create_volunteer_duplicate_email_returns_none(db_session: Session, make_volunteer):
    make_volunteer(email="taken@example.com")

    duplicate = crud_volunteer.create_volunteer(
        db_session,
        schemas.VolunteerCreate(first_name="Ada", last_name="Lovelace", email="taken@example.com", password="pw"),
    )

    assert duplicate is None


def test_get_volunteers_filters_by_approval(db_session: Session, make_volunteer):
    approved = make_volunteer()
    pending = make_volunteer(is_approved=False)

    assert [v.id for v in crud_volunteer.get_volunteers(db_session, is_approved=True)] == [approved.id]
    assert [v.id for v in crud_volunteer.get_volunteers(db_session, is_approved=False)] == [pending.id]
    assert len(crud_volunteer.get_volunteers(db_session)) == 2


def test_get_volunteers_by_ids(db_session: Session, make_volunteer):
    first, second = make_volunteer(), make_volunteer()

    found = crud_volunteer.get_volunteers_by_ids(db_session, [first.id, second.id, 9999])

    assert set(found) == {first.id, second.id}
    assert crud_volunteer.get_volunteers_by_ids(db_session, []) == {}


def test_approve_and_set_role(db_session: Session, make_volunteer):
    volunteer = make_volunteer(is_approved=False)

    assert crud_volunteer.approve_volunteer(db_session, volunteer.id).is_approved is True
    assert crud_volunteer.set_role(db_session, volunteer.id, models.Role.ADMIN).role == models.Role.ADMIN
    assert crud_volunteer.approve_volunteer(db_session, 9999) is None
    assert crud_volunteer.set_role(db_session, 9999, models.Role.ADMIN) is None


def test_deleting_guardian_keeps_dependents(db_session: Session, make_volunteer):
    guardian = make_volunteer(role=models.Role.PARENT)
    dependent = crud_volunteer.create_dependent(
        db_session, guardian, schemas.DependentCreate(first_name="Sam", last_name="Kid")
    )

    assert crud_volunteer.delete_volunteer(db_session, guardian.id) is True
    db_session.expire_all()

    remaining = crud_volunteer.get_volunteer(db_session, dependent.id)
    assert remaining is not None
    assert remaining.managed_by is None
    assert crud_volunteer.delete_volunteer(db_session, guardian.id) is False


def test_get_dependents(db_session: Session, make_volunteer):
    guardian = make_volunteer(role=models.Role.PARENT)
    other = make_volunteer(role=models.Role.PARENT)
    mine = crud_volunteer.create_dependent(
        db_session, guardian, schemas.DependentCreate(first_name="Sam", last_name="Kid")
    )
    crud_volunteer.create_dependent(db_session, other, schemas.DependentCreate(first_name="Lee", last_name="Kid"))

    assert [d.id for d in crud_volunteer.get_dependents(db_session, guardian)] == [mine.id]
    assert mine.password is None
    assert mine.volunteer_category == models.VolunteerCategory.STUDENT
