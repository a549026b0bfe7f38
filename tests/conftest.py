# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

import logging
import os
from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

# Safety check to prevent tests from running against production database
if os.getenv("TESTING") != "1":
    os.environ["TESTING"] = "1"

# Create test database engine and session
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
    echo=False
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

from careshare.app import app
from careshare.db import models
from careshare.db.database import Base, get_db
from careshare.db.store import DocumentStore
from careshare.services.shift_tracker import ShiftTracker
from careshare.utils.security import get_password_hash
from tests.test_helpers import FakeClock


@pytest.fixture(name="db_session", scope="function")
def db_session_fixture():
    """
    Creates a new database session for each test, with all tables created.
    """
    Base.metadata.create_all(bind=test_engine)
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()
        # Drop all tables after the test to ensure a clean slate
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(name="store")
def store_fixture(db_session: Session) -> DocumentStore:
    return DocumentStore(db_session, read_retries=0)


@pytest.fixture(name="second_store")
def second_store_fixture(db_session: Session):
    """
    A store on its own session over the same database, for interleaving two
    clients.
    """
    db = TestSessionLocal()
    try:
        yield DocumentStore(db, read_retries=0)
    finally:
        db.close()


@pytest.fixture(name="clock")
def clock_fixture() -> FakeClock:
    return FakeClock(datetime(2025, 10, 15, 10, 0, tzinfo=timezone.utc))


@pytest.fixture(name="tracker")
def tracker_fixture(store: DocumentStore, clock: FakeClock) -> ShiftTracker:
    return ShiftTracker(store, now_fn=clock)


@pytest.fixture(name="make_volunteer")
def make_volunteer_fixture(db_session: Session):
    """
    Inserts a volunteer straight into the database.
    """
    counter = {"n": 0}

    def _make(role=models.Role.VOLUNTEER, is_approved=True, password="password123", **fields):
        counter["n"] += 1
        volunteer = models.Volunteer(
            first_name=fields.pop("first_name", f"Volunteer{counter['n']}"),
            last_name=fields.pop("last_name", "Tester"),
            email=fields.pop("email", f"volunteer{counter['n']}@example.com"),
            password=get_password_hash(password) if password else None,
            role=role,
            is_approved=is_approved,
            is_active=fields.pop("is_active", True),
            **fields,
        )
        db_session.add(volunteer)
        db_session.commit()
        db_session.refresh(volunteer)
        return volunteer

    return _make


@pytest.fixture(name="client")
def client_fixture(db_session: Session, mocker):
    """
    Provides a FastAPI TestClient that overrides the get_db dependency
    to use the test database session and mocks all background tasks.
    """
    def override_get_db():
        yield db_session

    mocker.patch("careshare.events.notification_handlers.notify_registration_pending")
    mocker.patch("careshare.events.notification_handlers.notify_registration_approved")

    app.dependency_overrides[get_db] = override_get_db
    # The app lifespan reconfigures the root logger; put pytest's handlers back afterwards.
    root_handlers = list(logging.getLogger().handlers)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    logging.getLogger().handlers[:] = root_handlers

