# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

import logging
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.orm import Session

from careshare.events import notification_handlers


@pytest.mark.asyncio
async def test_notify_registration_pending_sends_email(db_session: Session, make_volunteer, mocker):
    volunteer = make_volunteer(is_approved=False)
    mocker.patch("careshare.events.notification_handlers.get_db", return_value=iter([db_session]))
    send = mocker.patch(
        "careshare.events.notification_handlers.EmailService.send_pending_email", new_callable=AsyncMock
    )
    mocker.patch("careshare.services.email_service.SendGridAPIClient")

    await notification_handlers.notify_registration_pending(volunteer.id)

    send.assert_awaited_once()
    assert send.await_args[0][0].id == volunteer.id


@pytest.mark.asyncio
async def test_notify_registration_approved_sends_email(db_session: Session, make_volunteer, mocker):
    volunteer = make_volunteer()
    mocker.patch("careshare.events.notification_handlers.get_db", return_value=iter([db_session]))
    send = mocker.patch(
        "careshare.events.notification_handlers.EmailService.send_approval_email", new_callable=AsyncMock
    )
    mocker.patch("careshare.services.email_service.SendGridAPIClient")

    await notification_handlers.notify_registration_approved(volunteer.id)

    send.assert_awaited_once()


@pytest.mark.asyncio
async def test_notify_registration_pending_volunteer_not_found(db_session: Session, mocker, caplog):
    mocker.patch("careshare.events.notification_handlers.get_db", return_value=iter([db_session]))
    mocker.patch("careshare.crud.crud_volunteer.get_volunteer", return_value=None)

    with caplog.at_level(logging.WARNING, logger="careshare.events.notification_handlers"):
        await notification_handlers.notify_registration_pending(99999)

    assert "Background Task Warning: Volunteer with ID 99999 not found for pending email." in caplog.text


@pytest.mark.asyncio
async def test_notify_registration_approved_volunteer_not_found(db_session: Session, mocker, caplog):
    mocker.patch("careshare.events.notification_handlers.get_db", return_value=iter([db_session]))
    mocker.patch("careshare.crud.crud_volunteer.get_volunteer", return_value=None)

    with caplog.at_level(logging.WARNING, logger="careshare.events.notification_handlers"):
        await notification_handlers.notify_registration_approved(99999)

    assert "Background Task Warning: Volunteer with ID 99999 not found for approval email." in caplog.text
