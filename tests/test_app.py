# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

import asyncio
import json
import logging
import sys

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from careshare import logging_config
from careshare.app import app, lifespan


@pytest.fixture(autouse=True)
def restore_root_handlers():
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    yield
    root_logger.handlers[:] = handlers


def test_app_startup_logs_message(capsys):
    """Test app startup message is logged through the configured handler"""
    async def run_lifespan():
        async with lifespan(app):
            pass

    asyncio.run(run_lifespan())

    captured = capsys.readouterr()
    assert "Care and Share API starting up. Database migrations are managed by Alembic." in captured.out
    assert "Care and Share API shutting down." in captured.out


def test_json_logging_outside_development(capsys, mocker):
    mocker.patch.object(logging_config.settings, "app_env", "production")

    logging_config.configure_logging()
    logging_config.get_logger("careshare.tests").warning("hours submitted for %s", "review")

    line = capsys.readouterr().out.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["level"] == "WARNING"
    assert record["name"] == "careshare.tests"
    assert record["message"] == "hours submitted for review"


def test_json_formatter_includes_exception():
    formatter = logging_config.JsonFormatter()
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.LogRecord("careshare.tests", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())

    payload = json.loads(formatter.format(record))
    assert payload["message"] == "failed"
    assert "ValueError: boom" in payload["exception"]


def test_health_check(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database_connection": "successful"}


def test_health_check_database_down(client: TestClient, db_session: Session, mocker):
    mocker.patch.object(
        db_session, "execute", side_effect=OperationalError("SELECT 1", {}, Exception("connection refused"))
    )

    response = client.get("/health")

    assert response.status_code == 503
    assert "Database connection failed" in response.json()["detail"]
