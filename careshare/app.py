# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from careshare.api.v1.endpoints import auth, centers, dependents, reports, shifts, volunteers
from careshare.config import settings
from careshare.core.exceptions import (
    CareShareError,
    CenterNotFoundError,
    DuplicateActiveShiftError,
    InvalidTransitionError,
    PermissionDeniedError,
    ShiftNotFoundError,
    StoreConflictError,
    StoreUnavailableError,
    VolunteerNotFoundError,
)
from careshare.db.database import get_db
from careshare.logging_config import configure_logging, get_logger

logger = get_logger(__name__)

ERROR_STATUS_CODES = {
    ShiftNotFoundError: status.HTTP_404_NOT_FOUND,
    VolunteerNotFoundError: status.HTTP_404_NOT_FOUND,
    CenterNotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateActiveShiftError: status.HTTP_409_CONFLICT,
    StoreConflictError: status.HTTP_409_CONFLICT,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    InvalidTransitionError: status.HTTP_400_BAD_REQUEST,
    StoreUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info("Care and Share API starting up. Database migrations are managed by Alembic.")
    yield
    logger.info("Care and Share API shutting down.")


app = FastAPI(
    title="Care and Share Volunteer API",
    description="API for volunteer registration, shift check-in/check-out and hour reporting.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins.split(","),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)


@app.exception_handler(CareShareError)
async def care_share_error_handler(request: Request, exc: CareShareError):
    status_code = ERROR_STATUS_CODES.get(type(exc), status.HTTP_400_BAD_REQUEST)
    if status_code >= 500:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


app.include_router(auth.router, prefix="/api/v1")
app.include_router(volunteers.router, prefix="/api/v1")
app.include_router(dependents.router, prefix="/api/v1")
app.include_router(shifts.router, prefix="/api/v1")
app.include_router(centers.router, prefix="/api/v1")
app.include_router(reports.router, prefix="/api/v1")


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except OperationalError as e:
        raise StoreUnavailableError(f"Database connection failed: {e}") from e
    return {"status": "ok", "database_connection": "successful"}
