"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from careshare.core.permissions import can_view_reports
from careshare.crud import crud_volunteer
from careshare.db.database import get_db
from careshare.db.models import ShiftStatus, Volunteer
from careshare.dependencies import get_shift_tracker, require_capability
from careshare.schemas import schemas
from careshare.services.reporting import WindowKind, aggregate, window_bounds
from careshare.services.shift_tracker import ShiftTracker

router = APIRouter(
    prefix="/reports",
    tags=["Reports"],
)

get_current_report_viewer = require_capability(can_view_reports, "Admin access required")


@router.get("/", response_model=schemas.Report)
def read_report(
    window: WindowKind = WindowKind.MONTHLY,
    reference_date: Optional[datetime] = None,
    current_admin: Volunteer = Depends(get_current_report_viewer),
    tracker: ShiftTracker = Depends(get_shift_tracker),
    db: Session = Depends(get_db),
):
    """
    Totals of approved hours for the week, month or year around ``reference_date``
    (default: now). (Admin access required)
    """
    reference_date = reference_date or tracker.now_fn()
    started_from, started_until = window_bounds(window, reference_date)
    approved = tracker.list_by_status(
        ShiftStatus.APPROVED, started_from=started_from, started_until=started_until
    )
    volunteers = crud_volunteer.get_volunteers_by_ids(db, {shift.volunteer_id for shift in approved})
    report = aggregate(approved, window, reference_date, volunteers=volunteers)
    return schemas.Report(
        window=window,
        reference_date=reference_date,
        total_hours=report.total_hours,
        distinct_volunteers=report.distinct_volunteers,
        session_count=report.session_count,
        rows=[schemas.ReportRow.model_validate(row) for row in report.rows],
    )
