# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from careshare.db.models import ActivityType, Role, ShiftStatus, VolunteerCategory
from careshare.services.reporting import WindowKind


class Token(BaseModel):
    access_token: str
    token_type: str


class VolunteerBase(BaseModel):
    first_name: str
    last_name: str
    email: EmailStr
    phone: Optional[str] = None
    volunteer_category: Optional[VolunteerCategory] = None
    grade: Optional[str] = None
    school_name: Optional[str] = None


class VolunteerCreate(VolunteerBase):
    password: str
    role: Literal["volunteer", "parent"] = "volunteer"


class VolunteerUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    grade: Optional[str] = None
    school_name: Optional[str] = None


class DependentCreate(BaseModel):
    first_name: str
    last_name: str
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    grade: Optional[str] = None
    school_name: Optional[str] = None


class Volunteer(VolunteerBase):
    id: int
    role: Role
    is_approved: bool
    is_active: bool
    managed_by: Optional[int] = None
    contact_email: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class RoleUpdate(BaseModel):
    role: Role


class CheckInRequest(BaseModel):
    activity_type: ActivityType = ActivityType.SANDWICH_MAKING
    volunteer_id: Optional[int] = None
    center_id: Optional[int] = None


class GroupCheckOutRequest(BaseModel):
    volunteer_ids: List[int] = Field(min_length=1)


class ReviewRequest(BaseModel):
    decision: Literal["approved", "rejected"]


class Shift(BaseModel):
    id: int
    volunteer_id: int
    center_id: Optional[int] = None
    activity_type: ActivityType
    status: ShiftStatus
    start_time: datetime
    end_time: Optional[datetime] = None
    hours: Optional[float] = None
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CenterBase(BaseModel):
    name: str
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    radius: Optional[int] = Field(default=None, gt=0)


class CenterCreate(CenterBase):
    pass


class Center(CenterBase):
    id: int
    radius: int
    created_by: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class PositionIn(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class NearbyCenter(Center):
    distance_m: float


class ReportRow(BaseModel):
    shift_id: int
    volunteer_id: int
    volunteer_name: Optional[str] = None
    activity_type: str
    start_time: datetime
    hours: float

    model_config = ConfigDict(from_attributes=True)


class Report(BaseModel):
    window: WindowKind
    reference_date: datetime
    total_hours: float
    distinct_volunteers: int
    session_count: int
    rows: List[ReportRow]
