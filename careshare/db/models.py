# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

import enum
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    text,
)
from sqlalchemy.orm import relationship

from careshare.db.database import Base


class Role(str, enum.Enum):
    VOLUNTEER = "volunteer"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"
    PARENT = "parent"


class VolunteerCategory(str, enum.Enum):
    STUDENT = "student"
    ADULT = "adult"
    PARENT = "parent"


class ShiftStatus(str, enum.Enum):
    ACTIVE = "active"
    PENDING_REVIEW = "pending_review"
    APPROVED = "approved"
    REJECTED = "rejected"


class ActivityType(str, enum.Enum):
    SANDWICH_MAKING = "sandwich_making"
    DISTRIBUTION = "distribution"
    PARENT_DROPOFF = "parent_dropoff"


def _enum_values(enum_class):
    return [member.value for member in enum_class]


def _utcnow():
    return datetime.now(timezone.utc)


class Volunteer(Base):
    __tablename__ = "volunteers"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    role = Column(
        Enum(Role, name="volunteer_role", values_callable=_enum_values),
        nullable=False,
        default=Role.VOLUNTEER,
    )
    volunteer_category = Column(
        Enum(VolunteerCategory, name="volunteer_category", values_callable=_enum_values),
        nullable=True,
    )
    is_approved = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    managed_by = Column(Integer, ForeignKey("volunteers.id", ondelete="SET NULL"), nullable=True, index=True)
    contact_email = Column(String(255), nullable=True)
    grade = Column(String(50), nullable=True)
    school_name = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    shifts = relationship(
        "ShiftRecord",
        back_populates="volunteer",
        foreign_keys="ShiftRecord.volunteer_id",
        cascade="all, delete-orphan",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Center(Base):
    __tablename__ = "centers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    radius = Column(Integer, nullable=False, default=150)
    created_by = Column(Integer, ForeignKey("volunteers.id", ondelete="SET NULL"), nullable=True)


class ShiftRecord(Base):
    __tablename__ = "shift_records"
    __table_args__ = (
        # At most one active shift per volunteer, enforced by the database.
        Index(
            "uq_shift_records_one_active_per_volunteer",
            "volunteer_id",
            unique=True,
            sqlite_where=text("status = 'active'"),
            postgresql_where=text("status = 'active'"),
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    volunteer_id = Column(Integer, ForeignKey("volunteers.id", ondelete="CASCADE"), nullable=False, index=True)
    center_id = Column(Integer, ForeignKey("centers.id", ondelete="SET NULL"), nullable=True)
    activity_type = Column(
        Enum(ActivityType, name="activity_type", values_callable=_enum_values),
        nullable=False,
    )
    status = Column(
        Enum(ShiftStatus, name="shift_status", values_callable=_enum_values),
        nullable=False,
        default=ShiftStatus.ACTIVE,
        index=True,
    )
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=True)
    hours = Column(Float, nullable=True)
    reviewed_by = Column(Integer, ForeignKey("volunteers.id", ondelete="SET NULL"), nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)

    volunteer = relationship("Volunteer", back_populates="shifts", foreign_keys=[volunteer_id])
