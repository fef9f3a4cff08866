# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tenant and organization tables.

A School is a tenant. Academic units form a per-school forest through
parent_unit_id. Subjects, memberships and guardian relations hang off
schools, units and users.
"""

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database.models.base import (
    Base,
    SoftDeleteMixin,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
)
from src.utils.datetime import utc_now


class School(UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "schools"
    __table_args__ = {"schema": "academic"}

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    subscription_tier: Mapped[str] = mapped_column(String(50), nullable=False)
    max_teachers: Mapped[int] = mapped_column(Integer, nullable=False)
    max_students: Mapped[int] = mapped_column(Integer, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    metadata_: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSONB, nullable=False, default=dict
    )


class AcademicUnit(UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin, Base):
    """Node of a school's organizational tree (campus, grade, class, ...)."""

    __tablename__ = "academic_units"
    __table_args__ = (
        Index(
            "uq_academic_units_school_code",
            "school_id",
            "code",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
        ),
        {"schema": "academic"},
    )

    parent_unit_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("academic.academic_units.id"), nullable=True, index=True
    )
    school_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("academic.schools.id"), nullable=False, index=True
    )
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    code: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    metadata_: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSONB, nullable=False, default=dict
    )


class Subject(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "subjects"
    __table_args__ = (
        Index(
            "uq_subjects_school_name",
            "school_id",
            "name",
            unique=True,
            postgresql_where=text("is_active"),
        ),
        {"schema": "academic"},
    )

    school_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("academic.schools.id"), nullable=False
    )
    academic_unit_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("academic.academic_units.id"), nullable=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    code: Mapped[str | None] = mapped_column(String(50), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Membership(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A user's assignment to a school and optional unit, tagged with a role."""

    __tablename__ = "memberships"
    __table_args__ = {"schema": "academic"}

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("auth.users.id"), nullable=False, index=True
    )
    school_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("academic.schools.id"), nullable=False
    )
    academic_unit_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("academic.academic_units.id"), nullable=True, index=True
    )
    role: Mapped[str] = mapped_column(String(50), nullable=False)
    enrolled_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )
    withdrawn_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    metadata_: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSONB, nullable=False, default=dict
    )


class GuardianRelation(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "guardian_relations"
    __table_args__ = (
        Index(
            "uq_guardian_relations_active_pair",
            "guardian_id",
            "student_id",
            unique=True,
            postgresql_where=text("is_active"),
        ),
        {"schema": "academic"},
    )

    guardian_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("auth.users.id"), nullable=False, index=True
    )
    student_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("auth.users.id"), nullable=False, index=True
    )
    relationship_type: Mapped[str] = mapped_column(String(50), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
