# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Role/permission catalog and the resource registry behind the menu."""

import uuid

from sqlalchemy import Boolean, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database.models.base import (
    Base,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
)


class Role(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "roles"
    __table_args__ = (
        UniqueConstraint("name", "scope", name="uq_roles_name_scope"),
        {"schema": "iam"},
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    scope: Mapped[str] = mapped_column(String(20), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Resource(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Registry entry; menu-visible rows are the vertices of the menu tree."""

    __tablename__ = "resources"
    __table_args__ = {"schema": "iam"}

    key: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    icon: Mapped[str | None] = mapped_column(String(100), nullable=True)
    parent_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("iam.resources.id"), nullable=True
    )
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_menu_visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    scope: Mapped[str] = mapped_column(String(20), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Permission(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Permission named <resource>:<action>."""

    __tablename__ = "permissions"
    __table_args__ = {"schema": "iam"}

    name: Mapped[str] = mapped_column(String(150), unique=True, nullable=False)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    resource_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("iam.resources.id"), nullable=True
    )
    action: Mapped[str] = mapped_column(String(50), nullable=False)
    scope: Mapped[str] = mapped_column(String(20), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class RolePermission(Base):
    __tablename__ = "role_permissions"
    __table_args__ = {"schema": "iam"}

    role_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("iam.roles.id", ondelete="CASCADE"), primary_key=True
    )
    permission_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("iam.permissions.id", ondelete="CASCADE"), primary_key=True
    )


class ResourcePermission(Base):
    __tablename__ = "resource_permissions"
    __table_args__ = {"schema": "iam"}

    resource_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("iam.resources.id", ondelete="CASCADE"), primary_key=True
    )
    permission_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("iam.permissions.id", ondelete="CASCADE"), primary_key=True
    )
