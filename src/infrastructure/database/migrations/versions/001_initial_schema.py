# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Initial admin database schema.

Revision ID: 001_initial
Revises: None
Create Date: 2025-01-15

Creates the auth, academic, iam and content schemas and every table
mapped in src/infrastructure/database/models/.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SCHEMAS = ("auth", "academic", "iam", "content")


def _id() -> sa.Column:
    return sa.Column(
        "id",
        postgresql.UUID(as_uuid=True),
        server_default=sa.text("gen_random_uuid()"),
        primary_key=True,
    )


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    ]


def upgrade() -> None:
    """Create schemas, tables and indexes."""
    for schema in SCHEMAS:
        op.execute(f"CREATE SCHEMA IF NOT EXISTS {schema}")

    # ==========================================================================
    # 1. academic.schools
    # ==========================================================================
    op.create_table(
        "schools",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("code", sa.String(50), nullable=False, unique=True),
        sa.Column("address", sa.Text, nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("country", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("subscription_tier", sa.String(50), nullable=False, server_default="free"),
        sa.Column("max_teachers", sa.Integer, nullable=False, server_default="50"),
        sa.Column("max_students", sa.Integer, nullable=False, server_default="500"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("metadata", postgresql.JSONB, nullable=False, server_default="{}"),
        *_timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        schema="academic",
    )

    # ==========================================================================
    # 2. auth.users
    # ==========================================================================
    op.create_table(
        "users",
        _id(),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column(
            "school_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("academic.schools.id"),
            nullable=True,
        ),
        *_timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        schema="auth",
    )

    # ==========================================================================
    # 3. academic.academic_units
    # ==========================================================================
    op.create_table(
        "academic_units",
        _id(),
        sa.Column(
            "parent_unit_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("academic.academic_units.id"),
            nullable=True,
        ),
        sa.Column(
            "school_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("academic.schools.id"),
            nullable=False,
        ),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=False),
        sa.Column("code", sa.String(50), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("metadata", postgresql.JSONB, nullable=False, server_default="{}"),
        *_timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        schema="academic",
    )
    op.create_index(
        "ix_academic_units_parent_unit_id",
        "academic_units",
        ["parent_unit_id"],
        schema="academic",
    )
    op.create_index(
        "ix_academic_units_school_id",
        "academic_units",
        ["school_id"],
        schema="academic",
    )
    op.create_index(
        "uq_academic_units_school_code",
        "academic_units",
        ["school_id", "code"],
        unique=True,
        schema="academic",
        postgresql_where=sa.text("deleted_at IS NULL"),
    )

    # ==========================================================================
    # 4. academic.subjects
    # ==========================================================================
    op.create_table(
        "subjects",
        _id(),
        sa.Column(
            "school_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("academic.schools.id"),
            nullable=False,
        ),
        sa.Column(
            "academic_unit_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("academic.academic_units.id"),
            nullable=True,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("code", sa.String(50), nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        *_timestamps(),
        schema="academic",
    )
    op.create_index(
        "uq_subjects_school_name",
        "subjects",
        ["school_id", "name"],
        unique=True,
        schema="academic",
        postgresql_where=sa.text("is_active"),
    )

    # ==========================================================================
    # 5. academic.memberships
    # ==========================================================================
    op.create_table(
        "memberships",
        _id(),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("auth.users.id"),
            nullable=False,
        ),
        sa.Column(
            "school_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("academic.schools.id"),
            nullable=False,
        ),
        sa.Column(
            "academic_unit_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("academic.academic_units.id"),
            nullable=True,
        ),
        sa.Column("role", sa.String(50), nullable=False),
        sa.Column(
            "enrolled_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column("withdrawn_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("metadata", postgresql.JSONB, nullable=False, server_default="{}"),
        *_timestamps(),
        sa.CheckConstraint(
            "withdrawn_at IS NULL OR NOT is_active",
            name="ck_memberships_withdrawn_inactive",
        ),
        schema="academic",
    )
    op.create_index("ix_memberships_user_id", "memberships", ["user_id"], schema="academic")
    op.create_index(
        "ix_memberships_academic_unit_id",
        "memberships",
        ["academic_unit_id"],
        schema="academic",
    )

    # ==========================================================================
    # 6. academic.guardian_relations
    # ==========================================================================
    op.create_table(
        "guardian_relations",
        _id(),
        sa.Column(
            "guardian_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("auth.users.id"),
            nullable=False,
        ),
        sa.Column(
            "student_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("auth.users.id"),
            nullable=False,
        ),
        sa.Column("relationship_type", sa.String(50), nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_by", postgresql.UUID(as_uuid=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("guardian_id <> student_id", name="ck_guardian_not_student"),
        schema="academic",
    )
    op.create_index(
        "ix_guardian_relations_guardian_id",
        "guardian_relations",
        ["guardian_id"],
        schema="academic",
    )
    op.create_index(
        "ix_guardian_relations_student_id",
        "guardian_relations",
        ["student_id"],
        schema="academic",
    )
    op.create_index(
        "uq_guardian_relations_active_pair",
        "guardian_relations",
        ["guardian_id", "student_id"],
        unique=True,
        schema="academic",
        postgresql_where=sa.text("is_active"),
    )

    # ==========================================================================
    # 7. iam.roles, iam.resources, iam.permissions
    # ==========================================================================
    op.create_table(
        "roles",
        _id(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("scope", sa.String(20), nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.UniqueConstraint("name", "scope", name="uq_roles_name_scope"),
        sa.CheckConstraint("scope IN ('system', 'school', 'unit')", name="ck_roles_scope"),
        schema="iam",
    )

    op.create_table(
        "resources",
        _id(),
        sa.Column("key", sa.String(100), nullable=False, unique=True),
        sa.Column("display_name", sa.String(255), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("icon", sa.String(100), nullable=True),
        sa.Column(
            "parent_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("iam.resources.id"),
            nullable=True,
        ),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
        sa.Column("is_menu_visible", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("scope", sa.String(20), nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        *_timestamps(),
        schema="iam",
    )

    op.create_table(
        "permissions",
        _id(),
        sa.Column("name", sa.String(150), nullable=False, unique=True),
        sa.Column("display_name", sa.String(255), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column(
            "resource_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("iam.resources.id"),
            nullable=True,
        ),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("scope", sa.String(20), nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        *_timestamps(),
        schema="iam",
    )

    op.create_table(
        "role_permissions",
        sa.Column(
            "role_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("iam.roles.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "permission_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("iam.permissions.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        schema="iam",
    )

    op.create_table(
        "resource_permissions",
        sa.Column(
            "resource_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("iam.resources.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "permission_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("iam.permissions.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        schema="iam",
    )

    # ==========================================================================
    # 8. auth.user_roles
    # ==========================================================================
    op.create_table(
        "user_roles",
        _id(),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("auth.users.id"),
            nullable=False,
        ),
        sa.Column(
            "role_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("iam.roles.id"),
            nullable=False,
        ),
        sa.Column(
            "school_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("academic.schools.id"),
            nullable=True,
        ),
        sa.Column(
            "academic_unit_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("academic.academic_units.id"),
            nullable=True,
        ),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column(
            "granted_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column("granted_by", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
        schema="auth",
    )
    op.create_index("ix_user_roles_user_id", "user_roles", ["user_id"], schema="auth")
    op.create_index(
        "uq_user_roles_active_grant",
        "user_roles",
        ["user_id", "role_id", "school_id", "academic_unit_id"],
        unique=True,
        schema="auth",
        postgresql_where=sa.text("is_active"),
        postgresql_nulls_not_distinct=True,
    )

    # ==========================================================================
    # 9. content.materials
    # ==========================================================================
    op.create_table(
        "materials",
        _id(),
        sa.Column(
            "school_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("academic.schools.id"),
            nullable=False,
        ),
        sa.Column("uploaded_by", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("file_url", sa.String(1000), nullable=True),
        *_timestamps(),
        schema="content",
    )


def downgrade() -> None:
    """Drop all tables and schemas."""
    op.drop_table("materials", schema="content")
    op.drop_table("user_roles", schema="auth")
    op.drop_table("resource_permissions", schema="iam")
    op.drop_table("role_permissions", schema="iam")
    op.drop_table("permissions", schema="iam")
    op.drop_table("resources", schema="iam")
    op.drop_table("roles", schema="iam")
    op.drop_table("guardian_relations", schema="academic")
    op.drop_table("memberships", schema="academic")
    op.drop_table("subjects", schema="academic")
    op.drop_table("academic_units", schema="academic")
    op.drop_table("users", schema="auth")
    op.drop_table("schools", schema="academic")

    for schema in reversed(SCHEMAS):
        op.execute(f"DROP SCHEMA IF EXISTS {schema}")
