# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

"""Initial schema: persons, projects, relationships.

Revision ID: 001
Revises:
Create Date: 2026-10-16
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: tuple[str, ...] | None = None
depends_on: tuple[str, ...] | None = None


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
    # ------------------------------------------------------------------
    # 1. persons
    # ------------------------------------------------------------------
    op.create_table(
        "persons",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("middle_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("maiden_name", sa.String(100), nullable=True),
        sa.Column("gender", sa.String(20), nullable=False, server_default="unknown"),
        sa.Column("birth_date", sa.Date(), nullable=True),
        sa.Column("birth_location", sa.String(255), nullable=True),
        sa.Column("death_date", sa.Date(), nullable=True),
        sa.Column("death_location", sa.String(255), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "gender IN ('male', 'female', 'other', 'unknown')",
            name="ck_persons_gender",
        ),
        sa.CheckConstraint(
            "death_date IS NULL OR birth_date IS NULL OR death_date >= birth_date",
            name="ck_persons_lifespan",
        ),
    )
    op.create_index("idx_persons_last_name", "persons", ["last_name"])

    # ------------------------------------------------------------------
    # 2. projects
    # ------------------------------------------------------------------
    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('active', 'completed', 'on_hold', 'cancelled')",
            name="ck_projects_status",
        ),
    )

    op.create_table(
        "project_persons",
        sa.Column(
            "project_id",
            sa.Uuid(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "person_id",
            sa.Uuid(),
            sa.ForeignKey("persons.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "added_at",
            sa.DateTime(timezone=True),
            nullable=True,
            server_default=sa.text("now()"),
        ),
    )

    # ------------------------------------------------------------------
    # 3. relationships
    # ------------------------------------------------------------------
    op.create_table(
        "relationships",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("subject_id", sa.Uuid(), sa.ForeignKey("persons.id"), nullable=False),
        sa.Column("object_id", sa.Uuid(), sa.ForeignKey("persons.id"), nullable=False),
        sa.Column("relationship_type", sa.String(20), nullable=False),
        sa.Column("qualifier", sa.String(20), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint(
            "subject_id", "object_id", "relationship_type", name="uq_relationships_edge"
        ),
        sa.CheckConstraint("subject_id <> object_id", name="ck_relationships_distinct"),
        sa.CheckConstraint(
            "relationship_type IN ('parent', 'spouse')",
            name="ck_relationships_type",
        ),
        sa.CheckConstraint(
            "end_date IS NULL OR start_date IS NULL OR end_date >= start_date",
            name="ck_relationships_dates",
        ),
    )
    op.create_index("idx_relationships_pair", "relationships", ["subject_id", "object_id"])
    op.create_index("idx_relationships_object", "relationships", ["object_id"])
    op.create_index("idx_relationships_type", "relationships", ["relationship_type"])


def downgrade() -> None:
    op.drop_table("relationships")
    op.drop_table("project_persons")
    op.drop_table("projects")
    op.drop_table("persons")
