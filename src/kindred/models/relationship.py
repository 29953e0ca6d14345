# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

from __future__ import annotations

import enum
from datetime import date
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    Date,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from kindred.models.base import Base, TimestampMixin, UUIDMixin


class RelationshipType(str, enum.Enum):
    """Storable relationship types.

    Every other family category (sibling, grandparent, cousin, ...) is
    derived from these two on read and never stored.
    """

    PARENT = "parent"
    SPOUSE = "spouse"


class Qualifier(str, enum.Enum):
    BIOLOGICAL = "biological"
    ADOPTIVE = "adoptive"
    STEP = "step"
    FOSTER = "foster"
    IN_LAW = "in-law"


class Relationship(UUIDMixin, TimestampMixin, Base):
    """A single stored relationship fact between two persons.

    For ``parent`` edges the subject is the parent and the object is the
    child. ``spouse`` edges are stored once and read symmetrically.
    """

    __tablename__ = "relationships"

    subject_id: Mapped[UUID] = mapped_column(
        ForeignKey("persons.id"),
        nullable=False,
    )
    object_id: Mapped[UUID] = mapped_column(
        ForeignKey("persons.id"),
        nullable=False,
    )
    relationship_type: Mapped[str] = mapped_column(String(20), nullable=False)
    qualifier: Mapped[str | None] = mapped_column(String(20), default=None)
    start_date: Mapped[date | None] = mapped_column(Date, default=None)
    end_date: Mapped[date | None] = mapped_column(Date, default=None)
    notes: Mapped[str | None] = mapped_column(Text, default=None)

    def other(self, person_id: UUID) -> UUID:
        """Return the endpoint opposite ``person_id``."""
        return self.object_id if self.subject_id == person_id else self.subject_id

    __table_args__ = (
        UniqueConstraint(
            "subject_id", "object_id", "relationship_type", name="uq_relationships_edge"
        ),
        CheckConstraint("subject_id <> object_id", name="ck_relationships_distinct"),
        CheckConstraint(
            "relationship_type IN ('parent', 'spouse')",
            name="ck_relationships_type",
        ),
        CheckConstraint(
            "end_date IS NULL OR start_date IS NULL OR end_date >= start_date",
            name="ck_relationships_dates",
        ),
        Index("idx_relationships_pair", "subject_id", "object_id"),
        Index("idx_relationships_object", "object_id"),
        Index("idx_relationships_type", "relationship_type"),
    )
