# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

from __future__ import annotations

import enum
from datetime import date

from sqlalchemy import CheckConstraint, Date, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from kindred.models.base import Base, TimestampMixin, UUIDMixin


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    UNKNOWN = "unknown"


class Person(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "persons"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    middle_name: Mapped[str | None] = mapped_column(String(100), default=None)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    maiden_name: Mapped[str | None] = mapped_column(String(100), default=None)
    gender: Mapped[str] = mapped_column(
        String(20), nullable=False, default=Gender.UNKNOWN.value
    )
    birth_date: Mapped[date | None] = mapped_column(Date, default=None)
    birth_location: Mapped[str | None] = mapped_column(String(255), default=None)
    death_date: Mapped[date | None] = mapped_column(Date, default=None)
    death_location: Mapped[str | None] = mapped_column(String(255), default=None)
    notes: Mapped[str | None] = mapped_column(Text, default=None)

    @property
    def display_name(self) -> str:
        parts = [self.first_name, self.middle_name, self.last_name]
        return " ".join(p for p in parts if p)

    __table_args__ = (
        CheckConstraint(
            "gender IN ('male', 'female', 'other', 'unknown')",
            name="ck_persons_gender",
        ),
        CheckConstraint(
            "death_date IS NULL OR birth_date IS NULL OR death_date >= birth_date",
            name="ck_persons_lifespan",
        ),
        Index("idx_persons_last_name", "last_name"),
    )
