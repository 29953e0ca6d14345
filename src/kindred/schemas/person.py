# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from kindred.models.person import Gender


def _not_in_future(value: date | None) -> date | None:
    if value is not None and value > date.today():
        raise ValueError("date cannot be in the future")
    return value


class PersonCreate(BaseModel):
    first_name: str = Field(min_length=1, max_length=100)
    middle_name: str | None = Field(None, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    maiden_name: str | None = Field(None, max_length=100)
    gender: Gender = Gender.UNKNOWN
    birth_date: date | None = None
    birth_location: str | None = Field(None, max_length=255)
    death_date: date | None = None
    death_location: str | None = Field(None, max_length=255)
    notes: str | None = None

    @field_validator("birth_date", "death_date")
    @classmethod
    def _check_not_in_future(cls, value: date | None) -> date | None:
        return _not_in_future(value)

    @model_validator(mode="after")
    def _check_lifespan(self) -> PersonCreate:
        if self.birth_date and self.death_date and self.death_date < self.birth_date:
            raise ValueError("death_date must not be before birth_date")
        return self


class PersonUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    first_name: str | None = Field(None, min_length=1, max_length=100)
    middle_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    maiden_name: str | None = Field(None, max_length=100)
    gender: Gender | None = None
    birth_date: date | None = None
    birth_location: str | None = Field(None, max_length=255)
    death_date: date | None = None
    death_location: str | None = Field(None, max_length=255)
    notes: str | None = None

    @field_validator("birth_date", "death_date")
    @classmethod
    def _check_not_in_future(cls, value: date | None) -> date | None:
        return _not_in_future(value)


class PersonSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    first_name: str
    middle_name: str | None
    last_name: str
    gender: str
    birth_date: date | None
    death_date: date | None


class PersonResponse(PersonSummary):
    maiden_name: str | None
    birth_location: str | None
    death_location: str | None
    notes: str | None
    created_at: datetime
    updated_at: datetime
