# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

from __future__ import annotations

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from kindred.models.relationship import Qualifier, RelationshipType
from kindred.schemas.person import PersonSummary


def _normalize_choice(value: Any) -> Any:
    """Case-insensitive enum input; blank qualifiers mean "none"."""
    if isinstance(value, str):
        value = value.strip().lower()
        return value or None
    return value


class RelationshipCreate(BaseModel):
    # person1_id / person2_id are accepted for older clients
    subject_id: UUID = Field(validation_alias=AliasChoices("subject_id", "person1_id"))
    object_id: UUID = Field(validation_alias=AliasChoices("object_id", "person2_id"))
    relationship_type: RelationshipType
    qualifier: Qualifier | None = Field(
        None, validation_alias=AliasChoices("qualifier", "relationship_qualifier")
    )
    start_date: date | None = None
    end_date: date | None = None
    notes: str | None = None

    @field_validator("relationship_type", "qualifier", mode="before")
    @classmethod
    def _normalize(cls, value: Any) -> Any:
        return _normalize_choice(value)


class RelationshipUpdate(BaseModel):
    """Partial update. Endpoints are immutable and rejected as extra fields."""

    model_config = ConfigDict(extra="forbid")

    relationship_type: RelationshipType | None = None
    qualifier: Qualifier | None = Field(
        None, validation_alias=AliasChoices("qualifier", "relationship_qualifier")
    )
    start_date: date | None = None
    end_date: date | None = None
    notes: str | None = None

    @field_validator("relationship_type", "qualifier", mode="before")
    @classmethod
    def _normalize(cls, value: Any) -> Any:
        return _normalize_choice(value)

    @model_validator(mode="after")
    def _type_not_null(self) -> RelationshipUpdate:
        if "relationship_type" in self.model_fields_set and self.relationship_type is None:
            raise ValueError("relationship_type cannot be cleared")
        return self

    def patch(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class RelationshipResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    subject_id: UUID
    object_id: UUID
    relationship_type: str
    qualifier: str | None
    start_date: date | None
    end_date: date | None
    notes: str | None
    created_at: datetime
    updated_at: datetime


class RelationshipSavedResponse(RelationshipResponse):
    warnings: list[str] = []


class RelationshipPathResponse(BaseModel):
    person_ids: list[UUID]
    relationships: list[RelationshipResponse]
    length: int


class FamilyResponse(BaseModel):
    person_id: UUID
    categories: dict[str, list[PersonSummary]]
