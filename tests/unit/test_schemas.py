# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

from __future__ import annotations

from datetime import date, timedelta
from uuid import uuid4

import pytest
from pydantic import ValidationError

from kindred.models.relationship import Qualifier, RelationshipType
from kindred.schemas.person import PersonCreate, PersonUpdate
from kindred.schemas.relationship import RelationshipCreate, RelationshipUpdate


class TestRelationshipCreate:
    def test_legacy_field_names(self) -> None:
        a, b = uuid4(), uuid4()
        body = RelationshipCreate.model_validate(
            {
                "person1_id": str(a),
                "person2_id": str(b),
                "relationship_type": "Parent",
                "relationship_qualifier": "ADOPTIVE",
            }
        )
        assert body.subject_id == a
        assert body.object_id == b
        assert body.relationship_type is RelationshipType.PARENT
        assert body.qualifier is Qualifier.ADOPTIVE

    def test_blank_qualifier_means_none(self) -> None:
        body = RelationshipCreate(
            subject_id=uuid4(), object_id=uuid4(), relationship_type="spouse", qualifier="  "
        )
        assert body.qualifier is None

    @pytest.mark.parametrize("rel_type", ["child", "sibling", "grandparent", "cousin"])
    def test_derived_types_not_storable(self, rel_type: str) -> None:
        with pytest.raises(ValidationError):
            RelationshipCreate(
                subject_id=uuid4(), object_id=uuid4(), relationship_type=rel_type
            )


class TestRelationshipUpdate:
    def test_endpoints_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RelationshipUpdate.model_validate({"subject_id": str(uuid4())})

    def test_type_cannot_be_cleared(self) -> None:
        with pytest.raises(ValidationError):
            RelationshipUpdate.model_validate({"relationship_type": None})

    def test_patch_only_contains_sent_fields(self) -> None:
        body = RelationshipUpdate.model_validate({"end_date": "2010-05-01", "qualifier": None})
        assert body.patch() == {"end_date": date(2010, 5, 1), "qualifier": None}


class TestPersonSchemas:
    def test_death_before_birth_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PersonCreate(
                first_name="A",
                last_name="B",
                birth_date=date(1950, 1, 1),
                death_date=date(1940, 1, 1),
            )

    def test_future_birth_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PersonUpdate(birth_date=date.today() + timedelta(days=2))

    def test_names_required(self) -> None:
        with pytest.raises(ValidationError):
            PersonCreate(first_name="", last_name="B")
