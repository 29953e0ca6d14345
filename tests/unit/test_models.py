# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

from __future__ import annotations

from uuid import uuid4

from kindred.models.base import Base, TimestampMixin, UUIDMixin
from kindred.models.person import Gender, Person
from kindred.models.project import Project, project_persons
from kindred.models.relationship import Relationship, RelationshipType


class TestPersonDefaults:
    def test_display_name_skips_missing_parts(self) -> None:
        person = Person(first_name="Ada", last_name="Lovelace")
        assert person.display_name == "Ada Lovelace"
        person.middle_name = "King"
        assert person.display_name == "Ada King Lovelace"

    def test_gender_column_default(self) -> None:
        gender_col = Person.__table__.c["gender"]
        assert gender_col.default is not None
        assert gender_col.default.arg == Gender.UNKNOWN.value


class TestRelationshipModel:
    def test_storable_types(self) -> None:
        assert {t.value for t in RelationshipType} == {"parent", "spouse"}

    def test_other_endpoint(self) -> None:
        a, b = uuid4(), uuid4()
        edge = Relationship(subject_id=a, object_id=b, relationship_type="spouse")
        assert edge.other(a) == b
        assert edge.other(b) == a

    def test_table_constraints(self) -> None:
        names = {c.name for c in Relationship.__table__.constraints}
        assert "ck_relationships_distinct" in names
        assert "ck_relationships_type" in names
        assert "ck_relationships_dates" in names
        assert "uq_relationships_edge" in names

    def test_indexes(self) -> None:
        names = {i.name for i in Relationship.__table__.indexes}
        assert names == {
            "idx_relationships_pair",
            "idx_relationships_object",
            "idx_relationships_type",
        }


class TestProjectModel:
    def test_status_default(self) -> None:
        status_col = Project.__table__.c["status"]
        assert status_col.default.arg == "active"

    def test_membership_primary_key(self) -> None:
        pk = {c.name for c in project_persons.primary_key.columns}
        assert pk == {"project_id", "person_id"}


class TestMixins:
    def test_all_entities_use_mixins(self) -> None:
        for model in (Person, Project, Relationship):
            assert issubclass(model, UUIDMixin)
            assert issubclass(model, TimestampMixin)
            assert issubclass(model, Base)

    def test_tables_registered(self) -> None:
        assert {"persons", "projects", "project_persons", "relationships"} <= set(
            Base.metadata.tables
        )
