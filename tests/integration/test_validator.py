# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

from __future__ import annotations

from datetime import date
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from kindred.relationships.errors import (
    CircularRelationshipError,
    DateOrderError,
    DuplicateRelationshipError,
    InvalidQualifierError,
    MissingRequiredDateError,
    PersonNotFoundError,
    SelfRelationshipError,
)
from kindred.relationships.graph import RelationshipGraph
from kindred.relationships.validator import RelationshipValidator
from tests.conftest import add_persons, link_parent, link_spouses


def _validator(session: AsyncSession) -> RelationshipValidator:
    return RelationshipValidator(RelationshipGraph(session))


class TestSelfAndExistence:
    async def test_self_loop_rejected(self, db_session: AsyncSession) -> None:
        p = await add_persons(db_session, "A")
        for rel_type in ("parent", "spouse"):
            with pytest.raises(SelfRelationshipError):
                await _validator(db_session).validate_new_edge(
                    p["A"].id, p["A"].id, rel_type, start_date=date(2000, 1, 1)
                )

    async def test_self_loop_checked_before_existence(self, db_session: AsyncSession) -> None:
        ghost = uuid4()
        with pytest.raises(SelfRelationshipError):
            await _validator(db_session).validate_new_edge(ghost, ghost, "parent")

    async def test_unknown_person(self, db_session: AsyncSession) -> None:
        p = await add_persons(db_session, "A")
        ghost = uuid4()
        with pytest.raises(PersonNotFoundError) as exc_info:
            await _validator(db_session).validate_new_edge(p["A"].id, ghost, "parent")
        assert exc_info.value.person_id == ghost


class TestDuplicates:
    async def test_same_parent_edge_twice(self, db_session: AsyncSession) -> None:
        p = await add_persons(db_session, "A", "B")
        await link_parent(db_session, p["A"], p["B"])
        with pytest.raises(DuplicateRelationshipError):
            await _validator(db_session).validate_new_edge(p["A"].id, p["B"].id, "parent")

    async def test_inverse_parent_edge(self, db_session: AsyncSession) -> None:
        p = await add_persons(db_session, "A", "B")
        await link_parent(db_session, p["A"], p["B"])
        with pytest.raises(DuplicateRelationshipError, match="already recorded as a child"):
            await _validator(db_session).validate_new_edge(p["B"].id, p["A"].id, "parent")

    async def test_spouse_either_direction(self, db_session: AsyncSession) -> None:
        p = await add_persons(db_session, "A", "B")
        await link_spouses(db_session, p["A"], p["B"])
        with pytest.raises(DuplicateRelationshipError):
            await _validator(db_session).validate_new_edge(
                p["B"].id, p["A"].id, "spouse", start_date=date(2010, 1, 1)
            )

    async def test_other_type_between_same_pair_is_fine(self, db_session: AsyncSession) -> None:
        p = await add_persons(db_session, "A", "B")
        await link_spouses(db_session, p["A"], p["B"])
        await _validator(db_session).validate_new_edge(p["A"].id, p["B"].id, "parent")


class TestAcyclicity:
    async def test_closing_the_loop_rejected(self, db_session: AsyncSession) -> None:
        p = await add_persons(db_session, "A", "B", "C")
        await link_parent(db_session, p["A"], p["B"])
        await link_parent(db_session, p["B"], p["C"])
        with pytest.raises(CircularRelationshipError):
            await _validator(db_session).validate_new_edge(p["C"].id, p["A"].id, "parent")

    async def test_direct_grandparent_edge_allowed(self, db_session: AsyncSession) -> None:
        p = await add_persons(db_session, "A", "B", "C")
        await link_parent(db_session, p["A"], p["B"])
        await link_parent(db_session, p["B"], p["C"])
        await _validator(db_session).validate_new_edge(p["A"].id, p["C"].id, "parent")


class TestStaticRules:
    async def test_spouse_needs_marriage_date(self, db_session: AsyncSession) -> None:
        p = await add_persons(db_session, "A", "B")
        validator = _validator(db_session)
        with pytest.raises(MissingRequiredDateError):
            await validator.validate_new_edge(p["A"].id, p["B"].id, "spouse")
        await validator.validate_new_edge(
            p["A"].id, p["B"].id, "spouse", start_date=date(1999, 9, 9)
        )

    async def test_date_order(self, db_session: AsyncSession) -> None:
        p = await add_persons(db_session, "A", "B")
        validator = _validator(db_session)
        with pytest.raises(DateOrderError):
            await validator.validate_new_edge(
                p["A"].id,
                p["B"].id,
                "spouse",
                start_date=date(2020, 1, 1),
                end_date=date(2019, 1, 1),
            )
        await validator.validate_new_edge(
            p["A"].id,
            p["B"].id,
            "spouse",
            start_date=date(2020, 1, 1),
            end_date=date(2020, 1, 1),
        )

    async def test_qualifier(self, db_session: AsyncSession) -> None:
        p = await add_persons(db_session, "A", "B")
        with pytest.raises(InvalidQualifierError):
            await _validator(db_session).validate_new_edge(
                p["A"].id,
                p["B"].id,
                "spouse",
                qualifier="adoptive",
                start_date=date(2000, 1, 1),
            )

    async def test_step_spouse_accepted(self, db_session: AsyncSession) -> None:
        p = await add_persons(db_session, "A", "B")
        await _validator(db_session).validate_new_edge(
            p["A"].id, p["B"].id, "spouse", qualifier="step", start_date=date(2000, 1, 1)
        )


class TestCheckOrder:
    async def test_duplicate_reported_before_qualifier(self, db_session: AsyncSession) -> None:
        p = await add_persons(db_session, "A", "B")
        await link_parent(db_session, p["A"], p["B"])
        with pytest.raises(DuplicateRelationshipError):
            await _validator(db_session).validate_new_edge(
                p["A"].id, p["B"].id, "parent", qualifier="in-law"
            )

    async def test_qualifier_reported_before_dates(self, db_session: AsyncSession) -> None:
        p = await add_persons(db_session, "A", "B")
        with pytest.raises(InvalidQualifierError):
            await _validator(db_session).validate_new_edge(
                p["A"].id,
                p["B"].id,
                "spouse",
                qualifier="in-law",
                start_date=date(2020, 1, 1),
                end_date=date(2019, 1, 1),
            )

    async def test_date_order_reported_before_cycle(self, db_session: AsyncSession) -> None:
        p = await add_persons(db_session, "A", "B", "C")
        await link_parent(db_session, p["A"], p["B"])
        await link_parent(db_session, p["B"], p["C"])
        with pytest.raises(DateOrderError):
            await _validator(db_session).validate_new_edge(
                p["C"].id,
                p["A"].id,
                "parent",
                start_date=date(2020, 1, 1),
                end_date=date(2019, 1, 1),
            )

    async def test_existence_reported_before_duplicate(self, db_session: AsyncSession) -> None:
        p = await add_persons(db_session, "A")
        with pytest.raises(PersonNotFoundError):
            await _validator(db_session).validate_new_edge(
                uuid4(), p["A"].id, "spouse", qualifier="foster"
            )
