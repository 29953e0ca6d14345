# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

from __future__ import annotations

from datetime import date

import pytest

from kindred.models.relationship import Qualifier, RelationshipType
from kindred.relationships import policy
from kindred.relationships.errors import (
    DateOrderError,
    InvalidQualifierError,
    MissingRequiredDateError,
)


class TestQualifierMatrix:
    @pytest.mark.parametrize("qualifier", ["biological", "adoptive", "step", "foster"])
    def test_parent_accepts_lineage_qualifiers(self, qualifier: str) -> None:
        policy.check_qualifier(RelationshipType.PARENT, qualifier)

    def test_parent_rejects_in_law(self) -> None:
        with pytest.raises(InvalidQualifierError) as exc_info:
            policy.check_qualifier(RelationshipType.PARENT, Qualifier.IN_LAW)
        assert exc_info.value.kind == "invalid_qualifier"
        assert exc_info.value.relationship_type == "parent"

    def test_spouse_accepts_step(self) -> None:
        policy.check_qualifier(RelationshipType.SPOUSE, "step")

    @pytest.mark.parametrize("qualifier", ["biological", "adoptive", "foster", "in-law"])
    def test_spouse_rejects_lineage_and_in_law(self, qualifier: str) -> None:
        with pytest.raises(InvalidQualifierError):
            policy.check_qualifier(RelationshipType.SPOUSE, qualifier)

    def test_missing_qualifier_is_always_legal(self) -> None:
        policy.check_qualifier("parent", None)
        policy.check_qualifier("spouse", None)

    def test_unknown_qualifier_string(self) -> None:
        with pytest.raises(InvalidQualifierError) as exc_info:
            policy.check_qualifier("parent", "godparent")
        assert exc_info.value.qualifier == "godparent"


class TestDateRules:
    def test_end_before_start_rejected(self) -> None:
        with pytest.raises(DateOrderError):
            policy.check_date_order(date(2020, 1, 1), date(2019, 1, 1))

    def test_equal_dates_allowed(self) -> None:
        policy.check_date_order(date(2020, 1, 1), date(2020, 1, 1))

    def test_open_ranges_allowed(self) -> None:
        policy.check_date_order(None, date(2019, 1, 1))
        policy.check_date_order(date(2019, 1, 1), None)
        policy.check_date_order(None, None)

    def test_spouse_requires_start_date(self) -> None:
        with pytest.raises(MissingRequiredDateError) as exc_info:
            policy.check_required_dates(RelationshipType.SPOUSE, None)
        assert "Marriage date" in exc_info.value.message

    def test_parent_start_date_optional(self) -> None:
        policy.check_required_dates(RelationshipType.PARENT, None)


def test_only_spouse_is_symmetric() -> None:
    assert policy.is_symmetric("spouse")
    assert not policy.is_symmetric(RelationshipType.PARENT)
