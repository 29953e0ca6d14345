# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

"""Static relationship rules: qualifier legality and date checks.

These checks need no graph state, so both the validator (on create) and
the graph engine (on update) share them.
"""

from __future__ import annotations

from datetime import date

from kindred.models.relationship import Qualifier, RelationshipType
from kindred.relationships.errors import (
    DateOrderError,
    InvalidQualifierError,
    MissingRequiredDateError,
)

# Qualifiers allowed per storable type. A spouse edge may be marked "step";
# "in-law" describes derived kin and the lineage qualifiers only fit parents.
LEGAL_QUALIFIERS: dict[RelationshipType, frozenset[Qualifier]] = {
    RelationshipType.PARENT: frozenset(
        {
            Qualifier.BIOLOGICAL,
            Qualifier.ADOPTIVE,
            Qualifier.STEP,
            Qualifier.FOSTER,
        }
    ),
    RelationshipType.SPOUSE: frozenset({Qualifier.STEP}),
}

# Types whose start_date is mandatory (the marriage date for spouses)
START_DATE_REQUIRED = frozenset({RelationshipType.SPOUSE})


def is_symmetric(relationship_type: RelationshipType | str) -> bool:
    return RelationshipType(relationship_type) is RelationshipType.SPOUSE


def check_qualifier(
    relationship_type: RelationshipType | str, qualifier: Qualifier | str | None
) -> None:
    """Raise InvalidQualifierError if ``qualifier`` is not legal for the type."""
    if qualifier is None:
        return
    rel_type = RelationshipType(relationship_type)
    try:
        q = Qualifier(qualifier)
    except ValueError:
        raise InvalidQualifierError(str(qualifier), rel_type.value) from None
    if q not in LEGAL_QUALIFIERS[rel_type]:
        raise InvalidQualifierError(q.value, rel_type.value)


def check_date_order(start_date: date | None, end_date: date | None) -> None:
    """Raise DateOrderError if the end date precedes the start date.

    Equal dates are legal.
    """
    if start_date is not None and end_date is not None and end_date < start_date:
        raise DateOrderError(
            f"End date ({end_date.isoformat()}) must not be before "
            f"start date ({start_date.isoformat()})"
        )


def check_required_dates(
    relationship_type: RelationshipType | str, start_date: date | None
) -> None:
    rel_type = RelationshipType(relationship_type)
    if rel_type in START_DATE_REQUIRED and start_date is None:
        raise MissingRequiredDateError(
            "Marriage date (start_date) is required for spouse relationships"
        )
