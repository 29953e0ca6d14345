# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

"""Typed error kinds raised by the relationship engine.

Each error carries a stable machine-readable ``kind`` and the HTTP status
the API layer answers with, so clients never have to parse message text.
"""

from __future__ import annotations

from uuid import UUID


class KindredError(Exception):
    """Base class for every error surfaced to API callers."""

    kind: str = "error"
    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind, "detail": self.message}


class SelfRelationshipError(KindredError):
    kind = "self_relationship"
    status_code = 422

    def __init__(self, person_id: UUID) -> None:
        super().__init__(f"A person cannot be related to themselves ({person_id})")
        self.person_id = person_id


class PersonNotFoundError(KindredError):
    kind = "person_not_found"
    status_code = 404

    def __init__(self, person_id: UUID) -> None:
        super().__init__(f"Person with id {person_id} not found")
        self.person_id = person_id


class DuplicateRelationshipError(KindredError):
    kind = "duplicate_relationship"
    status_code = 409


class InvalidQualifierError(KindredError):
    kind = "invalid_qualifier"
    status_code = 422

    def __init__(self, qualifier: str, relationship_type: str) -> None:
        super().__init__(
            f"'{qualifier}' is not a valid qualifier for {relationship_type} relationships"
        )
        self.qualifier = qualifier
        self.relationship_type = relationship_type


class DateOrderError(KindredError):
    kind = "date_order"
    status_code = 422


class MissingRequiredDateError(KindredError):
    kind = "missing_required_date"
    status_code = 422


class CircularRelationshipError(KindredError):
    kind = "circular_relationship"
    status_code = 409


class NotFoundError(KindredError):
    kind = "not_found"
    status_code = 404


class ConflictError(KindredError):
    kind = "conflict"
    status_code = 409


class PersonInUseError(KindredError):
    kind = "person_in_use"
    status_code = 409
