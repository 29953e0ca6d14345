# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

"""Admission rules for relationship edges.

Checks run in a fixed order and stop at the first failure, so callers
always receive exactly one error kind:

1. self reference
2. both persons exist
3. duplicate or contradicting edge
4. qualifier legal for the type
5. end date not before start date
6. spouse edges carry a start (marriage) date
7. a parent edge does not make anyone their own ancestor
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import TYPE_CHECKING, Any
from uuid import UUID

from kindred.models.relationship import Qualifier, Relationship, RelationshipType
from kindred.relationships import policy
from kindred.relationships.errors import (
    CircularRelationshipError,
    DuplicateRelationshipError,
    PersonNotFoundError,
    SelfRelationshipError,
)
from kindred.repositories.person_repository import PersonRepository

if TYPE_CHECKING:
    from kindred.relationships.graph import RelationshipGraph


class RelationshipValidator:
    def __init__(
        self, graph: RelationshipGraph, persons: PersonRepository | None = None
    ) -> None:
        self.graph = graph
        self.persons = persons or PersonRepository(graph.session)

    async def validate_new_edge(
        self,
        subject_id: UUID,
        object_id: UUID,
        relationship_type: RelationshipType | str,
        qualifier: Qualifier | str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> None:
        """Raise the first violated rule's error, or return None if admissible."""
        rel_type = RelationshipType(relationship_type)

        if subject_id == object_id:
            raise SelfRelationshipError(subject_id)

        for person_id in (subject_id, object_id):
            if not await self.persons.exists(person_id):
                raise PersonNotFoundError(person_id)

        await self._check_duplicate(subject_id, object_id, rel_type)

        policy.check_qualifier(rel_type, qualifier)
        policy.check_date_order(start_date, end_date)
        policy.check_required_dates(rel_type, start_date)

        if rel_type is RelationshipType.PARENT:
            await self._check_cycle(subject_id, object_id)

    async def validate_edge_update(
        self, edge: Relationship, changes: Mapping[str, Any]
    ) -> None:
        """Re-run the checks touched by ``changes``, in creation order.

        Endpoints never change after creation, so self and existence checks
        are not repeated. A type change re-checks duplicates like a new edge.
        """
        rel_type = RelationshipType(changes.get("relationship_type", edge.relationship_type))
        qualifier = changes.get("qualifier", edge.qualifier)
        start_date = changes.get("start_date", edge.start_date)
        end_date = changes.get("end_date", edge.end_date)
        type_changed = "relationship_type" in changes

        if type_changed:
            await self._check_duplicate(edge.subject_id, edge.object_id, rel_type)
        if type_changed or "qualifier" in changes:
            policy.check_qualifier(rel_type, qualifier)
        if "start_date" in changes or "end_date" in changes:
            policy.check_date_order(start_date, end_date)
        if type_changed or "start_date" in changes:
            policy.check_required_dates(rel_type, start_date)
        if type_changed and rel_type is RelationshipType.PARENT:
            await self._check_cycle(edge.subject_id, edge.object_id)

    async def _check_duplicate(
        self, subject_id: UUID, object_id: UUID, rel_type: RelationshipType
    ) -> None:
        for edge in await self.graph.edges_between(subject_id, object_id):
            if edge.relationship_type != rel_type.value:
                continue
            same_direction = edge.subject_id == subject_id
            if policy.is_symmetric(rel_type) or same_direction:
                raise DuplicateRelationshipError(
                    f"A relationship of type '{rel_type.value}' already exists "
                    "between these people"
                )
            # parent(B, A) already stored while proposing parent(A, B)
            raise DuplicateRelationshipError(
                "The proposed parent is already recorded as a child of this person"
            )

    async def _check_cycle(self, parent_id: UUID, child_id: UUID) -> None:
        if await self.graph.is_ancestor(child_id, parent_id):
            raise CircularRelationshipError(
                f"Circular relationship: {child_id} is already an ancestor of {parent_id}"
            )
