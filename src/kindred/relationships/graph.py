# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from kindred.models.relationship import Relationship, RelationshipType
from kindred.relationships.errors import ConflictError, NotFoundError
from kindred.relationships.policy import is_symmetric
from kindred.repositories.relationship_repository import RelationshipRepository

logger = logging.getLogger(__name__)

MUTABLE_FIELDS = frozenset(
    {"relationship_type", "qualifier", "start_date", "end_date", "notes"}
)


def _column_value(value: Any) -> Any:
    return value.value if isinstance(value, enum.Enum) else value


class RelationshipGraph:
    """The authoritative set of relationship edges, with graph queries.

    Wraps the relationship table for one session. Mutations only flush;
    committing is the caller's transactional boundary.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = RelationshipRepository(session)

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    async def get_edge(self, edge_id: UUID) -> Relationship:
        edge = await self.repo.get_by_id(edge_id)
        if edge is None:
            raise NotFoundError(f"Relationship with id {edge_id} not found")
        return edge

    async def find_structural_duplicate(
        self,
        subject_id: UUID,
        object_id: UUID,
        relationship_type: RelationshipType | str,
    ) -> Relationship | None:
        """Find an edge encoding the same fact (spouse pairs are unordered)."""
        rel_type = RelationshipType(relationship_type)
        for edge in await self.repo.get_between(subject_id, object_id):
            if edge.relationship_type != rel_type.value:
                continue
            if is_symmetric(rel_type) or edge.subject_id == subject_id:
                return edge
        return None

    async def add_edge(self, edge: Relationship) -> UUID:
        """Insert an already validated edge and return its id."""
        existing = await self.find_structural_duplicate(
            edge.subject_id, edge.object_id, edge.relationship_type
        )
        if existing is not None:
            raise ConflictError(
                f"Relationship {existing.id} already records this "
                f"{edge.relationship_type} fact"
            )
        self.session.add(edge)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(
                f"A {edge.relationship_type} relationship between these persons already exists"
            ) from exc
        logger.info(
            "Added %s edge %s (%s -> %s)",
            edge.relationship_type, edge.id, edge.subject_id, edge.object_id,
        )
        return edge.id

    async def remove_edge(self, edge_id: UUID) -> None:
        edge = await self.get_edge(edge_id)
        await self.repo.delete(edge)
        logger.info("Removed %s edge %s", edge.relationship_type, edge_id)

    async def update_edge(self, edge_id: UUID, patch: Mapping[str, Any]) -> Relationship:
        """Apply mutable-field changes after re-validating what they touch.

        Endpoints are immutable; changing who is related means deleting the
        edge and creating a new one.
        """
        from kindred.relationships.validator import RelationshipValidator

        unknown = set(patch) - MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Immutable or unknown relationship fields: {sorted(unknown)}")

        edge = await self.get_edge(edge_id)
        changes = {
            field: _column_value(value)
            for field, value in patch.items()
            if getattr(edge, field) != _column_value(value)
        }
        if not changes:
            return edge

        await RelationshipValidator(self).validate_edge_update(edge, changes)

        for field, value in changes.items():
            setattr(edge, field, value)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Update collides with an existing relationship") from exc
        logger.info("Updated edge %s fields=%s", edge_id, sorted(changes))
        return edge

    # ------------------------------------------------------------------
    # Neighbor queries
    # ------------------------------------------------------------------

    async def parents_of(self, person_id: UUID) -> set[UUID]:
        edges = await self.repo.get_relationships_for_person(
            person_id, direction="incoming", relationship_type=RelationshipType.PARENT.value
        )
        return {e.subject_id for e in edges}

    async def children_of(self, person_id: UUID) -> set[UUID]:
        edges = await self.repo.get_relationships_for_person(
            person_id, direction="outgoing", relationship_type=RelationshipType.PARENT.value
        )
        return {e.object_id for e in edges}

    async def spouses_of(self, person_id: UUID) -> set[UUID]:
        edges = await self.repo.get_relationships_for_person(
            person_id, relationship_type=RelationshipType.SPOUSE.value
        )
        return {e.other(person_id) for e in edges}

    async def edges_between(self, person_a: UUID, person_b: UUID) -> list[Relationship]:
        return await self.repo.get_between(person_a, person_b)

    async def edges_for_person(
        self, person_id: UUID, relationship_type: str | None = None
    ) -> list[Relationship]:
        return await self.repo.get_relationships_for_person(
            person_id, relationship_type=relationship_type
        )

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    async def is_ancestor(self, candidate_ancestor_id: UUID, person_id: UUID) -> bool:
        """Whether ``candidate_ancestor_id`` is reachable upward from ``person_id``.

        Level-by-level BFS along parent edges, one query per generation.
        The visited set makes this terminate on any stored data.
        """
        visited: set[UUID] = {person_id}
        frontier: set[UUID] = {person_id}

        while frontier:
            edges = await self.repo.get_relationships_for_persons(
                frontier,
                direction="incoming",
                relationship_type=RelationshipType.PARENT.value,
            )
            next_frontier: set[UUID] = set()
            for edge in edges:
                parent_id = edge.subject_id
                if parent_id == candidate_ancestor_id:
                    return True
                if parent_id not in visited:
                    visited.add(parent_id)
                    next_frontier.add(parent_id)
            frontier = next_frontier

        return False

    async def find_path(
        self, start_id: UUID, goal_id: UUID, max_depth: int = 5
    ) -> list[Relationship]:
        """Shortest chain of stored edges linking two persons.

        Edges are walked in both directions regardless of type. Returns an
        empty list when the persons are identical or not connected within
        ``max_depth`` hops.
        """
        if start_id == goal_id:
            return []

        came_from: dict[UUID, tuple[UUID, Relationship]] = {}
        visited: set[UUID] = {start_id}
        current_level: list[UUID] = [start_id]
        depth = 0

        while current_level and depth < max_depth:
            edges = await self.repo.get_relationships_for_persons(current_level)
            # Stable order keeps results reproducible across calls
            edges.sort(key=lambda e: (str(e.subject_id), str(e.object_id), e.relationship_type))
            in_level = set(current_level)

            next_level: list[UUID] = []
            for edge in edges:
                for here, there in (
                    (edge.subject_id, edge.object_id),
                    (edge.object_id, edge.subject_id),
                ):
                    if here not in in_level or there in visited:
                        continue
                    visited.add(there)
                    came_from[there] = (here, edge)
                    if there == goal_id:
                        return self._unwind(came_from, start_id, goal_id)
                    next_level.append(there)

            current_level = next_level
            depth += 1

        return []

    @staticmethod
    def _unwind(
        came_from: dict[UUID, tuple[UUID, Relationship]], start_id: UUID, goal_id: UUID
    ) -> list[Relationship]:
        path: list[Relationship] = []
        node = goal_id
        while node != start_id:
            node, edge = came_from[node]
            path.append(edge)
        path.reverse()
        return path
