# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from kindred.models.relationship import Qualifier, Relationship, RelationshipType
from kindred.relationships.deriver import FamilyView, RelationshipDeriver
from kindred.relationships.errors import KindredError, NotFoundError, PersonNotFoundError
from kindred.relationships.graph import RelationshipGraph
from kindred.relationships.locks import graph_write_lock
from kindred.relationships.plausibility import relationship_warnings
from kindred.relationships.validator import RelationshipValidator
from kindred.repositories.person_repository import PersonRepository
from kindred.repositories.project_repository import ProjectRepository

logger = logging.getLogger(__name__)


@dataclass
class SavedRelationship:
    relationship: Relationship
    warnings: list[str] = field(default_factory=list)


class RelationshipService:
    """Transactional entry point for relationship reads and writes.

    Every write validates and persists under the graph lock and commits
    before the lock is released; any failure rolls the whole write back.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.graph = RelationshipGraph(session)
        self.persons = PersonRepository(session)

    @asynccontextmanager
    async def _write(self, action: str) -> AsyncIterator[None]:
        try:
            async with graph_write_lock(self.session):
                yield
                await self.session.commit()
        except KindredError as exc:
            await self.session.rollback()
            logger.info("Rejected relationship %s: %s (%s)", action, exc.kind, exc.message)
            raise
        except BaseException:
            await self.session.rollback()
            raise

    async def _warnings_for(self, edge: Relationship) -> list[str]:
        people = await self.persons.get_many([edge.subject_id, edge.object_id])
        return relationship_warnings(
            edge.relationship_type,
            people[edge.subject_id],
            people[edge.object_id],
            start_date=edge.start_date,
            end_date=edge.end_date,
        )

    async def _require_person(self, person_id: UUID) -> None:
        if not await self.persons.exists(person_id):
            raise PersonNotFoundError(person_id)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(
        self,
        *,
        subject_id: UUID,
        object_id: UUID,
        relationship_type: RelationshipType | str,
        qualifier: Qualifier | str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        notes: str | None = None,
    ) -> SavedRelationship:
        rel_type = RelationshipType(relationship_type)
        async with self._write("create"):
            await RelationshipValidator(self.graph, self.persons).validate_new_edge(
                subject_id,
                object_id,
                rel_type,
                qualifier=qualifier,
                start_date=start_date,
                end_date=end_date,
            )
            edge = Relationship(
                subject_id=subject_id,
                object_id=object_id,
                relationship_type=rel_type.value,
                qualifier=Qualifier(qualifier).value if qualifier is not None else None,
                start_date=start_date,
                end_date=end_date,
                notes=notes,
            )
            await self.graph.add_edge(edge)
            warnings = await self._warnings_for(edge)
        await self.session.refresh(edge)
        return SavedRelationship(edge, warnings)

    async def update(self, edge_id: UUID, patch: Mapping[str, Any]) -> SavedRelationship:
        async with self._write("update"):
            edge = await self.graph.update_edge(edge_id, patch)
            warnings = await self._warnings_for(edge)
        await self.session.refresh(edge)
        return SavedRelationship(edge, warnings)

    async def delete(self, edge_id: UUID) -> None:
        async with self._write("delete"):
            await self.graph.remove_edge(edge_id)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get(self, edge_id: UUID) -> Relationship:
        return await self.graph.get_edge(edge_id)

    async def list_relationships(
        self,
        *,
        limit: int = 50,
        offset: int = 0,
        relationship_type: str | None = None,
        qualifier: str | None = None,
        person_id: UUID | None = None,
        status: str | None = None,
    ) -> tuple[list[Relationship], int]:
        filters = {
            "relationship_type": relationship_type,
            "qualifier": qualifier,
            "person_id": person_id,
            "status": status,
        }
        items = await self.graph.repo.list_relationships(limit=limit, offset=offset, **filters)
        total = await self.graph.repo.count_relationships(**filters)
        return items, total

    async def for_person(
        self, person_id: UUID, relationship_type: str | None = None
    ) -> list[Relationship]:
        await self._require_person(person_id)
        return await self.graph.edges_for_person(person_id, relationship_type)

    async def between(self, person_a: UUID, person_b: UUID) -> list[Relationship]:
        await self._require_person(person_a)
        await self._require_person(person_b)
        return await self.graph.edges_between(person_a, person_b)

    async def family(self, person_id: UUID) -> FamilyView:
        await self._require_person(person_id)
        return await RelationshipDeriver(self.graph).derive(person_id)

    async def path(
        self, person_a: UUID, person_b: UUID, max_depth: int = 5
    ) -> list[Relationship]:
        await self._require_person(person_a)
        await self._require_person(person_b)
        return await self.graph.find_path(person_a, person_b, max_depth=max_depth)

    async def for_project(self, project_id: UUID) -> list[Relationship]:
        projects = ProjectRepository(self.session)
        if not await projects.exists(project_id):
            raise NotFoundError(f"Project with id {project_id} not found")
        member_ids = await projects.person_ids(project_id)
        return await self.graph.repo.get_within(member_ids)
