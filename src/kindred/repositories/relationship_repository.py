# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

from __future__ import annotations

from collections.abc import Collection
from datetime import date
from uuid import UUID

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from kindred.models.relationship import Relationship
from kindred.repositories.base import BaseRepository


class RelationshipRepository(BaseRepository[Relationship]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Relationship)

    async def get_relationships_for_person(
        self,
        person_id: UUID,
        direction: str = "both",
        relationship_type: str | None = None,
    ) -> list[Relationship]:
        return await self.get_relationships_for_persons(
            [person_id], direction=direction, relationship_type=relationship_type
        )

    async def get_relationships_for_persons(
        self,
        person_ids: Collection[UUID],
        direction: str = "both",
        relationship_type: str | None = None,
    ) -> list[Relationship]:
        if not person_ids:
            return []
        person_ids = list(person_ids)
        if direction == "outgoing":
            stmt = select(Relationship).where(Relationship.subject_id.in_(person_ids))
        elif direction == "incoming":
            stmt = select(Relationship).where(Relationship.object_id.in_(person_ids))
        else:
            stmt = select(Relationship).where(
                Relationship.subject_id.in_(person_ids)
                | Relationship.object_id.in_(person_ids)
            )
        if relationship_type is not None:
            stmt = stmt.where(Relationship.relationship_type == relationship_type)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_between(self, person_a: UUID, person_b: UUID) -> list[Relationship]:
        result = await self.session.execute(
            select(Relationship).where(
                or_(
                    and_(
                        Relationship.subject_id == person_a,
                        Relationship.object_id == person_b,
                    ),
                    and_(
                        Relationship.subject_id == person_b,
                        Relationship.object_id == person_a,
                    ),
                )
            )
        )
        return list(result.scalars().all())

    async def get_within(self, person_ids: Collection[UUID]) -> list[Relationship]:
        """Return edges whose endpoints both belong to ``person_ids``."""
        if not person_ids:
            return []
        person_ids = list(person_ids)
        result = await self.session.execute(
            select(Relationship).where(
                Relationship.subject_id.in_(person_ids),
                Relationship.object_id.in_(person_ids),
            )
        )
        return list(result.scalars().all())

    async def count_for_person(self, person_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(Relationship)
            .where(
                (Relationship.subject_id == person_id)
                | (Relationship.object_id == person_id)
            )
        )
        return result.scalar_one()

    def _filtered(  # type: ignore[no-untyped-def]
        self,
        stmt,
        *,
        relationship_type: str | None,
        qualifier: str | None,
        person_id: UUID | None,
        status: str | None,
        today: date | None,
    ):
        if relationship_type is not None:
            stmt = stmt.where(Relationship.relationship_type == relationship_type)
        if qualifier is not None:
            stmt = stmt.where(Relationship.qualifier == qualifier)
        if person_id is not None:
            stmt = stmt.where(
                (Relationship.subject_id == person_id)
                | (Relationship.object_id == person_id)
            )
        if status is not None:
            today = today or date.today()
            if status == "active":
                stmt = stmt.where(
                    (Relationship.end_date.is_(None)) | (Relationship.end_date > today)
                )
            elif status == "ended":
                stmt = stmt.where(Relationship.end_date <= today)
        return stmt

    async def list_relationships(
        self,
        limit: int = 50,
        offset: int = 0,
        relationship_type: str | None = None,
        qualifier: str | None = None,
        person_id: UUID | None = None,
        status: str | None = None,
        today: date | None = None,
    ) -> list[Relationship]:
        stmt = self._filtered(
            select(Relationship),
            relationship_type=relationship_type,
            qualifier=qualifier,
            person_id=person_id,
            status=status,
            today=today,
        )
        stmt = stmt.order_by(Relationship.created_at, Relationship.id).limit(limit).offset(offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_relationships(
        self,
        relationship_type: str | None = None,
        qualifier: str | None = None,
        person_id: UUID | None = None,
        status: str | None = None,
        today: date | None = None,
    ) -> int:
        stmt = self._filtered(
            select(func.count()).select_from(Relationship),
            relationship_type=relationship_type,
            qualifier=qualifier,
            person_id=person_id,
            status=status,
            today=today,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()
