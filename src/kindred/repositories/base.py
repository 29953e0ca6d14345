# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

from __future__ import annotations

from collections.abc import Iterable
from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kindred.models.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Primary-key access shared by every entity repository.

    Writes only flush; the caller owns the transaction.
    """

    def __init__(self, session: AsyncSession, model: type[T]) -> None:
        self.session = session
        self.model = model

    async def get_by_id(self, entity_id: UUID) -> T | None:
        return await self.session.get(self.model, entity_id)

    async def get_many(self, entity_ids: Iterable[UUID]) -> dict[UUID, T]:
        """Load several rows in one query, keyed by id. Missing ids are omitted."""
        ids = list(entity_ids)
        if not ids:
            return {}
        result = await self.session.execute(
            select(self.model).where(self.model.id.in_(ids))  # type: ignore[attr-defined]
        )
        return {entity.id: entity for entity in result.scalars().all()}  # type: ignore[attr-defined]

    async def exists(self, entity_id: UUID) -> bool:
        result = await self.session.execute(
            select(self.model.id).where(self.model.id == entity_id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none() is not None

    async def create(self, entity: T) -> T:
        self.session.add(entity)
        await self.session.flush()
        return entity

    async def delete(self, entity: T) -> None:
        await self.session.delete(entity)
        await self.session.flush()
