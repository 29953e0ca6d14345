# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

from __future__ import annotations

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from kindred.models.person import Person
from kindred.repositories.base import BaseRepository


class PersonRepository(BaseRepository[Person]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Person)

    def _filtered(self, stmt, search: str | None):  # type: ignore[no-untyped-def]
        if search:
            pattern = f"%{search.lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(Person.first_name).like(pattern),
                    func.lower(Person.last_name).like(pattern),
                    func.lower(Person.maiden_name).like(pattern),
                )
            )
        return stmt

    async def list_persons(
        self, limit: int = 50, offset: int = 0, search: str | None = None
    ) -> list[Person]:
        stmt = self._filtered(select(Person), search)
        stmt = stmt.order_by(Person.last_name, Person.first_name).limit(limit).offset(offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_persons(self, search: str | None = None) -> int:
        stmt = self._filtered(select(func.count()).select_from(Person), search)
        result = await self.session.execute(stmt)
        return result.scalar_one()
