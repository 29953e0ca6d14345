# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from kindred.models.person import Person
from kindred.models.project import Project, project_persons
from kindred.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Project)

    async def list_projects(
        self, limit: int = 50, offset: int = 0, status: str | None = None
    ) -> list[Project]:
        stmt = select(Project)
        if status is not None:
            stmt = stmt.where(Project.status == status)
        stmt = stmt.order_by(Project.created_at.desc()).limit(limit).offset(offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_projects(self, status: str | None = None) -> int:
        stmt = select(func.count()).select_from(Project)
        if status is not None:
            stmt = stmt.where(Project.status == status)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def has_person(self, project_id: UUID, person_id: UUID) -> bool:
        result = await self.session.execute(
            select(project_persons.c.person_id).where(
                project_persons.c.project_id == project_id,
                project_persons.c.person_id == person_id,
            )
        )
        return result.first() is not None

    async def add_person(
        self, project_id: UUID, person_id: UUID, notes: str | None = None
    ) -> None:
        await self.session.execute(
            insert(project_persons).values(
                project_id=project_id, person_id=person_id, notes=notes
            )
        )

    async def remove_person(self, project_id: UUID, person_id: UUID) -> bool:
        result = await self.session.execute(
            delete(project_persons).where(
                project_persons.c.project_id == project_id,
                project_persons.c.person_id == person_id,
            )
        )
        return result.rowcount > 0

    async def remove_person_everywhere(self, person_id: UUID) -> None:
        await self.session.execute(
            delete(project_persons).where(project_persons.c.person_id == person_id)
        )

    async def clear_persons(self, project_id: UUID) -> None:
        await self.session.execute(
            delete(project_persons).where(project_persons.c.project_id == project_id)
        )

    async def person_ids(self, project_id: UUID) -> set[UUID]:
        result = await self.session.execute(
            select(project_persons.c.person_id).where(
                project_persons.c.project_id == project_id
            )
        )
        return set(result.scalars().all())

    async def list_persons(self, project_id: UUID) -> list[Person]:
        result = await self.session.execute(
            select(Person)
            .join(project_persons, project_persons.c.person_id == Person.id)
            .where(project_persons.c.project_id == project_id)
            .order_by(Person.last_name, Person.first_name)
        )
        return list(result.scalars().all())
