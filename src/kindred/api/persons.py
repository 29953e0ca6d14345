# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from kindred.db.session import get_db
from kindred.models.person import Person
from kindred.models.relationship import RelationshipType
from kindred.relationships.deriver import CATEGORIES
from kindred.relationships.errors import PersonInUseError, PersonNotFoundError
from kindred.relationships.service import RelationshipService
from kindred.repositories.person_repository import PersonRepository
from kindred.repositories.project_repository import ProjectRepository
from kindred.repositories.relationship_repository import RelationshipRepository
from kindred.schemas.common import PaginatedResponse
from kindred.schemas.person import PersonCreate, PersonResponse, PersonSummary, PersonUpdate
from kindred.schemas.relationship import FamilyResponse, RelationshipResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/persons", tags=["persons"])


async def _get_person_or_404(repo: PersonRepository, person_id: UUID) -> Person:
    person = await repo.get_by_id(person_id)
    if person is None:
        raise PersonNotFoundError(person_id)
    return person


@router.get("", response_model=PaginatedResponse[PersonResponse])
async def list_persons(
    search: str | None = Query(None, max_length=100),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[PersonResponse]:
    repo = PersonRepository(db)
    persons = await repo.list_persons(limit=limit, offset=offset, search=search)
    total = await repo.count_persons(search=search)
    items = [PersonResponse.model_validate(p) for p in persons]
    return PaginatedResponse(items=items, total=total, limit=limit, offset=offset)


@router.post("", response_model=PersonResponse, status_code=201)
async def create_person(
    body: PersonCreate,
    db: AsyncSession = Depends(get_db),
) -> PersonResponse:
    repo = PersonRepository(db)
    data = body.model_dump()
    data["gender"] = body.gender.value
    person = await repo.create(Person(**data))
    await db.commit()
    await db.refresh(person)
    logger.info("Created person %s", person.id)
    return PersonResponse.model_validate(person)


@router.get("/{person_id}", response_model=PersonResponse)
async def get_person(
    person_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> PersonResponse:
    person = await _get_person_or_404(PersonRepository(db), person_id)
    return PersonResponse.model_validate(person)


@router.patch("/{person_id}", response_model=PersonResponse)
async def update_person(
    person_id: UUID,
    body: PersonUpdate,
    db: AsyncSession = Depends(get_db),
) -> PersonResponse:
    person = await _get_person_or_404(PersonRepository(db), person_id)

    changes = body.model_dump(exclude_unset=True)
    for field in ("first_name", "last_name", "gender"):
        if field in changes and changes[field] is None:
            raise HTTPException(status_code=422, detail=f"{field} cannot be cleared")
    if "gender" in changes:
        changes["gender"] = changes["gender"].value

    birth = changes.get("birth_date", person.birth_date)
    death = changes.get("death_date", person.death_date)
    if birth and death and death < birth:
        raise HTTPException(
            status_code=422, detail="death_date must not be before birth_date"
        )

    for field, value in changes.items():
        setattr(person, field, value)
    await db.commit()
    await db.refresh(person)
    return PersonResponse.model_validate(person)


@router.delete("/{person_id}", status_code=204)
async def delete_person(
    person_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Delete a person that no relationship references."""
    repo = PersonRepository(db)
    person = await _get_person_or_404(repo, person_id)

    in_use = await RelationshipRepository(db).count_for_person(person_id)
    if in_use:
        raise PersonInUseError(
            f"Person {person_id} is referenced by {in_use} relationship(s); "
            "delete those first"
        )
    await ProjectRepository(db).remove_person_everywhere(person_id)
    await repo.delete(person)
    await db.commit()
    logger.info("Deleted person %s", person_id)
    return Response(status_code=204)


@router.get("/{person_id}/relationships", response_model=list[RelationshipResponse])
async def get_person_relationships(
    person_id: UUID,
    relationship_type: RelationshipType | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> list[RelationshipResponse]:
    relationships = await RelationshipService(db).for_person(
        person_id, relationship_type.value if relationship_type else None
    )
    return [RelationshipResponse.model_validate(r) for r in relationships]


@router.get("/{person_id}/family", response_model=FamilyResponse)
async def get_person_family(
    person_id: UUID,
    categories: list[str] | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> FamilyResponse:
    """Parents, spouses and children plus all derived family categories."""
    requested = categories or list(CATEGORIES)
    unknown = [c for c in requested if c not in CATEGORIES]
    if unknown:
        raise HTTPException(
            status_code=422,
            detail=f"Unknown categories {unknown}; choose from {list(CATEGORIES)}",
        )

    view = await RelationshipService(db).family(person_id)
    people = await PersonRepository(db).get_many(view.all_person_ids())

    def summaries(ids: set[UUID]) -> list[PersonSummary]:
        members = sorted(
            (people[i] for i in ids if i in people),
            key=lambda p: (p.last_name, p.first_name, str(p.id)),
        )
        return [PersonSummary.model_validate(p) for p in members]

    return FamilyResponse(
        person_id=person_id,
        categories={name: summaries(view.category(name)) for name in requested},
    )
