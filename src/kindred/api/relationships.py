# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.ext.asyncio import AsyncSession

from kindred.config import get_settings
from kindred.db.session import get_db
from kindred.models.relationship import Qualifier, Relationship, RelationshipType
from kindred.relationships.service import RelationshipService, SavedRelationship
from kindred.schemas.common import PaginatedResponse
from kindred.schemas.relationship import (
    RelationshipCreate,
    RelationshipPathResponse,
    RelationshipResponse,
    RelationshipSavedResponse,
    RelationshipUpdate,
)

limiter = Limiter(key_func=get_remote_address)

router = APIRouter(prefix="/relationships", tags=["relationships"])


def _write_limit() -> str:
    return get_settings().relationship_write_rate_limit


def _saved_response(saved: SavedRelationship) -> RelationshipSavedResponse:
    base = RelationshipResponse.model_validate(saved.relationship)
    return RelationshipSavedResponse(**base.model_dump(), warnings=saved.warnings)


def _path_response(start_id: UUID, path: list[Relationship]) -> RelationshipPathResponse:
    person_ids = [start_id] if path else []
    for edge in path:
        person_ids.append(edge.other(person_ids[-1]))
    return RelationshipPathResponse(
        person_ids=person_ids,
        relationships=[RelationshipResponse.model_validate(e) for e in path],
        length=len(path),
    )


@router.get("", response_model=PaginatedResponse[RelationshipResponse])
async def list_relationships(
    relationship_type: RelationshipType | None = Query(None),
    qualifier: Qualifier | None = Query(None),
    person_id: UUID | None = Query(None),
    status: str | None = Query(None, pattern="^(active|ended)$"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[RelationshipResponse]:
    service = RelationshipService(db)
    relationships, total = await service.list_relationships(
        limit=limit,
        offset=offset,
        relationship_type=relationship_type.value if relationship_type else None,
        qualifier=qualifier.value if qualifier else None,
        person_id=person_id,
        status=status,
    )
    items = [RelationshipResponse.model_validate(r) for r in relationships]
    return PaginatedResponse(items=items, total=total, limit=limit, offset=offset)


@router.post("", response_model=RelationshipSavedResponse, status_code=201)
@limiter.limit(_write_limit)
async def create_relationship(
    request: Request,
    body: RelationshipCreate,
    db: AsyncSession = Depends(get_db),
) -> RelationshipSavedResponse:
    saved = await RelationshipService(db).create(
        subject_id=body.subject_id,
        object_id=body.object_id,
        relationship_type=body.relationship_type,
        qualifier=body.qualifier,
        start_date=body.start_date,
        end_date=body.end_date,
        notes=body.notes,
    )
    return _saved_response(saved)


@router.get("/between/{person_a}/{person_b}", response_model=list[RelationshipResponse])
async def get_relationships_between(
    person_a: UUID,
    person_b: UUID,
    db: AsyncSession = Depends(get_db),
) -> list[RelationshipResponse]:
    relationships = await RelationshipService(db).between(person_a, person_b)
    return [RelationshipResponse.model_validate(r) for r in relationships]


@router.get("/path/{person_a}/{person_b}", response_model=RelationshipPathResponse)
async def get_relationship_path(
    person_a: UUID,
    person_b: UUID,
    max_depth: int | None = Query(None, ge=1, le=20),
    db: AsyncSession = Depends(get_db),
) -> RelationshipPathResponse:
    """Shortest chain of stored relationships connecting two persons."""
    depth = max_depth or get_settings().max_path_depth
    path = await RelationshipService(db).path(person_a, person_b, max_depth=depth)
    return _path_response(person_a, path)


@router.get("/{relationship_id}", response_model=RelationshipResponse)
async def get_relationship(
    relationship_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> RelationshipResponse:
    relationship = await RelationshipService(db).get(relationship_id)
    return RelationshipResponse.model_validate(relationship)


@router.patch("/{relationship_id}", response_model=RelationshipSavedResponse)
@limiter.limit(_write_limit)
async def update_relationship(
    request: Request,
    relationship_id: UUID,
    body: RelationshipUpdate,
    db: AsyncSession = Depends(get_db),
) -> RelationshipSavedResponse:
    saved = await RelationshipService(db).update(relationship_id, body.patch())
    return _saved_response(saved)


@router.delete("/{relationship_id}", status_code=204)
@limiter.limit(_write_limit)
async def delete_relationship(
    request: Request,
    relationship_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> Response:
    await RelationshipService(db).delete(relationship_id)
    return Response(status_code=204)
