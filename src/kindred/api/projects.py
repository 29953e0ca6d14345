# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from kindred.db.session import get_db
from kindred.models.project import Project, ProjectStatus
from kindred.relationships.errors import ConflictError, NotFoundError, PersonNotFoundError
from kindred.relationships.service import RelationshipService
from kindred.repositories.person_repository import PersonRepository
from kindred.repositories.project_repository import ProjectRepository
from kindred.schemas.common import PaginatedResponse
from kindred.schemas.person import PersonSummary
from kindred.schemas.project import (
    ProjectCreate,
    ProjectPersonAdd,
    ProjectResponse,
    ProjectUpdate,
)
from kindred.schemas.relationship import RelationshipResponse

router = APIRouter(prefix="/projects", tags=["projects"])


async def _get_project_or_404(repo: ProjectRepository, project_id: UUID) -> Project:
    project = await repo.get_by_id(project_id)
    if project is None:
        raise NotFoundError(f"Project with id {project_id} not found")
    return project


@router.get("", response_model=PaginatedResponse[ProjectResponse])
async def list_projects(
    status: ProjectStatus | None = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[ProjectResponse]:
    repo = ProjectRepository(db)
    status_value = status.value if status else None
    projects = await repo.list_projects(limit=limit, offset=offset, status=status_value)
    total = await repo.count_projects(status=status_value)
    items = [ProjectResponse.model_validate(p) for p in projects]
    return PaginatedResponse(items=items, total=total, limit=limit, offset=offset)


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(
    body: ProjectCreate,
    db: AsyncSession = Depends(get_db),
) -> ProjectResponse:
    project = Project(
        title=body.title,
        description=body.description,
        status=body.status.value,
    )
    project = await ProjectRepository(db).create(project)
    await db.commit()
    await db.refresh(project)
    return ProjectResponse.model_validate(project)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> ProjectResponse:
    project = await _get_project_or_404(ProjectRepository(db), project_id)
    return ProjectResponse.model_validate(project)


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: UUID,
    body: ProjectUpdate,
    db: AsyncSession = Depends(get_db),
) -> ProjectResponse:
    project = await _get_project_or_404(ProjectRepository(db), project_id)
    changes = body.model_dump(exclude_unset=True)
    for field in ("title", "status"):
        if field in changes and changes[field] is None:
            raise HTTPException(status_code=422, detail=f"{field} cannot be cleared")
    if "status" in changes:
        changes["status"] = changes["status"].value
    for field, value in changes.items():
        setattr(project, field, value)
    await db.commit()
    await db.refresh(project)
    return ProjectResponse.model_validate(project)


@router.delete("/{project_id}", status_code=204)
async def delete_project(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Delete a project. Its persons and their relationships are kept."""
    repo = ProjectRepository(db)
    project = await _get_project_or_404(repo, project_id)
    await repo.clear_persons(project_id)
    await repo.delete(project)
    await db.commit()
    return Response(status_code=204)


@router.get("/{project_id}/persons", response_model=list[PersonSummary])
async def list_project_persons(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> list[PersonSummary]:
    repo = ProjectRepository(db)
    await _get_project_or_404(repo, project_id)
    persons = await repo.list_persons(project_id)
    return [PersonSummary.model_validate(p) for p in persons]


@router.post("/{project_id}/persons", status_code=204)
async def add_project_person(
    project_id: UUID,
    body: ProjectPersonAdd,
    db: AsyncSession = Depends(get_db),
) -> Response:
    repo = ProjectRepository(db)
    await _get_project_or_404(repo, project_id)
    if not await PersonRepository(db).exists(body.person_id):
        raise PersonNotFoundError(body.person_id)
    if await repo.has_person(project_id, body.person_id):
        raise ConflictError(f"Person {body.person_id} is already in project {project_id}")
    await repo.add_person(project_id, body.person_id, notes=body.notes)
    await db.commit()
    return Response(status_code=204)


@router.delete("/{project_id}/persons/{person_id}", status_code=204)
async def remove_project_person(
    project_id: UUID,
    person_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> Response:
    repo = ProjectRepository(db)
    await _get_project_or_404(repo, project_id)
    if not await repo.remove_person(project_id, person_id):
        raise NotFoundError(f"Person {person_id} is not in project {project_id}")
    await db.commit()
    return Response(status_code=204)


@router.get("/{project_id}/relationships", response_model=list[RelationshipResponse])
async def list_project_relationships(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> list[RelationshipResponse]:
    """Relationships whose endpoints are both members of the project."""
    relationships = await RelationshipService(db).for_project(project_id)
    return [RelationshipResponse.model_validate(r) for r in relationships]
