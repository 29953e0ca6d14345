# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

from fastapi import APIRouter

from kindred.api.persons import router as persons_router
from kindred.api.projects import router as projects_router
from kindred.api.relationships import router as relationships_router

v1_router = APIRouter()
v1_router.include_router(persons_router)
v1_router.include_router(projects_router)
v1_router.include_router(relationships_router)
