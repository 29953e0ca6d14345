# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

from kindred.repositories.base import BaseRepository
from kindred.repositories.person_repository import PersonRepository
from kindred.repositories.project_repository import ProjectRepository
from kindred.repositories.relationship_repository import RelationshipRepository

__all__ = [
    "BaseRepository",
    "PersonRepository",
    "ProjectRepository",
    "RelationshipRepository",
]
