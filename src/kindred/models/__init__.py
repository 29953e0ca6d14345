# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

from kindred.models.base import Base, TimestampMixin, UUIDMixin
from kindred.models.person import Gender, Person
from kindred.models.project import Project, ProjectStatus, project_persons
from kindred.models.relationship import Qualifier, Relationship, RelationshipType

__all__ = [
    "Base",
    "Gender",
    "Person",
    "Project",
    "ProjectStatus",
    "Qualifier",
    "Relationship",
    "RelationshipType",
    "TimestampMixin",
    "UUIDMixin",
    "project_persons",
]
