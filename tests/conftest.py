# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

from __future__ import annotations

import os

# Settings are read at app import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from collections.abc import AsyncIterator  # noqa: E402
from datetime import date  # noqa: E402
from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from kindred.db.session import enable_sqlite_foreign_keys  # noqa: E402
from kindred.models import Base, Person, Relationship  # noqa: E402


def _get_test_database_url() -> str:
    """Return the test database URL from env, falling back to in-memory SQLite."""
    return os.environ.get(
        "TEST_DATABASE_URL",
        "sqlite+aiosqlite:///:memory:",
    )


@pytest.fixture
async def async_engine() -> AsyncIterator[AsyncEngine]:
    """Create an async engine for the test database."""
    url = _get_test_database_url()
    if url.startswith("sqlite"):
        # One shared connection so every session sees the same in-memory database
        engine = create_async_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        enable_sqlite_foreign_keys(engine)
    else:
        engine = create_async_engine(url, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Provide a database session that rolls back anything left uncommitted."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncClient]:
    """HTTP client against the app, bound to the test database."""
    from kindred.api.relationships import limiter
    from kindred.db.session import get_db
    from kindred.main import app

    async def _override_get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db
    limiter.enabled = False
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    limiter.enabled = True
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Factory helpers for creating model instances in tests
# ---------------------------------------------------------------------------


def make_person(
    *,
    first_name: str = "Test",
    last_name: str = "Person",
    gender: str = "unknown",
    birth_date: date | None = None,
    death_date: date | None = None,
) -> dict[str, object]:
    """Return kwargs suitable for constructing a Person model instance."""
    return {
        "id": uuid4(),
        "first_name": first_name,
        "last_name": last_name,
        "gender": gender,
        "birth_date": birth_date,
        "death_date": death_date,
    }


def make_project(
    *,
    title: str = "Test Project",
    status: str = "active",
) -> dict[str, object]:
    """Return kwargs suitable for constructing a Project model instance."""
    return {
        "id": uuid4(),
        "title": title,
        "description": None,
        "status": status,
    }


def make_relationship(
    *,
    subject_id: object,
    object_id: object,
    relationship_type: str = "parent",
    qualifier: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> dict[str, object]:
    """Return kwargs suitable for constructing a Relationship model instance."""
    return {
        "id": uuid4(),
        "subject_id": subject_id,
        "object_id": object_id,
        "relationship_type": relationship_type,
        "qualifier": qualifier,
        "start_date": start_date,
        "end_date": end_date,
    }


async def add_persons(session: AsyncSession, *names: str) -> dict[str, Person]:
    """Insert one person per name and return them keyed by name."""
    people = {name: Person(**make_person(first_name=name)) for name in names}
    session.add_all(people.values())
    await session.flush()
    return people


async def link_parent(session: AsyncSession, parent: Person, child: Person) -> Relationship:
    """Store a parent edge directly, bypassing validation."""
    edge = Relationship(**make_relationship(subject_id=parent.id, object_id=child.id))
    session.add(edge)
    await session.flush()
    return edge


async def link_spouses(
    session: AsyncSession, a: Person, b: Person, married: date = date(2000, 6, 1)
) -> Relationship:
    edge = Relationship(
        **make_relationship(
            subject_id=a.id,
            object_id=b.id,
            relationship_type="spouse",
            start_date=married,
        )
    )
    session.add(edge)
    await session.flush()
    return edge
