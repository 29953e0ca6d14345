# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

"""Serialization of relationship-graph writes.

Duplicate and cycle checks read the edge set before inserting into it.
Two concurrent inserts could each see "no cycle" and together create one,
so every check-then-write runs under the graph lock. Parent chains can
join any two persons, hence one lock for the whole graph.
"""

from __future__ import annotations

import asyncio
import weakref
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

# Arbitrary constant key for pg_advisory_xact_lock
GRAPH_ADVISORY_LOCK_KEY = 0x4B494E44

_loop_locks: weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, asyncio.Lock] = (
    weakref.WeakKeyDictionary()
)


def _local_lock() -> asyncio.Lock:
    loop = asyncio.get_running_loop()
    lock = _loop_locks.get(loop)
    if lock is None:
        lock = asyncio.Lock()
        _loop_locks[loop] = lock
    return lock


@asynccontextmanager
async def graph_write_lock(session: AsyncSession) -> AsyncIterator[None]:
    """Hold the graph lock for the current transaction.

    In-process writers queue on an asyncio lock. On PostgreSQL the
    transaction also takes an advisory lock, released at commit or
    rollback, which covers other worker processes.
    """
    async with _local_lock():
        if session.get_bind().dialect.name == "postgresql":
            await session.execute(
                text("SELECT pg_advisory_xact_lock(:key)"),
                {"key": GRAPH_ADVISORY_LOCK_KEY},
            )
        yield
