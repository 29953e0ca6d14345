# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

"""Extended-family views computed from stored parent and spouse edges.

Nothing here is persisted; every view is recomputed from the current
edges. A deriver memoizes neighbor lookups for its own lifetime only, so
create one per request.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field, fields
from uuid import UUID

from kindred.relationships.graph import RelationshipGraph

# Most specific first. A person lands in the first category that reaches them.
CATEGORIES: tuple[str, ...] = (
    "parents",
    "children",
    "spouses",
    "siblings",
    "grandparents",
    "grandchildren",
    "aunts_uncles",
    "nieces_nephews",
    "cousins",
)


@dataclass
class FamilyView:
    person_id: UUID
    parents: set[UUID] = field(default_factory=set)
    children: set[UUID] = field(default_factory=set)
    spouses: set[UUID] = field(default_factory=set)
    siblings: set[UUID] = field(default_factory=set)
    grandparents: set[UUID] = field(default_factory=set)
    grandchildren: set[UUID] = field(default_factory=set)
    aunts_uncles: set[UUID] = field(default_factory=set)
    nieces_nephews: set[UUID] = field(default_factory=set)
    cousins: set[UUID] = field(default_factory=set)

    def category(self, name: str) -> set[UUID]:
        if name not in CATEGORIES:
            raise KeyError(name)
        return getattr(self, name)

    def all_person_ids(self) -> set[UUID]:
        ids: set[UUID] = set()
        for f in fields(self):
            if f.name in CATEGORIES:
                ids |= getattr(self, f.name)
        return ids


class RelationshipDeriver:
    def __init__(self, graph: RelationshipGraph) -> None:
        self.graph = graph
        self._parents: dict[UUID, set[UUID]] = {}
        self._children: dict[UUID, set[UUID]] = {}
        self._siblings: dict[UUID, set[UUID]] = {}

    async def parents(self, person_id: UUID) -> set[UUID]:
        if person_id not in self._parents:
            self._parents[person_id] = await self.graph.parents_of(person_id)
        return self._parents[person_id]

    async def children(self, person_id: UUID) -> set[UUID]:
        if person_id not in self._children:
            self._children[person_id] = await self.graph.children_of(person_id)
        return self._children[person_id]

    async def siblings(self, person_id: UUID) -> set[UUID]:
        """Everyone sharing at least one parent; half and full alike."""
        if person_id not in self._siblings:
            result: set[UUID] = set()
            for parent_id in await self.parents(person_id):
                result |= await self.children(parent_id)
            result.discard(person_id)
            self._siblings[person_id] = result
        return self._siblings[person_id]

    async def _union_over(
        self, people: set[UUID], step: Callable[[UUID], Awaitable[set[UUID]]]
    ) -> set[UUID]:
        result: set[UUID] = set()
        for person_id in people:
            result |= await step(person_id)
        return result

    async def derive(self, person_id: UUID) -> FamilyView:
        parents = set(await self.parents(person_id))
        children = set(await self.children(person_id))
        spouses = await self.graph.spouses_of(person_id)
        siblings = set(await self.siblings(person_id))

        grandparents = await self._union_over(parents, self.parents)
        grandchildren = await self._union_over(children, self.children)
        aunts_uncles = await self._union_over(parents, self.siblings)
        nieces_nephews = await self._union_over(siblings, self.children)
        cousins = await self._union_over(aunts_uncles, self.children)

        view = FamilyView(person_id=person_id)
        placed: set[UUID] = {person_id}
        raw = {
            "parents": parents,
            "children": children,
            "spouses": spouses,
            "siblings": siblings,
            "grandparents": grandparents,
            "grandchildren": grandchildren,
            "aunts_uncles": aunts_uncles,
            "nieces_nephews": nieces_nephews,
            "cousins": cousins,
        }
        for name in CATEGORIES:
            members = raw[name] - placed
            setattr(view, name, members)
            placed |= members
        return view
