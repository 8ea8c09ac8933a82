"""Predicate queries over a document class.

A predicate is a MongoDB filter document. ``Query`` is immutable and lazy:
``where``, ``order_by``, ``skip``, ``limit`` and ``only`` return new
queries, and the store is only touched when a terminal coroutine runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, AsyncIterator, Generic, TypeVar

from pymongo import ASCENDING, DESCENDING

from pymeerkat.lifecycle.observability import track_query
from pymeerkat.utils.exceptions import MeerkatError
from pymeerkat.utils.types import FilterSpec, merge_filters

D = TypeVar("D")

SortKeys = tuple[tuple[str, int], ...]


def parse_sort_keys(keys: tuple[str, ...]) -> SortKeys:
    """``("-rating", "name")`` -> ``(("rating", -1), ("name", 1))``."""
    return tuple(
        (key[1:], DESCENDING) if key.startswith("-") else (key, ASCENDING)
        for key in keys
    )


@dataclass(frozen=True)
class Query(Generic[D]):
    document_class: type[D]
    predicate: FilterSpec = field(default_factory=dict)
    sort_keys: SortKeys = ()
    offset: int = 0
    size: int = 0
    selected: tuple[str, ...] = ()

    # --- Refinement ---

    def where(self, predicate: FilterSpec | None = None, **equals: Any) -> Query[D]:
        """Narrow the predicate. Later keys replace earlier ones."""
        return replace(self, predicate=merge_filters(self.predicate, predicate, **equals))

    def order_by(self, *keys: str) -> Query[D]:
        """Sort by ``keys``; a leading ``-`` sorts descending."""
        return replace(self, sort_keys=parse_sort_keys(keys))

    def skip(self, n: int) -> Query[D]:
        return replace(self, offset=n)

    def limit(self, n: int) -> Query[D]:
        """Return at most ``n`` documents. 0 means no limit."""
        return replace(self, size=n)

    def only(self, *names: str) -> Query[D]:
        """Load only the named fields (and ``_id``)."""
        return replace(self, selected=names)

    @property
    def projection(self) -> dict[str, int] | None:
        if not self.selected:
            return None
        return {**dict.fromkeys(self.selected, 1), "_id": 1}

    # --- Terminals ---

    async def to_list(self) -> list[D]:
        async with self._tracked("find"):
            return [doc async for doc in self]

    async def first(self) -> D | None:
        found = await self.limit(1).to_list()
        return found[0] if found else None

    async def count(self) -> int:
        async with self._tracked("count"):
            collection = await self.document_class._collection()
            return await collection.count_documents(self.predicate)

    async def exists(self) -> bool:
        async with self._tracked("exists"):
            collection = await self.document_class._collection()
            return await collection.find_one(self.predicate, {"_id": 1}) is not None

    async def remove(self) -> int:
        """Delete every matching document and return how many went.

        An empty predicate would empty the collection, so it is refused.
        """
        if not self.predicate:
            raise MeerkatError(
                f"Refusing to remove every {self.document_class.__name__}: "
                "pass a predicate"
            )
        async with self._tracked("delete_many"):
            collection = await self.document_class._collection()
            result = await collection.delete_many(self.predicate)
        return result.deleted_count

    async def __aiter__(self) -> AsyncIterator[D]:
        collection = await self.document_class._collection()
        cursor = collection.find(self.predicate, self.projection)
        if self.sort_keys:
            cursor = cursor.sort(list(self.sort_keys))
        if self.offset:
            cursor = cursor.skip(self.offset)
        if self.size:
            cursor = cursor.limit(self.size)
        async for raw in cursor:
            yield self.document_class._from_mongo(raw)

    def _tracked(self, operation: str):
        return track_query(operation, self.document_class.collection_name(), self.predicate)
