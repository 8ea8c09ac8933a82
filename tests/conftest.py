from typing import Any, Iterable
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

from pymeerkat import disconnect, register_database, reset_metadata_cache
from pymeerkat.lifecycle.observability import DEFAULT_SLOW_QUERY_MS, set_slow_query_threshold


def index_names(models: list[Any]) -> list[str]:
    """Stand-in for create_indexes: echo the names pymongo generated."""
    return [model.document["name"] for model in models]


class FakeCursor:
    """Minimal async cursor supporting the chaining Query uses."""

    def __init__(self, documents: Iterable[dict[str, Any]]) -> None:
        self.documents = list(documents)
        self.calls: list[tuple[str, Any]] = []

    def sort(self, spec: Any) -> "FakeCursor":
        self.calls.append(("sort", spec))
        return self

    def skip(self, n: int) -> "FakeCursor":
        self.calls.append(("skip", n))
        return self

    def limit(self, n: int) -> "FakeCursor":
        self.calls.append(("limit", n))
        self.documents = self.documents[:n]
        return self

    async def _iterate(self):
        for document in self.documents:
            yield document

    def __aiter__(self):
        return self._iterate()


def make_collection(name: str, documents: Iterable[dict[str, Any]] = ()) -> AsyncMock:
    """AsyncCollection double; find() returns a FakeCursor over ``documents``."""
    documents = list(documents)
    collection = AsyncMock()
    collection.name = name
    collection.cursors = []

    def find(*args: Any, **kwargs: Any) -> FakeCursor:
        cursor = FakeCursor(documents)
        collection.cursors.append(cursor)
        return cursor

    collection.find = Mock(side_effect=find)
    collection.find_one.return_value = None
    collection.count_documents.return_value = 0
    collection.create_indexes.side_effect = index_names
    collection.delete_one.return_value = Mock(deleted_count=1)
    collection.delete_many.return_value = Mock(deleted_count=0)
    return collection


class FakeDatabase:
    """AsyncDatabase double handing out one collection mock per name."""

    def __init__(self, name: str = "meerkat_test") -> None:
        self.name = name
        self.collections: dict[str, AsyncMock] = {}

    def __getitem__(self, name: str) -> AsyncMock:
        if name not in self.collections:
            self.collections[name] = make_collection(name)
        return self.collections[name]


@pytest.fixture
def database():
    """Register a FakeDatabase under the default alias."""
    db = FakeDatabase()
    register_database(db)
    return db


@pytest_asyncio.fixture(autouse=True)
async def reset_state():
    """Drop connections, cached metadata and the slow-query threshold after each test."""
    yield
    await disconnect()
    await disconnect("secondary")
    reset_metadata_cache()
    set_slow_query_threshold(DEFAULT_SLOW_QUERY_MS)
