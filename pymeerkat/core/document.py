from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar, Iterable, Optional, Self

from bson import ObjectId
from pydantic import BaseModel, Field, TypeAdapter
from pymongo import ReplaceOne
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.results import BulkWriteResult

from pymeerkat.core.connection import get_database, get_metadata_cache
from pymeerkat.core.metadata import MetadataCache
from pymeerkat.core.query import Query
from pymeerkat.fields.base import PyObjectId
from pymeerkat.fields.indexed import create_indexes_async
from pymeerkat.lifecycle.hooks import POST_DELETE, POST_SAVE, PRE_DELETE, PRE_SAVE, collect_hooks, run_hooks
from pymeerkat.lifecycle.observability import track_query
from pymeerkat.plugins.case_transforms import apply_case_transforms
from pymeerkat.plugins.timestamps import apply_timestamps
from pymeerkat.utils.exceptions import DocumentNotFound, MeerkatError
from pymeerkat.utils.settings import SettingsResolver
from pymeerkat.utils.types import DocumentData, FilterSpec, merge_filters

_TIMESTAMP_FIELDS = ("created_at", "updated_at")


class Document(BaseModel):
    """Base document class for MongoDB models.

    The identifier type is whatever the ``id`` field is annotated with;
    redeclare it in a subclass (``id: str = Field(alias="_id")``) to key
    documents by something other than ObjectId.
    """

    model_config = {"populate_by_name": True, "arbitrary_types_allowed": True}

    id: PyObjectId = Field(default_factory=ObjectId, alias="_id")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # ClassVars set by __init_subclass__
    _connection_alias: ClassVar[str] = "default"
    _hooks: ClassVar[dict[str, list[str]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        # Collection name and indexes are resolved lazily, on first use
        cls._connection_alias = SettingsResolver.get_connection_alias(cls)
        cls._hooks = collect_hooks(cls)

    # --- Metadata ---

    @classmethod
    def _metadata(cls) -> MetadataCache:
        return get_metadata_cache(cls._connection_alias)

    @classmethod
    def collection_name(cls) -> str:
        """Collection name, derived from Settings.collection or the class name."""
        return cls._metadata().get_or_compute_name(cls)

    @classmethod
    def tracks_timestamps(cls) -> bool:
        return cls._metadata().get_or_compute_tracking(cls)

    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        """Validate an identifier against the class's ``id`` annotation."""
        annotation = cls.model_fields["id"].annotation
        return TypeAdapter(annotation).validate_python(value)

    # --- Serialization ---

    def _to_mongo(self) -> DocumentData:
        """Convert document to MongoDB-compatible dict.

        Uses mode='python' to preserve native types like ObjectId.
        """
        exclude = None if self.tracks_timestamps() else set(_TIMESTAMP_FIELDS)
        return self.model_dump(by_alias=True, mode="python", exclude=exclude)

    @classmethod
    def _from_mongo(cls, data: DocumentData) -> Self:
        return cls.model_validate(data)

    # --- Collection access ---

    @classmethod
    def get_collection(cls) -> AsyncCollection:
        """Get the MongoDB collection for this document class.

        Raises:
            NotConnected: If the class's connection alias is not connected
        """
        db = get_database(cls._connection_alias)
        return db[cls.collection_name()]

    @classmethod
    async def _collection(cls) -> AsyncCollection:
        """Collection handle, creating the class's indexes on first use."""
        collection = cls.get_collection()
        await cls._metadata().ensure_indexes_once_async(cls, cls.ensure_indexes)
        return collection

    # --- Indexing ---

    @classmethod
    async def ensure_indexes(cls) -> list[str]:
        """Create all indexes declared by field markers on this class.

        Always talks to the store; data operations go through a per-type
        gate that calls this once. Returns the index names.
        """
        return await create_indexes_async(cls, cls.get_collection())

    # --- Class-level CRUD ---

    @classmethod
    async def find_by_id(cls, id: Any) -> Self | None:
        """Find a document by its _id, or None."""
        return await cls.find_one({"_id": cls._coerce_id(id)})

    @classmethod
    async def get(cls, id: Any) -> Self:
        """Find a document by its _id. Raises DocumentNotFound if missing."""
        doc = await cls.find_by_id(id)
        if doc is None:
            raise DocumentNotFound(f"{cls.__name__} with id '{id}' not found")
        return doc

    @classmethod
    async def find_one(cls, predicate: FilterSpec | None = None, **equals: Any) -> Self | None:
        """First document matching the predicate, or None."""
        predicate = merge_filters(predicate, **equals)
        async with track_query("find_one", cls.collection_name(), predicate):
            collection = await cls._collection()
            data = await collection.find_one(predicate)
        if data is None:
            return None
        return cls._from_mongo(data)

    @classmethod
    def query(cls, predicate: FilterSpec | None = None, **equals: Any) -> Query[Self]:
        """Lazy query over this class's collection, refined with where()/order_by()."""
        return Query(cls, merge_filters(predicate, **equals))

    @classmethod
    async def find(cls, predicate: FilterSpec | None = None, **equals: Any) -> list[Self]:
        """Every document matching the predicate; all of them when omitted."""
        return await cls.query(predicate, **equals).to_list()

    @classmethod
    async def count(cls, predicate: FilterSpec | None = None, **equals: Any) -> int:
        return await cls.query(predicate, **equals).count()

    @classmethod
    async def exists(cls, predicate: FilterSpec | None = None, **equals: Any) -> bool:
        return await cls.query(predicate, **equals).exists()

    @classmethod
    async def remove_by_id(cls, id: Any) -> int:
        """Delete the document with the given _id. Returns deleted count."""
        return await cls.remove_one({"_id": cls._coerce_id(id)})

    @classmethod
    async def remove_one(cls, predicate: FilterSpec | None = None, **equals: Any) -> int:
        """Delete the first document matching the predicate. Returns deleted count."""
        predicate = merge_filters(predicate, **equals)
        async with track_query("delete_one", cls.collection_name(), predicate):
            collection = await cls._collection()
            result = await collection.delete_one(predicate)
        return result.deleted_count

    @classmethod
    async def remove(cls, predicate: FilterSpec | None = None, **equals: Any) -> int:
        """Delete every document matching the predicate. Returns deleted count."""
        return await cls.query(predicate, **equals).remove()

    @classmethod
    async def save_all(cls, docs: Iterable[Self]) -> BulkWriteResult | None:
        """Upsert many documents with one unordered bulk write.

        Every document goes through the same pre/post-save processing as
        save(). Returns None without touching the store when ``docs`` is empty.
        """
        docs = list(docs)
        if not docs:
            return None

        for doc in docs:
            if not isinstance(doc, cls):
                raise MeerkatError(
                    f"save_all() on {cls.__name__} got a {type(doc).__name__}"
                )
            await doc._before_save()

        requests = [
            ReplaceOne({"_id": doc.id}, doc._to_mongo(), upsert=True) for doc in docs
        ]
        async with track_query("bulk_write", cls.collection_name()):
            collection = await cls._collection()
            result = await collection.bulk_write(requests, ordered=False)

        for doc in docs:
            await run_hooks(doc, POST_SAVE)
        return result

    # --- Instance-level CRUD ---

    async def _before_save(self) -> None:
        apply_timestamps(self)
        apply_case_transforms(self)
        await run_hooks(self, PRE_SAVE)

    async def save(self) -> None:
        """Insert or replace this document (upsert on _id)."""
        await self._before_save()
        async with track_query("save", self.collection_name(), {"_id": self.id}):
            collection = await self._collection()
            await collection.replace_one({"_id": self.id}, self._to_mongo(), upsert=True)
        await run_hooks(self, POST_SAVE)

    async def insert(self) -> None:
        """Insert this document; fails on an existing _id."""
        await self._before_save()
        async with track_query("insert", self.collection_name(), {"_id": self.id}):
            collection = await self._collection()
            await collection.insert_one(self._to_mongo())
        await run_hooks(self, POST_SAVE)

    async def delete(self) -> None:
        """Delete this document from the database."""
        await run_hooks(self, PRE_DELETE)
        async with track_query("delete", self.collection_name(), {"_id": self.id}):
            collection = await self._collection()
            await collection.delete_one({"_id": self.id})
        await run_hooks(self, POST_DELETE)

    async def reload(self) -> None:
        """Re-fetch this document from the database."""
        async with track_query("reload", self.collection_name(), {"_id": self.id}):
            collection = await self._collection()
            data = await collection.find_one({"_id": self.id})
        if data is None:
            raise DocumentNotFound(
                f"{self.__class__.__name__} with id '{self.id}' not found"
            )
        refreshed = self.__class__._from_mongo(data)
        for field_name in self.__class__.model_fields:
            object.__setattr__(self, field_name, getattr(refreshed, field_name))
