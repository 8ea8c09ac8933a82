from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator

from pymongo import ASCENDING, IndexModel

from pymeerkat.fields.markers import (
    CompoundIndex,
    GeospatialIndex,
    GeospatialIndexType,
    IndexOrder,
    SingleFieldIndex,
    UniqueIndex,
    members_with,
)
from pymeerkat.utils.exceptions import ConfigurationError
from pymeerkat.utils.types import IndexKeys

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexSpec:
    """One planned MongoDB index."""

    keys: IndexKeys
    unique: bool = False
    sparse: bool = False
    name: str | None = None

    def to_pymongo(self) -> tuple[list[tuple[str, int | str]], dict[str, Any]]:
        """Convert to pymongo create_index arguments (keys, kwargs)."""
        kwargs: dict[str, Any] = {}
        if self.unique:
            kwargs["unique"] = True
        if self.sparse:
            kwargs["sparse"] = True
        if self.name:
            kwargs["name"] = self.name
        return list(self.keys), kwargs

    def to_index_model(self) -> IndexModel:
        keys, kwargs = self.to_pymongo()
        return IndexModel(keys, **kwargs)


def _direction(order: Any, cls: type, field: str) -> int | str:
    try:
        return IndexOrder(order).value
    except ValueError:
        raise ConfigurationError(
            f"Unknown index order {order!r} on {cls.__name__}.{field}"
        ) from None


def _geometry(kind: Any, cls: type, field: str) -> str:
    try:
        return GeospatialIndexType(kind).value
    except ValueError:
        raise ConfigurationError(
            f"Unknown geospatial index type {kind!r} on {cls.__name__}.{field}"
        ) from None


# --- Passes ---


def unique_index_plans(cls: type) -> list[IndexSpec]:
    return [
        IndexSpec(
            keys=((member.name, ASCENDING),),
            unique=True,
            sparse=marker.sparse,
            name=marker.name,
        )
        for marker, member in members_with(cls, UniqueIndex)
    ]


def single_field_index_plans(cls: type) -> list[IndexSpec]:
    return [
        IndexSpec(
            keys=((member.name, _direction(marker.order, cls, member.attribute)),),
            sparse=marker.sparse,
            name=marker.name,
        )
        for marker, member in members_with(cls, SingleFieldIndex)
    ]


def geospatial_index_plans(cls: type) -> list[IndexSpec]:
    return [
        IndexSpec(
            keys=((member.name, _geometry(marker.kind, cls, member.attribute)),),
            name=marker.name,
        )
        for marker, member in members_with(cls, GeospatialIndex)
    ]


def compound_index_plans(cls: type) -> list[IndexSpec]:
    """Group CompoundIndex markers by name into one index per group.

    Groups come out in order of first appearance; keys inside a group follow
    field declaration order. Markers without a name are dropped.
    """
    groups: dict[str, list[tuple[str, int | str]]] = {}
    for marker, member in members_with(cls, CompoundIndex):
        if not marker.name or not marker.name.strip():
            logger.debug(
                f"Ignoring unnamed compound index marker on {cls.__name__}.{member.attribute}"
            )
            continue
        direction = _direction(marker.order, cls, member.attribute)
        groups.setdefault(marker.name, []).append((member.name, direction))

    return [IndexSpec(keys=tuple(keys), name=name) for name, keys in groups.items()]


_PASSES = (
    unique_index_plans,
    single_field_index_plans,
    geospatial_index_plans,
    compound_index_plans,
)


def build_index_plans(cls: type) -> list[IndexSpec]:
    """Run all four passes and return every index declared on the class."""
    plans: list[IndexSpec] = []
    for index_pass in _PASSES:
        plans.extend(index_pass(cls))
    return plans


def iter_index_batches(cls: type) -> Iterator[list[IndexModel]]:
    """Yield one list of IndexModels per pass, skipping empty passes.

    All passes are built before the first batch is yielded, so a
    misconfigured marker fails before anything reaches the store.
    """
    batches = [[spec.to_index_model() for spec in index_pass(cls)] for index_pass in _PASSES]
    for batch in batches:
        if batch:
            yield batch


def create_indexes(cls: type, collection: Any) -> list[str]:
    """Create the class's indexes through a blocking pymongo Collection.

    Returns:
        Names of the created (or already existing) indexes
    """
    names: list[str] = []
    for batch in iter_index_batches(cls):
        names.extend(collection.create_indexes(batch))
    if names:
        logger.info(f"Ensured indexes {names} on '{collection.name}'")
    return names


async def create_indexes_async(cls: type, collection: Any) -> list[str]:
    """Create the class's indexes through a pymongo AsyncCollection.

    Returns:
        Names of the created (or already existing) indexes
    """
    names: list[str] = []
    for batch in iter_index_batches(cls):
        names.extend(await collection.create_indexes(batch))
    if names:
        logger.info(f"Ensured indexes {names} on '{collection.name}'")
    return names
