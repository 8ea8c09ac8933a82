"""Field-level markers and the scanner that discovers them.

Markers are attached through ``typing.Annotated``; pydantic keeps unknown
metadata objects on ``FieldInfo.metadata`` where the scanner finds them::

    class Place(Document):
        slug: Annotated[str, UniqueIndex(sparse=True), Lowercase()]
        location: Annotated[list[float], GeospatialIndex(GeospatialIndexType.TWO_D_SPHERE)]

Markers may sit on the field's own ``Annotated`` or on an ``Annotated``
member of an ``Optional``/union annotation.
"""

from __future__ import annotations

import types
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Iterator, TypeVar, Union, get_args, get_origin

from pydantic.fields import FieldInfo
from pymongo import ASCENDING, DESCENDING, GEO2D, GEOSPHERE, HASHED


class IndexOrder(Enum):
    """Key direction of a single-field or compound index key."""

    ASCENDING = ASCENDING
    DESCENDING = DESCENDING
    HASHED = HASHED


class GeospatialIndexType(Enum):
    """Geometry of a geospatial index."""

    TWO_D = GEO2D
    TWO_D_SPHERE = GEOSPHERE


@dataclass(frozen=True)
class UniqueIndex:
    """Ascending unique index on the field."""

    sparse: bool = False
    name: str | None = None


@dataclass(frozen=True)
class SingleFieldIndex:
    """Non-unique index on the field."""

    order: IndexOrder | int | str = IndexOrder.ASCENDING
    sparse: bool = False
    name: str | None = None


@dataclass(frozen=True)
class GeospatialIndex:
    kind: GeospatialIndexType | str = GeospatialIndexType.TWO_D
    name: str | None = None


@dataclass(frozen=True)
class CompoundIndex:
    """One key of a compound index.

    Fields sharing ``name`` form a single index, keyed in declaration order.
    """

    name: str | None
    order: IndexOrder | int | str = IndexOrder.ASCENDING


@dataclass(frozen=True)
class Lowercase:
    """Lowercase the (string) field value before every save."""


@dataclass(frozen=True)
class Uppercase:
    """Uppercase the (string) field value before every save."""


@dataclass(frozen=True)
class MemberDescriptor:
    """A document field as seen by the marker scanner.

    ``name`` is the key stored in MongoDB (the alias when one is set),
    ``attribute`` the Python attribute name.
    """

    attribute: str
    name: str
    declared_type: Any


M = TypeVar("M")


def _field_metadata(field_info: FieldInfo) -> Iterator[Any]:
    """Metadata of a field, including ``Annotated`` members of a union.

    ``Optional[Annotated[str, UniqueIndex()]]`` keeps its marker inside the
    union, so one level of ``Union`` is unwrapped.
    """
    yield from field_info.metadata
    if get_origin(field_info.annotation) in (Union, types.UnionType):
        for arg in get_args(field_info.annotation):
            if get_origin(arg) is Annotated:
                yield from arg.__metadata__


def members_with(cls: type, marker_type: type[M]) -> list[tuple[M, MemberDescriptor]]:
    """Find the fields of a pydantic model carrying a marker of ``marker_type``.

    Args:
        cls: Document class
        marker_type: Marker class to look for

    Returns:
        (marker, member) pairs in field declaration order. Only the first
        marker of the given type on a field is returned.
    """
    found: list[tuple[M, MemberDescriptor]] = []
    for field_name, field_info in cls.model_fields.items():
        for meta in _field_metadata(field_info):
            if isinstance(meta, marker_type):
                member = MemberDescriptor(
                    attribute=field_name,
                    name=field_info.alias or field_name,
                    declared_type=field_info.annotation,
                )
                found.append((meta, member))
                break
    return found
