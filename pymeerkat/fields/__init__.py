from pymeerkat.fields.base import PyObjectId
from pymeerkat.fields.temporal import DateOnly, TimeOnly
from pymeerkat.fields.markers import (
    IndexOrder,
    GeospatialIndexType,
    UniqueIndex,
    SingleFieldIndex,
    GeospatialIndex,
    CompoundIndex,
    Lowercase,
    Uppercase,
    MemberDescriptor,
    members_with,
)
from pymeerkat.fields.indexed import (
    IndexSpec,
    build_index_plans,
    iter_index_batches,
    create_indexes,
    create_indexes_async,
)

__all__ = [
    "PyObjectId",
    "DateOnly",
    "TimeOnly",
    "IndexOrder",
    "GeospatialIndexType",
    "UniqueIndex",
    "SingleFieldIndex",
    "GeospatialIndex",
    "CompoundIndex",
    "Lowercase",
    "Uppercase",
    "MemberDescriptor",
    "members_with",
    "IndexSpec",
    "build_index_plans",
    "iter_index_batches",
    "create_indexes",
    "create_indexes_async",
]
