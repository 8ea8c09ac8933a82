from pymeerkat.core import (
    Document,
    Query,
    MetadataCache,
    connect,
    disconnect,
    register_database,
    get_database,
    get_client,
    get_metadata_cache,
    reset_metadata_cache,
)
from pymeerkat.fields import (
    PyObjectId,
    DateOnly,
    TimeOnly,
    IndexOrder,
    GeospatialIndexType,
    UniqueIndex,
    SingleFieldIndex,
    GeospatialIndex,
    CompoundIndex,
    Lowercase,
    Uppercase,
    IndexSpec,
    build_index_plans,
    create_indexes,
    create_indexes_async,
)
from pymeerkat.lifecycle import (
    pre_save,
    post_save,
    pre_delete,
    post_delete,
    set_slow_query_threshold,
)
from pymeerkat.utils import (
    MeerkatError,
    ConfigurationError,
    DocumentNotFound,
    NotConnected,
    pluralize,
)

__all__ = [
    # Core
    "Document",
    "Query",
    "MetadataCache",
    "connect",
    "disconnect",
    "register_database",
    "get_database",
    "get_client",
    "get_metadata_cache",
    "reset_metadata_cache",
    # Fields
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
    "IndexSpec",
    "build_index_plans",
    "create_indexes",
    "create_indexes_async",
    # Lifecycle
    "pre_save",
    "post_save",
    "pre_delete",
    "post_delete",
    "set_slow_query_threshold",
    # Utils
    "MeerkatError",
    "ConfigurationError",
    "DocumentNotFound",
    "NotConnected",
    "pluralize",
]
