from pymeerkat.core.document import Document
from pymeerkat.core.query import Query
from pymeerkat.core.metadata import MetadataCache
from pymeerkat.core.connection import (
    connect,
    disconnect,
    register_database,
    get_database,
    get_client,
    get_metadata_cache,
    reset_metadata_cache,
)

__all__ = [
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
]
