from __future__ import annotations

import logging
import re
from typing import Any

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from pymeerkat.core.metadata import MetadataCache
from pymeerkat.utils.exceptions import NotConnected

logger = logging.getLogger(__name__)

_clients: dict[str, AsyncMongoClient] = {}
_databases: dict[str, AsyncDatabase] = {}
_caches: dict[str, MetadataCache] = {}

# Used for lookups made while an alias has no live connection
_fallback_cache = MetadataCache()


async def connect(uri: str, *, alias: str = "default") -> AsyncDatabase:
    """Connect to a MongoDB instance and register the connection.

    Args:
        uri: MongoDB connection URI (must include database name).
        alias: Connection alias for multi-database setups.

    Returns:
        The AsyncDatabase instance.

    Raises:
        ValueError: If URI format is invalid
    """
    logger.info(f"Connecting to MongoDB with alias '{alias}'")

    db_name = _extract_db_name(uri)
    client = AsyncMongoClient(uri)
    db = client[db_name]
    register_database(db, alias=alias, client=client)
    logger.info(f"Connected to database '{db_name}' with alias '{alias}'")
    return db


def register_database(
    database: Any, *, alias: str = "default", client: Any = None
) -> None:
    """Register an existing database handle under an alias.

    The alias gets a fresh MetadataCache, so index creation runs again
    against the new database.

    Args:
        database: AsyncDatabase (or compatible) instance
        alias: Connection alias
        client: Owning client, closed by disconnect() when given
    """
    if client is not None:
        _clients[alias] = client
    _databases[alias] = database
    _caches[alias] = MetadataCache()


async def disconnect(alias: str = "default") -> None:
    """Disconnect and remove a registered connection.

    Args:
        alias: Connection alias to disconnect
    """
    client = _clients.pop(alias, None)
    _databases.pop(alias, None)
    _caches.pop(alias, None)
    if client is not None:
        await client.close()
        logger.info(f"Disconnected from MongoDB (alias: '{alias}')")


def get_database(alias: str = "default") -> AsyncDatabase:
    """Retrieve a registered database or raise NotConnected.

    Args:
        alias: Connection alias

    Returns:
        AsyncDatabase instance

    Raises:
        NotConnected: If no connection exists for the alias
    """
    try:
        return _databases[alias]
    except KeyError:
        raise NotConnected(
            f"No connection registered for alias '{alias}'. Call connect() first."
        ) from None


def get_client(alias: str = "default") -> AsyncMongoClient:
    """Retrieve a registered client or raise NotConnected.

    Args:
        alias: Connection alias

    Returns:
        AsyncMongoClient instance

    Raises:
        NotConnected: If no client exists for the alias
    """
    try:
        return _clients[alias]
    except KeyError:
        raise NotConnected(
            f"No client registered for alias '{alias}'. Call connect() first."
        ) from None


def get_metadata_cache(alias: str = "default") -> MetadataCache:
    """Return the metadata cache owned by a connection alias.

    Falls back to a process-wide cache while the alias is not connected.
    """
    return _caches.get(alias, _fallback_cache)


def reset_metadata_cache(alias: str | None = None) -> None:
    """Clear cached metadata for one alias, or for every cache when None."""
    if alias is not None:
        get_metadata_cache(alias).reset()
        return
    for cache in _caches.values():
        cache.reset()
    _fallback_cache.reset()


def _extract_db_name(uri: str) -> str:
    """Extract the database name from a MongoDB URI with validation.

    Args:
        uri: MongoDB connection URI

    Returns:
        Database name extracted from URI

    Raises:
        ValueError: If URI format is invalid or database name cannot be extracted
    """
    if not uri:
        raise ValueError("MongoDB URI cannot be empty")

    # Strip the query string, then the scheme so "mongodb://host" has no path
    path = uri.split("?")[0]
    _, sep, rest = path.partition("://")
    if not sep or "/" not in rest:
        raise ValueError(
            "Cannot extract database name from URI. "
            "Expected format: mongodb://host:port/database"
        )

    db_name = rest.rsplit("/", 1)[-1]
    if not db_name:
        raise ValueError(
            "Cannot extract database name from URI. "
            "Expected format: mongodb://host:port/database"
        )

    # Validate database name format (MongoDB naming rules)
    if not re.match(r"^[a-zA-Z0-9_-]+$", db_name):
        raise ValueError(
            f"Invalid database name '{db_name}'. "
            f"Database names can only contain letters, numbers, underscores, and hyphens."
        )

    logger.debug(f"Extracted database name: {db_name}")
    return db_name
