"""Settings resolution utilities for Document configuration."""

from __future__ import annotations

import re

from pymeerkat.utils.exceptions import ConfigurationError
from pymeerkat.utils.inflection import pluralize

_WHITESPACE = re.compile(r"\s+")


def normalize_collection_name(name: str) -> str:
    """Lowercase a collection name and collapse inner whitespace to ``_``.

    Args:
        name: Explicit or pluralized collection name

    Returns:
        Normalized collection name

    Raises:
        ConfigurationError: If nothing is left after normalization
    """
    normalized = _WHITESPACE.sub("_", name.strip().lower())
    if not normalized:
        raise ConfigurationError(
            f"Failed to derive a collection name from {name!r}."
        )
    return normalized


class SettingsResolver:
    """Resolves document settings from inner Settings class.

    Nothing here is cached; see MetadataCache for the memoized lookups.
    """

    @staticmethod
    def get_collection_name(cls: type) -> str:
        """Get collection name from Settings or auto-pluralize.

        A blank ``Settings.collection`` counts as unset.

        Args:
            cls: Document class

        Returns:
            Normalized collection name

        Raises:
            ConfigurationError: If the derived name is blank
        """
        settings = getattr(cls, "Settings", None)
        explicit = getattr(settings, "collection", None) if settings else None
        if explicit is not None and explicit.strip():
            return normalize_collection_name(explicit)
        return normalize_collection_name(pluralize(cls.__name__))

    @staticmethod
    def should_track_timestamps(cls: type) -> bool:
        """Check whether created/updated timestamps are managed on save.

        Args:
            cls: Document class

        Returns:
            Settings.track_timestamps, False when unset
        """
        settings = getattr(cls, "Settings", None)
        if settings and hasattr(settings, "track_timestamps"):
            return bool(settings.track_timestamps)
        return False

    @staticmethod
    def get_connection_alias(cls: type) -> str:
        """Get connection alias from Settings or default.

        Args:
            cls: Document class

        Returns:
            Connection alias name
        """
        settings = getattr(cls, "Settings", None)
        if settings and hasattr(settings, "connection_alias"):
            return settings.connection_alias
        return "default"
