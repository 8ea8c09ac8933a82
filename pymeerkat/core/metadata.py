"""Per-type metadata cache.

Collection names and timestamp policies are pure functions of a document
class, so they are memoized without locks; a race only computes the same
value twice. The "indexes ensured" flag is a best-effort gate: concurrent
first calls for a new type may each run the index builder, which the store
tolerates because index creation is idempotent. After one run completes,
later calls skip it.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from pymeerkat.utils.settings import SettingsResolver

logger = logging.getLogger(__name__)


def type_key(cls: type) -> str:
    """Fully-qualified name of a class, used to key the index flags."""
    return f"{cls.__module__}.{cls.__qualname__}"


class MetadataCache:
    """Memoized collection metadata for document classes."""

    def __init__(self) -> None:
        self._names: dict[type, str] = {}
        self._tracking: dict[type, bool] = {}
        self._indexed: dict[str, bool] = {}

    def get_or_compute_name(self, cls: type) -> str:
        try:
            return self._names[cls]
        except KeyError:
            name = SettingsResolver.get_collection_name(cls)
            self._names[cls] = name
            return name

    def get_or_compute_tracking(self, cls: type) -> bool:
        try:
            return self._tracking[cls]
        except KeyError:
            track = SettingsResolver.should_track_timestamps(cls)
            self._tracking[cls] = track
            return track

    def indexes_ensured(self, cls: type) -> bool:
        return self._indexed.get(type_key(cls), False)

    def ensure_indexes_once(self, cls: type, ensure_fn: Callable[[], Any]) -> bool:
        """Run ``ensure_fn`` unless it already completed for this class.

        The flag is only set once ``ensure_fn`` returns, so a failure is
        retried on the next call.

        Returns:
            True if ``ensure_fn`` ran
        """
        key = type_key(cls)
        if self._indexed.get(key):
            return False
        ensure_fn()
        self._indexed[key] = True
        logger.debug(f"Indexes ensured for {key}")
        return True

    async def ensure_indexes_once_async(
        self, cls: type, ensure_fn: Callable[[], Awaitable[Any]]
    ) -> bool:
        """Async counterpart of ensure_indexes_once."""
        key = type_key(cls)
        if self._indexed.get(key):
            return False
        await ensure_fn()
        self._indexed[key] = True
        logger.debug(f"Indexes ensured for {key}")
        return True

    def reset(self) -> None:
        """Forget everything. Meant for test isolation."""
        self._names.clear()
        self._tracking.clear()
        self._indexed.clear()
