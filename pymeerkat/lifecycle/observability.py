"""Per-call query logging on the ``"pymeerkat"`` logger.

Every driver call made by a document or query is timed. The duration goes
out at DEBUG; calls slower than the threshold go out at WARNING instead.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

logger = logging.getLogger("pymeerkat")

DEFAULT_SLOW_QUERY_MS = 100.0

_slow_query_ms: float | None = DEFAULT_SLOW_QUERY_MS


def set_slow_query_threshold(ms: float | None) -> None:
    """Log calls slower than ``ms`` milliseconds at WARNING. None turns it off."""
    global _slow_query_ms
    _slow_query_ms = ms


def get_slow_query_threshold() -> float | None:
    return _slow_query_ms


@asynccontextmanager
async def track_query(
    operation: str, collection: str, filter: dict[str, Any] | None = None
) -> AsyncIterator[None]:
    """Time the wrapped driver call and log it, whether or not it raised."""
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        if _slow_query_ms is not None and elapsed_ms >= _slow_query_ms:
            logger.warning(
                "Slow query: %s on %s took %.1fms (threshold %.1fms) filter=%r",
                operation,
                collection,
                elapsed_ms,
                _slow_query_ms,
                filter,
            )
        else:
            logger.debug(
                "%s on %s took %.1fms filter=%r", operation, collection, elapsed_ms, filter
            )
