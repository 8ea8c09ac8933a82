from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def apply_timestamps(doc: Any, now: datetime | None = None) -> bool:
    """Stamp created_at/updated_at on a document about to be saved.

    Only documents whose class sets ``Settings.track_timestamps`` are
    touched. ``created_at`` is set once; ``updated_at`` on every save.

    Returns:
        True if the document was stamped
    """
    if not type(doc).tracks_timestamps():
        return False

    now = now or datetime.now(timezone.utc)
    if doc.created_at is None:
        object.__setattr__(doc, "created_at", now)
    object.__setattr__(doc, "updated_at", now)
    return True
