"""Calendar dates and times of day as document fields.

BSON has a datetime type but nothing for a bare date or time, so the driver
refuses ``datetime.date`` and ``datetime.time`` values. ``DateOnly`` stores a
date as a ``"YYYY-MM-DD"`` string and ``TimeOnly`` stores a time of day as
``"HH:MM:SS[.ffffff]"``; both read their stored form back::

    class Holiday(Document):
        day: DateOnly
        opens: TimeOnly | None = None
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer


def _to_date(value: Any) -> Any:
    # Dates written as BSON datetimes by other clients come back as datetime
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        return date.fromisoformat(value)
    return value


def _to_time(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.timetz()
    if isinstance(value, str):
        return time.fromisoformat(value)
    return value


def _format(value: date | time) -> str:
    return value.isoformat()


DateOnly = Annotated[
    date,
    BeforeValidator(_to_date),
    PlainSerializer(_format, return_type=str),
]

TimeOnly = Annotated[
    time,
    BeforeValidator(_to_time),
    PlainSerializer(_format, return_type=str),
]
