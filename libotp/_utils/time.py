from __future__ import annotations

import calendar
import math
from datetime import datetime, timezone
from typing import Union

Timestamp = Union[datetime, int, float]


def as_utc(value: datetime) -> datetime:
    """naive datetimes are treated as UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_unix_seconds(value: Timestamp) -> int:
    """
    Normalize time value to whole unix epoch seconds.

    :arg value:
        :class:`!datetime`, or unix epoch timestamp as :class:`!float` or :class:`!int`.
        Naive datetimes are treated as UTC. Fractional seconds are floored.
    """
    if isinstance(value, bool):
        msg = "time must be an int, float, or datetime, not bool"
        raise TypeError(msg)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return math.floor(value)
    if isinstance(value, datetime):
        # NOTE: utctimetuple() assumes naive datetimes are in UTC,
        #       and drops microseconds.
        return calendar.timegm(value.utctimetuple())
    msg = f"time must be an int, float, or datetime, not {type(value).__name__}"
    raise TypeError(msg)
