from __future__ import annotations

import dataclasses
from datetime import datetime, timedelta, timezone

from libotp._utils.time import Timestamp, as_utc

__all__ = ["TimeCorrection", "UNCORRECTED"]


@dataclasses.dataclass(frozen=True)
class TimeCorrection:
    """
    Offset added to local timestamps to line them up with a trusted clock.

    Build one with :meth:`from_sample` from a timestamp measured against a
    network time source. The offset is fixed for the lifetime of the
    instance, it is never refreshed.
    """

    offset: timedelta = timedelta(0)

    def __post_init__(self) -> None:
        if not isinstance(self.offset, timedelta):
            msg = f"offset must be a timedelta, not {type(self.offset).__name__}"
            raise TypeError(msg)

    @classmethod
    def from_sample(
        cls, true_time: datetime, local_time: datetime | None = None
    ) -> TimeCorrection:
        """
        :arg true_time: timestamp reported by the trusted source.
        :arg local_time: local clock reading taken at the same moment, defaults to now.

        Naive datetimes are treated as UTC.
        """
        if local_time is None:
            local_time = datetime.now(timezone.utc)
        return cls(offset=as_utc(true_time) - as_utc(local_time))

    def apply(self, timestamp: Timestamp) -> Timestamp:
        """
        returns the corrected timestamp.

        Datetimes come back as datetimes. Numbers come back as :class:`!float`
        unix seconds, except under a zero offset, which returns ``timestamp`` as is.
        """
        if isinstance(timestamp, bool) or not isinstance(
            timestamp, (datetime, int, float)
        ):
            msg = f"time must be an int, float, or datetime, not {type(timestamp).__name__}"
            raise TypeError(msg)
        if not self.offset:
            return timestamp
        if isinstance(timestamp, datetime):
            return timestamp + self.offset
        return timestamp + self.offset.total_seconds()

    def corrected_now(self) -> datetime:
        return self.apply(datetime.now(timezone.utc))  # type: ignore[return-value]


#: zero offset, used whenever no correction is supplied
UNCORRECTED = TimeCorrection()
