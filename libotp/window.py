from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

from libotp._utils.validation import validate_int

if TYPE_CHECKING:
    from collections.abc import Iterator

__all__ = ["VerificationWindow", "RFC_NETWORK_DELAY"]


@dataclasses.dataclass(frozen=True)
class VerificationWindow:
    """
    Number of steps before and after the expected one that verification also accepts.

    The default window accepts the exact step only.
    """

    previous: int = 0
    future: int = 0

    def __post_init__(self) -> None:
        validate_int(self.previous, "previous", min=0)
        validate_int(self.future, "future", min=0)

    def candidates(self, initial: int) -> Iterator[int]:
        """
        Yields the counters a verifier should try, in order:
        ``initial``, then ``initial - 1`` down to ``initial - previous``
        (stopping before the first negative value),
        then ``initial + 1`` up to ``initial + future``.
        """
        yield initial
        for i in range(1, self.previous + 1):
            value = initial - i
            if value < 0:
                break
            yield value
        for i in range(1, self.future + 1):
            yield initial + i


#: one step either side, the network delay allowance recommended by RFC 6238
RFC_NETWORK_DELAY = VerificationWindow(previous=1, future=1)
