from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from libotp.hashmode import HashMode

__all__ = ["KeyProvider"]


@runtime_checkable
class KeyProvider(Protocol):
    """
    Secret key capability used by :class:`~libotp.hotp.Hotp` and :class:`~libotp.totp.Totp`.

    Implementations decide how the key is held in memory, but must behave
    exactly like a plain byte buffer passed to HMAC, and must be safe to call
    from several threads at once.
    """

    def hmac(self, mode: HashMode, message: bytes) -> bytes: ...
