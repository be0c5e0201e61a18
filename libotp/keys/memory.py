from __future__ import annotations

import hmac
from typing import TYPE_CHECKING

from libotp._utils.validation import validate_key
from libotp.keys.abc import KeyProvider

if TYPE_CHECKING:
    from libotp.hashmode import HashMode

__all__ = ["InMemoryKey"]


class InMemoryKey(KeyProvider):
    def __init__(self, key: bytes | bytearray) -> None:
        # copied, so later changes to a caller's bytearray have no effect
        self._key = validate_key(key)

    def hmac(self, mode: HashMode, message: bytes) -> bytes:
        return hmac.digest(self._key, message, mode.hashlib_name)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} length={len(self._key)}>"
