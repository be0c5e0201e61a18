"""libotp.otp -- HOTP computation shared by Hotp & Totp (RFC 4226)"""
from __future__ import annotations

import hmac
import logging
from typing import TYPE_CHECKING, Callable, Union

from libotp._utils.bytes import to_signed_bytes
from libotp._utils.validation import validate_int
from libotp.keys.abc import KeyProvider
from libotp.keys.memory import InMemoryKey
from libotp.window import VerificationWindow

if TYPE_CHECKING:
    from libotp.hashmode import HashMode

log = logging.getLogger(__name__)

__all__ = [
    "KeyInput",
    "as_key_provider",
    "counter_bytes",
    "calculate_otp",
    "digits",
    "find_match",
]

KeyInput = Union[bytes, bytearray, KeyProvider]


def as_key_provider(key: KeyInput) -> KeyProvider:
    """
    raw keys are copied into a private :class:`InMemoryKey`,
    key providers are used by reference.
    """
    if isinstance(key, (bytes, bytearray)):
        return InMemoryKey(key)
    if isinstance(key, KeyProvider):
        return key
    msg = f"key must be bytes or a KeyProvider, not {type(key).__name__}"
    raise TypeError(msg)


def counter_bytes(counter: int) -> bytes:
    """HMAC message for ``counter``: 8 bytes, big-endian, two's complement"""
    return to_signed_bytes(counter, 8)


def calculate_otp(key: KeyProvider, counter: int, mode: HashMode) -> int:
    """
    implementation of the lowlevel HOTP algorithm:
    HMAC over the counter, followed by dynamic truncation.

    :returns: 31-bit truncated value, before reduction to decimal digits
    """
    digest = key.hmac(mode, counter_bytes(counter))

    # RFC 4226 reads the offset from digest[19];
    # reading the last byte works for the longer SHA-256/512 digests too.
    offset = digest[-1] & 0x0F

    # NOTE: the modulo binds to the last byte only, not the combined value.
    return (
        (digest[offset] & 0x7F) << 24
        | (digest[offset + 1] & 0xFF) << 16
        | (digest[offset + 2] & 0xFF) << 8
        | (digest[offset + 3] & 0xFF) % 1_000_000
    )


def digits(value: int, count: int) -> str:
    """render the last ``count`` decimal digits of ``value``, zero padded"""
    validate_int(count, "count", min=1)
    return f"{value % 10**count:0{count}d}"


def find_match(
    compute: Callable[[int], str],
    initial: int,
    code: str,
    window: VerificationWindow | None = None,
) -> int | None:
    """
    helper for verify() implementations --
    returns the first counter in ``window`` around ``initial``
    whose code equals ``code``, or ``None``.

    :arg compute: renders the code for a counter
    """
    if not isinstance(code, str):
        msg = f"code must be a string, not {type(code).__name__}"
        raise TypeError(msg)
    if window is None:
        window = VerificationWindow()
    expected = code.encode("utf-8")
    for counter in window.candidates(initial):
        if hmac.compare_digest(compute(counter).encode("ascii"), expected):
            log.debug("code matched at offset %+d", counter - initial)
            return counter
    log.debug("code did not match within %r", window)
    return None
