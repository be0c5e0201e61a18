from __future__ import annotations

import secrets
from typing import overload

from libotp._utils.bytes import to_signed_bytes
from libotp._utils.validation import validate_int
from libotp.hashmode import HashMode, as_hash_mode
from libotp.otp import KeyInput, as_key_provider

__all__ = ["random_key", "derive_key"]


@overload
def random_key(length_or_mode: int) -> bytes: ...


@overload
def random_key(length_or_mode: HashMode = ...) -> bytes: ...


def random_key(length_or_mode: int | HashMode = HashMode.SHA1) -> bytes:
    """
    Generate a random key from a CSPRNG.

    :arg length_or_mode:
        key length in bytes, or a :class:`HashMode` to get the RFC recommended
        length for that digest (20, 32 or 64 bytes).
    """
    if isinstance(length_or_mode, HashMode):
        length = length_or_mode.key_length
    else:
        validate_int(length_or_mode, "length", min=1)
        length = length_or_mode
    return secrets.token_bytes(length)


def derive_key(
    master_key: KeyInput,
    identifier: bytes | int,
    mode: HashMode | str = HashMode.SHA1,
) -> bytes:
    """
    Derive a device specific key from a master key, per RFC 4226 section 7.5:
    ``HMAC(master_key, identifier)``.

    :arg identifier:
        public identifier unique to the device, as bytes,
        or an integer serial number (encoded as 4 big-endian bytes).

    :returns: key of ``mode.digest_size`` bytes, usable with the same ``mode``.
    """
    provider = as_key_provider(master_key)
    mode = as_hash_mode(mode)
    if isinstance(identifier, int) and not isinstance(identifier, bool):
        message = to_signed_bytes(identifier, 4)
    elif isinstance(identifier, (bytes, bytearray)):
        message = bytes(identifier)
    else:
        msg = f"identifier must be bytes or int, not {type(identifier).__name__}"
        raise TypeError(msg)
    return provider.hmac(mode, message)
