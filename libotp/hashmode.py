from __future__ import annotations

import enum

__all__ = ["HashMode", "as_hash_mode"]

_DIGEST_SIZES = {
    "sha1": 20,
    "sha256": 32,
    "sha512": 64,
}


class HashMode(enum.Enum):
    """HMAC digest used for OTP computation. ``SHA1`` is the RFC 4226 default."""

    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA512 = "sha512"

    @property
    def hashlib_name(self) -> str:
        return self.value

    @property
    def digest_size(self) -> int:
        return _DIGEST_SIZES[self.value]

    @property
    def key_length(self) -> int:
        """RFC recommended key length, equal to the digest size"""
        return self.digest_size

    @classmethod
    def parse(cls, name: str) -> HashMode:
        """case-insensitive lookup by name, e.g. ``"SHA256"``"""
        try:
            return cls[name.upper()]
        except KeyError:
            msg = f"unknown hash mode: {name!r}"
            raise ValueError(msg) from None


def as_hash_mode(value: HashMode | str) -> HashMode:
    if isinstance(value, HashMode):
        return value
    if isinstance(value, str):
        return HashMode.parse(value)
    msg = f"mode must be a HashMode, not {type(value).__name__}"
    raise TypeError(msg)
