from __future__ import annotations


def validate_int(value: int, name: str, min: int, max: int | None = None) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        msg = f"{name} must be an integer, not {type(value).__name__}"
        raise TypeError(msg)
    if max is None:
        if value < min:
            msg = f"{name} must be >= {min}"
            raise ValueError(msg)
    elif value < min or value > max:
        msg = f"{name} must be between {min} - {max}"
        raise ValueError(msg)


def validate_key(key: bytes | bytearray) -> bytes:
    """returns an immutable copy of ``key``, rejecting empty or non-binary keys"""
    if not isinstance(key, (bytes, bytearray)):
        msg = f"key must be bytes, not {type(key).__name__}"
        raise TypeError(msg)
    if not key:
        msg = "key must not be empty"
        raise ValueError(msg)
    return bytes(key)
