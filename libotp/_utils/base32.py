import base64


def b32encode(key: bytes) -> str:
    """
    wrapper around :func:`base64.b32encode` which strips padding,
    and returns a native string.
    """
    return base64.b32encode(key).rstrip(b"=").decode("ascii")


def b32decode(key: str) -> bytes:
    """
    wrapper around :func:`base64.b32decode`
    which accepts lower case input, and inserts missing padding.
    """
    # raises UnicodeEncodeError (a ValueError) for non-ascii input
    data = key.encode("ascii").rstrip(b"=")
    pad = -len(data) % 8
    return base64.b32decode(data + b"=" * pad, casefold=True)
