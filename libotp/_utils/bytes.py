def to_signed_bytes(value: int, size: int) -> bytes:
    """encode ``value`` as a big-endian two's complement integer of ``size`` bytes"""
    if not isinstance(value, int) or isinstance(value, bool):
        msg = f"expected int, got {type(value).__name__}"
        raise TypeError(msg)
    try:
        return value.to_bytes(size, "big", signed=True)
    except OverflowError:
        msg = f"value must fit in a signed {size * 8}-bit integer"
        raise ValueError(msg) from None


def wipe(buffer: bytearray) -> None:
    """overwrite ``buffer`` with zeros in place"""
    buffer[:] = bytes(len(buffer))
