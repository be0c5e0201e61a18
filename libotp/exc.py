"""libotp.exc -- exceptions raised by libotp"""

__all__ = [
    "OtpError",
    "KeyUrlError",
    "TimeSyncError",
]


class OtpError(Exception):
    """Base class for all errors raised by libotp."""


class KeyUrlError(OtpError, ValueError):
    """
    Raised when an ``otpauth://`` url can't be parsed,
    or describes a configuration libotp doesn't support.
    """


class TimeSyncError(OtpError):
    """Raised when no network time source produced a usable timestamp."""
