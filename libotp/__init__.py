"""libotp -- HOTP / TOTP one-time passwords (RFC 4226, RFC 6238)"""

from libotp.exc import KeyUrlError, OtpError, TimeSyncError
from libotp.hashmode import HashMode
from libotp.hotp import Hotp
from libotp.keygen import derive_key, random_key
from libotp.keys import InMemoryKey, KeyProvider, ProtectedKey
from libotp.keyurl import KeyUrl, from_url, hotp_url, parse_url, totp_url
from libotp.timecorrection import UNCORRECTED, TimeCorrection
from libotp.totp import Totp, TotpMatch
from libotp.window import RFC_NETWORK_DELAY, VerificationWindow

__version__ = "1.0.0"

__all__ = [
    "HashMode",
    "KeyProvider",
    "InMemoryKey",
    "ProtectedKey",
    "Hotp",
    "Totp",
    "TotpMatch",
    "VerificationWindow",
    "RFC_NETWORK_DELAY",
    "TimeCorrection",
    "UNCORRECTED",
    "random_key",
    "derive_key",
    "KeyUrl",
    "totp_url",
    "hotp_url",
    "parse_url",
    "from_url",
    "OtpError",
    "KeyUrlError",
    "TimeSyncError",
]
