from __future__ import annotations

from typing import TYPE_CHECKING

from libotp.hashmode import HashMode, as_hash_mode
from libotp.otp import as_key_provider, calculate_otp, digits, find_match

if TYPE_CHECKING:
    from libotp.otp import KeyInput
    from libotp.window import VerificationWindow

__all__ = ["Hotp", "HOTP_DIGITS"]

#: HOTP codes are always rendered with this many digits
HOTP_DIGITS = 6


class Hotp:
    """
    Helper for generating and verifying RFC 4226 HOTP codes.

    The counter is never stored: callers own it, and must advance it
    once per accepted code so a code can't be replayed.

    :param key:
        secret key, as raw bytes or a :class:`~libotp.keys.KeyProvider`.
    :param mode:
        HMAC digest, defaults to SHA1.
    """

    def __init__(self, key: KeyInput, mode: HashMode | str = HashMode.SHA1) -> None:
        self._mode = as_hash_mode(mode)
        self._key = as_key_provider(key)

    @property
    def mode(self) -> HashMode:
        return self._mode

    def compute(self, counter: int) -> str:
        return digits(self.compute_decimal(counter), HOTP_DIGITS)

    def compute_decimal(self, counter: int) -> int:
        """
        truncated value before reduction to 6 digits,
        listed as "Decimal" in RFC 4226 appendix D.
        """
        return calculate_otp(self._key, counter, self._mode)

    def verify(
        self,
        counter: int,
        code: str,
        window: VerificationWindow | None = None,
    ) -> int | None:
        """
        Check ``code`` against ``counter`` and the counters ``window`` allows around it.

        :returns:
            the matching counter, or ``None``.
            A match at counter 0 is falsy, so test the result with ``is None``.
        """
        return find_match(self.compute, counter, code, window)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} mode={self._mode.name}>"
