"""libotp.totp -- TOTP / RFC 6238"""
from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from libotp._utils.time import to_unix_seconds
from libotp._utils.validation import validate_int
from libotp.hashmode import HashMode, as_hash_mode
from libotp.otp import as_key_provider, calculate_otp, digits, find_match
from libotp.timecorrection import UNCORRECTED, TimeCorrection

if TYPE_CHECKING:
    from libotp._utils.time import Timestamp
    from libotp.otp import KeyInput
    from libotp.window import VerificationWindow

__all__ = [
    "Totp",
    "TotpMatch",
    "DEFAULT_STEP",
    "DEFAULT_DIGITS",
    "MIN_DIGITS",
    "MAX_DIGITS",
]

DEFAULT_STEP = 30
DEFAULT_DIGITS = 6
MIN_DIGITS = 1
MAX_DIGITS = 10


class TotpMatch(NamedTuple):
    """
    Result of :meth:`Totp.verify`, unpacks as ``(valid, time_step)``.

    ``time_step`` identifies the matched window and can be stored to refuse
    a second use of the same step. It is ``0`` when nothing matched.
    """

    valid: bool
    time_step: int

    def __bool__(self) -> bool:
        return self.valid


class Totp:
    """
    Helper for generating and verifying RFC 6238 TOTP codes.

    :param key:
        secret key, as raw bytes or a :class:`~libotp.keys.KeyProvider`.
    :param step:
        seconds per time step, defaults to 30.
    :param mode:
        HMAC digest, defaults to SHA1.
    :param digit_count:
        number of digits in a code, 1 to 10, defaults to 6.
    :param time_correction:
        offset applied to every timestamp before use,
        defaults to :data:`~libotp.timecorrection.UNCORRECTED`.

    All methods taking a ``timestamp`` accept a :class:`!datetime`
    (naive values are UTC), unix seconds as :class:`!int` or :class:`!float`,
    or ``None`` for the corrected current time.
    """

    def __init__(
        self,
        key: KeyInput,
        step: int = DEFAULT_STEP,
        mode: HashMode | str = HashMode.SHA1,
        digit_count: int = DEFAULT_DIGITS,
        time_correction: TimeCorrection | None = None,
    ) -> None:
        validate_int(step, "step", min=1)
        validate_int(digit_count, "digit_count", MIN_DIGITS, MAX_DIGITS)
        if time_correction is None:
            time_correction = UNCORRECTED
        elif not isinstance(time_correction, TimeCorrection):
            msg = (
                "time_correction must be a TimeCorrection, "
                f"not {type(time_correction).__name__}"
            )
            raise TypeError(msg)
        self._mode = as_hash_mode(mode)
        self._key = as_key_provider(key)
        self._step = step
        self._digit_count = digit_count
        self._time_correction = time_correction

    @property
    def mode(self) -> HashMode:
        return self._mode

    @property
    def step(self) -> int:
        return self._step

    @property
    def digit_count(self) -> int:
        return self._digit_count

    @property
    def time_correction(self) -> TimeCorrection:
        return self._time_correction

    def compute(self, timestamp: Timestamp | None = None) -> str:
        return self._compute_step(self.time_step(timestamp))

    def time_step(self, timestamp: Timestamp | None = None) -> int:
        """HOTP counter for the step containing the corrected timestamp"""
        return self._corrected_seconds(timestamp) // self._step

    def remaining_seconds(self, timestamp: Timestamp | None = None) -> int:
        """seconds the current code stays valid, between 1 and :attr:`step`"""
        return self._step - self._corrected_seconds(timestamp) % self._step

    def verify(
        self,
        code: str,
        timestamp: Timestamp | None = None,
        window: VerificationWindow | None = None,
    ) -> TotpMatch:
        """
        Check ``code`` against the step for ``timestamp``,
        and any neighbouring steps ``window`` allows.
        """
        matched = find_match(self._compute_step, self.time_step(timestamp), code, window)
        if matched is None:
            return TotpMatch(valid=False, time_step=0)
        return TotpMatch(valid=True, time_step=matched)

    def _compute_step(self, time_step: int) -> str:
        return digits(calculate_otp(self._key, time_step, self._mode), self._digit_count)

    def _corrected_seconds(self, timestamp: Timestamp | None) -> int:
        if timestamp is None:
            corrected = self._time_correction.corrected_now()
        else:
            corrected = self._time_correction.apply(timestamp)
        seconds = to_unix_seconds(corrected)
        if seconds < 0:
            msg = "time must be >= 0"
            raise ValueError(msg)
        return seconds

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} mode={self._mode.name} "
            f"step={self._step} digit_count={self._digit_count}>"
        )
