"""libotp.keyurl -- ``otpauth://`` provisioning urls, as used by Google Authenticator"""
from __future__ import annotations

import dataclasses
import logging
import re
from typing import Literal, Optional, Union, cast
from urllib.parse import parse_qsl, quote, unquote

import typing_extensions

from libotp._utils.base32 import b32decode, b32encode
from libotp._utils.validation import validate_int, validate_key
from libotp.exc import KeyUrlError
from libotp.hashmode import HashMode, as_hash_mode
from libotp.hotp import HOTP_DIGITS, Hotp
from libotp.totp import DEFAULT_DIGITS, DEFAULT_STEP, Totp

log = logging.getLogger(__name__)

__all__ = [
    "KeyUrl",
    "totp_url",
    "hotp_url",
    "parse_url",
    "from_url",
    "URL_DIGITS",
]

OtpType = Literal["totp", "hotp"]

SCHEME = "otpauth"
SECRET_PARAMETER = "secret"
ALGORITHM_PARAMETER = "algorithm"
DIGITS_PARAMETER = "digits"
PERIOD_PARAMETER = "period"
COUNTER_PARAMETER = "counter"

#: digit counts authenticator apps understand
URL_DIGITS = (6, 8)

#: largest counter the HOTP algorithm accepts (signed 64-bit)
MAX_COUNTER = 2**63 - 1

_URL_RE = re.compile(
    r"^(?P<scheme>[^:]+)://(?P<type>[^/]+)/(?P<label>[^/?]+)(?:/?\?(?P<query>[^/]+))?$"
)
_NUMBER_RE = re.compile(r"[0-9]+")

_ALLOWED_PARAMETERS = {
    "totp": frozenset(
        (SECRET_PARAMETER, ALGORITHM_PARAMETER, DIGITS_PARAMETER, PERIOD_PARAMETER)
    ),
    "hotp": frozenset(
        (SECRET_PARAMETER, ALGORITHM_PARAMETER, DIGITS_PARAMETER, COUNTER_PARAMETER)
    ),
}


@dataclasses.dataclass(frozen=True)
class KeyUrl:
    """decoded contents of an ``otpauth://`` url"""

    type: OtpType
    user: str
    key: bytes = dataclasses.field(repr=False)
    mode: HashMode = HashMode.SHA1
    digit_count: int = DEFAULT_DIGITS
    step: int = DEFAULT_STEP
    counter: Optional[int] = None

    def __post_init__(self) -> None:
        if self.type == "hotp":
            if self.counter is None:
                msg = "hotp urls require a counter"
                raise ValueError(msg)
            validate_int(self.counter, "counter", 0, MAX_COUNTER)
        elif self.type == "totp":
            if self.counter is not None:
                msg = "totp urls don't carry a counter"
                raise ValueError(msg)
        else:
            msg = f"type must be 'totp' or 'hotp', not {self.type!r}"
            raise ValueError(msg)

    def to_url(self) -> str:
        if self.type == "totp":
            return totp_url(self.key, self.user, self.step, self.mode, self.digit_count)
        if self.type == "hotp":
            return hotp_url(
                self.key, self.user, cast(int, self.counter), self.mode, self.digit_count
            )
        typing_extensions.assert_never(self.type)

    def to_otp(self) -> Union[Totp, Hotp]:
        if self.type == "totp":
            return Totp(
                self.key, step=self.step, mode=self.mode, digit_count=self.digit_count
            )
        if self.type == "hotp":
            if self.digit_count != HOTP_DIGITS:
                raise _error(f"{self.digit_count} digit hotp codes are not supported")
            return Hotp(self.key, mode=self.mode)
        typing_extensions.assert_never(self.type)


# =============================================================================
# url rendering
# =============================================================================


def totp_url(
    key: bytes,
    user: str,
    step: int = DEFAULT_STEP,
    mode: HashMode | str = HashMode.SHA1,
    digit_count: int = DEFAULT_DIGITS,
) -> str:
    """
    Render a TOTP key and its settings as an ``otpauth://totp/`` url.

    Settings equal to the format's defaults are left out.

    Usage example::

        >>> totp_url(b"12345678901234567890", "alice@example.org")
        'otpauth://totp/alice@example.org?secret=GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ'
    """
    validate_int(step, "step", min=1)
    mode = as_hash_mode(mode)
    url = _base_url("totp", key, user, mode, digit_count)
    if step != DEFAULT_STEP:
        url += _parameter(PERIOD_PARAMETER, step)
    return url


def hotp_url(
    key: bytes,
    user: str,
    counter: int,
    mode: HashMode | str = HashMode.SHA1,
    digit_count: int = HOTP_DIGITS,
) -> str:
    """Render an HOTP key and its current counter as an ``otpauth://hotp/`` url."""
    validate_int(counter, "counter", 0, MAX_COUNTER)
    mode = as_hash_mode(mode)
    return _base_url("hotp", key, user, mode, digit_count) + _parameter(
        COUNTER_PARAMETER, counter
    )


def _base_url(
    type: OtpType, key: bytes, user: str, mode: HashMode, digit_count: int
) -> str:
    if not user:
        msg = "user must not be empty"
        raise ValueError(msg)
    key = validate_key(key)
    if digit_count not in URL_DIGITS:
        msg = "digit_count must be 6 or 8"
        raise ValueError(msg)
    # NOTE: '@' is left unescaped, as in the key uri format's own examples
    url = f"{SCHEME}://{type}/{quote(user, safe='@')}?{SECRET_PARAMETER}={b32encode(key)}"
    if digit_count != DEFAULT_DIGITS:
        url += _parameter(DIGITS_PARAMETER, digit_count)
    if mode is not HashMode.SHA1:
        url += _parameter(ALGORITHM_PARAMETER, mode.name)
    return url


def _parameter(name: str, value: object) -> str:
    return f"&{name}={quote(str(value), safe='')}"


# =============================================================================
# url parsing
# =============================================================================


def parse_url(url: str) -> KeyUrl:
    """
    Decode an ``otpauth://`` url.

    :raises ~libotp.exc.KeyUrlError:
        if the url is malformed, uses a scheme other than ``otpauth``,
        an OTP type other than ``totp`` / ``hotp``, or contains unknown,
        duplicated or invalid parameters.
    """
    if not isinstance(url, str) or not url.strip():
        raise _error("url must not be empty")
    match = _URL_RE.match(url)
    if match is None:
        raise _error("url is malformed")

    scheme = match.group("scheme")
    if scheme != SCHEME:
        raise _error(f"invalid scheme {scheme!r}, must be otpauth://")

    type = match.group("type").lower()
    if type not in _ALLOWED_PARAMETERS:
        raise _error(f"unknown OTP type {match.group('type')!r}, must be hotp or totp")

    query = match.group("query")
    if not query:
        raise _error("missing query string")
    params = _parse_query(query, allowed=_ALLOWED_PARAMETERS[type])

    secret = params.get(SECRET_PARAMETER)
    if not secret:
        raise _error("missing 'secret' parameter")
    try:
        key = b32decode(secret)
    except ValueError as err:
        raise _error("'secret' is not valid base32") from err
    if not key:
        raise _error("'secret' decodes to an empty key")

    mode = HashMode.SHA1
    if ALGORITHM_PARAMETER in params:
        try:
            mode = HashMode.parse(params[ALGORITHM_PARAMETER])
        except ValueError as err:
            raise _error(f"invalid algorithm {params[ALGORITHM_PARAMETER]!r}") from err

    digit_count = DEFAULT_DIGITS
    if DIGITS_PARAMETER in params:
        digit_count = _parse_number(params[DIGITS_PARAMETER], DIGITS_PARAMETER)
        if digit_count not in URL_DIGITS:
            raise _error(f"invalid digits {digit_count}, must be 6 or 8")

    step = DEFAULT_STEP
    counter: Optional[int] = None
    if type == "totp":
        if PERIOD_PARAMETER in params:
            step = _parse_number(params[PERIOD_PARAMETER], PERIOD_PARAMETER)
            if step < 1:
                raise _error(f"invalid period {step}, must be at least 1")
    else:
        if COUNTER_PARAMETER not in params:
            raise _error("missing 'counter' parameter")
        counter = _parse_number(params[COUNTER_PARAMETER], COUNTER_PARAMETER)
        if counter > MAX_COUNTER:
            raise _error(f"invalid counter {counter}, must be at most {MAX_COUNTER}")

    return KeyUrl(
        type=type,  # type: ignore[arg-type]
        user=unquote(match.group("label")),
        key=key,
        mode=mode,
        digit_count=digit_count,
        step=step,
        counter=counter,
    )


def from_url(url: str) -> Union[Totp, Hotp]:
    """
    Create an OTP generator from an ``otpauth://`` url.

    HOTP urls produce a :class:`~libotp.hotp.Hotp`, whose counter is not stored;
    use :func:`parse_url` to read the counter too.
    """
    return parse_url(url).to_otp()


def _parse_query(query: str, allowed: frozenset[str]) -> dict[str, str]:
    try:
        pairs = parse_qsl(query, keep_blank_values=True, strict_parsing=True)
    except ValueError as err:
        raise _error("malformed query string") from err
    params: dict[str, str] = {}
    for name, value in pairs:
        if name not in allowed:
            raise _error(f"unexpected parameter {name!r}")
        if name in params:
            raise _error(f"duplicate parameter {name!r}")
        params[name] = value
    return params


def _parse_number(source: str, param: str) -> int:
    if not _NUMBER_RE.fullmatch(source):
        raise _error(f"malformed {param!r} parameter, must be a number")
    return int(source)


def _error(reason: str) -> KeyUrlError:
    log.debug("rejected otpauth url: %s", reason)
    return KeyUrlError(f"Invalid otpauth url: {reason}")
