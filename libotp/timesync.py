"""
libotp.timesync -- measure local clock drift against network time sources.

This module sits outside the OTP core: it only produces
:class:`~libotp.timecorrection.TimeCorrection` values for the caller to hand
to :class:`~libotp.totp.Totp`. Results are a single sample, never refreshed.
"""
from __future__ import annotations

import email.utils
import logging
import re
import socket
import urllib.request
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from libotp._utils.time import as_utc
from libotp.exc import TimeSyncError
from libotp.timecorrection import TimeCorrection

if TYPE_CHECKING:
    from collections.abc import Sequence

log = logging.getLogger(__name__)

__all__ = [
    "NIST_SERVERS",
    "parse_daytime_response",
    "query_daytime",
    "query_http_date",
    "correction_from_nist",
    "correction_from_http",
]

#: NIST servers answering the RFC 867 daytime protocol, tried in order
NIST_SERVERS = (
    "time.nist.gov",
    "time-a-g.nist.gov",
    "time-b-g.nist.gov",
    "time-c-g.nist.gov",
    "time-a-wwv.nist.gov",
    "time-b-wwv.nist.gov",
    "time-a-b.nist.gov",
    "time-b-b.nist.gov",
    "utcnist.colorado.edu",
    "utcnist2.colorado.edu",
)
DAYTIME_PORT = 13
DEFAULT_TIMEOUT = 5.0
DEFAULT_HTTP_TIME_URL = "https://www.google.com"

_DAYTIME_RE = re.compile(r"([0-9]{2})-([0-9]{2})-([0-9]{2}) ([0-9]{2}):([0-9]{2}):([0-9]{2})")


def parse_daytime_response(text: str) -> datetime | None:
    """
    Parse a NIST daytime answer, such as
    ``60759 25-03-14 17:42:11 50 0 0 631.9 UTC(NIST) *``.

    :returns: aware UTC datetime, or ``None`` if ``text`` isn't a NIST answer.
    """
    if "UTC(NIST)" not in text.upper():
        return None
    match = _DAYTIME_RE.search(text)
    if match is None:
        return None
    year, month, day, hour, minute, second = (int(part) for part in match.groups())
    try:
        return datetime(2000 + year, month, day, hour, minute, second, tzinfo=timezone.utc)
    except ValueError:
        return None


def query_daytime(
    server: str, port: int = DAYTIME_PORT, timeout: float = DEFAULT_TIMEOUT
) -> datetime:
    """
    :raises OSError: if the server can't be reached.
    :raises ~libotp.exc.TimeSyncError: if the answer can't be parsed.
    """
    chunks = []
    with socket.create_connection((server, port), timeout=timeout) as conn:
        while True:
            chunk = conn.recv(1024)
            if not chunk:
                break
            chunks.append(chunk)
    response = b"".join(chunks).decode("ascii", errors="replace")
    result = parse_daytime_response(response)
    if result is None:
        msg = f"unrecognized daytime response from {server}"
        raise TimeSyncError(msg)
    return result


def query_http_date(
    url: str = DEFAULT_HTTP_TIME_URL, timeout: float = DEFAULT_TIMEOUT
) -> datetime:
    """
    Read the current time from the ``Date`` header of a web server.
    Fast, but only as accurate as that server's clock, to the second.

    :raises OSError: if the request fails.
    :raises ~libotp.exc.TimeSyncError: if the response has no usable ``Date`` header.
    """
    request = urllib.request.Request(url, method="HEAD")
    with urllib.request.urlopen(request, timeout=timeout) as response:
        header = response.headers.get("Date")
    if not header:
        msg = f"{url} did not send a Date header"
        raise TimeSyncError(msg)
    try:
        value = email.utils.parsedate_to_datetime(header)
    except (TypeError, ValueError) as err:
        msg = f"{url} sent an unparseable Date header: {header!r}"
        raise TimeSyncError(msg) from err
    return as_utc(value)


def correction_from_nist(
    servers: Sequence[str] = NIST_SERVERS, timeout: float = DEFAULT_TIMEOUT
) -> TimeCorrection:
    """
    Ask each of ``servers`` in turn, returning a correction from the first answer.

    :raises ~libotp.exc.TimeSyncError: if no server answered.
    """
    for server in servers:
        try:
            true_time = query_daytime(server, timeout=timeout)
        except (OSError, TimeSyncError) as err:
            log.debug("time server %s failed: %s", server, err)
            continue
        log.debug("using time from %s", server)
        return TimeCorrection.from_sample(true_time)
    log.warning("none of %d NIST time servers answered", len(servers))
    msg = "couldn't get network time"
    raise TimeSyncError(msg)


def correction_from_http(
    url: str = DEFAULT_HTTP_TIME_URL, timeout: float = DEFAULT_TIMEOUT
) -> TimeCorrection:
    """:raises ~libotp.exc.TimeSyncError: if the server can't be queried."""
    try:
        true_time = query_http_date(url, timeout=timeout)
    except OSError as err:
        log.warning("time query to %s failed: %s", url, err)
        msg = f"couldn't get network time from {url}"
        raise TimeSyncError(msg) from err
    return TimeCorrection.from_sample(true_time)
