"""Record live HTTP transactions into HAR documents.

Uses ``urllib.request`` so recording needs no extra dependencies. Redirects
are followed by urllib; the recorded entry describes the final response.
"""

from __future__ import annotations

import logging
import ssl
import time
import urllib.error
import urllib.request
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from har_archive.codec import ParseError
from har_archive.dates import truncate_to_centiseconds
from har_archive.model import Entry, Har, Timing, headers_as_dict, headers_from_fields, removing_all, values
from har_archive.storage import read_har, write_har
from har_archive.transport.raw import RawRequest, RawResponse, entry_from_raw

_LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30

# http.client reports the protocol as an integer
_HTTP_VERSIONS = {9: "HTTP/0.9", 10: "HTTP/1.0", 11: "HTTP/1.1"}


def _sendable_headers(raw: RawRequest) -> list[tuple[str, str]]:
    """Merge repeated header names, since urllib sends one value per name.

    Cookie values are joined with "; ", everything else with ", ".
    """
    headers = headers_from_fields(raw.headers)
    merged = headers_as_dict(removing_all(headers, "Cookie"))
    cookies = values(headers, "Cookie")
    if cookies:
        merged["Cookie"] = "; ".join(cookies)
    return list(merged.items())


def _to_urllib(raw: RawRequest) -> urllib.request.Request:
    req = urllib.request.Request(raw.url, data=raw.body, method=raw.method)
    for header in headers_from_fields(raw.headers):
        req.add_header(header.name, header.value)
    return req


def _read_response(resp: Any) -> tuple[RawResponse, float]:
    """Drain a urllib response, returning it with the receive time in ms."""
    started = time.perf_counter()
    body = resp.read()
    receive = (time.perf_counter() - started) * 1000

    version = _HTTP_VERSIONS.get(getattr(resp, "version", 11), "HTTP/1.1")
    raw = RawResponse(
        status=resp.status,
        status_text=resp.reason or None,
        headers=list(resp.headers.items()),
        body=body,
        http_version=version,
    )
    return raw, receive


def record_entry(
    request: RawRequest,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    verify_ssl: bool = True,
) -> Entry:
    """Perform a request and capture it as a HAR entry.

    HTTP error statuses are recorded like any other response. Repeated
    request header names are merged into one header before sending, and the
    entry records the merged headers.

    Args:
        request: Request to perform
        timeout: Socket timeout in seconds
        verify_ssl: Verify TLS certificates (disable for self-signed targets)

    Returns:
        Entry with wait and receive timings measured

    Raises:
        urllib.error.URLError: If the target cannot be reached
    """
    # Record the headers as they go out on the wire
    request = replace(request, headers=_sendable_headers(request))

    context = None
    if request.url.startswith("https://") and not verify_ssl:
        # Allow self-signed certs
        context = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE

    started_date_time = truncate_to_centiseconds(datetime.now(timezone.utc))
    started = time.perf_counter()
    _LOGGER.info("Recording %s %s", request.method, request.url)

    try:
        resp = urllib.request.urlopen(_to_urllib(request), timeout=timeout, context=context)
    except urllib.error.HTTPError as e:
        resp = e
    wait = (time.perf_counter() - started) * 1000

    with resp:
        raw_response, receive = _read_response(resp)

    timings = Timing(send=0, wait=round(wait, 3), receive=round(receive, 3))
    entry = entry_from_raw(request, raw_response, started=started_date_time, timings=timings)
    _LOGGER.debug("Recorded %d in %.1fms", raw_response.status, entry.time)
    return entry


def record_har(request: RawRequest, **kwargs: Any) -> Har:
    """Perform a request and wrap the captured entry in a new document."""
    return Har.from_entries([record_entry(request, **kwargs)])


def load_or_record(
    path: str | Path,
    request: RawRequest,
    transform: Callable[[Har], Har] | None = None,
    **kwargs: Any,
) -> Har:
    """Load a HAR file, recording and saving it first when it can't be read.

    Args:
        path: HAR file used as the fixture
        request: Request to record when the file is missing or unreadable
        transform: Applied to a freshly recorded document before it is written,
            e.g. to scrub credentials
        **kwargs: Passed to :func:`record_entry`

    Returns:
        The loaded or recorded document
    """
    try:
        return read_har(path)
    except (OSError, ParseError) as e:
        _LOGGER.info("Recording %s (%s)", path, e)

    har = record_har(request, **kwargs)
    if transform is not None:
        har = transform(har)
    write_har(har, path)
    return har
