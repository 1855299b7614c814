"""Conversion between raw HTTP transactions and HAR entries.

The transport that actually talks to the network hands over captured data as
:class:`RawRequest` / :class:`RawResponse`; replay layers get the same shapes
back from :func:`entry_to_raw`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from http import HTTPStatus

from har_archive.model import (
    Content,
    Entry,
    Header,
    PostData,
    Request,
    Response,
    Timing,
    canonical_order,
    headers_from_fields,
    value,
)

_LOGGER = logging.getLogger(__name__)

HeaderFields = Mapping[str, str] | Iterable[tuple[str, str]]


@dataclass
class RawRequest:
    """A request as seen by the transport.

    Attributes:
        method: HTTP method
        url: Absolute URL
        headers: Header mapping or name/value pairs (duplicates allowed)
        body: Request body, None when there is none
    """

    method: str = "GET"
    url: str = "about:blank"
    headers: HeaderFields = field(default_factory=list)
    body: bytes | None = None


@dataclass
class RawResponse:
    """A response as seen by the transport.

    Attributes:
        status: Status code
        status_text: Reason phrase, defaulted from the status code when None
        headers: Header mapping or name/value pairs (duplicates allowed)
        body: Decoded (unchunked, decompressed) body
        http_version: Protocol version, e.g. "HTTP/1.1"
    """

    status: int = 200
    status_text: str | None = None
    headers: HeaderFields = field(default_factory=list)
    body: bytes | None = None
    http_version: str = "HTTP/1.1"


@dataclass
class RawExchange:
    """A request/response pair ready for replay."""

    request: RawRequest
    response: RawResponse
    body: bytes


def status_text_for(status: int) -> str:
    """Standard reason phrase for a status code ("" when unknown).

    Example:
        >>> status_text_for(404)
        'Not Found'
    """
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


def _build_headers(fields: HeaderFields, canonical: bool) -> list[Header]:
    headers = headers_from_fields(fields)
    return canonical_order(headers) if canonical else headers


def request_from_raw(raw: RawRequest, *, canonical: bool = False) -> Request:
    """Build a HAR request from captured request data.

    Args:
        raw: Captured request
        canonical: Sort headers into canonical order instead of keeping capture order

    Returns:
        Request with cookies, query string and sizes derived
    """
    headers = _build_headers(raw.headers, canonical)

    post_data: PostData | None = None
    body_size = 0
    if raw.body is not None:
        body_size = len(raw.body)
        post_data = PostData.from_bytes(raw.body, value(headers, "Content-Type"))

    return Request(method=raw.method, url=raw.url, headers=headers, post_data=post_data, body_size=body_size)


def response_from_raw(raw: RawResponse, *, canonical: bool = False) -> Response:
    """Build a HAR response from captured response data.

    Set-Cookie headers joined with commas are split back into one header per
    cookie before cookies are parsed.
    """
    headers = _build_headers(raw.headers, canonical)
    status_text = raw.status_text if raw.status_text is not None else status_text_for(raw.status)
    mime_type = value(headers, "Content-Type")
    content = Content.from_bytes(raw.body, mime_type) if raw.body is not None else Content()

    return Response(
        status=raw.status,
        status_text=status_text,
        http_version=raw.http_version,
        headers=headers,
        content=content,
        redirect_url=value(headers, "Location") or "",
    )


def entry_from_raw(
    request: RawRequest,
    response: RawResponse,
    *,
    started: datetime | None = None,
    timings: Timing | None = None,
    canonical: bool = False,
) -> Entry:
    """Build a HAR entry from a captured transaction.

    When timings are given, ``time`` is set to their total.
    """
    entry = Entry(
        request=request_from_raw(request, canonical=canonical),
        response=response_from_raw(response, canonical=canonical),
    )
    if started is not None:
        entry.started_date_time = started
    if timings is not None:
        entry.timings = timings
        entry.time = timings.total
    _LOGGER.debug("Built entry for %s -> %d", entry.request, entry.response.status)
    return entry


def entry_to_raw(entry: Entry) -> RawExchange:
    """Produce the request, response and body bytes needed to replay an entry."""
    request = entry.request
    response = entry.response
    body = response.content.to_bytes()

    raw_request = RawRequest(
        method=request.method,
        url=request.url,
        headers=[(header.name, header.value) for header in request.headers],
        body=request.post_data.data if request.post_data is not None else None,
    )
    raw_response = RawResponse(
        status=response.status,
        status_text=response.status_text,
        headers=[(header.name, header.value) for header in response.headers],
        body=body,
        http_version=response.http_version,
    )
    return RawExchange(request=raw_request, response=raw_response, body=body)
