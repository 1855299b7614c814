"""Scrubbing of sensitive headers and timings from HAR documents.

A scrub applies an ordered list of operations to every request and response
in a document. Operations only look at header names, never at values.

When scrubbing changes the first Cookie header of a request (or the first
Set-Cookie header of a response), every parsed cookie on that side takes the
new header value. Cookie names are left as captured.
"""

from __future__ import annotations

import copy
import logging
import re
from dataclasses import dataclass
from typing import TypeVar, Union

from har_archive.model import (
    Entry,
    Har,
    Header,
    Log,
    Page,
    PageTiming,
    Request,
    Response,
    Timing,
    remove_all,
    value,
)
from har_archive.model.headers import SET_COOKIE
from har_archive.model.timing import NOT_APPLICABLE
from har_archive.patterns import default_placeholder, sensitive_header_pattern

_LOGGER = logging.getLogger(__name__)

# Header names that look like they carry credentials
SENSITIVE_HEADERS: re.Pattern[str] = sensitive_header_pattern()
DEFAULT_PLACEHOLDER: str = default_placeholder()


@dataclass(frozen=True)
class RedactHeader:
    """Replace the value of headers with this name (case-insensitive)."""

    name: str
    placeholder: str = DEFAULT_PLACEHOLDER


@dataclass(frozen=True)
class RedactHeaderMatching:
    """Replace the value of headers whose name matches the pattern."""

    pattern: re.Pattern[str]
    placeholder: str = DEFAULT_PLACEHOLDER


@dataclass(frozen=True)
class RemoveHeader:
    """Drop headers with this name (case-insensitive)."""

    name: str


@dataclass(frozen=True)
class RemoveHeaderMatching:
    """Drop headers whose name matches the pattern."""

    pattern: re.Pattern[str]


@dataclass(frozen=True)
class StripTimings:
    """Reset entry and page timings to "not applicable"."""


ScrubOperation = Union[RedactHeader, RedactHeaderMatching, RemoveHeader, RemoveHeaderMatching, StripTimings]

_T = TypeVar("_T", Har, Log, Page, Entry, Request, Response, list)


def default_operations(placeholder: str | None = None) -> list[ScrubOperation]:
    """Redact every header whose name looks sensitive.

    Example:
        >>> ops = default_operations("x")
        >>> ops[0].pattern.search("Authorization") is not None
        True
    """
    return [RedactHeaderMatching(SENSITIVE_HEADERS, placeholder or DEFAULT_PLACEHOLDER)]


def scrub_headers(headers: list[Header], operations: list[ScrubOperation]) -> list[Header]:
    """Apply redact/remove operations to a header list in place.

    Args:
        headers: Headers to modify
        operations: Operations, applied in order

    Returns:
        The same list
    """
    for operation in operations:
        if isinstance(operation, RedactHeader):
            for header in headers:
                if header.is_named(operation.name):
                    header.value = operation.placeholder
        elif isinstance(operation, RedactHeaderMatching):
            for header in headers:
                if header.is_named(operation.pattern):
                    header.value = operation.placeholder
        elif isinstance(operation, RemoveHeader):
            remove_all(headers, operation.name)
        elif isinstance(operation, RemoveHeaderMatching):
            remove_all(headers, operation.pattern)
        elif not isinstance(operation, StripTimings):
            _LOGGER.debug("Ignoring unsupported scrub operation: %r", operation)
    return headers


def _scrub_message(message: Request | Response, cookie_header: str, operations: list[ScrubOperation]) -> None:
    old_value = value(message.headers, cookie_header)
    scrub_headers(message.headers, operations)
    new_value = value(message.headers, cookie_header)

    if new_value is not None and new_value != old_value:
        for cookie in message.cookies or []:
            cookie.value = new_value


def scrub_request(request: Request, operations: list[ScrubOperation]) -> Request:
    """Scrub request headers, keeping parsed cookies consistent with Cookie."""
    _scrub_message(request, "Cookie", operations)
    return request


def scrub_response(response: Response, operations: list[ScrubOperation]) -> Response:
    """Scrub response headers, keeping parsed cookies consistent with Set-Cookie."""
    _scrub_message(response, SET_COOKIE, operations)
    return response


def scrub_page(page: Page, operations: list[ScrubOperation]) -> Page:
    if any(isinstance(operation, StripTimings) for operation in operations):
        page.page_timings = PageTiming()
    return page


def scrub_entry(entry: Entry, operations: list[ScrubOperation]) -> Entry:
    """Scrub an entry's timings, request and response in place."""
    if any(isinstance(operation, StripTimings) for operation in operations):
        entry.time = NOT_APPLICABLE
        entry.timings = Timing()
    scrub_request(entry.request, operations)
    scrub_response(entry.response, operations)
    return entry


def scrub_log(log: Log, operations: list[ScrubOperation]) -> Log:
    """Scrub every page and entry of a log in place."""
    for page in log.pages or []:
        scrub_page(page, operations)
    for entry in log.entries:
        scrub_entry(entry, operations)
    _LOGGER.debug("Scrubbed %d entries with %d operations", len(log.entries), len(operations))
    return log


def scrub(target: _T, operations: list[ScrubOperation]) -> _T:
    """Apply scrub operations in place.

    Args:
        target: A Har, Log, Page, Entry, Request, Response or header list
        operations: Operations, applied in order

    Returns:
        The same object, modified

    Example:
        >>> request = Request(headers=[Header("Cookie", "last=abc")])
        >>> scrub(request, [RedactHeader("cookie", "redacted")]).cookies[0].value
        'redacted'
    """
    if isinstance(target, Har):
        scrub_log(target.log, operations)
    elif isinstance(target, Log):
        scrub_log(target, operations)
    elif isinstance(target, Page):
        scrub_page(target, operations)
    elif isinstance(target, Entry):
        scrub_entry(target, operations)
    elif isinstance(target, Request):
        scrub_request(target, operations)
    elif isinstance(target, Response):
        scrub_response(target, operations)
    elif isinstance(target, list):
        scrub_headers(target, operations)
    else:
        _LOGGER.warning("Cannot scrub object of type %s", type(target).__name__)
    return target


def scrubbed(target: _T, operations: list[ScrubOperation]) -> _T:
    """Return a scrubbed deep copy, leaving the original untouched."""
    return scrub(copy.deepcopy(target), operations)
