"""HTTP header records and header-list helpers.

Headers are kept as an ordered list of name/value pairs rather than a
mapping: duplicate names and the original order both carry meaning in a
capture. Lookups are case-insensitive on the name.
"""

from __future__ import annotations

import enum
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

SET_COOKIE = "Set-Cookie"

# Characters excluded from an RFC 2616 token besides CTLs, DEL and non-ASCII
_NON_TOKEN_CHARS = frozenset('()<>@,;:\\"/[]?={} \t')
_SPACE_CHARS = frozenset(" \t\n\r")


class HeaderGroup(enum.IntEnum):
    """Header groups in canonical order."""

    GENERAL = 0
    REQUEST = 1
    RESPONSE = 2
    ENTITY = 3


# fmt: off
_HEADER_GROUPS: dict[str, HeaderGroup] = {
    name.lower(): group
    for group, names in (
        (HeaderGroup.GENERAL, (
            "Cache-Control", "Connection", "Date", "Pragma", "Trailer", "Transfer-Encoding",
            "Upgrade", "Via", "Warning",
        )),
        (HeaderGroup.REQUEST, (
            "Accept", "Accept-Charset", "Accept-Encoding", "Accept-Language", "Authorization",
            "Expect", "From", "Host", "If-Match", "If-Modified-Since", "If-None-Match", "If-Range",
            "If-Unmodified-Since", "Max-Forwards", "Proxy-Authorization", "Range", "Referer", "TE",
            "User-Agent",
        )),
        (HeaderGroup.RESPONSE, (
            "Accept-Ranges", "Age", "ETag", "Location", "Proxy-Authenticate", "Retry-After",
            "Server", "Vary", "WWW-Authenticate",
        )),
        (HeaderGroup.ENTITY, (
            "Allow", "Content-Encoding", "Content-Language", "Content-Length", "Content-Location",
            "Content-MD5", "Content-Range", "Content-Type", "Expires", "Last-Modified",
        )),
    )
    for name in names
}
# fmt: on


def header_group(name: str) -> HeaderGroup:
    """Return the canonical group for a header name (unknown names are entity headers)."""
    return _HEADER_GROUPS.get(name.lower(), HeaderGroup.ENTITY)


@dataclass(eq=False)
class Header:
    """A single HTTP header.

    Attributes:
        name: Header name
        value: Header value
        comment: Optional user or application comment
    """

    name: str
    value: str
    comment: str | None = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Header):
            return NotImplemented
        return (
            self.name.lower() == other.name.lower()
            and self.value == other.value
            and self.comment == other.comment
        )

    def __hash__(self) -> int:
        return hash(self.name.lower())

    def __str__(self) -> str:
        return f"{self.name}: {self.value}"

    @property
    def group(self) -> HeaderGroup:
        return header_group(self.name)

    @property
    def sort_key(self) -> tuple[HeaderGroup, str]:
        return (self.group, self.name)

    def is_named(self, name: str | re.Pattern[str]) -> bool:
        """Check the header name against a case-insensitive name or a regex.

        Example:
            >>> Header("content-type", "text/html").is_named("Content-Type")
            True
            >>> Header("X-Auth-Token", "abc").is_named(re.compile("token", re.I))
            True
        """
        if isinstance(name, re.Pattern):
            return name.search(self.name) is not None
        return self.name.lower() == name.lower()


def values(headers: Iterable[Header], name: str) -> list[str]:
    """Return every value for a header name, in original order."""
    return [header.value for header in headers if header.is_named(name)]


def value(headers: Iterable[Header], name: str) -> str | None:
    """Return the first value for a header name, or None."""
    for header in headers:
        if header.is_named(name):
            return header.value
    return None


def canonical_order(headers: Iterable[Header]) -> list[Header]:
    """Return a new list sorted by (group, name).

    The input sequence is left untouched.

    Example:
        >>> names = ["Content-Type", "Accept", "Date", "Content-Length"]
        >>> [h.name for h in canonical_order(Header(n, "") for n in names)]
        ['Date', 'Accept', 'Content-Length', 'Content-Type']
    """
    return sorted(headers, key=lambda header: header.sort_key)


def headers_as_dict(headers: Iterable[Header]) -> dict[str, str]:
    """Collapse headers into a mapping, joining repeated names with ", "."""
    result: dict[str, str] = {}
    spellings: dict[str, str] = {}
    for header in headers:
        key = spellings.setdefault(header.name.lower(), header.name)
        if key in result:
            result[key] += ", " + header.value
        else:
            result[key] = header.value
    return result


def remove_all(headers: list[Header], name: str | re.Pattern[str]) -> None:
    """Remove every header matching a name or pattern, in place."""
    headers[:] = [header for header in headers if not header.is_named(name)]


def removing_all(headers: Iterable[Header], name: str | re.Pattern[str]) -> list[Header]:
    """Return a copy of headers without those matching a name or pattern."""
    return [header for header in headers if not header.is_named(name)]


def _is_token_char(char: str) -> bool:
    code = ord(char)
    # CTL (0-31), DEL (127) and anything outside ASCII
    if code <= 31 or code >= 127:
        return False
    return char not in _NON_TOKEN_CHARS


def split_set_cookie(text: str) -> list[str]:
    """Un-fold a comma-joined Set-Cookie header into individual cookie strings.

    Some transports join repeated Set-Cookie headers with commas. Commas also
    appear inside Expires dates, so a comma only separates two cookies when it
    is followed (after optional whitespace) by a cookie token and "=".

    Args:
        text: Raw Set-Cookie header value

    Returns:
        Cookie strings in original order

    Example:
        >>> split_set_cookie("a=1; Expires=Wed, 09 Jun 2021 10:18:14 GMT, b=2")
        ['a=1; Expires=Wed, 09 Jun 2021 10:18:14 GMT', 'b=2']
    """
    result: list[str] = []
    end = len(text)
    index = 0

    while index < end:
        while index < end and text[index] in _SPACE_CHARS:
            index += 1
        start = index
        stop = index

        while index < end:
            comma = text.find(",", index)
            if comma == -1:
                index = stop = end
                break

            lookahead = comma + 1
            while lookahead < end and text[lookahead] in _SPACE_CHARS:
                lookahead += 1
            token_start = lookahead
            while lookahead < end and _is_token_char(text[lookahead]):
                lookahead += 1

            if lookahead > token_start and lookahead < end and text[lookahead] == "=":
                stop = comma
                index = comma + 1
                break

            # Comma is part of the value (e.g. an Expires date)
            index = stop = comma + 1

        if stop > start:
            result.append(text[start:stop])

    return result


def headers_from_fields(fields: Mapping[str, str] | Iterable[tuple[str, str]]) -> list[Header]:
    """Build headers from a mapping or name/value pairs.

    Set-Cookie values are un-folded so each cookie gets its own header.
    Order and duplicate names are preserved.
    """
    pairs = fields.items() if isinstance(fields, Mapping) else fields

    headers: list[Header] = []
    for name, field_value in pairs:
        if name.lower() == SET_COOKIE.lower():
            headers.extend(Header(name, part) for part in split_set_cookie(field_value))
        else:
            headers.append(Header(name, field_value))
    return headers
