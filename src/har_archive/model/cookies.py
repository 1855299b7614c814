"""Cookie records and Cookie / Set-Cookie header parsing.

Captured traffic is frequently non-conformant, so nothing here raises:
malformed text degrades to empty or default fields.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from har_archive.dates import parse_cookie_expires
from har_archive.model.headers import split_set_cookie

_LOGGER = logging.getLogger(__name__)


@dataclass
class Cookie:
    """A cookie sent by the client or set by the server.

    Attributes:
        name: Cookie name
        value: Cookie value
        path: Path attribute
        domain: Domain attribute
        expires: Expiration time
        http_only: True if the cookie is HTTP only
        secure: True if the cookie is only sent over TLS
        comment: Optional user or application comment
        same_site: SameSite policy ("Strict", "Lax", "None"), non-standard
    """

    name: str
    value: str
    path: str | None = None
    domain: str | None = None
    expires: datetime | None = None
    http_only: bool | None = None
    secure: bool | None = None
    comment: str | None = None
    same_site: str | None = None

    def __str__(self) -> str:
        return f"{self.name}={self.value}"


def parse_cookie_attributes(text: str) -> list[tuple[str, str | None]]:
    """Split ``key=value; key; ...`` text into trimmed pairs.

    Values are split on the first "=" only. A piece without "=" has a None
    value. Blank pieces are skipped.

    Example:
        >>> parse_cookie_attributes("id=a3fWa; Secure; Path=/")
        [('id', 'a3fWa'), ('Secure', None), ('Path', '/')]
    """
    pairs: list[tuple[str, str | None]] = []
    for piece in text.split(";"):
        if not piece.strip():
            continue
        key, sep, raw_value = piece.partition("=")
        pairs.append((key.strip(), raw_value.strip() if sep else None))
    return pairs


def parse_cookie_header(text: str) -> list[Cookie]:
    """Parse a request ``Cookie:`` header into cookies.

    Example:
        >>> parse_cookie_header("foo=bar; bar=")
        [Cookie(name='foo', value='bar', ...), Cookie(name='bar', value='', ...)]
    """
    return [Cookie(name=key, value=attr_value or "") for key, attr_value in parse_cookie_attributes(text)]


def parse_set_cookie(text: str) -> Cookie:
    """Parse a single response ``Set-Cookie:`` value.

    The first segment is the name/value pair. Expires, Domain, Path, Secure,
    HttpOnly and SameSite are recognized case-insensitively; anything else is
    ignored.

    Args:
        text: One (un-folded) Set-Cookie value

    Returns:
        Parsed cookie; secure and http_only are always set
    """
    pairs = parse_cookie_attributes(text)
    if not pairs:
        return Cookie(name="", value="", http_only=False, secure=False)

    (name, first_value), attributes = pairs[0], pairs[1:]
    cookie = Cookie(name=name, value=first_value or "", http_only=False, secure=False)

    for key, attr_value in attributes:
        key_lower = key.lower()
        if key_lower == "expires":
            if attr_value is not None:
                cookie.expires = parse_cookie_expires(attr_value)
                if cookie.expires is None:
                    _LOGGER.debug("Unparseable cookie Expires for %s: %s", name, attr_value)
        elif key_lower == "domain":
            cookie.domain = attr_value
        elif key_lower == "path":
            cookie.path = attr_value
        elif key_lower == "secure":
            cookie.secure = True
        elif key_lower == "httponly":
            cookie.http_only = True
        elif key_lower == "samesite":
            cookie.same_site = attr_value

    return cookie


def parse_set_cookie_headers(header_values: Iterable[str]) -> list[Cookie]:
    """Un-fold and parse a sequence of Set-Cookie header values."""
    return [parse_set_cookie(part) for header_value in header_values for part in split_set_cookie(header_value)]
