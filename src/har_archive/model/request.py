"""Request record.

Derived fields (cookies, query string, header and body sizes) are computed
once at construction when not given, then left alone. Call
:meth:`Request.refresh_derived` after mutating headers or the URL.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qsl, urlsplit

from har_archive.model.content import PostData
from har_archive.model.cookies import Cookie, parse_cookie_header
from har_archive.model.headers import Header
from har_archive.model.headers import values as header_values

DEFAULT_HTTP_VERSION = "HTTP/1.1"


@dataclass
class QueryString:
    """A query string parameter.

    Attributes:
        name: Parameter name
        value: Parameter value
        comment: Optional user or application comment
    """

    name: str
    value: str
    comment: str | None = None

    def __str__(self) -> str:
        return f"{self.name}={self.value}"


def parse_query_string(url: str) -> list[QueryString]:
    """Extract query parameters from a URL ("+" decodes to a space).

    Example:
        >>> parse_query_string("http://example.com/?q=a+b&empty=")
        [QueryString(name='q', value='a b', comment=None), QueryString(name='empty', value='', comment=None)]
    """
    query = urlsplit(url).query
    return [QueryString(name, value) for name, value in parse_qsl(query, keep_blank_values=True)]


@dataclass
class Request:
    """Detailed info about a performed request.

    Attributes:
        method: Request method
        url: Absolute URL (fragments excluded)
        http_version: Request HTTP version
        cookies: Parsed cookies
        headers: Headers in captured order
        query_string: Parsed query parameters
        post_data: Posted data, if any
        headers_size: Bytes up to and including the blank line, -1 if unknown
        body_size: Body size in bytes, -1 if unknown
        comment: Optional user or application comment
        extensions: Custom ``_``-prefixed members
    """

    method: str = "GET"
    url: str = "about:blank"
    http_version: str = DEFAULT_HTTP_VERSION
    cookies: list[Cookie] | None = None
    headers: list[Header] = field(default_factory=list)
    query_string: list[QueryString] | None = None
    post_data: PostData | None = None
    headers_size: int | None = None
    body_size: int | None = None
    comment: str | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.cookies is None:
            self.cookies = self.computed_cookies()
        if self.query_string is None:
            self.query_string = self.computed_query_string()
        if self.headers_size is None:
            self.headers_size = self.computed_headers_size()
        if self.body_size is None:
            self.body_size = self.computed_body_size()

    def computed_cookies(self) -> list[Cookie]:
        """Cookies parsed from the current Cookie headers."""
        return [cookie for text in header_values(self.headers, "Cookie") for cookie in parse_cookie_header(text)]

    def computed_query_string(self) -> list[QueryString]:
        return parse_query_string(self.url)

    def header_text(self) -> str:
        """Request line and headers as sent on the wire."""
        path = urlsplit(self.url).path or "/"
        lines = [f"{self.method} {path} {self.http_version}\r\n"]
        lines.extend(f"{header.name}: {header.value}\r\n" for header in self.headers)
        lines.append("\r\n")
        return "".join(lines)

    def computed_headers_size(self) -> int:
        return len(self.header_text().encode("utf-8"))

    def computed_body_size(self) -> int:
        return self.post_data.size if self.post_data is not None else -1

    def refresh_derived(self) -> None:
        """Recompute cookies, query string and sizes from current state."""
        self.cookies = self.computed_cookies()
        self.query_string = self.computed_query_string()
        self.headers_size = self.computed_headers_size()
        self.body_size = self.computed_body_size()

    def __str__(self) -> str:
        return f"{self.method} {self.url}"
