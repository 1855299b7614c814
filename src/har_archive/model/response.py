"""Response record."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from har_archive.model.content import Content
from har_archive.model.cookies import Cookie, parse_set_cookie_headers
from har_archive.model.headers import SET_COOKIE, Header
from har_archive.model.headers import values as header_values
from har_archive.model.request import DEFAULT_HTTP_VERSION


@dataclass
class Response:
    """Detailed info about a response.

    Derived fields (cookies, header and body sizes) are computed once at
    construction when not given.

    Attributes:
        status: Response status code
        status_text: Response status description
        http_version: Response HTTP version
        cookies: Cookies parsed from Set-Cookie headers
        headers: Headers in captured order
        content: Details about the body
        redirect_url: Target of the Location header
        headers_size: Bytes up to and including the blank line, -1 if unknown
        body_size: Received body size, 0 for cached responses, -1 if unknown
        comment: Optional user or application comment
        extensions: Custom ``_``-prefixed members
    """

    status: int = 200
    status_text: str = "OK"
    http_version: str = DEFAULT_HTTP_VERSION
    cookies: list[Cookie] | None = None
    headers: list[Header] = field(default_factory=list)
    content: Content = field(default_factory=Content)
    redirect_url: str = ""
    headers_size: int | None = None
    body_size: int | None = None
    comment: str | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.cookies is None:
            self.cookies = self.computed_cookies()
        if self.headers_size is None:
            self.headers_size = self.computed_headers_size()
        if self.body_size is None:
            self.body_size = self.computed_body_size()

    def computed_cookies(self) -> list[Cookie]:
        """Cookies parsed from the current Set-Cookie headers."""
        return parse_set_cookie_headers(header_values(self.headers, SET_COOKIE))

    def header_text(self) -> str:
        """Status line and headers as received."""
        lines = [f"{self.http_version} {self.status} {self.status_text}\r\n"]
        lines.extend(f"{header.name}: {header.value}\r\n" for header in self.headers)
        lines.append("\r\n")
        return "".join(lines)

    def computed_headers_size(self) -> int:
        return len(self.header_text().encode("utf-8"))

    def computed_body_size(self) -> int:
        return self.content.size

    def refresh_derived(self) -> None:
        """Recompute cookies and sizes from current state."""
        self.cookies = self.computed_cookies()
        self.headers_size = self.computed_headers_size()
        self.body_size = self.computed_body_size()

    def __str__(self) -> str:
        return self.header_text() + str(self.content)
