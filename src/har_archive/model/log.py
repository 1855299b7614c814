"""Top-level HAR records: the log, its pages and entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from har_archive import __version__
from har_archive.dates import truncate_to_centiseconds
from har_archive.model.request import Request
from har_archive.model.response import Response
from har_archive.model.timing import PageTiming, Timing


def _now() -> datetime:
    return truncate_to_centiseconds(datetime.now(timezone.utc))


@dataclass
class Creator:
    """Name and version of the application that created the log."""

    name: str
    version: str
    comment: str | None = None

    @classmethod
    def default(cls) -> Creator:
        return cls(name="har-archive", version=__version__)

    def __str__(self) -> str:
        return f"{self.name}/{self.version}"


@dataclass
class Browser:
    """Name and version of the browser that produced the traffic."""

    name: str
    version: str
    comment: str | None = None

    def __str__(self) -> str:
        return f"{self.name}/{self.version}"


@dataclass
class Page:
    """An exported page; entries refer to it through ``pageref``.

    Attributes:
        started_date_time: Start of the page load
        id: Unique page identifier within the log
        title: Page title
        page_timings: Page load timings
        comment: Optional user or application comment
        extensions: Custom ``_``-prefixed members
    """

    started_date_time: datetime
    id: str
    title: str = ""
    page_timings: PageTiming = field(default_factory=PageTiming)
    comment: str | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        parts = []
        on_load = self.page_timings.on_load
        if on_load is not None:
            parts.append(f"{round(on_load)}ms")
        parts.append(f"{self.started_date_time:%m/%d/%Y, %I:%M:%S %p}")
        parts.append(self.title)
        return "  ".join(parts)


@dataclass
class CacheEntry:
    """State of a cache entry before or after the request.

    Attributes:
        last_access: Last time the entry was opened
        etag: ETag of the entry
        hit_count: Number of times the entry was opened
        expires: Expiration time, if known
        comment: Optional user or application comment
    """

    last_access: datetime
    etag: str
    hit_count: int
    expires: datetime | None = None
    comment: str | None = None


@dataclass
class Cache:
    """Info about a request coming from the browser cache."""

    before_request: CacheEntry | None = None
    after_request: CacheEntry | None = None
    comment: str | None = None


@dataclass
class Entry:
    """One logged request/response pair with its timing and cache metadata.

    ``time`` should equal ``timings.total``; :meth:`computed_time` gives the
    expected value.

    Attributes:
        request: Detailed info about the request
        response: Detailed info about the response
        started_date_time: Start of the request
        time: Total elapsed time in milliseconds
        cache: Cache usage
        timings: Round trip phases
        pageref: Reference to the parent page
        server_ip_address: IP address of the server
        connection: Unique ID of the TCP/IP connection
        comment: Optional user or application comment
        extensions: Custom ``_``-prefixed members
    """

    request: Request
    response: Response
    started_date_time: datetime = field(default_factory=_now)
    time: float = 0
    cache: Cache = field(default_factory=Cache)
    timings: Timing = field(default_factory=Timing)
    pageref: str | None = None
    server_ip_address: str | None = None
    connection: str | None = None
    comment: str | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    def computed_time(self) -> float:
        return self.timings.total


@dataclass
class Log:
    """Root of the exported data.

    Attributes:
        version: HAR format version
        creator: Application that created the log
        browser: Browser that produced the traffic
        pages: Exported pages, None when pages are not tracked
        entries: Exported requests
        comment: Optional user or application comment
        extensions: Custom ``_``-prefixed members
    """

    version: str = "1.2"
    creator: Creator = field(default_factory=Creator.default)
    browser: Browser | None = None
    pages: list[Page] | None = None
    entries: list[Entry] = field(default_factory=list)
    comment: str | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    @property
    def first_entry(self) -> Entry:
        """First entry of the log.

        Raises:
            IndexError: If the log has no entries
        """
        if not self.entries:
            raise IndexError("HAR log has no entries")
        return self.entries[0]


@dataclass
class Har:
    """A HAR document."""

    log: Log = field(default_factory=Log)

    @classmethod
    def from_entries(cls, entries: list[Entry]) -> Har:
        return cls(log=Log(entries=list(entries)))
