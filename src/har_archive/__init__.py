"""HTTP Archive (HAR 1.2) document library.

This library provides tools for:
- Decoding and encoding HAR documents to and from typed records
- Parsing headers, cookies, query strings and form bodies
- Scrubbing credentials from recorded traffic
- Recording live requests and replaying stored entries

The library has ZERO dependencies (only stdlib).
Optional features require: typer (cli).

Example usage:
    from har_archive import decode, encode, scrub, default_operations

    har = decode(open("session.har", "rb").read())
    scrub(har, default_operations())
    data = encode(har)
"""

from __future__ import annotations

__version__ = "0.1.0"

# Re-export public API for convenience
from har_archive.codec import ParseError, decode, encode
from har_archive.model import Cookie, Entry, Har, Header, Log, Request, Response
from har_archive.sanitization import (
    RedactHeader,
    RedactHeaderMatching,
    RemoveHeader,
    RemoveHeaderMatching,
    StripTimings,
    default_operations,
    scrub,
    scrubbed,
)
from har_archive.storage import read_har, write_har

__all__ = [
    "__version__",
    "Cookie",
    "Entry",
    "Har",
    "Header",
    "Log",
    "ParseError",
    "RedactHeader",
    "RedactHeaderMatching",
    "RemoveHeader",
    "RemoveHeaderMatching",
    "Request",
    "Response",
    "StripTimings",
    "decode",
    "default_operations",
    "encode",
    "read_har",
    "scrub",
    "scrubbed",
    "write_har",
]
