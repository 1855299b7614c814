"""Bridges between HAR entries and real HTTP traffic.

Exports:
    - RawRequest, RawResponse, RawExchange: Transport-level message shapes
    - request_from_raw, response_from_raw, entry_from_raw: Ingest captured traffic
    - entry_to_raw: Replay an entry
    - record_entry, record_har, load_or_record: Record live requests with urllib
    - curl_command: Render a request as a curl command line
"""

from __future__ import annotations

from har_archive.transport.curl import curl_command
from har_archive.transport.raw import (
    RawExchange,
    RawRequest,
    RawResponse,
    entry_from_raw,
    entry_to_raw,
    request_from_raw,
    response_from_raw,
    status_text_for,
)
from har_archive.transport.recorder import DEFAULT_TIMEOUT, load_or_record, record_entry, record_har

__all__ = [
    "DEFAULT_TIMEOUT",
    "RawExchange",
    "RawRequest",
    "RawResponse",
    "curl_command",
    "entry_from_raw",
    "entry_to_raw",
    "load_or_record",
    "record_entry",
    "record_har",
    "request_from_raw",
    "response_from_raw",
    "status_text_for",
]
