"""Scrubbing of sensitive data from HAR documents.

This module has ZERO external dependencies (stdlib only).

Exports:
    - scrub: Apply operations in place to a document or any part of it
    - scrubbed: Apply operations to a deep copy
    - default_operations: Redact headers whose names look sensitive
    - RedactHeader, RedactHeaderMatching, RemoveHeader, RemoveHeaderMatching, StripTimings
"""

from __future__ import annotations

from har_archive.sanitization.scrub import (
    DEFAULT_PLACEHOLDER,
    SENSITIVE_HEADERS,
    RedactHeader,
    RedactHeaderMatching,
    RemoveHeader,
    RemoveHeaderMatching,
    ScrubOperation,
    StripTimings,
    default_operations,
    scrub,
    scrub_entry,
    scrub_headers,
    scrub_log,
    scrub_page,
    scrub_request,
    scrub_response,
    scrubbed,
)

__all__ = [
    # Operations
    "ScrubOperation",
    "RedactHeader",
    "RedactHeaderMatching",
    "RemoveHeader",
    "RemoveHeaderMatching",
    "StripTimings",
    "default_operations",
    # Scrubbing
    "scrub",
    "scrubbed",
    "scrub_log",
    "scrub_page",
    "scrub_entry",
    "scrub_request",
    "scrub_response",
    "scrub_headers",
    # Defaults
    "SENSITIVE_HEADERS",
    "DEFAULT_PLACEHOLDER",
]
