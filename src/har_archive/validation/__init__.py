"""HAR auditing for leaked credentials.

Useful for CI/pre-commit hooks before sharing captures.

Exports:
    - audit_har: Audit a decoded document
    - validate_har_file: Decode and audit a file
    - Finding: Dataclass for audit findings
"""

from __future__ import annotations

from har_archive.validation.secrets import (
    Finding,
    audit_har,
    check_cookies,
    check_headers,
    is_cookie_attributes_only,
    is_redacted,
    truncate,
    validate_har_file,
)

__all__ = [
    "Finding",
    "audit_har",
    "check_cookies",
    "check_headers",
    "is_cookie_attributes_only",
    "is_redacted",
    "truncate",
    "validate_har_file",
]
