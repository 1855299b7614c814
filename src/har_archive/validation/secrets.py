"""Audit HAR documents for credentials that survived scrubbing.

Flags:
- Headers with sensitive-looking names whose values are not redacted
- Parsed cookies whose values are not redacted
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from har_archive.codec import ParseError
from har_archive.model import Cookie, Har, Header
from har_archive.patterns import load_scrub_patterns, sensitive_header_pattern

# Flag-only cookie text such as "Secure; HttpOnly" carries no session data
_FLAGS_ONLY_RE = re.compile(r"^(?:(?:secure|httponly)\s*(?:;\s*|$))*$", re.IGNORECASE)


@dataclass
class Finding:
    """A header or cookie that still carries a live value.

    Attributes:
        severity: "error" for headers and undecodable files, "warning" for cookies
        location: Entry index, URL and message side
        field: Header or cookie name
        value: The live value, shortened for display
        reason: Why the value was flagged
    """

    severity: str
    location: str
    field: str
    value: str
    reason: str


def truncate(value: str, max_len: int = 40) -> str:
    """Shorten a value to max_len characters, marking the cut with "...".

    Example:
        >>> truncate("a" * 50, 10)
        'aaaaaaa...'
    """
    return value if len(value) <= max_len else f"{value[: max_len - 3]}..."


def is_redacted(value: str, custom_patterns: str | None = None) -> bool:
    """Check if a value is one of the configured redaction markers or the placeholder."""
    patterns = load_scrub_patterns(custom_patterns)
    markers = list(patterns.get("redacted_values", []))
    markers.append(patterns.get("headers", {}).get("placeholder", ""))
    return value.strip() in {marker for marker in markers if marker}


def is_cookie_attributes_only(value: str) -> bool:
    """Check if a cookie header holds only attributes (no session data)."""
    return _FLAGS_ONLY_RE.match(value.strip()) is not None


def check_headers(
    headers: list[Header],
    location: str,
    findings: list[Finding],
    custom_patterns: str | None = None,
) -> None:
    """Append a finding for each sensitive header with a live value."""
    pattern = sensitive_header_pattern(custom_patterns)

    for header in headers:
        if not header.value or is_redacted(header.value, custom_patterns):
            continue
        if "cookie" in header.name.lower() and is_cookie_attributes_only(header.value):
            continue

        match = pattern.search(header.name)
        if match:
            findings.append(
                Finding(
                    severity="error",
                    location=location,
                    field=header.name,
                    value=truncate(header.value),
                    reason=f"Sensitive header '{match.group(0)}' with non-redacted value",
                )
            )


def check_cookies(
    cookies: list[Cookie],
    location: str,
    findings: list[Finding],
    custom_patterns: str | None = None,
) -> None:
    """Append a warning for each parsed cookie with a live value."""
    for cookie in cookies:
        if not cookie.value or is_redacted(cookie.value, custom_patterns):
            continue
        findings.append(
            Finding(
                severity="warning",
                location=location,
                field=cookie.name,
                value=truncate(cookie.value),
                reason="Cookie with non-redacted value",
            )
        )


def audit_har(har: Har, custom_patterns: str | None = None) -> list[Finding]:
    """Audit a decoded HAR document.

    Args:
        har: Document to audit
        custom_patterns: Optional path to custom patterns JSON file

    Returns:
        List of findings (empty if clean)
    """
    findings: list[Finding] = []

    for i, entry in enumerate(har.log.entries):
        location = f"Entry {i}: {truncate(entry.request.url, 60)}"
        request, response = entry.request, entry.response

        check_headers(request.headers, f"{location} (request)", findings, custom_patterns)
        check_headers(response.headers, f"{location} (response)", findings, custom_patterns)
        check_cookies(request.cookies or [], f"{location} (request cookies)", findings, custom_patterns)
        check_cookies(response.cookies or [], f"{location} (response cookies)", findings, custom_patterns)

    return findings


def validate_har_file(
    har_path: Path | str,
    custom_patterns: str | None = None,
) -> list[Finding]:
    """Decode and audit a HAR file.

    A file that cannot be decoded produces a single error finding.

    Args:
        har_path: Path to HAR file (.har or .har.gz)
        custom_patterns: Optional path to custom patterns JSON file

    Returns:
        List of findings (empty if clean)

    Raises:
        OSError: If the file cannot be read
    """
    from har_archive.storage import read_har

    try:
        har = read_har(har_path, max_size=None)
    except ParseError as e:
        return [
            Finding(
                severity="error",
                location=e.path or "root",
                field="document",
                value=truncate(str(Path(har_path).name)),
                reason=str(e),
            )
        ]

    return audit_har(har, custom_patterns)
