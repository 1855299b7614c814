"""Date handling for HAR documents and Set-Cookie headers.

HAR timestamps are ISO 8601 strings. On output they are normalized to a
single canonical form with two fractional-second digits and a numeric UTC
offset, e.g. ``2021-06-09T10:18:14.12+00:00``.

Cookie ``Expires`` attributes use the HTTP date formats browsers still send:

- ``Wed, 09 Jun 2021 10:18:14 GMT``
- ``Wed, 09-Jun-21 10:18:14 GMT``
- ``Wed, 09-Jun-2021 10:18:14 GMT``
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

_ISO_RE = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"[T ](?P<hour>\d{2}):(?P<minute>\d{2})"
    r"(?::(?P<second>\d{2})(?:[.,](?P<fraction>\d+))?)?"
    r"\s*(?P<offset>Z|z|[+-]\d{2}(?::?\d{2})?)?$"
)

_MONTHS = {
    name: index
    for index, name in enumerate(
        ("jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec"), start=1
    )
}

# fmt: off
_EXPIRES_PATTERNS = [
    # EEE, dd MMM yyyy HH:mm:ss GMT
    re.compile(r"^[A-Za-z]{3}, (\d{2}) ([A-Za-z]{3}) (\d{4}) (\d{2}):(\d{2}):(\d{2}) GMT$"),
    # EEE, dd-MMM-yy HH:mm:ss GMT
    re.compile(r"^[A-Za-z]{3}, (\d{2})-([A-Za-z]{3})-(\d{2}) (\d{2}):(\d{2}):(\d{2}) GMT$"),
    # EEE, dd-MMM-yyyy HH:mm:ss GMT
    re.compile(r"^[A-Za-z]{3}, (\d{2})-([A-Za-z]{3})-(\d{4}) (\d{2}):(\d{2}):(\d{2}) GMT$"),
]
# fmt: on


def _parse_offset(text: str | None) -> timezone:
    if text is None or text in ("Z", "z"):
        return timezone.utc
    sign = -1 if text[0] == "-" else 1
    digits = text[1:].replace(":", "")
    hours = int(digits[:2])
    minutes = int(digits[2:4]) if len(digits) > 2 else 0
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def parse_har_datetime(text: str) -> datetime:
    """Parse an ISO 8601 timestamp as found in HAR files.

    Accepts optional seconds, any number of fractional digits, and a ``Z``,
    ``+HH:MM``, ``+HHMM`` or missing offset (treated as UTC).

    Args:
        text: Timestamp string

    Returns:
        Timezone-aware datetime

    Raises:
        ValueError: If the string is not a recognized timestamp
    """
    match = _ISO_RE.match(text.strip())
    if not match:
        raise ValueError(f"Unrecognized date format: {text!r}")

    fraction = match.group("fraction") or "0"
    microsecond = int(fraction[:6].ljust(6, "0"))

    return datetime(
        int(match.group("year")),
        int(match.group("month")),
        int(match.group("day")),
        int(match.group("hour")),
        int(match.group("minute")),
        int(match.group("second") or 0),
        microsecond,
        tzinfo=_parse_offset(match.group("offset")),
    )


def format_har_datetime(value: datetime) -> str:
    """Format a datetime in the canonical HAR form.

    Naive datetimes are treated as UTC. Fractional seconds are truncated to
    hundredths.

    Example:
        >>> from datetime import datetime, timezone
        >>> format_har_datetime(datetime(2021, 6, 9, 10, 18, 14, 123456, tzinfo=timezone.utc))
        '2021-06-09T10:18:14.12+00:00'
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)

    offset = value.utcoffset() or timedelta(0)
    total_minutes = int(offset.total_seconds()) // 60
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)

    centiseconds = value.microsecond // 10000
    # strftime does not zero-pad years before 1000 on every platform
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}.{centiseconds:02d}"
        f"{sign}{hours:02d}:{minutes:02d}"
    )


def truncate_to_centiseconds(value: datetime) -> datetime:
    """Drop precision that the canonical format cannot represent."""
    return value.replace(microsecond=value.microsecond // 10000 * 10000)


def parse_cookie_expires(text: str) -> datetime | None:
    """Parse a Set-Cookie ``Expires`` attribute.

    Args:
        text: Attribute value

    Returns:
        UTC datetime, or None if the value matches none of the known formats
    """
    text = text.strip()
    for pattern in _EXPIRES_PATTERNS:
        match = pattern.match(text)
        if not match:
            continue

        day, month_name, year_text, hour, minute, second = match.groups()
        month = _MONTHS.get(month_name.lower())
        if month is None:
            return None

        year = int(year_text)
        if len(year_text) == 2:
            year += 1900 if year >= 70 else 2000

        try:
            return datetime(year, month, int(day), int(hour), int(minute), int(second), tzinfo=timezone.utc)
        except ValueError:
            return None

    return None


def parse_any_datetime(text: str) -> datetime:
    """Parse a HAR timestamp, falling back to the cookie Expires formats.

    Raises:
        ValueError: If no accepted format matches
    """
    try:
        return parse_har_datetime(text)
    except ValueError:
        expires = parse_cookie_expires(text)
        if expires is None:
            raise
        return expires
