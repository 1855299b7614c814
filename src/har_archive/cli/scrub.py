"""Scrub command for har-archive CLI."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Annotated

import typer

from har_archive.patterns import PatternLoadError


def default_output_path(input_file: Path, compress: bool) -> Path:
    """Derive ``<name>.scrubbed.har[.gz]`` next to the input file."""
    name = input_file.name
    for suffix in (".har.gz", ".har", ".json"):
        if name.endswith(suffix):
            name = name[: -len(suffix)]
            break
    return input_file.with_name(f"{name}.scrubbed.har{'.gz' if compress else ''}")


def _max_size_bytes(max_size_mb: int | None) -> int | None:
    """Convert the --max-size option to bytes; 0 or None lifts the limit."""
    if max_size_mb is not None and max_size_mb < 0:
        typer.echo(f"Error: --max-size cannot be negative: {max_size_mb}", err=True)
        raise typer.Exit(1)
    return max_size_mb * 1024 * 1024 if max_size_mb else None


def _compile(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        typer.echo(f"Error: Invalid pattern {pattern!r}: {e}", err=True)
        raise typer.Exit(1) from None


def scrub(
    input_file: Annotated[
        Path,
        typer.Argument(help="HAR file to scrub"),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output filename (default: input.scrubbed.har)"),
    ] = None,
    redact: Annotated[
        list[str] | None,
        typer.Option("--redact", help="Redact header by exact name (repeatable)"),
    ] = None,
    redact_pattern: Annotated[
        list[str] | None,
        typer.Option("--redact-pattern", help="Redact headers whose name matches regex (repeatable)"),
    ] = None,
    remove: Annotated[
        list[str] | None,
        typer.Option("--remove", help="Remove header by exact name (repeatable)"),
    ] = None,
    remove_pattern: Annotated[
        list[str] | None,
        typer.Option("--remove-pattern", help="Remove headers whose name matches regex (repeatable)"),
    ] = None,
    strip_timings: Annotated[
        bool,
        typer.Option("--strip-timings", help="Reset entry times and timings"),
    ] = False,
    placeholder: Annotated[
        str | None,
        typer.Option("--placeholder", help="Replacement for redacted values (default: from patterns)"),
    ] = None,
    patterns: Annotated[
        Path | None,
        typer.Option("--patterns", "-p", help="Custom patterns JSON file"),
    ] = None,
    compress: Annotated[
        bool,
        typer.Option("--compress", "-c", help="Write gzip-compressed .har.gz output"),
    ] = False,
    max_size: Annotated[
        int | None,
        typer.Option("--max-size", help="Max file size in MB (default: 100, 0=unlimited)"),
    ] = 100,
) -> None:
    """Remove credentials from a HAR file.

    Without any operation options, every header whose name looks sensitive
    (auth, cookie, key, password, secret, token) is redacted. Cookie values
    are redacted along with their Cookie and Set-Cookie headers.

    Args:
        input_file: HAR file to scrub
        output: Output filename (default: input.scrubbed.har)
        redact: Header names to redact
        redact_pattern: Header name regexes to redact
        remove: Header names to remove
        remove_pattern: Header name regexes to remove
        strip_timings: Reset entry times and timings
        placeholder: Replacement for redacted values
        patterns: Custom patterns JSON file to merge with defaults
        compress: Write gzip-compressed output
        max_size: Maximum file size in MB (default: 100, 0=unlimited)

    Example:
        har-archive scrub session.har
        har-archive scrub session.har --redact Authorization --remove X-Trace-Id
        har-archive scrub session.har --redact-pattern 'api-?key' --strip-timings
        har-archive scrub session.har --output clean.har.gz
    """
    from har_archive.codec import ParseError
    from har_archive.patterns import default_placeholder, sensitive_header_pattern
    from har_archive.sanitization import (
        RedactHeader,
        RedactHeaderMatching,
        RemoveHeader,
        RemoveHeaderMatching,
        ScrubOperation,
        StripTimings,
        scrub as scrub_document,
    )
    from har_archive.storage import HarSizeError, read_har, write_har

    if not input_file.exists():
        typer.echo(f"Error: File not found: {input_file}", err=True)
        raise typer.Exit(1)

    max_size_bytes = _max_size_bytes(max_size)
    custom_patterns = str(patterns) if patterns else None
    output_path = output or default_output_path(input_file, compress)

    try:
        mark = placeholder if placeholder is not None else default_placeholder(custom_patterns)

        operations: list[ScrubOperation] = []
        operations.extend(RedactHeader(name, mark) for name in redact or [])
        operations.extend(RedactHeaderMatching(_compile(p), mark) for p in redact_pattern or [])
        operations.extend(RemoveHeader(name) for name in remove or [])
        operations.extend(RemoveHeaderMatching(_compile(p)) for p in remove_pattern or [])
        if not operations:
            operations.append(RedactHeaderMatching(sensitive_header_pattern(custom_patterns), mark))
        if strip_timings:
            operations.append(StripTimings())

        typer.echo(f"Scrubbing {input_file}...")
        har = read_har(input_file, max_size=max_size_bytes)
        scrub_document(har, operations)
        result_path = write_har(har, output_path, compress=compress or None)
        typer.echo(f"  Scrubbed {len(har.log.entries)} entries: {result_path}")
    except HarSizeError as e:
        megabyte = 1024 * 1024
        typer.echo(
            f"Error: File too large ({e.size / megabyte:.1f} MB, limit {e.max_size / megabyte:.1f} MB)",
            err=True,
        )
        typer.echo("  Raise the limit with --max-size, or pass --max-size 0 to remove it", err=True)
        raise typer.Exit(1) from None
    except ParseError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
    except PatternLoadError as e:
        typer.echo(f"Error: Failed to load patterns: {e}", err=True)
        raise typer.Exit(1) from None
    except PermissionError as e:
        typer.echo(f"Error: Permission denied: {e.filename}", err=True)
        raise typer.Exit(1) from None
    except OSError as e:
        typer.echo(f"Error: I/O error: {e}", err=True)
        raise typer.Exit(1) from None

    typer.echo()
    typer.echo("WARNING: Scrubbing only touches headers, cookies and timings.")
    typer.echo("Request bodies, URLs and response content are left as recorded.")
    typer.echo()
