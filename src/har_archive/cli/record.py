"""Record command for har-archive CLI - records a live request to a HAR file."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated
from urllib.parse import urlparse

import typer


def parse_header_option(text: str) -> tuple[str, str]:
    """Split a curl-style ``"Name: value"`` option.

    Raises:
        typer.BadParameter: If the text has no colon or an empty name
    """
    name, sep, value = text.partition(":")
    if not sep or not name.strip():
        raise typer.BadParameter(f"Expected 'Name: value', got {text!r}")
    return name.strip(), value.strip()


def default_record_path(url: str) -> Path:
    """Name the recording after the target host."""
    host = urlparse(url).hostname or "capture"
    return Path(f"{host}.har")


def record(
    url: Annotated[
        str,
        typer.Argument(help="URL to request"),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output HAR filename (default: <host>.har)"),
    ] = None,
    method: Annotated[
        str,
        typer.Option("--request", "-X", help="HTTP method"),
    ] = "GET",
    header: Annotated[
        list[str] | None,
        typer.Option("--header", "-H", help="Request header 'Name: value' (repeatable)"),
    ] = None,
    data: Annotated[
        str | None,
        typer.Option("--data", "-d", help="Request body"),
    ] = None,
    timeout: Annotated[
        float,
        typer.Option("--timeout", help="Socket timeout in seconds"),
    ] = 30,
    insecure: Annotated[
        bool,
        typer.Option("--insecure", "-k", help="Allow self-signed TLS certificates"),
    ] = False,
    no_scrub: Annotated[
        bool,
        typer.Option("--no-scrub", help="Keep credentials in the recording"),
    ] = False,
) -> None:
    """Perform a request and save it as a single-entry HAR file.

    Sensitive headers and cookies are redacted before writing unless
    --no-scrub is given.

    Example:
        har-archive record https://example.com
        har-archive record https://api.example.com/items -X POST -H 'Content-Type: application/json' -d '{}'
        har-archive record https://192.168.1.1 --insecure -o router.har
    """
    import urllib.error

    from har_archive.sanitization import default_operations, scrub
    from har_archive.storage import write_har
    from har_archive.transport import RawRequest, record_har

    if "://" not in url:
        typer.echo(f"Error: URL must include a scheme: {url}", err=True)
        raise typer.Exit(1)

    headers = [parse_header_option(h) for h in header or []]
    body = data.encode("utf-8") if data is not None else None
    request = RawRequest(method=method.upper(), url=url, headers=headers, body=body)
    output_path = output or default_record_path(url)

    typer.echo(f"Recording {request.method} {url}...")
    try:
        har = record_har(request, timeout=timeout, verify_ssl=not insecure)
    except urllib.error.URLError as e:
        typer.echo(f"Error: Cannot connect to {url}: {e.reason}", err=True)
        raise typer.Exit(1) from None
    except (OSError, ValueError) as e:
        typer.echo(f"Error: Request failed: {e}", err=True)
        raise typer.Exit(1) from None

    if not no_scrub:
        scrub(har, default_operations())

    entry = har.log.first_entry
    write_har(har, output_path)
    typer.echo(f"  {entry.response.status} {entry.response.status_text} in {entry.time:g}ms")
    typer.echo(f"  Saved: {output_path}")
    if no_scrub:
        typer.echo(f"  Scrub before sharing: har-archive scrub {output_path}")
