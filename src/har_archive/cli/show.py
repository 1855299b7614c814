"""Show command for har-archive CLI - summarizes the entries of a HAR file."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


def show(
    har_file: Annotated[
        Path,
        typer.Argument(help="HAR file to show"),
    ],
    entry: Annotated[
        int | None,
        typer.Option("--entry", "-e", help="Only show the entry at this index"),
    ] = None,
    curl: Annotated[
        bool,
        typer.Option("--curl", help="Print each request as a curl command"),
    ] = False,
    timings: Annotated[
        bool,
        typer.Option("--timings", "-t", help="Print the timing breakdown of each entry"),
    ] = False,
) -> None:
    """List the requests recorded in a HAR file.

    Example:
        har-archive show session.har
        har-archive show session.har --entry 0 --curl
        har-archive show session.har --timings
    """
    from har_archive.codec import ParseError
    from har_archive.storage import read_har
    from har_archive.transport import curl_command

    if not har_file.exists():
        typer.echo(f"Error: File not found: {har_file}", err=True)
        raise typer.Exit(1)

    try:
        har = read_har(har_file, max_size=None)
    except ParseError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
    except OSError as e:
        typer.echo(f"Error: I/O error: {e}", err=True)
        raise typer.Exit(1) from None

    entries = list(enumerate(har.log.entries))
    if entry is not None:
        if not 0 <= entry < len(entries):
            typer.echo(f"Error: Entry {entry} out of range (file has {len(entries)} entries)", err=True)
            raise typer.Exit(1)
        entries = [entries[entry]]

    typer.echo(f"{har_file}: {len(har.log.entries)} entries, created by {har.log.creator}")

    for index, item in entries:
        request, response = item.request, item.response
        typer.echo(
            f"  [{index}] {request.method} {request.url} -> "
            f"{response.status} {response.status_text} ({item.time:g}ms)"
        )
        if timings:
            for line in item.timings.describe().splitlines():
                typer.echo(f"      {line}")
        if curl:
            typer.echo()
            typer.echo(curl_command(request))
            typer.echo()
