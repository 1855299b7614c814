"""Main CLI entry point for har-archive.

Provides commands for:
- scrub: Remove credentials from HAR files
- validate: Check HAR files for credentials that survived scrubbing
- show: List the requests in a HAR file
- record: Record a live request to a HAR file
"""

from __future__ import annotations

try:
    import typer
except ImportError as e:
    raise ImportError("CLI dependencies not installed. Install with: pip install har-archive[cli]") from e

from har_archive.cli.record import record
from har_archive.cli.scrub import scrub
from har_archive.cli.show import show
from har_archive.cli.validate import validate

app = typer.Typer(
    name="har-archive",
    help="Inspect, scrub and record HAR files.",
    no_args_is_help=True,
)

app.command()(scrub)
app.command()(validate)
app.command()(show)
app.command(help="Record a live request to a HAR file")(record)


def version_callback(value: bool) -> None:
    """Print version and exit.

    Args:
        value: True if --version flag was provided
    """
    if value:
        from har_archive import __version__

        typer.echo(f"har-archive {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    r"""Inspect, scrub and record HAR files.

    \b
    Examples:
        har-archive show session.har
        har-archive scrub session.har --strip-timings
        har-archive validate session.har
        har-archive record https://example.com
    """


if __name__ == "__main__":
    app()
