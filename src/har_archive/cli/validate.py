"""Validate command for har-archive CLI - audits HAR files for leftover credentials."""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

if TYPE_CHECKING:
    from har_archive.validation import Finding

HAR_GLOBS = ("*.har", "*.har.gz")


def find_har_files(directory: Path, recursive: bool = False) -> list[Path]:
    """List .har and .har.gz files in a directory, sorted by path."""
    scan = directory.rglob if recursive else directory.glob
    return sorted(path for pattern in HAR_GLOBS for path in scan(pattern))


def _report(file_path: Path, findings: list[Finding]) -> Counter[str]:
    """Print one file's findings and count them by severity."""
    counts: Counter[str] = Counter(finding.severity for finding in findings)
    if not findings:
        typer.echo(f"[OK] {file_path}: Clean")
        return counts

    typer.echo(f"\n{file_path}:")
    for finding in findings:
        label = "[ERROR]" if finding.severity == "error" else "[WARN]"
        typer.echo(f"  {label} [{finding.location}]")
        typer.echo(f"     {finding.field}: {finding.value}")
        typer.echo(f"     Reason: {finding.reason}")
    return counts


def validate(
    har_file: Annotated[
        Path | None,
        typer.Argument(help="HAR file to audit"),
    ] = None,
    directory: Annotated[
        Path | None,
        typer.Option("--dir", "-d", help="Directory of HAR files to audit"),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", "-s", help="Fail on cookie warnings too"),
    ] = False,
    recursive: Annotated[
        bool,
        typer.Option("--recursive", "-r", help="Include subdirectories of --dir"),
    ] = False,
    patterns: Annotated[
        Path | None,
        typer.Option("--patterns", "-p", help="Custom patterns JSON file"),
    ] = None,
) -> None:
    """Check HAR files for credentials that were not scrubbed.

    Each file is decoded first; a malformed document counts as an error.
    Sensitive headers with live values are errors, cookies with live values
    are warnings.

    Example:
        har-archive validate session.har
        har-archive validate --dir ./fixtures --recursive
        har-archive validate session.har --strict
    """
    from har_archive.patterns import PatternLoadError
    from har_archive.validation import validate_har_file

    if directory:
        if not directory.exists():
            typer.echo(f"Error: Directory not found: {directory}", err=True)
            raise typer.Exit(1)
        har_files = find_har_files(directory, recursive)
    elif har_file:
        if not har_file.exists():
            typer.echo(f"Error: File not found: {har_file}", err=True)
            raise typer.Exit(1)
        har_files = [har_file]
    else:
        typer.echo("Error: Provide either a HAR file or --dir option", err=True)
        raise typer.Exit(1)

    if not har_files:
        typer.echo("No HAR files found")
        raise typer.Exit(0)

    custom_patterns = str(patterns) if patterns else None
    totals: Counter[str] = Counter()

    for file_path in har_files:
        try:
            findings = validate_har_file(file_path, custom_patterns=custom_patterns)
        except PatternLoadError as e:
            typer.echo(f"Error: Failed to load patterns: {e}", err=True)
            raise typer.Exit(1) from None
        except OSError as e:
            typer.echo(f"Error: Cannot read {file_path}: {e}", err=True)
            raise typer.Exit(1) from None
        totals.update(_report(file_path, findings))

    errors, warnings = totals["error"], totals["warning"]
    typer.echo(f"\nSummary: {errors} errors, {warnings} warnings")

    if errors or (strict and warnings):
        raise typer.Exit(1)
