"""CLI for har-archive.

Typer-based commands for scrubbing, auditing, inspecting and recording
HAR files.

Requires the 'cli' optional dependency: pip install har-archive[cli]
"""

from __future__ import annotations
