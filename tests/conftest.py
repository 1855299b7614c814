"""Pytest configuration and fixtures for har-archive tests."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from har_archive.patterns import clear_pattern_cache

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _fresh_pattern_cache() -> Iterator[None]:
    """Keep custom pattern files from leaking between tests."""
    clear_pattern_cache()
    yield
    clear_pattern_cache()


@pytest.fixture
def example_har_path() -> Path:
    """Path to the bundled example capture."""
    return FIXTURES_DIR / "example.har"


@pytest.fixture
def sample_har_entry():
    """Create a sample HAR entry as parsed JSON."""

    def _create_entry(
        method: str = "GET",
        url: str = "http://example.com/",
        status: int = 200,
        text: str = "",
        mime_type: str = "text/html",
        request_headers: list[dict[str, str]] | None = None,
        response_headers: list[dict[str, str]] | None = None,
    ) -> dict[str, Any]:
        return {
            "startedDateTime": "2021-06-09T10:18:14.12+00:00",
            "time": 85,
            "request": {
                "method": method,
                "url": url,
                "httpVersion": "HTTP/1.1",
                "cookies": [],
                "headers": request_headers or [],
                "queryString": [],
                "headersSize": -1,
                "bodySize": -1,
            },
            "response": {
                "status": status,
                "statusText": "OK",
                "httpVersion": "HTTP/1.1",
                "cookies": [],
                "headers": response_headers or [],
                "content": {"size": len(text.encode("utf-8")), "mimeType": mime_type, "text": text},
                "redirectURL": "",
                "headersSize": -1,
                "bodySize": -1,
            },
            "cache": {},
            "timings": {"blocked": 0, "dns": -1, "connect": 15, "send": 20, "wait": 38, "receive": 12, "ssl": -1},
        }

    return _create_entry


@pytest.fixture
def sample_har(sample_har_entry):
    """Create a HAR document as parsed JSON."""

    def _create_har(entries: list[dict[str, Any]] | None = None) -> dict[str, Any]:
        return {
            "log": {
                "version": "1.2",
                "creator": {"name": "test", "version": "1.0"},
                "entries": entries if entries is not None else [sample_har_entry()],
            }
        }

    return _create_har


@pytest.fixture
def temp_har_file(tmp_path: Path, sample_har):
    """Write a HAR document to a temporary file."""

    def _create_file(entries: list[dict[str, Any]] | None = None, name: str = "capture.har") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(sample_har(entries)), encoding="utf-8")
        return path

    return _create_file
