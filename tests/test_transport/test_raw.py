"""Tests for conversion between raw transactions and HAR entries."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from har_archive.model import Header, Timing
from har_archive.transport import (
    RawRequest,
    RawResponse,
    entry_from_raw,
    entry_to_raw,
    request_from_raw,
    response_from_raw,
    status_text_for,
)

# fmt: off
STATUS_TEXT_CASES = [
    (200,   "OK",                       "ok"),
    (201,   "Created",                  "created"),
    (404,   "Not Found",                "not_found"),
    (500,   "Internal Server Error",    "server_error"),
    (599,   "",                         "unknown"),
]
# fmt: on


class TestRequestFromRaw:
    """Tests for ingesting requests."""

    def test_get(self) -> None:
        request = request_from_raw(
            RawRequest(url="http://example.com/?a=1", headers=[("Accept", "*/*"), ("Cookie", "s=1")])
        )
        assert request.method == "GET"
        assert request.headers == [Header("Accept", "*/*"), Header("Cookie", "s=1")]
        assert [(c.name, c.value) for c in request.cookies or []] == [("s", "1")]
        assert [(q.name, q.value) for q in request.query_string or []] == [("a", "1")]
        assert request.body_size == 0
        assert request.post_data is None
        assert (request.headers_size or 0) > 0

    def test_form_body(self) -> None:
        raw = RawRequest(
            method="POST",
            url="http://example.com/login",
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            body=b"user=alice&pw=x",
        )
        request = request_from_raw(raw)
        assert request.body_size == 15
        assert request.post_data is not None
        assert request.post_data.mime_type == "application/x-www-form-urlencoded"
        assert [p.name for p in request.post_data.params] == ["user", "pw"]

    def test_binary_body(self) -> None:
        """Non-UTF-8 bodies are counted but not stored."""
        request = request_from_raw(RawRequest(method="PUT", body=b"\xff\x00"))
        assert request.body_size == 2
        assert request.post_data is None

    def test_canonical_order(self) -> None:
        headers = [("Content-Type", "text/plain"), ("Accept", "*/*"), ("Date", "today")]
        assert [h.name for h in request_from_raw(RawRequest(headers=headers)).headers] == [
            "Content-Type",
            "Accept",
            "Date",
        ]
        canonical = request_from_raw(RawRequest(headers=headers), canonical=True)
        assert [h.name for h in canonical.headers] == ["Date", "Accept", "Content-Type"]


class TestResponseFromRaw:
    """Tests for ingesting responses."""

    @pytest.mark.parametrize(
        ("status", "expected", "desc"),
        STATUS_TEXT_CASES,
        ids=[c[2] for c in STATUS_TEXT_CASES],
    )
    def test_status_text(self, status: int, expected: str, desc: str) -> None:
        assert status_text_for(status) == expected, desc
        assert response_from_raw(RawResponse(status=status)).status_text == expected

    def test_given_status_text_kept(self) -> None:
        assert response_from_raw(RawResponse(status=200, status_text="Fine")).status_text == "Fine"

    def test_content_and_cookies(self) -> None:
        raw = RawResponse(
            headers=[
                ("Content-Type", "text/plain"),
                ("Set-Cookie", "a=1; Expires=Wed, 09 Jun 2021 10:18:14 GMT, b=2; HttpOnly"),
            ],
            body=b"hello",
        )
        response = response_from_raw(raw)
        assert response.content.text == "hello"
        assert response.content.mime_type == "text/plain"
        assert response.body_size == 5
        assert [h.name for h in response.headers] == ["Content-Type", "Set-Cookie", "Set-Cookie"]
        assert [c.name for c in response.cookies or []] == ["a", "b"]

    def test_redirect(self) -> None:
        response = response_from_raw(RawResponse(status=302, headers=[("Location", "/next")]))
        assert response.redirect_url == "/next"
        assert response.status_text == "Found"

    def test_no_body(self) -> None:
        response = response_from_raw(RawResponse(status=204))
        assert response.content.size == 0
        assert response.content.text is None


class TestEntry:
    """Tests for whole transactions."""

    def test_entry_from_raw(self) -> None:
        started = datetime(2021, 6, 9, 10, 18, 14, tzinfo=timezone.utc)
        timings = Timing(send=1, wait=10, receive=2)
        entry = entry_from_raw(RawRequest(url="http://example.com/"), RawResponse(body=b"ok"), started=started, timings=timings)
        assert entry.started_date_time == started
        assert entry.timings is timings
        assert entry.time == 13

    def test_entry_to_raw(self) -> None:
        entry = entry_from_raw(
            RawRequest(method="POST", url="http://example.com/", headers=[("Content-Type", "text/plain")], body=b"hi"),
            RawResponse(status=201, headers=[("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")], body=b"\xff\x01"),
        )
        exchange = entry_to_raw(entry)

        assert exchange.request.method == "POST"
        assert exchange.request.body == b"hi"
        assert exchange.request.headers == [("Content-Type", "text/plain")]
        assert exchange.response.status == 201
        assert exchange.response.status_text == "Created"
        assert exchange.response.headers == [("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")]
        assert exchange.body == b"\xff\x01"
        assert exchange.response.body == exchange.body

    def test_entry_to_raw_without_body(self) -> None:
        exchange = entry_to_raw(entry_from_raw(RawRequest(), RawResponse(status=204)))
        assert exchange.request.body is None
        assert exchange.body == b""
