"""Tests for the content text/binary codec and post data."""

from __future__ import annotations

import pytest

from har_archive.model import BASE64, Content, Param, PostData, parse_form_urlencoded

# ┌──────────────────────────────┬──────────────────────┐
# │ body                         │ description          │
# ├──────────────────────────────┼──────────────────────┤
# │ Raw HTTP body bytes          │ test case name       │
# └──────────────────────────────┴──────────────────────┘
#
# fmt: off
BODY_CASES = [
    (b"",                           "empty"),
    (b"hello world",                "ascii"),
    ("héllo ☃".encode(),            "utf8_multibyte"),
    (b"\xff\xfe\x00\x01",           "invalid_utf8"),
    (b"abc\x80",                    "truncated_sequence"),
    (bytes(range(256)),             "all_bytes"),
]
# fmt: on


class TestContentBytes:
    """Tests for Content.from_bytes / to_bytes."""

    @pytest.mark.parametrize(("body", "desc"), BODY_CASES, ids=[c[1] for c in BODY_CASES])
    def test_bytes_preserved(self, body: bytes, desc: str) -> None:
        """Bodies come back byte-exact whatever they contain."""
        content = Content.from_bytes(body, "application/octet-stream")
        assert content.to_bytes() == body, desc
        assert content.size == len(body)

    def test_utf8_stored_as_text(self) -> None:
        content = Content.from_bytes(b"<p>hi</p>", "text/html")
        assert content.text == "<p>hi</p>"
        assert content.encoding is None
        assert content.mime_type == "text/html"

    def test_binary_stored_as_base64(self) -> None:
        content = Content.from_bytes(b"\x00\x01\xff")
        assert content.encoding == BASE64
        assert content.text == "AAH/"
        assert content.mime_type == "application/octet-stream"


class TestContentText:
    """Tests for decoding stored text."""

    def test_from_text_base64_size(self) -> None:
        content = Content.from_text("aGVsbG8=", "text/plain", encoding="base64")
        assert content.size == 5
        assert content.data == b"hello"

    def test_invalid_base64_is_empty(self) -> None:
        """Bad base64 never raises."""
        content = Content(text="not base64!!", encoding="base64")
        assert content.data == b""

    def test_missing_text_is_empty(self) -> None:
        assert Content().data == b""

    def test_str_replaces_invalid_utf8(self) -> None:
        content = Content.from_bytes(b"ok\xff")
        assert str(content) == "ok�"


class TestPostData:
    """Tests for request bodies."""

    def test_form_params_derived(self) -> None:
        post_data = PostData.from_text("user=alice&msg=hello+world%21", "application/x-www-form-urlencoded")
        assert post_data.params == [Param("user", "alice"), Param("msg", "hello world!")]
        assert post_data.text == "user=alice&msg=hello+world%21"

    def test_non_form_has_no_params(self) -> None:
        post_data = PostData.from_text('{"a": 1}', "application/json")
        assert post_data.params == []

    def test_from_bytes_non_utf8(self) -> None:
        assert PostData.from_bytes(b"\xff\xfe", "application/octet-stream") is None

    def test_size_counts_bytes(self) -> None:
        assert PostData.from_text("☃").size == 3

    def test_parse_form_skips_empty_pairs(self) -> None:
        assert parse_form_urlencoded("a=1&&b") == [Param("a", "1"), Param("b", "")]


class TestParamStr:
    """Tests for Param string forms."""

    # fmt: off
    CASES = [
        (Param("a", "1"),                                           "a=1",                      "value"),
        (Param("a"),                                                "a",                        "name_only"),
        (Param("f", file_name="x.png"),                             "f=@x.png",                 "file"),
        (Param("f", file_name="x.png", content_type="image/png"),   "f=@x.png;type=image/png",  "file_type"),
    ]
    # fmt: on

    @pytest.mark.parametrize(("param", "expected", "desc"), CASES, ids=[c[2] for c in CASES])
    def test_str(self, param: Param, expected: str, desc: str) -> None:
        assert str(param) == expected, desc
