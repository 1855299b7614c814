"""Tests for header records and header-list helpers."""

from __future__ import annotations

import re

import pytest

from har_archive.model import (
    Header,
    HeaderGroup,
    canonical_order,
    header_group,
    headers_as_dict,
    headers_from_fields,
    remove_all,
    removing_all,
    split_set_cookie,
    value,
    values,
)

GOOGLE_SET_COOKIE = (
    "A=1; Expires=Wed, 09 Jun 2021 10:18:14 GMT; path=/; domain=.google.com; Secure, "
    "B=2; Expires=Wed, 09 Jun 2021 10:18:14 GMT; path=/; domain=.google.com; HttpOnly"
)

# =============================================================================
# Test Data Tables
# =============================================================================

# ┌─────────────────────┬──────────────────┬─────────────────────┐
# │ header_name         │ expected_group   │ description         │
# ├─────────────────────┼──────────────────┼─────────────────────┤
# │ Header name         │ HeaderGroup      │ test case name      │
# └─────────────────────┴──────────────────┴─────────────────────┘
#
# fmt: off
HEADER_GROUP_CASES = [
    ("Date",                HeaderGroup.GENERAL,    "date_general"),
    ("cache-control",       HeaderGroup.GENERAL,    "lowercase_general"),
    ("Accept",              HeaderGroup.REQUEST,    "accept_request"),
    ("User-Agent",          HeaderGroup.REQUEST,    "user_agent_request"),
    ("ETag",                HeaderGroup.RESPONSE,   "etag_response"),
    ("Location",            HeaderGroup.RESPONSE,   "location_response"),
    ("Content-Type",        HeaderGroup.ENTITY,     "content_type_entity"),
    ("X-Custom",            HeaderGroup.ENTITY,     "unknown_is_entity"),
]
# fmt: on

# ┌──────────────────────────────────────────┬───────────────────────────────────────┬──────────────────┐
# │ raw                                      │ expected                              │ description      │
# ├──────────────────────────────────────────┼───────────────────────────────────────┼──────────────────┤
# │ Folded Set-Cookie text                   │ Individual cookie strings             │ test case name   │
# └──────────────────────────────────────────┴───────────────────────────────────────┴──────────────────┘
#
# fmt: off
SPLIT_CASES = [
    ("a=1",                                     ["a=1"],                                "single"),
    ("a=1, b=2",                                ["a=1", "b=2"],                         "two_simple"),
    ("a=1,b=2",                                 ["a=1", "b=2"],                         "no_space"),
    ("a=1; Expires=Wed, 09 Jun 2021 10:18:14 GMT",
                                                ["a=1; Expires=Wed, 09 Jun 2021 10:18:14 GMT"],
                                                                                        "date_comma_kept"),
    ("a=x, y",                                  ["a=x, y"],                             "comma_without_equals"),
    ("a=1, b =2",                               ["a=1, b =2"],                          "space_before_equals"),
    ("",                                        [],                                     "empty"),
    ("   ",                                     [],                                     "whitespace_only"),
]
# fmt: on


# =============================================================================
# Test Classes
# =============================================================================


class TestHeader:
    """Tests for the Header record."""

    def test_equality_ignores_name_case(self) -> None:
        """Header names compare case-insensitively, values exactly."""
        assert Header("Content-Type", "text/html") == Header("content-type", "text/html")
        assert Header("Content-Type", "text/html") != Header("Content-Type", "TEXT/HTML")

    def test_hash_consistent_with_equality(self) -> None:
        """Equal headers hash equal."""
        assert len({Header("Accept", "*/*"), Header("ACCEPT", "*/*")}) == 1

    def test_str(self) -> None:
        """String form is the wire form."""
        assert str(Header("Accept", "*/*")) == "Accept: */*"

    def test_is_named_with_pattern(self) -> None:
        """Regex names match anywhere in the header name."""
        header = Header("X-Auth-Token", "abc")
        assert header.is_named(re.compile("token", re.IGNORECASE))
        assert not header.is_named(re.compile("^token"))

    @pytest.mark.parametrize(
        ("name", "expected", "desc"),
        HEADER_GROUP_CASES,
        ids=[c[2] for c in HEADER_GROUP_CASES],
    )
    def test_header_group(self, name: str, expected: HeaderGroup, desc: str) -> None:
        """Test group lookup for known and unknown names."""
        assert header_group(name) is expected, desc
        assert Header(name, "").group is expected


class TestHeaderLookup:
    """Tests for case-insensitive lookup helpers."""

    HEADERS = [
        Header("Accept", "text/html"),
        Header("set-cookie", "a=1"),
        Header("Set-Cookie", "b=2"),
    ]

    def test_values_returns_all_in_order(self) -> None:
        assert values(self.HEADERS, "SET-COOKIE") == ["a=1", "b=2"]

    def test_value_returns_first(self) -> None:
        assert value(self.HEADERS, "Set-Cookie") == "a=1"

    def test_value_missing(self) -> None:
        assert value(self.HEADERS, "Location") is None

    def test_headers_as_dict_joins_duplicates(self) -> None:
        """Repeated names are joined with ", " under the first spelling."""
        assert headers_as_dict(self.HEADERS) == {"Accept": "text/html", "set-cookie": "a=1, b=2"}


class TestCanonicalOrder:
    """Tests for canonical header ordering."""

    def test_groups_then_names(self) -> None:
        """General, then request, then entity headers."""
        headers = [Header(name, "") for name in ("Content-Type", "Accept", "Date", "Content-Length")]
        ordered = canonical_order(headers)
        assert [h.name for h in ordered] == ["Date", "Accept", "Content-Length", "Content-Type"]

    def test_input_untouched(self) -> None:
        """Sorting returns a new list."""
        headers = [Header("Content-Type", ""), Header("Date", "")]
        canonical_order(headers)
        assert [h.name for h in headers] == ["Content-Type", "Date"]


class TestRemoveHeaders:
    """Tests for header removal helpers."""

    def test_remove_all_in_place(self) -> None:
        headers = [Header("Cookie", "a=1"), Header("Accept", "*/*"), Header("cookie", "b=2")]
        remove_all(headers, "COOKIE")
        assert headers == [Header("Accept", "*/*")]

    def test_removing_all_by_pattern(self) -> None:
        headers = [Header("X-Api-Key", "k"), Header("Accept", "*/*")]
        result = removing_all(headers, re.compile("key", re.IGNORECASE))
        assert result == [Header("Accept", "*/*")]
        assert len(headers) == 2


class TestSplitSetCookie:
    """Tests for un-folding comma-joined Set-Cookie values."""

    def test_google_cookies(self) -> None:
        """Commas inside Expires dates do not split."""
        parts = split_set_cookie(GOOGLE_SET_COOKIE)
        assert len(parts) == 2
        assert parts[0].startswith("A=1")
        assert parts[1].startswith("B=2")
        assert parts[0].endswith("Secure")
        assert "Wed, 09 Jun 2021" in parts[1]

    @pytest.mark.parametrize(
        ("raw", "expected", "desc"),
        SPLIT_CASES,
        ids=[c[2] for c in SPLIT_CASES],
    )
    def test_split_cases(self, raw: str, expected: list[str], desc: str) -> None:
        """Test the comma disambiguation rule."""
        assert split_set_cookie(raw) == expected, desc


class TestHeadersFromFields:
    """Tests for building headers from transport fields."""

    def test_pairs_keep_order_and_duplicates(self) -> None:
        headers = headers_from_fields([("B", "1"), ("A", "2"), ("B", "3")])
        assert [(h.name, h.value) for h in headers] == [("B", "1"), ("A", "2"), ("B", "3")]

    def test_mapping(self) -> None:
        headers = headers_from_fields({"Accept": "*/*"})
        assert headers == [Header("Accept", "*/*")]

    def test_set_cookie_unfolded(self) -> None:
        """A folded Set-Cookie becomes one header per cookie."""
        headers = headers_from_fields([("Set-Cookie", GOOGLE_SET_COOKIE), ("Server", "gws")])
        assert [h.name for h in headers] == ["Set-Cookie", "Set-Cookie", "Server"]
        assert headers[1].value.startswith("B=2")
