"""HAR document model.

Plain dataclass records for every HAR object, plus the header and cookie
parsers and the content codec the records use to derive their fields.

Exports:
    - Har, Log, Creator, Browser, Page, PageTiming, Entry, Cache, CacheEntry, Timing
    - Request, QueryString, Response, Content, PostData, Param
    - Header, HeaderGroup, Cookie
    - Header helpers: values, value, canonical_order, headers_as_dict, headers_from_fields,
      split_set_cookie
    - Cookie helpers: parse_cookie_header, parse_set_cookie, parse_set_cookie_headers
"""

from __future__ import annotations

from har_archive.model.content import BASE64, Content, Param, PostData, parse_form_urlencoded
from har_archive.model.cookies import (
    Cookie,
    parse_cookie_attributes,
    parse_cookie_header,
    parse_set_cookie,
    parse_set_cookie_headers,
)
from har_archive.model.headers import (
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
from har_archive.model.log import Browser, Cache, CacheEntry, Creator, Entry, Har, Log, Page
from har_archive.model.request import QueryString, Request, parse_query_string
from har_archive.model.response import Response
from har_archive.model.timing import NOT_APPLICABLE, PageTiming, Timing

__all__ = [
    # Documents
    "Har",
    "Log",
    "Creator",
    "Browser",
    "Page",
    "PageTiming",
    "Entry",
    "Cache",
    "CacheEntry",
    "Timing",
    "NOT_APPLICABLE",
    # Messages
    "Request",
    "QueryString",
    "Response",
    "Content",
    "PostData",
    "Param",
    "BASE64",
    # Headers
    "Header",
    "HeaderGroup",
    "header_group",
    "values",
    "value",
    "canonical_order",
    "headers_as_dict",
    "headers_from_fields",
    "remove_all",
    "removing_all",
    "split_set_cookie",
    # Cookies
    "Cookie",
    "parse_cookie_attributes",
    "parse_cookie_header",
    "parse_set_cookie",
    "parse_set_cookie_headers",
    # Parsing helpers
    "parse_form_urlencoded",
    "parse_query_string",
]
