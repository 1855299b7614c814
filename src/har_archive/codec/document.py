"""HAR JSON encoding and decoding.

Decoding checks required-field presence and basic JSON types, fills in the
documented defaults, and rejects timestamps it cannot read. Timestamps are
stored at hundredth-of-a-second precision so that a decoded document encodes
and decodes back to an equal document. Encoding emits fields in HAR schema
order, omits unset optional fields, and normalizes every timestamp to the
canonical form (see :mod:`har_archive.dates`).

Custom members (names starting with "_") on the log, pages, entries,
requests and responses are carried through unchanged.
"""

from __future__ import annotations

import json
import logging
import math
from datetime import datetime
from typing import Any

from har_archive.dates import (
    format_har_datetime,
    parse_any_datetime,
    parse_har_datetime,
    truncate_to_centiseconds,
)
from har_archive.model import (
    Browser,
    Cache,
    CacheEntry,
    Content,
    Cookie,
    Creator,
    Entry,
    Har,
    Header,
    Log,
    Page,
    PageTiming,
    Param,
    PostData,
    QueryString,
    Request,
    Response,
    Timing,
)

_LOGGER = logging.getLogger(__name__)

_REQUIRED = object()


class ParseError(ValueError):
    """Raised when a HAR document cannot be decoded."""

    def __init__(self, message: str, path: str = "") -> None:
        self.path = path
        full_message = f"Invalid HAR document: {message}"
        if path:
            full_message += f" (at {path})"
        super().__init__(full_message)


# =============================================================================
# Decoding
# =============================================================================


class _Object:
    """Typed, path-aware access to one JSON object."""

    def __init__(self, data: Any, path: str) -> None:
        if not isinstance(data, dict):
            raise ParseError("expected an object", path)
        self.data: dict[str, Any] = data
        self.path = path

    def child_path(self, key: str) -> str:
        return f"{self.path}.{key}" if self.path else key

    def _get(self, key: str, expected: type | tuple[type, ...], kind: str, default: Any) -> Any:
        raw = self.data.get(key)
        if raw is None:
            if default is _REQUIRED:
                raise ParseError(f"missing required field '{key}'", self.path or "root")
            return default
        # bool is an int subclass; reject it where a number is expected
        if not isinstance(raw, expected) or (isinstance(raw, bool) and bool not in _as_tuple(expected)):
            raise ParseError(f"expected {kind}, got {type(raw).__name__}", self.child_path(key))
        return raw

    def string(self, key: str, default: Any = _REQUIRED) -> Any:
        return self._get(key, str, "a string", default)

    def integer(self, key: str, default: Any = _REQUIRED) -> Any:
        raw = self._get(key, (int, float), "an integer", default)
        if isinstance(raw, float):
            if not raw.is_integer():
                raise ParseError("expected an integer", self.child_path(key))
            return int(raw)
        return raw

    def number(self, key: str, default: Any = _REQUIRED) -> Any:
        raw = self._get(key, (int, float), "a number", default)
        if raw is default:
            return raw
        try:
            number = float(raw)
        except OverflowError as e:
            raise ParseError("number out of range", self.child_path(key)) from e
        if not math.isfinite(number):
            raise ParseError("number out of range", self.child_path(key))
        return number

    def boolean(self, key: str, default: Any = _REQUIRED) -> Any:
        return self._get(key, bool, "a boolean", default)

    def object(self, key: str, default: Any = _REQUIRED) -> Any:
        raw = self._get(key, dict, "an object", default)
        return raw if raw is default else _Object(raw, self.child_path(key))

    def array(self, key: str, default: Any = _REQUIRED) -> Any:
        raw = self._get(key, list, "an array", default)
        if raw is default:
            return raw
        return [_Object(item, f"{self.child_path(key)}[{index}]") for index, item in enumerate(raw)]

    def date(self, key: str, default: Any = _REQUIRED, *, lenient: bool = False) -> Any:
        raw = self.string(key, default)
        if raw is default:
            return raw
        try:
            parsed = parse_any_datetime(raw) if lenient else parse_har_datetime(raw)
        except ValueError as e:
            raise ParseError(str(e), self.child_path(key)) from e
        # Keep only what the canonical output format can hold
        return truncate_to_centiseconds(parsed)

    def extensions(self) -> dict[str, Any]:
        return {key: val for key, val in self.data.items() if key.startswith("_")}


def _as_tuple(expected: type | tuple[type, ...]) -> tuple[type, ...]:
    return expected if isinstance(expected, tuple) else (expected,)


def _decode_creator(obj: _Object) -> Creator:
    return Creator(name=obj.string("name"), version=obj.string("version"), comment=obj.string("comment", None))


def _decode_browser(obj: _Object) -> Browser:
    return Browser(name=obj.string("name"), version=obj.string("version"), comment=obj.string("comment", None))


def _decode_page_timing(obj: _Object) -> PageTiming:
    return PageTiming(
        on_content_load=obj.number("onContentLoad", None),
        on_load=obj.number("onLoad", None),
        comment=obj.string("comment", None),
    )


def _decode_page(obj: _Object) -> Page:
    return Page(
        started_date_time=obj.date("startedDateTime"),
        id=obj.string("id"),
        title=obj.string("title", ""),
        page_timings=_decode_page_timing(obj.object("pageTimings")),
        comment=obj.string("comment", None),
        extensions=obj.extensions(),
    )


def _decode_header(obj: _Object) -> Header:
    return Header(name=obj.string("name"), value=obj.string("value"), comment=obj.string("comment", None))


def _decode_cookie(obj: _Object) -> Cookie:
    return Cookie(
        name=obj.string("name"),
        value=obj.string("value"),
        path=obj.string("path", None),
        domain=obj.string("domain", None),
        expires=obj.date("expires", None, lenient=True),
        http_only=obj.boolean("httpOnly", None),
        secure=obj.boolean("secure", None),
        comment=obj.string("comment", None),
        same_site=obj.string("sameSite", None),
    )


def _decode_query_string(obj: _Object) -> QueryString:
    return QueryString(name=obj.string("name"), value=obj.string("value"), comment=obj.string("comment", None))


def _decode_param(obj: _Object) -> Param:
    return Param(
        name=obj.string("name", ""),
        value=obj.string("value", None),
        file_name=obj.string("fileName", None),
        content_type=obj.string("contentType", None),
        comment=obj.string("comment", None),
    )


def _decode_post_data(obj: _Object) -> PostData:
    return PostData(
        mime_type=obj.string("mimeType", ""),
        params=[_decode_param(item) for item in obj.array("params", [])],
        text=obj.string("text", ""),
        comment=obj.string("comment", None),
    )


def _decode_content(obj: _Object) -> Content:
    return Content(
        size=obj.integer("size"),
        compression=obj.integer("compression", None),
        mime_type=obj.string("mimeType"),
        text=obj.string("text", None),
        encoding=obj.string("encoding", None),
        comment=obj.string("comment", None),
    )


def _decode_request(obj: _Object) -> Request:
    post_data = obj.object("postData", None)
    return Request(
        method=obj.string("method"),
        url=obj.string("url"),
        http_version=obj.string("httpVersion", "HTTP/1.1"),
        cookies=[_decode_cookie(item) for item in obj.array("cookies")],
        headers=[_decode_header(item) for item in obj.array("headers")],
        query_string=[_decode_query_string(item) for item in obj.array("queryString")],
        post_data=_decode_post_data(post_data) if post_data is not None else None,
        headers_size=obj.integer("headersSize", -1),
        body_size=obj.integer("bodySize", -1),
        comment=obj.string("comment", None),
        extensions=obj.extensions(),
    )


def _decode_response(obj: _Object) -> Response:
    return Response(
        status=obj.integer("status"),
        status_text=obj.string("statusText"),
        http_version=obj.string("httpVersion", "HTTP/1.1"),
        cookies=[_decode_cookie(item) for item in obj.array("cookies")],
        headers=[_decode_header(item) for item in obj.array("headers")],
        content=_decode_content(obj.object("content")),
        redirect_url=obj.string("redirectURL"),
        headers_size=obj.integer("headersSize", -1),
        body_size=obj.integer("bodySize", -1),
        comment=obj.string("comment", None),
        extensions=obj.extensions(),
    )


def _decode_cache_entry(obj: _Object) -> CacheEntry:
    return CacheEntry(
        expires=obj.date("expires", None),
        last_access=obj.date("lastAccess"),
        etag=obj.string("eTag"),
        hit_count=obj.integer("hitCount"),
        comment=obj.string("comment", None),
    )


def _decode_cache(obj: _Object) -> Cache:
    before = obj.object("beforeRequest", None)
    after = obj.object("afterRequest", None)
    return Cache(
        before_request=_decode_cache_entry(before) if before is not None else None,
        after_request=_decode_cache_entry(after) if after is not None else None,
        comment=obj.string("comment", None),
    )


def _decode_timing(obj: _Object) -> Timing:
    return Timing(
        blocked=obj.number("blocked", None),
        dns=obj.number("dns", None),
        connect=obj.number("connect", None),
        send=obj.number("send"),
        wait=obj.number("wait"),
        receive=obj.number("receive"),
        ssl=obj.number("ssl", None),
        comment=obj.string("comment", None),
    )


def _decode_entry(obj: _Object) -> Entry:
    cache = obj.object("cache", None)
    return Entry(
        pageref=obj.string("pageref", None),
        started_date_time=obj.date("startedDateTime"),
        time=obj.number("time"),
        request=_decode_request(obj.object("request")),
        response=_decode_response(obj.object("response")),
        cache=_decode_cache(cache) if cache is not None else Cache(),
        timings=_decode_timing(obj.object("timings")),
        server_ip_address=obj.string("serverIPAddress", None),
        connection=obj.string("connection", None),
        comment=obj.string("comment", None),
        extensions=obj.extensions(),
    )


def _decode_log(obj: _Object) -> Log:
    browser = obj.object("browser", None)
    pages = obj.array("pages", None)
    return Log(
        version=obj.string("version", "1.1"),
        creator=_decode_creator(obj.object("creator")),
        browser=_decode_browser(browser) if browser is not None else None,
        pages=[_decode_page(item) for item in pages] if pages is not None else None,
        entries=[_decode_entry(item) for item in obj.array("entries")],
        comment=obj.string("comment", None),
        extensions=obj.extensions(),
    )


def from_dict(data: Any) -> Har:
    """Build a HAR document from parsed JSON.

    Args:
        data: Parsed JSON value (must be an object with a "log" member)

    Returns:
        Decoded document

    Raises:
        ParseError: If a required field is missing, has the wrong type, or a
            date cannot be parsed
    """
    root = _Object(data, "")
    return Har(log=_decode_log(root.object("log")))


def _finite_float(text: str) -> float:
    number = float(text)
    if not math.isfinite(number):
        raise ParseError(f"number out of range: {text}")
    return number


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are accepted by the json module but are not JSON
    raise ParseError(f"non-standard number: {name}")


def decode(data: bytes | str) -> Har:
    """Decode HAR JSON.

    Args:
        data: JSON text as bytes (UTF-8, BOM tolerated) or str

    Returns:
        Decoded document

    Raises:
        ParseError: If the JSON is malformed (NaN, Infinity and out-of-range numbers
            included) or is not a valid HAR document

    Example:
        >>> har = decode(b'{"log": {"version": "1.2", "creator": {"name": "x", "version": "1"}, "entries": []}}')
        >>> har.log.creator.name
        'x'
    """
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError(f"not UTF-8 text: {e}") from e

    try:
        parsed = json.loads(data, parse_float=_finite_float, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise ParseError(f"malformed JSON: {e.msg} at line {e.lineno} column {e.colno}") from e

    har = from_dict(parsed)
    _LOGGER.debug("Decoded HAR with %d entries", len(har.log.entries))
    return har


# =============================================================================
# Encoding
# =============================================================================


def _number(value: float) -> int | float:
    """Emit integral floats as integers."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _date(value: datetime) -> str:
    return format_har_datetime(value)


def _put(obj: dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        obj[key] = value


def _finish(obj: dict[str, Any], comment: str | None, extensions: dict[str, Any] | None = None) -> dict[str, Any]:
    _put(obj, "comment", comment)
    if extensions:
        obj.update(extensions)
    return obj


def _encode_named(item: Creator | Browser) -> dict[str, Any]:
    return _finish({"name": item.name, "version": item.version}, item.comment)


def _encode_page_timing(timing: PageTiming) -> dict[str, Any]:
    obj: dict[str, Any] = {}
    _put(obj, "onContentLoad", None if timing.on_content_load is None else _number(timing.on_content_load))
    _put(obj, "onLoad", None if timing.on_load is None else _number(timing.on_load))
    return _finish(obj, timing.comment)


def _encode_page(page: Page) -> dict[str, Any]:
    obj = {
        "startedDateTime": _date(page.started_date_time),
        "id": page.id,
        "title": page.title,
        "pageTimings": _encode_page_timing(page.page_timings),
    }
    return _finish(obj, page.comment, page.extensions)


def _encode_header(header: Header | QueryString) -> dict[str, Any]:
    return _finish({"name": header.name, "value": header.value}, header.comment)


def _encode_cookie(cookie: Cookie) -> dict[str, Any]:
    obj: dict[str, Any] = {"name": cookie.name, "value": cookie.value}
    _put(obj, "path", cookie.path)
    _put(obj, "domain", cookie.domain)
    _put(obj, "expires", None if cookie.expires is None else _date(cookie.expires))
    _put(obj, "httpOnly", cookie.http_only)
    _put(obj, "secure", cookie.secure)
    _put(obj, "sameSite", cookie.same_site)
    return _finish(obj, cookie.comment)


def _encode_param(param: Param) -> dict[str, Any]:
    obj: dict[str, Any] = {"name": param.name}
    _put(obj, "value", param.value)
    _put(obj, "fileName", param.file_name)
    _put(obj, "contentType", param.content_type)
    return _finish(obj, param.comment)


def _encode_post_data(post_data: PostData) -> dict[str, Any]:
    obj = {
        "mimeType": post_data.mime_type,
        "params": [_encode_param(param) for param in post_data.params],
        "text": post_data.text,
    }
    return _finish(obj, post_data.comment)


def _encode_content(content: Content) -> dict[str, Any]:
    obj: dict[str, Any] = {"size": content.size}
    _put(obj, "compression", content.compression)
    obj["mimeType"] = content.mime_type
    _put(obj, "text", content.text)
    _put(obj, "encoding", content.encoding)
    return _finish(obj, content.comment)


def _encode_request(request: Request) -> dict[str, Any]:
    obj: dict[str, Any] = {
        "method": request.method,
        "url": request.url,
        "httpVersion": request.http_version,
        "cookies": [_encode_cookie(cookie) for cookie in request.cookies or []],
        "headers": [_encode_header(header) for header in request.headers],
        "queryString": [_encode_header(item) for item in request.query_string or []],
    }
    if request.post_data is not None:
        obj["postData"] = _encode_post_data(request.post_data)
    obj["headersSize"] = request.headers_size
    obj["bodySize"] = request.body_size
    return _finish(obj, request.comment, request.extensions)


def _encode_response(response: Response) -> dict[str, Any]:
    obj = {
        "status": response.status,
        "statusText": response.status_text,
        "httpVersion": response.http_version,
        "cookies": [_encode_cookie(cookie) for cookie in response.cookies or []],
        "headers": [_encode_header(header) for header in response.headers],
        "content": _encode_content(response.content),
        "redirectURL": response.redirect_url,
        "headersSize": response.headers_size,
        "bodySize": response.body_size,
    }
    return _finish(obj, response.comment, response.extensions)


def _encode_cache_entry(entry: CacheEntry) -> dict[str, Any]:
    obj: dict[str, Any] = {}
    _put(obj, "expires", None if entry.expires is None else _date(entry.expires))
    obj["lastAccess"] = _date(entry.last_access)
    obj["eTag"] = entry.etag
    obj["hitCount"] = entry.hit_count
    return _finish(obj, entry.comment)


def _encode_cache(cache: Cache) -> dict[str, Any]:
    obj: dict[str, Any] = {}
    if cache.before_request is not None:
        obj["beforeRequest"] = _encode_cache_entry(cache.before_request)
    if cache.after_request is not None:
        obj["afterRequest"] = _encode_cache_entry(cache.after_request)
    return _finish(obj, cache.comment)


def _encode_timing(timing: Timing) -> dict[str, Any]:
    obj: dict[str, Any] = {}
    for key in ("blocked", "dns", "connect"):
        duration = getattr(timing, key)
        _put(obj, key, None if duration is None else _number(duration))
    obj["send"] = _number(timing.send)
    obj["wait"] = _number(timing.wait)
    obj["receive"] = _number(timing.receive)
    _put(obj, "ssl", None if timing.ssl is None else _number(timing.ssl))
    return _finish(obj, timing.comment)


def _encode_entry(entry: Entry) -> dict[str, Any]:
    obj: dict[str, Any] = {}
    _put(obj, "pageref", entry.pageref)
    obj["startedDateTime"] = _date(entry.started_date_time)
    obj["time"] = _number(entry.time)
    obj["request"] = _encode_request(entry.request)
    obj["response"] = _encode_response(entry.response)
    obj["cache"] = _encode_cache(entry.cache)
    obj["timings"] = _encode_timing(entry.timings)
    _put(obj, "serverIPAddress", entry.server_ip_address)
    _put(obj, "connection", entry.connection)
    return _finish(obj, entry.comment, entry.extensions)


def _encode_log(log: Log) -> dict[str, Any]:
    obj: dict[str, Any] = {"version": log.version, "creator": _encode_named(log.creator)}
    if log.browser is not None:
        obj["browser"] = _encode_named(log.browser)
    if log.pages is not None:
        obj["pages"] = [_encode_page(page) for page in log.pages]
    obj["entries"] = [_encode_entry(entry) for entry in log.entries]
    return _finish(obj, log.comment, log.extensions)


def to_dict(har: Har) -> dict[str, Any]:
    """Convert a HAR document to JSON-ready dicts in schema order."""
    return {"log": _encode_log(har.log)}


def encode(har: Har, *, indent: int | None = 2) -> bytes:
    """Encode a HAR document as pretty-printed UTF-8 JSON.

    Lone surrogates, which decoding accepts from "\\udXXX" escapes, are written
    back as the same escapes.

    Args:
        har: Document to encode
        indent: JSON indentation (None for compact output)

    Returns:
        JSON bytes

    Raises:
        ValueError: If a number in the document is NaN or infinite
    """
    text = json.dumps(to_dict(har), indent=indent, ensure_ascii=False, allow_nan=False)
    return text.encode("utf-8", errors="backslashreplace")
