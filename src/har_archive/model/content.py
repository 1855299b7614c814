"""Message body descriptors and the content text/binary codec.

A HAR ``content.text`` is either the body decoded as UTF-8 text, or, when
``encoding`` is "base64", the base64 form of the raw bytes. Conversion from
bytes picks whichever keeps the payload byte-exact.
"""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass, field
from urllib.parse import unquote_plus

_LOGGER = logging.getLogger(__name__)

BASE64 = "base64"
DEFAULT_MIME_TYPE = "application/octet-stream"
FORM_URLENCODED = "application/x-www-form-urlencoded"


def decode_text(text: str | None, encoding: str | None) -> bytes:
    """Turn a HAR text field back into bytes.

    Never raises: invalid base64 yields empty bytes.
    """
    if text is None:
        return b""
    if encoding == BASE64:
        try:
            return base64.b64decode(text, validate=True)
        except (binascii.Error, ValueError):
            _LOGGER.warning("Invalid base64 content text, returning empty body")
            return b""
    return text.encode("utf-8", errors="surrogatepass")


def encode_bytes(data: bytes) -> tuple[str, str | None]:
    """Turn raw bytes into a (text, encoding) pair.

    UTF-8 payloads become plain text with no encoding; anything else is
    base64 encoded.
    """
    try:
        return data.decode("utf-8"), None
    except UnicodeDecodeError:
        return base64.b64encode(data).decode("ascii"), BASE64


@dataclass
class Content:
    """Details about a response body.

    Attributes:
        size: Length of the returned content in bytes
        compression: Number of bytes saved by compression, if known
        mime_type: MIME type of the response text, charset included
        text: Body text, plain or encoded as described by ``encoding``
        encoding: Encoding of ``text``, e.g. "base64"
        comment: Optional user or application comment
    """

    size: int = 0
    compression: int | None = None
    mime_type: str = DEFAULT_MIME_TYPE
    text: str | None = None
    encoding: str | None = None
    comment: str | None = None

    @classmethod
    def from_text(cls, text: str, mime_type: str | None = None, encoding: str | None = None) -> Content:
        """Create content from already-encoded text.

        Example:
            >>> Content.from_text("aGk=", "text/plain", encoding="base64").size
            2
        """
        content = cls(mime_type=mime_type or DEFAULT_MIME_TYPE, text=text, encoding=encoding)
        content.size = len(content.data)
        return content

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str | None = None) -> Content:
        """Create content from a raw HTTP body.

        Example:
            >>> Content.from_bytes(b"\\xff\\x00", "image/png").encoding
            'base64'
        """
        text, encoding = encode_bytes(data)
        return cls(size=len(data), mime_type=mime_type or DEFAULT_MIME_TYPE, text=text, encoding=encoding)

    @property
    def data(self) -> bytes:
        """Body bytes; empty when the text is missing or badly encoded."""
        return decode_text(self.text, self.encoding)

    def to_bytes(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        return self.data.decode("utf-8", errors="replace")


@dataclass
class Param:
    """A posted parameter or uploaded file.

    Attributes:
        name: Parameter name
        value: Parameter value or file content
        file_name: Name of a posted file
        content_type: Content type of a posted file
        comment: Optional user or application comment
    """

    name: str
    value: str | None = None
    file_name: str | None = None
    content_type: str | None = None
    comment: str | None = None

    def __str__(self) -> str:
        if self.file_name is not None:
            text = f"{self.name}=@{self.file_name}"
            if self.content_type is not None:
                text += f";type={self.content_type}"
            return text
        if self.value is not None:
            return f"{self.name}={self.value}"
        return self.name


def parse_form_urlencoded(text: str) -> list[Param]:
    """Parse ``application/x-www-form-urlencoded`` text into params.

    Example:
        >>> parse_form_urlencoded("a=1&b=hello+world")
        [Param(name='a', value='1', ...), Param(name='b', value='hello world', ...)]
    """
    params: list[Param] = []
    for pair in text.split("&"):
        if not pair:
            continue
        name, _, raw_value = pair.partition("=")
        params.append(Param(name=unquote_plus(name), value=unquote_plus(raw_value)))
    return params


@dataclass
class PostData:
    """Posted data of a request.

    ``text`` and ``params`` are meant to be mutually exclusive; for form
    bodies the params are derived from the text.

    Attributes:
        mime_type: MIME type of the posted data
        params: Posted parameters (URL encoded forms)
        text: Plain text posted data
        comment: Optional user or application comment
    """

    mime_type: str = ""
    params: list[Param] = field(default_factory=list)
    text: str = ""
    comment: str | None = None

    @classmethod
    def from_text(cls, text: str, mime_type: str | None = None) -> PostData:
        """Create post data from a request body, deriving form params."""
        post_data = cls(mime_type=mime_type or DEFAULT_MIME_TYPE, text=text)
        if post_data.mime_type.startswith(FORM_URLENCODED):
            post_data.params = parse_form_urlencoded(text)
        return post_data

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str | None = None) -> PostData | None:
        """Create post data from raw body bytes; None when not UTF-8."""
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError:
            _LOGGER.debug("Request body is not UTF-8 (%d bytes), skipping postData", len(data))
            return None
        return cls.from_text(text, mime_type)

    @property
    def data(self) -> bytes:
        return self.text.encode("utf-8")

    @property
    def size(self) -> int:
        return len(self.data)

    def __str__(self) -> str:
        return self.text
