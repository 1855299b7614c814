"""HAR JSON codec.

Exports:
    - decode: HAR JSON bytes/str to a Har document
    - encode: Har document to pretty-printed JSON bytes
    - from_dict / to_dict: the same mapping on parsed JSON values
    - ParseError: raised for malformed or incomplete documents
"""

from __future__ import annotations

from har_archive.codec.document import ParseError, decode, encode, from_dict, to_dict

__all__ = [
    "ParseError",
    "decode",
    "encode",
    "from_dict",
    "to_dict",
]
