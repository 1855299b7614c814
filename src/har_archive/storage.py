"""Reading and writing HAR files.

Thin file adapter around :mod:`har_archive.codec`. Paths ending in ``.gz``
are read and written gzip-compressed.
"""

from __future__ import annotations

import gzip
import logging
import zlib
from pathlib import Path

from har_archive.codec import ParseError, decode, encode
from har_archive.model import Entry, Har

_LOGGER = logging.getLogger(__name__)

# Default maximum HAR file size (100 MB)
DEFAULT_MAX_HAR_SIZE = 100 * 1024 * 1024


class HarSizeError(ValueError):
    """Raised when HAR file exceeds size limit."""

    def __init__(self, size: int, max_size: int) -> None:
        self.size = size
        self.max_size = max_size
        super().__init__(
            f"HAR file size ({size:,} bytes) exceeds limit ({max_size:,} bytes). "
            f"Use max_size parameter to increase or set to None to disable."
        )


def read_har(path: str | Path, max_size: int | None = DEFAULT_MAX_HAR_SIZE) -> Har:
    """Read and decode a HAR file.

    Args:
        path: Path to a .har or .har.gz file
        max_size: Maximum file size in bytes (default: 100MB). None disables the check.

    Returns:
        Decoded document

    Raises:
        HarSizeError: If file exceeds max_size limit
        ParseError: If the file is not a valid HAR document or a .gz file is
            truncated or corrupt
        FileNotFoundError: If the file doesn't exist
    """
    path = Path(path)

    if max_size is not None:
        file_size = path.stat().st_size
        if file_size > max_size:
            raise HarSizeError(file_size, max_size)

    if path.suffix == ".gz":
        try:
            with gzip.open(path, "rb") as f:
                data = f.read()
        except (EOFError, zlib.error, gzip.BadGzipFile) as e:
            raise ParseError(f"corrupt gzip data in {path.name}: {e}") from e
    else:
        data = path.read_bytes()

    return decode(data)


def write_har(har: Har, path: str | Path, *, compress: bool | None = None, compression_level: int = 9) -> Path:
    """Encode and write a HAR document, creating parent directories.

    Args:
        har: Document to write
        path: Destination path
        compress: Gzip the output. Defaults to True for paths ending in .gz.
        compression_level: Gzip compression level 1-9

    Returns:
        Path written
    """
    path = Path(path)
    if compress is None:
        compress = path.suffix == ".gz"

    path.parent.mkdir(parents=True, exist_ok=True)
    data = encode(har)

    if compress:
        with gzip.open(path, "wb", compresslevel=compression_level) as f:
            f.write(data)
    else:
        path.write_bytes(data)

    _LOGGER.info("HAR written to: %s", path)
    return path


def append_entry(entry: Entry, path: str | Path) -> Har:
    """Append an entry to an existing HAR file, creating the file if missing.

    Returns:
        The updated document
    """
    path = Path(path)
    har = read_har(path, max_size=None) if path.exists() else Har()
    har.log.entries.append(entry)
    write_har(har, path)
    return har
