"""Loading of scrub configuration from JSON files.

The built-in ``scrub.json`` lists the words that make a header name look
sensitive, the default placeholder, and the values treated as already
redacted. User files are merged over it.
"""

from __future__ import annotations

import json
import logging
import re
from collections import OrderedDict
from pathlib import Path
from typing import Any

_LOGGER = logging.getLogger(__name__)

BUILTIN_PATTERNS = Path(__file__).parent / "scrub.json"

# Merged configurations kept per custom file, least recently used first
_MAX_CACHE_SIZE = 20
_pattern_cache: OrderedDict[str, Any] = OrderedDict()


def _cache_get(key: str) -> Any | None:
    value = _pattern_cache.get(key)
    if value is not None:
        _pattern_cache.move_to_end(key)
    return value


def _cache_set(key: str, value: Any) -> None:
    _pattern_cache[key] = value
    _pattern_cache.move_to_end(key)
    if len(_pattern_cache) > _MAX_CACHE_SIZE:
        evicted, _ = _pattern_cache.popitem(last=False)
        _LOGGER.debug("Dropped cached scrub patterns: %s", evicted)


class PatternLoadError(Exception):
    """A scrub configuration file is missing, unreadable or malformed."""


def _cache_key(custom_path: Path | str | None) -> str:
    if custom_path is None:
        return "scrub:builtin"
    return f"scrub:{Path(custom_path).resolve()}"


def load_json_file(path: Path | str) -> dict[str, Any]:
    """Read one scrub configuration file.

    Raises:
        PatternLoadError: If the file is missing, unreadable, not JSON, or
            not a JSON object
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise PatternLoadError(f"Pattern file not found: {path}") from e
    except PermissionError as e:
        raise PatternLoadError(f"Permission denied reading pattern file: {path}") from e
    except json.JSONDecodeError as e:
        raise PatternLoadError(f"Invalid JSON in pattern file {path}: {e}") from e

    if not isinstance(data, dict):
        raise PatternLoadError(f"Pattern file {path} must hold a JSON object, not {type(data).__name__}")
    return data


def load_scrub_patterns(custom_path: Path | str | None = None) -> dict[str, Any]:
    """Load scrub configuration, merging an optional user file.

    Custom ``headers.sensitive`` and ``redacted_values`` lists extend the
    built-in ones; a custom ``headers.placeholder`` replaces the default.

    Args:
        custom_path: Optional path to a custom patterns file

    Returns:
        Dict with 'headers' and 'redacted_values' keys

    Raises:
        PatternLoadError: If a patterns file cannot be loaded
    """
    cache_key = _cache_key(custom_path)
    cached: dict[str, Any] | None = _cache_get(cache_key)
    if cached is not None:
        return cached

    merged = load_json_file(BUILTIN_PATTERNS)
    if custom_path:
        custom = load_json_file(custom_path)
        headers = custom.get("headers", {})
        if isinstance(headers.get("sensitive"), list):
            merged["headers"]["sensitive"].extend(headers["sensitive"])
        if isinstance(headers.get("placeholder"), str):
            merged["headers"]["placeholder"] = headers["placeholder"]
        if isinstance(custom.get("redacted_values"), list):
            merged["redacted_values"].extend(custom["redacted_values"])
        _LOGGER.debug("Merged scrub patterns from %s", custom_path)

    _cache_set(cache_key, merged)
    return merged


def clear_pattern_cache() -> None:
    """Forget merged configurations so edited pattern files are re-read."""
    _pattern_cache.clear()


def compile_word_pattern(words: list[str]) -> re.Pattern[str]:
    """Compile words into one case-insensitive alternation.

    Words are escaped, so they match literally anywhere in a name.

    Example:
        >>> compile_word_pattern(["auth", "token"]).search("X-Auth-Token") is not None
        True
    """
    escaped = [re.escape(word) for word in words if word]
    if not escaped:
        # Matches nothing
        return re.compile(r"(?!)")
    return re.compile("|".join(escaped), re.IGNORECASE)


def sensitive_header_pattern(custom_path: Path | str | None = None) -> re.Pattern[str]:
    """Compiled pattern for header names that look sensitive."""
    patterns = load_scrub_patterns(custom_path)
    return compile_word_pattern(patterns.get("headers", {}).get("sensitive", []))


def default_placeholder(custom_path: Path | str | None = None) -> str:
    """Configured replacement value for redacted headers."""
    placeholder: str = load_scrub_patterns(custom_path).get("headers", {}).get("placeholder", "[REDACTED]")
    return placeholder
