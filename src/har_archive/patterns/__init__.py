"""Scrub configuration loading.

This module provides:
- Loading of the sensitive-header words, placeholder and redacted markers from JSON
- Merging of user pattern files over the built-in defaults
"""

from __future__ import annotations

from har_archive.patterns.loader import (
    PatternLoadError,
    clear_pattern_cache,
    compile_word_pattern,
    default_placeholder,
    load_scrub_patterns,
    sensitive_header_pattern,
)

__all__ = [
    "load_scrub_patterns",
    "clear_pattern_cache",
    "compile_word_pattern",
    "default_placeholder",
    "sensitive_header_pattern",
    "PatternLoadError",
]
