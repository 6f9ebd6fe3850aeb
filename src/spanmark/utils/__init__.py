"""Utility modules for Spanmark.

Provides:
- text: resolve_escapes, escape_html for text processing
- hashing: hash_str for content fingerprinting
- logger: get_logger for logging
"""

from spanmark.utils.hashing import hash_str
from spanmark.utils.logger import get_logger
from spanmark.utils.text import ESCAPABLE_CHARS, escape_html, resolve_escapes

__all__ = [
    "ESCAPABLE_CHARS",
    "escape_html",
    "get_logger",
    "hash_str",
    "resolve_escapes",
]
