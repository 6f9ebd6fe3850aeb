"""Text helpers shared by the parser and renderers.

Example:
    >>> from spanmark.utils.text import resolve_escapes
    >>> resolve_escapes(r"\\*\\*\\*not bold\\*\\*\\*")
    '***not bold***'
"""

from __future__ import annotations

import html
import re

# Characters a backslash can make literal. The backslash itself is included
# so that "\\" reads as one literal backslash.
ESCAPABLE_CHARS = frozenset("*/_#`|@[]()<>\\")

_ESCAPE_RE = re.compile(
    r"\\([" + re.escape("".join(sorted(ESCAPABLE_CHARS))) + r"])"
)


def resolve_escapes(text: str) -> str:
    """Drop the backslash in front of each escaped delimiter character.

    Scans left to right; each backslash consumes at most the one character
    after it, so ``\\\\*`` becomes ``\\*``. A backslash before any other
    character is kept as-is.

    Args:
        text: Plain text left over after pattern matching

    Returns:
        Text with escape backslashes removed

    Examples:
        >>> resolve_escapes(r"\\#tag")
        '#tag'
        >>> resolve_escapes(r"C:\\temp")
        'C:\\\\temp'
    """
    if "\\" not in text:
        return text
    return _ESCAPE_RE.sub(r"\1", text)


def escape_html(text: str) -> str:
    """Escape HTML special characters for element content and attributes.

    Single quotes are left alone; double quotes become ``&quot;``.
    """
    return html.escape(text, quote=False).replace('"', "&quot;")
