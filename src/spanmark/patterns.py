"""Pattern rules: matchers, strip rules, and the built-in markup patterns.

A PatternRule bundles everything the parser needs to know about one
construct:

- ``match``: a stateless callable returning ``(start, end)`` ranges of
  ``text[pos:endpos]``, reported as offsets into the whole ``text``
- ``strip``: a Delimiters instance removing the markup characters
- ``element_type``: the flag the match contributes
- ``recurse``: re-parse the stripped interior with the full catalog
- ``exclusive``: the match's type replaces the ambient type

Two rule families exist. Delimited rules need a closing fence (``***x***``
or the word-scoped ``*x*``). Standalone rules match a complete token
(``#tag``, ``@name``, ``>| quote``, ``[label](url)``, ``<svg>...</svg>``).

Thread Safety:
Rules and matchers hold no per-call state. Compiled patterns are only ever
used through ``finditer``, which keeps its cursor local to the call.

Escapes:
A construct preceded by an odd run of backslashes is escaped and does not
match; ``\\\\#tag`` is a literal backslash followed by a hashtag. Inside a
fence, a backslash always pairs with the character after it, so an escaped
character never closes the fence.

"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from spanmark.elements import ElementType
from spanmark.errors import CatalogError, DelimiterError

Matcher = Callable[[str, int, int], tuple[tuple[int, int], ...]]


# =============================================================================
# Strip rules
# =============================================================================


@dataclass(frozen=True, slots=True)
class Delimiters:
    """Strip ``lead`` characters from the front and ``trail`` from the back.

    Example:
        >>> TRIPLE("***bold***")
        'bold'
        >>> LEADING("#tag")
        'tag'
    """

    lead: int = 0
    trail: int = 0

    def __call__(self, raw: str) -> str:
        if len(raw) < self.lead + self.trail:
            raise DelimiterError(raw, self.lead, self.trail)
        return raw[self.lead : len(raw) - self.trail]


TRIPLE = Delimiters(3, 3)
SINGLE_BOTH = Delimiters(1, 1)
LEADING = Delimiters(1, 0)
NONE = Delimiters(0, 0)


# =============================================================================
# Matchers
# =============================================================================


def is_escaped(text: str, index: int) -> bool:
    """Return True if ``text[index]`` follows an odd run of backslashes."""
    run = 0
    while index > run and text[index - run - 1] == "\\":
        run += 1
    return run % 2 == 1


def regex_matcher(
    pattern: str | re.Pattern[str],
    flags: int = 0,
    *,
    escapable: bool = False,
) -> Matcher:
    """Build a matcher that reports every non-overlapping regex match.

    The search runs over ``text[pos:endpos]`` without slicing, so ``^``
    and lookbehinds still see the characters before ``pos``. Zero-width
    matches are dropped; they cannot be stripped or advanced past.

    Args:
        pattern: Regex source or compiled pattern
        flags: Flags used when ``pattern`` is a string
        escapable: Drop matches that start after an odd run of backslashes

    Returns:
        Callable mapping ``(text, pos, endpos)`` to ``(start, end)`` ranges
    """
    compiled = re.compile(pattern, flags) if isinstance(pattern, str) else pattern

    def match(text: str, pos: int = 0, endpos: int | None = None) -> tuple[tuple[int, int], ...]:
        if endpos is None:
            endpos = len(text)
        return tuple(
            m.span()
            for m in compiled.finditer(text, pos, endpos)
            if m.end() > m.start() and not (escapable and is_escaped(text, m.start()))
        )

    match.pattern = compiled  # type: ignore[attr-defined]
    match.escapable = escapable  # type: ignore[attr-defined]
    return match


# =============================================================================
# Rules
# =============================================================================


@dataclass(frozen=True, slots=True)
class PatternRule:
    """One markup construct known to the parser.

    Attributes:
        name: Unique name within a catalog (e.g. "bold", "word_bold")
        match: Stateless matcher returning ``(start, end)`` ranges
        strip: Strip rule applied to the matched text
        element_type: Flag contributed by a match
        recurse: Re-parse the stripped interior against the whole catalog
        exclusive: Use ``element_type`` alone instead of OR-ing the ambient type
    """

    name: str
    match: Matcher
    strip: Delimiters
    element_type: ElementType
    recurse: bool = False
    exclusive: bool = False

    def __repr__(self) -> str:
        return f"PatternRule(name={self.name!r}, type={self.element_type!r})"


def _check_delimiter(name: str, char: str) -> None:
    if len(char) != 1 or char.isspace() or char == "\\":
        raise CatalogError(name, f"delimiter must be one non-space character, got {char!r}")


def delimited(
    name: str,
    char: str,
    element_type: ElementType,
    *,
    recurse: bool = True,
    exclusive: bool = False,
) -> PatternRule:
    """Build a triple-fence rule such as ``***text***``.

    The fences must not be backslash-escaped. The interior is matched
    lazily and may span lines.
    """
    _check_delimiter(name, char)
    fence = re.escape(char * 3)
    pattern = rf"{fence}((?:\\[\s\S]|[^\\])*?){fence}"
    matcher = regex_matcher(pattern, escapable=True)
    return PatternRule(name, matcher, TRIPLE, element_type, recurse, exclusive)


def word(
    name: str,
    char: str,
    element_type: ElementType,
    *,
    recurse: bool = True,
    exclusive: bool = False,
) -> PatternRule:
    """Build a word-scoped rule such as ``*word*``.

    The word may not contain whitespace and must contain at least one
    character other than the delimiter, so a bare fence never matches.
    Matching costs linear time per opening delimiter.
    """
    _check_delimiter(name, char)
    c = re.escape(char)
    # leading delimiters, then the first other character, then the rest
    pattern = rf"{c}({c}*(?:\\\S|[^\s\\{c}])(?:\\\S|[^\s\\])*){c}"
    matcher = regex_matcher(pattern, escapable=True)
    return PatternRule(name, matcher, SINGLE_BOTH, element_type, recurse, exclusive)


HASHTAG_RE = re.compile(r"#\w+")
MENTION_RE = re.compile(r"@\w+")
QUOTE_RE = re.compile(r"^>\|\s.*$", re.MULTILINE)
HYPERLINK_RE = re.compile(r"\[([^\[\]\n]+)\]\(([^()\s]+)\)")
SVG_RE = re.compile(r"<svg(?:\s[^>]*)?>(?:\\[\s\S]|[^\\])*?</svg>")


def split_hyperlink(text: str) -> tuple[str, str] | None:
    """Split a HyperLink span's text into ``(label, url)``.

    Example:
        >>> split_hyperlink("[docs](https://example.com)")
        ('docs', 'https://example.com')
        >>> split_hyperlink("plain") is None
        True
    """
    m = HYPERLINK_RE.fullmatch(text)
    if m is None:
        return None
    return m.group(1), m.group(2)


def default_rules() -> tuple[PatternRule, ...]:
    """Built-in rules in precedence order.

    Order only matters between rules that can match at the same offset:
    fences before word-scoped variants, word headers before hashtags.
    """
    return (
        delimited("code", "`", ElementType.CODE, recurse=False),
        delimited("bold", "*", ElementType.BOLD),
        delimited("italic", "/", ElementType.ITALIC),
        delimited("underline", "_", ElementType.UNDERLINE),
        delimited("header", "#", ElementType.HEADER),
        delimited("spoiler", "|", ElementType.SPOILER, exclusive=True),
        PatternRule("svg", _escapable(SVG_RE), NONE, ElementType.SVG, exclusive=True),
        PatternRule(
            "hyperlink", _escapable(HYPERLINK_RE), NONE, ElementType.HYPERLINK, exclusive=True
        ),
        PatternRule("quote", _escapable(QUOTE_RE), NONE, ElementType.QUOTE, exclusive=True),
        word("word_bold", "*", ElementType.BOLD),
        word("word_italic", "/", ElementType.ITALIC),
        word("word_underline", "_", ElementType.UNDERLINE),
        word("word_header", "#", ElementType.HEADER),
        word("word_spoiler", "|", ElementType.SPOILER, exclusive=True),
        PatternRule("hashtag", _escapable(HASHTAG_RE), LEADING, ElementType.HASHTAG, exclusive=True),
        PatternRule("mention", _escapable(MENTION_RE), LEADING, ElementType.MENTION, exclusive=True),
    )


def _escapable(compiled: re.Pattern[str]) -> Matcher:
    return regex_matcher(compiled, escapable=True)


__all__ = [
    "Delimiters",
    "LEADING",
    "Matcher",
    "NONE",
    "PatternRule",
    "SINGLE_BOTH",
    "TRIPLE",
    "default_rules",
    "delimited",
    "is_escaped",
    "regex_matcher",
    "split_hyperlink",
    "word",
]
