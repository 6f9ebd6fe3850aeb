"""Element types and spans produced by the Spanmark parser.

ElementType is a bit-flag enumeration. A span can carry several styles at
once (``BOLD | ITALIC``); ``NORMAL`` is the empty set.

Spans are frozen dataclasses with slots:
- Immutability: safe to hand to renderers and share across threads
- Equality on ``(text, element_type)`` only; source offsets are diagnostic

Thread Safety:
All types here are immutable.

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import IntFlag


class ElementType(IntFlag):
    """Style flags for a parsed span.

    Values are fixed powers of two and form part of the serialized wire
    format, so they must never be renumbered.
    """

    NORMAL = 0
    BOLD = 1
    ITALIC = 2
    HEADER = 4
    UNDERLINE = 8
    CODE = 16
    QUOTE = 32
    SPOILER = 64
    HYPERLINK = 128
    MENTION = 256
    HASHTAG = 512
    IMAGE_LINK = 1024
    VIDEO_LINK = 2048
    SVG = 4096


MAX_ELEMENT_TYPE = ElementType.SVG


def has_type(value: int, check: int) -> bool:
    """Return True if every bit of ``check`` is set in ``value``.

    Example:
        >>> has_type(ElementType.BOLD | ElementType.ITALIC, ElementType.ITALIC)
        True
    """
    return (value & check) == check


def iter_types(value: int) -> tuple[ElementType, ...]:
    """Split a combined type into its single-bit members, lowest bit first.

    Example:
        >>> iter_types(ElementType.HEADER | ElementType.BOLD)
        (<ElementType.BOLD: 1>, <ElementType.HEADER: 4>)
        >>> iter_types(ElementType.NORMAL)
        ()
    """
    types: list[ElementType] = []
    check = 1
    while check <= MAX_ELEMENT_TYPE:
        if value & check:
            types.append(ElementType(check))
        check <<= 1
    return tuple(types)


@dataclass(frozen=True, slots=True)
class Span:
    """One typed fragment of parsed text.

    Attributes:
        text: Content with markup delimiters removed.
        element_type: Combined style flags.
        start: Offset of the first source character this span came from.
        end: Offset one past the last source character.

    ``start``/``end`` index the top-level input string. For a terminal match
    they cover the whole match, delimiters included; for text re-parsed
    inside a match they cover only the interior.
    """

    text: str
    element_type: ElementType = ElementType.NORMAL
    start: int = field(default=0, compare=False)
    end: int = field(default=0, compare=False)

    def has(self, check: ElementType) -> bool:
        """Return True if this span carries every flag in ``check``."""
        return has_type(self.element_type, check)

    @property
    def types(self) -> tuple[ElementType, ...]:
        """Single-bit types of this span, lowest first."""
        return iter_types(self.element_type)


@dataclass(frozen=True, slots=True)
class Document:
    """Ordered spans parsed from one source string."""

    source: str
    spans: tuple[Span, ...] = ()

    def __iter__(self) -> Iterator[Span]:
        return iter(self.spans)

    def __len__(self) -> int:
        return len(self.spans)

    def __getitem__(self, index: int) -> Span:
        return self.spans[index]

    @property
    def text(self) -> str:
        """Concatenated span text (delimiters removed)."""
        return "".join(span.text for span in self.spans)


__all__ = [
    "Document",
    "ElementType",
    "MAX_ELEMENT_TYPE",
    "Span",
    "has_type",
    "iter_types",
]
