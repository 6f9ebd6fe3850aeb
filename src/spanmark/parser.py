"""Recursive markup parser producing a flat list of typed spans.

Algorithm, for one piece of text under an ambient type:

1. Run every rule's matcher over the text and collect ``(range, rule)``
   candidates. Nested text is searched in place within the whole source,
   so ``^`` and escape checks see the real preceding characters.
2. Sort by start offset; ties go to the rule declared first.
3. Walk the candidates with a cursor. A candidate starting before the
   cursor overlaps consumed text and is dropped. Text between the cursor
   and an accepted match is re-parsed under the same ambient type. The
   match itself is stripped, typed, and either re-parsed (recursive rules)
   or emitted as one leaf span (terminal rules).
4. Whatever follows the last match is emitted with escapes resolved.

Unterminated or malformed markup simply fails to match and stays text.

Thread Safety:
MarkupParser holds only its catalog and limits. All per-call state lives
on the stack of ``parse()``, so one instance can serve many threads.

"""

from __future__ import annotations

from operator import itemgetter
from typing import TYPE_CHECKING

from spanmark.catalog import default_catalog
from spanmark.config import get_parse_config
from spanmark.elements import ElementType, Span
from spanmark.utils.logger import get_logger
from spanmark.utils.text import resolve_escapes

if TYPE_CHECKING:
    from collections.abc import Callable

    from spanmark.catalog import PatternCatalog
    from spanmark.patterns import PatternRule

logger = get_logger(__name__)

_Candidate = tuple[int, int, int, "PatternRule"]
_by_position = itemgetter(0, 1)


class MarkupParser:
    """Turn markup text into spans using a pattern catalog.

    Usage:
        >>> parser = MarkupParser()
        >>> parser.parse("Hello ***world***")
        [Span(text='Hello ', element_type=<ElementType.NORMAL: 0>, ...),
         Span(text='world', element_type=<ElementType.BOLD: 1>, ...)]

    Settings not passed explicitly are taken from the active ParseConfig.
    """

    __slots__ = ("_catalog", "_max_depth", "_text_transformer")

    def __init__(
        self,
        catalog: PatternCatalog | None = None,
        *,
        max_depth: int | None = None,
    ) -> None:
        """Initialize parser.

        Args:
            catalog: Rules to match (config catalog, then built-in defaults)
            max_depth: Recursion limit (config value if None)
        """
        config = get_parse_config()
        if catalog is None:
            catalog = config.catalog if config.catalog is not None else default_catalog()
        if max_depth is None:
            max_depth = config.max_depth
        elif max_depth < 1:
            msg = f"max_depth must be at least 1, got {max_depth}"
            raise ValueError(msg)
        self._catalog = catalog
        self._max_depth = max_depth
        self._text_transformer: Callable[[str], str] | None = config.text_transformer

    @property
    def catalog(self) -> PatternCatalog:
        """The catalog this parser matches against."""
        return self._catalog

    @property
    def max_depth(self) -> int:
        """Maximum recursion depth."""
        return self._max_depth

    def parse(self, text: str, ambient: ElementType = ElementType.NORMAL) -> list[Span]:
        """Parse text into spans.

        Args:
            text: Markup source
            ambient: Type every span starts from (NORMAL for top-level text)

        Returns:
            Spans in source order. Empty input yields an empty list.

        Escapes are resolved only in plain text. Code and other terminal
        spans keep their backslashes, and so does a branch nested deeper
        than ``max_depth``, which is emitted as its raw source text.

        Raises:
            DelimiterError: If a rule's matcher reports a range its strip
                rule cannot handle
        """
        if self._text_transformer is not None:
            text = self._text_transformer(text)
        spans: list[Span] = []
        if text:
            self._parse(text, 0, len(text), ElementType(ambient), 0, spans)
        return spans

    def _parse(
        self,
        source: str,
        pos: int,
        endpos: int,
        ambient: ElementType,
        depth: int,
        out: list[Span],
    ) -> None:
        if depth > self._max_depth:
            logger.warning(
                "Nesting deeper than %d at offset %d; emitting %d characters unparsed",
                self._max_depth,
                pos,
                endpos - pos,
            )
            out.append(Span(source[pos:endpos], ambient, pos, endpos))
            return

        rules = self._catalog.rules
        if not rules:
            out.append(Span(source[pos:endpos], ambient, pos, endpos))
            return

        candidates: list[_Candidate] = []
        for order, rule in enumerate(rules):
            for start, end in rule.match(source, pos, endpos):
                candidates.append((start, order, end, rule))
        candidates.sort(key=_by_position)

        current = pos
        for start, _order, end, rule in candidates:
            if start < current:
                continue

            if start > current:
                self._parse(source, current, start, ambient, depth + 1, out)

            element_type = rule.element_type if rule.exclusive else ambient | rule.element_type
            inner = rule.strip(source[start:end])
            if inner:
                if rule.recurse:
                    inner_start = start + rule.strip.lead
                    inner_end = inner_start + len(inner)
                    self._parse(source, inner_start, inner_end, element_type, depth + 1, out)
                else:
                    out.append(Span(inner, element_type, start, end))

            current = end

        if current < endpos:
            out.append(Span(resolve_escapes(source[current:endpos]), ambient, current, endpos))


__all__ = ["MarkupParser"]
