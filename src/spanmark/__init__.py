"""
Spanmark — chat markup parsed into typed text spans.

A small markup dialect (bold, italic, underline, header, code, quote,
spoiler, hashtag, mention, hyperlink, inline SVG) parsed into a flat,
ordered list of ``Span(text, element_type)`` values. Styles nest and
combine as bit flags. Zero runtime dependencies.

Quick Start:
    >>> from spanmark import parse, render
    >>> doc = parse("Hello ***world***, @alice said #hi")
    >>> [(s.text, s.element_type.name) for s in doc]
    [('Hello ', 'NORMAL'), ('world', 'BOLD'), (', ', 'NORMAL'),
     ('alice', 'MENTION'), (' said ', 'NORMAL'), ('hi', 'HASHTAG')]
    >>> render(doc)
    '<div class="spanmark"><span>Hello </span><b>world</b>...</div>'

    >>> # Or use the high-level Markup class
    >>> from spanmark import Markup
    >>> md = Markup()
    >>> html = md("///hi/// there")

Custom Rules:
    >>> from spanmark import Markup, create_catalog_with_defaults, word
    >>> builder = create_catalog_with_defaults()
    >>> builder.remove("word_italic")
    >>> md = Markup(catalog=builder.build())

Syntax:
    ***bold***  ///italic///  ___underline___  ###header###  |||spoiler|||
    *bold*  /italic/  _underline_  #header#  |spoiler|   (single words)
    ```code```  >| quote line  #hashtag  @mention  [label](url)  <svg>...</svg>
    A backslash before a delimiter keeps it literal: \\*not bold\\*
"""

from collections.abc import Iterable

from spanmark.cache import DictParseCache, ParseCache, hash_config, hash_content
from spanmark.catalog import (
    CatalogBuilder,
    PatternCatalog,
    create_catalog_with_defaults,
    default_catalog,
)
from spanmark.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from spanmark.elements import Document, ElementType, Span, has_type, iter_types
from spanmark.errors import CatalogError, DelimiterError, RenderError, SpanmarkError
from spanmark.parser import MarkupParser
from spanmark.patterns import (
    Delimiters,
    PatternRule,
    delimited,
    regex_matcher,
    split_hyperlink,
    word,
)
from spanmark.profiling import ParseAccumulator, get_parse_accumulator, profiled_parse
from spanmark.renderers.html import HtmlRenderer, default_wrap
from spanmark.renderers.protocol import SpanRenderer, WrapFunction
from spanmark.serialization import from_dict, from_json, to_dict, to_json

__version__ = "0.1.0"


def _parse_with_config(source: str, config: ParseConfig, cache: ParseCache | None) -> Document:
    """Parse under an already-active config, consulting the cache."""
    config_hash = hash_config(config) if cache is not None else ""
    use_cache = cache is not None and config_hash
    content_hash = hash_content(source) if use_cache else ""

    doc = cache.get(content_hash, config_hash) if use_cache else None
    if doc is None:
        spans = MarkupParser().parse(source)
        doc = Document(source=source, spans=tuple(spans))
        if use_cache:
            cache.put(content_hash, config_hash, doc)

    acc = get_parse_accumulator()
    if acc is not None:
        acc.record_parse(source_length=len(source), span_count=len(doc.spans))
    return doc


def parse(
    source: str,
    *,
    catalog: PatternCatalog | None = None,
    cache: ParseCache | None = None,
) -> Document:
    """Parse markup into a Document of spans.

    Args:
        source: Markup text
        catalog: Custom rule catalog (uses the active config's, then defaults)
        cache: Optional content-addressed parse cache. For parallel parsing,
            use a thread-safe cache implementation.

    Returns:
        Document holding the spans in source order

    Example:
        >>> doc = parse("***bold /italic/ text***")
        >>> [s.text for s in doc]
        ['bold ', 'italic', ' text']
    """
    if catalog is None:
        return _parse_with_config(source, get_parse_config(), cache)

    base = get_parse_config()
    config = ParseConfig(
        catalog=catalog,
        max_depth=base.max_depth,
        text_transformer=base.text_transformer,
    )
    with parse_config_context(config):
        return _parse_with_config(source, config, cache)


def render(spans: Iterable[Span], *, wrap: WrapFunction | None = None) -> str:
    """Render a Document (or any span iterable) to HTML.

    Args:
        spans: Parsed spans
        wrap: Custom type-to-HTML function (default_wrap if None)

    Returns:
        HTML string

    Example:
        >>> render(parse("#hi"))
        '<div class="spanmark"><b class="hashtag">hi</b></div>'
    """
    return HtmlRenderer(wrap=wrap).render(spans)


class Markup:
    """High-level processor combining parser and renderer.

    Usage:
        >>> md = Markup()
        >>> md("***Hello*** @world")
        '<div class="spanmark"><b>Hello</b><span> </span><b class="mention">world</b></div>'

        >>> # Access the spans
        >>> doc = md.parse("#tag")
        >>> doc[0].element_type
        <ElementType.HASHTAG: 512>

    Thread Safety:
        Uses ContextVar for thread-local configuration. Safe to use multiple
        Markup instances concurrently from different threads.

    """

    __slots__ = ("_config", "_renderer")

    def __init__(
        self,
        *,
        catalog: PatternCatalog | None = None,
        max_depth: int | None = None,
        wrap: WrapFunction | None = None,
    ) -> None:
        """Initialize processor.

        Args:
            catalog: Rule catalog (built-in defaults if None)
            max_depth: Maximum nesting depth (library default if None)
            wrap: Custom type-to-HTML function for rendering
        """
        if max_depth is None:
            self._config = ParseConfig(catalog=catalog)
        else:
            self._config = ParseConfig(catalog=catalog, max_depth=max_depth)
        self._renderer = HtmlRenderer(wrap=wrap)

    @property
    def config(self) -> ParseConfig:
        """The immutable config used for every parse."""
        return self._config

    def __call__(self, source: str) -> str:
        """Parse and render in one call."""
        return self._renderer.render(self.parse(source))

    def parse(self, source: str, *, cache: ParseCache | None = None) -> Document:
        """Parse markup into a Document.

        Thread Safety:
            Sets config via ContextVar (thread-local). Safe for concurrent use.

        """
        with parse_config_context(self._config):
            return _parse_with_config(source, self._config, cache)

    def parse_many(
        self,
        sources: Iterable[str],
        *,
        cache: ParseCache | None = None,
    ) -> list[Document]:
        """Parse multiple sources under one config activation.

        Duplicate sources within the batch hit the cache when one is given.

        Example:
            >>> md = Markup()
            >>> docs = md.parse_many(["@a", "@b", "@a"])
        """
        with parse_config_context(self._config):
            return [_parse_with_config(source, self._config, cache) for source in sources]


__all__ = [
    "CatalogBuilder",
    "CatalogError",
    "DelimiterError",
    "Delimiters",
    "DictParseCache",
    "Document",
    "ElementType",
    "HtmlRenderer",
    "Markup",
    "MarkupParser",
    "ParseAccumulator",
    "ParseCache",
    "ParseConfig",
    "PatternCatalog",
    "PatternRule",
    "RenderError",
    "Span",
    "SpanRenderer",
    "SpanmarkError",
    "WrapFunction",
    "__version__",
    "create_catalog_with_defaults",
    "default_catalog",
    "default_wrap",
    "delimited",
    "from_dict",
    "from_json",
    "get_parse_accumulator",
    "get_parse_config",
    "has_type",
    "hash_config",
    "hash_content",
    "iter_types",
    "parse",
    "parse_config_context",
    "profiled_parse",
    "regex_matcher",
    "render",
    "reset_parse_config",
    "set_parse_config",
    "split_hyperlink",
    "to_dict",
    "to_json",
]
