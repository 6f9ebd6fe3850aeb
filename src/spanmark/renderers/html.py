"""HTML renderer using StringBuilder pattern.

Renders spans to HTML, one node per span, inside a
``<div class="spanmark">`` container.

Each span's text is HTML-escaped, then folded through the wrap function
once per set type bit, lowest bit first, so ``BOLD | ITALIC`` renders as
``<i><b>text</b></i>``. SVG spans start from their raw text instead of the
escaped text: inline SVG is passed through as markup and is not sanitized.

Thread Safety:
HtmlRenderer holds only its wrap function. Each render() call uses its own
StringBuilder, so instances can be shared across threads.
"""

from collections.abc import Iterable

from spanmark.elements import ElementType, Span, iter_types
from spanmark.errors import RenderError
from spanmark.patterns import split_hyperlink
from spanmark.renderers.protocol import WrapFunction
from spanmark.stringbuilder import StringBuilder
from spanmark.utils.logger import get_logger
from spanmark.utils.text import escape_html

logger = get_logger(__name__)

CONTAINER_CLASS = "spanmark"

_TAGS: dict[ElementType, tuple[str, str | None]] = {
    ElementType.NORMAL: ("span", None),
    ElementType.BOLD: ("b", None),
    ElementType.ITALIC: ("i", None),
    ElementType.HEADER: ("h1", None),
    ElementType.UNDERLINE: ("u", None),
    ElementType.CODE: ("tt", None),
    ElementType.QUOTE: ("b", "quote"),
    ElementType.SPOILER: ("span", "spoiler"),
    ElementType.MENTION: ("b", "mention"),
    ElementType.HASHTAG: ("b", "hashtag"),
}


def _tag(name: str, fragment: str, class_name: str | None = None) -> str:
    if class_name:
        return f'<{name} class="{class_name}">{fragment}</{name}>'
    return f"<{name}>{fragment}</{name}>"


def _hyperlink(fragment: str) -> str:
    parts = split_hyperlink(fragment)
    if parts is None:
        logger.debug("Hyperlink fragment %r is not [label](url); rendering as text", fragment)
        return _tag("span", fragment, "hyperlink")
    label, url = parts
    if label == "image":
        return f'<img src="{url}" alt="{label}">'
    if label == "video":
        return f'<video controls src="{url}"></video>'
    return f'<a href="{url}">{label}</a>'


def default_wrap(fragment: str, element_type: ElementType) -> str:
    """Wrap an HTML fragment for one element type.

    Args:
        fragment: Escaped text or HTML built by earlier wraps
        element_type: A single-bit type, or NORMAL

    Returns:
        New HTML fragment
    """
    tag = _TAGS.get(element_type)
    if tag is not None:
        return _tag(tag[0], fragment, tag[1])
    if element_type == ElementType.HYPERLINK:
        return _hyperlink(fragment)
    if element_type == ElementType.IMAGE_LINK:
        return f'<img src="{fragment}">'
    if element_type == ElementType.VIDEO_LINK:
        return f'<video controls src="{fragment}"></video>'
    if element_type == ElementType.SVG:
        return fragment
    return _tag("span", fragment)


class HtmlRenderer:
    """Render spans to HTML using a pluggable wrap function.

    Usage:
        >>> from spanmark import parse
        >>> HtmlRenderer().render(parse("Hi ***there***"))
        '<div class="spanmark"><span>Hi </span><b>there</b></div>'

        >>> # Custom presentation for one type, defaults for the rest
        >>> def wrap(fragment, element_type):
        ...     if element_type == ElementType.MENTION:
        ...         return f'<a href="/u/{fragment}">@{fragment}</a>'
        ...     return default_wrap(fragment, element_type)
        >>> HtmlRenderer(wrap=wrap).render(parse("@ann"))
        '<div class="spanmark"><a href="/u/ann">@ann</a></div>'

    """

    __slots__ = ("_wrap", "_container")

    def __init__(self, wrap: WrapFunction | None = None, *, container: bool = True) -> None:
        """Initialize renderer.

        Args:
            wrap: Type-to-HTML function (default_wrap if None)
            container: Wrap the output in a ``<div class="spanmark">``
        """
        self._wrap = wrap or default_wrap
        self._container = container

    def render_span(self, span: Span) -> str:
        """Render a single span to one HTML node.

        Raises:
            RenderError: If the wrap function returns a non-string
        """
        if span.element_type & ElementType.SVG:
            fragment = span.text
        else:
            fragment = escape_html(span.text)
        for element_type in iter_types(span.element_type) or (ElementType.NORMAL,):
            fragment = self._wrap(fragment, element_type)
            if not isinstance(fragment, str):
                msg = (
                    f"Wrap function returned {type(fragment).__name__} "
                    f"for {element_type!r}; expected str"
                )
                raise RenderError(msg)
        return fragment

    def render(self, spans: Iterable[Span]) -> str:
        """Render spans to HTML.

        Args:
            spans: A Document or any iterable of spans

        Returns:
            HTML string
        """
        sb = StringBuilder()
        if self._container:
            sb.append(f'<div class="{CONTAINER_CLASS}">')
        for span in spans:
            sb.append(self.render_span(span))
        if self._container:
            sb.append("</div>")
        return sb.build()


__all__ = ["CONTAINER_CLASS", "HtmlRenderer", "default_wrap"]
