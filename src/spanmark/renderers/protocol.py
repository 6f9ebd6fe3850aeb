"""SpanRenderer protocol — the narrow interface between parser and host.

A renderer receives the parser's spans and produces presentation output.
Hosts customise output through a WrapFunction: given the fragment built so
far and one single-bit ElementType, it returns the new fragment. The
renderer calls it once per set bit of a span's type, lowest bit first.

Example:
    from spanmark.renderers.protocol import SpanRenderer

    def render_message(renderer: SpanRenderer, text: str) -> str:
        return renderer.render(parse(text))

"""

from collections.abc import Callable, Iterable
from typing import Protocol

from spanmark.elements import ElementType, Span

WrapFunction = Callable[[str, ElementType], str]


class SpanRenderer(Protocol):
    """Protocol for span renderers.

    The built-in ``HtmlRenderer`` conforms to this protocol.

    """

    def render(self, spans: Iterable[Span]) -> str:
        """Render spans (a Document or any iterable of Span) to a string."""
        ...
