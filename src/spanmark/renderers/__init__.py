"""Renderers turning span sequences into presentation output.

Provides:
- protocol: SpanRenderer protocol and the WrapFunction type
- html: HtmlRenderer, the reference implementation
"""

from spanmark.renderers.html import HtmlRenderer, default_wrap
from spanmark.renderers.protocol import SpanRenderer, WrapFunction

__all__ = ["HtmlRenderer", "SpanRenderer", "WrapFunction", "default_wrap"]
