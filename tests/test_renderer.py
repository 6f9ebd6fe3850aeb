"""Tests for HtmlRenderer and the wrap-function sink interface."""

import pytest

from spanmark import ElementType, HtmlRenderer, RenderError, Span, default_wrap, parse, render
from spanmark.renderers.html import CONTAINER_CLASS


def inner(html: str) -> str:
    prefix = f'<div class="{CONTAINER_CLASS}">'
    assert html.startswith(prefix)
    assert html.endswith("</div>")
    return html[len(prefix) : -len("</div>")]


class TestDefaultWrap:
    @pytest.mark.parametrize(
        ("element_type", "expected"),
        [
            (ElementType.NORMAL, "<span>x</span>"),
            (ElementType.BOLD, "<b>x</b>"),
            (ElementType.ITALIC, "<i>x</i>"),
            (ElementType.HEADER, "<h1>x</h1>"),
            (ElementType.UNDERLINE, "<u>x</u>"),
            (ElementType.CODE, "<tt>x</tt>"),
            (ElementType.QUOTE, '<b class="quote">x</b>'),
            (ElementType.SPOILER, '<span class="spoiler">x</span>'),
            (ElementType.MENTION, '<b class="mention">x</b>'),
            (ElementType.HASHTAG, '<b class="hashtag">x</b>'),
            (ElementType.IMAGE_LINK, '<img src="x">'),
            (ElementType.SVG, "x"),
        ],
    )
    def test_mapping(self, element_type: ElementType, expected: str) -> None:
        assert default_wrap("x", element_type) == expected

    def test_hyperlink_anchor(self) -> None:
        assert default_wrap("[docs](/d)", ElementType.HYPERLINK) == '<a href="/d">docs</a>'

    def test_hyperlink_image_and_video(self) -> None:
        assert default_wrap("[image](/a.png)", ElementType.HYPERLINK).startswith("<img ")
        assert default_wrap("[video](/a.mp4)", ElementType.HYPERLINK).startswith("<video ")

    def test_malformed_hyperlink_falls_back(self) -> None:
        assert default_wrap("nope", ElementType.HYPERLINK) == '<span class="hyperlink">nope</span>'


class TestHtmlRenderer:
    def test_one_node_per_span(self) -> None:
        html = render(parse("Hello ***world***, @alice said #hi"))
        assert inner(html) == (
            "<span>Hello </span><b>world</b><span>, </span>"
            '<b class="mention">alice</b><span> said </span><b class="hashtag">hi</b>'
        )

    def test_combined_types_fold_lowest_first(self) -> None:
        span = Span("x", ElementType.BOLD | ElementType.ITALIC)
        assert HtmlRenderer().render_span(span) == "<i><b>x</b></i>"

    def test_text_is_escaped(self) -> None:
        assert inner(render([Span('<a href="x">&')])) == (
            "<span>&lt;a href=&quot;x&quot;&gt;&amp;</span>"
        )

    def test_svg_passes_through(self) -> None:
        html = render(parse("<svg><circle r='1'/></svg>"))
        assert inner(html) == "<svg><circle r='1'/></svg>"

    def test_no_container(self) -> None:
        assert HtmlRenderer(container=False).render([Span("a")]) == "<span>a</span>"

    def test_empty_input(self) -> None:
        assert inner(render([])) == ""

    def test_custom_wrap_called_per_bit(self) -> None:
        calls: list[ElementType] = []

        def wrap(fragment: str, element_type: ElementType) -> str:
            calls.append(element_type)
            return f"[{element_type.name}:{fragment}]"

        span = Span("t", ElementType.HEADER | ElementType.BOLD)
        assert HtmlRenderer(wrap=wrap).render_span(span) == "[HEADER:[BOLD:t]]"
        assert calls == [ElementType.BOLD, ElementType.HEADER]

    def test_normal_span_wrapped_once(self) -> None:
        calls: list[ElementType] = []

        def wrap(fragment: str, element_type: ElementType) -> str:
            calls.append(element_type)
            return fragment

        HtmlRenderer(wrap=wrap).render([Span("t")])
        assert calls == [ElementType.NORMAL]

    def test_wrap_must_return_str(self) -> None:
        renderer = HtmlRenderer(wrap=lambda fragment, element_type: None)  # type: ignore[arg-type,return-value]
        with pytest.raises(RenderError, match="expected str"):
            renderer.render([Span("t")])
