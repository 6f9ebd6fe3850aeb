"""Error-path and malformed input tests.

Malformed markup must degrade to text; only rule-contract violations and
renderer misuse raise.
"""

import pytest

from spanmark import (
    CatalogError,
    DelimiterError,
    ElementType,
    PatternCatalog,
    PatternRule,
    RenderError,
    Span,
    SpanmarkError,
    parse,
    regex_matcher,
)
from spanmark.patterns import LEADING, Delimiters


class TestExceptionHierarchy:
    def test_all_derive_from_base(self) -> None:
        for exc in (CatalogError, DelimiterError, RenderError):
            assert issubclass(exc, SpanmarkError)

    def test_delimiter_error_message(self) -> None:
        err = DelimiterError("**", 3, 3)
        assert "3+3" in str(err)
        assert "'**'" in str(err)
        assert err.text == "**"

    def test_catalog_error_message(self) -> None:
        err = CatalogError("bold", "bad delimiter")
        assert str(err) == "Rule 'bold': bad delimiter"
        assert err.rule_name == "bold"


class TestMalformedMarkup:
    @pytest.mark.parametrize(
        "text",
        [
            "***",
            "******* x",
            "///open only",
            "|||",
            "[label](",
            "[](url)",
            "<svg>never closed",
            "@",
            "#",
            ">|",
            "\\",
        ],
    )
    def test_never_raises(self, text: str) -> None:
        doc = parse(text)
        assert all(span.text for span in doc)

    def test_lone_symbols_stay_text(self) -> None:
        assert parse("@ # >|").spans == (Span("@ # >|"),)

    def test_trailing_backslash_kept(self) -> None:
        assert parse("end\\").spans == (Span("end\\"),)


class TestRuleContract:
    def test_matcher_reporting_short_range(self) -> None:
        # "@" alone is one character; LEADING needs at least one
        rule = PatternRule("at", regex_matcher("@"), LEADING, ElementType.MENTION)
        doc = parse("a@b", catalog=PatternCatalog((rule,)))
        assert doc.spans == (Span("a"), Span("b"))

    def test_violation_is_fatal_to_call(self) -> None:
        rule = PatternRule("bad", regex_matcher("@"), Delimiters(2, 0), ElementType.MENTION)
        with pytest.raises(DelimiterError):
            parse("a@b", catalog=PatternCatalog((rule,)))
        # Subsequent calls are unaffected
        assert parse("@ok").spans == (Span("ok", ElementType.MENTION),)
