"""Tests for spanmark.profiling — parse profiling API."""

from spanmark import Markup, parse
from spanmark.profiling import (
    ParseAccumulator,
    get_parse_accumulator,
    profiled_parse,
)


class TestGetParseAccumulator:
    def test_returns_none_when_disabled(self) -> None:
        assert get_parse_accumulator() is None

    def test_returns_none_outside_context(self) -> None:
        with profiled_parse():
            pass
        assert get_parse_accumulator() is None


class TestProfiledParse:
    def test_yields_accumulator(self) -> None:
        with profiled_parse() as acc:
            assert isinstance(acc, ParseAccumulator)
            assert get_parse_accumulator() is acc

    def test_records_parse_call(self) -> None:
        with profiled_parse() as acc:
            parse("Hello ***world***")
        assert acc.parse_calls == 1
        assert acc.source_length == len("Hello ***world***")
        assert acc.span_count == 2

    def test_records_markup_calls(self) -> None:
        with profiled_parse() as acc:
            Markup().parse_many(["@a", "@b"])
        assert acc.parse_calls == 2
        assert acc.span_count == 2


class TestParseAccumulator:
    def test_summary_keys(self) -> None:
        acc = ParseAccumulator()
        acc.record_parse(source_length=10, span_count=3)
        summary = acc.summary()
        assert summary["parse_calls"] == 1
        assert summary["source_length"] == 10
        assert summary["span_count"] == 3
        assert summary["total_ms"] >= 0
