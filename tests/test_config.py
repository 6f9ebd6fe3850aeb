"""Tests for ContextVar-based parse configuration.

Validates thread isolation, context manager behavior, and that the parser
picks its settings up from the active config.
"""

from threading import Thread

import pytest

from spanmark import (
    ElementType,
    MarkupParser,
    ParseConfig,
    Span,
    create_catalog_with_defaults,
    get_parse_config,
    parse,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from spanmark.config import DEFAULT_MAX_DEPTH


class TestParseConfigDataclass:
    def test_default_values(self) -> None:
        config = ParseConfig()
        assert config.catalog is None
        assert config.max_depth == DEFAULT_MAX_DEPTH
        assert config.text_transformer is None

    def test_immutability(self) -> None:
        config = ParseConfig()
        with pytest.raises(AttributeError):
            config.max_depth = 3  # type: ignore[misc]

    def test_rejects_non_positive_depth(self) -> None:
        with pytest.raises(ValueError, match="max_depth"):
            ParseConfig(max_depth=0)

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = ParseConfig.from_dict({"max_depth": 5, "unknown_key": "ignored"})
        assert config.max_depth == 5
        assert config.catalog is None


class TestContextVarFunctions:
    def teardown_method(self) -> None:
        reset_parse_config()

    def test_default_config(self) -> None:
        assert get_parse_config().max_depth == DEFAULT_MAX_DEPTH

    def test_set_and_get(self) -> None:
        set_parse_config(ParseConfig(max_depth=7))
        assert get_parse_config().max_depth == 7

    def test_reset_restores_default(self) -> None:
        set_parse_config(ParseConfig(max_depth=7))
        reset_parse_config()
        assert get_parse_config().max_depth == DEFAULT_MAX_DEPTH


class TestParseConfigContext:
    def test_context_sets_config(self) -> None:
        with parse_config_context(ParseConfig(max_depth=3)):
            assert get_parse_config().max_depth == 3
        assert get_parse_config().max_depth == DEFAULT_MAX_DEPTH

    def test_nested_contexts(self) -> None:
        with parse_config_context(ParseConfig(max_depth=3)):
            with parse_config_context(ParseConfig(max_depth=4)):
                assert get_parse_config().max_depth == 4
            assert get_parse_config().max_depth == 3

    def test_context_restores_on_exception(self) -> None:
        with pytest.raises(RuntimeError):
            with parse_config_context(ParseConfig(max_depth=3)):
                raise RuntimeError("boom")
        assert get_parse_config().max_depth == DEFAULT_MAX_DEPTH


class TestParserReadsConfig:
    def test_parser_uses_config_catalog(self) -> None:
        catalog = create_catalog_with_defaults().remove("mention").build()
        with parse_config_context(ParseConfig(catalog=catalog)):
            parser = MarkupParser()
        assert parser.catalog is catalog
        assert parser.parse("@bob") == [Span("@bob")]

    def test_parser_uses_config_depth(self) -> None:
        with parse_config_context(ParseConfig(max_depth=2)):
            assert MarkupParser().max_depth == 2

    def test_explicit_arguments_win(self) -> None:
        with parse_config_context(ParseConfig(max_depth=2)):
            assert MarkupParser(max_depth=9).max_depth == 9

    def test_text_transformer_applied(self) -> None:
        config = ParseConfig(text_transformer=str.upper)
        with parse_config_context(config):
            doc = parse("***hi***")
        assert doc.spans == (Span("HI", ElementType.BOLD),)


class TestThreadIsolation:
    def test_threads_do_not_share_config(self) -> None:
        seen: dict[str, int] = {}

        def worker(name: str, depth: int) -> None:
            set_parse_config(ParseConfig(max_depth=depth))
            seen[name] = MarkupParser().max_depth

        threads = [Thread(target=worker, args=(f"t{i}", i + 1)) for i in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert seen == {"t0": 1, "t1": 2, "t2": 3, "t3": 4}
        assert get_parse_config().max_depth == DEFAULT_MAX_DEPTH
