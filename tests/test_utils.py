"""Tests for spanmark.utils helpers."""

import logging

import pytest

from spanmark.utils import ESCAPABLE_CHARS, escape_html, get_logger, hash_str, resolve_escapes


class TestResolveEscapes:
    @pytest.mark.parametrize("char", sorted(ESCAPABLE_CHARS))
    def test_each_escapable_char(self, char: str) -> None:
        assert resolve_escapes("\\" + char) == char

    def test_non_delimiter_keeps_backslash(self) -> None:
        assert resolve_escapes(r"\n\d") == r"\n\d"

    def test_one_backslash_per_escape(self) -> None:
        assert resolve_escapes("\\\\*") == "\\*"

    def test_no_backslash_returns_same_object(self) -> None:
        text = "plain"
        assert resolve_escapes(text) is text


class TestEscapeHtml:
    def test_escapes_markup(self) -> None:
        assert escape_html("<b>\"x\" & 'y'</b>") == "&lt;b&gt;&quot;x&quot; &amp; 'y'&lt;/b&gt;"


class TestHashing:
    def test_known_digest(self) -> None:
        assert hash_str("hello", truncate=16) == "2cf24dba5fb0a30e"

    def test_full_length(self) -> None:
        assert len(hash_str("hello")) == 64


class TestLogger:
    def test_prefix_added(self) -> None:
        assert get_logger("mymodule").name == "spanmark.mymodule"

    def test_prefix_not_doubled(self) -> None:
        assert get_logger("spanmark.parser").name == "spanmark.parser"

    def test_returns_stdlib_logger(self) -> None:
        assert isinstance(get_logger("x"), logging.Logger)
