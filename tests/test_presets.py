"""Test the stock configurations and the one-call split helpers."""

import pytest

import quotesplit
from quotesplit.config import QuoteMode
from quotesplit.errors import UnterminatedQuote
from quotesplit.escapes import C_ESCAPES
from quotesplit.presets import STYLES, c_style, shell_style, whitespace_split
from quotesplit.tokeniser import split


class TestWhitespacePreset:
    def test_values(self):
        config = whitespace_split()
        assert config.quote_pairs == {}
        assert config.escape_pairs == {}
        assert config.escape_leader is None


class TestShellPreset:
    def test_quote_pairs(self):
        assert shell_style().quote_pairs == {
            "'": ("'", QuoteMode.IGNORE_ESCAPES),
            '"': ('"', QuoteMode.PARSE_ESCAPES),
        }

    def test_literal_escaping(self):
        assert shell_style().escape_pairs == {}

    def test_leader(self):
        assert shell_style().escape_leader == "\\"


class TestCPreset:
    def test_quote_pairs(self):
        assert c_style().quote_pairs == {'"': ('"', QuoteMode.PARSE_ESCAPES)}

    def test_escape_pairs(self):
        assert c_style().escape_pairs == {
            "n": "\n",
            "r": "\r",
            "t": "\t",
            '"': '"',
            "'": "'",
            "\\": "\\",
        }
        assert c_style().escape_pairs == C_ESCAPES

    def test_leader(self):
        assert c_style().escape_leader == "\\"


class TestStyles:
    def test_names(self):
        assert sorted(STYLES) == ["c", "shell", "whitespace"]

    def test_factories_return_fresh_equal_configs(self):
        for factory in STYLES.values():
            assert factory() == factory()


class TestSplit:
    def test_defaults_to_shell(self):
        assert split('a "b c"') == ["a", "b c"]

    def test_explicit_config(self):
        assert split('"a\\tb"', c_style()) == ["a\tb"]

    def test_trims_line(self):
        assert split("   x y   \n") == ["x", "y"]

    def test_raises_like_finish(self):
        with pytest.raises(UnterminatedQuote):
            split("'open")

    def test_package_exports(self):
        assert quotesplit.split("a\\ b") == ["a b"]
        assert quotesplit.Config is type(quotesplit.shell_style())
        assert issubclass(quotesplit.UnterminatedQuote, quotesplit.TokeniseError)
