"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from quotesplit.presets import STYLES
from quotesplit.tokeniser import Tokeniser


@pytest.fixture
def split():
    """Return a helper that splits a line with a named preset."""

    def _split(line: str, style: str = "shell") -> list[str]:
        return STYLES[style]().split(line)

    return _split


@pytest.fixture
def feed():
    """Return a helper that feeds raw text (untrimmed) and returns a finished word list."""

    def _feed(text: str, style: str = "shell") -> list[str]:
        return Tokeniser(STYLES[style]()).add_str(text).finish()

    return _feed


def assert_words(actual: list[str], expected: list[str]) -> None:
    """Assert that the word list matches, with a readable diff."""
    assert actual == expected, f"Expected {expected!r}, got {actual!r}"
