"""Stock configurations for common splitting styles."""

from __future__ import annotations

from collections.abc import Callable

from quotesplit.config import Config, QuoteMode
from quotesplit.escapes import C_ESCAPES


def whitespace_split() -> Config:
    """Split on whitespace only; quotes and backslashes are ordinary characters.

    Equivalent to str.split() with no arguments.
    """
    return Config()


def shell_style() -> Config:
    """POSIX shell-like quoting.

    '...' is literal, "..." honours escapes, and a backslash makes the next
    character stand for itself, inside double quotes or out.
    """
    return Config(
        quote_pairs={
            "'": ("'", QuoteMode.IGNORE_ESCAPES),
            '"': ('"', QuoteMode.PARSE_ESCAPES),
        },
        escape_leader="\\",
    )


def c_style() -> Config:
    """C-like quoting: "..." with \\n, \\r, \\t, \\", \\' and \\\\ escapes."""
    return Config(
        quote_pairs={'"': ('"', QuoteMode.PARSE_ESCAPES)},
        escape_pairs=C_ESCAPES,
        escape_leader="\\",
    )


STYLES: dict[str, Callable[[], Config]] = {
    "whitespace": whitespace_split,
    "shell": shell_style,
    "c": c_style,
}
