"""Escape schemes: how the character after an escape leader is resolved."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

# Backslash sequences understood by the C-style preset.
C_ESCAPES: Mapping[str, str] = MappingProxyType(
    {
        "n": "\n",
        "r": "\r",
        "t": "\t",
        '"': '"',
        "'": "'",
        "\\": "\\",
    }
)


def resolve_escape(escape_pairs: Mapping[str, str], ch: str) -> str | None:
    """Return the literal character that the escape sequence for *ch* stands for.

    An empty *escape_pairs* selects literal escaping: every character stands
    for itself, as with a backslash in POSIX shell. Otherwise only the keys
    of *escape_pairs* are valid, and None is returned for anything else.
    """
    if not escape_pairs:
        return ch
    return escape_pairs.get(ch)
