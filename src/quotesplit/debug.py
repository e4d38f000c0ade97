"""--debug word dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO


def dump_tokens(words: list[str], *, line: int | None = None, file: TextIO = sys.stderr) -> None:
    """Print one word per row, with its index and length, to *file*."""
    header = "Words" if line is None else f"Words (line {line})"
    file.write(f"{header}\n")
    if not words:
        file.write("  (none)\n")
    for i, word in enumerate(words):
        file.write(f"  [{i}] {word!r} len={len(word)}\n")
