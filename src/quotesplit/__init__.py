"""Split lines into words with shell- or C-like quoting and escapes."""

from __future__ import annotations

from quotesplit.config import Config, QuoteMode
from quotesplit.errors import (
    ConfigError,
    DanglingEscape,
    Position,
    TokeniseError,
    UnrecognizedEscape,
    UnterminatedQuote,
)
from quotesplit.escapes import C_ESCAPES
from quotesplit.presets import STYLES, c_style, shell_style, whitespace_split
from quotesplit.tokeniser import Tokeniser, split

__version__ = "0.1.0"

__all__ = [
    "C_ESCAPES",
    "STYLES",
    "Config",
    "ConfigError",
    "DanglingEscape",
    "Position",
    "QuoteMode",
    "TokeniseError",
    "Tokeniser",
    "UnrecognizedEscape",
    "UnterminatedQuote",
    "c_style",
    "shell_style",
    "split",
    "whitespace_split",
]
