"""Quoting and escaping configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import TYPE_CHECKING

from quotesplit.errors import ConfigError, TokeniseError

if TYPE_CHECKING:
    from quotesplit.tokeniser import Tokeniser


class QuoteMode(Enum):
    IGNORE_ESCAPES = auto()  # content is literal, like '...' in POSIX shell
    PARSE_ESCAPES = auto()  # escape sequences are honoured, like "..."


QuotePairs = Mapping[str, tuple[str, QuoteMode]]
EscapePairs = Mapping[str, str]


@dataclass(frozen=True, slots=True)
class Config:
    """Which characters quote, which escape, and what escapes resolve to.

    quote_pairs maps an opening quote to its closing quote and mode.
    escape_pairs maps the character after the escape leader to its
    replacement; an empty map means every escaped character stands for
    itself. With no escape_leader, escaping is disabled everywhere.
    """

    quote_pairs: QuotePairs = field(default_factory=dict)
    escape_pairs: EscapePairs = field(default_factory=dict)
    escape_leader: str | None = None

    def __post_init__(self) -> None:
        quotes: dict[str, tuple[str, QuoteMode]] = {}
        for opener, pair in self.quote_pairs.items():
            _check_char(opener, "quote opener")
            try:
                closer, mode = pair
            except (TypeError, ValueError):
                raise ConfigError(
                    f"quote {opener!r} must map to a (closer, mode) pair, got {pair!r}"
                ) from None
            _check_char(closer, f"closer for quote {opener!r}")
            if not isinstance(mode, QuoteMode):
                raise ConfigError(f"invalid quote mode for {opener!r}: {mode!r}")
            quotes[opener] = (closer, mode)

        escapes: dict[str, str] = {}
        for key, value in self.escape_pairs.items():
            _check_char(key, "escape character")
            _check_char(value, f"replacement for escape {key!r}")
            escapes[key] = value

        if self.escape_leader is not None:
            _check_char(self.escape_leader, "escape leader")

        # Read-only copies of the caller's maps
        object.__setattr__(self, "quote_pairs", MappingProxyType(quotes))
        object.__setattr__(self, "escape_pairs", MappingProxyType(escapes))

    def __hash__(self) -> int:
        return hash(
            (
                frozenset(self.quote_pairs.items()),
                frozenset(self.escape_pairs.items()),
                self.escape_leader,
            )
        )

    def tokeniser(self) -> Tokeniser:
        """Return a fresh, empty Tokeniser using this configuration."""
        from quotesplit.tokeniser import Tokeniser

        return Tokeniser(self)

    def split(self, line: str) -> list[str]:
        """Trim *line*, tokenise it, and return the words.

        Raises the same TokeniseError subclasses as Tokeniser.finish(), with
        the whole trimmed line as their source.
        """
        text = line.strip()
        try:
            return self.tokeniser().add_str(text).finish()
        except TokeniseError as exc:
            exc.attach_source(text)
            raise


def _check_char(value: object, what: str) -> None:
    if not isinstance(value, str) or len(value) != 1:
        raise ConfigError(f"{what} must be a single character, got {value!r}")
