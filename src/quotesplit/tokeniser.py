"""Tokeniser state machine: splits characters into words, honouring quotes and escapes."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from quotesplit.config import Config, QuoteMode
from quotesplit.errors import (
    DanglingEscape,
    Position,
    TokeniseError,
    UnrecognizedEscape,
    UnterminatedQuote,
)
from quotesplit.escapes import resolve_escape
from quotesplit.presets import shell_style

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Normal:
    """Outside any quote."""


@dataclass(frozen=True, slots=True)
class InQuote:
    """Inside a quote opened by *opener* at *start*, waiting for *close*."""

    close: str
    mode: QuoteMode
    opener: str
    start: Position


@dataclass(frozen=True, slots=True)
class EscapePending:
    """An escape leader at *start* was read; the next character is escaped."""

    resume: Normal | InQuote
    start: Position


State = Normal | InQuote | EscapePending

_NORMAL = Normal()


class Tokeniser:
    """Feed characters in, take words out.

    The add_* methods update the tokeniser in place and return it, so calls
    chain::

        words = Tokeniser(config).add_str("a 'b c'").add_char("d").finish()

    finish() may be called once. A tokeniser that has finished, or raised
    an error while consuming, cannot be fed again.
    """

    def __init__(self, config: Config) -> None:
        self._config = config
        self._words: list[str] = []
        self._buffer: list[str] = []
        self._word_started = False
        self._state: State = _NORMAL
        self._closed = False
        # Input an error could still point into, which starts on line
        # _source_line, and the position of the next character
        self._source: list[str] = []
        self._source_line = 1
        self._line = 1
        self._col = 1
        self._offset = 0

    @property
    def config(self) -> Config:
        return self._config

    @property
    def state(self) -> State:
        return self._state

    def __repr__(self) -> str:
        return (
            f"Tokeniser(words={self._words!r}, buffer={''.join(self._buffer)!r}, "
            f"state={self._state!r})"
        )

    # ------------------------------------------------------------------
    # Feeding
    # ------------------------------------------------------------------

    def add_char(self, ch: str) -> Tokeniser:
        """Consume a single character."""
        if self._closed:
            raise RuntimeError("tokeniser has already finished")
        if len(ch) != 1:
            raise ValueError(f"expected a single character, got {ch!r}")

        pos = self._advance(ch)
        state = self._state

        if isinstance(state, EscapePending):
            self._resolve_escape(ch, state)
        elif isinstance(state, InQuote):
            self._quoted_char(ch, state, pos)
        else:
            self._normal_char(ch, pos)
        return self

    def add_iter(self, chars: Iterable[str]) -> Tokeniser:
        """Consume every character yielded by *chars*."""
        for ch in chars:
            self.add_char(ch)
        return self

    def add_str(self, text: str) -> Tokeniser:
        """Consume the characters of *text*."""
        return self.add_iter(text)

    def add_line(self, line: str) -> Tokeniser:
        """Consume *line* with leading and trailing whitespace trimmed."""
        return self.add_iter(line.strip())

    # ------------------------------------------------------------------
    # Finishing
    # ------------------------------------------------------------------

    def finish(self) -> list[str]:
        """Return the words read so far, ending the current one.

        Raises UnterminatedQuote if a quote is still open, and DanglingEscape
        if the input ended on an escape leader.
        """
        if self._closed:
            raise RuntimeError("tokeniser has already finished")
        self._closed = True

        state = self._state
        if isinstance(state, InQuote):
            raise self._error(
                UnterminatedQuote(state.opener, state.start, self._text(), self._source_line)
            )
        if isinstance(state, EscapePending):
            raise self._error(DanglingEscape(state.start, self._text(), self._source_line))

        if self._word_started:
            self._flush()
        return list(self._words)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _normal_char(self, ch: str, pos: Position) -> None:
        config = self._config

        if ch.isspace():
            # Runs of whitespace collapse; leading whitespace yields nothing
            if self._word_started:
                self._flush()
            return

        quote = config.quote_pairs.get(ch)
        if quote is not None:
            close, mode = quote
            self._state = InQuote(close, mode, ch, pos)
            # An immediately closed quote still produces a (possibly empty) word
            self._word_started = True
            return

        if config.escape_leader is not None and ch == config.escape_leader:
            self._state = EscapePending(_NORMAL, pos)
            return

        self._emit(ch)

    def _quoted_char(self, ch: str, state: InQuote, pos: Position) -> None:
        if ch == state.close:
            # The word carries on until unquoted whitespace: "ab"cd is one word
            self._state = _NORMAL
            return

        leader = self._config.escape_leader
        if state.mode is QuoteMode.PARSE_ESCAPES and leader is not None and ch == leader:
            self._state = EscapePending(state, pos)
            return

        # Other openers are literal here; quotes do not nest
        self._emit(ch)

    def _resolve_escape(self, ch: str, state: EscapePending) -> None:
        resolved = resolve_escape(self._config.escape_pairs, ch)
        if resolved is None:
            self._closed = True
            raise self._error(
                UnrecognizedEscape(ch, state.start, self._text(), self._source_line)
            )
        self._emit(resolved)
        self._state = state.resume

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _emit(self, ch: str) -> None:
        self._buffer.append(ch)
        self._word_started = True

    def _flush(self) -> None:
        word = "".join(self._buffer)
        logger.debug("word %d: %r", len(self._words), word)
        self._words.append(word)
        self._buffer.clear()
        self._word_started = False

    def _advance(self, ch: str) -> Position:
        """Record *ch* as consumed and return the position it was read at."""
        pos = Position(self._line, self._col, self._offset)
        self._source.append(ch)
        self._offset += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
            if isinstance(self._state, Normal):
                # A newline outside quotes ends every word an error could name
                self._source.clear()
                self._source_line = self._line
        else:
            self._col += 1
        return pos

    def _text(self) -> str:
        return "".join(self._source)

    def _error(self, exc: TokeniseError) -> TokeniseError:
        pos = exc.position
        logger.debug("tokenise error at %d:%d: %s", pos.line, pos.column, exc.message)
        return exc


def split(line: str, config: Config | None = None) -> list[str]:
    """Convenience function: trim and tokenise *line*, shell style by default."""
    if config is None:
        config = shell_style()
    return config.split(line)
