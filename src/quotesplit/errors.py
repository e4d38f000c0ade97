"""Error types with formatted source context."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """Input position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


class ConfigError(ValueError):
    """Raised when a tokeniser configuration is malformed."""


class TokeniseError(Exception):
    """Raised on the first tokenising error, with position and source context."""

    def __init__(
        self, message: str, position: Position, source: str, source_line: int = 1
    ) -> None:
        self.message = message
        self.position = position
        # Input text around the error; its first line is line *source_line*
        self.source = source
        self.source_line = source_line
        # Line of the enclosing file the tokenised text started on
        self.first_line = 1
        super().__init__(message)

    def __str__(self) -> str:
        return self.format()

    def attach_source(self, text: str) -> None:
        """Replace the partial source with the whole of the tokenised *text*."""
        self.source = text
        self.source_line = 1

    def format(self, filename: str = "<input>", first_line: int | None = None) -> str:
        """Render the error with the offending line and a caret under it.

        *first_line* is the line number the tokenised text started on in
        *filename*, for input that was split one line at a time. It defaults
        to the first_line attribute.
        """
        if first_line is None:
            first_line = self.first_line
        lines = self.source.splitlines(keepends=True)
        line_idx = self.position.line - self.source_line
        col = self.position.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        pad = " " * (col - 1)

        line_no = self.position.line + first_line - 1
        line_num = str(line_no)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{line_no}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}^"
        )


class UnterminatedQuote(TokeniseError):
    """Input ended inside a quote. The position is where the quote opened."""

    def __init__(self, quote: str, position: Position, source: str, source_line: int = 1) -> None:
        self.quote = quote
        super().__init__(f"unterminated quote {quote!r}", position, source, source_line)


class DanglingEscape(TokeniseError):
    """Input ended straight after the escape leader."""

    def __init__(self, position: Position, source: str, source_line: int = 1) -> None:
        super().__init__(
            "unexpected end of input after escape character", position, source, source_line
        )


class UnrecognizedEscape(TokeniseError):
    """The character after the escape leader has no registered replacement."""

    def __init__(self, char: str, position: Position, source: str, source_line: int = 1) -> None:
        self.char = char
        super().__init__(f"invalid escape sequence for {char!r}", position, source, source_line)
