"""Command-line interface for quotesplit."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import tomllib
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from quotesplit.config import Config, QuoteMode
from quotesplit.errors import ConfigError, TokeniseError, UnterminatedQuote
from quotesplit.presets import STYLES

logger = logging.getLogger(__name__)

_QUOTE_MODES = {
    "ignore": QuoteMode.IGNORE_ESCAPES,
    "parse": QuoteMode.PARSE_ESCAPES,
}


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None
    config: Config
    output_format: str
    join: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="quotesplit",
        description="Split lines into words, honouring quotes and escapes",
    )
    p.add_argument("input", nargs="?", help="Input file (default: stdin)")
    p.add_argument(
        "-s",
        "--style",
        choices=sorted(STYLES),
        default=None,
        help="Quoting style (default: shell)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover quotesplit.toml)",
    )
    fmt = p.add_mutually_exclusive_group()
    fmt.add_argument(
        "--json",
        dest="output_format",
        action="store_const",
        const="json",
        help="Print one JSON array per input line",
    )
    fmt.add_argument(
        "-0",
        "--null",
        dest="output_format",
        action="store_const",
        const="null",
        help="Terminate each word with NUL instead of newline",
    )
    p.add_argument(
        "-j",
        "--join",
        action="store_true",
        help="Continue an unterminated quote onto the next line",
    )
    p.add_argument("--debug", action="store_true", help="Log tokenising and dump words to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "quotesplit.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def build_config(settings: dict[str, Any], style: str | None = None) -> Config:
    """Build a Config from a style preset overlaid with config file settings.

    Precedence: style defaults < config file < *style* argument (CLI flag),
    where the CLI flag only chooses the preset.
    """
    name = style if style is not None else settings.get("style", "shell")
    if not isinstance(name, str) or name not in STYLES:
        raise ConfigError(f"unknown style {name!r} (expected one of {', '.join(sorted(STYLES))})")
    base = STYLES[name]()

    quote_pairs = dict(base.quote_pairs)
    cfg_quotes = settings.get("quotes")
    if cfg_quotes is not None:
        if not isinstance(cfg_quotes, dict):
            raise ConfigError("[quotes] must be a table")
        quote_pairs = {}
        for opener, spec in cfg_quotes.items():
            if not isinstance(spec, dict):
                raise ConfigError(f"quote {opener!r} must be a table with 'close' and 'mode'")
            mode_name = spec.get("mode", "ignore")
            if not isinstance(mode_name, str) or mode_name not in _QUOTE_MODES:
                raise ConfigError(f"invalid mode {mode_name!r} for quote {opener!r}")
            quote_pairs[opener] = (spec.get("close", opener), _QUOTE_MODES[mode_name])

    escape_pairs = dict(base.escape_pairs)
    cfg_escapes = settings.get("escapes")
    if cfg_escapes is not None:
        if not isinstance(cfg_escapes, dict):
            raise ConfigError("[escapes] must be a table")
        escape_pairs = dict(cfg_escapes)

    escape_leader = base.escape_leader
    if "escape_leader" in settings:
        # An empty string turns escaping off
        escape_leader = settings["escape_leader"] or None

    return Config(quote_pairs, escape_pairs, escape_leader)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input) if args.input and args.input != "-" else None
    input_dir = input_file.parent if input_file is not None else Path(".")
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    try:
        settings = load_config(config_path, input_dir)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid config file: {exc}") from exc

    return CliOptions(
        input_file=input_file,
        config=build_config(settings, args.style),
        output_format=args.output_format or "lines",
        join=args.join,
        debug=args.debug,
    )


def split_lines(
    lines: Iterable[str], config: Config, join: bool = False
) -> Iterator[tuple[int, list[str]]]:
    """Tokenise each line, yielding (line number, words) for non-blank lines.

    With *join*, a line left inside an open quote is continued with the next
    line, joined by a newline. Errors carry positions relative to the first
    of the joined lines, which is the line number reported with them.
    """
    pending: str | None = None
    start = 0
    for lineno, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if pending is not None:
            line = pending + "\n" + line
        else:
            start = lineno
        try:
            words = _split_line(line, config)
        except UnterminatedQuote as exc:
            if not join:
                exc.first_line = start
                raise
            logger.debug("line %d: open quote, continuing onto line %d", start, lineno + 1)
            pending = line
            continue
        except TokeniseError as exc:
            exc.first_line = start
            raise
        pending = None
        if words:
            yield start, words

    if pending is not None:
        try:
            _split_line(pending, config)
        except TokeniseError as exc:
            exc.first_line = start
            raise


def _split_line(line: str, config: Config) -> list[str]:
    # Leading whitespace is skipped by the tokeniser anyway; keeping it keeps
    # error columns relative to the line as written
    text = line.rstrip()
    try:
        return config.tokeniser().add_str(text).finish()
    except TokeniseError as exc:
        exc.attach_source(text)
        raise


def format_words(words: list[str], output_format: str) -> str:
    """Render one line's words for output."""
    if output_format == "json":
        return json.dumps(words, ensure_ascii=False) + "\n"
    if output_format == "null":
        return "".join(f"{w}\0" for w in words)
    return "".join(f"{w}\n" for w in words)


def run(options: CliOptions, stream: TextIO, out: TextIO) -> None:
    """Tokenise *stream* and write the words to *out*."""
    from quotesplit.debug import dump_tokens

    first = True
    for lineno, words in split_lines(stream, options.config, options.join):
        if options.debug:
            dump_tokens(words, line=lineno, file=sys.stderr)
        if options.output_format == "lines" and not first:
            out.write("\n")
        out.write(format_words(words, options.output_format))
        first = False


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG, stream=sys.stderr, format="%(name)s: %(message)s"
        )

    try:
        options = resolve_options(args)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    filename = str(options.input_file) if options.input_file is not None else "<stdin>"
    try:
        if options.input_file is None:
            run(options, sys.stdin, sys.stdout)
        else:
            with open(options.input_file, encoding="utf-8") as f:
                run(options, f, sys.stdout)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except TokeniseError as exc:
        print(exc.format(filename), file=sys.stderr)
        return 1

    return 0
