"""Minimal LSP server for line-oriented command files — diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from quotesplit import __version__
from quotesplit.config import Config
from quotesplit.errors import TokeniseError
from quotesplit.presets import shell_style

server = LanguageServer(
    "quotesplit-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def diagnose(source: str, config: Config) -> list[Diagnostic]:
    """Tokenise every line of *source*, returning one diagnostic per failing line."""
    diagnostics: list[Diagnostic] = []
    for line_idx, line in enumerate(source.splitlines()):
        try:
            # Untrimmed on the left so columns match the document
            config.tokeniser().add_str(line.rstrip()).finish()
        except TokeniseError as exc:
            col = exc.position.column - 1
            diagnostics.append(
                Diagnostic(
                    range=Range(
                        start=Position(line=line_idx, character=col),
                        end=Position(line=line_idx, character=col + 1),
                    ),
                    message=exc.message,
                    severity=DiagnosticSeverity.Error,
                    source="quotesplit",
                )
            )
    return diagnostics


def _validate(ls: LanguageServer, uri: str) -> None:
    """Tokenise the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics = diagnose(doc.source, shell_style())
    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
