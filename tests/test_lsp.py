"""Tests for the LSP server — diagnostic generation."""

from __future__ import annotations

import pytest
from lsprotocol.types import (
    DiagnosticSeverity,
    PublishDiagnosticsParams,
    TextDocumentItem,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer
from pygls.workspace import Workspace

from quotesplit.lsp import _validate, diagnose
from quotesplit.presets import c_style, shell_style


@pytest.fixture
def lsp_env():
    """Create a LanguageServer with an initialized workspace and captured diagnostics."""
    ls = LanguageServer("test", "v0", text_document_sync_kind=TextDocumentSyncKind.Full)
    ws = Workspace(None)
    ls.protocol._workspace = ws

    published: list[PublishDiagnosticsParams] = []
    ls.text_document_publish_diagnostics = lambda params: published.append(params)

    def put(source: str, uri: str = "file:///cmds.txt") -> None:
        ws.put_text_document(
            TextDocumentItem(uri=uri, language_id="plaintext", version=0, text=source)
        )

    return ls, published, put


# ---------------------------------------------------------------------------
# diagnose()
# ---------------------------------------------------------------------------


class TestDiagnose:
    def test_clean_source(self) -> None:
        assert diagnose("echo 'a b'\nls -l\n", shell_style()) == []

    def test_one_diagnostic_per_bad_line(self) -> None:
        diags = diagnose("ok\n  echo 'oops\nfine\nend \\", shell_style())
        assert len(diags) == 2
        assert diags[0].range.start.line == 1
        assert diags[0].range.start.character == 7
        assert "unterminated quote" in diags[0].message
        assert diags[1].range.start.line == 3
        assert diags[1].range.start.character == 4

    def test_unrecognized_escape(self) -> None:
        diags = diagnose('a "\\q"', c_style())
        assert len(diags) == 1
        d = diags[0]
        assert d.range.start.character == 3
        assert d.range.end.character == 4
        assert "invalid escape sequence" in d.message
        assert d.severity == DiagnosticSeverity.Error
        assert d.source == "quotesplit"


# ---------------------------------------------------------------------------
# _validate publishes
# ---------------------------------------------------------------------------


class TestValidate:
    def test_publishes_errors(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("run \"unterminated\n")
        _validate(ls, "file:///cmds.txt")

        assert len(published) == 1
        assert published[0].uri == "file:///cmds.txt"
        diags = published[0].diagnostics
        assert len(diags) == 1
        assert diags[0].range.start.line == 0
        assert diags[0].range.start.character == 4

    def test_publishes_empty_for_clean_document(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("run 'fine'\nstop\n")
        _validate(ls, "file:///cmds.txt")

        assert len(published) == 1
        assert published[0].diagnostics == []
