"""Minimal LSP server for Lox: lexical diagnostics only."""

from __future__ import annotations

import logging

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

from loxscan import __version__
from loxscan.errors import ErrorReporter, LexError
from loxscan.scanner import Scanner

logger = logging.getLogger(__name__)

server = LanguageServer(
    "loxscan-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _column(source: str, offset: int) -> int:
    """0-based column of *offset* within its line."""
    if offset < 0:
        return 0
    return offset - (source.rfind("\n", 0, offset) + 1)


def _to_diagnostic(source: str, error: LexError) -> Diagnostic:
    line = error.line - 1
    col = _column(source, error.offset)
    return Diagnostic(
        range=Range(
            start=Position(line=line, character=col),
            end=Position(line=line, character=col + 1),
        ),
        message=error.message,
        severity=DiagnosticSeverity.Error,
        source="loxscan",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Scan the document and publish one diagnostic per lexical error."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source

    reporter = ErrorReporter()
    Scanner(source, reporter).scan_tokens()
    diagnostics = [_to_diagnostic(source, err) for err in reporter.errors]
    logger.debug("%s: %d lexical errors", uri, len(diagnostics))

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
