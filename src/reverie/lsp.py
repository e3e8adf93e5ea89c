"""Minimal LSP server for Reverie — diagnostics only."""

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

from reverie import __version__
from reverie.errors import CompileError
from reverie.generator import generate
from reverie.parser import parse
from reverie.span import position_at

server = LanguageServer(
    "reverie-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _lsp_position(source: bytes, offset: int) -> Position:
    """0-based LSP position. Characters count UTF-16 code units."""
    pos = position_at(source, offset)
    line_start = source.rfind(b"\n", 0, pos.offset) + 1
    prefix = source[line_start : pos.offset].decode("utf-8", "replace")
    return Position(line=pos.line - 1, character=len(prefix.encode("utf-16-le")) // 2)


def _diagnostic(exc: CompileError) -> Diagnostic:
    return Diagnostic(
        range=Range(
            start=_lsp_position(exc.source, exc.span.start),
            end=_lsp_position(exc.source, exc.span.end),
        ),
        message=exc.message,
        severity=DiagnosticSeverity.Error,
        source="reverie",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Compile the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source.encode("utf-8")
    diagnostics: list[Diagnostic] = []

    try:
        generate(source, parse(source))
    except CompileError as exc:
        diagnostics.append(_diagnostic(exc))

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
