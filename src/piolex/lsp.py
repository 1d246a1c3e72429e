"""Minimal LSP server for PIO: semantic tokens plus foreign-block warnings."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    SemanticTokens,
    SemanticTokensLegend,
    SemanticTokensParams,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer
from pygls.workspace import PositionCodec

from piolex import __version__
from piolex.classifier import Classification, classify
from piolex.tokens import LineIndex, TokenCategory
from piolex.tokens import Position as SourcePosition

# Categories mapped onto standard LSP semantic token types. PLAIN and
# FOREIGN_BLOCK are not reported; the client highlights embedded bodies itself.
TOKEN_TYPES: dict[TokenCategory, str] = {
    TokenCategory.DIRECTIVE: "macro",
    TokenCategory.LABEL: "function",
    TokenCategory.INSTRUCTION: "keyword",
    TokenCategory.JMP_CONDITION: "enumMember",
    TokenCategory.REGISTER: "variable",
    TokenCategory.MODIFIER: "modifier",
    TokenCategory.MOV_OPERATOR: "operator",
    TokenCategory.NUMERIC_LITERAL: "number",
    TokenCategory.ARRAY_INDEX: "parameter",
    TokenCategory.FOREIGN_BLOCK_DELIMITER: "decorator",
    TokenCategory.COMMENT: "comment",
}

LEGEND = SemanticTokensLegend(
    token_types=sorted(set(TOKEN_TYPES.values())),
    token_modifiers=[],
)
_TYPE_INDEX = {name: i for i, name in enumerate(LEGEND.token_types)}

server = LanguageServer("piolex-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _client_column(source: str, pos: SourcePosition, codec: PositionCodec) -> int:
    """Column of *pos* in the client's units (UTF-16 code units by default)."""
    return codec.client_num_units(source[pos.offset - pos.column + 1 : pos.offset])


def encode_semantic_tokens(
    classification: Classification,
    codec: PositionCodec | None = None,
) -> list[int]:
    """Encode tokens in the LSP relative ``[dLine, dStart, length, type, mods]`` form.

    Columns and lengths are measured with *codec*, which defaults to the
    UTF-16 encoding LSP clients assume when none was negotiated. Tokens
    spanning several lines (block comments) are split per line, and empty
    pieces are dropped.
    """
    codec = codec or PositionCodec()
    source = classification.source
    index = LineIndex(source)
    data: list[int] = []
    prev_line = 0
    prev_col = 0

    for tok in classification:
        token_type = TOKEN_TYPES.get(tok.category)
        if token_type is None:
            continue
        type_idx = _TYPE_INDEX[token_type]
        start = index.position(tok.span.start)
        line = start.line - 1
        col = _client_column(source, start, codec)
        for piece in tok.text.split("\n"):
            length = codec.client_num_units(piece.rstrip("\r"))
            if length:
                delta_line = line - prev_line
                delta_col = col - prev_col if delta_line == 0 else col
                data.extend((delta_line, delta_col, length, type_idx, 0))
                prev_line, prev_col = line, col
            line += 1
            col = 0
    return data


def _semantic_tokens(ls: LanguageServer, uri: str) -> SemanticTokens:
    doc = ls.workspace.get_text_document(uri)
    data = encode_semantic_tokens(classify(doc.source), ls.workspace.position_codec)
    return SemanticTokens(data=data)


def _validate(ls: LanguageServer, uri: str) -> None:
    """Classify the document and publish warnings for unterminated foreign blocks."""
    doc = ls.workspace.get_text_document(uri)
    codec = ls.workspace.position_codec
    classification = classify(doc.source)
    source = classification.source
    index = LineIndex(source)
    diagnostics: list[Diagnostic] = []

    for region in classification.foreign_blocks:
        if region.terminated:
            continue
        start = index.position(region.head.start)
        end = index.position(region.head.end)
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(
                        line=start.line - 1, character=_client_column(source, start, codec)
                    ),
                    end=Position(line=end.line - 1, character=_client_column(source, end, codec)),
                ),
                message=f"unterminated '{region.language}' block (missing '%}}')",
                severity=DiagnosticSeverity.Warning,
                source="piolex",
            )
        )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL, LEGEND)
def semantic_tokens_full(ls: LanguageServer, params: SemanticTokensParams) -> SemanticTokens:
    return _semantic_tokens(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
