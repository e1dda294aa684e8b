"""Shared protocol helpers for the grammar language server.

Engine locations are 1-based ``(line, column)``; editor positions are 0-based
``(line, character)``.  :func:`to_position` and :func:`to_source_location`
are the only places the two are converted.
"""

from __future__ import annotations

from typing import List

from lsprotocol.types import (
    CompletionOptions,
    InitializeResult,
    InitializeResultServerInfoType,
    Position,
    PositionEncodingKind,
    Range,
    SaveOptions,
    SemanticTokensLegend,
    SemanticTokensOptions,
    ServerCapabilities,
    TextDocumentSyncKind,
    TextDocumentSyncOptions,
)
from pygls.uris import to_fs_path

from . import __version__
from .engine.ast import SourceLocation
from .text import document_end

SERVER_NAME = "collie-lsp"

TRIGGER_CHARACTERS: List[str] = ["%", "$"]

TOKEN_TYPES: List[str] = [
    "namespace",
    "type",
    "class",
    "enum",
    "interface",
    "struct",
    "typeParameter",
    "parameter",
    "variable",
    "property",
    "enumMember",
    "event",
    "function",
    "method",
    "macro",
    "keyword",
    "modifier",
    "comment",
    "string",
    "number",
    "regexp",
    "operator",
]

TOKEN_MODIFIERS: List[str] = [
    "declaration",
    "definition",
    "readonly",
    "static",
    "deprecated",
    "abstract",
    "async",
    "modification",
    "documentation",
    "defaultLibrary",
]

SEMANTIC_TOKENS_LEGEND = SemanticTokensLegend(token_types=TOKEN_TYPES, token_modifiers=TOKEN_MODIFIERS)


# ----------------------------------------------------------------------
# Coordinates
# ----------------------------------------------------------------------
def to_position(location: SourceLocation) -> Position:
    return Position(line=location.line - 1, character=location.column - 1)


def to_source_location(position: Position) -> SourceLocation:
    return SourceLocation(line=position.line + 1, column=position.character + 1)


def name_range(start: Position, name: str) -> Range:
    """Range covering *name* written on one line from *start*."""

    return Range(start=start, end=Position(line=start.line, character=start.character + len(name)))


def full_document_range(text: str) -> Range:
    line, character = document_end(text)
    return Range(start=Position(line=0, character=0), end=Position(line=line, character=character))


def uri_to_filename(uri: str) -> str:
    """Filesystem path handed to the Grammar Engine for *uri*."""

    try:
        path = to_fs_path(uri)
    except ValueError:
        path = None
    return path or uri


# ----------------------------------------------------------------------
# Initialize
# ----------------------------------------------------------------------
def build_capabilities() -> ServerCapabilities:
    """The fixed capability set advertised in the ``initialize`` reply."""

    return ServerCapabilities(
        position_encoding=PositionEncodingKind.Utf16,
        text_document_sync=TextDocumentSyncOptions(
            open_close=True,
            change=TextDocumentSyncKind.Incremental,
            save=SaveOptions(include_text=True),
        ),
        document_formatting_provider=True,
        code_action_provider=True,
        hover_provider=True,
        completion_provider=CompletionOptions(trigger_characters=list(TRIGGER_CHARACTERS)),
        definition_provider=True,
        references_provider=True,
        document_symbol_provider=True,
        rename_provider=True,
        semantic_tokens_provider=SemanticTokensOptions(legend=SEMANTIC_TOKENS_LEGEND, full=True),
        workspace_symbol_provider=True,
        folding_range_provider=True,
    )


def initialize_result() -> InitializeResult:
    return InitializeResult(
        capabilities=build_capabilities(),
        server_info=InitializeResultServerInfoType(name=SERVER_NAME, version=__version__),
    )


__all__ = [
    "SERVER_NAME",
    "TRIGGER_CHARACTERS",
    "TOKEN_TYPES",
    "TOKEN_MODIFIERS",
    "SEMANTIC_TOKENS_LEGEND",
    "to_position",
    "to_source_location",
    "name_range",
    "full_document_range",
    "uri_to_filename",
    "build_capabilities",
    "initialize_result",
]
