"""Handler registration helpers."""

from __future__ import annotations

from lsprotocol.types import (
    EXIT,
    INITIALIZE,
    INITIALIZED,
    SHUTDOWN,
    TEXT_DOCUMENT_CODE_ACTION,
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DEFINITION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DID_SAVE,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_FOLDING_RANGE,
    TEXT_DOCUMENT_FORMATTING,
    TEXT_DOCUMENT_HOVER,
    TEXT_DOCUMENT_REFERENCES,
    TEXT_DOCUMENT_RENAME,
    TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL,
    WORKSPACE_SYMBOL,
)

from . import (
    code_action,
    completion,
    definition,
    document_symbol,
    folding_range,
    formatting,
    hover,
    lifecycle,
    references,
    rename,
    semantic_tokens,
    text_document,
    workspace_symbol,
)

METHOD_TABLE = {
    INITIALIZE: lifecycle.initialize,
    INITIALIZED: lifecycle.initialized,
    SHUTDOWN: lifecycle.shutdown,
    EXIT: lifecycle.exit_server,
    TEXT_DOCUMENT_DID_OPEN: text_document.did_open,
    TEXT_DOCUMENT_DID_CHANGE: text_document.did_change,
    TEXT_DOCUMENT_DID_SAVE: text_document.did_save,
    TEXT_DOCUMENT_DID_CLOSE: text_document.did_close,
    TEXT_DOCUMENT_FORMATTING: formatting.formatting,
    TEXT_DOCUMENT_CODE_ACTION: code_action.code_action,
    TEXT_DOCUMENT_HOVER: hover.hover,
    TEXT_DOCUMENT_COMPLETION: completion.completion,
    TEXT_DOCUMENT_DEFINITION: definition.definition,
    TEXT_DOCUMENT_REFERENCES: references.references,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL: document_symbol.document_symbol,
    TEXT_DOCUMENT_RENAME: rename.rename,
    TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL: semantic_tokens.semantic_tokens_full,
    WORKSPACE_SYMBOL: workspace_symbol.workspace_symbol,
    TEXT_DOCUMENT_FOLDING_RANGE: folding_range.folding_range,
}


def register_all(dispatcher) -> None:
    for method, handler in METHOD_TABLE.items():
        dispatcher.register(method, handler)


__all__ = ["METHOD_TABLE", "register_all"]
