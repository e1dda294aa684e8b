"""Fix-all code action."""

from __future__ import annotations

from typing import List

from lsprotocol.types import (
    CodeAction,
    CodeActionKind,
    CodeActionParams,
    Diagnostic,
    Range,
    TextEdit,
    WorkspaceEdit,
)

from ..protocol import full_document_range, uri_to_filename
from ..session import SessionContext

FIX_ALL_TITLE = "Fix all auto-correctable offenses"


def in_range(diagnostic: Diagnostic, requested: Range) -> bool:
    """Line level containment; character positions are ignored."""

    return (
        diagnostic.range.start.line >= requested.start.line
        and diagnostic.range.end.line <= requested.end.line
    )


def code_action(session: SessionContext, params: CodeActionParams) -> List[CodeAction]:
    uri = params.text_document.uri
    record = session.documents.get(uri)
    if record is None:
        return []
    if not any(in_range(diagnostic, params.range) for diagnostic in record.diagnostics):
        return []
    corrected = session.engine.autocorrect(record.text, uri_to_filename(uri))
    edit = TextEdit(range=full_document_range(record.text), new_text=corrected)
    return [
        CodeAction(
            title=FIX_ALL_TITLE,
            kind=CodeActionKind.SourceFixAll,
            edit=WorkspaceEdit(changes={uri: [edit]}),
        )
    ]


__all__ = ["FIX_ALL_TITLE", "code_action", "in_range"]
