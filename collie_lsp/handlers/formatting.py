"""Whole-document formatting."""

from __future__ import annotations

from typing import List, Optional

from lsprotocol.types import DocumentFormattingParams, TextEdit

from ..protocol import full_document_range, uri_to_filename
from ..session import SessionContext


def formatting(session: SessionContext, params: DocumentFormattingParams) -> Optional[List[TextEdit]]:
    uri = params.text_document.uri
    record = session.documents.get(uri)
    if record is None:
        return None
    formatted = session.engine.format(record.text, uri_to_filename(uri))
    if formatted is None:
        return None
    if formatted == record.text:
        return []
    return [TextEdit(range=full_document_range(record.text), new_text=formatted)]


__all__ = ["formatting"]
