"""Document synchronisation notifications and the analysis pipeline."""

from __future__ import annotations

import logging
from typing import List

from lsprotocol.types import (
    Diagnostic,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DidSaveTextDocumentParams,
)

from ..protocol import uri_to_filename
from ..session import SessionContext
from ..text import apply_content_changes
from . import diagnostics

logger = logging.getLogger(__name__)


def analyze(session: SessionContext, uri: str) -> List[Diagnostic]:
    """Parse and lint the current text of *uri*, then publish its diagnostics.

    The AST is cached only if the text it was parsed from is still current
    when the parse returns.
    """

    record = session.documents.get(uri)
    if record is None:
        return []
    filename = uri_to_filename(uri)
    ast = session.engine.parse(record.text, filename)
    current = session.documents.get(uri)
    if current is not None and current.text == record.text:
        session.documents.update_ast(uri, ast)
    offenses = session.engine.lint(record.text, filename)
    logger.debug("%s: %d offense(s)", uri, len(offenses))
    return diagnostics.publish(session, uri, offenses)


def did_open(session: SessionContext, params: DidOpenTextDocumentParams) -> None:
    item = params.text_document
    session.documents.open(item.uri, item.text, item.version)
    analyze(session, item.uri)


def did_change(session: SessionContext, params: DidChangeTextDocumentParams) -> None:
    uri = params.text_document.uri
    record = session.documents.get(uri)
    if record is None or not params.content_changes:
        return
    text = apply_content_changes(record.text, params.content_changes)
    version = params.text_document.version
    if version is None:
        version = record.version
    updated = session.documents.change(uri, text, version)
    if updated is None or updated.version != version:
        return
    analyze(session, uri)


def did_save(session: SessionContext, params: DidSaveTextDocumentParams) -> None:
    uri = params.text_document.uri
    record = session.documents.get(uri)
    if record is None:
        return
    if params.text is not None and params.text != record.text:
        session.documents.change(uri, params.text, record.version)
    analyze(session, uri)


def did_close(session: SessionContext, params: DidCloseTextDocumentParams) -> None:
    uri = params.text_document.uri
    session.documents.close(uri)
    session.publish(uri, [])


__all__ = ["analyze", "did_open", "did_change", "did_save", "did_close"]
