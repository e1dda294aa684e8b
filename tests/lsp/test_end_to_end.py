"""A whole session driven through the dispatcher, from initialize to exit."""

from __future__ import annotations

import pytest
from lsprotocol.types import (
    EXIT,
    INITIALIZE,
    INITIALIZED,
    SHUTDOWN,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    ClientCapabilities,
    DidChangeTextDocumentParams,
    DocumentSymbolParams,
    HoverParams,
    InitializedParams,
    InitializeParams,
    Position,
    Range,
    TextDocumentContentChangeEvent_Type1,
    TextDocumentIdentifier,
    VersionedTextDocumentIdentifier,
)

from collie_lsp.engine import Offense

from tests.lsp.conftest import (
    SAMPLE_GRAMMAR,
    SAMPLE_URI,
    WORKSPACE_URI,
    FakeEngine,
    RecordingNotifier,
    loc,
    make_dispatcher,
    open_document,
    sample_ast,
)


def test_sample_session() -> None:
    engine = FakeEngine(
        ast=sample_ast(),
        offenses=[Offense(message="Missing %start", severity="warning", rule="Style/Start", location=loc(1, 1))],
    )
    notifier = RecordingNotifier()
    dispatcher = make_dispatcher(engine, notifier)

    result = dispatcher.dispatch(INITIALIZE, InitializeParams(capabilities=ClientCapabilities(), root_uri=WORKSPACE_URI))
    assert result.server_info.name == "collie-lsp"
    dispatcher.dispatch(INITIALIZED, InitializedParams())

    open_document(dispatcher, SAMPLE_GRAMMAR)
    (diagnostic,) = notifier.last(SAMPLE_URI)
    assert diagnostic.message == "Missing %start"
    assert engine.operations() == ["parse", "lint"]

    hover = dispatcher.dispatch(
        TEXT_DOCUMENT_HOVER,
        HoverParams(text_document=TextDocumentIdentifier(uri=SAMPLE_URI), position=Position(line=0, character=8)),
    )
    assert "Token" in hover.contents.value
    assert "NUMBER" in hover.contents.value

    (program,) = dispatcher.dispatch(
        TEXT_DOCUMENT_DOCUMENT_SYMBOL, DocumentSymbolParams(text_document=TextDocumentIdentifier(uri=SAMPLE_URI))
    )[1:]
    assert program.name == "program"
    assert len(program.children) == 1

    engine.offenses = []
    change = TextDocumentContentChangeEvent_Type1(
        range=Range(start=Position(line=2, character=15), end=Position(line=2, character=15)),
        text=" ",
    )
    dispatcher.dispatch(
        TEXT_DOCUMENT_DID_CHANGE,
        DidChangeTextDocumentParams(
            text_document=VersionedTextDocumentIdentifier(uri=SAMPLE_URI, version=2),
            content_changes=[change],
        ),
    )
    record = dispatcher.session.documents.get(SAMPLE_URI)
    assert record.text == "%token NUMBER\n%%\nprogram: NUMBER ;\n%%\n"
    assert notifier.published[-1] == (SAMPLE_URI, [], 2)

    assert dispatcher.dispatch(SHUTDOWN, None) is None
    with pytest.raises(SystemExit) as excinfo:
        dispatcher.dispatch(EXIT, None)
    assert excinfo.value.code == 0
