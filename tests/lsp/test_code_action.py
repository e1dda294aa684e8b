from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_CODE_ACTION,
    CodeActionContext,
    CodeActionKind,
    CodeActionParams,
    Position,
    Range,
    TextDocumentIdentifier,
)

from collie_lsp.dispatcher import Dispatcher
from collie_lsp.engine import Offense
from collie_lsp.handlers.code_action import FIX_ALL_TITLE, in_range
from collie_lsp.handlers.diagnostics import offense_to_diagnostic

from tests.lsp.conftest import SAMPLE_GRAMMAR, SAMPLE_URI, FakeEngine, loc, open_document

OFFENSE = Offense(message="Trailing whitespace", severity="warning", rule="Layout/TrailingWhitespace", location=loc(3, 1))


def _range(start_line: int, end_line: int, end_character: int = 0) -> Range:
    return Range(start=Position(line=start_line, character=0), end=Position(line=end_line, character=end_character))


def _actions(dispatcher: Dispatcher, requested: Range, uri: str = SAMPLE_URI):
    params = CodeActionParams(
        text_document=TextDocumentIdentifier(uri=uri),
        range=requested,
        context=CodeActionContext(diagnostics=[]),
    )
    return dispatcher.dispatch(TEXT_DOCUMENT_CODE_ACTION, params)


def test_containment_is_line_level() -> None:
    diagnostic = offense_to_diagnostic(OFFENSE)
    # The diagnostic spans characters 0-10 on line 2; the request ends at character 0.
    assert in_range(diagnostic, _range(2, 2))
    assert in_range(diagnostic, _range(0, 4))
    assert not in_range(diagnostic, _range(3, 4))
    assert not in_range(diagnostic, _range(0, 1))


def test_fix_all_replaces_the_document(dispatcher: Dispatcher, engine: FakeEngine) -> None:
    engine.offenses = [OFFENSE]
    engine.corrected = "%token NUMBER\n%%\nprogram: NUMBER;\n"
    open_document(dispatcher)

    (action,) = _actions(dispatcher, _range(0, 4))
    assert action.title == FIX_ALL_TITLE
    assert action.kind == CodeActionKind.SourceFixAll
    (edit,) = action.edit.changes[SAMPLE_URI]
    assert edit.new_text == engine.corrected
    assert (edit.range.start.line, edit.range.start.character) == (0, 0)
    assert (edit.range.end.line, edit.range.end.character) == (4, 0)
    assert engine.calls[-1] == ("autocorrect", SAMPLE_GRAMMAR, "/workspace/sample.y")


def test_no_action_outside_diagnostics(dispatcher: Dispatcher, engine: FakeEngine) -> None:
    engine.offenses = [OFFENSE]
    open_document(dispatcher)
    assert _actions(dispatcher, _range(3, 4)) == []
    assert "autocorrect" not in engine.operations()


def test_no_action_without_diagnostics(dispatcher: Dispatcher) -> None:
    open_document(dispatcher)
    assert _actions(dispatcher, _range(0, 4)) == []


def test_failed_autocorrect_keeps_the_text(dispatcher: Dispatcher, engine: FakeEngine) -> None:
    engine.offenses = [OFFENSE]
    engine.failing = {"autocorrect"}
    open_document(dispatcher)
    (action,) = _actions(dispatcher, _range(0, 4))
    assert action.edit.changes[SAMPLE_URI][0].new_text == SAMPLE_GRAMMAR


def test_unopened_document_has_no_actions(dispatcher: Dispatcher) -> None:
    assert _actions(dispatcher, _range(0, 4), uri="file:///workspace/missing.y") == []
