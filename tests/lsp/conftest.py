from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import pytest
from lsprotocol.types import (
    INITIALIZE,
    TEXT_DOCUMENT_DID_OPEN,
    ClientCapabilities,
    Diagnostic,
    DidOpenTextDocumentParams,
    InitializeParams,
    Position,
    TextDocumentItem,
)

from collie_lsp.config import WorkspaceConfig
from collie_lsp.dispatcher import Dispatcher
from collie_lsp.engine import (
    Alternative,
    EngineWrapper,
    GrammarAst,
    GrammarEngine,
    GrammarSymbol,
    Offense,
    PrecedenceDeclaration,
    Rule,
    SourceLocation,
    TokenDeclaration,
    TypeDeclaration,
)
from collie_lsp.handlers import register_all
from collie_lsp.session import SessionContext

DATA_DIR = Path(__file__).parent / "data"

WORKSPACE_URI = "file:///workspace"
SAMPLE_URI = "file:///workspace/sample.y"
CALC_URI = "file:///workspace/calc.y"

SAMPLE_GRAMMAR = "%token NUMBER\n%%\nprogram: NUMBER;\n%%\n"


def loc(line: int, column: int) -> SourceLocation:
    return SourceLocation(line=line, column=column)


def alt(line: int, column: int, *names: str) -> Alternative:
    return Alternative(symbols=[GrammarSymbol(name=name) for name in names], location=loc(line, column))


def sample_ast() -> GrammarAst:
    return GrammarAst(
        declarations=[TokenDeclaration(names=["NUMBER"], location=loc(1, 8))],
        rules=[Rule(name="program", location=loc(3, 1), alternatives=[alt(3, 10, "NUMBER")])],
    )


def calc_text() -> str:
    return (DATA_DIR / "calc.y").read_text(encoding="utf-8")


def calc_ast() -> GrammarAst:
    return GrammarAst(
        declarations=[
            TokenDeclaration(names=["NUMBER", "NEWLINE"], location=loc(5, 8)),
            TokenDeclaration(names=["IDENT"], type_tag="sval", location=loc(6, 15)),
            PrecedenceDeclaration(kind="left", tokens=["PLUS", "MINUS"], location=loc(7, 7)),
            TypeDeclaration(names=["expr"], type_tag="ival", location=loc(8, 14)),
        ],
        rules=[
            Rule(name="program", location=loc(12, 1), alternatives=[alt(12, 10, "statements")]),
            Rule(
                name="statements",
                location=loc(15, 1),
                alternatives=[alt(15, 13, "statement"), alt(16, 13, "statements", "statement")],
            ),
            Rule(
                name="statement",
                location=loc(19, 1),
                alternatives=[alt(19, 12, "expr", "NEWLINE"), alt(20, 12, "IDENT", "NEWLINE")],
            ),
            Rule(
                name="expr",
                location=loc(23, 1),
                alternatives=[
                    alt(23, 7, "NUMBER"),
                    alt(24, 7, "expr", "PLUS", "expr"),
                    alt(28, 7, "expr", "MINUS", "expr"),
                ],
            ),
        ],
    )


class FakeEngine(GrammarEngine):
    """Scripted Grammar Engine backend.

    ``failing`` names operations that raise instead of answering.
    """

    def __init__(
        self,
        ast: Optional[GrammarAst] = None,
        offenses: Iterable[Offense] = (),
        formatted: Optional[str] = None,
        corrected: Optional[str] = None,
        failing: Iterable[str] = (),
    ) -> None:
        self.ast = ast
        self.offenses = list(offenses)
        self.formatted = formatted
        self.corrected = corrected
        self.failing = set(failing)
        self.calls: List[Tuple[str, str, str]] = []

    def _record(self, operation: str, source: str, filename: str) -> None:
        self.calls.append((operation, source, filename))
        if operation in self.failing:
            raise RuntimeError(f"{operation} exploded")

    def parse(self, source, filename):
        self._record("parse", source, filename)
        return self.ast

    def lint(self, source, filename):
        self._record("lint", source, filename)
        return list(self.offenses)

    def format(self, source, filename):
        self._record("format", source, filename)
        return source if self.formatted is None else self.formatted

    def autocorrect(self, source, filename):
        self._record("autocorrect", source, filename)
        return source if self.corrected is None else self.corrected

    def operations(self) -> List[str]:
        return [operation for operation, _, _ in self.calls]


class RecordingNotifier:
    def __init__(self) -> None:
        self.published: List[Tuple[str, List[Diagnostic], Optional[int]]] = []

    def publish_diagnostics(self, uri: str, diagnostics: List[Diagnostic], version: Optional[int] = None) -> None:
        self.published.append((uri, list(diagnostics), version))

    def last(self, uri: str) -> List[Diagnostic]:
        for published_uri, diagnostics, _ in reversed(self.published):
            if published_uri == uri:
                return diagnostics
        raise AssertionError(f"Nothing published for {uri}")


@pytest.fixture()
def engine() -> FakeEngine:
    return FakeEngine(ast=sample_ast())


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


def make_dispatcher(engine: GrammarEngine, notifier: RecordingNotifier) -> Dispatcher:
    dispatcher = Dispatcher(
        notifier,
        engine_factory=lambda root: EngineWrapper(root, backend=engine, config=WorkspaceConfig()),
    )
    register_all(dispatcher)
    return dispatcher


@pytest.fixture()
def dispatcher(engine: FakeEngine, notifier: RecordingNotifier) -> Dispatcher:
    dispatcher = make_dispatcher(engine, notifier)
    dispatcher.dispatch(INITIALIZE, InitializeParams(capabilities=ClientCapabilities(), root_uri=WORKSPACE_URI))
    return dispatcher


@pytest.fixture()
def session(dispatcher: Dispatcher) -> SessionContext:
    assert dispatcher.session is not None
    return dispatcher.session


def open_document(
    dispatcher: Dispatcher,
    text: str = SAMPLE_GRAMMAR,
    *,
    uri: str = SAMPLE_URI,
    version: int = 1,
    ast: Optional[GrammarAst] = None,
) -> TextDocumentItem:
    """Open *text* through the dispatcher, optionally pinning its cached AST."""

    item = TextDocumentItem(uri=uri, language_id="yacc", version=version, text=text)
    dispatcher.dispatch(TEXT_DOCUMENT_DID_OPEN, DidOpenTextDocumentParams(text_document=item))
    if ast is not None:
        assert dispatcher.session is not None
        dispatcher.session.documents.update_ast(uri, ast)
    return item


def open_calc(dispatcher: Dispatcher) -> TextDocumentItem:
    return open_document(dispatcher, calc_text(), uri=CALC_URI, ast=calc_ast())


def position_of(text: str, word: str, occurrence: int = 0) -> Position:
    """Position of the *occurrence*-th appearance of *word* in *text*."""

    seen = 0
    for line_index, line in enumerate(text.split("\n")):
        column = line.find(word)
        while column != -1:
            if seen == occurrence:
                return Position(line=line_index, character=column)
            seen += 1
            column = line.find(word, column + 1)
    raise AssertionError(f"'{word}' not found")


__all__ = [
    "CALC_URI",
    "DATA_DIR",
    "FakeEngine",
    "RecordingNotifier",
    "SAMPLE_GRAMMAR",
    "SAMPLE_URI",
    "WORKSPACE_URI",
    "calc_ast",
    "calc_text",
    "loc",
    "make_dispatcher",
    "open_calc",
    "open_document",
    "position_of",
    "sample_ast",
]
