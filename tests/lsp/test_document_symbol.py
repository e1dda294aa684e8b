from __future__ import annotations

from lsprotocol.types import TEXT_DOCUMENT_DOCUMENT_SYMBOL, DocumentSymbolParams, SymbolKind, TextDocumentIdentifier

from collie_lsp.dispatcher import Dispatcher
from collie_lsp.engine import Alternative, GrammarAst, Rule, TokenDeclaration
from collie_lsp.handlers.document_symbol import build_document_symbols

from tests.lsp.conftest import CALC_URI, loc, open_calc


def _symbols(dispatcher: Dispatcher, uri: str = CALC_URI):
    params = DocumentSymbolParams(text_document=TextDocumentIdentifier(uri=uri))
    return dispatcher.dispatch(TEXT_DOCUMENT_DOCUMENT_SYMBOL, params)


def _span(symbol):
    return (
        symbol.range.start.line,
        symbol.range.start.character,
        symbol.range.end.line,
        symbol.range.end.character,
    )


def test_outline_lists_declarations_before_rules(dispatcher: Dispatcher) -> None:
    open_calc(dispatcher)
    symbols = _symbols(dispatcher)
    assert [symbol.name for symbol in symbols] == [
        "NUMBER",
        "NEWLINE",
        "IDENT",
        "expr",
        "PLUS",
        "MINUS",
        "program",
        "statements",
        "statement",
        "expr",
    ]
    kinds = {symbol.name: symbol.kind for symbol in symbols[:6]}
    assert kinds == {
        "NUMBER": SymbolKind.Constant,
        "NEWLINE": SymbolKind.Constant,
        "IDENT": SymbolKind.Constant,
        "expr": SymbolKind.Property,
        "PLUS": SymbolKind.EnumMember,
        "MINUS": SymbolKind.EnumMember,
    }
    assert symbols[4].detail == "Left precedence"
    assert symbols[3].detail == "Type"
    assert symbols[0].detail == "Token"


def test_symbol_ranges_cover_the_name(dispatcher: Dispatcher) -> None:
    open_calc(dispatcher)
    symbols = _symbols(dispatcher)
    assert _span(symbols[2]) == (5, 14, 5, 19)
    assert symbols[2].selection_range == symbols[2].range
    assert _span(symbols[7]) == (14, 0, 14, 10)


def test_rules_carry_alternatives_as_children(dispatcher: Dispatcher) -> None:
    open_calc(dispatcher)
    expr = _symbols(dispatcher)[-1]
    assert expr.kind == SymbolKind.Function
    assert expr.detail == "Grammar rule (3 alternatives)"
    assert [child.name for child in expr.children] == ["Alternative 1", "Alternative 2", "Alternative 3"]
    assert [child.detail for child in expr.children] == ["NUMBER", "expr PLUS expr", "expr MINUS expr"]
    assert all(child.kind == SymbolKind.Method for child in expr.children)
    assert _span(expr.children[1])[:2] == (23, 6)


def test_empty_alternative_and_missing_locations() -> None:
    ast = GrammarAst(
        declarations=[TokenDeclaration(names=["HIDDEN"])],
        rules=[
            Rule(name="opt", location=loc(1, 1), alternatives=[Alternative(location=loc(1, 6)), Alternative()]),
            Rule(name="floating"),
        ],
    )
    symbols = build_document_symbols(ast)
    assert [symbol.name for symbol in symbols] == ["opt"]
    assert symbols[0].detail == "Grammar rule (2 alternatives)"
    assert [child.detail for child in symbols[0].children] == ["ε"]


def test_rule_without_alternatives_has_no_children() -> None:
    symbols = build_document_symbols(GrammarAst(rules=[Rule(name="empty", location=loc(2, 1))]))
    assert symbols[0].children is None


def test_outline_without_ast_is_empty(dispatcher: Dispatcher, engine) -> None:
    engine.ast = None
    open_calc(dispatcher)
    dispatcher.session.documents.update_ast(CALC_URI, None)
    assert _symbols(dispatcher) == []
