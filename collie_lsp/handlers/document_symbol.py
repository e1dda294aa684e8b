"""Document outline: declarations first, then rules with their alternatives."""

from __future__ import annotations

from typing import List, Optional

from lsprotocol.types import DocumentSymbol, DocumentSymbolParams, SymbolKind

from ..engine.ast import GrammarAst, Rule, SourceLocation
from ..protocol import name_range, to_position
from ..session import SessionContext


def make_symbol(
    name: str,
    kind: SymbolKind,
    location: SourceLocation,
    detail: Optional[str] = None,
    children: Optional[List[DocumentSymbol]] = None,
) -> DocumentSymbol:
    span = name_range(to_position(location), name)
    return DocumentSymbol(
        name=name,
        kind=kind,
        range=span,
        selection_range=span,
        detail=detail,
        children=children or None,
    )


def rule_children(rule: Rule) -> List[DocumentSymbol]:
    children: List[DocumentSymbol] = []
    for number, alternative in enumerate(rule.alternatives, start=1):
        if alternative.location is None:
            continue
        children.append(
            make_symbol(f"Alternative {number}", SymbolKind.Method, alternative.location, detail=alternative.describe())
        )
    return children


def build_document_symbols(ast: GrammarAst) -> List[DocumentSymbol]:
    symbols: List[DocumentSymbol] = []
    for token_decl in ast.token_declarations():
        if token_decl.location is None:
            continue
        for name in token_decl.names:
            symbols.append(make_symbol(name, SymbolKind.Constant, token_decl.location, detail="Token"))
    for type_decl in ast.type_declarations():
        if type_decl.location is None:
            continue
        for name in type_decl.names:
            symbols.append(make_symbol(name, SymbolKind.Property, type_decl.location, detail="Type"))
    for prec_decl in ast.precedence_declarations():
        if prec_decl.location is None:
            continue
        for name in prec_decl.tokens:
            symbols.append(
                make_symbol(
                    name, SymbolKind.EnumMember, prec_decl.location, detail=f"{prec_decl.associativity} precedence"
                )
            )
    for rule in ast.rules:
        if rule.location is None:
            continue
        symbols.append(
            make_symbol(
                rule.name,
                SymbolKind.Function,
                rule.location,
                detail=f"Grammar rule ({len(rule.alternatives)} alternatives)",
                children=rule_children(rule),
            )
        )
    return symbols


def document_symbol(session: SessionContext, params: DocumentSymbolParams) -> List[DocumentSymbol]:
    record = session.documents.get(params.text_document.uri)
    if record is None or record.ast is None:
        return []
    return build_document_symbols(record.ast)


__all__ = ["build_document_symbols", "document_symbol", "make_symbol", "rule_children"]
