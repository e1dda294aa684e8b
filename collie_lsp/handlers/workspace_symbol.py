"""Workspace symbol search across every open, parsed document."""

from __future__ import annotations

from typing import Iterable, List

from lsprotocol.types import Location, SymbolInformation, SymbolKind, WorkspaceSymbolParams

from ..engine.ast import GrammarAst, SourceLocation
from ..protocol import name_range, to_position
from ..session import SessionContext
from ..state import DocumentRecord

# Relevance when the query is empty and everything matches.
MATCH_ALL = 0


def matches_query(name: str, query: str) -> bool:
    return not query or query.lower() in name.lower()


def symbol_relevance(name: str, query: str) -> int:
    """Lower is better: exact, then prefix, then substring, then anything else."""

    if not query:
        return MATCH_ALL
    name_lower = name.lower()
    query_lower = query.lower()
    if name_lower == query_lower:
        return 1
    if name_lower.startswith(query_lower):
        return 2
    if query_lower in name_lower:
        return 3
    return 4


def _symbol(name: str, kind: SymbolKind, uri: str, location: SourceLocation, container: str) -> SymbolInformation:
    return SymbolInformation(
        name=name,
        kind=kind,
        location=Location(uri=uri, range=name_range(to_position(location), name)),
        container_name=container,
    )


def document_symbols(uri: str, ast: GrammarAst, query: str) -> List[SymbolInformation]:
    found: List[SymbolInformation] = []
    for token_decl in ast.token_declarations():
        if token_decl.location is None:
            continue
        for name in token_decl.names:
            if matches_query(name, query):
                found.append(_symbol(name, SymbolKind.Constant, uri, token_decl.location, "Tokens"))
    for type_decl in ast.type_declarations():
        if type_decl.location is None:
            continue
        for name in type_decl.names:
            if matches_query(name, query):
                found.append(_symbol(name, SymbolKind.Property, uri, type_decl.location, "Types"))
    for rule in ast.rules:
        if rule.location is not None and matches_query(rule.name, query):
            found.append(_symbol(rule.name, SymbolKind.Function, uri, rule.location, "Rules"))
    return found


def search_symbols(query: str, documents: Iterable[DocumentRecord]) -> List[SymbolInformation]:
    found: List[SymbolInformation] = []
    for record in documents:
        if record.ast is not None:
            found.extend(document_symbols(record.uri, record.ast, query))
    # Ties keep document order.
    return sorted(found, key=lambda symbol: symbol_relevance(symbol.name, query))


def workspace_symbol(session: SessionContext, params: WorkspaceSymbolParams) -> List[SymbolInformation]:
    return search_symbols(params.query or "", session.documents)


__all__ = [
    "MATCH_ALL",
    "document_symbols",
    "matches_query",
    "search_symbols",
    "symbol_relevance",
    "workspace_symbol",
]
