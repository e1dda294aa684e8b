"""Hover handler."""

from __future__ import annotations

from typing import Optional

from lsprotocol.types import Hover, HoverParams, MarkupContent, MarkupKind

from ..engine.ast import GrammarAst, TokenDeclaration
from ..session import SessionContext
from ..symbols import SymbolIndex
from ..text import resolve_position


def hover_text(ast: GrammarAst, name: str) -> Optional[str]:
    index = SymbolIndex(ast)
    declaration = index.declaration(name)
    if declaration is None:
        return None
    if isinstance(declaration.node, TokenDeclaration):
        return f"**Token**: `{name}`\n\nType: `{declaration.node.type_tag or 'none'}`"
    count = len(declaration.node.alternatives)
    text = f"**Nonterminal**: `{name}`\n\n{count} alternative(s)"
    type_tag = index.type_tag_for(name)
    if type_tag:
        text += f"\n\nType: `{type_tag}`"
    return text


def hover(session: SessionContext, params: HoverParams) -> Optional[Hover]:
    record = session.documents.get(params.text_document.uri)
    if record is None or record.ast is None:
        return None
    name = resolve_position(record.text, params.position)
    if name is None:
        return None
    value = hover_text(record.ast, name)
    if value is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.Markdown, value=value))


__all__ = ["hover", "hover_text"]
