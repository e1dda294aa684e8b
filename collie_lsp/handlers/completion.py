"""Completion handler."""

from __future__ import annotations

import re
from typing import List

from lsprotocol.types import (
    CompletionItem,
    CompletionItemKind,
    CompletionParams,
    Position,
    Range,
    TextEdit,
)

from ..engine.ast import GrammarAst
from ..session import SessionContext
from ..text import split_lines
from .semantic_tokens import KEYWORDS

_DIRECTIVE_PREFIX = re.compile(r"(?<!%)%[a-z]*$")


def grammar_completions(ast: GrammarAst) -> List[CompletionItem]:
    items: List[CompletionItem] = []
    for decl in ast.token_declarations():
        for name in decl.names:
            items.append(
                CompletionItem(
                    label=name,
                    kind=CompletionItemKind.Keyword,
                    detail=f"Token: {name}",
                    documentation="Declared token",
                )
            )
    for rule in ast.rules:
        items.append(
            CompletionItem(
                label=rule.name,
                kind=CompletionItemKind.Class,
                detail=f"Nonterminal: {rule.name}",
                documentation="Grammar rule",
            )
        )
    return items


def directive_completions(prefix: str, position: Position) -> List[CompletionItem]:
    """Directive keywords starting with *prefix*, replacing it in place."""

    start = Position(line=position.line, character=position.character - len(prefix))
    replace = Range(start=start, end=position)
    return [
        CompletionItem(
            label=keyword,
            kind=CompletionItemKind.Keyword,
            detail="Directive",
            text_edit=TextEdit(range=replace, new_text=keyword),
        )
        for keyword in sorted(KEYWORDS)
        if keyword.startswith(prefix)
    ]


def completion(session: SessionContext, params: CompletionParams) -> List[CompletionItem]:
    record = session.documents.get(params.text_document.uri)
    if record is None:
        return []
    lines = split_lines(record.text)
    position = params.position
    if 0 <= position.line < len(lines):
        line = lines[position.line]
        cursor = Position(line=position.line, character=min(position.character, len(line)))
        match = _DIRECTIVE_PREFIX.search(line[: cursor.character])
        if match:
            return directive_completions(match.group(), cursor)
    if record.ast is None:
        return []
    return grammar_completions(record.ast)


__all__ = ["completion", "directive_completions", "grammar_completions"]
