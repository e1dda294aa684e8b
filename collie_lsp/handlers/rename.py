"""Rename handler.

Token names must stay UPPER_CASE and nonterminal names lower_case.  A rename
that breaks the convention produces no edit at all.  A name without a
declaration is still renamed wherever it occurs inside rule bodies.
"""

from __future__ import annotations

import re
from typing import Optional

from lsprotocol.types import RenameParams, TextEdit, WorkspaceEdit

from ..engine.ast import GrammarAst
from ..protocol import name_range
from ..session import SessionContext
from ..symbols import SymbolIndex
from ..text import resolve_position, split_lines

TOKEN_NAME = re.compile(r"[A-Z][A-Z0-9_]*")
RULE_NAME = re.compile(r"[a-z][a-z0-9_]*")


def valid_name(old_name: str, new_name: str, ast: GrammarAst) -> bool:
    if not new_name:
        return False
    pattern = TOKEN_NAME if SymbolIndex(ast).is_token(old_name) else RULE_NAME
    return pattern.fullmatch(new_name) is not None


def build_workspace_edit(uri: str, old_name: str, new_name: str, text: str, ast: GrammarAst) -> WorkspaceEdit:
    edits = [
        TextEdit(range=name_range(position, old_name), new_text=new_name)
        for position in SymbolIndex(ast).reference_positions(old_name, split_lines(text))
    ]
    return WorkspaceEdit(changes={uri: edits})


def rename(session: SessionContext, params: RenameParams) -> Optional[WorkspaceEdit]:
    uri = params.text_document.uri
    record = session.documents.get(uri)
    if record is None or record.ast is None:
        return None
    old_name = resolve_position(record.text, params.position)
    if old_name is None:
        return None
    if not valid_name(old_name, params.new_name, record.ast):
        return None
    return build_workspace_edit(uri, old_name, params.new_name, record.text, record.ast)


__all__ = ["valid_name", "build_workspace_edit", "rename"]
