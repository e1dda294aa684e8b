"""Find-references handler."""

from __future__ import annotations

from typing import List

from lsprotocol.types import Location, ReferenceParams

from ..protocol import name_range
from ..session import SessionContext
from ..symbols import SymbolIndex
from ..text import resolve_position, split_lines


def find_references(
    index: SymbolIndex,
    name: str,
    uri: str,
    text: str,
    include_declaration: bool,
) -> List[Location]:
    positions = index.reference_positions(name, split_lines(text), include_declaration)
    return [Location(uri=uri, range=name_range(position, name)) for position in positions]


def references(session: SessionContext, params: ReferenceParams) -> List[Location]:
    uri = params.text_document.uri
    record = session.documents.get(uri)
    if record is None or record.ast is None:
        return []
    name = resolve_position(record.text, params.position)
    if name is None:
        return []
    include_declaration = params.context.include_declaration if params.context is not None else True
    return find_references(SymbolIndex(record.ast), name, uri, record.text, include_declaration)


__all__ = ["find_references", "references"]
