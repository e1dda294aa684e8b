"""Go-to-definition handler."""

from __future__ import annotations

from typing import Optional

from lsprotocol.types import DefinitionParams, Location

from ..protocol import name_range
from ..session import SessionContext
from ..symbols import SymbolIndex
from ..text import resolve_position, split_lines


def definition(session: SessionContext, params: DefinitionParams) -> Optional[Location]:
    uri = params.text_document.uri
    record = session.documents.get(uri)
    if record is None or record.ast is None:
        return None
    name = resolve_position(record.text, params.position)
    if name is None:
        return None
    start = SymbolIndex(record.ast).declaration_position(name, split_lines(record.text))
    if start is None:
        return None
    return Location(uri=uri, range=name_range(start, name))


__all__ = ["definition"]
