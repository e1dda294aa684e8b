"""Document level state tracking for the grammar language server."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from lsprotocol.types import Diagnostic

from .engine.ast import GrammarAst
from .text import split_lines

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentRecord:
    """Immutable snapshot of one open document.

    ``ast`` is only ever present when it was derived from ``text``.
    ``diagnostics`` come from the last analysis that completed and may lag
    behind ``text`` when that analysis failed.
    """

    uri: str
    text: str
    version: int
    ast: Optional[GrammarAst] = None
    diagnostics: Tuple[Diagnostic, ...] = field(default_factory=tuple)

    @property
    def lines(self) -> List[str]:
        return split_lines(self.text)


class DocumentStore:
    """Owns one :class:`DocumentRecord` per open URI.

    Records are replaced wholesale on every write, so a snapshot handed out by
    :meth:`get` never changes underneath its reader.  Every mutator is a
    silent no-op for a URI that is not open, because edits and closes can
    race in a real client.
    """

    def __init__(self) -> None:
        self._documents: Dict[str, DocumentRecord] = {}

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------
    def open(self, uri: str, text: str, version: int) -> DocumentRecord:
        record = DocumentRecord(uri=uri, text=text, version=version)
        self._documents[uri] = record
        return record

    def change(self, uri: str, text: str, version: int) -> Optional[DocumentRecord]:
        """Replace the text and version of *uri* and drop its cached AST.

        The write is conditional: a *version* older than the stored one
        leaves the record untouched, cached AST included, and the current
        record is returned.  ``None`` means *uri* is not open.
        """

        record = self._documents.get(uri)
        if record is None:
            logger.debug("Ignoring change for unknown document %s", uri)
            return None
        if version < record.version:
            logger.debug("Ignoring stale change for %s (version %s < %s)", uri, version, record.version)
            return record
        updated = replace(record, text=text, version=version, ast=None)
        self._documents[uri] = updated
        return updated

    def get(self, uri: str) -> Optional[DocumentRecord]:
        return self._documents.get(uri)

    def close(self, uri: str) -> None:
        if self._documents.pop(uri, None) is None:
            logger.debug("Ignoring close for unknown document %s", uri)

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------
    def update_ast(self, uri: str, ast: Optional[GrammarAst]) -> None:
        record = self._documents.get(uri)
        if record is None:
            return
        self._documents[uri] = replace(record, ast=ast)

    def update_diagnostics(self, uri: str, diagnostics: Sequence[Diagnostic]) -> None:
        record = self._documents.get(uri)
        if record is None:
            return
        self._documents[uri] = replace(record, diagnostics=tuple(diagnostics))

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------
    def __contains__(self, uri: object) -> bool:
        return uri in self._documents

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[DocumentRecord]:
        return iter(list(self._documents.values()))


__all__ = ["DocumentRecord", "DocumentStore"]
