"""Base class for Grammar Engine backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, Mapping, Optional, Union

from .ast import GrammarAst, Offense

ParseOutput = Union[GrammarAst, Mapping[str, Any], None]
OffenseOutput = Union[Offense, Mapping[str, Any]]


class GrammarEngine(ABC):
    """The analysis operations the language server relies on.

    Backends do not have to inherit from this class; any object with these
    four methods is accepted by :class:`~collie_lsp.engine.wrapper.EngineWrapper`.
    Results may be schema instances or plain mappings of the same shape.
    """

    @abstractmethod
    def parse(self, source: str, filename: str) -> ParseOutput:
        """Return the grammar AST for *source*, or ``None`` if it does not parse."""

    @abstractmethod
    def lint(self, source: str, filename: str) -> Iterable[OffenseOutput]:
        """Return every offense found in *source*."""

    @abstractmethod
    def format(self, source: str, filename: str) -> Optional[str]:
        """Return *source* reformatted, or ``None`` when it cannot be formatted."""

    @abstractmethod
    def autocorrect(self, source: str, filename: str) -> str:
        """Return *source* with every auto-correctable offense fixed."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class NullEngine(GrammarEngine):
    """Backend used when no grammar engine is configured.

    Nothing parses, nothing is reported, and formatting leaves text alone.
    """

    def __init__(self, config: Optional[Mapping[str, Any]] = None) -> None:
        self.config = dict(config or {})

    def parse(self, source: str, filename: str) -> ParseOutput:
        return None

    def lint(self, source: str, filename: str) -> Iterable[OffenseOutput]:
        return []

    def format(self, source: str, filename: str) -> Optional[str]:
        return source

    def autocorrect(self, source: str, filename: str) -> str:
        return source


__all__ = ["GrammarEngine", "NullEngine", "ParseOutput", "OffenseOutput"]
