"""Boundary between the language server and the external Grammar Engine."""

from __future__ import annotations

from .ast import (
    Alternative,
    GrammarAst,
    GrammarSymbol,
    Offense,
    PrecedenceDeclaration,
    Rule,
    SourceLocation,
    TokenDeclaration,
    TypeDeclaration,
)
from .base import GrammarEngine, NullEngine
from .wrapper import EngineWrapper

__all__ = [
    "Alternative",
    "EngineWrapper",
    "GrammarAst",
    "GrammarEngine",
    "GrammarSymbol",
    "NullEngine",
    "Offense",
    "PrecedenceDeclaration",
    "Rule",
    "SourceLocation",
    "TokenDeclaration",
    "TypeDeclaration",
]
