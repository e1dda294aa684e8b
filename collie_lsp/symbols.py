"""Read-only symbol lookups over a cached grammar AST."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Literal, Optional, Sequence, Set, Tuple, Union

from lsprotocol.types import Position

from .engine.ast import GrammarAst, Rule, SourceLocation, TokenDeclaration
from .protocol import to_position
from .text import find_whole_word, scan_statement

SymbolKindName = Literal["token", "rule"]


@dataclass(frozen=True)
class SymbolDeclaration:
    name: str
    kind: SymbolKindName
    location: Optional[SourceLocation]
    node: Union[TokenDeclaration, Rule]

    @property
    def is_token(self) -> bool:
        return self.kind == "token"


class SymbolIndex:
    """Answers "where is X declared" and "where is X used" for one AST.

    Tokens and nonterminals live in separate namespaces that may overlap.
    Token declarations are always consulted first, so a name declared as both
    resolves to the token.
    """

    def __init__(self, ast: GrammarAst) -> None:
        self.ast = ast

    # ------------------------------------------------------------------
    # Name sets
    # ------------------------------------------------------------------
    def token_names(self) -> List[str]:
        names: List[str] = []
        for decl in self.ast.token_declarations():
            names.extend(decl.names)
        return names

    def rule_names(self) -> List[str]:
        return [rule.name for rule in self.ast.rules]

    def token_set(self) -> Set[str]:
        return set(self.token_names())

    def rule_set(self) -> Set[str]:
        return set(self.rule_names())

    def is_token(self, name: str) -> bool:
        return any(name in decl.names for decl in self.ast.token_declarations())

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def declaration(self, name: str) -> Optional[SymbolDeclaration]:
        for decl in self.ast.token_declarations():
            if name in decl.names:
                return SymbolDeclaration(name=name, kind="token", location=decl.location, node=decl)
        rule = self.rule(name)
        if rule is not None:
            return SymbolDeclaration(name=name, kind="rule", location=rule.location, node=rule)
        return None

    def rule(self, name: str) -> Optional[Rule]:
        for rule in self.ast.rules:
            if rule.name == name:
                return rule
        return None

    def type_tag_for(self, name: str) -> Optional[str]:
        """Semantic value type of *name* from ``%token <tag>`` or ``%type <tag>``."""

        for decl in self.ast.token_declarations():
            if name in decl.names and decl.type_tag:
                return decl.type_tag
        for decl in self.ast.type_declarations():
            if name in decl.names and decl.type_tag:
                return decl.type_tag
        return None

    def declaration_position(self, name: str, lines: Optional[Sequence[str]] = None) -> Optional[Position]:
        """Editor position of the declaration of *name*, if it has a location.

        A declaration such as ``%token PLUS MINUS`` carries one location for
        all of its names.  Given the document *lines*, the position moves to
        the first whole-word match of *name* at or after that location on the
        same line.
        """

        declaration = self.declaration(name)
        if declaration is None or declaration.location is None:
            return None
        position = to_position(declaration.location)
        if lines is not None and 0 <= position.line < len(lines):
            for column in find_whole_word(lines[position.line], name):
                if column >= position.character:
                    return Position(line=position.line, character=column)
        return position

    def occurrences(self, name: str, lines: Sequence[str]) -> List[Position]:
        """Approximate usages of *name* inside rule bodies.

        Only one location per rule is known, so every rule with a location is
        scanned from its first line up to the next ``;``.  Matches outside
        rule bodies are missed and a ``;`` inside an action block ends a scan
        early.
        """

        seen: Set[Tuple[int, int]] = set()
        found: List[Position] = []
        for start_line in self._rule_start_lines():
            for line, column in scan_statement(lines, start_line, name):
                if (line, column) in seen:
                    continue
                seen.add((line, column))
                found.append(Position(line=line, character=column))
        return found

    def reference_positions(self, name: str, lines: Sequence[str], include_declaration: bool = True) -> List[Position]:
        """Declaration (optionally) followed by every occurrence, each position once."""

        candidates: List[Position] = []
        if include_declaration:
            declared = self.declaration_position(name, lines)
            if declared is not None:
                candidates.append(declared)
        candidates.extend(self.occurrences(name, lines))

        seen: Set[Tuple[int, int]] = set()
        positions: List[Position] = []
        for position in candidates:
            key = (position.line, position.character)
            if key not in seen:
                seen.add(key)
                positions.append(position)
        return positions

    def _rule_start_lines(self) -> Iterator[int]:
        for rule in self.ast.rules:
            if rule.location is not None:
                yield to_position(rule.location).line


__all__ = ["SymbolDeclaration", "SymbolIndex"]
