"""Semantic tokens for grammar files.

Each line is scanned once, left to right.  Block comments are recognised only
when they open and close on the same line; folding handles the multi-line
case separately.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Set

from lsprotocol.types import SemanticTokens, SemanticTokensParams

from ..protocol import TOKEN_TYPES
from ..session import SessionContext
from ..symbols import SymbolIndex
from ..text import split_lines

KEYWORDS = frozenset(
    {
        "%token",
        "%type",
        "%left",
        "%right",
        "%nonassoc",
        "%precedence",
        "%prec",
        "%union",
        "%start",
        "%define",
        "%code",
        "%expect",
        "%empty",
        "%destructor",
        "%printer",
    }
)

OPERATORS = frozenset("{}:;|")

_KEYWORD = re.compile(r"%[a-z]+")
_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def token_type_index(name: str) -> int:
    try:
        return TOKEN_TYPES.index(name)
    except ValueError:
        return TOKEN_TYPES.index("variable")


KEYWORD = token_type_index("keyword")
COMMENT = token_type_index("comment")
STRING = token_type_index("string")
OPERATOR = token_type_index("operator")
TOKEN_NAME = token_type_index("enumMember")
RULE_NAME = token_type_index("function")
VARIABLE = token_type_index("variable")


@dataclass(frozen=True)
class SemanticToken:
    line: int
    start: int
    length: int
    token_type: int
    modifiers: int = 0


def string_length(line: str, start: int) -> Optional[int]:
    """Length of the quoted string opening at *start*, or ``None`` if unterminated."""

    quote = line[start]
    end = start + 1
    while end < len(line):
        if line[end] == quote and line[end - 1] != "\\":
            return end - start + 1
        end += 1
    return None


def tokenize_line(line: str, line_index: int, tokens: Set[str], rules: Set[str]) -> List[SemanticToken]:
    found: List[SemanticToken] = []
    pos = 0
    while pos < len(line):
        char = line[pos]
        if char.isspace():
            pos += 1
            continue

        if char == "%":
            match = _KEYWORD.match(line, pos)
            if match and match.group() in KEYWORDS:
                found.append(SemanticToken(line_index, pos, len(match.group()), KEYWORD))
                pos = match.end()
                continue

        if line.startswith("//", pos):
            found.append(SemanticToken(line_index, pos, len(line) - pos, COMMENT))
            break

        if line.startswith("/*", pos):
            close = line.find("*/", pos + 2)
            if close != -1:
                found.append(SemanticToken(line_index, pos, close + 2 - pos, COMMENT))
                pos = close + 2
                continue

        if char in "\"'":
            length = string_length(line, pos)
            if length is None:
                break
            found.append(SemanticToken(line_index, pos, length, STRING))
            pos += length
            continue

        match = _IDENTIFIER.match(line, pos)
        if match:
            word = match.group()
            if word in tokens:
                token_type = TOKEN_NAME
            elif word in rules:
                token_type = RULE_NAME
            else:
                token_type = VARIABLE
            found.append(SemanticToken(line_index, pos, len(word), token_type))
            pos = match.end()
            continue

        if char in OPERATORS:
            found.append(SemanticToken(line_index, pos, 1, OPERATOR))

        pos += 1
    return found


def encode_tokens(tokens: Iterable[SemanticToken]) -> List[int]:
    """Delta-encode *tokens* into the flat integer list the protocol expects."""

    data: List[int] = []
    prev_line = 0
    prev_start = 0
    for token in sorted(tokens, key=lambda tok: (tok.line, tok.start)):
        delta_line = token.line - prev_line
        delta_start = token.start - prev_start if delta_line == 0 else token.start
        data.extend((delta_line, delta_start, token.length, token.token_type, token.modifiers))
        prev_line = token.line
        prev_start = token.start
    return data


def build_semantic_tokens(text: str, tokens: Set[str], rules: Set[str]) -> List[int]:
    found: List[SemanticToken] = []
    for index, line in enumerate(split_lines(text)):
        found.extend(tokenize_line(line, index, tokens, rules))
    return encode_tokens(found)


def semantic_tokens_full(session: SessionContext, params: SemanticTokensParams) -> SemanticTokens:
    record = session.documents.get(params.text_document.uri)
    if record is None or record.ast is None:
        return SemanticTokens(data=[])
    index = SymbolIndex(record.ast)
    return SemanticTokens(data=build_semantic_tokens(record.text, index.token_set(), index.rule_set()))


__all__ = [
    "KEYWORDS",
    "OPERATORS",
    "SemanticToken",
    "build_semantic_tokens",
    "encode_tokens",
    "semantic_tokens_full",
    "string_length",
    "token_type_index",
    "tokenize_line",
]
