"""Raw-text scanners shared by the position based features.

Everything here works on plain strings and 0-based editor coordinates and
knows nothing about the grammar AST.
"""

from __future__ import annotations

import re
from typing import Iterator, List, Optional, Protocol, Sequence, Tuple

from lsprotocol.types import Position, PositionEncodingKind
from pygls.workspace import PositionCodec

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_IDENTIFIER_CHAR = re.compile(r"[A-Za-z0-9_]")

STATEMENT_TERMINATOR = ";"

# Clients count columns in UTF-16 code units.
_CODEC = PositionCodec(PositionEncodingKind.Utf16)


class PositionLike(Protocol):
    line: int
    character: int


def split_lines(text: str) -> List[str]:
    """Split *text* on LSP line breaks (``\\n``, ``\\r\\n``, ``\\r``)."""

    return _LINE_BREAK.split(text)


def is_identifier_char(char: str) -> bool:
    return bool(char) and _IDENTIFIER_CHAR.fullmatch(char) is not None


def word_span(line: str, character: int) -> Optional[Tuple[int, int]]:
    """Return ``(start, end)`` of the identifier touching *character* on *line*."""

    if character < 0:
        return None
    start = end = min(character, len(line))
    while start > 0 and is_identifier_char(line[start - 1]):
        start -= 1
    while end < len(line) and is_identifier_char(line[end]):
        end += 1
    if start == end:
        return None
    return start, end


def resolve_position(text: str, position: PositionLike) -> Optional[str]:
    """Return the identifier under *position*, or ``None``.

    The word extends left and then right over ``[A-Za-z0-9_]``.  This rule is
    used unchanged by hover, definition, references and rename.
    """

    if position.line < 0:
        return None
    lines = split_lines(text)
    if position.line >= len(lines):
        return None
    line = lines[position.line]
    span = word_span(line, position.character)
    if span is None:
        return None
    return line[span[0] : span[1]]


def find_whole_word(line: str, word: str) -> Iterator[int]:
    """Yield every column where *word* occurs on *line* as a whole word."""

    if not word:
        return
    column = line.find(word)
    while column != -1:
        before = line[column - 1] if column > 0 else ""
        after = line[column + len(word)] if column + len(word) < len(line) else ""
        if not is_identifier_char(before) and not is_identifier_char(after):
            yield column
        column = line.find(word, column + 1)


def find_statement_end(lines: Sequence[str], start_line: int) -> int:
    """Return the first line at or after *start_line* holding a ``;``.

    Falls back to the last line of the document.
    """

    for index in range(max(start_line, 0), len(lines)):
        if STATEMENT_TERMINATOR in lines[index]:
            return index
    return len(lines) - 1


def scan_statement(lines: Sequence[str], start_line: int, word: str) -> List[Tuple[int, int]]:
    """Whole-word matches of *word* from *start_line* to the end of its statement."""

    if start_line < 0 or start_line >= len(lines):
        return []
    matches: List[Tuple[int, int]] = []
    for index in range(start_line, find_statement_end(lines, start_line) + 1):
        matches.extend((index, column) for column in find_whole_word(lines[index], word))
    return matches


def find_matching_brace(lines: Sequence[str], start_line: int, start_column: int) -> Optional[int]:
    """Return the line holding the ``}`` that balances the ``{`` at the given spot."""

    depth = 1
    for index in range(start_line, len(lines)):
        line = lines[index]
        first = start_column + 1 if index == start_line else 0
        for char in line[first:]:
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return index
    return None


def offset_at(text: str, position: PositionLike) -> int:
    """Convert a 0-based editor position into an index into *text*.

    Lines and characters past the end are clamped.
    """

    offset = 0
    line_index = max(position.line, 0)
    for match_index, match in enumerate(_LINE_BREAK.finditer(text)):
        if match_index == line_index:
            line_length = match.start() - offset
            return offset + min(max(position.character, 0), line_length)
        offset = match.end()
    return offset + min(max(position.character, 0), len(text) - offset)


def from_client_units(lines: Sequence[str], position: PositionLike) -> Position:
    """Turn a UTF-16 client column into a code point index on the same line."""

    if not 0 <= position.line < len(lines):
        return Position(line=max(position.line, 0), character=max(position.character, 0))
    return _CODEC.position_from_client_units(list(lines), Position(line=position.line, character=position.character))


def apply_content_changes(text: str, changes: Sequence[object]) -> str:
    """Apply ``didChange`` content changes to *text* in order.

    A change without a ``range`` replaces the whole document.  Range columns
    arrive in UTF-16 code units.
    """

    for change in changes:
        change_range = getattr(change, "range", None)
        new_text = getattr(change, "text", "")
        if change_range is None:
            text = new_text
            continue
        lines = split_lines(text)
        start = offset_at(text, from_client_units(lines, change_range.start))
        end = offset_at(text, from_client_units(lines, change_range.end))
        text = text[:start] + new_text + text[max(start, end) :]
    return text


def document_end(text: str) -> Tuple[int, int]:
    """Return the 0-based ``(line, character)`` just past the last character."""

    lines = split_lines(text)
    return len(lines) - 1, len(lines[-1])


__all__ = [
    "PositionLike",
    "STATEMENT_TERMINATOR",
    "split_lines",
    "is_identifier_char",
    "word_span",
    "resolve_position",
    "find_whole_word",
    "from_client_units",
    "find_statement_end",
    "scan_statement",
    "find_matching_brace",
    "document_end",
    "offset_at",
    "apply_content_changes",
]
