"""Folding ranges.

Three independent scanners contribute ranges: rules with several
alternatives (from the AST), delimited ``%{``/``%}`` and ``/* */`` blocks,
and brace balanced action blocks.  Their results are merged and sorted but
never de-overlapped.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from lsprotocol.types import FoldingRange, FoldingRangeKind, FoldingRangeParams

from ..engine.ast import GrammarAst
from ..protocol import to_position
from ..session import SessionContext
from ..text import find_matching_brace, split_lines

# Fold length used for the last rule, whose end is not known from the AST.
LAST_RULE_SPAN = 10


def fold(start_line: int, end_line: int, kind: FoldingRangeKind = FoldingRangeKind.Region) -> FoldingRange:
    return FoldingRange(start_line=start_line, end_line=end_line, kind=kind)


def rule_folding_ranges(ast: GrammarAst, line_count: int) -> List[FoldingRange]:
    ranges: List[FoldingRange] = []
    rules = ast.rules
    last_line = max(line_count - 1, 0)
    for index, rule in enumerate(rules):
        if rule.location is None or len(rule.alternatives) < 2:
            continue
        start = to_position(rule.location).line
        end: Optional[int] = None
        if index + 1 < len(rules):
            following = rules[index + 1].location
            if following is not None:
                end = to_position(following).line - 1
        if end is None:
            end = min(start + LAST_RULE_SPAN, last_line)
        if end > start:
            ranges.append(fold(start, end))
    return ranges


def comment_folding_ranges(lines: Sequence[str]) -> List[FoldingRange]:
    ranges: List[FoldingRange] = []
    start: Optional[int] = None
    for index, line in enumerate(lines):
        if start is None:
            opening = line.find("/*")
            if opening != -1 and line.find("*/", opening + 2) == -1:
                start = index
        elif "*/" in line:
            ranges.append(fold(start, index, FoldingRangeKind.Comment))
            start = None
    return ranges


def code_block_folding_ranges(lines: Sequence[str]) -> List[FoldingRange]:
    ranges: List[FoldingRange] = []
    start: Optional[int] = None
    for index, line in enumerate(lines):
        stripped = line.strip()
        if start is None and stripped == "%{":
            start = index
        elif start is not None and stripped == "%}":
            if index > start:
                ranges.append(fold(start, index))
            start = None
    return ranges


def action_block_folding_ranges(lines: Sequence[str]) -> List[FoldingRange]:
    ranges: List[FoldingRange] = []
    for index, line in enumerate(lines):
        column = line.find("{")
        if column == -1:
            continue
        end = find_matching_brace(lines, index, column)
        if end is not None and end > index:
            ranges.append(fold(index, end))
    return ranges


def build_folding_ranges(text: str, ast: Optional[GrammarAst]) -> List[FoldingRange]:
    lines = split_lines(text)
    ranges: List[FoldingRange] = []
    if ast is not None:
        ranges.extend(rule_folding_ranges(ast, len(lines)))
    ranges.extend(comment_folding_ranges(lines))
    ranges.extend(code_block_folding_ranges(lines))
    ranges.extend(action_block_folding_ranges(lines))
    ranges.sort(key=lambda item: (item.start_line, item.end_line))
    return ranges


def folding_range(session: SessionContext, params: FoldingRangeParams) -> List[FoldingRange]:
    record = session.documents.get(params.text_document.uri)
    if record is None:
        return []
    return build_folding_ranges(record.text, record.ast)


__all__ = [
    "LAST_RULE_SPAN",
    "action_block_folding_ranges",
    "build_folding_ranges",
    "code_block_folding_ranges",
    "comment_folding_ranges",
    "folding_range",
    "rule_folding_ranges",
]
