"""Caret-independent queries: word boundaries, bracket matching and search."""

from __future__ import annotations

import re
from bisect import bisect_right
from typing import List, Optional, Sequence

from code_engine.buffer import Position, TextBuffer, TextRange
from code_engine.completion.provider import is_word_char

BRACKET_PAIRS = {"(": ")", "[": "]", "{": "}"}
CLOSING_BRACKETS = {close: open_ for open_, close in BRACKET_PAIRS.items()}


def word_boundary(buffer: TextBuffer, position: Position, direction: int) -> Position:
    """Start of the previous word (``direction < 0``) or of the next one."""

    position = buffer.clamp(position)
    line = buffer.get_line(position.line)
    col = position.column
    if direction < 0:
        if col == 0:
            if position.line > 0:
                return Position(position.line - 1, buffer.get_line_length(position.line - 1))
            return position
        col -= 1
        while col > 0 and not is_word_char(line[col]):
            col -= 1
        while col > 0 and is_word_char(line[col - 1]):
            col -= 1
        return Position(position.line, col)

    if col >= len(line):
        if position.line < buffer.line_count - 1:
            return Position(position.line + 1, 0)
        return position
    while col < len(line) and is_word_char(line[col]):
        col += 1
    while col < len(line) and not is_word_char(line[col]):
        col += 1
    return Position(position.line, col)


def find_matching_bracket(buffer: TextBuffer, position: Position) -> Optional[Position]:
    """Partner of the bracket under or just before ``position``."""

    position = buffer.clamp(position)
    line = buffer.get_line(position.line)
    col = position.column
    if col < len(line) and (line[col] in BRACKET_PAIRS or line[col] in CLOSING_BRACKETS):
        bracket = line[col]
    elif col > 0 and (line[col - 1] in BRACKET_PAIRS or line[col - 1] in CLOSING_BRACKETS):
        col -= 1
        bracket = line[col]
    else:
        return None

    depth = 0
    if bracket in BRACKET_PAIRS:
        target = BRACKET_PAIRS[bracket]
        for index in range(position.line, buffer.line_count):
            text = buffer.get_line(index)
            start = col if index == position.line else 0
            for j in range(start, len(text)):
                if text[j] == bracket:
                    depth += 1
                elif text[j] == target:
                    depth -= 1
                    if depth == 0:
                        return Position(index, j)
        return None

    target = CLOSING_BRACKETS[bracket]
    for index in range(position.line, -1, -1):
        text = buffer.get_line(index)
        start = col if index == position.line else len(text) - 1
        for j in range(start, -1, -1):
            if text[j] == bracket:
                depth += 1
            elif text[j] == target:
                depth -= 1
                if depth == 0:
                    return Position(index, j)
    return None


def _locate(offset: int, starts: Sequence[int]) -> Position:
    line = bisect_right(starts, offset) - 1
    return Position(line, offset - starts[line])


def find_all(text: str, needle: str, case_sensitive: bool = False) -> List[TextRange]:
    if not needle:
        return []
    pattern = re.compile(re.escape(needle), 0 if case_sensitive else re.IGNORECASE)
    starts = [0]
    for index, char in enumerate(text):
        if char == "\n":
            starts.append(index + 1)

    return [
        TextRange(_locate(match.start(), starts), _locate(match.end(), starts))
        for match in pattern.finditer(text)
    ]


def replace_all(
    buffer: TextBuffer,
    ranges: Sequence[TextRange],
    replacement: str,
    caret: Position = Position(),
) -> int:
    """Replace every range as a single undo step; returns the count replaced."""

    if not ranges:
        return 0
    with buffer.composite(caret) as group:
        for span in sorted(ranges, key=lambda r: r.start, reverse=True):
            buffer.delete(span.start, span.end)
            buffer.insert(span.start, replacement)
        group.caret_after = buffer.clamp(caret)
    return len(ranges)


__all__ = [
    "BRACKET_PAIRS",
    "find_all",
    "find_matching_bracket",
    "replace_all",
    "word_boundary",
]
