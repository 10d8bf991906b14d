"""Editing verbs built on :class:`TextBuffer`.

Each verb takes the buffer and the caret it applies to and returns the caret
after the edit. Verbs that touch more than one place are recorded as a single
composite so one undo reverts them.
"""

from __future__ import annotations

from typing import Optional

from code_engine.buffer import Position, TextBuffer, TextRange

from .navigation import BRACKET_PAIRS, word_boundary

QUOTES = ('"', "'")
INDENT_OPENERS = ("{", "(", "[", ":")


def _open_literal(before: str, quote: str) -> Optional[str]:
    """``"single"`` or ``"triple"`` when ``before`` leaves a ``quote`` literal open."""

    triple = quote * 3
    state: Optional[str] = None
    index = 0
    while index < len(before):
        if state is not None and before[index] == "\\":
            index += 2
            continue
        if state != "single" and before.startswith(triple, index):
            state = None if state == "triple" else "triple"
            index += 3
            continue
        if state != "triple" and before[index] == quote:
            state = None if state == "single" else "single"
        index += 1
    return state


def type_character(
    buffer: TextBuffer, caret: Position, char: str, *, auto_close: bool = True
) -> Position:
    caret = buffer.clamp(caret)
    line = buffer.get_line(caret.line)
    col = caret.column
    next_matches = col < len(line) and line[col] == char

    if char in BRACKET_PAIRS.values() and next_matches:
        return caret.shifted(columns=1)

    if char in QUOTES and next_matches:
        state = _open_literal(line[:col], char)
        if state == "triple" and line.startswith(char * 3, col):
            return caret.shifted(columns=3)
        if state == "single":
            return caret.shifted(columns=1)
        # a lone quote after the caret is an unmatched opener: step over it
        if state is None and line[col:].count(char) == 1:
            return caret.shifted(columns=1)

    closing: Optional[str] = None
    if auto_close:
        if char in BRACKET_PAIRS:
            closing = BRACKET_PAIRS[char]
        elif char in QUOTES:
            closing = char * 3 if line[:col].endswith(char * 2) else char

    if closing is None:
        return buffer.insert(caret, char)

    with buffer.composite(caret) as group:
        end = buffer.insert(caret, char + closing)
        group.caret_after = end.shifted(columns=-len(closing))
    return group.caret_after


def leading_whitespace(line: str) -> str:
    return line[: len(line) - len(line.lstrip(" \t"))]


def insert_newline(
    buffer: TextBuffer, caret: Position, tab_width: int = 4, *, auto_indent: bool = True
) -> Position:
    caret = buffer.clamp(caret)
    indent = ""
    if auto_indent:
        line = buffer.get_line(caret.line)
        indent = leading_whitespace(line)
        if line and caret.column > 0:
            last = line[min(caret.column - 1, len(line) - 1)]
            if last in INDENT_OPENERS:
                indent += " " * tab_width
    return buffer.insert(caret, "\n" + indent)


def backspace(
    buffer: TextBuffer, caret: Position, tab_width: int = 4, *, word: bool = False
) -> Position:
    caret = buffer.clamp(caret)
    if caret == Position(0, 0):
        return caret
    if word:
        start = word_boundary(buffer, caret, -1)
    elif caret.column == 0:
        start = Position(caret.line - 1, buffer.get_line_length(caret.line - 1))
    else:
        line = buffer.get_line(caret.line)
        before = line[: caret.column]
        spaces = len(before) - len(before.rstrip(" "))
        width = tab_width if spaces and spaces % tab_width == 0 else 1
        start = Position(caret.line, caret.column - min(width, caret.column))
    buffer.delete(start, caret)
    return start


def delete_forward(buffer: TextBuffer, caret: Position, *, word: bool = False) -> Position:
    caret = buffer.clamp(caret)
    if word:
        end = word_boundary(buffer, caret, 1)
    elif caret.column >= buffer.get_line_length(caret.line):
        if caret.line >= buffer.line_count - 1:
            return caret
        end = Position(caret.line + 1, 0)
    else:
        end = caret.shifted(columns=1)
    buffer.delete(caret, end)
    return caret


def insert_tab(buffer: TextBuffer, caret: Position, tab_width: int = 4) -> Position:
    caret = buffer.clamp(caret)
    return buffer.insert(caret, " " * (tab_width - caret.column % tab_width))


def _outdent_width(line: str, tab_width: int) -> int:
    count = 0
    for char in line[:tab_width]:
        if char == " ":
            count += 1
        elif char == "\t":
            return count + 1
        else:
            break
    return count


def outdent_line(buffer: TextBuffer, caret: Position, tab_width: int = 4) -> Position:
    caret = buffer.clamp(caret)
    width = _outdent_width(buffer.get_line(caret.line), tab_width)
    if not width:
        return caret
    buffer.delete(Position(caret.line, 0), Position(caret.line, width))
    return Position(caret.line, max(0, caret.column - width))


def indent_lines(
    buffer: TextBuffer,
    start_line: int,
    end_line: int,
    tab_width: int = 4,
    *,
    indent: bool = True,
) -> int:
    """Indent or outdent every line in ``start_line..end_line``; returns lines changed."""

    first = max(0, min(start_line, end_line))
    last = min(buffer.line_count - 1, max(start_line, end_line))
    changed = 0
    with buffer.composite(Position(first, 0)) as group:
        for index in range(first, last + 1):
            if indent:
                buffer.insert(Position(index, 0), " " * tab_width)
                changed += 1
                continue
            width = _outdent_width(buffer.get_line(index), tab_width)
            if width:
                buffer.delete(Position(index, 0), Position(index, width))
                changed += 1
        group.caret_after = Position(last, buffer.get_line_length(last))
    return changed


def toggle_line_comment(
    buffer: TextBuffer,
    caret: Position,
    token: Optional[str],
    start_line: Optional[int] = None,
    end_line: Optional[int] = None,
) -> Position:
    """Comment the lines when any is uncommented, otherwise strip the token."""

    caret = buffer.clamp(caret)
    if not token:
        return caret
    first = caret.line if start_line is None else max(0, start_line)
    last = caret.line if end_line is None else min(buffer.line_count - 1, end_line)

    all_commented = all(
        buffer.get_line(index).lstrip().startswith(token)
        for index in range(first, last + 1)
        if buffer.get_line(index).strip()
    )

    delta = 0
    with buffer.composite(caret) as group:
        for index in range(first, last + 1):
            line = buffer.get_line(index)
            if all_commented:
                at = line.find(token)
                if at < 0:
                    continue
                width = len(token)
                if line[at + width : at + width + 1] == " ":
                    width += 1
                buffer.delete(Position(index, at), Position(index, at + width))
                if index == caret.line:
                    delta -= width
            else:
                if not line:
                    continue
                buffer.insert(Position(index, len(leading_whitespace(line))), token + " ")
                if index == caret.line:
                    delta += len(token) + 1
        group.caret_after = Position(caret.line, max(0, caret.column + delta))
    return group.caret_after


def duplicate_line(buffer: TextBuffer, caret: Position) -> Position:
    caret = buffer.clamp(caret)
    line = buffer.get_line(caret.line)
    with buffer.composite(caret) as group:
        buffer.insert(Position(caret.line, len(line)), "\n" + line)
        group.caret_after = caret.shifted(lines=1)
    return group.caret_after


def delete_line(buffer: TextBuffer, caret: Position) -> Position:
    caret = buffer.clamp(caret)
    last = buffer.line_count - 1
    with buffer.composite(caret) as group:
        if buffer.line_count == 1:
            buffer.delete(Position(0, 0), Position(0, buffer.get_line_length(0)))
            after = Position(0, 0)
        elif caret.line == last:
            buffer.delete(
                Position(last - 1, buffer.get_line_length(last - 1)),
                Position(last, buffer.get_line_length(last)),
            )
            after = Position(last - 1, 0)
        else:
            buffer.delete(Position(caret.line, 0), Position(caret.line + 1, 0))
            after = caret
        group.caret_after = buffer.clamp(after)
    return group.caret_after


def transform_case(buffer: TextBuffer, span: TextRange, *, upper: bool) -> Position:
    start, end = buffer.clamp(span.start), buffer.clamp(span.end)
    text = buffer.get_text(start, end)
    if not text:
        return end
    return buffer.replace(start, end, text.upper() if upper else text.lower())


__all__ = [
    "QUOTES",
    "backspace",
    "delete_forward",
    "delete_line",
    "duplicate_line",
    "indent_lines",
    "insert_newline",
    "insert_tab",
    "leading_whitespace",
    "outdent_line",
    "toggle_line_comment",
    "transform_case",
    "type_character",
]
