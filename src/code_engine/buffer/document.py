"""Line storage for the text buffer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from .position import Position, TextRange


def split_lines(text: str) -> List[str]:
    """Split ``text`` on any line break; the result is never empty."""

    if not text:
        return [""]
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


@dataclass(slots=True)
class TextDocument:
    """Mutable list-of-lines document.

    The raw ``insert_raw``/``delete_raw`` primitives do no history
    bookkeeping; :class:`~code_engine.buffer.buffer.TextBuffer` owns that.
    Read accessors tolerate stale coordinates and never raise.
    """

    _lines: List[str] = field(default_factory=lambda: [""])

    @classmethod
    def from_text(cls, text: str) -> "TextDocument":
        return cls(_lines=split_lines(text))

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def end_position(self) -> Position:
        last = len(self._lines) - 1
        return Position(last, len(self._lines[last]))

    def snapshot(self) -> Sequence[str]:
        return tuple(self._lines)

    def get_line(self, index: int) -> str:
        if index < 0 or index >= len(self._lines):
            return ""
        return self._lines[index]

    def get_line_length(self, index: int) -> int:
        return len(self.get_line(index))

    def clamp(self, position: Position) -> Position:
        if position.line < 0:
            return Position(0, 0)
        if position.line >= len(self._lines):
            return self.end_position
        length = len(self._lines[position.line])
        return Position(position.line, max(0, min(position.column, length)))

    def get_text(self, start: Position, end: Position) -> str:
        span = TextRange(self.clamp(start), self.clamp(end))
        first, last = span.start, span.end
        if first.line == last.line:
            return self._lines[first.line][first.column : last.column]
        parts = [self._lines[first.line][first.column :]]
        parts.extend(self._lines[first.line + 1 : last.line])
        parts.append(self._lines[last.line][: last.column])
        return "\n".join(parts)

    def offset_of(self, position: Position) -> int:
        position = self.clamp(position)
        return sum(len(line) + 1 for line in self._lines[: position.line]) + position.column

    def position_at(self, offset: int) -> Position:
        running = 0
        for row, line in enumerate(self._lines):
            if offset <= running + len(line):
                return Position(row, max(0, offset - running))
            running += len(line) + 1
        return self.end_position

    def replace_all(self, text: str) -> None:
        self._lines = split_lines(text)

    def insert_raw(self, position: Position, text: str) -> Position:
        position = self.clamp(position)
        line = self._lines[position.line]
        head, tail = line[: position.column], line[position.column :]
        pieces = text.split("\n")
        if len(pieces) == 1:
            self._lines[position.line] = head + text + tail
            return Position(position.line, position.column + len(text))

        new_lines = [head + pieces[0], *pieces[1:-1], pieces[-1] + tail]
        self._lines[position.line : position.line + 1] = new_lines
        return Position(position.line + len(pieces) - 1, len(pieces[-1]))

    def delete_raw(self, position: Position, text: str) -> None:
        """Remove ``text``, known to start at ``position``."""

        breaks = text.count("\n")
        line = self._lines[position.line]
        if breaks == 0:
            self._lines[position.line] = (
                line[: position.column] + line[position.column + len(text) :]
            )
            return

        last_index = position.line + breaks
        tail_start = len(text) - text.rfind("\n") - 1
        merged = line[: position.column] + self._lines[last_index][tail_start:]
        self._lines[position.line : last_index + 1] = [merged]


__all__ = ["TextDocument", "split_lines"]
