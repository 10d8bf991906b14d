"""Position and range value types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """A (line, column) caret coordinate; ordered by line, then column."""

    line: int = 0
    column: int = 0

    def __iter__(self) -> Iterator[int]:
        yield self.line
        yield self.column

    def shifted(self, *, lines: int = 0, columns: int = 0) -> "Position":
        return Position(self.line + lines, self.column + columns)

    def __str__(self) -> str:
        return f"({self.line},{self.column})"


@dataclass(frozen=True, slots=True, init=False)
class TextRange:
    """Normalized range: ``start`` never sorts after ``end``."""

    start: Position
    end: Position

    def __init__(self, start: Position, end: Position) -> None:
        if end < start:
            start, end = end, start
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    @property
    def is_multiline(self) -> bool:
        return self.start.line != self.end.line

    def contains(self, position: Position) -> bool:
        return self.start <= position <= self.end


__all__ = ["Position", "TextRange"]
