"""Fold region discovery strategies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol, Sequence

from code_engine.diagnostics.scanner import (
    JAVASCRIPT_SYNTAX,
    PYTHON_SYNTAX,
    LanguageSyntax,
    scan,
)


@dataclass(frozen=True, slots=True)
class FoldRegion:
    start_line: int
    end_line: int
    collapsed: bool = False

    def contains(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line

    def hides(self, line: int) -> bool:
        """True when ``line`` sits strictly between the region's endpoints."""

        return self.collapsed and self.start_line < line < self.end_line


class FoldingProvider(Protocol):
    def fold_regions(self, lines: Sequence[str]) -> List[FoldRegion]:
        """Return regions sorted by start line."""
        ...


class BraceFoldingProvider:
    """Pairs ``{``/``}`` outside comments and literals."""

    def __init__(self, syntax: LanguageSyntax = JAVASCRIPT_SYNTAX) -> None:
        self.syntax = syntax

    def fold_regions(self, lines: Sequence[str]) -> List[FoldRegion]:
        result = scan(lines, self.syntax)
        regions: List[FoldRegion] = []
        stack: List[int] = []
        for line_no, mask in enumerate(result.masks):
            for char in mask:
                if char == "{":
                    stack.append(line_no)
                elif char == "}" and stack:
                    start = stack.pop()
                    if line_no > start:
                        regions.append(FoldRegion(start, line_no))
        regions.sort(key=lambda region: (region.start_line, -region.end_line))
        return regions


BLOCK_KEYWORDS = (
    "def ",
    "class ",
    "if ",
    "elif ",
    "else:",
    "for ",
    "while ",
    "try:",
    "except",
    "finally:",
    "with ",
    "async ",
)


def indent_width(line: str, tab_width: int) -> int:
    width = 0
    for char in line:
        if char == " ":
            width += 1
        elif char == "\t":
            width += tab_width - (width % tab_width)
        else:
            break
    return width


class IndentFoldingProvider:
    """Folds blocks introduced by a trailing ``:`` or a block keyword."""

    def __init__(self, tab_width: int = 4, syntax: LanguageSyntax = PYTHON_SYNTAX) -> None:
        self.tab_width = max(1, tab_width)
        self.syntax = syntax

    def fold_regions(self, lines: Sequence[str]) -> List[FoldRegion]:
        result = scan(lines, self.syntax)
        regions: List[FoldRegion] = []
        total = len(result.lines)
        for line_no in range(total):
            code = result.masks[line_no].strip()
            if not code or result.starts_inside[line_no]:
                continue
            if not (code.endswith(":") or code.startswith(BLOCK_KEYWORDS)):
                continue
            base = indent_width(result.lines[line_no], self.tab_width)
            end = line_no
            for following in range(line_no + 1, total):
                line = result.lines[following]
                if not line.strip():
                    continue
                if not result.starts_inside[following]:
                    if indent_width(line, self.tab_width) <= base:
                        break
                end = following
            if end > line_no:
                regions.append(FoldRegion(line_no, end))
        return regions


__all__ = [
    "BLOCK_KEYWORDS",
    "BraceFoldingProvider",
    "FoldRegion",
    "FoldingProvider",
    "IndentFoldingProvider",
    "indent_width",
]
