"""Whole-document span discovery sliced into per-line colour runs."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence

from code_engine.runtime import telemetry

from .rules import Color, FontStyle, Ruleset


@dataclass(frozen=True, slots=True)
class ColorRun:
    start: int
    length: int
    color: Color
    style: FontStyle

    @property
    def end(self) -> int:
        return self.start + self.length


@dataclass(frozen=True, slots=True)
class StyledSpan:
    """A rule hit in (line, column) coordinates; end column is exclusive."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int
    color: Color
    style: FontStyle
    excluded: bool = False

    def columns_on(self, line: int, line_length: int) -> tuple[int, int]:
        start = self.start_column if line == self.start_line else 0
        end = self.end_column if line == self.end_line else line_length
        return max(0, start), min(end, line_length)


def line_offsets(lines: Sequence[str]) -> List[int]:
    offsets: List[int] = []
    running = 0
    for line in lines:
        offsets.append(running)
        running += len(line) + 1
    return offsets


def locate(offset: int, offsets: Sequence[int]) -> tuple[int, int]:
    """Map a document offset onto (line, column) using a line-start table."""

    line = max(0, bisect_right(offsets, offset) - 1)
    return line, offset - offsets[line]


class Highlighter:
    """Lazily rebuilds styled spans for a document.

    ``lines_provider`` returns the current lines; :meth:`invalidate` is wired to
    the buffer's change event and only flips a flag, so a burst of edits
    costs a single rebuild on the next :meth:`color_runs_for_line` call.
    """

    def __init__(
        self,
        lines_provider: Callable[[], Sequence[str]],
        ruleset: Ruleset,
    ) -> None:
        self._lines_provider = lines_provider
        self._ruleset = ruleset
        self._spans: Dict[int, List[StyledSpan]] = {}
        self._dirty = True
        self.rebuild_count = 0

    @property
    def ruleset(self) -> Ruleset:
        return self._ruleset

    @ruleset.setter
    def ruleset(self, value: Ruleset) -> None:
        self._ruleset = value
        self._dirty = True

    @property
    def dirty(self) -> bool:
        return self._dirty

    def invalidate(self) -> None:
        self._dirty = True

    def spans_for_line(self, index: int) -> List[StyledSpan]:
        self._ensure_spans()
        return list(self._spans.get(index, ()))

    def color_runs_for_line(self, index: int) -> List[ColorRun]:
        self._ensure_spans()
        lines = self._lines_provider()
        if index < 0 or index >= len(lines):
            return []
        line = lines[index]
        if not line:
            return []

        default = (self._ruleset.default_color, FontStyle.REGULAR)
        cells = [default] * len(line)
        claimed = [False] * len(line)
        spans = self._spans.get(index, ())

        for span in spans:
            if span.excluded:
                continue
            start, end = span.columns_on(index, len(line))
            for column in range(start, end):
                if not claimed[column]:
                    cells[column] = (span.color, span.style)
                    claimed[column] = True

        for span in spans:
            if not span.excluded:
                continue
            start, end = span.columns_on(index, len(line))
            for column in range(start, end):
                cells[column] = default
                claimed[column] = False

        runs: List[ColorRun] = []
        run_start = 0
        for column in range(1, len(line) + 1):
            if column == len(line) or cells[column] != cells[run_start]:
                color, style = cells[run_start]
                runs.append(ColorRun(run_start, column - run_start, color, style))
                run_start = column
        return runs

    def _ensure_spans(self) -> None:
        if not self._dirty:
            return
        self._dirty = False
        self.rebuild_count += 1
        lines = self._lines_provider()
        with telemetry.span(
            "highlight::rebuild",
            component="highlighting",
            metadata={"language": self._ruleset.language_name, "lines": len(lines)},
        ) as handle:
            self._spans = self._collect(lines)
            handle.add_metadata("span_lines", len(self._spans))

    def _collect(self, lines: Sequence[str]) -> Dict[int, List[StyledSpan]]:
        spans: Dict[int, List[StyledSpan]] = {}
        if not self._ruleset.rules:
            return spans

        text = "\n".join(lines)
        offsets = line_offsets(lines)

        def add(start: int, end: int, color: Color, style: FontStyle, excluded: bool) -> None:
            if end <= start:
                return
            start_line, start_column = locate(start, offsets)
            end_line, end_column = locate(end, offsets)
            span = StyledSpan(
                start_line, start_column, end_line, end_column, color, style, excluded
            )
            for line in range(start_line, end_line + 1):
                spans.setdefault(line, []).append(span)

        default = self._ruleset.default_color
        for rule in self._ruleset.rules:
            for match in rule.regex.finditer(text):
                start, end = match.span()
                if start == end:
                    continue
                add(start, end, rule.color, rule.style, False)
                if rule.exclude_regex is None:
                    continue
                for hole in rule.exclude_regex.finditer(match.group(0)):
                    add(start + hole.start(), start + hole.end(), default, FontStyle.REGULAR, True)
        return spans


__all__ = ["ColorRun", "Highlighter", "StyledSpan", "line_offsets", "locate"]
