"""Fold state and the visible-line projection."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import replace
from typing import Callable, List, Optional, Sequence, Set

from code_engine.runtime import telemetry

from .providers import FoldingProvider, FoldRegion


class FoldingModel:
    """Keeps provider regions, their collapse state and the visible lines.

    Collapse state is keyed by start line, so it survives a rebuild as long
    as a region still starts on the same line. Lines strictly inside a
    collapsed region are hidden; the start and end lines stay visible.
    """

    def __init__(
        self,
        provider: Optional[FoldingProvider] = None,
        lines_provider: Optional[Callable[[], Sequence[str]]] = None,
    ) -> None:
        self._provider = provider
        self._lines_provider = lines_provider
        self._regions: List[FoldRegion] = []
        self._collapsed: Set[int] = set()
        self._line_count = 1
        self._visible: Optional[List[int]] = None
        self._dirty = True

    # -- configuration -------------------------------------------------------------

    @property
    def provider(self) -> Optional[FoldingProvider]:
        return self._provider

    @provider.setter
    def provider(self, value: Optional[FoldingProvider]) -> None:
        self._provider = value
        self.invalidate()

    @property
    def dirty(self) -> bool:
        return self._dirty

    def invalidate(self) -> None:
        self._dirty = True
        self._visible = None

    def rebuild(self, lines: Optional[Sequence[str]] = None) -> None:
        if lines is None:
            lines = self._lines_provider() if self._lines_provider is not None else [""]
        self._dirty = False
        self._visible = None
        self._line_count = max(1, len(lines))
        if self._provider is None:
            self._regions = []
            return
        with telemetry.span(
            "folding::rebuild",
            component="folding",
            metadata={"provider": type(self._provider).__name__, "lines": len(lines)},
        ) as handle:
            regions = [
                region
                for region in self._provider.fold_regions(lines)
                if 0 <= region.start_line < region.end_line < self._line_count
            ]
            self._regions = [replace(region, collapsed=False) for region in regions]
            starts = {region.start_line for region in self._regions}
            self._collapsed &= starts
            handle.add_metadata("regions", len(self._regions))

    def _ensure(self) -> None:
        if self._dirty:
            self.rebuild()

    # -- regions -----------------------------------------------------------------

    def regions(self) -> List[FoldRegion]:
        self._ensure()
        return [
            replace(region, collapsed=region.start_line in self._collapsed)
            for region in self._regions
        ]

    def region_at(self, line: int) -> Optional[FoldRegion]:
        """Outermost region starting on ``line``."""

        for region in self.regions():
            if region.start_line == line:
                return region
        return None

    def _has_region(self, line: int) -> bool:
        self._ensure()
        return any(region.start_line == line for region in self._regions)

    def toggle(self, line: int) -> bool:
        if not self._has_region(line):
            return False
        if line in self._collapsed:
            self._collapsed.discard(line)
        else:
            self._collapsed.add(line)
        self._visible = None
        return True

    def collapse(self, line: int) -> bool:
        if not self._has_region(line):
            return False
        self._collapsed.add(line)
        self._visible = None
        return True

    def expand(self, line: int) -> bool:
        if line not in self._collapsed:
            return False
        self._collapsed.discard(line)
        self._visible = None
        return True

    def collapse_all(self) -> None:
        self._ensure()
        self._collapsed = {region.start_line for region in self._regions}
        self._visible = None

    def expand_all(self) -> None:
        self._collapsed.clear()
        self._visible = None

    # -- projection --------------------------------------------------------------

    def visible_lines(self) -> List[int]:
        self._ensure()
        if self._visible is None:
            hidden: Set[int] = set()
            for region in self._regions:
                if region.start_line in self._collapsed:
                    hidden.update(range(region.start_line + 1, region.end_line))
            self._visible = [line for line in range(self._line_count) if line not in hidden]
        return list(self._visible)

    def is_line_visible(self, line: int) -> bool:
        self._ensure()
        if line < 0 or line >= self._line_count:
            return False
        for region in self._regions:
            if region.start_line in self._collapsed and region.start_line < line < region.end_line:
                return False
        return True

    def visible_index(self, actual_line: int) -> int:
        """Row of ``actual_line`` in the projection; hidden lines map to the row above."""

        visible = self.visible_lines()
        return max(0, bisect_right(visible, actual_line) - 1)

    def actual_line(self, visible_index: int) -> int:
        visible = self.visible_lines()
        index = min(max(0, visible_index), len(visible) - 1)
        return visible[index]


__all__ = ["FoldingModel"]
