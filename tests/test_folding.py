from __future__ import annotations

from typing import List, Sequence

import pytest

from code_engine.errors import ConfigError
from code_engine.folding import (
    BraceFoldingProvider,
    FoldingModel,
    FoldRegion,
    IndentFoldingProvider,
    indent_width,
    make_folding_provider,
)
from code_engine.diagnostics import CSHARP_SYNTAX


class StaticProvider:
    def __init__(self, regions: List[FoldRegion]) -> None:
        self.regions = regions

    def fold_regions(self, lines: Sequence[str]) -> List[FoldRegion]:
        return list(self.regions)


def make_model(lines: List[str], regions: List[FoldRegion]) -> FoldingModel:
    return FoldingModel(StaticProvider(regions), lambda: lines)


def test_collapsed_region_hides_only_interior_lines() -> None:
    model = make_model(["a", "b", "c", "d", "e"], [FoldRegion(1, 4)])

    assert model.toggle(1)

    assert model.visible_lines() == [0, 1, 4]
    assert [model.is_line_visible(i) for i in range(5)] == [True, True, False, False, True]


def test_toggle_twice_is_identity() -> None:
    model = make_model(["a", "b", "c", "d"], [FoldRegion(0, 3)])
    before = model.visible_lines()

    model.toggle(0)
    model.toggle(0)

    assert model.visible_lines() == before == [0, 1, 2, 3]


def test_toggle_without_region_is_a_no_op() -> None:
    model = make_model(["a", "b", "c"], [FoldRegion(0, 2)])

    assert not model.toggle(1)
    assert model.visible_lines() == [0, 1, 2]


def test_collapse_state_survives_rebuild_by_start_line() -> None:
    lines = ["a", "b", "c", "d", "e"]
    provider = StaticProvider([FoldRegion(1, 3)])
    model = FoldingModel(provider, lambda: lines)
    model.collapse(1)

    provider.regions = [FoldRegion(1, 4)]
    model.invalidate()
    assert model.regions() == [FoldRegion(1, 4, collapsed=True)]
    assert model.visible_lines() == [0, 1, 4]

    provider.regions = [FoldRegion(2, 4)]
    model.invalidate()
    assert model.regions() == [FoldRegion(2, 4, collapsed=False)]
    assert model.visible_lines() == [0, 1, 2, 3, 4]


def test_regions_outside_the_document_are_dropped() -> None:
    model = make_model(["a", "b"], [FoldRegion(0, 5), FoldRegion(1, 1)])

    assert model.regions() == []


def test_projection_index_mapping() -> None:
    model = make_model(["a", "b", "c", "d", "e"], [FoldRegion(1, 4)])
    model.collapse(1)

    assert model.visible_index(4) == 2
    assert model.visible_index(2) == 1
    assert model.actual_line(2) == 4
    assert model.actual_line(99) == 4
    assert model.actual_line(-3) == 0


def test_collapse_all_and_expand_all() -> None:
    model = make_model(["a", "b", "c", "d", "e"], [FoldRegion(0, 4), FoldRegion(1, 3)])

    model.collapse_all()
    assert model.visible_lines() == [0, 4]
    assert model.region_at(1) == FoldRegion(1, 3, collapsed=True)

    model.expand_all()
    assert model.visible_lines() == [0, 1, 2, 3, 4]


def test_no_provider_shows_every_line() -> None:
    model = FoldingModel(None, lambda: ["a", "b", "c"])

    assert model.regions() == []
    assert model.visible_lines() == [0, 1, 2]
    assert not model.toggle(0)


def test_brace_regions_are_nested_and_sorted() -> None:
    lines = ["a {", "  b {", "  }", "}", "x"]

    assert BraceFoldingProvider().fold_regions(lines) == [FoldRegion(0, 3), FoldRegion(1, 2)]


def test_braces_in_comments_and_strings_do_not_fold() -> None:
    lines = ['s = "{";', "// {", "x", "}"]

    assert BraceFoldingProvider(CSHARP_SYNTAX).fold_regions(lines) == []


def test_single_line_brace_pair_is_not_a_region() -> None:
    assert BraceFoldingProvider().fold_regions(["f() { go(); }"]) == []


def test_indent_regions_skip_blank_lines() -> None:
    lines = ["def f():", "    a = 1", "", "    return a", "x = 2"]

    assert IndentFoldingProvider().fold_regions(lines) == [FoldRegion(0, 3)]


def test_indent_regions_nest() -> None:
    lines = ["class A:", "    def f(self):", "        pass", "y"]

    assert IndentFoldingProvider().fold_regions(lines) == [FoldRegion(0, 2), FoldRegion(1, 2)]


def test_colon_inside_string_is_not_a_block() -> None:
    lines = ['x = """', "text:", '    more', '"""']

    assert IndentFoldingProvider().fold_regions(lines) == []


def test_indent_width_expands_tabs() -> None:
    assert indent_width("\tx", 4) == 4
    assert indent_width("  \tx", 4) == 4
    assert indent_width("      x", 4) == 6


def test_make_folding_provider() -> None:
    assert make_folding_provider(None) is None
    assert isinstance(make_folding_provider("brace", language="csharp"), BraceFoldingProvider)
    indent = make_folding_provider("Indent", tab_width=2)
    assert isinstance(indent, IndentFoldingProvider)
    assert indent.tab_width == 2
    with pytest.raises(ConfigError):
        make_folding_provider("outline")
