from __future__ import annotations

from typing import List, Sequence

from code_engine.buffer import Position, TextBuffer
from code_engine.highlighting import Color, ColorRun, FontStyle, Highlighter, Ruleset, get_ruleset
from code_engine.highlighting.rules import COMMENT, NUMBER, STRING

DEFAULT = Color(212, 212, 212)


def make_highlighter(text: str, language: str = "python") -> Highlighter:
    lines: List[str] = text.split("\n")
    return Highlighter(lambda: lines, get_ruleset(language))


def spans(runs: Sequence[ColorRun]) -> List[tuple[int, int]]:
    return [(run.start, run.end) for run in runs]


def test_runs_cover_the_line_with_default_fill() -> None:
    highlighter = make_highlighter("x = 1")

    runs = highlighter.color_runs_for_line(0)

    assert spans(runs) == [(0, 4), (4, 5)]
    assert runs[0].color == DEFAULT
    assert runs[1].color == NUMBER


def test_empty_and_out_of_range_lines_have_no_runs() -> None:
    highlighter = make_highlighter("x\n\ny")

    assert highlighter.color_runs_for_line(1) == []
    assert highlighter.color_runs_for_line(-1) == []
    assert highlighter.color_runs_for_line(10) == []


def test_multi_line_match_colours_every_line() -> None:
    highlighter = make_highlighter('x = 1\n"""doc\nmore"""\ny')

    first = highlighter.color_runs_for_line(1)
    second = highlighter.color_runs_for_line(2)

    assert first == [ColorRun(0, 6, STRING, FontStyle.ITALIC)]
    assert second == [ColorRun(0, 7, STRING, FontStyle.ITALIC)]
    assert highlighter.color_runs_for_line(3)[0].color == DEFAULT


def test_first_claim_wins() -> None:
    highlighter = make_highlighter("// if return", "csharp")

    runs = highlighter.color_runs_for_line(0)

    assert runs == [ColorRun(0, 12, COMMENT, FontStyle.ITALIC)]


def test_exclusion_hands_interpolation_back_to_default() -> None:
    highlighter = make_highlighter('f"a{b}c"')

    runs = highlighter.color_runs_for_line(0)

    assert spans(runs) == [(0, 3), (3, 6), (6, 8)]
    assert [run.color for run in runs] == [STRING, DEFAULT, STRING]


def test_csharp_interpolated_string_exclusion() -> None:
    highlighter = make_highlighter('$"a{b}c"', "csharp")

    runs = highlighter.color_runs_for_line(0)

    assert [run.color for run in runs] == [STRING, DEFAULT, STRING]
    assert spans(runs)[1] == (3, 6)


def test_zero_length_matches_produce_no_span() -> None:
    ruleset = Ruleset("Test")
    ruleset.add_rule("Maybe", r"z*", Color(1, 2, 3))
    highlighter = Highlighter(lambda: ["abc"], ruleset)

    assert highlighter.spans_for_line(0) == []
    assert highlighter.color_runs_for_line(0) == [ColorRun(0, 3, DEFAULT, FontStyle.REGULAR)]


def test_rebuild_is_lazy() -> None:
    buffer = TextBuffer("a = 1")
    highlighter = Highlighter(buffer.lines, get_ruleset("python"))
    buffer.subscribe(highlighter.invalidate)

    assert highlighter.rebuild_count == 0
    highlighter.color_runs_for_line(0)
    highlighter.color_runs_for_line(0)
    assert highlighter.rebuild_count == 1

    buffer.insert(Position(0, 5), "0")
    buffer.insert(Position(0, 6), "0")
    assert highlighter.dirty
    assert highlighter.rebuild_count == 1

    runs = highlighter.color_runs_for_line(0)
    assert highlighter.rebuild_count == 2
    assert runs[-1] == ColorRun(4, 3, NUMBER, FontStyle.REGULAR)


def test_changing_ruleset_marks_dirty() -> None:
    highlighter = make_highlighter("return 1")
    highlighter.color_runs_for_line(0)

    highlighter.ruleset = get_ruleset("plain")

    assert highlighter.dirty
    assert highlighter.color_runs_for_line(0) == [ColorRun(0, 8, DEFAULT, FontStyle.REGULAR)]
