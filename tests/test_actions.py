from __future__ import annotations

from code_engine import actions
from code_engine.buffer import Position, TextBuffer, TextRange


def make_buffer(text: str = "") -> TextBuffer:
    return TextBuffer(text, name="actions")


def type_text(buffer: TextBuffer, caret: Position, text: str) -> Position:
    for char in text:
        caret = actions.type_character(buffer, caret, char)
    return caret


def test_quote_typed_before_auto_closed_quote_moves_past_it() -> None:
    buffer = make_buffer()

    caret = type_text(buffer, Position(), '"a"')

    assert buffer.text == '"a"'
    assert caret == Position(0, 3)


def test_brackets_auto_close_and_skip_over() -> None:
    buffer = make_buffer()

    caret = type_text(buffer, Position(), "f(x)")

    assert buffer.text == "f(x)"
    assert caret == Position(0, 4)


def test_pair_insertion_is_one_undo_step() -> None:
    buffer = make_buffer("x")

    caret = actions.type_character(buffer, Position(0, 1), "[")
    assert buffer.text == "x[]"
    assert caret == Position(0, 2)

    assert buffer.undo() == Position(0, 1)
    assert buffer.text == "x"


def test_two_quotes_then_a_third_open_a_triple_pair() -> None:
    buffer = make_buffer()

    caret = type_text(buffer, Position(), '"""')

    assert buffer.text == '""""""'
    assert caret == Position(0, 3)
    caret = actions.type_character(buffer, caret, '"')
    assert caret == Position(0, 6)
    assert buffer.text == '""""""'


def test_quote_before_triple_close_skips_the_whole_closer() -> None:
    buffer = make_buffer('"""ab"""')

    caret = actions.type_character(buffer, Position(0, 5), '"')

    assert buffer.text == '"""ab"""'
    assert caret == Position(0, 8)


def test_quote_before_a_lone_unmatched_quote_steps_over_it() -> None:
    buffer = make_buffer('abc"')

    caret = actions.type_character(buffer, Position(0, 3), '"')

    assert buffer.text == 'abc"'
    assert caret == Position(0, 4)


def test_auto_close_can_be_disabled() -> None:
    buffer = make_buffer()

    caret = actions.type_character(buffer, Position(), "(", auto_close=False)

    assert buffer.text == "("
    assert caret == Position(0, 1)


def test_newline_copies_indent_and_indents_after_openers() -> None:
    buffer = make_buffer("    if x:")

    caret = actions.insert_newline(buffer, Position(0, 9), 4)

    assert buffer.text == "    if x:\n        "
    assert caret == Position(1, 8)


def test_newline_between_braces() -> None:
    buffer = make_buffer("{}")

    caret = actions.insert_newline(buffer, Position(0, 1), 2)

    assert buffer.text == "{\n  }"
    assert caret == Position(1, 2)


def test_newline_without_auto_indent() -> None:
    buffer = make_buffer("    x")

    caret = actions.insert_newline(buffer, Position(0, 5), auto_indent=False)

    assert buffer.text == "    x\n"
    assert caret == Position(1, 0)


def test_backspace_removes_an_indent_unit() -> None:
    buffer = make_buffer("        x")

    caret = actions.backspace(buffer, Position(0, 8), 4)

    assert buffer.text == "    x"
    assert caret == Position(0, 4)


def test_backspace_partial_indent_removes_one_space() -> None:
    buffer = make_buffer("   x")

    assert actions.backspace(buffer, Position(0, 3), 4) == Position(0, 2)
    assert buffer.text == "  x"


def test_backspace_joins_lines_and_stops_at_origin() -> None:
    buffer = make_buffer("ab\ncd")

    caret = actions.backspace(buffer, Position(1, 0))
    assert buffer.text == "abcd"
    assert caret == Position(0, 2)

    assert actions.backspace(buffer, Position(0, 0)) == Position(0, 0)
    assert buffer.text == "abcd"


def test_word_backspace_and_delete() -> None:
    buffer = make_buffer("foo bar")

    caret = actions.backspace(buffer, Position(0, 7), word=True)
    assert buffer.text == "foo "
    assert caret == Position(0, 4)

    caret = actions.delete_forward(buffer, Position(0, 0), word=True)
    assert buffer.text == ""
    assert caret == Position(0, 0)


def test_delete_forward_joins_lines_and_stops_at_end() -> None:
    buffer = make_buffer("a\nb")

    actions.delete_forward(buffer, Position(0, 1))
    assert buffer.text == "ab"

    actions.delete_forward(buffer, Position(0, 2))
    assert buffer.text == "ab"


def test_tab_advances_to_next_stop() -> None:
    buffer = make_buffer("x")

    caret = actions.insert_tab(buffer, Position(0, 1), 4)

    assert buffer.text == "x   "
    assert caret == Position(0, 4)


def test_outdent_line() -> None:
    buffer = make_buffer("      x\n\ty")

    assert actions.outdent_line(buffer, Position(0, 7), 4) == Position(0, 3)
    assert actions.outdent_line(buffer, Position(1, 1), 4) == Position(1, 0)
    assert buffer.text == "  x\ny"


def test_indent_and_outdent_lines_as_one_step() -> None:
    buffer = make_buffer("a\nb\nc")

    assert actions.indent_lines(buffer, 0, 1, 4) == 2
    assert buffer.text == "    a\n    b\nc"

    assert actions.indent_lines(buffer, 1, 0, 4, indent=False) == 2
    assert buffer.text == "a\nb\nc"

    buffer.undo()
    assert buffer.text == "    a\n    b\nc"


def test_toggle_line_comment_round_trip() -> None:
    buffer = make_buffer("x = 1\n    y = 2")

    caret = actions.toggle_line_comment(buffer, Position(0, 2), "#", 0, 1)
    assert buffer.text == "# x = 1\n    # y = 2"
    assert caret == Position(0, 4)

    caret = actions.toggle_line_comment(buffer, caret, "#", 0, 1)
    assert buffer.text == "x = 1\n    y = 2"
    assert caret == Position(0, 2)


def test_toggle_comment_without_token_is_a_no_op() -> None:
    buffer = make_buffer("text")

    assert actions.toggle_line_comment(buffer, Position(0, 1), None) == Position(0, 1)
    assert buffer.text == "text"


def test_duplicate_and_delete_line() -> None:
    buffer = make_buffer("a\nb\nc")

    assert actions.duplicate_line(buffer, Position(0, 1)) == Position(1, 1)
    assert buffer.text == "a\na\nb\nc"

    assert actions.delete_line(buffer, Position(2, 0)) == Position(2, 0)
    assert buffer.text == "a\na\nc"

    assert actions.delete_line(buffer, Position(2, 1)) == Position(1, 0)
    assert buffer.text == "a\na"


def test_delete_only_line_empties_it() -> None:
    buffer = make_buffer("abc")

    assert actions.delete_line(buffer, Position(0, 2)) == Position(0, 0)
    assert buffer.text == ""


def test_transform_case() -> None:
    buffer = make_buffer("hello world")

    caret = actions.transform_case(buffer, TextRange(Position(0, 0), Position(0, 5)), upper=True)

    assert buffer.text == "HELLO world"
    assert caret == Position(0, 5)


def test_find_all_and_replace_all() -> None:
    text = "Foo foo\nfoo"

    assert len(actions.find_all(text, "foo", case_sensitive=True)) == 2
    ranges = actions.find_all(text, "foo")
    assert ranges == [
        TextRange(Position(0, 0), Position(0, 3)),
        TextRange(Position(0, 4), Position(0, 7)),
        TextRange(Position(1, 0), Position(1, 3)),
    ]

    buffer = make_buffer(text)
    assert actions.replace_all(buffer, ranges, "barbaz") == 3
    assert buffer.text == "barbaz barbaz\nbarbaz"
    buffer.undo()
    assert buffer.text == text


def test_case_insensitive_search_keeps_offsets_on_the_original_text() -> None:
    text = "\u0130x foo\nFOO"
    ranges = actions.find_all(text, "foo")

    assert ranges == [
        TextRange(Position(0, 3), Position(0, 6)),
        TextRange(Position(1, 0), Position(1, 3)),
    ]

    buffer = make_buffer(text)
    actions.replace_all(buffer, ranges, "bar")
    assert buffer.text == "\u0130x bar\nbar"


def test_find_all_escapes_the_needle() -> None:
    assert actions.find_all("a.b axb", "a.b") == [TextRange(Position(0, 0), Position(0, 3))]


def test_find_all_with_empty_needle() -> None:
    assert actions.find_all("abc", "") == []


def test_find_matching_bracket() -> None:
    buffer = make_buffer("f(a[1])\n{\n  x\n}")

    assert actions.find_matching_bracket(buffer, Position(0, 1)) == Position(0, 6)
    assert actions.find_matching_bracket(buffer, Position(0, 6)) == Position(0, 1)
    assert actions.find_matching_bracket(buffer, Position(0, 7)) == Position(0, 1)
    assert actions.find_matching_bracket(buffer, Position(1, 0)) == Position(3, 0)
    assert actions.find_matching_bracket(buffer, Position(2, 2)) is None


def test_word_boundaries() -> None:
    buffer = make_buffer("foo bar\nbaz")

    assert actions.word_boundary(buffer, Position(0, 0), 1) == Position(0, 4)
    assert actions.word_boundary(buffer, Position(0, 7), 1) == Position(1, 0)
    assert actions.word_boundary(buffer, Position(0, 6), -1) == Position(0, 4)
    assert actions.word_boundary(buffer, Position(1, 0), -1) == Position(0, 7)
