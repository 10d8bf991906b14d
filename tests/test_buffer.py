from __future__ import annotations

from typing import List

from code_engine.buffer import Position, TextBuffer, TextRange, split_lines


def make_buffer(text: str = "") -> TextBuffer:
    return TextBuffer(text, name="test")


def test_split_lines_normalizes_breaks() -> None:
    assert split_lines("a\r\nb\rc\nd") == ["a", "b", "c", "d"]
    assert split_lines("") == [""]


def test_text_range_normalizes_reversed_endpoints() -> None:
    span = TextRange(Position(2, 1), Position(0, 4))

    assert span.start == Position(0, 4)
    assert span.end == Position(2, 1)
    assert span.is_multiline
    assert TextRange(Position(1, 1), Position(1, 1)).is_empty


def test_out_of_range_queries_never_raise() -> None:
    buffer = make_buffer("one\ntwo")

    assert buffer.get_line(-1) == ""
    assert buffer.get_line(5) == ""
    assert buffer.get_line_length(9) == 0
    assert buffer.clamp(Position(9, 9)) == Position(1, 3)
    assert buffer.clamp(Position(-3, 2)) == Position(0, 0)
    assert buffer.clamp(Position(0, 99)) == Position(0, 3)


def test_single_line_insert_returns_end_position() -> None:
    buffer = make_buffer("hello world")

    end = buffer.insert(Position(0, 5), ",")

    assert buffer.text == "hello, world"
    assert end == Position(0, 6)


def test_multi_line_insert_splits_target_line() -> None:
    buffer = make_buffer("headtail")

    end = buffer.insert(Position(0, 4), "A\nB\nC")

    assert list(buffer.lines()) == ["headA", "B", "Ctail"]
    assert end == Position(2, 1)


def test_insert_clamps_position() -> None:
    buffer = make_buffer("abc")

    end = buffer.insert(Position(7, 42), "!")

    assert buffer.text == "abc!"
    assert end == Position(0, 4)


def test_delete_spanning_lines_joins_prefix_and_suffix() -> None:
    buffer = make_buffer("alpha\nbeta\ngamma")

    removed = buffer.delete(Position(2, 2), Position(0, 3))

    assert removed == "ha\nbeta\nga"
    assert buffer.text == "alpmma"


def test_empty_delete_is_a_no_op() -> None:
    buffer = make_buffer("abc")
    calls: List[int] = []
    buffer.subscribe(lambda: calls.append(1))

    assert buffer.delete(Position(0, 1), Position(0, 1)) == ""
    assert buffer.text == "abc"
    assert not buffer.can_undo
    assert calls == []


def test_get_text_and_offsets_round_trip() -> None:
    buffer = make_buffer("ab\ncde\nf")

    assert buffer.get_text(Position(0, 1), Position(2, 1)) == "b\ncde\nf"
    assert buffer.offset_of(Position(1, 2)) == 5
    assert buffer.position_at(5) == Position(1, 2)
    assert buffer.end_position == Position(2, 1)


def test_insert_then_delete_restores_text() -> None:
    original = "def f():\n    return 1\n"
    buffer = make_buffer(original)

    end = buffer.insert(Position(1, 4), "x = 2\n    ")
    buffer.delete(Position(1, 4), end)

    assert buffer.text == original


def test_set_full_text_normalizes_and_clears_history() -> None:
    buffer = make_buffer("x")
    buffer.insert(Position(0, 1), "y")

    buffer.set_full_text("a\r\nb")

    assert list(buffer.lines()) == ["a", "b"]
    assert not buffer.can_undo
    assert not buffer.can_redo


def test_one_notification_per_top_level_mutation() -> None:
    buffer = make_buffer("abc")
    calls: List[int] = []
    listener = lambda: calls.append(buffer.version)  # noqa: E731
    buffer.subscribe(listener)

    buffer.insert(Position(0, 0), "x")
    buffer.delete(Position(0, 0), Position(0, 1))
    with buffer.composite(Position(0, 0)) as group:
        buffer.insert(Position(0, 0), "1")
        buffer.insert(Position(0, 1), "2")
        group.caret_after = Position(0, 2)
    buffer.undo()
    buffer.redo()
    buffer.set_full_text("new")

    assert len(calls) == 6
    assert calls == sorted(calls)

    buffer.unsubscribe(listener)
    buffer.insert(Position(0, 0), "z")
    assert len(calls) == 6
