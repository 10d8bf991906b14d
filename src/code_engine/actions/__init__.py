"""Editing verbs shared by every host."""

from .editing import (
    backspace,
    delete_forward,
    delete_line,
    duplicate_line,
    indent_lines,
    insert_newline,
    insert_tab,
    outdent_line,
    toggle_line_comment,
    transform_case,
    type_character,
)
from .navigation import find_all, find_matching_bracket, replace_all, word_boundary

__all__ = [
    "backspace",
    "delete_forward",
    "delete_line",
    "duplicate_line",
    "find_all",
    "find_matching_bracket",
    "indent_lines",
    "insert_newline",
    "insert_tab",
    "outdent_line",
    "replace_all",
    "toggle_line_comment",
    "transform_case",
    "type_character",
    "word_boundary",
]
