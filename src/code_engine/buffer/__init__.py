"""Buffer storage, positions and undo/redo history."""

from .buffer import ChangeListener, CompositeScope, TextBuffer
from .document import TextDocument, split_lines
from .position import Position, TextRange
from .undo import (
    CompositeEdit,
    DeleteEdit,
    EditAction,
    InsertEdit,
    UndoHistory,
    apply_edit,
    revert_edit,
)

__all__ = [
    "ChangeListener",
    "CompositeEdit",
    "CompositeScope",
    "DeleteEdit",
    "EditAction",
    "InsertEdit",
    "Position",
    "TextBuffer",
    "TextDocument",
    "TextRange",
    "UndoHistory",
    "apply_edit",
    "revert_edit",
    "split_lines",
]
