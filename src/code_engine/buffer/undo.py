"""Reversible edit records and the undo/redo stacks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from .document import TextDocument
from .position import Position


@dataclass(frozen=True, slots=True)
class InsertEdit:
    position: Position
    text: str
    caret_before: Position
    caret_after: Position


@dataclass(frozen=True, slots=True)
class DeleteEdit:
    position: Position
    text: str
    caret_before: Position
    caret_after: Position


@dataclass(slots=True)
class CompositeEdit:
    """Group of edits undone and redone as one unit."""

    caret_before: Position
    caret_after: Position = Position()
    edits: List["EditAction"] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.edits)


EditAction = Union[InsertEdit, DeleteEdit, CompositeEdit]


def apply_edit(document: TextDocument, edit: EditAction) -> None:
    """Replay ``edit`` forwards."""

    if isinstance(edit, InsertEdit):
        document.insert_raw(edit.position, edit.text)
    elif isinstance(edit, DeleteEdit):
        document.delete_raw(edit.position, edit.text)
    else:
        for child in edit.edits:
            apply_edit(document, child)


def revert_edit(document: TextDocument, edit: EditAction) -> None:
    """Undo the effect of ``edit``."""

    if isinstance(edit, InsertEdit):
        document.delete_raw(edit.position, edit.text)
    elif isinstance(edit, DeleteEdit):
        document.insert_raw(edit.position, edit.text)
    else:
        for child in reversed(edit.edits):
            revert_edit(document, child)


class UndoHistory:
    """Linear undo/redo stacks with an optional open composite.

    Composites nest: an inner ``begin_composite`` only deepens the open group
    and only the outermost ``end_composite`` records it.
    """

    def __init__(self, *, limit: Optional[int] = None) -> None:
        if limit is not None and limit <= 0:
            raise ValueError("limit must be positive")
        self._undo: List[EditAction] = []
        self._redo: List[EditAction] = []
        self._open: Optional[CompositeEdit] = None
        self._depth = 0
        self._limit = limit

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def in_composite(self) -> bool:
        return self._open is not None

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def record(self, edit: EditAction) -> None:
        if self._open is not None:
            self._open.edits.append(edit)
            return
        self._push(edit)

    @property
    def composite_depth(self) -> int:
        return self._depth

    def begin_composite(self, caret_before: Position) -> None:
        if self._open is None:
            self._open = CompositeEdit(caret_before=caret_before)
        self._depth += 1

    def end_composite(self, caret_after: Position) -> bool:
        """Close one nesting level; returns True when a composite was recorded."""

        if self._open is None:
            return False
        self._depth -= 1
        if self._depth > 0:
            return False
        composite, self._open = self._open, None
        if not composite.edits:
            return False
        composite.caret_after = caret_after
        self._push(composite)
        return True

    def close_open(self) -> bool:
        """Close every nesting level at the caret of the last recorded edit."""

        composite = self._open
        if composite is None:
            return False
        caret = composite.edits[-1].caret_after if composite.edits else composite.caret_before
        self._depth = 1
        return self.end_composite(caret)

    def pop_undo(self) -> Optional[EditAction]:
        if not self._undo:
            return None
        edit = self._undo.pop()
        self._redo.append(edit)
        return edit

    def pop_redo(self) -> Optional[EditAction]:
        if not self._redo:
            return None
        edit = self._redo.pop()
        self._undo.append(edit)
        return edit

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
        self._open = None
        self._depth = 0

    def _push(self, edit: EditAction) -> None:
        self._undo.append(edit)
        self._redo.clear()
        if self._limit is not None and len(self._undo) > self._limit:
            del self._undo[0]


__all__ = [
    "CompositeEdit",
    "DeleteEdit",
    "EditAction",
    "InsertEdit",
    "UndoHistory",
    "apply_edit",
    "revert_edit",
]
