"""Text buffer façade combining the document, edit history and change events."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional, Sequence

from code_engine.runtime import telemetry

from .document import TextDocument
from .position import Position, TextRange
from .undo import DeleteEdit, InsertEdit, UndoHistory, apply_edit, revert_edit

ChangeListener = Callable[[], None]


class TextBuffer:
    """Owns a :class:`TextDocument` and records every mutation for undo.

    Listeners registered with :meth:`subscribe` receive one payload-free call
    per top-level mutation: a single insert/delete, a whole composite, an
    undo, a redo, or a full-text replacement. They are expected to re-query.
    """

    def __init__(
        self,
        text: str = "",
        *,
        name: str = "default",
        history: Optional[UndoHistory] = None,
    ) -> None:
        self.name = name
        self.document = TextDocument.from_text(text)
        self.history = history or UndoHistory()
        self._listeners: List[ChangeListener] = []
        self._replaying = False
        self._composite_dirty = False
        self.version = 0

    # -- queries -----------------------------------------------------------------

    @property
    def line_count(self) -> int:
        return self.document.line_count

    @property
    def text(self) -> str:
        return self.document.text

    @property
    def end_position(self) -> Position:
        return self.document.end_position

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    def lines(self) -> Sequence[str]:
        return self.document.snapshot()

    def get_line(self, index: int) -> str:
        return self.document.get_line(index)

    def get_line_length(self, index: int) -> int:
        return self.document.get_line_length(index)

    def get_text(self, start: Position, end: Position) -> str:
        return self.document.get_text(start, end)

    def clamp(self, position: Position) -> Position:
        return self.document.clamp(position)

    def offset_of(self, position: Position) -> int:
        return self.document.offset_of(position)

    def position_at(self, offset: int) -> Position:
        return self.document.position_at(offset)

    # -- change notification -----------------------------------------------------

    def subscribe(self, listener: ChangeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _changed(self) -> None:
        if self.history.in_composite and not self._replaying:
            self._composite_dirty = True
            return
        self.version += 1
        for listener in list(self._listeners):
            listener()

    # -- mutations ---------------------------------------------------------------

    def set_full_text(self, text: str) -> None:
        with telemetry.span(
            "buffer::set_full_text",
            component="buffer",
            metadata={"buffer": self.name, "length": len(text)},
        ):
            self.document.replace_all(text)
            self.history.clear()
            self._composite_dirty = False
            self._changed()

    def insert(self, position: Position, text: str) -> Position:
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        position = self.document.clamp(position)
        if not text:
            return position
        with telemetry.span(
            "buffer::insert",
            component="buffer",
            metadata={"buffer": self.name, "line": position.line},
        ):
            end = self.document.insert_raw(position, text)
            if not self._replaying:
                self.history.record(
                    InsertEdit(
                        position=position,
                        text=text,
                        caret_before=position,
                        caret_after=end,
                    )
                )
            self._changed()
        return end

    def delete(self, start: Position, end: Position) -> str:
        span = TextRange(self.document.clamp(start), self.document.clamp(end))
        if span.is_empty:
            return ""
        with telemetry.span(
            "buffer::delete",
            component="buffer",
            metadata={"buffer": self.name, "line": span.start.line},
        ):
            removed = self.document.get_text(span.start, span.end)
            self.document.delete_raw(span.start, removed)
            if not self._replaying:
                self.history.record(
                    DeleteEdit(
                        position=span.start,
                        text=removed,
                        caret_before=span.end,
                        caret_after=span.start,
                    )
                )
            self._changed()
        return removed

    def replace(self, start: Position, end: Position, text: str) -> Position:
        """Delete ``start..end`` then insert ``text``, as one undo step."""

        span = TextRange(start, end)
        with self.composite(span.end) as group:
            self.delete(span.start, span.end)
            caret = self.insert(span.start, text)
            group.caret_after = caret
        return caret

    # -- composites --------------------------------------------------------------

    def begin_composite(self, caret_before: Position) -> None:
        """Open a composite; nested calls join the outermost one."""

        if not self.history.in_composite:
            self._composite_dirty = False
        self.history.begin_composite(caret_before)

    def end_composite(self, caret_after: Position) -> None:
        self.history.end_composite(caret_after)
        self._notify_if_closed()

    def _close_open_composite(self) -> None:
        self.history.close_open()
        self._notify_if_closed()

    def _notify_if_closed(self) -> None:
        if self._composite_dirty and not self.history.in_composite:
            self._composite_dirty = False
            self._changed()

    @contextmanager
    def composite(self, caret_before: Position) -> Iterator["CompositeScope"]:
        """Group the edits made inside the ``with`` block into one undo step."""

        scope = CompositeScope(caret_before)
        self.begin_composite(caret_before)
        try:
            yield scope
        finally:
            self.end_composite(scope.caret_after or caret_before)

    # -- history -----------------------------------------------------------------

    def undo(self) -> Position:
        if self.history.in_composite:
            self._close_open_composite()
        edit = self.history.pop_undo()
        if edit is None:
            return Position(0, 0)
        with telemetry.span("buffer::undo", component="buffer", metadata={"buffer": self.name}):
            self._replay(revert_edit, edit)
        return edit.caret_before

    def redo(self) -> Position:
        if self.history.in_composite:
            self._close_open_composite()
        edit = self.history.pop_redo()
        if edit is None:
            return Position(0, 0)
        with telemetry.span("buffer::redo", component="buffer", metadata={"buffer": self.name}):
            self._replay(apply_edit, edit)
        return edit.caret_after

    def _replay(self, step, edit) -> None:
        self._replaying = True
        try:
            step(self.document, edit)
        finally:
            self._replaying = False
        self._changed()


class CompositeScope:
    """Handle yielded by :meth:`TextBuffer.composite` to set the caret-after."""

    __slots__ = ("caret_before", "caret_after")

    def __init__(self, caret_before: Position) -> None:
        self.caret_before = caret_before
        self.caret_after: Optional[Position] = None


__all__ = ["ChangeListener", "CompositeScope", "TextBuffer"]
