"""Minimal Textual adapter that turns key presses into session intents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from code_engine.buffer import Position
from code_engine.completion import CompletionItem
from code_engine.diagnostics import Diagnostic, Severity
from code_engine.folding import FoldRegion
from code_engine.highlighting import ColorRun
from code_engine.session import EditorSession


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(frozen=True, slots=True)
class RenderedLine:
    """One visible row: the source line, its colour runs and fold marker."""

    index: int
    text: str
    runs: List[ColorRun]
    fold: Optional[FoldRegion] = None
    severity: Optional[Severity] = None


@dataclass(slots=True)
class EditorUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_lines: Callable[[List[RenderedLine], Position], None]
    update_status: Callable[[str], None] = _noop
    update_diagnostics: Callable[[List[Diagnostic]], None] = _noop
    update_folds: Callable[[List[FoldRegion]], None] = _noop
    show_completions: Callable[[List[CompletionItem]], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


SEVERITY_RANK = {
    Severity.ERROR: 0,
    Severity.WARNING: 1,
    Severity.INFO: 2,
    Severity.HINT: 3,
}


class TextualEditorAdapter:
    """Bridges key names from Textual onto :class:`EditorSession` verbs.

    The adapter owns the caret. After every handled key it pushes the visible
    lines, the status text and, when open, the completion list back through
    :class:`EditorUIHooks`.
    """

    def __init__(self, session: EditorSession, hooks: EditorUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self.caret = Position()
        self.completions: List[CompletionItem] = []
        self._preferred_column: Optional[int] = None
        self._commands: Dict[str, Callable[[], Position]] = {
            "enter": lambda: self.session.insert_newline(self.caret),
            "backspace": lambda: self.session.backspace(self.caret),
            "ctrl+backspace": lambda: self.session.backspace(self.caret, word=True),
            "delete": lambda: self.session.delete_forward(self.caret),
            "ctrl+delete": lambda: self.session.delete_forward(self.caret, word=True),
            "tab": lambda: self.session.insert_tab(self.caret),
            "shift+tab": lambda: self.session.outdent_line(self.caret),
            "ctrl+z": self.session.undo,
            "ctrl+y": self.session.redo,
            "ctrl+d": lambda: self.session.duplicate_line(self.caret),
            "ctrl+shift+k": lambda: self.session.delete_line(self.caret),
            "ctrl+slash": lambda: self.session.toggle_line_comment(self.caret),
            "left": lambda: self._move_horizontal(-1),
            "right": lambda: self._move_horizontal(1),
            "ctrl+left": lambda: self.session.word_boundary(self.caret, -1),
            "ctrl+right": lambda: self.session.word_boundary(self.caret, 1),
            "home": lambda: Position(self.caret.line, 0),
            "end": lambda: Position(self.caret.line, self.session.get_line_length(self.caret.line)),
            "ctrl+home": lambda: Position(),
            "ctrl+end": lambda: self.session.buffer.end_position,
        }
        session.on_diagnostics(self._refresh_diagnostics)
        self._refresh()
        self._refresh_diagnostics()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> bool:
        """Apply ``key`` to the session; returns False for keys it does not bind."""

        mods = tuple(sorted(str(mod).lower() for mod in modifiers))
        name = "+".join(mods + (key.lower(),)) if mods else key.lower()
        self._log_state("key ->", key=name, text=text)

        if self.completions and self._handle_completion_key(name):
            self._refresh()
            return True

        handled = True
        if name in ("up", "down"):
            self.caret = self._move_vertical(-1 if name == "up" else 1)
        elif name == "ctrl+space":
            self._open_completions()
        elif name == "ctrl+period":
            self.session.toggle_fold(self.caret.line)
            self.hooks.update_folds(self.session.fold_regions_snapshot())
        elif name in self._commands:
            self.caret = self._commands[name]()
            self._preferred_column = None
            if self.completions:
                self._open_completions()
        elif text is not None and len(text) == 1 and text.isprintable():
            self.caret = self.session.type_character(self.caret, text)
            self._preferred_column = None
            if self.completions or text.isalnum() or text == "_":
                self._open_completions(quiet=not self.completions)
        else:
            handled = False

        if handled:
            self.caret = self.session.clamp(self.caret)
            self._refresh()
        self._log_state("result <-", handled=handled)
        return handled

    def process_timers(self) -> bool:
        """Forward the host tick to the session's debounce timer."""

        return self.session.process_timers()

    # -- completion --------------------------------------------------------------

    def _open_completions(self, *, quiet: bool = False) -> None:
        items = self.session.completions_for(caret=self.caret)
        if quiet and not items:
            return
        self.completions = items
        self.hooks.show_completions(items)

    def _close_completions(self) -> None:
        if self.completions:
            self.completions = []
            self.hooks.show_completions([])

    def _handle_completion_key(self, name: str) -> bool:
        if name == "escape":
            self._close_completions()
            return True
        if name in ("enter", "tab"):
            item = self.completions[0]
            self.caret = self.session.accept_completion(self.caret, item)
            self._close_completions()
            return True
        if name in ("left", "right", "up", "down", "home", "end"):
            self._close_completions()
        return False

    # -- caret movement ----------------------------------------------------------

    def _move_horizontal(self, step: int) -> Position:
        caret = self.session.clamp(self.caret)
        if step < 0:
            if caret.column > 0:
                return caret.shifted(columns=-1)
            if caret.line > 0:
                line = self._neighbour_line(caret.line, -1)
                return Position(line, self.session.get_line_length(line))
            return caret
        if caret.column < self.session.get_line_length(caret.line):
            return caret.shifted(columns=1)
        if caret.line < self.session.line_count - 1:
            return Position(self._neighbour_line(caret.line, 1), 0)
        return caret

    def _neighbour_line(self, line: int, step: int) -> int:
        folding = self.session.folding
        row = folding.visible_index(line) + step
        return folding.actual_line(row)

    def _move_vertical(self, step: int) -> Position:
        if self._preferred_column is None:
            self._preferred_column = self.caret.column
        line = self._neighbour_line(self.caret.line, step)
        return self.session.clamp(Position(line, self._preferred_column))

    # -- pushes ------------------------------------------------------------------

    def rendered_lines(self) -> List[RenderedLine]:
        folds = {region.start_line: region for region in self.session.fold_regions_snapshot()}
        rows: List[RenderedLine] = []
        for index in self.session.visible_line_projection():
            found = self.session.diagnostics_for_line(index)
            worst = min(found, key=lambda d: SEVERITY_RANK[d.severity]).severity if found else None
            rows.append(
                RenderedLine(
                    index=index,
                    text=self.session.get_line(index),
                    runs=self.session.color_runs_for_line(index),
                    fold=folds.get(index),
                    severity=worst,
                )
            )
        return rows

    def status_text(self) -> str:
        problems = len(self.session.diagnostics)
        return (
            f"Ln {self.caret.line + 1}, Col {self.caret.column + 1}"
            f" | {self.session.ruleset.language_name}"
            f" | {problems} problem{'s' if problems != 1 else ''}"
        )

    def _refresh(self) -> None:
        self.hooks.update_lines(self.rendered_lines(), self.caret)
        self.hooks.update_status(self.status_text())

    def _refresh_diagnostics(self) -> None:
        self.hooks.update_diagnostics(self.session.diagnostics)
        self.hooks.update_status(self.status_text())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "caret": (self.caret.line, self.caret.column),
            "version": self.session.buffer.version,
            "language": self.session.language,
            "completions": len(self.completions),
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))


__all__ = ["EditorUIHooks", "RenderedLine", "TextualEditorAdapter"]
