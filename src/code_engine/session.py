"""The editing session: one buffer plus every derived view a host renders."""

from __future__ import annotations

import time
from typing import Callable, List, Optional, Sequence, Union

from . import actions
from .buffer import Position, TextBuffer, TextRange
from .completion import (
    CompletionEngine,
    CompletionItem,
    CompletionProvider,
    accept_completion,
    get_completion_provider,
    partial_word,
)
from .config import DEFAULT_FOLDING, EditorConfig, language_key
from .diagnostics import (
    AnalysisContext,
    Diagnostic,
    DiagnosticProvider,
    DiagnosticsService,
    get_diagnostic_provider,
)
from .folding import (
    FoldingChoice,
    FoldingModel,
    FoldingProvider,
    FoldRegion,
    make_folding_provider,
)
from .highlighting import ColorRun, Highlighter, Ruleset, get_ruleset
from .runtime import DebounceScheduler, telemetry

SessionListener = Callable[[], None]


class EditorSession:
    """Owns a :class:`TextBuffer` and keeps highlighting, folds and diagnostics in step.

    Every buffer change marks the highlighter and the fold model dirty and
    schedules a debounced diagnostics run. Hosts drive time by calling
    :meth:`process_timers` from their own timer; nothing here spawns threads.
    Listeners added with :meth:`on_change` (text) and :meth:`on_diagnostics`
    are called without a payload and re-query what they need.
    """

    def __init__(
        self,
        text: str = "",
        config: Optional[EditorConfig] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or EditorConfig()
        self.buffer = TextBuffer(text)
        self.highlighter = Highlighter(
            self.buffer.lines, self._resolve_ruleset(self.config.language)
        )
        self.folding = FoldingModel(self._resolve_folding(self.config.folding), self.buffer.lines)
        self.diagnostics_service = DiagnosticsService(self.config.diagnostic_provider)
        self.completion = CompletionEngine(self.config.completion_provider)
        self.scheduler = DebounceScheduler(
            self._run_scheduled,
            interval_ms=self.config.diagnostics_debounce_ms,
            clock=clock,
        )
        self._listeners: List[SessionListener] = []
        self.buffer.subscribe(self._on_buffer_changed)
        if self.diagnostics_service.provider is not None:
            self.flush_diagnostics()

    # -- wiring ------------------------------------------------------------------

    def on_change(self, listener: SessionListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def on_diagnostics(self, listener: SessionListener) -> None:
        self.diagnostics_service.on_change(listener)

    def _on_buffer_changed(self) -> None:
        self.highlighter.invalidate()
        self.folding.invalidate()
        self.schedule_diagnostics()
        for listener in list(self._listeners):
            listener()

    def _resolve_ruleset(self, language: Union[str, Ruleset]) -> Ruleset:
        return language if isinstance(language, Ruleset) else get_ruleset(language)

    def _resolve_folding(self, choice: FoldingChoice) -> Optional[FoldingProvider]:
        return make_folding_provider(
            choice,
            language=language_key(self.config.language),
            tab_width=self.config.tab_width,
        )

    # -- configuration -------------------------------------------------------------

    @property
    def language(self) -> str:
        return language_key(self.config.language)

    @property
    def ruleset(self) -> Ruleset:
        return self.highlighter.ruleset

    def set_language(self, name: str) -> None:
        """Switch ruleset, diagnostics, folding and completion together."""

        key = language_key(name)
        with telemetry.span(
            "session::set_language", component="session", metadata={"language": key}
        ):
            self.config.language = name
            self.highlighter.ruleset = get_ruleset(key)
            self.set_folding(DEFAULT_FOLDING.get(key))
            self.completion.provider = get_completion_provider(key)
            self.set_diagnostic_provider(get_diagnostic_provider(key))

    def set_ruleset(self, ruleset: Union[str, Ruleset]) -> None:
        self.config.language = ruleset
        self.highlighter.ruleset = self._resolve_ruleset(ruleset)

    def set_folding(self, choice: FoldingChoice) -> None:
        self.config.folding = choice
        self.folding.provider = self._resolve_folding(choice)

    def set_completion_provider(self, provider: Optional[CompletionProvider]) -> None:
        self.config.completion_provider = provider
        self.completion.provider = provider

    def set_diagnostic_provider(self, provider: Optional[DiagnosticProvider]) -> None:
        self.config.diagnostic_provider = provider
        self.diagnostics_service.provider = provider
        self.flush_diagnostics()

    def set_context(self, context: Optional[AnalysisContext]) -> None:
        self.diagnostics_service.context = context
        self.flush_diagnostics()

    # -- buffer queries ----------------------------------------------------------

    @property
    def text(self) -> str:
        return self.buffer.text

    @property
    def line_count(self) -> int:
        return self.buffer.line_count

    def get_line(self, index: int) -> str:
        return self.buffer.get_line(index)

    def get_line_length(self, index: int) -> int:
        return self.buffer.get_line_length(index)

    def lines(self) -> Sequence[str]:
        return self.buffer.lines()

    def clamp(self, position: Position) -> Position:
        return self.buffer.clamp(position)

    @property
    def can_undo(self) -> bool:
        return self.buffer.can_undo

    @property
    def can_redo(self) -> bool:
        return self.buffer.can_redo

    # -- mutations ---------------------------------------------------------------

    def insert_text(self, position: Position, text: str) -> Position:
        return self.buffer.insert(position, text)

    def delete_range(self, start: Position, end: Position) -> str:
        return self.buffer.delete(start, end)

    def replace_range(self, start: Position, end: Position, text: str) -> Position:
        return self.buffer.replace(start, end, text)

    def begin_composite(self, caret_before: Position) -> None:
        self.buffer.begin_composite(caret_before)

    def end_composite(self, caret_after: Position) -> None:
        self.buffer.end_composite(caret_after)

    def undo(self) -> Position:
        return self.buffer.undo()

    def redo(self) -> Position:
        return self.buffer.redo()

    def set_full_text(self, text: str) -> None:
        self.buffer.set_full_text(text)

    # -- editing verbs -----------------------------------------------------------

    def type_character(self, caret: Position, char: str) -> Position:
        return actions.type_character(
            self.buffer, caret, char, auto_close=self.config.auto_close_pairs
        )

    def insert_newline(self, caret: Position) -> Position:
        return actions.insert_newline(
            self.buffer, caret, self.config.tab_width, auto_indent=self.config.auto_indent
        )

    def backspace(self, caret: Position, *, word: bool = False) -> Position:
        return actions.backspace(self.buffer, caret, self.config.tab_width, word=word)

    def delete_forward(self, caret: Position, *, word: bool = False) -> Position:
        return actions.delete_forward(self.buffer, caret, word=word)

    def insert_tab(self, caret: Position) -> Position:
        return actions.insert_tab(self.buffer, caret, self.config.tab_width)

    def outdent_line(self, caret: Position) -> Position:
        return actions.outdent_line(self.buffer, caret, self.config.tab_width)

    def indent_lines(self, start_line: int, end_line: int, *, indent: bool = True) -> int:
        return actions.indent_lines(
            self.buffer, start_line, end_line, self.config.tab_width, indent=indent
        )

    def toggle_line_comment(
        self,
        caret: Position,
        start_line: Optional[int] = None,
        end_line: Optional[int] = None,
    ) -> Position:
        return actions.toggle_line_comment(
            self.buffer, caret, self.ruleset.line_comment_token, start_line, end_line
        )

    def duplicate_line(self, caret: Position) -> Position:
        return actions.duplicate_line(self.buffer, caret)

    def delete_line(self, caret: Position) -> Position:
        return actions.delete_line(self.buffer, caret)

    def transform_case(self, span: TextRange, *, upper: bool) -> Position:
        return actions.transform_case(self.buffer, span, upper=upper)

    def find_all(self, needle: str, *, case_sensitive: bool = False) -> List[TextRange]:
        return actions.find_all(self.buffer.text, needle, case_sensitive)

    def replace_all(
        self,
        needle: str,
        replacement: str,
        *,
        case_sensitive: bool = False,
        caret: Position = Position(),
    ) -> int:
        return actions.replace_all(
            self.buffer, self.find_all(needle, case_sensitive=case_sensitive), replacement, caret
        )

    def find_matching_bracket(self, position: Position) -> Optional[Position]:
        return actions.find_matching_bracket(self.buffer, position)

    def word_boundary(self, position: Position, direction: int) -> Position:
        return actions.word_boundary(self.buffer, position, direction)

    # -- highlighting ------------------------------------------------------------

    def color_runs_for_line(self, index: int) -> List[ColorRun]:
        return self.highlighter.color_runs_for_line(index)

    # -- folding -----------------------------------------------------------------

    def fold_regions_snapshot(self) -> List[FoldRegion]:
        return self.folding.regions()

    def toggle_fold(self, line: int) -> bool:
        return self.folding.toggle(line)

    def collapse_all(self) -> None:
        self.folding.collapse_all()

    def expand_all(self) -> None:
        self.folding.expand_all()

    def is_line_visible(self, line: int) -> bool:
        return self.folding.is_line_visible(line)

    def visible_line_projection(self) -> List[int]:
        return self.folding.visible_lines()

    # -- diagnostics -------------------------------------------------------------

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return self.diagnostics_service.all()

    def diagnostics_for_line(self, index: int) -> List[Diagnostic]:
        return self.diagnostics_service.for_line(index)

    def schedule_diagnostics(self) -> None:
        if self.diagnostics_service.provider is None:
            return
        self.scheduler.schedule()

    def process_timers(self) -> bool:
        """Run diagnostics when the debounce interval elapsed; True if it ran."""

        return self.scheduler.poll()

    def flush_diagnostics(self) -> List[Diagnostic]:
        self.scheduler.cancel()
        return self.diagnostics_service.run(self.buffer.text)

    def _run_scheduled(self, generation: int) -> None:
        found = self.diagnostics_service.compute(self.buffer.text)
        if not self.scheduler.is_current(generation):
            telemetry.record_event(
                "diagnostics.discarded",
                level="debug",
                data={"generation": generation},
            )
            return
        self.diagnostics_service.publish(found)

    # -- completion --------------------------------------------------------------

    def completions_for(
        self, prefix: Optional[str] = None, caret: Optional[Position] = None
    ) -> List[CompletionItem]:
        caret = self.buffer.clamp(caret or self.buffer.end_position)
        return self.completion.completions_for(self.buffer.text, caret, prefix)

    def accept_completion(self, caret: Position, item: CompletionItem) -> Position:
        caret = self.buffer.clamp(caret)
        prefix = partial_word(self.buffer.get_line(caret.line), caret.column)
        return accept_completion(self.buffer, caret, prefix, item)


__all__ = ["EditorSession", "SessionListener"]
