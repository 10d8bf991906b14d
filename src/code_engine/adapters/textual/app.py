"""Executable Textual app that hosts the editing engine."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use code_engine.adapters.textual.app"
    ) from exc

from code_engine.buffer import Position
from code_engine.completion import CompletionItem
from code_engine.config import EditorConfig
from code_engine.diagnostics import Diagnostic, Severity
from code_engine.highlighting import FontStyle
from code_engine.runtime import telemetry
from code_engine.session import EditorSession

from .controller import EditorUIHooks, RenderedLine, TextualEditorAdapter

SAMPLES = {
    "csharp": 'using System;\n\nclass Program\n{\n    static void Main()\n    {\n'
    '        Console.WriteLine("Hello");\n    }\n}\n',
    "python": 'def main():\n    print("Hello")\n\n\nif __name__ == "__main__":\n    main()\n',
    "javascript": 'function main() {\n    const greeting = `Hello`;\n'
    "    console.log(greeting);\n}\n",
    "plain": "",
}

SEVERITY_STYLE = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
    Severity.HINT: "dim",
}


def create_session(text: str, language: str) -> EditorSession:
    """Build a session with the full bundle for ``language``."""

    base = EditorConfig.from_env()
    config = EditorConfig.for_language(
        language,
        tab_width=base.tab_width,
        diagnostics_debounce_ms=base.diagnostics_debounce_ms,
    )
    return EditorSession(text, config)


def render_line(row: RenderedLine, caret: Optional[Position], gutter: int) -> Text:
    marker = " "
    if row.fold is not None:
        marker = "+" if row.fold.collapsed else "-"
    number_style = SEVERITY_STYLE[row.severity] if row.severity else "dim"
    line = Text(f"{row.index + 1:>{gutter}} {marker} ", style=number_style)
    body = Text(row.text)
    for run in row.runs:
        style = run.color.hex
        if FontStyle.BOLD in run.style:
            style += " bold"
        if FontStyle.ITALIC in run.style:
            style += " italic"
        if FontStyle.UNDERLINE in run.style:
            style += " underline"
        body.stylize(style, run.start, run.end)
    if caret is not None and caret.line == row.index:
        if caret.column < len(row.text):
            body.stylize("reverse", caret.column, caret.column + 1)
        else:
            body.append(" ", style="reverse")
    line.append_text(body)
    return line


@dataclass
class UIState:
    status_text: str = ""
    problems_text: str = ""
    completion_text: str = ""


class CodeEngineApp(App[None]):
    """Minimal Textual UI embedding the editing engine."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		content-align: left top;
		overflow: auto;
	}

	#completion-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}

	#problems {
		height: 4;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("f2", "cycle_language", "Language"),
    ]

    LANGUAGES = ("csharp", "python", "javascript", "plain")

    def __init__(self, text: str = "", *, language: str = "csharp") -> None:
        super().__init__()
        self._state = UIState()
        self._initial_text = text or SAMPLES.get(language, "")
        self._language = language
        self.session: EditorSession | None = None
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._completion_widget: Static | None = None
        self._problems_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._completion_widget = Static("", id="completion-line")
        self._problems_widget = Static("", id="problems")
        self._status_widget = Static("", id="status-line")
        yield self._completion_widget
        yield self._problems_widget
        yield self._status_widget
        yield Footer()

    async def on_mount(self) -> None:
        self.session = create_session(self._initial_text, self._language)
        hooks = EditorUIHooks(
            update_lines=self._update_lines,
            update_status=self._update_status,
            update_diagnostics=self._update_diagnostics,
            show_completions=self._show_completions,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.session, hooks)
        self.set_interval(0.1, self._process_timers)

    def _process_timers(self) -> None:
        if self.adapter:
            self.adapter.process_timers()

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key in {"ctrl+q", "f2"}:
            return
        if self.adapter.handle_textual_key(event.key, text=event.character):
            event.stop()

    def action_cycle_language(self) -> None:
        if not self.session or not self.adapter:
            return
        index = self.LANGUAGES.index(self.session.language)
        language = self.LANGUAGES[(index + 1) % len(self.LANGUAGES)]
        self.session.set_language(language)
        self.adapter.handle_textual_key("ctrl+home")

    def _update_lines(self, rows: List[RenderedLine], caret: Position) -> None:
        if not self._buffer_widget:
            return
        gutter = len(str(rows[-1].index + 1)) if rows else 1
        rendered = Text("\n").join(render_line(row, caret, gutter) for row in rows)
        self._buffer_widget.update(rendered)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _update_diagnostics(self, diagnostics: List[Diagnostic]) -> None:
        lines = Text()
        for item in diagnostics[:4]:
            if lines:
                lines.append("\n")
            lines.append(f"{item.line + 1}:{item.column + 1} ", style="dim")
            lines.append(item.severity.value, style=SEVERITY_STYLE[item.severity])
            lines.append(f" {item.message}")
        self._state.problems_text = lines.plain
        if self._problems_widget:
            self._problems_widget.update(lines)

    def _show_completions(self, items: List[CompletionItem]) -> None:
        text = "  ".join(item.text for item in items[:12])
        self._state.completion_text = text
        if self._completion_widget:
            self._completion_widget.update(text)

    def _log_line(self, line: str) -> None:
        telemetry.record_event("textual.adapter", level="debug", data={"line": line})


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the code engine Textual demo.")
    parser.add_argument("path", nargs="?", help="File to open (read only; nothing is saved)")
    parser.add_argument(
        "--language",
        default=os.environ.get("CODE_ENGINE_LANGUAGE", "csharp"),
        help="Initial language: csharp, python, javascript or plain (default: csharp)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    text = Path(args.path).read_text(encoding="utf-8") if args.path else ""
    app = CodeEngineApp(text, language=args.language)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
