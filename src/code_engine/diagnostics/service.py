"""Fail-soft diagnostics runner with a by-line index."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from code_engine.runtime import telemetry

from .models import AnalysisContext, Diagnostic, DiagnosticProvider

DiagnosticsListener = Callable[[], None]


class DiagnosticsService:
    """Runs the configured provider and keeps the latest results.

    A provider that raises is logged and treated as having found nothing for
    that run; the previous results are replaced with an empty set so stale
    markers never outlive the text they describe.
    """

    def __init__(
        self,
        provider: Optional[DiagnosticProvider] = None,
        context: Optional[AnalysisContext] = None,
    ) -> None:
        self.provider = provider
        self.context = context
        self._diagnostics: List[Diagnostic] = []
        self._by_line: Dict[int, List[Diagnostic]] = {}
        self._listeners: List[DiagnosticsListener] = []
        self.run_count = 0

    def on_change(self, listener: DiagnosticsListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def compute(self, text: str) -> List[Diagnostic]:
        """Analyze ``text`` without publishing; never raises."""

        provider = self.provider
        if provider is None:
            return []
        language = getattr(provider, "language", type(provider).__name__)
        with telemetry.span(
            "diagnostics::analyze",
            component="diagnostics",
            metadata={"language": language, "length": len(text)},
        ) as handle:
            try:
                found = list(provider.analyze(text, self.context))
            except Exception as exc:
                telemetry.record_event(
                    "diagnostics.failed",
                    level="error",
                    data={"language": language, "error": repr(exc)},
                )
                handle.cancel("provider raised")
                return []
            handle.add_metadata("count", len(found))
        return found

    def publish(self, diagnostics: List[Diagnostic]) -> None:
        self._diagnostics = list(diagnostics)
        by_line: Dict[int, List[Diagnostic]] = {}
        for item in self._diagnostics:
            by_line.setdefault(item.line, []).append(item)
        for bucket in by_line.values():
            bucket.sort(key=lambda d: (d.column, d.length, d.message))
        self._by_line = by_line
        self.run_count += 1
        for listener in list(self._listeners):
            listener()

    def run(self, text: str) -> List[Diagnostic]:
        found = self.compute(text)
        self.publish(found)
        return list(found)

    def clear(self) -> None:
        self.publish([])

    def for_line(self, line: int) -> List[Diagnostic]:
        return list(self._by_line.get(line, ()))

    def all(self) -> List[Diagnostic]:
        return list(self._diagnostics)


__all__ = ["DiagnosticsListener", "DiagnosticsService"]
