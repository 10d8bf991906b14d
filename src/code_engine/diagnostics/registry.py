"""Built-in analyzers keyed by language."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from code_engine.highlighting.rules import canonical_language

from .csharp import CSharpAnalyzer
from .javascript import JavaScriptAnalyzer
from .models import DiagnosticProvider
from .python import PythonAnalyzer

BUILTIN_PROVIDERS: Dict[str, Callable[[], DiagnosticProvider]] = {
    "csharp": CSharpAnalyzer,
    "python": PythonAnalyzer,
    "javascript": JavaScriptAnalyzer,
}


def get_diagnostic_provider(name: str) -> Optional[DiagnosticProvider]:
    """Return a fresh analyzer for ``name``; plain text has none."""

    factory = BUILTIN_PROVIDERS.get(canonical_language(name))
    return factory() if factory is not None else None


__all__ = ["BUILTIN_PROVIDERS", "get_diagnostic_provider"]
