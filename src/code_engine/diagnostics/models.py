"""Diagnostic records, the analysis context and the provider protocol."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Protocol


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    HINT = "hint"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A finding anchored at ``line``/``column`` spanning ``length`` characters."""

    line: int
    column: int
    length: int
    message: str
    severity: Severity = Severity.WARNING

    def __post_init__(self) -> None:
        object.__setattr__(self, "line", max(0, self.line))
        object.__setattr__(self, "column", max(0, self.column))
        object.__setattr__(self, "length", max(1, self.length))

    @property
    def end_column(self) -> int:
        return self.column + self.length


@dataclass(frozen=True, slots=True)
class AnalysisContext:
    """Cross-file knowledge handed to analyzers.

    ``symbols`` maps declared names to a free-form kind (``"class"``,
    ``"function"``, ...). ``modules`` lists importable module names. An empty
    context is equivalent to passing ``None``.
    """

    symbols: Mapping[str, str] = field(default_factory=dict)
    modules: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "symbols", MappingProxyType(dict(self.symbols)))
        object.__setattr__(self, "modules", frozenset(self.modules))

    @classmethod
    def from_names(cls, names: Iterable[str], *, kind: str = "symbol") -> "AnalysisContext":
        return cls({name: kind for name in names})

    @property
    def is_empty(self) -> bool:
        return not self.symbols and not self.modules

    def declares(self, name: str) -> bool:
        return name in self.symbols or name in self.modules


def declares(context: Optional[AnalysisContext], name: str) -> bool:
    return context is not None and context.declares(name)


class DiagnosticProvider(Protocol):
    """Pure analyzer turning document text into diagnostics."""

    language: str

    def analyze(
        self, text: str, context: Optional[AnalysisContext] = None
    ) -> List[Diagnostic]:
        """Return every finding for ``text``; identical input yields identical output."""
        ...


__all__ = [
    "AnalysisContext",
    "Diagnostic",
    "DiagnosticProvider",
    "Severity",
    "declares",
]
