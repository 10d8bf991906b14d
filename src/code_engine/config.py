"""Editor options shared by every session."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Optional, Union

from .completion import CompletionProvider, get_completion_provider
from .diagnostics import DiagnosticProvider, get_diagnostic_provider
from .errors import CodeEngineError, ConfigError
from .folding import FoldingChoice
from .highlighting import Ruleset, canonical_language

ENV_PREFIX = "CODE_ENGINE_"

DEFAULT_FOLDING = {
    "csharp": "brace",
    "javascript": "brace",
    "python": "indent",
}


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(f"{ENV_PREFIX}{name}")
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(
            f"{ENV_PREFIX}{name} must be an integer, got {raw!r}", option=name.lower()
        ) from exc


def language_key(language: Union[str, Ruleset]) -> str:
    """Built-in key for ``language``; custom rulesets fall back to ``"plain"``."""

    name = language.language_name if isinstance(language, Ruleset) else language
    try:
        return canonical_language(name)
    except CodeEngineError:
        if isinstance(language, Ruleset):
            return "plain"
        raise


@dataclass(slots=True)
class EditorConfig:
    """Knobs for an :class:`~code_engine.session.EditorSession`.

    ``language`` names a built-in ruleset or is a :class:`Ruleset`. Providers
    left as ``None`` are off; :meth:`for_language` fills in the built-in
    bundle for a language.
    """

    tab_width: int = 4
    language: Union[str, Ruleset] = "plain"
    diagnostic_provider: Optional[DiagnosticProvider] = None
    folding: FoldingChoice = None
    completion_provider: Optional[CompletionProvider] = None
    auto_indent: bool = True
    auto_close_pairs: bool = True
    diagnostics_debounce_ms: int = 500

    def __post_init__(self) -> None:
        if isinstance(self.tab_width, bool) or not isinstance(self.tab_width, int):
            raise ConfigError("tab_width must be an integer", option="tab_width")
        if self.tab_width <= 0:
            raise ConfigError(
                f"tab_width must be positive, got {self.tab_width}", option="tab_width"
            )
        if self.diagnostics_debounce_ms < 0:
            raise ConfigError(
                "diagnostics_debounce_ms must not be negative",
                option="diagnostics_debounce_ms",
            )

    @property
    def language_key(self) -> str:
        return language_key(self.language)

    @classmethod
    def for_language(cls, language: Union[str, Ruleset], **overrides: Any) -> "EditorConfig":
        """Config with the built-in diagnostics, folding and completion of ``language``."""

        key = language_key(language)
        values: dict[str, Any] = {
            "language": language,
            "diagnostic_provider": get_diagnostic_provider(key),
            "folding": DEFAULT_FOLDING.get(key),
            "completion_provider": get_completion_provider(key),
        }
        values.update(overrides)
        return cls(**values)

    @classmethod
    def from_env(cls, **overrides: Any) -> "EditorConfig":
        values: dict[str, Any] = {}
        tab_width = _env_int("TAB_WIDTH")
        if tab_width is not None:
            values["tab_width"] = tab_width
        debounce = _env_int("DIAGNOSTICS_DEBOUNCE_MS")
        if debounce is not None:
            values["diagnostics_debounce_ms"] = debounce
        values.update(overrides)
        language = os.getenv(f"{ENV_PREFIX}LANGUAGE", "").strip()
        if language and "language" not in overrides:
            try:
                return cls.for_language(language, **values)
            except CodeEngineError as exc:
                raise ConfigError(str(exc), option="language") from exc
        return cls(**values)


__all__ = ["DEFAULT_FOLDING", "EditorConfig", "language_key"]
