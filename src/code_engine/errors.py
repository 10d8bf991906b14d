"""Exception types raised by the engine.

Bad coordinates are never an error (they are clamped); these cover
configuration mistakes only.
"""

from __future__ import annotations


class CodeEngineError(RuntimeError):
    """Base class for engine configuration failures."""


class RulesetError(CodeEngineError):
    """Raised when a syntax rule pattern does not compile or a ruleset is unknown."""

    def __init__(self, message: str, *, rule: str | None = None) -> None:
        super().__init__(message)
        self.rule = rule


class ConfigError(CodeEngineError):
    """Raised for invalid editor options."""

    def __init__(self, message: str, *, option: str | None = None) -> None:
        super().__init__(message)
        self.option = option


__all__ = ["CodeEngineError", "ConfigError", "RulesetError"]
