"""Regex rulesets and the lazy highlighter."""

from .highlighter import ColorRun, Highlighter, StyledSpan
from .rules import (
    BUILTIN_RULESETS,
    Color,
    FontStyle,
    Ruleset,
    SyntaxRule,
    canonical_language,
    get_ruleset,
)

__all__ = [
    "BUILTIN_RULESETS",
    "Color",
    "ColorRun",
    "FontStyle",
    "Highlighter",
    "Ruleset",
    "StyledSpan",
    "SyntaxRule",
    "canonical_language",
    "get_ruleset",
]
