"""Brace and indentation folding with a visible-line projection."""

from typing import Optional, Union

from code_engine.diagnostics.scanner import SYNTAXES
from code_engine.errors import ConfigError

from .model import FoldingModel
from .providers import (
    BraceFoldingProvider,
    FoldingProvider,
    FoldRegion,
    IndentFoldingProvider,
    indent_width,
)

FoldingChoice = Union[None, str, FoldingProvider]


def make_folding_provider(
    choice: FoldingChoice, *, language: str = "plain", tab_width: int = 4
) -> Optional[FoldingProvider]:
    """Resolve ``None``/``"brace"``/``"indent"`` or pass a provider through."""

    if choice is None or not isinstance(choice, str):
        return choice
    key = choice.strip().lower()
    syntax = SYNTAXES.get(language, SYNTAXES["plain"])
    if key == "brace":
        return BraceFoldingProvider(syntax)
    if key in ("indent", "indentation"):
        return IndentFoldingProvider(tab_width, syntax)
    raise ConfigError(f"Unknown folding strategy '{choice}'", option="folding")


__all__ = [
    "BraceFoldingProvider",
    "FoldRegion",
    "FoldingChoice",
    "FoldingModel",
    "FoldingProvider",
    "IndentFoldingProvider",
    "indent_width",
    "make_folding_provider",
]
