"""Keyword, builtin and document-word completion."""

from .engine import CompletionEngine, accept_completion
from .lexicons import LEXICONS, Lexicon
from .provider import (
    CompletionItem,
    CompletionItemKind,
    CompletionProvider,
    LexiconCompletionProvider,
    get_completion_provider,
    partial_word,
)

__all__ = [
    "CompletionEngine",
    "CompletionItem",
    "CompletionItemKind",
    "CompletionProvider",
    "LEXICONS",
    "Lexicon",
    "LexiconCompletionProvider",
    "accept_completion",
    "get_completion_provider",
    "partial_word",
]
