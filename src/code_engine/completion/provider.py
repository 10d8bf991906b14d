"""Lexicon and document-word completion."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Protocol, Set

from code_engine.buffer import Position
from code_engine.highlighting.rules import canonical_language

from .lexicons import LEXICONS, Lexicon

DOCUMENT_WORD = re.compile(r"\b[A-Za-z_]\w{2,}\b")


class CompletionItemKind(Enum):
    KEYWORD = "keyword"
    TYPE = "type"
    FUNCTION = "function"
    VARIABLE = "variable"
    PROPERTY = "property"
    SNIPPET = "snippet"
    CONSTANT = "constant"
    MODULE = "module"


@dataclass(frozen=True, slots=True)
class CompletionItem:
    text: str
    kind: CompletionItemKind
    description: str = ""


class CompletionProvider(Protocol):
    def complete(self, text: str, caret: Position, prefix: str) -> List[CompletionItem]:
        ...


def is_word_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def partial_word(line: str, column: int) -> str:
    """Longest run of word characters ending exactly at ``column``."""

    column = max(0, min(column, len(line)))
    start = column
    while start > 0 and is_word_char(line[start - 1]):
        start -= 1
    return line[start:column]


class LexiconCompletionProvider:
    """Offers lexicon entries first, then words already present in the document."""

    def __init__(self, lexicon: Lexicon, *, builtin_kind: CompletionItemKind = CompletionItemKind.FUNCTION) -> None:
        self.lexicon = lexicon
        self.builtin_kind = builtin_kind

    def _static(self) -> Iterable[CompletionItem]:
        for word in self.lexicon.keywords:
            yield CompletionItem(word, CompletionItemKind.KEYWORD, "keyword")
        for word in self.lexicon.types:
            yield CompletionItem(word, CompletionItemKind.TYPE, "type")
        for word in self.lexicon.builtins:
            yield CompletionItem(word, self.builtin_kind, "builtin")
        for word in self.lexicon.snippets:
            yield CompletionItem(word, CompletionItemKind.FUNCTION, "method")

    def complete(self, text: str, caret: Position, prefix: str) -> List[CompletionItem]:
        if not prefix:
            return []
        folded = prefix.lower()
        items: List[CompletionItem] = []
        seen: Set[str] = set()
        for item in self._static():
            if item.text.lower().startswith(folded) and item.text not in seen:
                items.append(item)
                seen.add(item.text)
        for match in DOCUMENT_WORD.finditer(text):
            word = match.group(0)
            if word == prefix or word in seen or not word.lower().startswith(folded):
                continue
            items.append(CompletionItem(word, CompletionItemKind.VARIABLE, "document word"))
            seen.add(word)
        return items


def get_completion_provider(name: str) -> Optional[LexiconCompletionProvider]:
    """Provider for a built-in language; plain text has none."""

    lexicon = LEXICONS.get(canonical_language(name))
    return LexiconCompletionProvider(lexicon) if lexicon is not None else None


__all__ = [
    "CompletionItem",
    "CompletionItemKind",
    "CompletionProvider",
    "DOCUMENT_WORD",
    "LexiconCompletionProvider",
    "get_completion_provider",
    "is_word_char",
    "partial_word",
]
