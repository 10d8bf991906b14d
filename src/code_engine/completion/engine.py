"""Completion queries and acceptance against a buffer."""

from __future__ import annotations

from typing import List, Optional

from code_engine.buffer import Position, TextBuffer
from code_engine.runtime import telemetry

from .provider import CompletionItem, CompletionProvider, partial_word


class CompletionEngine:
    def __init__(self, provider: Optional[CompletionProvider] = None) -> None:
        self.provider = provider

    def completions_for(
        self, text: str, caret: Position, prefix: Optional[str] = None
    ) -> List[CompletionItem]:
        """Suggestions for the word ending at ``caret``.

        Nothing is offered without a provider, for an empty prefix, or when
        the only candidate is the prefix itself.
        """

        if self.provider is None:
            return []
        if prefix is None:
            lines = text.split("\n")
            line = lines[caret.line] if 0 <= caret.line < len(lines) else ""
            prefix = partial_word(line, caret.column)
        if not prefix:
            return []
        with telemetry.span(
            "completion::query",
            component="completion",
            metadata={"prefix": prefix},
        ) as handle:
            items = self.provider.complete(text, caret, prefix)
            handle.add_metadata("count", len(items))
        if len(items) == 1 and items[0].text == prefix:
            return []
        return list(items)


def accept_completion(
    buffer: TextBuffer, caret: Position, prefix: str, item: CompletionItem
) -> Position:
    """Replace ``prefix`` before ``caret`` with ``item.text`` as one undo step."""

    caret = buffer.clamp(caret)
    start = Position(caret.line, max(0, caret.column - len(prefix)))
    return buffer.replace(start, caret, item.text)


__all__ = ["CompletionEngine", "accept_completion"]
