"""Textual integration: key translation plus a demo app."""

from .controller import EditorUIHooks, RenderedLine, TextualEditorAdapter

__all__ = ["EditorUIHooks", "RenderedLine", "TextualEditorAdapter"]
