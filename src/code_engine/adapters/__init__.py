"""Host integrations for the editing engine."""

__all__ = ["textual"]
