"""UI-agnostic source-code editing engine."""

from .config import EditorConfig
from .errors import CodeEngineError, ConfigError, RulesetError
from .session import EditorSession

__all__ = [
    "CodeEngineError",
    "ConfigError",
    "EditorConfig",
    "EditorSession",
    "RulesetError",
    "actions",
    "adapters",
    "buffer",
    "completion",
    "diagnostics",
    "folding",
    "highlighting",
    "runtime",
]

__version__ = "0.1.0"
