from __future__ import annotations

import pytest

from code_engine.completion import LexiconCompletionProvider
from code_engine.config import EditorConfig, language_key
from code_engine.diagnostics import PythonAnalyzer
from code_engine.errors import ConfigError, RulesetError
from code_engine.highlighting import Ruleset


@pytest.mark.parametrize("tab_width", [0, -4, True, "4"])
def test_invalid_tab_width_is_rejected(tab_width) -> None:
    with pytest.raises(ConfigError) as excinfo:
        EditorConfig(tab_width=tab_width)

    assert excinfo.value.option == "tab_width"


def test_negative_debounce_is_rejected() -> None:
    with pytest.raises(ConfigError):
        EditorConfig(diagnostics_debounce_ms=-1)


def test_defaults_turn_providers_off() -> None:
    config = EditorConfig()

    assert config.tab_width == 4
    assert config.language_key == "plain"
    assert config.diagnostic_provider is None
    assert config.folding is None
    assert config.completion_provider is None


def test_for_language_fills_the_bundle() -> None:
    config = EditorConfig.for_language("py", tab_width=2)

    assert config.tab_width == 2
    assert config.language_key == "python"
    assert isinstance(config.diagnostic_provider, PythonAnalyzer)
    assert config.folding == "indent"
    assert isinstance(config.completion_provider, LexiconCompletionProvider)


def test_for_language_overrides_win() -> None:
    config = EditorConfig.for_language("csharp", folding=None)

    assert config.folding is None
    assert config.diagnostic_provider is not None


def test_language_key() -> None:
    assert language_key("JS") == "javascript"
    assert language_key(Ruleset("Custom", [])) == "plain"
    with pytest.raises(RulesetError):
        language_key("cobol")


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CODE_ENGINE_TAB_WIDTH", "2")
    monkeypatch.setenv("CODE_ENGINE_DIAGNOSTICS_DEBOUNCE_MS", "250")
    monkeypatch.setenv("CODE_ENGINE_LANGUAGE", "javascript")

    config = EditorConfig.from_env()

    assert config.tab_width == 2
    assert config.diagnostics_debounce_ms == 250
    assert config.language_key == "javascript"
    assert config.folding == "brace"


def test_from_env_explicit_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CODE_ENGINE_TAB_WIDTH", "2")
    monkeypatch.setenv("CODE_ENGINE_LANGUAGE", "javascript")

    config = EditorConfig.from_env(tab_width=8, language="plain")

    assert config.tab_width == 8
    assert config.language_key == "plain"
    assert config.completion_provider is None


@pytest.mark.parametrize(
    "name, value, option",
    [
        ("CODE_ENGINE_TAB_WIDTH", "wide", "tab_width"),
        ("CODE_ENGINE_TAB_WIDTH", "0", "tab_width"),
        ("CODE_ENGINE_LANGUAGE", "cobol", "language"),
    ],
)
def test_from_env_errors(monkeypatch: pytest.MonkeyPatch, name: str, value: str, option: str) -> None:
    monkeypatch.delenv("CODE_ENGINE_LANGUAGE", raising=False)
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigError) as excinfo:
        EditorConfig.from_env()

    assert excinfo.value.option == option
