from __future__ import annotations

import pytest

from code_engine.errors import RulesetError
from code_engine.highlighting import (
    BUILTIN_RULESETS,
    Color,
    FontStyle,
    Ruleset,
    SyntaxRule,
    canonical_language,
    get_ruleset,
)


def test_invalid_pattern_raises_ruleset_error() -> None:
    with pytest.raises(RulesetError) as info:
        SyntaxRule("Broken", r"(unclosed", Color(1, 2, 3))

    assert info.value.rule == "Broken"


def test_invalid_exclusion_raises_ruleset_error() -> None:
    with pytest.raises(RulesetError):
        SyntaxRule("Holes", r'"[^"]*"', Color(1, 2, 3), exclude=r"[")


def test_rules_compile_multiline() -> None:
    rule = SyntaxRule("LineStart", r"^x", Color(0, 0, 0))

    assert [m.start() for m in rule.regex.finditer("x\nx")] == [0, 2]


@pytest.mark.parametrize(
    "name, key",
    [("C#", "csharp"), ("cs", "csharp"), ("Python", "python"), ("js", "javascript"), ("text", "plain")],
)
def test_aliases_resolve(name: str, key: str) -> None:
    assert canonical_language(name) == key


def test_unknown_ruleset_raises() -> None:
    with pytest.raises(RulesetError):
        get_ruleset("cobol")


def test_builtin_rulesets_are_fresh_copies() -> None:
    first = get_ruleset("python")
    first.add_rule("Extra", r"zzz", Color(9, 9, 9))

    assert len(get_ruleset("python").rules) == len(first.rules) - 1
    assert set(BUILTIN_RULESETS) == {"csharp", "python", "javascript", "plain"}


def test_line_comment_tokens() -> None:
    assert get_ruleset("csharp").line_comment_token == "//"
    assert get_ruleset("python").line_comment_token == "#"
    assert get_ruleset("plain").line_comment_token is None


def test_color_hex_and_style_flags() -> None:
    assert Color(255, 0, 16).hex == "#ff0010"
    combined = FontStyle.BOLD | FontStyle.ITALIC
    assert FontStyle.BOLD in combined
    assert FontStyle.UNDERLINE not in combined


def test_add_rule_appends_in_order() -> None:
    ruleset = Ruleset("Demo")
    ruleset.add_rule("A", r"a", Color(1, 1, 1))
    ruleset.add_rule("B", r"b", Color(2, 2, 2))

    assert [rule.name for rule in ruleset.rules] == ["A", "B"]
