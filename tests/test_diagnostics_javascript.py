from __future__ import annotations

from typing import List

from code_engine.diagnostics import (
    AnalysisContext,
    Diagnostic,
    JavaScriptAnalyzer,
    JAVASCRIPT_SYNTAX,
    Severity,
    check_assignment_in_condition,
    scan,
)

ASSIGNMENT = "Possible accidental assignment in condition; did you mean '===' or '=='?"


def analyze(text: str, context: AnalysisContext | None = None) -> List[Diagnostic]:
    return JavaScriptAnalyzer().analyze(text, context)


def messages(found: List[Diagnostic]) -> List[str]:
    return [item.message for item in found]


def test_assignment_in_if_condition_scenario() -> None:
    text = "if (x = 5) {\n}\n"
    masks = scan(text, JAVASCRIPT_SYNTAX).masks

    hits = [
        hit
        for line_no, mask in enumerate(masks)
        if (hit := check_assignment_in_condition(line_no, mask)) is not None
    ]

    assert hits == [Diagnostic(0, 0, 10, ASSIGNMENT, Severity.WARNING)]
    assert messages(analyze(text)).count(ASSIGNMENT) == 1


def test_strict_comparison_is_not_an_assignment() -> None:
    assert check_assignment_in_condition(0, "if (x === 5) {") is None
    assert check_assignment_in_condition(0, "while (a <= b) {") is None


def test_comments_and_strings_are_ignored() -> None:
    assert analyze('// if (x = 5)\nconst s = "a == b";\n/* var y = 1 */\n') == []


def test_template_literal_spanning_lines_is_quiet() -> None:
    assert analyze("const t = `a\n${b}\nc`;\n") == []


def test_var_and_loose_equality() -> None:
    found = analyze("var x = 1;\nif (x == 2) {\n    go();\n}\n")

    assert Diagnostic(0, 0, 3, "Use 'let' or 'const' instead of 'var'", Severity.WARNING) in found
    assert Diagnostic(
        1, 6, 2, "Use '===' instead of '==' for strict equality comparison", Severity.WARNING
    ) in found


def test_missing_semicolon_and_console_log() -> None:
    found = analyze("const a = 1\nconsole.log(a);\n")

    assert Diagnostic(0, 11, 1, "Possible missing semicolon", Severity.INFO) in found
    assert any(item.message.startswith("console.log()") for item in found)


def test_duplicate_object_key() -> None:
    found = analyze("const o = { a: 1, a: 2 };\n")

    assert messages(found) == ["Duplicate key 'a' in object literal"]


def test_duplicate_declarations_scoped_by_braces() -> None:
    separate = "function f() {\n    const a = 1;\n}\nfunction g() {\n    const a = 2;\n}\n"
    same = "const a = 1;\nconst a = 2;\n"

    assert analyze(separate) == []
    assert messages(analyze(same)) == ["Variable 'a' is already declared on line 1"]


def test_unreachable_after_return() -> None:
    found = analyze("function f() {\n    return 1;\n    go();\n}\n")

    assert found == [Diagnostic(2, 4, 5, "Unreachable code detected", Severity.WARNING)]


def test_typo_skipped_when_context_declares_name() -> None:
    text = "consle.warn(1);\n"

    assert messages(analyze(text)) == ["Did you mean 'console'?"]
    assert analyze(text, AnalysisContext.from_names(["consle"])) == []


def test_unterminated_string() -> None:
    found = analyze("const s = 'abc;\n")

    assert Diagnostic(0, 10, 1, "Unterminated string literal", Severity.ERROR) in found
