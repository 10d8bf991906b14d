from __future__ import annotations

import time
from typing import List

from code_engine.diagnostics import AnalysisContext, Diagnostic, PythonAnalyzer, Severity
from code_engine.diagnostics.checks import DeclarationScopes


def analyze(text: str, context: AnalysisContext | None = None) -> List[Diagnostic]:
    return PythonAnalyzer().analyze(text, context)


def messages(found: List[Diagnostic]) -> List[str]:
    return [item.message for item in found]


def test_clean_source_has_no_findings() -> None:
    text = 'def greet(name):\n    print(name)\n\n\ngreet("x")\n'

    assert analyze(text) == []


def test_analysis_is_deterministic() -> None:
    text = "def f(a=[]):\n    if a == None:\n        return 1\n        x = 2\n"

    assert analyze(text) == analyze(text)
    assert analyze(text, AnalysisContext()) == analyze(text, None)


def test_missing_colon() -> None:
    found = analyze("def f()\n    return 1\n")

    assert found == [
        Diagnostic(0, 7, 1, "Expected ':' at end of 'def' statement", Severity.ERROR)
    ]


def test_multi_line_signature_is_not_missing_a_colon() -> None:
    assert analyze("def f(a,\n      b):\n    return a\n") == []


def test_bare_except_and_mutable_default() -> None:
    found = messages(analyze("def f(items=[]):\n    try:\n        pass\n    except:\n        pass\n"))

    assert any(message.startswith("Mutable default argument '[]'") for message in found)
    assert any(message.startswith("Bare 'except:'") for message in found)


def test_comparisons_to_singletons() -> None:
    found = analyze("if x == None:\n    y = x == True\n")

    assert Diagnostic(0, 3, 9, "Use 'is None' instead of '== None'", Severity.INFO) in found
    assert any(item.message.startswith("Comparison to True") for item in found)


def test_text_in_comments_and_strings_is_ignored() -> None:
    text = '# pirnt(x == None)\ns = "if x == None"\n'

    assert analyze(text) == []


def test_typo_skipped_when_context_declares_name() -> None:
    text = "pirnt(1)\n"

    assert messages(analyze(text)) == ["Did you mean 'print'?"]
    assert analyze(text, AnalysisContext.from_names(["pirnt"])) == []


def test_duplicate_dict_key() -> None:
    found = analyze('d = {"a": 1, "a": 2}\n')

    assert messages(found) == ["Duplicate key 'a' in dictionary literal"]
    assert found[0].column == 13


def test_empty_block() -> None:
    found = analyze("if ready:\nprint(1)\n")

    assert "Empty 'if' block" in messages(found)


def test_unterminated_string() -> None:
    found = analyze('x = "abc\n')

    assert Diagnostic(0, 4, 1, "Unterminated string literal", Severity.ERROR) in found


def test_duplicate_definitions_are_scoped_by_indentation() -> None:
    siblings = (
        "class A:\n    def __init__(self):\n        pass\n\n\n"
        "class B:\n    def __init__(self):\n        pass\n"
    )
    duplicated = "def a():\n    pass\n\n\ndef a():\n    pass\n"

    assert analyze(siblings) == []
    assert messages(analyze(duplicated)) == ["Function 'a' is already defined on line 1"]


def test_unreachable_code_after_return() -> None:
    found = analyze("def f():\n    return 1\n    x = 2\n")

    assert found == [Diagnostic(2, 4, 5, "Unreachable code detected", Severity.WARNING)]


def test_code_after_nested_return_is_reachable() -> None:
    text = "def f(a):\n    if a:\n        return 1\n    return 2\n"

    assert analyze(text) == []


def test_inconsistent_indentation() -> None:
    found = analyze("if a:\n    b = 1\n      c = 2\n")

    assert any(item.message.startswith("Unexpected indentation") for item in found)


def test_mixed_tabs_and_spaces() -> None:
    found = analyze("if a:\n \tb = 1\n")

    assert "Mixed tabs and spaces in indentation" in messages(found)


def test_declaration_scopes_forget_deeper_levels() -> None:
    scopes = DeclarationScopes()

    assert scopes.declare(0, "def", "f", 0) is None
    assert scopes.declare(4, "def", "g", 1) is None
    assert scopes.declare(4, "def", "g", 2) == 1
    scopes.enter(0)
    assert scopes.declare(4, "def", "g", 5) is None
    assert scopes.declare(0, "def", "f", 6) == 0
    assert scopes.declare(0, "class", "f", 7) is None


def _best_time(text: str) -> float:
    analyzer = PythonAnalyzer()
    best = float("inf")
    for _ in range(3):
        started = time.perf_counter()
        analyzer.analyze(text)
        best = min(best, time.perf_counter() - started)
    return best


def test_analysis_time_grows_linearly() -> None:
    def source(count: int) -> str:
        return "".join(f"def f{n}():\n    return {n}\n" for n in range(count))

    small = _best_time(source(1500))
    large = _best_time(source(6000))

    assert large < small * 8
