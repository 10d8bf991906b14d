"""JavaScript analyzer."""

from __future__ import annotations

import re
from typing import List, Optional

from . import checks
from .models import AnalysisContext, Diagnostic, Severity
from .scanner import JAVASCRIPT_SYNTAX, ScanResult, scan

TYPOS = checks.compile_typos(
    {
        r"\bconsle\b": "console",
        r"\bconosle\b": "console",
        r"\bdocuemnt\b": "document",
        r"\bdocumnet\b": "document",
        r"\bfuntcion\b": "function",
        r"\bfucntion\b": "function",
        r"\bretrun\b": "return",
        r"\breture\b": "return",
        r"\blenght\b": "length",
        r"\blegnth\b": "length",
        r"\bflase\b": "false",
        r"\bture\b": "true",
        r"\bnlul\b": "null",
        r"\bparseINt\b": "parseInt",
        r"\bpraseInt\b": "parseInt",
        r"\bsetTimoet\b": "setTimeout",
        r"\bsetTimout\b": "setTimeout",
        r"\bsetInteval\b": "setInterval",
        r"\baddEvenListener\b": "addEventListener",
        r"\baddEventListner\b": "addEventListener",
        r"\bquerySelectro\b": "querySelector",
    }
)

CONDITION_KEYWORDS = ("if", "while")
ASSIGNMENT_HINT = "'===' or '=='"

_STATEMENT = re.compile(r"^\s*(?:return|throw|const|let|var)\s+.+[^;{},\s]\s*$")
_LOOSE_EQUAL = re.compile(r"(?<![=!<>])==(?!=)")
_LOOSE_NOT_EQUAL = re.compile(r"!=(?!=)")
_UNDEFINED_COMPARE = re.compile(r"(?:===?|!==?)\s*undefined\b")
_UNDEFINED_INIT = re.compile(r"\b(?:let|var)\s+\w+\s*(=\s*undefined)\b")
_ANONYMOUS_FUNCTION = re.compile(r"\bfunction\s*\(")
_EMPTY_HEADER = re.compile(r"^(else if|if|else|for|while|switch)\b")
_OBJECT_KEY = re.compile(r"(?:^|[,{])\s*(\w+)\s*:(?!:)")
_FUNCTION = re.compile(r"^(?:export\s+)?(?:async\s+)?function\s+(\w+)\s*\(")
_BINDING = re.compile(r"^(?:export\s+)?(?:let|const)\s+(\w+)\s*[=;]")
_TERMINATOR = re.compile(r"^(?:return\b|break\s*;|continue\s*;|throw\b)")
_BRANCH_LABEL = re.compile(r"^(?:case\b|default\s*:|\})")


def check_assignment_in_condition(line_no: int, mask: str) -> Optional[Diagnostic]:
    """Flag ``if``/``while`` conditions that assign instead of compare."""

    return checks.assignment_in_condition(line_no, mask, CONDITION_KEYWORDS, ASSIGNMENT_HINT)


class JavaScriptAnalyzer:
    """Pattern checks for JavaScript sources."""

    language = "javascript"
    syntax = JAVASCRIPT_SYNTAX

    def analyze(
        self, text: str, context: Optional[AnalysisContext] = None
    ) -> List[Diagnostic]:
        result = scan(text, self.syntax)
        found = checks.bracket_balance(result)
        for line_no, mask in enumerate(result.masks):
            trimmed = mask.strip()
            if not trimmed:
                continue
            if trimmed.startswith("var "):
                found.append(
                    Diagnostic(
                        line_no,
                        mask.find("var"),
                        3,
                        "Use 'let' or 'const' instead of 'var'",
                        Severity.WARNING,
                    )
                )
            found.extend(self._loose_equality(line_no, mask))
            if not checks.continues_past(result, line_no):
                found.extend(self._semicolons(line_no, mask, trimmed))
            found.extend(self._console_log(line_no, mask))
            found.extend(self._undefined(line_no, mask))
            found.extend(self._anonymous_function(line_no, mask, trimmed))
            found.extend(checks.typos(line_no, mask, TYPOS, context))
            hit = checks.empty_brace_block(result, line_no, _EMPTY_HEADER)
            if hit is not None:
                found.append(hit)
            hit = check_assignment_in_condition(line_no, mask)
            if hit is not None:
                found.append(hit)
            found.extend(checks.duplicate_keys(line_no, mask, _OBJECT_KEY, "object"))
        found.extend(checks.unterminated_strings(result))
        found.extend(self._duplicate_declarations(result))
        found.extend(checks.unreachable_after_terminator(result, _TERMINATOR, _BRANCH_LABEL))
        return found

    def _loose_equality(self, line_no: int, mask: str) -> List[Diagnostic]:
        found = [
            Diagnostic(
                line_no,
                match.start(),
                2,
                "Use '===' instead of '==' for strict equality comparison",
                Severity.WARNING,
            )
            for match in _LOOSE_EQUAL.finditer(mask)
        ]
        found.extend(
            Diagnostic(
                line_no,
                match.start(),
                2,
                "Use '!==' instead of '!=' for strict inequality comparison",
                Severity.WARNING,
            )
            for match in _LOOSE_NOT_EQUAL.finditer(mask)
        )
        return found

    def _semicolons(self, line_no: int, mask: str, trimmed: str) -> List[Diagnostic]:
        if trimmed.startswith(("import ", "export ")) and " from " not in trimmed:
            return []
        if not _STATEMENT.match(mask):
            return []
        if trimmed.endswith((";", "{", "}", ",", "=>", "(", "[")):
            return []
        return [
            Diagnostic(line_no, len(mask.rstrip()), 1, "Possible missing semicolon", Severity.INFO)
        ]

    def _console_log(self, line_no: int, mask: str) -> List[Diagnostic]:
        match = re.search(r"\bconsole\.log\(", mask)
        if match is None:
            return []
        return [
            Diagnostic(
                line_no,
                match.start(),
                11,
                "console.log() statement found; consider removing before production",
                Severity.INFO,
            )
        ]

    def _undefined(self, line_no: int, mask: str) -> List[Diagnostic]:
        found: List[Diagnostic] = []
        match = _UNDEFINED_COMPARE.search(mask)
        if match is not None:
            found.append(
                Diagnostic(
                    line_no,
                    match.start(),
                    len(match.group(0)),
                    "Consider using 'typeof x === \"undefined\"' for safer undefined checks",
                    Severity.INFO,
                )
            )
        match = _UNDEFINED_INIT.search(mask)
        if match is not None:
            found.append(
                Diagnostic(
                    line_no,
                    match.start(1),
                    len(match.group(1)),
                    "Unnecessary initialization to undefined; 'let' variables are undefined by default",
                    Severity.HINT,
                )
            )
        return found

    def _anonymous_function(self, line_no: int, mask: str, trimmed: str) -> List[Diagnostic]:
        if trimmed.startswith(("function ", "export function", "async function")):
            return []
        match = _ANONYMOUS_FUNCTION.search(mask)
        if match is None:
            return []
        return [
            Diagnostic(line_no, match.start(), 8, "Consider using an arrow function instead", Severity.HINT)
        ]

    def _duplicate_declarations(self, result: ScanResult) -> List[Diagnostic]:
        found: List[Diagnostic] = []
        scopes = checks.DeclarationScopes()
        depth = 0
        for line_no, mask in enumerate(result.masks):
            trimmed = mask.strip()
            if not trimmed:
                continue
            # Leading closers end the enclosing scope before this line declares anything.
            for char in trimmed:
                if char != "}":
                    break
                depth = max(0, depth - 1)
            scopes.enter(depth)
            for pattern, kind, label in (
                (_FUNCTION, "function", "Function"),
                (_BINDING, "binding", "Variable"),
            ):
                match = pattern.match(trimmed)
                if match is None:
                    continue
                name = match.group(1)
                earlier = scopes.declare(depth, kind, name, line_no)
                if earlier is not None:
                    found.append(
                        Diagnostic(
                            line_no,
                            mask.find(name, len(mask) - len(mask.lstrip())),
                            len(name),
                            f"{label} '{name}' is already declared on line {earlier + 1}",
                            Severity.WARNING,
                        )
                    )
            leading = len(trimmed) - len(trimmed.lstrip("}"))
            for char in trimmed[leading:]:
                if char == "{":
                    depth += 1
                elif char == "}":
                    depth = max(0, depth - 1)
        return found


__all__ = ["ASSIGNMENT_HINT", "JavaScriptAnalyzer", "TYPOS", "check_assignment_in_condition"]
