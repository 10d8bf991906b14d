"""C# analyzer."""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

from . import checks
from .models import AnalysisContext, Diagnostic, Severity, declares
from .scanner import CSHARP_SYNTAX, ScanResult, scan

TYPOS = checks.compile_typos(
    {
        r"\bConsle\b": "Console",
        r"\bConsoel\b": "Console",
        r"\bWritLine\b": "WriteLine",
        r"\bWriteLien\b": "WriteLine",
        r"\bReadLien\b": "ReadLine",
        r"\bStirng\b": "String",
        r"\bStrign\b": "String",
        r"\bLsit\b": "List",
        r"\bDictinoary\b": "Dictionary",
        r"\bDicitonary\b": "Dictionary",
        r"\bLenght\b": "Length",
        r"\bLegnth\b": "Length",
        r"\bCoutn\b": "Count",
        r"\bTostirng\b": "ToString",
        r"\bToStirng\b": "ToString",
        r"\bNamepsace\b": "Namespace",
        r"\bretrun\b": "return",
        r"\breture\b": "return",
    }
)

KEYWORD_HINTS = (
    (re.compile(r"\bString\b"), "string", "String"),
    (re.compile(r"\bInt32\b"), "int", "Int32"),
    (re.compile(r"\bBoolean\b"), "bool", "Boolean"),
)

_STATEMENT = re.compile(
    r"^\s*(?:return|throw|var|int|string|bool|double|float|char|long|byte|short|decimal|object|dynamic)\s+.+[^;{}\s]\s*$"
)
_LOCAL = re.compile(r"\b(?:var|int|string|bool|double|float)\s+(\w+)\s*=")
_EMPTY_HEADER = re.compile(r"^(if|else if|else|for|foreach|while|switch)\b")
_CATCH_HEADER = re.compile(r"^(catch)\b")
_METHOD = re.compile(
    r"^(?:(?:public|private|protected|internal|static|virtual|override|async)\s+)*"
    r"(?:void|int|string|bool|double|float|Task(?:<\w+>)?)\s+(\w+)\s*\("
)
_VARIABLE = re.compile(
    r"^(?:var|int|string|bool|double|float|char|long|byte|short|decimal|object|dynamic)\s+(\w+)\s*[=;]"
)
_TERMINATOR = re.compile(r"^(?:return\b|break\s*;|continue\s*;|throw\b)")
_BRANCH_LABEL = re.compile(r"^(?:case\b|default\s*:|\})")


class CSharpAnalyzer:
    """Pattern checks for C# sources."""

    language = "csharp"
    syntax = CSHARP_SYNTAX

    def analyze(
        self, text: str, context: Optional[AnalysisContext] = None
    ) -> List[Diagnostic]:
        result = scan(text, self.syntax)
        found = checks.bracket_balance(result)
        last_seen = checks.last_word_positions(result.masks)
        for line_no, mask in enumerate(result.masks):
            trimmed = mask.strip()
            if not trimmed:
                continue
            if not checks.continues_past(result, line_no):
                found.extend(self._semicolons(line_no, mask, trimmed))
            found.extend(self._empty_blocks(result, line_no))
            found.extend(self._unused_local(line_no, mask, last_seen, context))
            found.extend(self._console_write(line_no, mask))
            hit = checks.assignment_in_condition(line_no, mask, ("if",), "'=='")
            if hit is not None:
                found.append(hit)
            found.extend(self._this_qualifier(line_no, mask))
            found.extend(self._keyword_hints(line_no, mask, trimmed))
            found.extend(checks.typos(line_no, mask, TYPOS, context))
        found.extend(checks.unterminated_strings(result))
        found.extend(self._duplicate_declarations(result))
        found.extend(checks.unreachable_after_terminator(result, _TERMINATOR, _BRANCH_LABEL))
        return found

    def _semicolons(self, line_no: int, mask: str, trimmed: str) -> List[Diagnostic]:
        end = len(mask.rstrip())
        if trimmed.startswith("using ") and "(" not in trimmed:
            if not trimmed.endswith(";"):
                return [
                    Diagnostic(line_no, end, 1, "Expected ';' at end of using directive", Severity.ERROR)
                ]
            return []
        if _STATEMENT.match(mask) and not trimmed.endswith((";", "{", "}", ",")):
            return [Diagnostic(line_no, end, 1, "Possible missing semicolon", Severity.WARNING)]
        return []

    def _empty_blocks(self, result: ScanResult, line_no: int) -> List[Diagnostic]:
        trimmed = result.masks[line_no].strip()
        if _CATCH_HEADER.match(trimmed):
            hit = checks.empty_brace_block(result, line_no, _CATCH_HEADER)
            if hit is None:
                return []
            return [
                Diagnostic(
                    hit.line,
                    hit.column,
                    hit.length,
                    "Empty catch block; consider logging the exception",
                    Severity.WARNING,
                )
            ]
        hit = checks.empty_brace_block(result, line_no, _EMPTY_HEADER)
        return [hit] if hit is not None else []

    def _unused_local(
        self,
        line_no: int,
        mask: str,
        last_seen: Dict[str, Tuple[int, int]],
        context: Optional[AnalysisContext],
    ) -> List[Diagnostic]:
        match = _LOCAL.search(mask)
        if match is None:
            return []
        name = match.group(1)
        if declares(context, name):
            return []
        if last_seen.get(name, (-1, -1)) >= (line_no, match.end()):
            return []
        return [
            Diagnostic(
                line_no,
                match.start(1),
                len(name),
                f"Variable '{name}' is assigned but its value is never used",
                Severity.WARNING,
            )
        ]

    def _console_write(self, line_no: int, mask: str) -> List[Diagnostic]:
        match = re.search(r"Console\.Write\(\s*\)", mask)
        if match is None:
            return []
        return [
            Diagnostic(
                line_no,
                match.start(),
                len(match.group(0)),
                "Console.Write() called with no arguments",
                Severity.INFO,
            )
        ]

    def _this_qualifier(self, line_no: int, mask: str) -> List[Diagnostic]:
        match = re.search(r"\bthis\.\w+", mask)
        if match is None:
            return []
        return [Diagnostic(line_no, match.start(), 5, "'this.' qualifier is unnecessary", Severity.HINT)]

    def _keyword_hints(self, line_no: int, mask: str, trimmed: str) -> List[Diagnostic]:
        found: List[Diagnostic] = []
        for pattern, keyword, type_name in KEYWORD_HINTS:
            if trimmed.startswith("using"):
                break
            match = pattern.search(mask)
            if match is not None:
                found.append(
                    Diagnostic(
                        line_no,
                        match.start(),
                        len(type_name),
                        f"Use keyword '{keyword}' instead of '{type_name}'",
                        Severity.HINT,
                    )
                )
        return found

    def _duplicate_declarations(self, result: ScanResult) -> List[Diagnostic]:
        found: List[Diagnostic] = []
        scopes = checks.DeclarationScopes()
        for line_no, mask in enumerate(result.masks):
            trimmed = mask.strip()
            if not trimmed:
                continue
            indent = result.indent_of(line_no)
            scopes.enter(indent)
            method = _METHOD.match(trimmed)
            if method is not None:
                name = method.group(1)
                earlier = scopes.declare(indent, "method", name, line_no)
                if earlier is not None:
                    found.append(
                        Diagnostic(
                            line_no,
                            mask.find(name, indent),
                            len(name),
                            f"Method '{name}' is already declared on line {earlier + 1} "
                            "(if not an overload, this is a duplicate)",
                            Severity.INFO,
                        )
                    )
            variable = _VARIABLE.match(trimmed)
            if variable is not None:
                name = variable.group(1)
                earlier = scopes.declare(indent, "var", name, line_no)
                if earlier is not None:
                    found.append(
                        Diagnostic(
                            line_no,
                            mask.find(name, indent),
                            len(name),
                            f"Variable '{name}' is already declared on line {earlier + 1}",
                            Severity.WARNING,
                        )
                    )
        return found


__all__ = ["CSharpAnalyzer", "KEYWORD_HINTS", "TYPOS"]
