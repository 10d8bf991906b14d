"""Python analyzer."""

from __future__ import annotations

import re
from typing import List, Optional

from . import checks
from .models import AnalysisContext, Diagnostic, Severity
from .scanner import PYTHON_SYNTAX, ScanResult, bracket_depths, scan

TYPOS = checks.compile_typos(
    {
        r"\bpirnt\b": "print",
        r"\bpritn\b": "print",
        r"\bptint\b": "print",
        r"\bimpotr\b": "import",
        r"\bimoprt\b": "import",
        r"\bretrun\b": "return",
        r"\breture\b": "return",
        r"\bflase\b": "False",
        r"\btrue\b(?!\s*=)": "True",
        r"\bnoen\b": "None",
        r"\blenght\b": "length",
        r"\blegnth\b": "length",
        r"\bappned\b": "append",
        r"\bextned\b": "extend",
        r"\binsret\b": "insert",
        r"\bdefualt\b": "default",
        r"\bdefautl\b": "default",
    }
)

_BLOCK_START = re.compile(
    r"^\s*(async\s+def|async\s+for|async\s+with|def|class|if|elif|else|for|while|try|except|finally|with)\b"
)
_MUTABLE_DEFAULT = re.compile(r"def\s+\w+\(.*?(\w+)\s*=\s*(\[\s*\]|\{\s*\})")
_EMPTY_HEADER = re.compile(r"^(if|elif|else|for|while|with|try|except|finally)\b.*:$")
_DICT_KEY = re.compile(r"(['\"])(\w*)\1\s*:")
_DEF = re.compile(r"^(?:async\s+)?def\s+(\w+)\s*\(")
_CLASS = re.compile(r"^class\s+(\w+)")
_TERMINATOR = re.compile(r"^(?:return\b|break$|continue$|raise\b)")
_TYPE_COMPARE = re.compile(r"type\(\w+\)\s*==")


class PythonAnalyzer:
    """Pattern checks for Python sources."""

    language = "python"
    syntax = PYTHON_SYNTAX

    def analyze(
        self, text: str, context: Optional[AnalysisContext] = None
    ) -> List[Diagnostic]:
        result = scan(text, self.syntax)
        depths = bracket_depths(result.masks)
        found = self._indentation(result, depths)
        found.extend(checks.bracket_balance(result))
        for line_no, mask in enumerate(result.masks):
            trimmed = mask.strip()
            if not trimmed:
                continue
            line = result.lines[line_no]
            if depths[line_no] == 0:
                found.extend(self._missing_colon(line_no, mask, trimmed))
            found.extend(self._mutable_default(line_no, mask))
            found.extend(self._bare_except(line_no, mask, trimmed))
            found.extend(self._mixed_indentation(line_no, line, result))
            found.extend(self._none_comparison(line_no, mask))
            found.extend(self._bool_comparison(line_no, mask))
            found.extend(self._type_comparison(line_no, mask))
            found.extend(checks.typos(line_no, mask, TYPOS, context))
            hit = checks.empty_indented_block(result, line_no, _EMPTY_HEADER)
            if hit is not None:
                found.append(hit)
            found.extend(self._duplicate_keys(line_no, line, mask))
        found.extend(checks.unterminated_strings(result))
        found.extend(self._duplicate_declarations(result))
        found.extend(checks.unreachable_after_terminator(result, _TERMINATOR, depths=depths))
        return found

    def _indentation(self, result: ScanResult, depths: List[int]) -> List[Diagnostic]:
        found: List[Diagnostic] = []
        unit = 0
        for line_no, line in enumerate(result.lines):
            if result.starts_inside[line_no] or depths[line_no] > 0:
                continue
            if result.is_code_blank(line_no):
                continue
            spaces = result.indent_of(line_no)
            if spaces == 0:
                continue
            if unit == 0:
                unit = spaces
                continue
            if spaces % unit:
                found.append(
                    Diagnostic(
                        line_no,
                        0,
                        spaces,
                        f"Unexpected indentation; expected a multiple of {unit} spaces",
                        Severity.WARNING,
                    )
                )
        return found

    def _missing_colon(self, line_no: int, mask: str, trimmed: str) -> List[Diagnostic]:
        match = _BLOCK_START.match(mask)
        if match is None:
            return []
        if trimmed.endswith((":", ",", "\\", "(", "[", "{")):
            return []
        keyword = " ".join(match.group(1).split())
        return [
            Diagnostic(
                line_no,
                len(mask.rstrip()),
                1,
                f"Expected ':' at end of '{keyword}' statement",
                Severity.ERROR,
            )
        ]

    def _mutable_default(self, line_no: int, mask: str) -> List[Diagnostic]:
        match = _MUTABLE_DEFAULT.search(mask)
        if match is None:
            return []
        return [
            Diagnostic(
                line_no,
                match.start(1),
                match.end(2) - match.start(1),
                f"Mutable default argument '{match.group(2)}'; use None and assign inside the function",
                Severity.WARNING,
            )
        ]

    def _bare_except(self, line_no: int, mask: str, trimmed: str) -> List[Diagnostic]:
        if not re.match(r"^except\s*:", trimmed):
            return []
        return [
            Diagnostic(
                line_no,
                mask.find("except"),
                6,
                "Bare 'except:' catches all exceptions including SystemExit and "
                "KeyboardInterrupt; specify an exception type",
                Severity.WARNING,
            )
        ]

    def _mixed_indentation(self, line_no: int, line: str, result: ScanResult) -> List[Diagnostic]:
        if result.starts_inside[line_no]:
            return []
        indent = line[: len(line) - len(line.lstrip())]
        if " " in indent and "\t" in indent:
            return [
                Diagnostic(line_no, 0, len(indent), "Mixed tabs and spaces in indentation", Severity.ERROR)
            ]
        return []

    def _none_comparison(self, line_no: int, mask: str) -> List[Diagnostic]:
        found: List[Diagnostic] = []
        for operator, replacement in (("==", "is None"), ("!=", "is not None")):
            match = re.search(rf"\w+\s*{operator}\s*None\b", mask)
            if match is not None:
                found.append(
                    Diagnostic(
                        line_no,
                        match.start(),
                        len(match.group(0)),
                        f"Use '{replacement}' instead of '{operator} None'",
                        Severity.INFO,
                    )
                )
        return found

    def _bool_comparison(self, line_no: int, mask: str) -> List[Diagnostic]:
        found: List[Diagnostic] = []
        for literal, advice in (
            ("True", "simplify to just the expression"),
            ("False", "use 'not' instead"),
        ):
            match = re.search(rf"==\s*{literal}\b", mask)
            if match is not None:
                found.append(
                    Diagnostic(
                        line_no,
                        match.start(),
                        len(match.group(0)),
                        f"Comparison to {literal}; {advice}",
                        Severity.HINT,
                    )
                )
        return found

    def _type_comparison(self, line_no: int, mask: str) -> List[Diagnostic]:
        match = _TYPE_COMPARE.search(mask)
        if match is None:
            return []
        return [
            Diagnostic(
                line_no,
                match.start(),
                len(match.group(0)),
                "Use 'isinstance()' instead of comparing type()",
                Severity.HINT,
            )
        ]

    def _duplicate_keys(self, line_no: int, line: str, mask: str) -> List[Diagnostic]:
        # Keys live inside literals, so read them from the line but only where
        # the mask shows real string delimiters.
        found: List[Diagnostic] = []
        seen = set()
        for match in _DICT_KEY.finditer(line):
            quote = match.group(1)
            if mask[match.start()] != quote or mask[match.end(2)] != quote:
                continue
            if mask[match.end() - 1] != ":":
                continue
            key = match.group(2)
            if key in seen:
                found.append(
                    Diagnostic(
                        line_no,
                        match.start(),
                        match.end() - match.start(),
                        f"Duplicate key '{key}' in dictionary literal",
                        Severity.WARNING,
                    )
                )
            else:
                seen.add(key)
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
            for pattern, kind, label in ((_DEF, "def", "Function"), (_CLASS, "class", "Class")):
                match = pattern.match(trimmed)
                if match is None:
                    continue
                name = match.group(1)
                earlier = scopes.declare(indent, kind, name, line_no)
                if earlier is not None:
                    found.append(
                        Diagnostic(
                            line_no,
                            mask.find(name, indent),
                            len(name),
                            f"{label} '{name}' is already defined on line {earlier + 1}",
                            Severity.WARNING,
                        )
                    )
        return found


__all__ = ["PythonAnalyzer", "TYPOS"]
