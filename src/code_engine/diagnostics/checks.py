"""Checks shared by the language analyzers.

Every check reads the code masks of a :class:`ScanResult`, never the raw
lines, so text inside comments and literals cannot trigger a finding.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Mapping, Optional, Pattern, Tuple

from .models import AnalysisContext, Diagnostic, Severity, declares
from .scanner import ScanResult

_CLOSERS = {")": "(", "]": "[", "}": "{"}

UNTERMINATED_MESSAGE = "Unterminated string literal"
UNREACHABLE_MESSAGE = "Unreachable code detected"


_WORD = re.compile(r"\w+")


def compile_typos(table: Mapping[str, str]) -> Tuple[Tuple[Pattern[str], str], ...]:
    return tuple((re.compile(pattern), fix) for pattern, fix in table.items())


def bracket_balance(scan: ScanResult) -> List[Diagnostic]:
    found: List[Diagnostic] = []
    stack: List[Tuple[str, int, int]] = []
    for line_no, mask in enumerate(scan.masks):
        for col, char in enumerate(mask):
            if char in "([{":
                stack.append((char, line_no, col))
            elif char in _CLOSERS:
                if not stack:
                    found.append(
                        Diagnostic(line_no, col, 1, f"Unmatched closing '{char}'", Severity.ERROR)
                    )
                elif stack[-1][0] != _CLOSERS[char]:
                    opener, opened_on, _ = stack.pop()
                    found.append(
                        Diagnostic(
                            line_no,
                            col,
                            1,
                            f"Mismatched bracket: expected closing for '{opener}' from line {opened_on + 1}",
                            Severity.ERROR,
                        )
                    )
                else:
                    stack.pop()
    for opener, line_no, col in reversed(stack):
        found.append(Diagnostic(line_no, col, 1, f"Unclosed '{opener}'", Severity.ERROR))
    return found


def continues_past(scan: ScanResult, line_no: int) -> bool:
    """True when a comment or literal open on ``line_no`` runs onto the next line."""

    following = line_no + 1
    return following < len(scan.starts_inside) and scan.starts_inside[following]


def typos(
    line_no: int,
    mask: str,
    table: Iterable[Tuple[Pattern[str], str]],
    context: Optional[AnalysisContext] = None,
) -> List[Diagnostic]:
    found: List[Diagnostic] = []
    for pattern, fix in table:
        match = pattern.search(mask)
        if match is None:
            continue
        word = match.group(0).split()[-1]
        if declares(context, word):
            continue
        found.append(
            Diagnostic(line_no, match.start(), len(match.group(0)), f"Did you mean '{fix}'?", Severity.ERROR)
        )
    return found


def unterminated_strings(scan: ScanResult) -> List[Diagnostic]:
    return [
        Diagnostic(item.line, item.column, 1, UNTERMINATED_MESSAGE, Severity.ERROR)
        for item in scan.unterminated
    ]


def empty_brace_block(
    scan: ScanResult, line_no: int, header: Pattern[str]
) -> Optional[Diagnostic]:
    """Flag ``header`` lines whose brace block holds nothing."""

    mask = scan.masks[line_no]
    trimmed = mask.strip()
    match = header.match(trimmed)
    if match is None:
        return None
    keyword = match.group(1)
    column = mask.find(keyword)

    def flagged() -> Diagnostic:
        return Diagnostic(line_no, column, len(keyword), f"Empty '{keyword}' block", Severity.WARNING)

    if re.search(r"\{\s*\}$", trimmed):
        return flagged()
    opened = trimmed.endswith("{")
    if not opened and trimmed.endswith(";"):
        return None
    for following in scan.masks[line_no + 1 :]:
        code = following.strip()
        if not code:
            continue
        if code == "{" and not opened:
            opened = True
            continue
        if opened and code.startswith("}"):
            return flagged()
        return None
    return None


def empty_indented_block(
    scan: ScanResult, line_no: int, header: Pattern[str]
) -> Optional[Diagnostic]:
    """Flag a ``header:`` line followed by nothing indented deeper."""

    mask = scan.masks[line_no]
    match = header.match(mask.strip())
    if match is None:
        return None
    indent = scan.indent_of(line_no)
    for following in range(line_no + 1, len(scan.masks)):
        if scan.is_code_blank(following):
            continue
        if scan.indent_of(following) <= indent:
            keyword = match.group(1)
            return Diagnostic(
                line_no,
                mask.find(keyword),
                len(keyword),
                f"Empty '{keyword}' block",
                Severity.WARNING,
            )
        return None
    return None


def assignment_in_condition(
    line_no: int, mask: str, keywords: Iterable[str], hint: str
) -> Optional[Diagnostic]:
    trimmed = mask.lstrip()
    pattern = r"^(?:" + "|".join(keywords) + r")\s*\(.*[^=!<>]=(?![=>]).*\)"
    match = re.match(pattern, trimmed)
    if match is None:
        return None
    return Diagnostic(
        line_no,
        len(mask) - len(trimmed),
        len(match.group(0)),
        f"Possible accidental assignment in condition; did you mean {hint}?",
        Severity.WARNING,
    )


def duplicate_keys(
    line_no: int, mask: str, pattern: Pattern[str], kind: str
) -> List[Diagnostic]:
    found: List[Diagnostic] = []
    seen: Dict[str, int] = {}
    for match in pattern.finditer(mask):
        key = match.group(1)
        if key in seen:
            found.append(
                Diagnostic(
                    line_no,
                    match.start(1),
                    len(key),
                    f"Duplicate key '{key}' in {kind} literal",
                    Severity.WARNING,
                )
            )
        else:
            seen[key] = match.start(1)
    return found


def unreachable_after_terminator(
    scan: ScanResult,
    terminator: Pattern[str],
    stop: Optional[Pattern[str]] = None,
    depths: Optional[List[int]] = None,
) -> List[Diagnostic]:
    """Flag the first statement following a terminator at the same indentation."""

    found: List[Diagnostic] = []
    total = len(scan.masks)
    for line_no in range(total - 1):
        trimmed = scan.masks[line_no].strip()
        if not trimmed or not terminator.match(trimmed):
            continue
        if depths is not None and depths[line_no] > 0:
            continue
        indent = scan.indent_of(line_no)
        for following in range(line_no + 1, total):
            code = scan.masks[following].strip()
            if not code:
                continue
            if depths is not None and depths[following] > depths[line_no]:
                continue
            next_indent = scan.indent_of(following)
            if next_indent > indent:
                continue
            if next_indent < indent or (stop is not None and stop.match(code)):
                break
            found.append(
                Diagnostic(following, next_indent, len(code), UNREACHABLE_MESSAGE, Severity.WARNING)
            )
            break
    return found


class DeclarationScopes:
    """Tracks first declarations per nesting level for duplicate detection.

    Entering a shallower level forgets every deeper one, so two sibling
    blocks may reuse the same names.
    """

    def __init__(self) -> None:
        self._levels: List[Tuple[int, Dict[Tuple[str, str], int]]] = []

    def enter(self, level: int) -> None:
        while self._levels and self._levels[-1][0] > level:
            self._levels.pop()

    def declare(self, level: int, kind: str, name: str, line_no: int) -> Optional[int]:
        """Record a declaration; return the earlier line when it is a duplicate."""

        self.enter(level)
        if not self._levels or self._levels[-1][0] < level:
            self._levels.append((level, {}))
        seen = self._levels[-1][1]
        key = (kind, name)
        if key in seen:
            return seen[key]
        seen[key] = line_no
        return None


def last_word_positions(masks: Iterable[str]) -> Dict[str, Tuple[int, int]]:
    """Map every identifier to the (line, column) of its last occurrence."""

    last: Dict[str, Tuple[int, int]] = {}
    for line_no, mask in enumerate(masks):
        for match in _WORD.finditer(mask):
            last[match.group(0)] = (line_no, match.start())
    return last


__all__ = [
    "DeclarationScopes",
    "UNREACHABLE_MESSAGE",
    "UNTERMINATED_MESSAGE",
    "assignment_in_condition",
    "bracket_balance",
    "compile_typos",
    "continues_past",
    "duplicate_keys",
    "empty_brace_block",
    "empty_indented_block",
    "last_word_positions",
    "typos",
    "unreachable_after_terminator",
    "unterminated_strings",
]
