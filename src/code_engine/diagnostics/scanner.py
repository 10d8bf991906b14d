"""Comment and literal aware scanning shared by analyzers and folding.

:func:`scan` walks a document once and produces, for every line, a *code
mask*: the line with comment text and string interiors blanked to spaces.
String delimiters stay in place so checks can still see that a literal
exists. Masks have the same length as their lines, so any column found in
a mask is a valid column in the document.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from code_engine.buffer import split_lines


@dataclass(frozen=True, slots=True)
class LanguageSyntax:
    """Lexical conventions the scanner needs to recognise non-code text."""

    line_comment: Optional[str] = None
    block_comment: Optional[Tuple[str, str]] = None
    quotes: Tuple[str, ...] = ('"', "'")
    triple_quotes: bool = False
    template_quote: Optional[str] = None
    verbatim_prefixes: Tuple[str, ...] = ()


CSHARP_SYNTAX = LanguageSyntax(
    line_comment="//",
    block_comment=("/*", "*/"),
    verbatim_prefixes=("@", "$@", "@$"),
)
PYTHON_SYNTAX = LanguageSyntax(line_comment="#", triple_quotes=True)
JAVASCRIPT_SYNTAX = LanguageSyntax(
    line_comment="//",
    block_comment=("/*", "*/"),
    template_quote="`",
)
PLAIN_SYNTAX = LanguageSyntax(quotes=())

SYNTAXES = {
    "csharp": CSHARP_SYNTAX,
    "python": PYTHON_SYNTAX,
    "javascript": JAVASCRIPT_SYNTAX,
    "plain": PLAIN_SYNTAX,
}


@dataclass(frozen=True, slots=True)
class UnterminatedLiteral:
    line: int
    column: int
    quote: str


@dataclass(slots=True)
class ScanResult:
    lines: List[str]
    masks: List[str]
    starts_inside: List[bool] = field(default_factory=list)
    unterminated: List[UnterminatedLiteral] = field(default_factory=list)

    def code(self, index: int) -> str:
        if 0 <= index < len(self.masks):
            return self.masks[index]
        return ""

    def is_code_blank(self, index: int) -> bool:
        return not self.code(index).strip()

    def indent_of(self, index: int) -> int:
        line = self.lines[index] if 0 <= index < len(self.lines) else ""
        return len(line) - len(line.lstrip())


# States carried across line breaks.
_CODE = "code"
_BLOCK = "block"
_STRING = "string"


@dataclass(slots=True)
class _Literal:
    delimiter: str
    verbatim: bool = False
    multiline: bool = False


def scan(text: str | Sequence[str], syntax: LanguageSyntax) -> ScanResult:
    """Mask comments and literal interiors of ``text`` for ``syntax``."""

    lines = split_lines(text) if isinstance(text, str) else list(text)
    result = ScanResult(lines=lines, masks=[])
    state = _CODE
    literal: Optional[_Literal] = None
    block_open, block_close = syntax.block_comment or ("", "")

    for index, line in enumerate(lines):
        result.starts_inside.append(state != _CODE)
        mask = list(line)
        length = len(line)
        col = 0
        literal_start = 0
        while col < length:
            if state == _BLOCK:
                if line.startswith(block_close, col):
                    for k in range(col, col + len(block_close)):
                        mask[k] = " "
                    col += len(block_close)
                    state = _CODE
                    continue
                mask[col] = " "
                col += 1
                continue

            if state == _STRING and literal is not None:
                char = line[col]
                delimiter = literal.delimiter
                if literal.verbatim and line.startswith(delimiter * 2, col):
                    mask[col] = mask[col + 1] = " "
                    col += 2
                    continue
                if not literal.verbatim and char == "\\" and col + 1 < length:
                    mask[col] = mask[col + 1] = " "
                    col += 2
                    continue
                if line.startswith(delimiter, col):
                    col += len(delimiter)
                    state = _CODE
                    literal = None
                    continue
                mask[col] = " "
                col += 1
                continue

            if syntax.line_comment and line.startswith(syntax.line_comment, col):
                for k in range(col, length):
                    mask[k] = " "
                break
            if block_open and line.startswith(block_open, col):
                for k in range(col, col + len(block_open)):
                    mask[k] = " "
                col += len(block_open)
                state = _BLOCK
                continue

            opened = _open_literal(line, col, syntax)
            if opened is not None:
                literal, consumed = opened
                literal_start = col + consumed - len(literal.delimiter)
                col += consumed
                state = _STRING
                continue
            col += 1

        if state == _STRING and literal is not None and not literal.multiline:
            result.unterminated.append(
                UnterminatedLiteral(index, literal_start, literal.delimiter)
            )
            state = _CODE
            literal = None
        result.masks.append("".join(mask))

    return result


def _open_literal(
    line: str, col: int, syntax: LanguageSyntax
) -> Optional[Tuple[_Literal, int]]:
    char = line[col]
    for prefix in sorted(syntax.verbatim_prefixes, key=len, reverse=True):
        if line.startswith(prefix + '"', col):
            return _Literal('"', verbatim=True, multiline=True), len(prefix) + 1
    if syntax.template_quote and char == syntax.template_quote:
        return _Literal(char, multiline=True), 1
    if char not in syntax.quotes:
        return None
    if syntax.triple_quotes and line.startswith(char * 3, col):
        return _Literal(char * 3, multiline=True), 3
    return _Literal(char), 1


def bracket_depths(masks: Sequence[str]) -> List[int]:
    """Depth of open ``([{`` brackets at the start of each masked line."""

    depths: List[int] = []
    depth = 0
    for mask in masks:
        depths.append(depth)
        for char in mask:
            if char in "([{":
                depth += 1
            elif char in ")]}":
                depth = max(0, depth - 1)
    return depths


__all__ = [
    "CSHARP_SYNTAX",
    "JAVASCRIPT_SYNTAX",
    "LanguageSyntax",
    "PLAIN_SYNTAX",
    "PYTHON_SYNTAX",
    "SYNTAXES",
    "ScanResult",
    "UnterminatedLiteral",
    "bracket_depths",
    "scan",
]
