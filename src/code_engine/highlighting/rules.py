"""Syntax rules, rulesets and the built-in language definitions."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Flag, auto
from typing import Callable, Dict, List, NamedTuple, Optional, Pattern

from code_engine.errors import RulesetError


class Color(NamedTuple):
    r: int
    g: int
    b: int
    a: int = 255

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


class FontStyle(Flag):
    REGULAR = 0
    BOLD = auto()
    ITALIC = auto()
    UNDERLINE = auto()


def _compile(pattern: str, rule: str) -> Pattern[str]:
    try:
        return re.compile(pattern, re.MULTILINE)
    except re.error as exc:
        raise RulesetError(f"Rule '{rule}' has an invalid pattern: {exc}", rule=rule) from exc


@dataclass(frozen=True, slots=True)
class SyntaxRule:
    """A regex that claims matched characters for ``color``/``style``.

    ``exclude`` is matched again inside each hit; its matches are handed back
    to the ruleset's default style (interpolation holes in strings).
    """

    name: str
    pattern: str
    color: Color
    style: FontStyle = FontStyle.REGULAR
    exclude: Optional[str] = None
    regex: Pattern[str] = field(init=False, repr=False, compare=False)
    exclude_regex: Optional[Pattern[str]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise RulesetError("Rule name cannot be empty")
        if not self.pattern:
            raise RulesetError(f"Rule '{self.name}' has an empty pattern", rule=self.name)
        object.__setattr__(self, "regex", _compile(self.pattern, self.name))
        excluded = _compile(self.exclude, self.name) if self.exclude else None
        object.__setattr__(self, "exclude_regex", excluded)


@dataclass(slots=True)
class Ruleset:
    """Ordered rules plus the theme colours a host needs to paint them."""

    language_name: str
    rules: List[SyntaxRule] = field(default_factory=list)
    default_color: Color = Color(212, 212, 212)
    background_color: Color = Color(30, 30, 30)
    line_number_color: Color = Color(110, 118, 129)
    line_number_background: Color = Color(30, 30, 30)
    current_line_highlight: Color = Color(40, 40, 40)
    selection_color: Color = Color(60, 120, 200, 100)
    caret_color: Color = Color(220, 220, 220)
    line_comment_token: Optional[str] = None

    def add_rule(
        self,
        name: str,
        pattern: str,
        color: Color,
        style: FontStyle = FontStyle.REGULAR,
        *,
        exclude: Optional[str] = None,
    ) -> SyntaxRule:
        rule = SyntaxRule(name, pattern, color, style, exclude)
        self.rules.append(rule)
        return rule


COMMENT = Color(106, 153, 85)
STRING = Color(206, 145, 120)
KEYWORD = Color(86, 156, 214)
TYPE = Color(78, 201, 176)
NUMBER = Color(181, 206, 168)
FUNCTION = Color(220, 220, 170)
MUTED = Color(155, 155, 155)

DOUBLE_QUOTED = r'"(?:[^"\\\n]|\\.)*"'
SINGLE_QUOTED = r"'(?:[^'\\\n]|\\.)*'"


def _words(*words: str) -> str:
    return r"\b(?:" + "|".join(words) + r")\b"


def csharp_ruleset() -> Ruleset:
    rs = Ruleset("C#", line_comment_token="//")
    rs.add_rule("Comment", r"//.*$|/\*[\s\S]*?\*/", COMMENT, FontStyle.ITALIC)
    rs.add_rule(
        "InterpolatedString",
        r'\$"(?:[^"\\\n]|\\.)*"',
        STRING,
        exclude=r"\{[^{}\n]*\}",
    )
    rs.add_rule("String", DOUBLE_QUOTED + r'|@"(?:""|[^"])*"', STRING)
    rs.add_rule("Char", r"'(?:[^'\\]|\\.)'", STRING)
    rs.add_rule(
        "Keyword",
        _words(
            "abstract", "as", "base", "bool", "break", "byte", "case", "catch",
            "char", "checked", "class", "const", "continue", "decimal", "default",
            "delegate", "do", "double", "else", "enum", "event", "explicit",
            "extern", "false", "finally", "fixed", "float", "for", "foreach",
            "goto", "if", "implicit", "in", "int", "interface", "internal", "is",
            "lock", "long", "namespace", "new", "null", "object", "operator",
            "out", "override", "params", "private", "protected", "public",
            "readonly", "ref", "return", "sbyte", "sealed", "short", "sizeof",
            "stackalloc", "static", "string", "struct", "switch", "this",
            "throw", "true", "try", "typeof", "uint", "ulong", "unchecked",
            "unsafe", "ushort", "using", "var", "virtual", "void", "volatile",
            "while", "yield", "async", "await", "dynamic", "nameof", "when",
            "where",
        ),
        KEYWORD,
        FontStyle.BOLD,
    )
    rs.add_rule(
        "Type",
        _words(
            "Boolean", "Byte", "Char", "DateTime", "Decimal", "Double", "Guid",
            "Int16", "Int32", "Int64", "Object", "SByte", "Single", "String",
            "TimeSpan", "UInt16", "UInt32", "UInt64", "List", "Dictionary",
            "IEnumerable", "Task", "Action", "Func", "Tuple", "Array", "Console",
            "Math", "Exception",
        ),
        TYPE,
    )
    rs.add_rule("Number", r"\b\d+\.?\d*[fFdDmMlLuU]?\b|\b0x[0-9a-fA-F]+\b", NUMBER)
    rs.add_rule("Attribute", r"\[\w+(?:\(.*?\))?\]", TYPE)
    rs.add_rule("Preprocessor", r"^[ \t]*#[ \t]*\w+.*$", MUTED)
    return rs


def python_ruleset() -> Ruleset:
    rs = Ruleset("Python", line_comment_token="#")
    rs.add_rule("Comment", r"#.*$", COMMENT, FontStyle.ITALIC)
    rs.add_rule(
        "DocString",
        r'"""[\s\S]*?"""|' + r"'''[\s\S]*?'''",
        STRING,
        FontStyle.ITALIC,
    )
    rs.add_rule(
        "FString",
        r"\b[fF][rR]?(?:" + DOUBLE_QUOTED + "|" + SINGLE_QUOTED + ")",
        STRING,
        exclude=r"\{[^{}\n]*\}",
    )
    rs.add_rule("String", DOUBLE_QUOTED + "|" + SINGLE_QUOTED, STRING)
    rs.add_rule(
        "Keyword",
        _words(
            "False", "None", "True", "and", "as", "assert", "async", "await",
            "break", "class", "continue", "def", "del", "elif", "else", "except",
            "finally", "for", "from", "global", "if", "import", "in", "is",
            "lambda", "nonlocal", "not", "or", "pass", "raise", "return", "try",
            "while", "with", "yield",
        ),
        KEYWORD,
        FontStyle.BOLD,
    )
    rs.add_rule(
        "Builtin",
        _words(
            "abs", "all", "any", "bin", "bool", "chr", "dict", "dir", "enumerate",
            "eval", "exec", "filter", "float", "format", "getattr", "globals",
            "hasattr", "hash", "hex", "id", "input", "int", "isinstance",
            "issubclass", "iter", "len", "list", "locals", "map", "max", "min",
            "next", "object", "oct", "open", "ord", "pow", "print", "property",
            "range", "repr", "reversed", "round", "set", "setattr", "slice",
            "sorted", "staticmethod", "str", "sum", "super", "tuple", "type",
            "vars", "zip",
        ),
        FUNCTION,
    )
    rs.add_rule("Decorator", r"@\w+(?:\.\w+)*", FUNCTION)
    rs.add_rule("Number", r"\b\d+\.?\d*[jJ]?\b|\b0[xXoObB][0-9a-fA-F]+\b", NUMBER)
    rs.add_rule("Self", r"\bself\b", KEYWORD, FontStyle.ITALIC)
    return rs


def javascript_ruleset() -> Ruleset:
    rs = Ruleset("JavaScript", line_comment_token="//")
    rs.add_rule("Comment", r"//.*$|/\*[\s\S]*?\*/", COMMENT, FontStyle.ITALIC)
    rs.add_rule(
        "TemplateString",
        r"`(?:[^`\\]|\\.|\$\{[^}]*\})*`",
        STRING,
        exclude=r"\$\{[^}]*\}",
    )
    rs.add_rule("String", DOUBLE_QUOTED + "|" + SINGLE_QUOTED, STRING)
    rs.add_rule(
        "Keyword",
        _words(
            "break", "case", "catch", "class", "const", "continue", "debugger",
            "default", "delete", "do", "else", "enum", "export", "extends",
            "finally", "for", "function", "if", "import", "in", "instanceof",
            "let", "new", "of", "return", "super", "switch", "this", "throw",
            "try", "typeof", "var", "void", "while", "with", "yield", "async",
            "await", "from", "as", "static", "get", "set",
        ),
        KEYWORD,
        FontStyle.BOLD,
    )
    rs.add_rule(
        "Boolean", _words("true", "false", "null", "undefined", "NaN", "Infinity"), KEYWORD
    )
    rs.add_rule("Number", r"\b\d+\.?\d*(?:e[+-]?\d+)?\b|\b0x[0-9a-fA-F]+\b", NUMBER)
    rs.add_rule(
        "Builtin",
        _words(
            "console", "document", "window", "Array", "Object", "String", "Number",
            "Boolean", "Function", "Symbol", "Map", "Set", "Promise", "RegExp",
            "Date", "Error", "JSON", "Math", "parseInt", "parseFloat", "isNaN",
            "isFinite", "setTimeout", "setInterval", "clearTimeout",
            "clearInterval", "fetch", "require", "module", "exports",
        ),
        TYPE,
    )
    rs.add_rule("Arrow", r"=>", KEYWORD)
    return rs


def plain_ruleset() -> Ruleset:
    return Ruleset("Plain Text")


BUILTIN_RULESETS: Dict[str, Callable[[], Ruleset]] = {
    "csharp": csharp_ruleset,
    "python": python_ruleset,
    "javascript": javascript_ruleset,
    "plain": plain_ruleset,
}

ALIASES: Dict[str, str] = {
    "c#": "csharp",
    "cs": "csharp",
    "py": "python",
    "js": "javascript",
    "text": "plain",
    "plaintext": "plain",
    "plain text": "plain",
}


def canonical_language(name: str) -> str:
    """Map a user-facing language name onto a built-in key."""

    key = name.strip().lower()
    key = ALIASES.get(key, key)
    if key not in BUILTIN_RULESETS:
        raise RulesetError(f"Unknown ruleset '{name}'")
    return key


def get_ruleset(name: str) -> Ruleset:
    """Return a fresh copy of a built-in ruleset."""

    return BUILTIN_RULESETS[canonical_language(name)]()


__all__ = [
    "BUILTIN_RULESETS",
    "Color",
    "FontStyle",
    "Ruleset",
    "SyntaxRule",
    "canonical_language",
    "csharp_ruleset",
    "get_ruleset",
    "javascript_ruleset",
    "plain_ruleset",
    "python_ruleset",
]
