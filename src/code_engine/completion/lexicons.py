"""Immutable per-language word lists offered by completion."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Lexicon:
    keywords: tuple[str, ...] = ()
    types: tuple[str, ...] = ()
    builtins: tuple[str, ...] = ()
    snippets: tuple[str, ...] = ()


CSHARP = Lexicon(
    keywords=(
        "abstract", "as", "base", "bool", "break", "byte", "case", "catch", "char", "checked",
        "class", "const", "continue", "decimal", "default", "delegate", "do", "double", "else",
        "enum", "event", "explicit", "extern", "false", "finally", "fixed", "float", "for",
        "foreach", "goto", "if", "implicit", "in", "int", "interface", "internal", "is", "lock",
        "long", "namespace", "new", "null", "object", "operator", "out", "override", "params",
        "private", "protected", "public", "readonly", "ref", "return", "sbyte", "sealed", "short",
        "sizeof", "stackalloc", "static", "string", "struct", "switch", "this", "throw", "true",
        "try", "typeof", "uint", "ulong", "unchecked", "unsafe", "ushort", "using", "var",
        "virtual", "void", "volatile", "while", "yield", "async", "await", "dynamic", "nameof",
        "when", "where",
    ),
    types=(
        "Boolean", "Byte", "Char", "DateTime", "Decimal", "Double", "Guid", "Int16", "Int32",
        "Int64", "Object", "SByte", "Single", "String", "TimeSpan", "UInt16", "UInt32", "UInt64",
        "List", "Dictionary", "IEnumerable", "Task", "Action", "Func", "Tuple", "Array",
        "Console", "Math", "Exception", "StringBuilder", "HashSet", "Queue", "Stack",
        "IDisposable", "IComparable", "EventArgs", "Nullable",
    ),
    snippets=(
        "Console.WriteLine", "Console.ReadLine", "string.IsNullOrEmpty",
        "string.Format", "Math.Max", "Math.Min", "Math.Abs",
        "ToString", "GetType", "Equals", "GetHashCode",
    ),
)

PYTHON = Lexicon(
    keywords=(
        "False", "None", "True", "and", "as", "assert", "async", "await", "break", "class",
        "continue", "def", "del", "elif", "else", "except", "finally", "for", "from", "global",
        "if", "import", "in", "is", "lambda", "nonlocal", "not", "or", "pass", "raise",
        "return", "try", "while", "with", "yield",
    ),
    builtins=(
        "abs", "all", "any", "bin", "bool", "chr", "dict", "dir", "enumerate", "eval", "exec",
        "filter", "float", "format", "getattr", "globals", "hasattr", "hash", "hex", "id",
        "input", "int", "isinstance", "issubclass", "iter", "len", "list", "locals", "map",
        "max", "min", "next", "object", "oct", "open", "ord", "pow", "print", "property",
        "range", "repr", "reversed", "round", "set", "setattr", "slice", "sorted",
        "staticmethod", "str", "sum", "super", "tuple", "type", "vars", "zip",
    ),
)

JAVASCRIPT = Lexicon(
    keywords=(
        "break", "case", "catch", "class", "const", "continue", "debugger", "default", "delete",
        "do", "else", "enum", "export", "extends", "finally", "for", "function", "if", "import",
        "in", "instanceof", "let", "new", "of", "return", "super", "switch", "this", "throw",
        "try", "typeof", "var", "void", "while", "with", "yield", "async", "await", "from",
        "as", "static", "get", "set",
    ),
    types=(
        "console", "document", "window", "Array", "Object", "String", "Number", "Boolean",
        "Function", "Symbol", "Map", "Set", "Promise", "RegExp", "Date", "Error", "JSON",
        "Math", "parseInt", "parseFloat", "isNaN", "isFinite", "setTimeout", "setInterval",
        "clearTimeout", "clearInterval", "fetch", "require", "module", "exports",
        "undefined", "null", "true", "false", "NaN", "Infinity",
    ),
    snippets=(
        "console.log", "console.error", "console.warn",
        "JSON.stringify", "JSON.parse",
        "Array.isArray", "Object.keys", "Object.values", "Object.entries",
        "Promise.all", "Promise.resolve", "Promise.reject",
        "addEventListener", "removeEventListener", "querySelector", "querySelectorAll",
    ),
)

LEXICONS = {
    "csharp": CSHARP,
    "python": PYTHON,
    "javascript": JAVASCRIPT,
}

__all__ = ["CSHARP", "JAVASCRIPT", "LEXICONS", "Lexicon", "PYTHON"]
