"""Pattern-based diagnostics for C#, Python and JavaScript."""

from .csharp import CSharpAnalyzer
from .javascript import JavaScriptAnalyzer, check_assignment_in_condition
from .models import AnalysisContext, Diagnostic, DiagnosticProvider, Severity
from .python import PythonAnalyzer
from .registry import BUILTIN_PROVIDERS, get_diagnostic_provider
from .scanner import (
    CSHARP_SYNTAX,
    JAVASCRIPT_SYNTAX,
    PLAIN_SYNTAX,
    PYTHON_SYNTAX,
    LanguageSyntax,
    ScanResult,
    scan,
)
from .service import DiagnosticsService

__all__ = [
    "AnalysisContext",
    "BUILTIN_PROVIDERS",
    "CSHARP_SYNTAX",
    "CSharpAnalyzer",
    "Diagnostic",
    "DiagnosticProvider",
    "DiagnosticsService",
    "JAVASCRIPT_SYNTAX",
    "JavaScriptAnalyzer",
    "LanguageSyntax",
    "PLAIN_SYNTAX",
    "PYTHON_SYNTAX",
    "PythonAnalyzer",
    "ScanResult",
    "Severity",
    "check_assignment_in_condition",
    "get_diagnostic_provider",
    "scan",
]
