"""Diagnostic system for ecslang parse failures.

Provides structured failures, user-facing diagnostics with source excerpts,
and the formatter that renders them.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, ParseFailure, ParsingDepth
from .errors import EcslangError, EcslangSyntaxError
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "EcslangError",
    "EcslangSyntaxError",
    "ErrorTemplate",
    "OutputFormat",
    "ParseFailure",
    "ParsingDepth",
]
