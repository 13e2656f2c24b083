"""ecslang - parser front end for an entity/component declaration language.

Turns source text (entity and component declarations, typed function
signatures, struct and algebraic type declarations, literal macros and
operator declarations) into immutable statement nodes, or into exactly one
precise, human-readable diagnostic.

Public API:
    parse_source - Parse source text to statements
    parse_file - Read and parse a UTF-8 source file
    serialize - Serialize statements back to source
    StatementParser - Configurable parser (size and nesting limits)
    DiagnosticFormatter - Render a diagnostic (rust, simple, json)

Exceptions:
    EcslangError - Base exception class
    EcslangSyntaxError - Parse errors, carrying a Diagnostic

Submodules:
    ecslang.syntax.ast - Statement, expression and type nodes
    ecslang.syntax.parser - Primitives, combinators, alternation and grammar rules
    ecslang.diagnostics - Failure values, diagnostics and formatting
"""

from .diagnostics import (
    Diagnostic,
    DiagnosticFormatter,
    EcslangError,
    EcslangSyntaxError,
    OutputFormat,
)
from .loading import load_source, parse_file, parse_source
from .syntax import StatementParser, serialize

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("ecslang")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Diagnostic",
    "DiagnosticFormatter",
    "EcslangError",
    "EcslangSyntaxError",
    "OutputFormat",
    "StatementParser",
    "__version__",
    "load_source",
    "parse_file",
    "parse_source",
    "serialize",
]
