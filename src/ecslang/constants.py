"""Shared constants for ecslang.

This module provides centralized configuration constants used across the
syntax and diagnostics packages. Placing constants here avoids circular
imports and provides a single source of truth.

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Lexical conventions
    "LINE_SEPARATOR",
    "ESCAPING_SIGN",
    "DOUBLE_QUOTE",
    "COMMENT_START",
    "COMMENT_END",
    # Grammar limits
    "MAX_INDIRECTION",
    "DEFAULT_INTEGER_BITS",
    "MAX_DEPTH",
    # Input limits
    "MAX_SOURCE_SIZE",
    # Display
    "EOF_TOKEN",
]

# ============================================================================
# LEXICAL CONVENTIONS
# ============================================================================

# Advancing past this character starts a new line (column resets to 1).
LINE_SEPARATOR: str = "\n"

# Inside a delimited string, the character after this one never closes it.
ESCAPING_SIGN: str = "\\"

DOUBLE_QUOTE: str = '"'

# Nestable comments: #( outer #( inner )# still outer )#
COMMENT_START: str = "#("
COMMENT_END: str = ")#"

# ============================================================================
# GRAMMAR LIMITS
# ============================================================================

# Maximum number of `&` (or `*`) sigils in front of a type name.
# Mutability of each level is tracked in an 8-bit mask.
MAX_INDIRECTION: int = 8

# Width of the unsigned integer accepted after a multiplicity `x`.
DEFAULT_INTEGER_BITS: int = 8

# Maximum nesting of block and call expressions.
# Deeper input is almost certainly malformed; the limit prevents RecursionError.
MAX_DEPTH: int = 50

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum source size in characters (10 MB of ASCII).
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# DISPLAY
# ============================================================================

# Text shown in place of the offending token when input ran out.
EOF_TOKEN: str = "<EOF>"
