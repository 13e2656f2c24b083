"""Enumerations for ecslang type-safe constants.

Uses StrEnum for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class Affix(StrEnum):
    """Where a literal macro or operator attaches to its literal.

    StrEnum provides automatic string conversion: str(Affix.PREFIX) == "prefix"
    """

    PREFIX = "prefix"
    """Attached before the literal: macro prefix "0x"(int) ..."""

    SUFFIX = "suffix"
    """Attached after the literal: macro suffix "km"(float) ..."""


class LiteralType(StrEnum):
    """Kind of literal a literal macro overloads.

    Values are the argument type spelled in source.
    """

    STRING = "&str"
    """Double-quoted string: "hi there"."""

    CHAR = "char"
    """'k'"""

    FLOAT = "float"
    """1.0 -4.864 0.865"""

    INT = "int"
    """27 2 -3 0"""


class FFILanguage(StrEnum):
    """Foreign language of an extern function declaration."""

    C = "clang"
