"""ecslang parser module.

This module provides the main StatementParser class and the parsing
building blocks organized into focused submodules.

Module Organization:
- core.py: Main StatementParser class and parse() entry point
- primitives.py: Basic parsers (identifiers, keywords, punctuation, strings, integers)
- combinators.py: Repetition, punctuated sequences, delimiters, multiplicity
- alternation.py: Ordered alternation and deepest-failure selection
- rules.py: All grammar rules (types, signatures, expressions, statements)

Public API:
    StatementParser: Main parser class
    ParseContext: Parse context for depth tracking (advanced usage)
"""

from ecslang.syntax.parser.core import StatementParser
from ecslang.syntax.parser.rules import ParseContext

__all__ = ["ParseContext", "StatementParser"]
