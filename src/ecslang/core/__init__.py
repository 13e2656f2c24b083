"""Core value types shared across the syntax and diagnostics layers.

Isolating positions and spans here keeps the dependency graph acyclic:

    core <- diagnostics <- syntax

Python 3.13+.
"""

from .span import CursorPosition, Span

__all__ = ["CursorPosition", "Span"]
