"""Core ecslang statement parser.

This module provides the StatementParser class that orchestrates parsing of
ecslang source text into the statement nodes defined in
:mod:`ecslang.syntax.ast`.

Architecture:
    The parser uses an immutable stream (:class:`~ecslang.syntax.cursor.ParseStream`)
    to traverse source text. Each grammar rule (in :mod:`~ecslang.syntax.parser.rules`)
    returns either a :class:`~ecslang.syntax.cursor.ParseResult` containing the
    parsed node and the advanced stream, or a
    :class:`~ecslang.diagnostics.ParseFailure`.

    Top-level statements are parsed one after another until the input is
    exhausted. There is no error recovery: the first statement that fails
    ends the parse, and its deepest failure becomes the single diagnostic.

Security:
    Includes configurable input size limit to prevent DoS attacks via
    unbounded memory allocation from extremely large source files.
"""

import logging

from ecslang.constants import MAX_DEPTH, MAX_SOURCE_SIZE
from ecslang.diagnostics import Diagnostic, EcslangSyntaxError
from ecslang.syntax.ast import Statement
from ecslang.syntax.comments import strip_comments
from ecslang.syntax.cursor import ParseFailure, ParseStream
from ecslang.syntax.parser.rules import ParseContext, parse_statement

logger = logging.getLogger(__name__)

__all__ = ["StatementParser"]

DEFAULT_FILENAME = "<input>"


class StatementParser:
    """ecslang parser using the immutable stream pattern.

    Design:
    - Immutable stream makes backtracking free (no manual rollback)
    - Failures are values inside the engine, one exception at the boundary
    - Error messages include file:line:column with a source excerpt

    Security:
    - Configurable max_source_size prevents DoS via large inputs
    - Default limit: 10 MB
    - Configurable max_nesting_depth prevents RecursionError via { { { ... } } }

    Attributes:
        max_source_size: Maximum allowed source size in characters (default: 10 MB)
        max_nesting_depth: Maximum allowed expression nesting depth (default: 50)
    """

    __slots__ = ("_max_nesting_depth", "_max_source_size")

    def __init__(
        self,
        *,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
    ) -> None:
        """Initialize parser with optional size and nesting depth limits.

        Args:
            max_source_size: Maximum source size in characters (default: 10 MB).
                            Set to 0 to disable size limit (not recommended).
            max_nesting_depth: Maximum expression nesting depth (default: 50).
        """
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )
        self._max_nesting_depth = (
            max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH
        )

    @property
    def max_source_size(self) -> int:
        """Maximum allowed source size in characters."""
        return self._max_source_size

    @property
    def max_nesting_depth(self) -> int:
        """Maximum allowed expression nesting depth."""
        return self._max_nesting_depth

    def parse(self, source: str, filename: str = DEFAULT_FILENAME) -> tuple[Statement, ...]:
        """Parse ecslang source into statements.

        Comments are blanked out first (positions are preserved), then
        statements are parsed in order until the input is exhausted.

        Args:
            source: ecslang source text
            filename: Name shown in diagnostics

        Returns:
            Tuple of statements in source order

        Raises:
            ValueError: If source exceeds max_source_size (DoS prevention)
            EcslangSyntaxError: On the first statement that does not parse,
                or on an unterminated comment

        Example:
            >>> parser = StatementParser()
            >>> statements = parser.parse("entity Player = Health + Position;")
            >>> statements[0].name.name
            'Player'
        """
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            msg = (
                f"Source size ({len(source):,} characters) exceeds maximum "
                f"({self._max_source_size:,} characters). "
                "Configure max_source_size in StatementParser constructor to increase limit."
            )
            raise ValueError(msg)

        # Diagnostics quote the original text; only the parser sees blanked comments.
        stripped = strip_comments(source, filename)

        context = ParseContext(max_nesting_depth=self._max_nesting_depth)
        stream = ParseStream.new(stripped).trim()
        statements: list[Statement] = []

        while not stream.is_empty():
            result = parse_statement(stream, context)
            if isinstance(result, ParseFailure):
                logger.debug(
                    "Statement at %s failed: expected %s at %s (depth %d)",
                    stream.cursor,
                    result.expected,
                    result.span,
                    result.depth,
                )
                raise EcslangSyntaxError(Diagnostic.from_failure(result, source, filename))

            logger.debug(
                "Parsed %s at %s", type(result.value).__name__, stream.cursor
            )
            statements.append(result.value)
            stream = result.stream.trim()

        logger.info("Parsed %d statements from %s", len(statements), filename)
        return tuple(statements)
