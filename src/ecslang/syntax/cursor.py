"""Immutable cursor stream for backtracking parsing.

Implements the immutable cursor pattern: every advancing operation returns a
NEW stream, so speculative parsing needs no explicit rollback. Forking a
stream is keeping a reference to it; committing is continuing with the
stream a successful parser returned; discarding is dropping it.

Design Philosophy:
    - ParseStream is immutable (frozen dataclass)
    - ``offset_by`` is the only operation that moves position and depth,
      so the two can never desynchronize
    - Depth never decreases and the cursor never moves backwards
    - Parsers return ``ParseResult[T] | ParseFailure``; a failure leaves the
      caller's stream untouched by construction

Line Ending Support:
    ``\\n`` is the line separator. In CRLF files the ``\\r`` counts as an
    ordinary column before the separator.
"""

from collections.abc import Callable
from dataclasses import dataclass

from ecslang.constants import LINE_SEPARATOR
from ecslang.core.span import CursorPosition, Span
from ecslang.diagnostics import ParseFailure, ParsingDepth

__all__ = ["Parsed", "ParseFailure", "ParseResult", "ParseStream", "ParsingDepth"]


@dataclass(frozen=True, slots=True)
class ParseStream:
    """Remaining source text plus current position and depth.

    Attributes:
        source: Complete source snapshot (shared, never copied)
        offset: Index of the first remaining scalar value in ``source``
        cursor: Line/column of the first remaining scalar value
        depth: Scalar values consumed since the stream was created

    Example:
        >>> stream = ParseStream.new("  entity")
        >>> trimmed = stream.trim()
        >>> trimmed.cursor, trimmed.depth
        (CursorPosition(line=1, column=3), 2)
        >>> stream.depth  # Original unchanged (immutability)
        0
    """

    source: str
    offset: int = 0
    cursor: CursorPosition = CursorPosition()
    depth: ParsingDepth = 0

    @classmethod
    def new(cls, source: str) -> "ParseStream":
        """Create a stream at ``1:1`` with depth 0."""
        return cls(source)

    @property
    def remaining(self) -> str:
        """Unconsumed source text."""
        return self.source[self.offset :]

    def is_empty(self) -> bool:
        """Check whether the stream is exhausted."""
        return self.offset >= len(self.source)

    def peek(self) -> str | None:
        """Next scalar value, or None when exhausted."""
        if self.is_empty():
            return None
        return self.source[self.offset]

    def startswith(self, prefix: str) -> bool:
        """Check whether the remaining text starts with ``prefix``."""
        return self.source.startswith(prefix, self.offset)

    def span_here(self, width: int = 1) -> Span:
        """Span of ``width`` scalar values at the cursor, or EOF when exhausted."""
        if self.is_empty():
            return Span.EOF
        return Span.with_extra_column(self.cursor, width)

    def offset_by(self, count: int) -> "ParseStream":
        """Return a stream advanced by exactly ``count`` scalar values.

        Line and column are updated per scalar value and depth grows by the
        number consumed. ``count`` is clamped to the remaining length.
        """
        if count <= 0:
            return self
        end = min(self.offset + count, len(self.source))
        consumed = self.source[self.offset : end]
        return ParseStream(
            self.source,
            end,
            self.cursor.advanced_over(consumed),
            self.depth + len(consumed),
        )

    def count_while(self, predicate: Callable[[str], bool], start: int = 0) -> int:
        """Count consecutive remaining scalar values, from ``start``, satisfying ``predicate``."""
        index = self.offset + start
        source = self.source
        while index < len(source) and predicate(source[index]):
            index += 1
        return index - self.offset - start

    def trim(self) -> "ParseStream":
        """Skip whitespace, advancing position and depth accordingly."""
        return self.offset_by(self.count_while(str.isspace))

    def skip_inline_whitespace(self) -> "ParseStream":
        """Skip whitespace other than the line separator."""
        return self.offset_by(
            self.count_while(lambda char: char.isspace() and char != LINE_SEPARATOR)
        )

    def at_line_end(self) -> bool:
        """Check whether only inline whitespace separates the cursor from a line end.

        End of input counts as a line end.
        """
        stream = self.skip_inline_whitespace()
        return stream.is_empty() or stream.startswith(LINE_SEPARATOR)


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Parser result containing parsed value and the advanced stream.

    Type Parameters:
        T: The type of the parsed value

    Pattern:
        Every parser has signature:
            def parse_foo(stream: ParseStream) -> ParseResult[Foo] | ParseFailure:
                ...
                return ParseResult(parsed_value, new_stream)
    """

    value: T
    stream: ParseStream


type Parsed[T] = ParseResult[T] | ParseFailure
"""Outcome of one parsing attempt."""
