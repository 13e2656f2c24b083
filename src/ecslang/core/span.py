"""Source positions and spans.

Positions are line/column pairs counted in Unicode scalar values (Python
``str`` indices), not bytes. Spans are half-open and never own source text;
``Span.apply`` slices the covered text out of a snapshot of the full source.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

from ecslang.constants import EOF_TOKEN, LINE_SEPARATOR

__all__ = ["CursorPosition", "Span"]


@dataclass(frozen=True, slots=True)
class CursorPosition:
    """Position of a scalar value in the source.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (1-indexed)

    ``CursorPosition.EOF`` is ``0:0``, which no real position can equal.

    Example:
        >>> CursorPosition().advanced_over("ab\\ncd")
        CursorPosition(line=2, column=3)
    """

    line: int = 1
    column: int = 1

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"

    @property
    def is_eof(self) -> bool:
        """True for the EOF sentinel."""
        return self == CursorPosition.EOF

    def extend_column_by(self, count: int) -> "CursorPosition":
        """Return the position ``count`` columns to the right on the same line."""
        return CursorPosition(self.line, self.column + count)

    def advanced_over(self, text: str) -> "CursorPosition":
        """Return the position reached after consuming ``text``.

        A line separator resets the column to 1 and increments the line;
        every other scalar value increments the column by one.
        """
        line, column = self.line, self.column
        for char in text:
            if char == LINE_SEPARATOR:
                line += 1
                column = 1
            else:
                column += 1
        return CursorPosition(line, column)

    @staticmethod
    def end_of(source: str) -> "CursorPosition":
        """Position just past the last scalar value of ``source``."""
        return CursorPosition().advanced_over(source)


CursorPosition.EOF = CursorPosition(0, 0)  # type: ignore[attr-defined]


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open source range ``[start, end)``.

    Attributes:
        start: First consumed position
        end: Position one past the last consumed scalar value
    """

    start: CursorPosition
    end: CursorPosition

    def __str__(self) -> str:
        return f"Span({self.start}..{self.end})"

    @property
    def is_eof(self) -> bool:
        """True for the EOF sentinel span."""
        return self.start.is_eof

    @staticmethod
    def with_extra_column(position: CursorPosition, extra_column: int) -> "Span":
        """Span covering ``extra_column`` scalar values starting at ``position``."""
        return Span(position, position.extend_column_by(extra_column))

    @staticmethod
    def with_shrunk_column(position: CursorPosition, shrink: int) -> "Span":
        """Span covering the ``shrink`` scalar values just before ``position``."""
        return Span(position.extend_column_by(-shrink), position)

    def apply(self, source: str) -> str:
        """Extract the text this span covers, for display.

        The first line is cut at ``start.column`` and the last at
        ``end.column``; the last excerpt line is then truncated at its first
        whitespace character. The EOF span yields ``<EOF>``.

        Example:
            >>> span = Span(CursorPosition(1, 8), CursorPosition(1, 14))
            >>> span.apply("entity Player = ;")
            'Player'
        """
        if self.is_eof:
            return EOF_TOKEN

        lines = source.split(LINE_SEPARATOR)[self.start.line - 1 : self.end.line]
        if not lines:
            return ""

        end_column = self.end.column - 1
        if len(lines) == 1:
            lines[0] = lines[0][self.start.column - 1 : max(end_column, self.start.column - 1)]
        else:
            lines[0] = lines[0][self.start.column - 1 :]
            lines[-1] = lines[-1][:end_column]

        last = lines[-1]
        for index, char in enumerate(last):
            if char.isspace():
                lines[-1] = last[:index]
                break

        return LINE_SEPARATOR.join(lines)


Span.EOF = Span(CursorPosition.EOF, CursorPosition.EOF)  # type: ignore[attr-defined]
