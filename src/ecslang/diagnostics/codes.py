"""Diagnostic codes and data structures.

Defines error codes, the structured parse failure produced by every failing
combinator, and the user-facing diagnostic built from it.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass, field, replace
from enum import Enum

from ecslang.constants import LINE_SEPARATOR
from ecslang.core.span import CursorPosition, Span

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "ParseFailure",
    "ParsingDepth",
]

type ParsingDepth = int
"""Number of scalar values consumed since the stream was created."""


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1099: Expectation failures (wrong or missing content)
        1100-1199: Arity failures (well-shaped construct, bad count)
        1200-1299: Resource limits
        2000-2099: Preprocessing failures
    """

    # Expectation failures (1000-1099)
    UNEXPECTED_TOKEN = 1001
    UNEXPECTED_EOF = 1002
    INTEGER_OUT_OF_RANGE = 1003
    TOO_MANY_SIGILS = 1004
    UNSUPPORTED_LITERAL_TYPE = 1005

    # Arity failures (1100-1199)
    ARITY_MISMATCH = 1101
    ZERO_AMOUNT = 1102

    # Resource limits (1200-1299)
    NESTING_TOO_DEEP = 1201

    # Preprocessing failures (2000-2099)
    UNTERMINATED_COMMENT = 2001


@dataclass(frozen=True, slots=True)
class ParseFailure:
    """Structured failure of a parsing attempt.

    Attributes:
        span: Offending source range, or ``Span.EOF`` when input ran out
        depth: Stream depth at the moment of failure; ranks competing failures
        expected: Human-readable description of what was required
        help: Optional hints shown under the excerpt
        code: Failure classification

    Example:
        >>> failure = ParseFailure(Span.EOF, 3, "ident")
        >>> failure.is_eof
        True
        >>> failure.with_custom_expected("at least one ident").expected
        'at least one ident'
    """

    span: Span
    depth: ParsingDepth
    expected: str
    help: tuple[str, ...] = ()
    code: DiagnosticCode = DiagnosticCode.UNEXPECTED_TOKEN

    def __post_init__(self) -> None:
        """Promote failures anchored at EOF to the EOF code."""
        if self.span.is_eof and self.code is DiagnosticCode.UNEXPECTED_TOKEN:
            object.__setattr__(self, "code", DiagnosticCode.UNEXPECTED_EOF)

    @property
    def is_eof(self) -> bool:
        """True when the required content was absent because input ran out."""
        return self.span.is_eof

    def with_custom_expected(self, expected: str) -> "ParseFailure":
        """Return a copy describing a different expectation."""
        return replace(self, expected=expected)

    def with_help(self, *help_lines: str) -> "ParseFailure":
        """Return a copy with extra help lines appended."""
        return replace(self, help=self.help + help_lines)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """User-facing error report.

    Constructed exactly once per failed invocation, from a ``ParseFailure``
    plus the original source and filename.

    Attributes:
        code: Failure classification
        span: Offending source range (``Span.EOF`` when input ran out)
        message: Headline, e.g. "unexpected token `;`"
        lines: Source text covered by the span
        clarifying: "expected ..." line printed after the carets
        help: Help lines
        filename: Name of the parsed file
        source: Complete parsed source
    """

    code: DiagnosticCode
    span: Span
    message: str
    lines: str
    clarifying: str
    help: tuple[str, ...] = field(default_factory=tuple)
    filename: str = "<input>"
    source: str = ""

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    @classmethod
    def from_failure(cls, failure: ParseFailure, source: str, filename: str) -> "Diagnostic":
        """Build the diagnostic for ``failure`` found while parsing ``source``."""
        applied = failure.span.apply(source)
        return cls(
            code=failure.code,
            span=failure.span,
            message=f"unexpected token `{applied}`",
            lines=applied,
            clarifying=f"expected {failure.expected}",
            help=failure.help,
            filename=filename,
            source=source,
        )

    @property
    def position(self) -> CursorPosition:
        """Position the report points at.

        EOF failures point just past the last scalar value of the source.
        """
        if self.span.is_eof:
            return CursorPosition.end_of(self.source)
        return self.span.start

    @property
    def excerpt(self) -> tuple[tuple[int, str, str], ...]:
        """Rows of ``(line number, full source line, covered text)``."""
        source_lines = self.source.split(LINE_SEPARATOR)
        if self.span.is_eof:
            position = self.position
            return ((position.line, source_lines[position.line - 1], " "),)

        rows = []
        for offset, covered in enumerate(self.lines.split(LINE_SEPARATOR)):
            number = self.span.start.line + offset
            full_line = source_lines[number - 1] if number <= len(source_lines) else ""
            rows.append((number, full_line, covered))
        return tuple(rows)

    def format_error(self) -> str:
        """Format diagnostic like the Rust compiler.

        Delegates to DiagnosticFormatter for consistent output.

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
