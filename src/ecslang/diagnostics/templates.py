"""Error message templates.

Centralized failure templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from ecslang.core.span import Span

from .codes import DiagnosticCode, ParseFailure, ParsingDepth


class ErrorTemplate:
    """Centralized failure templates.

    All failure texts are created here, never inline in grammar rules.
    Text between backticks is rendered with the accent style.
    """

    @staticmethod
    def expected_identifier(span: Span, depth: ParsingDepth) -> ParseFailure:
        """Identifier required but the scalar value is not alphabetic (or input ended)."""
        return ParseFailure(span, depth, "ident")

    @staticmethod
    def expected_keyword(span: Span, depth: ParsingDepth, keyword: str) -> ParseFailure:
        """A specific keyword was required."""
        return ParseFailure(span, depth, f"keyword `{keyword}`")

    @staticmethod
    def expected_punct(
        span: Span, depth: ParsingDepth, punct: str, found: str = ""
    ) -> ParseFailure:
        """A punctuation token was required.

        The maximal punctuation run at the cursor must equal ``punct``
        exactly, so a help line is added when the run only starts with it.
        """
        if found != punct and found.startswith(punct):
            return ParseFailure(
                span,
                depth,
                f"`{punct}`",
                help=(f"`{found}` is read as a single token; separate it with whitespace",),
            )
        return ParseFailure(span, depth, f"`{punct}`")

    @staticmethod
    def expected_enclosed(span: Span, depth: ParsingDepth, delimiter: str) -> ParseFailure:
        """A delimiter-enclosed string was required."""
        return ParseFailure(span, depth, f"`{delimiter}`-enclosed string")

    @staticmethod
    def unterminated_enclosed(depth: ParsingDepth, delimiter: str) -> ParseFailure:
        """Input ended before the closing delimiter of a string."""
        return ParseFailure(
            Span.EOF,
            depth,
            f"closing delimiter `{delimiter}`",
            help=(f"add a `{delimiter}` to close the string",),
        )

    @staticmethod
    def expected_unsigned(span: Span, depth: ParsingDepth, bits: int) -> ParseFailure:
        """A run of decimal digits was required."""
        return ParseFailure(span, depth, f"{bits}-bit unsigned integer")

    @staticmethod
    def integer_out_of_range(span: Span, depth: ParsingDepth, bits: int) -> ParseFailure:
        """The digits do not fit the target bit width."""
        return ParseFailure(
            span,
            depth,
            f"number in range `0..={(1 << bits) - 1}`",
            code=DiagnosticCode.INTEGER_OUT_OF_RANGE,
        )

    @staticmethod
    def zero_amount(span: Span, depth: ParsingDepth) -> ParseFailure:
        """A multiplicity suffix of zero."""
        return ParseFailure(
            span,
            depth,
            "non-zero amount",
            help=("remove the item instead of repeating it zero times",),
            code=DiagnosticCode.ZERO_AMOUNT,
        )

    @staticmethod
    def expected_sigil(span: Span, depth: ParsingDepth, sigil: str) -> ParseFailure:
        """A single structural character (delimiter, type sigil) was required."""
        return ParseFailure(span, depth, f"`{sigil}`")

    @staticmethod
    def expected_line_end(span: Span, depth: ParsingDepth) -> ParseFailure:
        """The construct must end its line."""
        return ParseFailure(span, depth, "end of line")

    @staticmethod
    def too_many_sigils(span: Span, depth: ParsingDepth, sigil: str) -> ParseFailure:
        """More indirection levels than the mutability mask can hold."""
        return ParseFailure(
            span,
            depth,
            f"not an extra `{sigil}` token",
            code=DiagnosticCode.TOO_MANY_SIGILS,
        )

    @staticmethod
    def expected_ffi_language(span: Span, depth: ParsingDepth) -> ParseFailure:
        """Unknown foreign-function language."""
        return ParseFailure(span, depth, "`clang`")

    @staticmethod
    def single_affix_argument(span: Span, depth: ParsingDepth) -> ParseFailure:
        """A literal macro or operator declared with other than one argument."""
        return ParseFailure(
            span,
            depth,
            "only one argument for an affix operator",
            code=DiagnosticCode.ARITY_MISMATCH,
        )

    @staticmethod
    def unsupported_literal_type(span: Span, depth: ParsingDepth) -> ParseFailure:
        """Literal macro argument is not one of the literal types."""
        return ParseFailure(
            span,
            depth,
            "one of `&str`, char, float, int",
            code=DiagnosticCode.UNSUPPORTED_LITERAL_TYPE,
        )

    @staticmethod
    def nesting_too_deep(span: Span, depth: ParsingDepth, max_depth: int) -> ParseFailure:
        """Expressions nested deeper than the configured limit."""
        return ParseFailure(
            span,
            depth,
            f"at most {max_depth} nested expressions",
            code=DiagnosticCode.NESTING_TOO_DEEP,
        )

    @staticmethod
    def unterminated_comment(span: Span, depth: ParsingDepth, terminator: str) -> ParseFailure:
        """A nestable comment is never closed."""
        return ParseFailure(
            span,
            depth,
            f"comment terminator `{terminator}`",
            help=("comments nest, so every opening token needs its own terminator",),
            code=DiagnosticCode.UNTERMINATED_COMMENT,
        )
