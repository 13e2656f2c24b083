"""Primitive parsers for the ecslang grammar.

This module provides the low-level parsers every grammar rule is built
from: identifiers, keywords, punctuation tokens, delimited strings,
bounded unsigned integers, single structural characters and line ends.

All of them skip leading whitespace first (``parse_line_end`` skips only
inline whitespace), then either return a ``ParseResult`` or a
``ParseFailure`` whose span is the offending scalar value or ``Span.EOF``.

Punctuation Discipline:
    ``parse_punct`` scans the maximal run of ASCII punctuation at the cursor
    and requires the WHOLE run to equal the requested token. Requesting
    ``=`` where the source reads ``==`` fails, because the run ``==`` is one
    token. Structural characters (brackets, braces, type sigils) are not
    operator tokens and go through ``parse_sigil``, which looks at exactly
    one scalar value.

Keyword Depth:
    A keyword mismatch is ranked at the start of the word, not after it. A
    word that names no statement form then fails every form at the same
    depth, while a form whose keyword matched always reaches deeper: a bare
    ``struct`` at the end of input reports the missing identifier rather
    than the keyword of the first declared form.
"""

import string

from ecslang.constants import DEFAULT_INTEGER_BITS, DOUBLE_QUOTE, ESCAPING_SIGN, LINE_SEPARATOR
from ecslang.core.span import CursorPosition, Span
from ecslang.diagnostics import ErrorTemplate
from ecslang.syntax.ast import Ident, QuotedString
from ecslang.syntax.cursor import Parsed, ParseFailure, ParseResult, ParseStream

__all__ = [
    "is_punctuation",
    "parse_enclosed",
    "parse_identifier",
    "parse_keyword",
    "parse_line_end",
    "parse_punct",
    "parse_quoted_string",
    "parse_sigil",
    "parse_unsigned",
]

_PUNCTUATION: frozenset[str] = frozenset(string.punctuation)

# ASCII digits only: str.isdigit() accepts characters like ² that int() rejects.
_ASCII_DIGITS: str = "0123456789"


def is_punctuation(char: str) -> bool:
    """Check if character belongs to the ASCII punctuation class."""
    return char in _PUNCTUATION


def parse_identifier(stream: ParseStream) -> Parsed[Ident]:
    """Parse identifier: alphabetic, then alphanumerics.

    Unicode letters and digits are accepted (``str.isalpha``/``str.isalnum``).
    There is no keyword table: ``entity`` is an identifier like any other.

    Examples:
        human → Ident("human")
        Vec2 → Ident("Vec2")

    Args:
        stream: Current position in source

    Returns:
        ParseResult(Ident, new_stream) on success
        ParseFailure expecting ``ident`` otherwise
    """
    stream = stream.trim()

    first = stream.peek()
    if first is None or not first.isalpha():
        return ErrorTemplate.expected_identifier(stream.span_here(), stream.depth)

    length = 1 + stream.count_while(str.isalnum, start=1)
    name = stream.source[stream.offset : stream.offset + length]
    return ParseResult(Ident(name, stream.cursor), stream.offset_by(length))


def parse_keyword(stream: ParseStream, keyword: str) -> Parsed[Ident]:
    """Parse the identifier ``keyword`` exactly.

    ``humans`` does not match the keyword ``human``: the identifier scan is
    maximal, then compared as a whole.

    Args:
        stream: Current position in source
        keyword: Required identifier text

    Returns:
        ParseResult(Ident, new_stream) on success
        ParseFailure expecting ``keyword `...` `` otherwise
    """
    result = parse_identifier(stream)
    if isinstance(result, ParseFailure):
        return result.with_custom_expected(f"keyword `{keyword}`")

    if result.value.name != keyword:
        trimmed = stream.trim()
        return ErrorTemplate.expected_keyword(result.value.span, trimmed.depth, keyword)

    return result


def parse_punct(stream: ParseStream, punct: str) -> Parsed[Span]:
    """Parse a punctuation token by maximal-run equality.

    Examples:
        "-> int" with punct "->" → consumes "->"
        "== b" with punct "=" → fails (the run is "==")

    Args:
        stream: Current position in source
        punct: Token that the full punctuation run must equal

    Returns:
        ParseResult(span of the token, new_stream) on success
        ParseFailure expecting `` `punct` `` otherwise
    """
    stream = stream.trim()

    length = stream.count_while(is_punctuation)
    if length == 0:
        return ErrorTemplate.expected_punct(stream.span_here(), stream.depth, punct)

    run = stream.source[stream.offset : stream.offset + length]
    if run != punct:
        return ErrorTemplate.expected_punct(
            Span.with_extra_column(stream.cursor, length), stream.depth, punct, found=run
        )

    return ParseResult(Span.with_extra_column(stream.cursor, length), stream.offset_by(length))


def parse_sigil(stream: ParseStream, sigil: str) -> Parsed[Span]:
    """Parse one structural character (``(``, ``}``, ``&``, ``*`` ...).

    Unlike ``parse_punct`` this ignores what follows, so ``{}`` yields two
    sigils and ``&&T`` two references.
    """
    stream = stream.trim()

    if not stream.startswith(sigil):
        return ErrorTemplate.expected_sigil(stream.span_here(), stream.depth, sigil)

    span = Span.with_extra_column(stream.cursor, len(sigil))
    return ParseResult(span, stream.offset_by(len(sigil)))


def parse_enclosed(stream: ParseStream, delimiter: str) -> Parsed[tuple[str, CursorPosition]]:
    """Parse a ``delimiter``-enclosed string, keeping escapes raw.

    An escape sign sets the escaped mark and only a scalar value other than
    the escape sign clears it, so a delimiter after any run of escape signs
    (two of them included) stays inside the string. The first unescaped
    delimiter ends the string.

    Examples:
        "abc" → ("abc", position of a)
        "say \\"hi\\"" → ('say \\"hi\\"', ...)

    Args:
        stream: Current position in source
        delimiter: Opening and closing character

    Returns:
        ParseResult((interior text, position just after the opening delimiter), new_stream)
        ParseFailure with an EOF span if the closing delimiter is missing
    """
    stream = stream.trim()

    if not stream.startswith(delimiter):
        return ErrorTemplate.expected_enclosed(stream.span_here(), stream.depth, delimiter)

    stream = stream.offset_by(len(delimiter))
    start = stream.cursor

    escaped = False
    source = stream.source
    for index in range(stream.offset, len(source)):
        char = source[index]
        if char == ESCAPING_SIGN:
            escaped = True
            continue
        if char == delimiter and not escaped:
            length = index - stream.offset
            value = source[stream.offset : index]
            return ParseResult((value, start), stream.offset_by(length + len(delimiter)))
        escaped = False

    exhausted = stream.offset_by(len(source) - stream.offset)
    return ErrorTemplate.unterminated_enclosed(exhausted.depth, delimiter)


def parse_quoted_string(stream: ParseStream) -> Parsed[QuotedString]:
    """Parse a double-quoted string literal."""
    result = parse_enclosed(stream, DOUBLE_QUOTE)
    if isinstance(result, ParseFailure):
        return result

    value, start = result.value
    return ParseResult(QuotedString(value, start), result.stream)


def parse_unsigned(stream: ParseStream, bits: int = DEFAULT_INTEGER_BITS) -> Parsed[int]:
    """Parse an unsigned decimal integer that fits in ``bits`` bits.

    Args:
        stream: Current position in source
        bits: Target width (8 accepts 0..=255)

    Returns:
        ParseResult(int, new_stream) on success
        ParseFailure when no digit is present or the value overflows
    """
    stream = stream.trim()

    length = stream.count_while(lambda char: char in _ASCII_DIGITS)
    if length == 0:
        return ErrorTemplate.expected_unsigned(stream.span_here(), stream.depth, bits)

    value = int(stream.source[stream.offset : stream.offset + length])
    if value >= 1 << bits:
        digits_end = stream.offset_by(length)
        return ErrorTemplate.integer_out_of_range(
            Span(stream.cursor, digits_end.cursor), digits_end.depth, bits
        )

    return ParseResult(value, stream.offset_by(length))


def parse_line_end(stream: ParseStream) -> Parsed[None]:
    """Require the end of the current line (or of the input).

    Only inline whitespace is skipped before the check; the line separator
    itself is consumed.
    """
    stream = stream.skip_inline_whitespace()

    if stream.is_empty():
        return ParseResult(None, stream)
    if stream.startswith(LINE_SEPARATOR):
        return ParseResult(None, stream.offset_by(len(LINE_SEPARATOR)))

    return ErrorTemplate.expected_line_end(stream.span_here(), stream.depth)
