"""Structural combinators.

Higher-order parsers that repeat, separate, enclose or multiply an inner
parser. An inner parser is any callable ``(ParseStream) -> Parsed[T]``.

Because ``ParseStream`` is immutable, attempting a parser "on a duplicate"
means calling it with the current stream and only continuing with the
returned stream on success.
"""

from collections.abc import Callable

from ecslang.constants import DEFAULT_INTEGER_BITS
from ecslang.core.span import Span
from ecslang.diagnostics import ErrorTemplate
from ecslang.syntax.ast import XTimes
from ecslang.syntax.cursor import Parsed, ParseFailure, ParseResult, ParseStream
from ecslang.syntax.parser.primitives import (
    parse_keyword,
    parse_punct,
    parse_sigil,
    parse_unsigned,
)

__all__ = [
    "Parser",
    "delimited",
    "embraced",
    "one_or_more",
    "optional",
    "parse_until_failure",
    "punctuated",
    "x_times",
]

type Parser[T] = Callable[[ParseStream], Parsed[T]]
"""Any function from a stream to a parse outcome."""

# Keyword introducing a multiplicity suffix: ``int x 3``.
_TIMES_KEYWORD = "x"


def _collect[T](
    stream: ParseStream,
    parser: Parser[T],
    separator: str | None = None,
) -> tuple[tuple[T, ...], ParseStream, ParseFailure]:
    """Apply ``parser`` repeatedly, optionally requiring ``separator`` between items.

    Returns the items, the stream after the last committed item or
    separator, and the failure that ended the sequence.
    """
    items: list[T] = []
    while True:
        result = parser(stream)
        if isinstance(result, ParseFailure):
            return tuple(items), stream, result
        items.append(result.value)
        stream = result.stream

        if separator is not None:
            separated = parse_punct(stream, separator)
            if isinstance(separated, ParseFailure):
                return tuple(items), stream, separated
            stream = separated.stream


def parse_until_failure[T](stream: ParseStream, parser: Parser[T]) -> ParseResult[tuple[T, ...]]:
    """Apply ``parser`` until it fails; never fails itself.

    The stream is left where the last successful attempt ended.
    """
    items, stream, _ = _collect(stream, parser)
    return ParseResult(items, stream)


def one_or_more[T](stream: ParseStream, parser: Parser[T]) -> Parsed[tuple[T, ...]]:
    """Apply ``parser`` once (failure propagates), then until it fails."""
    first = parser(stream)
    if isinstance(first, ParseFailure):
        return first

    rest = parse_until_failure(first.stream, parser)
    return ParseResult((first.value, *rest.value), rest.stream)


def _at_least_one(failure: ParseFailure) -> ParseFailure:
    return failure.with_custom_expected(f"at least one {failure.expected}")


def punctuated[T](
    stream: ParseStream,
    parser: Parser[T],
    separator: str,
    *,
    zero_allowed: bool = False,
) -> Parsed[tuple[T, ...]]:
    """Parse ``parser`` elements separated by the ``separator`` token.

    Each element is attempted speculatively: on failure the stream stays
    after the last separator and the sequence ends. A present separator is
    committed, so ``a + b +`` yields ``(a, b)`` with the trailing ``+``
    consumed.

    Examples:
        "Health + Position" with "+" → (Health, Position)
        "" with zero_allowed → ()

    Args:
        stream: Current position in source
        parser: Element parser
        separator: Punctuation token between elements
        zero_allowed: Whether an empty sequence is a success

    Returns:
        ParseResult(tuple of elements, new_stream)
        ParseFailure expecting ``at least one ...`` when empty and not allowed
    """
    items, stream, stopped = _collect(stream, parser, separator)
    if not items and not zero_allowed:
        return _at_least_one(stopped)
    return ParseResult(items, stream)


def x_times[T](
    stream: ParseStream,
    parser: Parser[T],
    *,
    default_allowed: bool = True,
) -> Parsed[XTimes[T]]:
    """Parse ``T`` optionally followed by a ``x N`` multiplicity suffix.

    Examples:
        "int x 3" → XTimes(int, 3)
        "int" → XTimes(int, 1) when default_allowed

    A zero amount is a hard failure. Without the suffix the keyword failure
    propagates unless ``default_allowed``.
    """
    result = parser(stream)
    if isinstance(result, ParseFailure):
        return result
    stream = result.stream

    keyword = parse_keyword(stream, _TIMES_KEYWORD)
    if isinstance(keyword, ParseFailure):
        if default_allowed:
            return ParseResult(XTimes(result.value), stream)
        return keyword

    amount = parse_unsigned(keyword.stream, DEFAULT_INTEGER_BITS)
    if isinstance(amount, ParseFailure):
        return amount

    if amount.value == 0:
        digits = keyword.stream.trim()
        return ErrorTemplate.zero_amount(
            Span(digits.cursor, amount.stream.cursor), amount.stream.depth
        )

    return ParseResult(XTimes(result.value, amount.value), amount.stream)


def delimited[T](
    stream: ParseStream,
    opening: str,
    closing: str,
    parser: Parser[T],
) -> Parsed[T]:
    """Parse ``opening``, the inner parser, then ``closing``.

    Opening and closing are single structural characters. A missing closing
    character at end of input fails with an EOF span.
    """
    opened = parse_sigil(stream, opening)
    if isinstance(opened, ParseFailure):
        return opened

    inner = parser(opened.stream)
    if isinstance(inner, ParseFailure):
        return inner

    closed = parse_sigil(inner.stream, closing)
    if isinstance(closed, ParseFailure):
        return closed

    return ParseResult(inner.value, closed.stream)


def embraced[T](
    stream: ParseStream,
    opening: str,
    closing: str,
    parser: Parser[T],
    separator: str | None,
    *,
    zero_allowed: bool = False,
) -> Parsed[tuple[T, ...]]:
    """``delimited`` around a ``punctuated`` sequence.

    With ``separator=None`` the items follow each other directly, as with
    ``parse_until_failure``.

    When the closing character is missing, the failure that ended the
    sequence is reported instead if it got deeper: ``{ print("abc }``
    reports the unterminated string, not the missing ``}``.

    Example:
        "(x: int, y: int)" → (x: int, y: int)
    """
    opened = parse_sigil(stream, opening)
    if isinstance(opened, ParseFailure):
        return opened

    items, stream, stopped = _collect(opened.stream, parser, separator)
    if not items and not zero_allowed:
        return _at_least_one(stopped)

    closed = parse_sigil(stream, closing)
    if isinstance(closed, ParseFailure):
        return stopped if stopped.depth > closed.depth else closed

    return ParseResult(items, closed.stream)


def optional[T](stream: ParseStream, parser: Parser[T]) -> ParseResult[T | None]:
    """Value or None; never fails and never advances on failure."""
    result = parser(stream)
    if isinstance(result, ParseFailure):
        return ParseResult(None, stream)
    return result
