"""Ordered alternation with deepest-failure selection.

Every candidate is attempted on the same immutable stream, in declaration
order. The first success wins. When all candidates fail, the failure that
got furthest into the input is reported: a candidate that matched a keyword
and several tokens before failing describes the user's intent better than
one that failed on the first token.

Ties are resolved in favour of the earliest-declared candidate.
"""

from collections.abc import Iterable

from ecslang.syntax.cursor import Parsed, ParseFailure, ParseStream
from ecslang.syntax.parser.combinators import Parser

__all__ = ["alternatives", "deepest_failure", "one_of"]


def deepest_failure(failures: Iterable[ParseFailure]) -> ParseFailure:
    """Return the failure with the greatest depth (first one on ties).

    Raises:
        ValueError: If ``failures`` is empty
    """
    best: ParseFailure | None = None
    for failure in failures:
        if best is None or failure.depth > best.depth:
            best = failure
    if best is None:
        msg = "deepest_failure() requires at least one failure"
        raise ValueError(msg)
    return best


def alternatives[T](stream: ParseStream, *parsers: Parser[T]) -> Parsed[T]:
    """Try ``parsers`` in order on ``stream``; first success wins.

    Example:
        >>> alternatives(stream, parse_entity, parse_fn, parse_struct)
    """
    failures: list[ParseFailure] = []
    for parser in parsers:
        result = parser(stream)
        if not isinstance(result, ParseFailure):
            return result
        failures.append(result)
    return deepest_failure(failures)


def one_of[T](*parsers: Parser[T]) -> Parser[T]:
    """Build a reusable parser from an ordered candidate table."""
    if not parsers:
        msg = "one_of() requires at least one parser"
        raise ValueError(msg)

    def parse_one_of(stream: ParseStream) -> Parsed[T]:
        return alternatives(stream, *parsers)

    return parse_one_of
