"""Nestable comment preprocessor.

Comments open with ``#(`` and close with ``)#`` and may nest:

    entity Player = Health #( Position #( disabled )# )# ;

Comment text (delimiters included) is replaced by spaces while line
separators are kept, so every position after a comment is the same in the
stripped text as in the original. Diagnostics can therefore quote the
original source.

Comment tokens are recognised everywhere, including inside string literals.
A ``)#`` outside any comment is ordinary text.
"""

import logging

from ecslang.constants import COMMENT_END, COMMENT_START, LINE_SEPARATOR
from ecslang.core.span import CursorPosition, Span
from ecslang.diagnostics import Diagnostic, EcslangSyntaxError, ErrorTemplate

logger = logging.getLogger(__name__)

__all__ = ["strip_comments"]


def _blank(text: str) -> str:
    return "".join(char if char == LINE_SEPARATOR else " " for char in text)


def strip_comments(source: str, filename: str = "<input>") -> str:
    """Return ``source`` with every comment blanked out.

    Args:
        source: ecslang source text
        filename: Name shown in the diagnostic of an unterminated comment

    Returns:
        Text of the same length with comments replaced by spaces

    Raises:
        EcslangSyntaxError: If a comment is never closed
    """
    if COMMENT_START not in source:
        return source

    pieces: list[str] = []
    # Offsets of the currently open comment starts, outermost first.
    open_starts: list[int] = []
    index = 0
    copied = 0
    count = 0

    while index < len(source):
        if source.startswith(COMMENT_START, index):
            if not open_starts:
                pieces.append(source[copied:index])
                copied = index
                count += 1
            open_starts.append(index)
            index += len(COMMENT_START)
        elif open_starts and source.startswith(COMMENT_END, index):
            open_starts.pop()
            index += len(COMMENT_END)
            if not open_starts:
                pieces.append(_blank(source[copied:index]))
                copied = index
        else:
            index += 1

    if open_starts:
        outermost = open_starts[0]
        start = CursorPosition().advanced_over(source[:outermost])
        failure = ErrorTemplate.unterminated_comment(
            Span.with_extra_column(start, len(COMMENT_START)), len(source), COMMENT_END
        )
        raise EcslangSyntaxError(Diagnostic.from_failure(failure, source, filename))

    pieces.append(source[copied:])
    logger.debug("Blanked %d comments in %s", count, filename)
    return "".join(pieces)
