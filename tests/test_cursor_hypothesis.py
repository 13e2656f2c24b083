"""Hypothesis property-based tests for ParseStream and the combinators built on it.

Tests backtracking non-interference and depth monotonicity.
Complements test_cursor.py with property-based testing.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from ecslang.core.span import CursorPosition
from ecslang.syntax.cursor import ParseFailure, ParseStream
from ecslang.syntax.parser.alternation import alternatives
from ecslang.syntax.parser.primitives import (
    parse_identifier,
    parse_keyword,
    parse_punct,
    parse_quoted_string,
    parse_unsigned,
)
from ecslang.syntax.parser.rules import parse_statement

# ============================================================================
# HYPOTHESIS STRATEGIES
# ============================================================================

source_text = st.text(
    alphabet=st.characters(blacklist_categories=["Cs"]),
    min_size=0,
    max_size=200,
)

# Text biased towards the DSL's own tokens
dsl_text = st.lists(
    st.sampled_from(
        [
            "entity", "fn", "struct", "ty", "extern", "clang", "macro", "operator",
            "prefix", "x", "mut", "Player", "int", "=", "+", ";", ":", ",", "|",
            "->", "&", "*", "(", ")", "{", "}", '"', "42", " ", "\n",
        ]
    ),
    max_size=40,
).map("".join)

offsets = st.integers(min_value=0, max_value=250)


# ============================================================================
# PROPERTY TESTS - ADVANCING
# ============================================================================


class TestDepthMonotonicity:
    """Depth never decreases and the cursor never moves backwards."""

    @given(source=source_text, steps=st.lists(offsets, max_size=10))
    @settings(max_examples=200)
    def test_offset_by_never_decreases_depth(self, source: str, steps: list[int]) -> None:
        """PROPERTY: depth equals scalar values consumed since origin."""
        stream = ParseStream.new(source)
        for step in steps:
            advanced = stream.offset_by(step)
            assert advanced.depth >= stream.depth
            assert (advanced.cursor.line, advanced.cursor.column) >= (
                stream.cursor.line,
                stream.cursor.column,
            )
            assert advanced.depth == advanced.offset
            stream = advanced

    @given(source=source_text, count=offsets)
    def test_cursor_matches_consumed_text(self, source: str, count: int) -> None:
        """PROPERTY: the cursor is the position after the consumed prefix."""
        stream = ParseStream.new(source).offset_by(count)
        assert stream.cursor == CursorPosition().advanced_over(source[: stream.offset])

    @given(source=dsl_text)
    def test_successful_parsers_never_move_backwards(self, source: str) -> None:
        """PROPERTY: a successful parser returns a stream at least as deep."""
        stream = ParseStream.new(source)
        for parser in (
            parse_identifier,
            parse_quoted_string,
            parse_unsigned,
            lambda s: parse_punct(s, "="),
            lambda s: parse_keyword(s, "entity"),
            parse_statement,
        ):
            result = parser(stream)
            if not isinstance(result, ParseFailure):
                assert result.stream.depth >= stream.depth

    @given(source=dsl_text)
    def test_failure_depth_is_within_input(self, source: str) -> None:
        """PROPERTY: a failure is never deeper than the input is long."""
        result = parse_statement(ParseStream.new(source))
        if isinstance(result, ParseFailure):
            assert 0 <= result.depth <= len(source)


# ============================================================================
# PROPERTY TESTS - BACKTRACKING
# ============================================================================


class TestBacktrackingNonInterference:
    """A failed attempt on a fork never affects the original stream."""

    @given(source=dsl_text, prefix=offsets)
    def test_failed_alternatives_do_not_disturb_stream(self, source: str, prefix: int) -> None:
        """PROPERTY: after any attempt the original stream is unchanged."""
        stream = ParseStream.new(source).offset_by(prefix)
        snapshot = (stream.offset, stream.cursor, stream.depth)

        alternatives(stream, parse_statement, parse_identifier, parse_quoted_string)

        assert (stream.offset, stream.cursor, stream.depth) == snapshot

    @given(source=dsl_text)
    def test_retrying_gives_identical_outcome(self, source: str) -> None:
        """PROPERTY: parsing is a pure function of the stream."""
        stream = ParseStream.new(source)
        assert parse_statement(stream) == parse_statement(stream)
