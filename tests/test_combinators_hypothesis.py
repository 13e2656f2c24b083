"""Hypothesis property-based tests for the structural combinators.

Tests the punctuated round-trip and the zero-allowed boundary.
"""

import string

from hypothesis import given
from hypothesis import strategies as st

from ecslang.syntax.cursor import ParseFailure, ParseResult, ParseStream
from ecslang.syntax.parser.combinators import punctuated, x_times
from ecslang.syntax.parser.primitives import parse_identifier

# ============================================================================
# HYPOTHESIS STRATEGIES
# ============================================================================

identifiers = st.builds(
    lambda head, tail: head + tail,
    st.sampled_from(string.ascii_letters),
    st.text(alphabet=string.ascii_letters + string.digits, max_size=8),
)

separators = st.sampled_from(["+", ",", "|"])

padding = st.sampled_from(["", " ", "  ", "\n", " \t "])


class TestPunctuatedRoundTrip:
    """Joining identifiers with a separator and parsing yields them back."""

    @given(
        names=st.lists(identifiers, min_size=1, max_size=10),
        separator=separators,
        before=padding,
        after=padding,
    )
    def test_round_trip(self, names: list[str], separator: str, before: str, after: str) -> None:
        """PROPERTY: punctuated(join(items, sep)) == items."""
        source = (before + separator + after).join(names)
        result = punctuated(ParseStream.new(source), parse_identifier, separator)

        assert isinstance(result, ParseResult)
        assert [ident.name for ident in result.value] == names
        assert result.stream.is_empty()

    @given(separator=separators, rest=padding)
    def test_empty_input_respects_zero_allowed(self, separator: str, rest: str) -> None:
        """PROPERTY: empty sequences succeed iff zero is allowed."""
        stream = ParseStream.new(rest + ";")

        allowed = punctuated(stream, parse_identifier, separator, zero_allowed=True)
        required = punctuated(stream, parse_identifier, separator)

        assert isinstance(allowed, ParseResult)
        assert allowed.value == ()
        assert isinstance(required, ParseFailure)
        assert required.expected.startswith("at least one ")


class TestXTimesProperties:
    """Multiplicity suffix properties."""

    @given(name=identifiers.filter(lambda name: name != "x"), amount=st.integers(1, 255))
    def test_amount_round_trip(self, name: str, amount: int) -> None:
        """PROPERTY: `T x N` parses to (T, N) for every N in 1..=255."""
        result = x_times(ParseStream.new(f"{name} x {amount}"), parse_identifier)

        assert isinstance(result, ParseResult)
        assert result.value.item.name == name
        assert result.value.times == amount
