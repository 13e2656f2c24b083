"""Hypothesis property-based tests for the statement parser.

Generated well-formed sources parse to the expected statements; arbitrary
text either parses or fails with a single syntax error.
"""

import string

import pytest
from hypothesis import event, given, settings
from hypothesis import strategies as st

from ecslang.diagnostics import EcslangSyntaxError
from ecslang.syntax import parse, serialize
from ecslang.syntax.ast import EntityStatement, StructStatement

# ============================================================================
# HYPOTHESIS STRATEGIES
# ============================================================================

_KEYWORDS = frozenset({"entity", "fn", "extern", "struct", "ty", "macro", "operator", "mut", "x"})

identifiers = st.builds(
    lambda head, tail: head + tail,
    st.sampled_from(string.ascii_letters),
    st.text(alphabet=string.ascii_letters + string.digits, max_size=8),
).filter(lambda name: name not in _KEYWORDS)

type_names = st.builds(
    lambda sigils, name: sigils + name,
    st.sampled_from(["", "&", "&mut ", "*", "*mut ", "&*"]),
    identifiers,
)

whitespace = st.sampled_from([" ", "  ", "\n", "\t", " \n "])


class TestWellFormedSources:
    """Generated statements parse back."""

    @given(name=identifiers, components=st.lists(identifiers, min_size=1, max_size=6))
    def test_entity(self, name: str, components: list[str]) -> None:
        """PROPERTY: entity declarations keep their component order."""
        source = f"entity {name} = {' + '.join(components)};"
        (statement,) = parse(source)

        assert isinstance(statement, EntityStatement)
        assert [component.name for component in statement.components] == components

    @given(
        name=identifiers,
        fields=st.lists(st.tuples(identifiers, type_names), min_size=2, max_size=5),
        gap=whitespace,
    )
    def test_braced_struct(self, name: str, fields: list[tuple[str, str]], gap: str) -> None:
        """PROPERTY: braced struct fields parse in order whatever the layout."""
        body = f",{gap}".join(f"{field}: {ty}" for field, ty in fields)
        (statement,) = parse(f"struct {name} {{{gap}{body}{gap}}}")

        assert isinstance(statement, StructStatement)
        assert [field.name.name for field in statement.fields] == [field for field, _ in fields]

    @given(
        statements=st.lists(
            st.builds(
                lambda name, parts: f"entity {name} = {' + '.join(parts)};",
                identifiers,
                st.lists(identifiers, min_size=1, max_size=3),
            ),
            min_size=1,
            max_size=5,
        ),
        gap=whitespace,
    )
    def test_serialized_text_is_stable(self, statements: list[str], gap: str) -> None:
        """PROPERTY: serialize(parse(serialize(parse(s)))) == serialize(parse(s))."""
        once = serialize(parse(gap.join(statements)))

        assert serialize(parse(once)) == once


class TestArbitraryInput:
    """The parser never fails with anything but a syntax error."""

    @given(source=st.text(alphabet=string.printable, max_size=60))
    def test_printable_text(self, source: str) -> None:
        """PROPERTY: parse(text) returns statements or raises EcslangSyntaxError."""
        try:
            statements = parse(source)
        except EcslangSyntaxError as e:
            assert e.diagnostic is not None
            event("outcome=syntax_error")
        else:
            event(f"outcome=parsed_{len(statements)}")

    @given(
        source=st.text(alphabet="{}()\"#, abc=;\n", max_size=80),
    )
    def test_structural_characters(self, source: str) -> None:
        """PROPERTY: delimiter soup never escapes as another exception."""
        try:
            parse("fn f = " + source)
        except EcslangSyntaxError as e:
            assert e.diagnostic is not None
            event(f"code={e.diagnostic.code.name}")


# ============================================================================
# INTENSIVE (run with: pytest -m fuzz)
# ============================================================================


@pytest.mark.fuzz
class TestParserFuzz:
    """Long-running variants of the arbitrary input properties."""

    @settings(max_examples=5000, deadline=None)
    @given(source=st.text(max_size=200))
    def test_any_unicode_text(self, source: str) -> None:
        """PROPERTY: arbitrary Unicode never escapes as another exception."""
        try:
            parse(source)
        except EcslangSyntaxError as e:
            assert e.diagnostic is not None

    @settings(max_examples=2000, deadline=None)
    @given(depth=st.integers(min_value=0, max_value=300))
    def test_deep_nesting(self, depth: int) -> None:
        """PROPERTY: nesting depth never overflows the interpreter stack."""
        source = "fn f " + "{" * depth + "}" * depth
        try:
            parse(source)
        except EcslangSyntaxError as e:
            assert e.diagnostic is not None
