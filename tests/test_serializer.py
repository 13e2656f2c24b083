"""Tests for the statement serializer.

Validates serialization of statements back to ecslang source text.
"""

import pytest

from ecslang.core.span import CursorPosition, Span
from ecslang.syntax import parse, serialize
from ecslang.syntax.ast import (
    EntityStatement,
    FnStatement,
    Ident,
    LiteralExpr,
    QuotedString,
    Signature,
    StructStatement,
    Type,
    XTimes,
)
from ecslang.syntax.serializer import SerializationValidationError, StatementSerializer

_HERE = CursorPosition()


def _ident(name: str) -> Ident:
    return Ident(name, _HERE)


def _type(name: str, refs: tuple[bool, ...] = (), ptrs: tuple[bool, ...] = ()) -> Type:
    return Type(refs, ptrs, _ident(name), Span(_HERE, _HERE))


def _normalized(source: str) -> str:
    return serialize(parse(source))


# ============================================================================
# BASIC SERIALIZATION TESTS
# ============================================================================


class TestSerializerBasic:
    """Test basic serializer functionality."""

    def test_serialize_nothing(self) -> None:
        assert serialize(()) == ""

    def test_serializer_class_directly(self) -> None:
        statements = parse("entity Player=Health+Position;")

        assert StatementSerializer().serialize(statements) == (
            "entity Player = Health + Position;\n"
        )

    def test_accepts_any_iterable(self) -> None:
        statements = parse("entity A = B;\nentity C = D;")

        assert serialize(iter(statements)) == "entity A = B;\nentity C = D;\n"


# ============================================================================
# STATEMENT FORMS
# ============================================================================


class TestSerializeStatements:
    """Each statement form is written in its normalized spelling."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("fn add(x y:int)->int=sum(x(),y())", "fn add(x y: int) -> int = sum(x(), y())"),
            ("fn main(){}", "fn main() { }"),
            ('fn main() { print("a") {} }', 'fn main() { print("a") { } }'),
            ('fn greeting = "hi"', 'fn greeting = "hi"'),
            ("extern clang puts(&str)->int", "extern clang puts(&str) -> int"),
            ("struct Health hp:int", "struct Health hp: int"),
            ("struct P {x:float,y:float}", "struct P { x: float, y: float }"),
            ("ty Vec2 = x:float+y:float", "ty Vec2 = x: float + y: float"),
            ("ty Option = None|Some i32", "ty Option = None | Some i32"),
            (
                'macro suffix "km"(x: float) -> float = km()',
                'macro suffix "km"(float) -> float = km()',
            ),
            ('operator prefix "!"(int) { not() }', 'operator prefix "!"(int) { not() }'),
            ('macro prefix "r"(&str) = raw()', 'macro prefix "r"(&str) = raw()'),
        ],
    )
    def test_normalized_spelling(self, source: str, expected: str) -> None:
        assert _normalized(source) == expected + "\n"

    def test_unnamed_multiplicity_kept(self) -> None:
        assert _normalized("extern clang f(int x 3)") == "extern clang f(int x 3)\n"

    def test_mutable_sigils(self) -> None:
        assert _normalized("extern clang f(&mut &*mut *u8)") == (
            "extern clang f(&mut &*mut *u8)\n"
        )

    def test_escapes_written_back_verbatim(self) -> None:
        assert _normalized(r'fn f = "say \"hi\""') == 'fn f = "say \\"hi\\""\n'


class TestSerializerRoundTrip:
    """Serialized text parses back to the same normalized text."""

    SOURCE = (
        "#( game )#\n"
        "struct Health hp: int\n"
        "struct Position { x: float, y: float }\n"
        "ty Option = None | Some &mut *T\n"
        "entity Player = Health + Position;\n"
        "extern clang puts(&str) -> int\n"
        'macro suffix "km"(float) -> float = km()\n'
        'fn main() { puts("hi") { spawn() } }\n'
    )

    def test_idempotent(self) -> None:
        once = _normalized(self.SOURCE)

        assert _normalized(once) == once

    def test_statement_count_preserved(self) -> None:
        assert len(parse(_normalized(self.SOURCE))) == len(parse(self.SOURCE))


# ============================================================================
# VALIDATION
# ============================================================================


class TestSerializerValidation:
    """Test validate=True."""

    def test_entity_without_components(self) -> None:
        statement = EntityStatement(_ident("Player"), ())

        with pytest.raises(SerializationValidationError, match="at least one component"):
            serialize([statement], validate=True)

    def test_struct_without_fields(self) -> None:
        statement = StructStatement(_ident("Empty"), ())

        with pytest.raises(SerializationValidationError, match="at least one field"):
            serialize([statement], validate=True)

    def test_zero_multiplicity(self) -> None:
        signature = Signature((XTimes(_type("int"), 0),))
        statement = FnStatement(_ident("f"), signature, LiteralExpr(QuotedString("", _HERE)))

        with pytest.raises(SerializationValidationError, match="multiplicity 0"):
            serialize([statement], validate=True)

    def test_too_many_sigils(self) -> None:
        signature = Signature((), _type("T", refs=(False,) * 9))
        statement = FnStatement(_ident("f"), signature, LiteralExpr(QuotedString("", _HERE)))

        with pytest.raises(SerializationValidationError, match="more than 8 sigils"):
            serialize([statement], validate=True)

    def test_invalid_nodes_serialize_without_validation(self) -> None:
        statement = EntityStatement(_ident("Player"), ())

        assert serialize([statement]) == "entity Player = ;\n"

    def test_error_is_value_error(self) -> None:
        assert issubclass(SerializationValidationError, ValueError)
