"""ecslang syntax package.

Provides the cursor stream, parser, AST definitions, comment preprocessing
and serialization.

Python 3.13+.
"""

from .ast import (
    Arg,
    BlockExpr,
    CallExpr,
    EntityStatement,
    EnumField,
    EnumTyBody,
    Expr,
    ExternFnStatement,
    FnStatement,
    Ident,
    LiteralExpr,
    LiteralMacroBody,
    MacroStatement,
    OperatorStatement,
    QuotedString,
    Signature,
    Statement,
    StructStatement,
    StructTyBody,
    TyBody,
    TyStatement,
    Type,
    TypedVariable,
    TypedVariables,
    XTimes,
)
from .comments import strip_comments
from .cursor import Parsed, ParseResult, ParseStream
from .parser import StatementParser
from .serializer import SerializationValidationError, StatementSerializer, serialize

__all__ = [
    "Arg",
    "BlockExpr",
    "CallExpr",
    "EntityStatement",
    "EnumField",
    "EnumTyBody",
    "Expr",
    "ExternFnStatement",
    "FnStatement",
    "Ident",
    "LiteralExpr",
    "LiteralMacroBody",
    "MacroStatement",
    "OperatorStatement",
    "ParseResult",
    "ParseStream",
    "Parsed",
    "QuotedString",
    "SerializationValidationError",
    "Signature",
    "Statement",
    "StatementParser",
    "StatementSerializer",
    "StructStatement",
    "StructTyBody",
    "TyBody",
    "TyStatement",
    "Type",
    "TypedVariable",
    "TypedVariables",
    "XTimes",
    "parse",
    "serialize",
    "strip_comments",
]


def parse(source: str, filename: str = "<input>") -> tuple[Statement, ...]:
    """Parse ecslang source into statements.

    Convenience function for StatementParser.parse().

    Args:
        source: ecslang source code
        filename: Name shown in diagnostics

    Returns:
        Statements in source order

    Example:
        >>> from ecslang.syntax import parse
        >>> statements = parse("entity Player = Health + Position;")
        >>> [component.name for component in statements[0].components]
        ['Health', 'Position']
    """
    return StatementParser().parse(source, filename)
