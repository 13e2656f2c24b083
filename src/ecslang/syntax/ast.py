"""ecslang AST (Abstract Syntax Tree) node definitions.

Every node is an immutable frozen dataclass that owns its children through
tuples; there are no back-pointers and no sharing. The closed variant sets
(statements, expressions, type bodies, arguments) are union type aliases
whose members are the tagged variants.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import TypeIs

from ecslang.core.span import CursorPosition, Span
from ecslang.enums import Affix, FFILanguage, LiteralType

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Leaves
    "Ident",
    "QuotedString",
    # Types and signatures
    "XTimes",
    "Type",
    "TypedVariable",
    "TypedVariables",
    "Signature",
    # Expressions
    "CallExpr",
    "BlockExpr",
    "LiteralExpr",
    # Statements
    "EntityStatement",
    "FnStatement",
    "ExternFnStatement",
    "StructStatement",
    "EnumField",
    "StructTyBody",
    "EnumTyBody",
    "TyStatement",
    "LiteralMacroBody",
    "MacroStatement",
    "OperatorStatement",
    # Type aliases
    "Arg",
    "Expr",
    "TyBody",
    "Statement",
    # Guards
    "is_named_arg",
]

# ============================================================================
# LEAVES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Ident:
    """Identifier with the position of its first scalar value.

    Example:
        >>> Ident("Player", CursorPosition(1, 8)).span
        Span(start=CursorPosition(line=1, column=8), end=CursorPosition(line=1, column=14))
    """

    name: str
    start: CursorPosition

    @property
    def span(self) -> Span:
        return Span.with_extra_column(self.start, len(self.name))


@dataclass(frozen=True, slots=True)
class QuotedString:
    """Double-quoted string.

    ``value`` is the raw interior text: escape sequences are kept as written.
    ``start`` is the position just after the opening quote.
    """

    value: str
    start: CursorPosition

    @property
    def span(self) -> Span:
        """Span including both quotes."""
        return Span(
            self.start.extend_column_by(-1),
            self.start.advanced_over(self.value).extend_column_by(1),
        )


# ============================================================================
# TYPES AND SIGNATURES
# ============================================================================


@dataclass(frozen=True, slots=True)
class XTimes[T]:
    """An item with a multiplicity suffix: ``T x N``.

    ``times`` is 1 when the suffix was omitted.
    """

    item: T
    times: int = 1


@dataclass(frozen=True, slots=True)
class Type:
    """Type expression: ``&mut &*mut Name``.

    Attributes:
        refs: One flag per ``&`` sigil, True when followed by ``mut``
        ptrs: One flag per ``*`` sigil, True when followed by ``mut``
        name: Type name
        span: Source range of the whole type expression
    """

    refs: tuple[bool, ...]
    ptrs: tuple[bool, ...]
    name: Ident
    span: Span

    def is_pure(self) -> bool:
        """True when the type has neither references nor pointers."""
        return not self.refs and not self.ptrs


@dataclass(frozen=True, slots=True)
class TypedVariable:
    """``name: Type``"""

    name: Ident
    ty: Type

    @property
    def span(self) -> Span:
        return Span(self.name.start, self.ty.span.end)


@dataclass(frozen=True, slots=True)
class TypedVariables:
    """Several same-typed names: ``x y z: Type``"""

    names: tuple[Ident, ...]
    ty: Type

    @property
    def span(self) -> Span:
        return Span(self.names[0].start, self.ty.span.end)


type Arg = TypedVariables | XTimes[Type]
"""Named (``x y: T``) or unnamed (``T`` / ``T x N``) parameter."""


@dataclass(frozen=True, slots=True)
class Signature:
    """``(args) -> return_ty``"""

    args: tuple[Arg, ...]
    return_ty: Type | None = None


# ============================================================================
# EXPRESSIONS
# ============================================================================


@dataclass(frozen=True, slots=True)
class CallExpr:
    """``fun(arg, arg)``"""

    fun: Ident
    args: tuple["Expr", ...]


@dataclass(frozen=True, slots=True)
class BlockExpr:
    """``{ expr expr }``"""

    expressions: tuple["Expr", ...]


@dataclass(frozen=True, slots=True)
class LiteralExpr:
    """String literal used as an expression."""

    literal: QuotedString


type Expr = CallExpr | BlockExpr | LiteralExpr


# ============================================================================
# STATEMENTS
# ============================================================================


@dataclass(frozen=True, slots=True)
class EntityStatement:
    """``entity Player = Health + Position;``"""

    name: Ident
    components: tuple[Ident, ...]


@dataclass(frozen=True, slots=True)
class FnStatement:
    """``fn add(x y: int) -> int = sum(x, y)``

    ``signature`` is None for the short form ``fn name = expr``.
    """

    name: Ident
    signature: Signature | None
    body: Expr


@dataclass(frozen=True, slots=True)
class ExternFnStatement:
    """``extern clang puts(&str) -> int``"""

    lang: FFILanguage
    name: Ident
    signature: Signature


@dataclass(frozen=True, slots=True)
class StructStatement:
    """``struct Position { x: float, y: float }`` or ``struct Health hp: int``"""

    name: Ident
    fields: tuple[TypedVariable, ...]


@dataclass(frozen=True, slots=True)
class EnumField:
    """Variant of an enum ``ty`` body: ``None`` or ``Some i32``."""

    name: Ident
    attached_type: Type | None = None


@dataclass(frozen=True, slots=True)
class StructTyBody:
    """``x: T + y: T``"""

    fields: tuple[TypedVariable, ...]


@dataclass(frozen=True, slots=True)
class EnumTyBody:
    """``None | Some i32`` (ends its line)"""

    fields: tuple[EnumField, ...]


type TyBody = StructTyBody | EnumTyBody


@dataclass(frozen=True, slots=True)
class TyStatement:
    """``ty Option = None | Some i32``"""

    name: Ident
    body: TyBody


@dataclass(frozen=True, slots=True)
class LiteralMacroBody:
    """Literal overload shared by ``macro`` and ``operator`` statements.

    ``prefix "0x"(int) -> int = parse_hex()``
    """

    affix: Affix
    literal: QuotedString
    literal_type: LiteralType
    return_ty: Type | None
    body: Expr


@dataclass(frozen=True, slots=True)
class MacroStatement:
    """``macro <literal body>``"""

    body: LiteralMacroBody


@dataclass(frozen=True, slots=True)
class OperatorStatement:
    """``operator <literal body>``"""

    body: LiteralMacroBody


type Statement = (
    EntityStatement
    | FnStatement
    | ExternFnStatement
    | StructStatement
    | TyStatement
    | MacroStatement
    | OperatorStatement
)


def is_named_arg(arg: Arg) -> TypeIs[TypedVariables]:
    """Type guard separating named parameters from unnamed ones."""
    return isinstance(arg, TypedVariables)
