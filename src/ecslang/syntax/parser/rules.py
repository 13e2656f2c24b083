"""Grammar rules for the ecslang parser.

This module provides all parsing rules for ecslang grammar constructs:
- Type parsing (reference and pointer sigils with mutability, type names)
- Signature parsing (named and unnamed parameters, return type)
- Expression parsing (calls, blocks, string literals)
- Statement parsing (entity, fn, extern, struct, ty, macro, operator)

All grammar rules are co-located in a single module because expressions and
statements refer to each other; keeping them together avoids circular
imports and function-local imports.

Disambiguation:
    Statements and expressions are closed variant sets resolved by ordered
    alternation (see :mod:`~ecslang.syntax.parser.alternation`). Inside a
    production, single-character lookahead picks a branch where the grammar
    allows it:
    - ``(`` after a ``fn`` name starts a signature
    - ``{`` after a ``struct`` name starts a braced field list
    - a field of an enum ``ty`` body only takes a type on the same line

Security:
    Includes configurable nesting depth limit to prevent RecursionError on
    deeply nested expressions (e.g., ``{ { { { ... } } } }``).
"""

import logging
from dataclasses import dataclass

from ecslang.constants import MAX_DEPTH, MAX_INDIRECTION
from ecslang.core.span import Span
from ecslang.diagnostics import ErrorTemplate
from ecslang.enums import Affix, FFILanguage, LiteralType
from ecslang.syntax.ast import (
    Arg,
    BlockExpr,
    CallExpr,
    EntityStatement,
    EnumField,
    EnumTyBody,
    Expr,
    ExternFnStatement,
    FnStatement,
    LiteralExpr,
    LiteralMacroBody,
    MacroStatement,
    OperatorStatement,
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
    is_named_arg,
)
from ecslang.syntax.cursor import Parsed, ParseFailure, ParseResult, ParseStream
from ecslang.syntax.parser.alternation import alternatives
from ecslang.syntax.parser.combinators import (
    embraced,
    one_or_more,
    punctuated,
    x_times,
)
from ecslang.syntax.parser.primitives import (
    parse_identifier,
    parse_keyword,
    parse_line_end,
    parse_punct,
    parse_quoted_string,
    parse_sigil,
)

logger = logging.getLogger(__name__)

__all__ = [
    "ParseContext",
    "parse_arg",
    "parse_block_expr",
    "parse_call_expr",
    "parse_entity",
    "parse_expr",
    "parse_extern_fn",
    "parse_fn",
    "parse_literal_body",
    "parse_macro",
    "parse_operator",
    "parse_signature",
    "parse_statement",
    "parse_struct",
    "parse_ty",
    "parse_type",
    "parse_typed_variable",
    "parse_typed_variables",
]

_MUT_KEYWORD = "mut"
_REFERENCE_SIGIL = "&"
_POINTER_SIGIL = "*"


@dataclass(frozen=True, slots=True)
class ParseContext:
    """Explicit context for parsing operations.

    Attributes:
        max_nesting_depth: Maximum allowed nesting depth for expressions
        current_depth: Current nesting depth (0 = statement level)
    """

    max_nesting_depth: int = MAX_DEPTH
    current_depth: int = 0

    def is_depth_exceeded(self) -> bool:
        """Check if maximum nesting depth has been exceeded."""
        return self.current_depth >= self.max_nesting_depth

    def enter_expression(self) -> "ParseContext":
        """Create new context with incremented depth for a nested expression."""
        return ParseContext(
            max_nesting_depth=self.max_nesting_depth,
            current_depth=self.current_depth + 1,
        )


# =============================================================================
# Type Parsing
# =============================================================================


def _parse_indirection(stream: ParseStream, sigil: str) -> Parsed[tuple[bool, ...]]:
    """Parse a run of ``sigil`` each optionally followed by ``mut``.

    Returns one mutability flag per sigil. More than ``MAX_INDIRECTION``
    sigils fail with a span on the extra sigil.
    """
    flags: list[bool] = []
    while True:
        consumed = parse_sigil(stream, sigil)
        if isinstance(consumed, ParseFailure):
            return ParseResult(tuple(flags), stream)
        stream = consumed.stream

        if len(flags) >= MAX_INDIRECTION:
            return ErrorTemplate.too_many_sigils(
                Span.with_shrunk_column(stream.cursor, len(sigil)), stream.depth, sigil
            )

        mutable = parse_keyword(stream, _MUT_KEYWORD)
        if isinstance(mutable, ParseFailure):
            flags.append(False)
        else:
            flags.append(True)
            stream = mutable.stream


def parse_type(stream: ParseStream) -> Parsed[Type]:
    """Parse type: references, then pointers, then a name.

    Examples:
        int → Type((), (), int)
        &mut &str → Type((True, False), (), str)
        *mut u8 → Type((), (True,), u8)
    """
    stream = stream.trim()
    start = stream.cursor

    refs = _parse_indirection(stream, _REFERENCE_SIGIL)
    if isinstance(refs, ParseFailure):
        return refs

    ptrs = _parse_indirection(refs.stream, _POINTER_SIGIL)
    if isinstance(ptrs, ParseFailure):
        return ptrs

    name = parse_identifier(ptrs.stream)
    if isinstance(name, ParseFailure):
        return name

    end = name.stream.cursor
    return ParseResult(Type(refs.value, ptrs.value, name.value, Span(start, end)), name.stream)


def parse_typed_variable(stream: ParseStream) -> Parsed[TypedVariable]:
    """Parse ``name: Type``."""
    name = parse_identifier(stream)
    if isinstance(name, ParseFailure):
        return name

    colon = parse_punct(name.stream, ":")
    if isinstance(colon, ParseFailure):
        return colon

    ty = parse_type(colon.stream)
    if isinstance(ty, ParseFailure):
        return ty

    return ParseResult(TypedVariable(name.value, ty.value), ty.stream)


def parse_typed_variables(stream: ParseStream) -> Parsed[TypedVariables]:
    """Parse ``x y z: Type``: one or more names sharing a type."""
    names = one_or_more(stream, parse_identifier)
    if isinstance(names, ParseFailure):
        return names

    colon = parse_punct(names.stream, ":")
    if isinstance(colon, ParseFailure):
        return colon

    ty = parse_type(colon.stream)
    if isinstance(ty, ParseFailure):
        return ty

    return ParseResult(TypedVariables(names.value, ty.value), ty.stream)


# =============================================================================
# Signature Parsing
# =============================================================================


def _parse_unnamed_arg(stream: ParseStream) -> Parsed[XTimes[Type]]:
    return x_times(stream, parse_type, default_allowed=True)


def parse_arg(stream: ParseStream) -> Parsed[Arg]:
    """Parse parameter: named (``x y: T``) first, then unnamed (``T x N``)."""
    return alternatives(stream, parse_typed_variables, _parse_unnamed_arg)


def parse_signature(stream: ParseStream) -> Parsed[Signature]:
    """Parse ``(args) -> return_ty``; the return type is optional.

    Examples:
        (x y: int) -> int
        (&str, int x 3)
        ()
    """
    args = embraced(stream, "(", ")", parse_arg, ",", zero_allowed=True)
    if isinstance(args, ParseFailure):
        return args
    stream = args.stream

    arrow = parse_punct(stream, "->")
    if isinstance(arrow, ParseFailure):
        return ParseResult(Signature(args.value), stream)

    return_ty = parse_type(arrow.stream)
    if isinstance(return_ty, ParseFailure):
        return return_ty

    return ParseResult(Signature(args.value, return_ty.value), return_ty.stream)


# =============================================================================
# Expression Parsing
# =============================================================================


def _nesting_too_deep(stream: ParseStream, opening: str, context: ParseContext) -> ParseFailure:
    """Fail past the ``opening`` character of an expression nested too deeply.

    The failure sits after the opening character, so it is deeper than the
    enclosing expression's own failures and survives alternation.
    """
    opened = parse_sigil(stream, opening)
    if isinstance(opened, ParseFailure):
        return opened

    logger.warning(
        "Expression nesting exceeds %d levels at %s",
        context.max_nesting_depth,
        opened.value.start,
    )
    return ErrorTemplate.nesting_too_deep(
        opened.value, opened.stream.depth, context.max_nesting_depth
    )


def parse_call_expr(stream: ParseStream, context: ParseContext) -> Parsed[CallExpr]:
    """Parse call expression: ``fun(arg, arg)``.

    Arguments are expressions; an empty argument list is allowed.
    """
    fun = parse_identifier(stream)
    if isinstance(fun, ParseFailure):
        return fun

    if context.is_depth_exceeded():
        return _nesting_too_deep(fun.stream, "(", context)

    nested = context.enter_expression()
    args = embraced(
        fun.stream,
        "(",
        ")",
        lambda inner: parse_expr(inner, nested),
        ",",
        zero_allowed=True,
    )
    if isinstance(args, ParseFailure):
        return args

    return ParseResult(CallExpr(fun.value, args.value), args.stream)


def parse_block_expr(stream: ParseStream, context: ParseContext) -> Parsed[BlockExpr]:
    """Parse block expression: ``{ expr expr ... }``."""
    if context.is_depth_exceeded():
        return _nesting_too_deep(stream, "{", context)

    nested = context.enter_expression()
    expressions = embraced(
        stream,
        "{",
        "}",
        lambda inner: parse_expr(inner, nested),
        None,
        zero_allowed=True,
    )
    if isinstance(expressions, ParseFailure):
        return expressions

    return ParseResult(BlockExpr(expressions.value), expressions.stream)


def _parse_literal_expr(stream: ParseStream) -> Parsed[LiteralExpr]:
    literal = parse_quoted_string(stream)
    if isinstance(literal, ParseFailure):
        return literal
    return ParseResult(LiteralExpr(literal.value), literal.stream)


def parse_expr(stream: ParseStream, context: ParseContext | None = None) -> Parsed[Expr]:
    """Parse expression: call, block or string literal (ordered alternation)."""
    if context is None:
        context = ParseContext()

    return alternatives(
        stream,
        lambda inner: parse_call_expr(inner, context),
        lambda inner: parse_block_expr(inner, context),
        _parse_literal_expr,
    )


def _parse_body(stream: ParseStream, context: ParseContext) -> Parsed[Expr]:
    """Parse function body: ``= expr`` or a block."""
    equals = parse_punct(stream, "=")
    if isinstance(equals, ParseFailure):
        return parse_block_expr(stream, context)
    return parse_expr(equals.stream, context)


# =============================================================================
# Statement Parsing
# =============================================================================


def parse_entity(stream: ParseStream, context: ParseContext) -> Parsed[EntityStatement]:  # noqa: ARG001
    """Parse entity declaration: ``entity Player = Health + Position;``"""
    keyword = parse_keyword(stream, "entity")
    if isinstance(keyword, ParseFailure):
        return keyword

    name = parse_identifier(keyword.stream)
    if isinstance(name, ParseFailure):
        return name

    equals = parse_punct(name.stream, "=")
    if isinstance(equals, ParseFailure):
        return equals

    components = punctuated(equals.stream, parse_identifier, "+")
    if isinstance(components, ParseFailure):
        return components

    semicolon = parse_punct(components.stream, ";")
    if isinstance(semicolon, ParseFailure):
        return semicolon

    return ParseResult(EntityStatement(name.value, components.value), semicolon.stream)


def parse_fn(stream: ParseStream, context: ParseContext) -> Parsed[FnStatement]:
    """Parse function definition.

    Examples:
        fn add(x y: int) -> int = sum(x, y)
        fn main() { print("hi") }
        fn greeting = "hello"
    """
    keyword = parse_keyword(stream, "fn")
    if isinstance(keyword, ParseFailure):
        return keyword

    name = parse_identifier(keyword.stream)
    if isinstance(name, ParseFailure):
        return name
    stream = name.stream

    signature: Signature | None = None
    if stream.trim().startswith("("):
        parsed_signature = parse_signature(stream)
        if isinstance(parsed_signature, ParseFailure):
            return parsed_signature
        signature = parsed_signature.value
        stream = parsed_signature.stream

    body = _parse_body(stream, context)
    if isinstance(body, ParseFailure):
        return body

    return ParseResult(FnStatement(name.value, signature, body.value), body.stream)


def _parse_ffi_language(stream: ParseStream) -> Parsed[FFILanguage]:
    trimmed = stream.trim()
    name = parse_identifier(trimmed)
    if isinstance(name, ParseFailure):
        return ErrorTemplate.expected_ffi_language(name.span, name.depth)

    try:
        language = FFILanguage(name.value.name)
    except ValueError:
        return ErrorTemplate.expected_ffi_language(name.value.span, trimmed.depth)

    return ParseResult(language, name.stream)


def parse_extern_fn(stream: ParseStream, context: ParseContext) -> Parsed[ExternFnStatement]:  # noqa: ARG001
    """Parse foreign function declaration: ``extern clang puts(&str) -> int``"""
    keyword = parse_keyword(stream, "extern")
    if isinstance(keyword, ParseFailure):
        return keyword

    language = _parse_ffi_language(keyword.stream)
    if isinstance(language, ParseFailure):
        return language

    name = parse_identifier(language.stream)
    if isinstance(name, ParseFailure):
        return name

    signature = parse_signature(name.stream)
    if isinstance(signature, ParseFailure):
        return signature

    statement = ExternFnStatement(language.value, name.value, signature.value)
    return ParseResult(statement, signature.stream)


def parse_struct(stream: ParseStream, context: ParseContext) -> Parsed[StructStatement]:  # noqa: ARG001
    """Parse struct declaration.

    Examples:
        struct Position { x: float, y: float }
        struct Health hp: int
    """
    keyword = parse_keyword(stream, "struct")
    if isinstance(keyword, ParseFailure):
        return keyword

    name = parse_identifier(keyword.stream)
    if isinstance(name, ParseFailure):
        return name
    stream = name.stream

    if stream.trim().startswith("{"):
        fields = embraced(stream, "{", "}", parse_typed_variable, ",")
        if isinstance(fields, ParseFailure):
            return fields
        return ParseResult(StructStatement(name.value, fields.value), fields.stream)

    field = parse_typed_variable(stream)
    if isinstance(field, ParseFailure):
        return field
    return ParseResult(StructStatement(name.value, (field.value,)), field.stream)


def _parse_struct_ty_body(stream: ParseStream) -> Parsed[StructTyBody]:
    fields = punctuated(stream, parse_typed_variable, "+")
    if isinstance(fields, ParseFailure):
        return fields
    return ParseResult(StructTyBody(fields.value), fields.stream)


def _parse_enum_field(stream: ParseStream) -> Parsed[EnumField]:
    """Parse variant ``Name`` or ``Name Type``; the type must share the line."""
    name = parse_identifier(stream)
    if isinstance(name, ParseFailure):
        return name
    stream = name.stream

    if stream.at_line_end():
        return ParseResult(EnumField(name.value), stream)

    attached = parse_type(stream)
    if isinstance(attached, ParseFailure):
        return ParseResult(EnumField(name.value), stream)
    return ParseResult(EnumField(name.value, attached.value), attached.stream)


def _parse_enum_ty_body(stream: ParseStream) -> Parsed[EnumTyBody]:
    fields = punctuated(stream, _parse_enum_field, "|")
    if isinstance(fields, ParseFailure):
        return fields

    line_end = parse_line_end(fields.stream)
    if isinstance(line_end, ParseFailure):
        return line_end

    return ParseResult(EnumTyBody(fields.value), line_end.stream)


def _parse_ty_body(stream: ParseStream) -> Parsed[TyBody]:
    return alternatives(stream, _parse_struct_ty_body, _parse_enum_ty_body)


def parse_ty(stream: ParseStream, context: ParseContext) -> Parsed[TyStatement]:  # noqa: ARG001
    """Parse type declaration.

    Examples:
        ty Vec2 = x: float + y: float
        ty Option = None | Some i32
    """
    keyword = parse_keyword(stream, "ty")
    if isinstance(keyword, ParseFailure):
        return keyword

    name = parse_identifier(keyword.stream)
    if isinstance(name, ParseFailure):
        return name

    equals = parse_punct(name.stream, "=")
    if isinstance(equals, ParseFailure):
        return equals

    body = _parse_ty_body(equals.stream)
    if isinstance(body, ParseFailure):
        return body

    return ParseResult(TyStatement(name.value, body.value), body.stream)


def _parse_affix(stream: ParseStream) -> Parsed[Affix]:
    for affix in Affix:
        keyword = parse_keyword(stream, affix.value)
        if not isinstance(keyword, ParseFailure):
            return ParseResult(affix, keyword.stream)
    return keyword.with_custom_expected("`prefix` or `suffix`")


def _arg_span(arg: Arg) -> Span:
    if is_named_arg(arg):
        return arg.span
    return arg.item.span


def _literal_type_of(ty: Type) -> LiteralType | None:
    """Map ``&str``, ``char``, ``float`` and ``int`` to their literal type."""
    if ty.refs == (False,) and not ty.ptrs and ty.name.name == "str":
        return LiteralType.STRING
    if not ty.is_pure():
        return None
    match ty.name.name:
        case "char":
            return LiteralType.CHAR
        case "float":
            return LiteralType.FLOAT
        case "int":
            return LiteralType.INT
        case _:
            return None


def parse_literal_body(stream: ParseStream, context: ParseContext) -> Parsed[LiteralMacroBody]:
    """Parse literal overload: ``prefix "0x"(int) -> int = parse_hex()``

    The signature must declare exactly one argument of a literal type.
    """
    affix = _parse_affix(stream)
    if isinstance(affix, ParseFailure):
        return affix

    literal = parse_quoted_string(affix.stream)
    if isinstance(literal, ParseFailure):
        return literal

    signature = parse_signature(literal.stream)
    if isinstance(signature, ParseFailure):
        return signature
    stream = signature.stream
    args = signature.value.args

    if len(args) != 1:
        span = (
            Span.with_extra_column(literal.value.span.end, 1) if not args else _arg_span(args[1])
        )
        return ErrorTemplate.single_affix_argument(span, stream.depth)

    arg = args[0]
    if is_named_arg(arg):
        if len(arg.names) != 1:
            return ErrorTemplate.single_affix_argument(arg.span, stream.depth)
        ty = arg.ty
    else:
        if arg.times != 1:
            return ErrorTemplate.single_affix_argument(arg.item.span, stream.depth)
        ty = arg.item

    literal_type = _literal_type_of(ty)
    if literal_type is None:
        return ErrorTemplate.unsupported_literal_type(ty.span, stream.depth)

    body = _parse_body(stream, context)
    if isinstance(body, ParseFailure):
        return body

    macro_body = LiteralMacroBody(
        affix.value,
        literal.value,
        literal_type,
        signature.value.return_ty,
        body.value,
    )
    return ParseResult(macro_body, body.stream)


def parse_macro(stream: ParseStream, context: ParseContext) -> Parsed[MacroStatement]:
    """Parse macro declaration: ``macro suffix "km"(float) -> float = km()``"""
    keyword = parse_keyword(stream, "macro")
    if isinstance(keyword, ParseFailure):
        return keyword

    body = parse_literal_body(keyword.stream, context)
    if isinstance(body, ParseFailure):
        return body

    return ParseResult(MacroStatement(body.value), body.stream)


def parse_operator(stream: ParseStream, context: ParseContext) -> Parsed[OperatorStatement]:
    """Parse operator declaration: ``operator prefix "!"(int) -> int = not()``"""
    keyword = parse_keyword(stream, "operator")
    if isinstance(keyword, ParseFailure):
        return keyword

    body = parse_literal_body(keyword.stream, context)
    if isinstance(body, ParseFailure):
        return body

    return ParseResult(OperatorStatement(body.value), body.stream)


# Declaration order is the alternation order.
_STATEMENT_RULES = (
    parse_entity,
    parse_fn,
    parse_extern_fn,
    parse_struct,
    parse_ty,
    parse_macro,
    parse_operator,
)


def parse_statement(stream: ParseStream, context: ParseContext | None = None) -> Parsed[Statement]:
    """Parse one top-level statement.

    When no statement form matches, the deepest failure among all forms is
    returned.
    """
    if context is None:
        context = ParseContext()

    return alternatives(
        stream,
        *(lambda inner, rule=rule: rule(inner, context) for rule in _STATEMENT_RULES),
    )
