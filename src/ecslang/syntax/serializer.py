"""Serialize ecslang statements back to source text.

Converts statement nodes to ecslang source code. Useful for:
- Formatters
- Code generators
- Property-based testing (roundtrip: parse → serialize → parse)

Python 3.13+.
"""

from collections.abc import Iterable

from ecslang.constants import DEFAULT_INTEGER_BITS, MAX_INDIRECTION

from .ast import (
    Arg,
    BlockExpr,
    CallExpr,
    EntityStatement,
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
    TyStatement,
    Type,
    TypedVariable,
    is_named_arg,
)

__all__ = ["SerializationValidationError", "StatementSerializer", "serialize"]


class SerializationValidationError(ValueError):
    """Raised when node validation fails during serialization.

    This error indicates the nodes would produce text the parser rejects.
    Common causes:
    - Entity without components, struct or ty body without fields
    - Multiplicity outside 1..=255
    - More than 8 reference or pointer sigils
    """


def _validate_type(ty: Type, context: str) -> None:
    if len(ty.refs) > MAX_INDIRECTION or len(ty.ptrs) > MAX_INDIRECTION:
        msg = f"{context}: type '{ty.name.name}' has more than {MAX_INDIRECTION} sigils"
        raise SerializationValidationError(msg)


def _validate_signature(signature: Signature, context: str) -> None:
    for arg in signature.args:
        if is_named_arg(arg):
            _validate_type(arg.ty, context)
            continue
        if not 1 <= arg.times < 1 << DEFAULT_INTEGER_BITS:
            msg = f"{context}: multiplicity {arg.times} is out of range"
            raise SerializationValidationError(msg)
        _validate_type(arg.item, context)
    if signature.return_ty is not None:
        _validate_type(signature.return_ty, context)


def _require_items(items: tuple[object, ...], context: str, what: str) -> None:
    if not items:
        msg = f"{context}: at least one {what} is required"
        raise SerializationValidationError(msg)


def _validate_statement(statement: Statement) -> None:
    """Validate one statement.

    Raises:
        SerializationValidationError: If the statement cannot be written as parseable text
    """
    match statement:
        case EntityStatement():
            _require_items(statement.components, f"entity '{statement.name.name}'", "component")
        case FnStatement():
            if statement.signature is not None:
                _validate_signature(statement.signature, f"fn '{statement.name.name}'")
        case ExternFnStatement():
            _validate_signature(statement.signature, f"extern fn '{statement.name.name}'")
        case StructStatement():
            context = f"struct '{statement.name.name}'"
            _require_items(statement.fields, context, "field")
            for field in statement.fields:
                _validate_type(field.ty, context)
        case TyStatement():
            context = f"ty '{statement.name.name}'"
            _require_items(statement.body.fields, context, "field")
            if isinstance(statement.body, StructTyBody):
                for field in statement.body.fields:
                    _validate_type(field.ty, context)
            else:
                for variant in statement.body.fields:
                    if variant.attached_type is not None:
                        _validate_type(variant.attached_type, context)
        case MacroStatement() | OperatorStatement():
            if statement.body.return_ty is not None:
                _validate_type(statement.body.return_ty, "literal macro")


class StatementSerializer:
    """Converts statements back to ecslang source string.

    Thread-safe serializer with no mutable instance state.
    All serialization state is local to the serialize() call.

    Usage:
        >>> from ecslang.syntax import parse, StatementSerializer
        >>> statements = parse("entity Player=Health+Position;")
        >>> print(StatementSerializer().serialize(statements))
        entity Player = Health + Position;
    """

    def serialize(self, statements: Iterable[Statement], *, validate: bool = False) -> str:
        """Serialize statements to an ecslang string, one statement per line.

        Args:
            statements: Statement nodes in source order
            validate: If True, validate nodes before serialization (default: False)

        Returns:
            ecslang source code

        Raises:
            SerializationValidationError: If validate=True and a node is invalid
        """
        statements = tuple(statements)
        if validate:
            for statement in statements:
                _validate_statement(statement)

        output: list[str] = []
        for statement in statements:
            self._serialize_statement(statement, output)
            output.append("\n")
        return "".join(output)

    def _serialize_statement(self, statement: Statement, output: list[str]) -> None:
        """Serialize a top-level statement."""
        match statement:
            case EntityStatement():
                components = " + ".join(component.name for component in statement.components)
                output.append(f"entity {statement.name.name} = {components};")

            case FnStatement():
                output.append(f"fn {statement.name.name}")
                if statement.signature is not None:
                    self._serialize_signature(statement.signature, output)
                self._serialize_body(statement.body, output)

            case ExternFnStatement():
                output.append(f"extern {statement.lang} {statement.name.name}")
                self._serialize_signature(statement.signature, output)

            case StructStatement():
                output.append(f"struct {statement.name.name} ")
                if len(statement.fields) == 1:
                    self._serialize_typed_variable(statement.fields[0], output)
                else:
                    output.append("{ ")
                    self._serialize_joined(statement.fields, ", ", output)
                    output.append(" }")

            case TyStatement():
                output.append(f"ty {statement.name.name} = ")
                self._serialize_ty_body(statement.body, output)

            case MacroStatement():
                output.append("macro ")
                self._serialize_literal_body(statement.body, output)

            case OperatorStatement():
                output.append("operator ")
                self._serialize_literal_body(statement.body, output)

    def _serialize_ty_body(self, body: StructTyBody | EnumTyBody, output: list[str]) -> None:
        match body:
            case StructTyBody():
                self._serialize_joined(body.fields, " + ", output)
            case EnumTyBody():
                for i, variant in enumerate(body.fields):
                    if i > 0:
                        output.append(" | ")
                    output.append(variant.name.name)
                    if variant.attached_type is not None:
                        output.append(" ")
                        self._serialize_type(variant.attached_type, output)

    def _serialize_literal_body(self, body: LiteralMacroBody, output: list[str]) -> None:
        output.append(f'{body.affix} "{body.literal.value}"({body.literal_type})')
        if body.return_ty is not None:
            output.append(" -> ")
            self._serialize_type(body.return_ty, output)
        self._serialize_body(body.body, output)

    def _serialize_joined(
        self, fields: tuple[TypedVariable, ...], separator: str, output: list[str]
    ) -> None:
        for i, field in enumerate(fields):
            if i > 0:
                output.append(separator)
            self._serialize_typed_variable(field, output)

    def _serialize_typed_variable(self, field: TypedVariable, output: list[str]) -> None:
        output.append(f"{field.name.name}: ")
        self._serialize_type(field.ty, output)

    def _serialize_type(self, ty: Type, output: list[str]) -> None:
        """Serialize Type: ``&mut &*mut Name``."""
        for sigil, flags in (("&", ty.refs), ("*", ty.ptrs)):
            for mutable in flags:
                output.append(f"{sigil}mut " if mutable else sigil)
        output.append(ty.name.name)

    def _serialize_arg(self, arg: Arg, output: list[str]) -> None:
        if is_named_arg(arg):
            output.append(" ".join(name.name for name in arg.names))
            output.append(": ")
            self._serialize_type(arg.ty, output)
            return
        self._serialize_type(arg.item, output)
        if arg.times != 1:
            output.append(f" x {arg.times}")

    def _serialize_signature(self, signature: Signature, output: list[str]) -> None:
        output.append("(")
        for i, arg in enumerate(signature.args):
            if i > 0:
                output.append(", ")
            self._serialize_arg(arg, output)
        output.append(")")
        if signature.return_ty is not None:
            output.append(" -> ")
            self._serialize_type(signature.return_ty, output)

    def _serialize_body(self, body: Expr, output: list[str]) -> None:
        """Serialize function body: blocks directly, anything else after ``=``."""
        if isinstance(body, BlockExpr):
            output.append(" ")
        else:
            output.append(" = ")
        self._serialize_expression(body, output)

    def _serialize_expression(self, expr: Expr, output: list[str]) -> None:
        """Serialize Expr nodes using structural pattern matching."""
        match expr:
            case CallExpr():
                output.append(f"{expr.fun.name}(")
                for i, arg in enumerate(expr.args):
                    if i > 0:
                        output.append(", ")
                    self._serialize_expression(arg, output)
                output.append(")")

            case BlockExpr():
                output.append("{ ")
                for inner in expr.expressions:
                    self._serialize_expression(inner, output)
                    output.append(" ")
                output.append("}")

            case LiteralExpr():
                # Escapes are stored raw, so the value is written back verbatim.
                output.append(f'"{expr.literal.value}"')


def serialize(statements: Iterable[Statement], *, validate: bool = False) -> str:
    """Serialize statements to an ecslang string.

    Convenience function for StatementSerializer.serialize().

    Args:
        statements: Statement nodes in source order
        validate: If True, validate nodes before serialization (default: False)

    Returns:
        ecslang source code

    Raises:
        SerializationValidationError: If validate=True and a node is invalid

    Example:
        >>> from ecslang.syntax import parse, serialize
        >>> serialize(parse("fn main() { }"))
        'fn main() { }\\n'
    """
    return StatementSerializer().serialize(statements, validate=validate)
