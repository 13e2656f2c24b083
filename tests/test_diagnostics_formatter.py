"""Tests for Diagnostic construction and DiagnosticFormatter output styles."""

import json

import pytest

from ecslang.core.span import CursorPosition, Span
from ecslang.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    EcslangError,
    EcslangSyntaxError,
    OutputFormat,
    ParseFailure,
)
from ecslang.syntax import parse

ZERO_COMPONENTS = "entity Player = ;"


def _diagnostic(source: str, filename: str = "player.ecs") -> Diagnostic:
    with pytest.raises(EcslangSyntaxError) as excinfo:
        parse(source, filename)
    assert excinfo.value.diagnostic is not None
    return excinfo.value.diagnostic


# ============================================================================
# DIAGNOSTIC
# ============================================================================


class TestDiagnosticFromFailure:
    """Test building the user-facing report from a failure."""

    def test_message_quotes_offending_text(self) -> None:
        failure = ParseFailure(Span(CursorPosition(1, 8), CursorPosition(1, 14)), 7, "`=`")
        diagnostic = Diagnostic.from_failure(failure, "entity Player = ;", "a.ecs")

        assert diagnostic.message == "unexpected token `Player`"
        assert diagnostic.clarifying == "expected `=`"
        assert diagnostic.position == CursorPosition(1, 8)

    def test_eof_points_past_last_character(self) -> None:
        failure = ParseFailure(Span.EOF, 5, "`;`")
        diagnostic = Diagnostic.from_failure(failure, "a\nbcd", "a.ecs")

        assert diagnostic.code is DiagnosticCode.UNEXPECTED_EOF
        assert diagnostic.message == "unexpected token `<EOF>`"
        assert diagnostic.position == CursorPosition(2, 4)
        assert diagnostic.excerpt == ((2, "bcd", " "),)

    def test_multi_line_excerpt(self) -> None:
        source = "fn f() {\n  a()\n}"
        failure = ParseFailure(Span(CursorPosition(1, 8), CursorPosition(2, 6)), 7, "x")
        diagnostic = Diagnostic.from_failure(failure, source, "a.ecs")

        assert [number for number, _, _ in diagnostic.excerpt] == [1, 2]

    def test_str_is_message(self) -> None:
        diagnostic = _diagnostic(ZERO_COMPONENTS)

        assert str(diagnostic) == "unexpected token `;`"

    def test_error_message_is_rendered_diagnostic(self) -> None:
        with pytest.raises(EcslangSyntaxError) as excinfo:
            parse(ZERO_COMPONENTS, "player.ecs")

        assert "--> player.ecs:1:17" in str(excinfo.value)

    def test_plain_message_error(self) -> None:
        error = EcslangError("plain")

        assert error.diagnostic is None
        assert str(error) == "plain"


# ============================================================================
# FORMATTER
# ============================================================================


class TestRustFormat:
    """Test the compiler-style report."""

    def test_layout(self) -> None:
        output = DiagnosticFormatter().format(_diagnostic(ZERO_COMPONENTS))

        assert output.splitlines() == [
            "error: unexpected token `;`:",
            " --> player.ecs:1:17",
            "  |",
            "1 | entity Player = ;",
            "  |" + " " * 17 + "^ expected at least one ident",
        ]

    def test_caret_width_covers_token(self) -> None:
        output = DiagnosticFormatter().format(_diagnostic("entity Player == Health;"))

        assert "^^ expected `=`" in output

    def test_help_lines(self) -> None:
        output = DiagnosticFormatter().format(_diagnostic("entity Player == Health;"))

        assert "  = help: `==` is read as a single token" in output

    def test_eof_position(self) -> None:
        output = DiagnosticFormatter().format(_diagnostic("entity Player = Health"))

        assert " --> player.ecs:1:23" in output
        assert "unexpected token `<EOF>`" in output

    def test_gutter_grows_with_line_number(self) -> None:
        source = "\n" * 9 + ZERO_COMPONENTS
        output = DiagnosticFormatter().format(_diagnostic(source))

        assert "10 | entity Player = ;" in output.splitlines()
        assert "  --> player.ecs:10:17" in output.splitlines()

    def test_continuation_carets_start_at_the_stick(self) -> None:
        failure = ParseFailure(Span(CursorPosition(1, 8), CursorPosition(2, 4)), 7, "x")
        diagnostic = Diagnostic.from_failure(failure, "fn f() {\nabc d\n}", "a.ecs")
        output = DiagnosticFormatter().format(diagnostic)

        assert output.splitlines()[3:] == [
            "1 | fn f() {",
            "  |" + " " * 8 + "^",
            "2 | abc d",
            "  |^^^ expected x",
        ]

    def test_without_color_has_no_escape_codes(self) -> None:
        output = DiagnosticFormatter(color=False).format(_diagnostic(ZERO_COMPONENTS))

        assert "\033[" not in output

    def test_color_accents_quoted_token(self) -> None:
        output = DiagnosticFormatter(color=True).format(_diagnostic(ZERO_COMPONENTS))

        assert "\033[1;32m`;`\033[0m" in output
        assert "\033[1;91merror\033[0m" in output


class TestSimpleFormat:
    """Test the single-line report."""

    def test_single_line(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)

        assert formatter.format(_diagnostic(ZERO_COMPONENTS)) == (
            "player.ecs:1:17: error: unexpected token `;` (expected at least one ident)"
        )


class TestJsonFormat:
    """Test the tooling report."""

    def test_fields(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)
        data = json.loads(formatter.format(_diagnostic(ZERO_COMPONENTS)))

        assert data["code"] == "UNEXPECTED_TOKEN"
        assert data["code_value"] == 1001
        assert data["filename"] == "player.ecs"
        assert (data["line"], data["column"]) == (1, 17)
        assert (data["end_line"], data["end_column"]) == (1, 18)
        assert data["eof"] is False
        assert data["expected"] == "expected at least one ident"

    def test_eof_has_no_end(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)
        data = json.loads(formatter.format(_diagnostic("entity Player = Health")))

        assert data["eof"] is True
        assert "end_line" not in data
        assert data["code"] == "UNEXPECTED_EOF"
