"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]

# ANSI styles. Purely cosmetic: stripping them leaves the same text.
_RESET = "\033[0m"
_BOLD = "\033[1m"
_BRIGHT_RED_BOLD = "\033[1;91m"
_RED = "\033[31m"
_BLUE_BOLD = "\033[1;34m"
_GREEN_BOLD = "\033[1;32m"

_ACCENT_MARK = "`"


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Rust compiler-style output with source excerpt (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Attributes:
        output_format: Output style (rust, simple, json)
        color: Enable ANSI color codes (for terminal output)

    Example:
        >>> formatter = DiagnosticFormatter()
        >>> print(formatter.format(diagnostic))
        error: unexpected token `;`:
         --> player.ecs:1:17
          |
        1 | entity Player = ;
          |                 ^ expected at least one ident

        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(diagnostic))
        player.ecs:1:17: error: unexpected token `;` (expected at least one ident)
    """

    output_format: OutputFormat = OutputFormat.RUST
    color: bool = False

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Formatted diagnostic string
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def _style(self, text: str, style: str) -> str:
        if not self.color or not text:
            return text
        return f"{style}{text}{_RESET}"

    def _accented(self, text: str, default_style: str) -> str:
        """Render the first backtick-quoted segment of ``text`` with the accent style.

        The backticks themselves belong to the accented segment. An unpaired
        backtick accents everything after it.
        """
        start = text.find(_ACCENT_MARK)
        if start == -1:
            return self._style(text, default_style)

        end = text.find(_ACCENT_MARK, start + len(_ACCENT_MARK))
        end = len(text) if end == -1 else end + len(_ACCENT_MARK)

        return (
            self._style(text[:start], default_style)
            + self._style(text[start:end], _GREEN_BOLD)
            + self._style(text[end:], default_style)
        )

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in Rust compiler style.

        Example output:
            error: unexpected token `==`:
             --> main.ecs:3:7
              |
            3 | entity == Health;
              |        ^^ expected ident
              = help: ...
        """
        rows = diagnostic.excerpt
        position = diagnostic.position
        widest = max(number for number, _, _ in rows)
        gutter = " " * (len(str(widest)) + 1)
        stick = self._style("|", _BLUE_BOLD)

        header = (
            self._style("error", _BRIGHT_RED_BOLD)
            + self._style(":", _BOLD)
            + " "
            + self._accented(diagnostic.message, _BOLD)
            + self._style(":", _BOLD)
        )
        parts = [
            header,
            f"{gutter[1:]}{self._style('-->', _BLUE_BOLD)} {diagnostic.filename}:{position}",
            f"{gutter}{stick}",
        ]

        for index, (number, full_line, covered) in enumerate(rows):
            label = str(number)
            padding = " " * (len(gutter) - len(label) - 1)
            parts.append(
                f"{padding}{self._style(label, _BLUE_BOLD)} {stick} {self._style(full_line, _RED)}"
            )
            caret_offset = " " * position.column if index == 0 else ""
            carets = self._style("^" * max(len(covered), 1), _BRIGHT_RED_BOLD)
            parts.append(f"{gutter}{stick}{caret_offset}{carets}")

        parts[-1] += " " + self._accented(diagnostic.clarifying, _BRIGHT_RED_BOLD)

        for line in diagnostic.help:
            parts.append(f"{gutter}= {self._style('help', _BOLD)}: {line}")

        return "\n".join(parts)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in single-line format.

        Example output:
            main.ecs:1:17: error: unexpected token `;` (expected at least one ident)
        """
        return (
            f"{diagnostic.filename}:{diagnostic.position}: error: "
            f"{diagnostic.message} ({diagnostic.clarifying})"
        )

    def _format_json(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic as JSON.

        Example output:
            {"code": "UNEXPECTED_EOF", "message": "...", "line": 1, ...}
        """
        import json  # noqa: PLC0415

        position = diagnostic.position
        data: dict[str, str | int | bool | list[str]] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": diagnostic.message,
            "expected": diagnostic.clarifying,
            "filename": diagnostic.filename,
            "line": position.line,
            "column": position.column,
            "eof": diagnostic.span.is_eof,
            "help": list(diagnostic.help),
        }

        if not diagnostic.span.is_eof:
            data["end_line"] = diagnostic.span.end.line
            data["end_column"] = diagnostic.span.end.column

        return json.dumps(data, ensure_ascii=False)
