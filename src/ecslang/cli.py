"""Command line front end.

Parses one ecslang file. On success the exit status is 0 (and, with
``--print``, the statements are written back to stdout as normalized
source). On failure the single diagnostic is written to stderr and the exit
status is 1.
"""

import argparse
import logging
import os
import sys
from typing import TextIO

from ecslang.diagnostics import DiagnosticFormatter, EcslangSyntaxError, OutputFormat
from ecslang.loading import parse_file
from ecslang.syntax.serializer import serialize

logger = logging.getLogger(__name__)

__all__ = ["main"]

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

_COLOR_CHOICES = ("auto", "always", "never")


def _use_color(choice: str, stream: TextIO) -> bool:
    """Resolve ``--color``: ``auto`` honours NO_COLOR and whether ``stream`` is a terminal."""
    match choice:
        case "always":
            return True
        case "never":
            return False
        case _:
            if os.environ.get("NO_COLOR"):
                return False
            isatty = getattr(stream, "isatty", None)
            return bool(isatty and isatty())


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="ecslang", description="Parse an ecslang source file")
    ap.add_argument("file", help="Source file to parse")
    ap.add_argument(
        "--format",
        choices=[output_format.value for output_format in OutputFormat],
        default=OutputFormat.RUST.value,
        help="Diagnostic output format (default: rust)",
    )
    ap.add_argument(
        "--color",
        choices=_COLOR_CHOICES,
        default="auto",
        help="Colorize diagnostics (default: auto)",
    )
    ap.add_argument(
        "--print",
        action="store_true",
        dest="print_source",
        help="Print the parsed statements as normalized source",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        statements = parse_file(args.file)
    except EcslangSyntaxError as e:
        formatter = DiagnosticFormatter(
            output_format=OutputFormat(args.format),
            color=_use_color(args.color, sys.stderr),
        )
        if e.diagnostic is not None:
            print(formatter.format(e.diagnostic), file=sys.stderr)
        else:
            print(f"error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except (OSError, UnicodeDecodeError, ValueError) as e:
        logger.debug("Reading %s failed", args.file, exc_info=True)
        print(f"error: {args.file}: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if args.print_source:
        sys.stdout.write(serialize(statements))
    return EXIT_SUCCESS
