"""Source loading for ecslang files.

Reads a source file from disk and parses it, so callers holding a path do
not need to open the file themselves.

Python 3.13+. Zero external dependencies.
"""

import logging
from pathlib import Path

from ecslang.syntax.ast import Statement
from ecslang.syntax.parser import StatementParser

logger = logging.getLogger(__name__)

__all__ = ["load_source", "parse_file", "parse_source"]

type SourcePath = str | Path


def load_source(path: SourcePath) -> str:
    """Read an ecslang file as UTF-8.

    Args:
        path: File to read

    Returns:
        ecslang source code

    Raises:
        FileNotFoundError: If file doesn't exist
        OSError: If file cannot be read
        UnicodeDecodeError: If file is not valid UTF-8
    """
    source = Path(path).read_text(encoding="utf-8")
    logger.debug("Loaded %d characters from %s", len(source), path)
    return source


def parse_source(
    source: str,
    filename: str = "<input>",
    *,
    parser: StatementParser | None = None,
) -> tuple[Statement, ...]:
    """Parse ecslang source text.

    Args:
        source: ecslang source code
        filename: Name shown in diagnostics
        parser: Configured parser (default: StatementParser())

    Returns:
        Statements in source order

    Raises:
        EcslangSyntaxError: On the first statement that does not parse
        ValueError: If source exceeds the parser's size limit

    Example:
        >>> statements = parse_source("struct Health hp: int")
        >>> statements[0].fields[0].ty.name.name
        'int'
    """
    if parser is None:
        parser = StatementParser()
    return parser.parse(source, filename)


def parse_file(
    path: SourcePath,
    *,
    parser: StatementParser | None = None,
) -> tuple[Statement, ...]:
    """Read and parse an ecslang file; diagnostics name the file as given.

    Raises:
        EcslangSyntaxError: On the first statement that does not parse
        OSError: If file cannot be read
        UnicodeDecodeError: If file is not valid UTF-8
    """
    return parse_source(load_source(path), str(path), parser=parser)
