"""ecslang exception hierarchy with structured diagnostics.

Parsing itself never raises: failures travel as ``ParseFailure`` values.
These exceptions mark the boundary where one failure becomes the single
diagnostic reported for an invocation.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class EcslangError(Exception):
    """Base exception for all ecslang errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize EcslangError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class EcslangSyntaxError(EcslangError):
    """Source text does not match the grammar.

    Raised once per parse, for the first unrecovered failure. There is no
    recovery: the statements parsed before the failure are discarded.
    """
