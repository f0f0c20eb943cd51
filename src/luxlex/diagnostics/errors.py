"""luxlex exception hierarchy with structured diagnostics.

All exceptions store Diagnostic objects for rich error information.
The lexer itself never raises these mid-parse: failures travel as
ParseFailure values and are converted here only at the driver boundary.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = [
    "LuxError",
    "LuxSyntaxError",
    "NestingDepthExceededError",
    "PatternFailureError",
    "UnbalancedDelimiterError",
    "UnconsumedInputError",
    "UnknownEscapeCharacterError",
    "error_for",
]


class LuxError(Exception):
    """Base exception for all luxlex errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LuxError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class LuxSyntaxError(LuxError):
    """Source text could not be lexed.

    Lexing is all-or-nothing: no partial token sequence accompanies
    this error.
    """


class PatternFailureError(LuxSyntaxError):
    """No lexer matched at the reported position."""


class UnbalancedDelimiterError(PatternFailureError):
    """An opening delimiter reached end of input without its close.

    Example:
        (1 2        ← missing ')'
        #( note     ← missing ')#'
    """


class UnknownEscapeCharacterError(LuxSyntaxError):
    """Unrecognized backslash escape inside a char or string literal.

    Example:
        "tab\\x"    ← \\x is not an escape
    """


class UnconsumedInputError(LuxSyntaxError):
    """Lexing stopped before the end of input.

    Typically a stray closing delimiter such as a lone ')'.
    """


class NestingDepthExceededError(LuxSyntaxError):
    """Structural forms or block comments nested beyond the configured limit."""


_ERRORS_BY_CODE: dict[DiagnosticCode, type[LuxSyntaxError]] = {
    DiagnosticCode.PATTERN_FAILURE: PatternFailureError,
    DiagnosticCode.UNKNOWN_ESCAPE_CHARACTER: UnknownEscapeCharacterError,
    DiagnosticCode.UNBALANCED_DELIMITER: UnbalancedDelimiterError,
    DiagnosticCode.UNCONSUMED_INPUT: UnconsumedInputError,
    DiagnosticCode.NESTING_DEPTH_EXCEEDED: NestingDepthExceededError,
}


def error_for(diagnostic: Diagnostic) -> LuxSyntaxError:
    """Build the exception matching a diagnostic's code.

    Args:
        diagnostic: Diagnostic produced by a failed lex

    Returns:
        Exception instance (not raised) carrying the diagnostic
    """
    return _ERRORS_BY_CODE[diagnostic.code](diagnostic)
