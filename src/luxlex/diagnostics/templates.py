"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from luxlex.constants import SNIPPET_LENGTH

from .codes import Diagnostic, DiagnosticCode, SourceSpan

__all__ = ["ErrorTemplate", "snippet"]


def snippet(remaining: str, limit: int = SNIPPET_LENGTH) -> str:
    """Quote the start of the unconsumed input for an error message.

    Args:
        remaining: Unconsumed suffix of the source
        limit: Maximum characters to quote

    Returns:
        repr() of the truncated text, or "end of input" when empty
    """
    if not remaining:
        return "end of input"
    if len(remaining) > limit:
        return repr(remaining[:limit]) + "..."
    return repr(remaining)


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This solves EM101/EM102 violations while providing:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases

    Every template accepts an optional span. Lexers build diagnostics
    without one (line:column is O(n) to compute); the driver attaches
    the span once a failure is final.
    """

    @staticmethod
    def pattern_failure(
        expected: tuple[str, ...],
        remaining: str,
        span: SourceSpan | None = None,
    ) -> Diagnostic:
        """No lexer matched at the current position.

        Args:
            expected: Literals or pattern names that would have matched
            remaining: Unconsumed input at the failure position

        Returns:
            Diagnostic for PATTERN_FAILURE
        """
        wanted = " or ".join(expected) if expected else "a form"
        msg = f"Expected {wanted}, found {snippet(remaining)}"
        return Diagnostic(
            code=DiagnosticCode.PATTERN_FAILURE,
            message=msg,
            span=span,
            expected=expected,
        )

    @staticmethod
    def unknown_escape_character(
        sequence: str, span: SourceSpan | None = None
    ) -> Diagnostic:
        """Unrecognized escape sequence in a char or string literal.

        Args:
            sequence: The two-character sequence starting with a backslash

        Returns:
            Diagnostic for UNKNOWN_ESCAPE_CHARACTER
        """
        msg = f"Unknown escape character: {sequence!r}"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_ESCAPE_CHARACTER,
            message=msg,
            span=span,
            hint=r"Supported escapes: \t \b \n \r \f \" \\",
        )

    @staticmethod
    def unbalanced_delimiter(
        opening: str, closing: str, span: SourceSpan | None = None
    ) -> Diagnostic:
        """Opening delimiter without a matching close before end of input.

        Args:
            opening: The opening delimiter, e.g. "(" or "#("
            closing: The delimiter that was never found

        Returns:
            Diagnostic for UNBALANCED_DELIMITER
        """
        msg = f"Unclosed '{opening}' at end of input"
        return Diagnostic(
            code=DiagnosticCode.UNBALANCED_DELIMITER,
            message=msg,
            span=span,
            hint=f"Add the matching '{closing}' or remove the opening '{opening}'",
            expected=(f"'{closing}'",),
        )

    @staticmethod
    def unconsumed_input(remaining: str, span: SourceSpan | None = None) -> Diagnostic:
        """Lexing stopped before end of input.

        Args:
            remaining: The input left over after the last complete form

        Returns:
            Diagnostic for UNCONSUMED_INPUT
        """
        msg = f"Unconsumed input: {snippet(remaining)}"
        return Diagnostic(
            code=DiagnosticCode.UNCONSUMED_INPUT,
            message=msg,
            span=span,
            hint="Check for a stray closing delimiter or an unsupported character",
        )

    @staticmethod
    def nesting_depth_exceeded(
        max_depth: int, span: SourceSpan | None = None
    ) -> Diagnostic:
        """Structural forms or block comments nested too deeply.

        Args:
            max_depth: The configured nesting limit

        Returns:
            Diagnostic for NESTING_DEPTH_EXCEEDED
        """
        msg = f"Maximum nesting depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.NESTING_DEPTH_EXCEEDED,
            message=msg,
            span=span,
            hint="Reduce nesting or raise max_nesting_depth on the Lexer",
        )
