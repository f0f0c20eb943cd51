"""Lux lexer driver.

This module provides the Lexer class that runs the form-sequence rule of
:mod:`luxlex.syntax.lexer.rules` over a whole source text and turns the
outcome into tokens or a diagnostic.

Architecture:
    Lexing is a pure function of the source: one immutable
    :class:`~luxlex.syntax.cursor.Cursor` is created and threaded through
    every rule, each returning a
    :class:`~luxlex.syntax.cursor.ParseResult` or
    :class:`~luxlex.syntax.cursor.ParseFailure`. Only this module converts
    failures into exceptions, and only in the raising entry points.

Outcomes:
    - All input consumed: tokens, comments stripped at every depth
    - Input left over: UNCONSUMED_INPUT (e.g. a stray ')')
    - Committed failure inside a form: its own code (unknown escape,
      unbalanced delimiter, nesting depth, pattern failure)

Security:
    Includes configurable input size and nesting depth limits to prevent
    DoS via huge or deeply nested inputs.
"""

import logging
from dataclasses import dataclass, replace

from luxlex.constants import MAX_DEPTH, MAX_SOURCE_SIZE, SNIPPET_LENGTH
from luxlex.core import depth_clamp
from luxlex.diagnostics import Diagnostic, ErrorTemplate, SourceSpan
from luxlex.diagnostics.errors import error_for
from luxlex.syntax.cursor import Cursor, ParseFailure
from luxlex.syntax.lexer.rules import Grammar
from luxlex.syntax.tokens import Comment, List, Record, Token, Tuple

__all__ = ["LexResult", "Lexer", "strip_comments"]

logger = logging.getLogger(__name__)


def strip_comments(tokens: tuple[Token, ...]) -> tuple[Token, ...]:
    """Remove Comment tokens at every nesting level, preserving order.

    Args:
        tokens: Lexed tokens, possibly containing comments

    Returns:
        Tokens without comments; structural tokens are rebuilt with
        stripped members and keep their spans
    """
    kept: list[Token] = []
    for token in tokens:
        match token:
            case Comment():
                continue
            case List() | Tuple() | Record():
                kept.append(replace(token, members=strip_comments(token.members)))
            case _:
                kept.append(token)
    return tuple(kept)


@dataclass(frozen=True, slots=True)
class LexResult:
    """Outcome of lexing one source text.

    Attributes:
        tokens: Lexed tokens (empty when lexing failed)
        diagnostic: Why lexing failed, with source span; None on success

    Example:
        >>> result = Lexer().lex_result("(1 2")
        >>> result.is_ok
        False
        >>> result.diagnostic.code.name
        'UNBALANCED_DELIMITER'
    """

    tokens: tuple[Token, ...]
    diagnostic: Diagnostic | None = None

    @property
    def is_ok(self) -> bool:
        """True when the whole source lexed."""
        return self.diagnostic is None

    def unwrap(self) -> tuple[Token, ...]:
        """Return the tokens, raising the matching LuxSyntaxError on failure.

        Raises:
            LuxSyntaxError: Subclass chosen by the diagnostic code
        """
        if self.diagnostic is not None:
            raise error_for(self.diagnostic)
        return self.tokens


class Lexer:
    """Lux source lexer.

    Design:
    - Immutable cursor: every alternative of a choice starts from the same state
    - Failures are values until the driver boundary
    - All-or-nothing: no partial token sequence on failure

    Security:
    - Configurable max_source_size prevents DoS via large inputs
    - Configurable max_nesting_depth bounds recursion on ((((...)))) and
      nested block comments; clamped to what the interpreter stack allows

    Attributes:
        max_source_size: Maximum allowed source size in characters (default: 10 MB)
        max_nesting_depth: Maximum nesting of forms and block comments (default: 100)
    """

    __slots__ = ("_grammar", "_max_source_size")

    def __init__(
        self,
        *,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
    ) -> None:
        """Initialize lexer with optional size and nesting depth limits.

        Args:
            max_source_size: Maximum source size in characters (default: 10 MB).
                            Set to 0 to disable size limit (not recommended).
            max_nesting_depth: Maximum nesting depth (default: 100).
                              Clamped against sys.getrecursionlimit().
        """
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )
        requested_depth = (
            max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH
        )
        self._grammar = Grammar(depth_clamp(requested_depth))

    @property
    def max_source_size(self) -> int:
        """Maximum allowed source size in characters."""
        return self._max_source_size

    @property
    def max_nesting_depth(self) -> int:
        """Effective nesting depth limit (after clamping)."""
        return self._grammar.max_nesting_depth

    def lex(self, source: str) -> tuple[Token, ...]:
        """Lex source into tokens, comments removed.

        Args:
            source: Complete source of one compilation unit

        Returns:
            Tokens in source order

        Raises:
            ValueError: If source exceeds max_source_size
            LuxSyntaxError: If the source does not lex completely; the
                subclass names the cause (UnconsumedInputError,
                UnknownEscapeCharacterError, UnbalancedDelimiterError,
                NestingDepthExceededError, PatternFailureError)

        Example:
            >>> Lexer().lex("(+ 1 2) ## sum")
            (List(members=(Ident(text='+'), Int(text='1'), Int(text='2'))),)
        """
        return self.lex_result(source).unwrap()

    def lex_with_comments(self, source: str) -> tuple[Token, ...]:
        """Lex source into tokens, keeping Comment tokens at every depth.

        Raises:
            ValueError: If source exceeds max_source_size
            LuxSyntaxError: If the source does not lex completely
        """
        return self.lex_result(source, keep_comments=True).unwrap()

    def lex_result(self, source: str, *, keep_comments: bool = False) -> LexResult:
        """Lex source without raising on lexical errors.

        Args:
            source: Complete source of one compilation unit
            keep_comments: Keep Comment tokens instead of stripping them

        Returns:
            LexResult with tokens on success, or a diagnostic on failure

        Raises:
            ValueError: If source exceeds max_source_size (DoS prevention)
        """
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            msg = (
                f"Source size ({len(source):,} characters) exceeds maximum "
                f"({self._max_source_size:,} characters). "
                "Configure max_source_size in Lexer constructor to increase limit."
            )
            raise ValueError(msg)

        result = self._grammar.forms(Cursor(source, 0))

        if isinstance(result, ParseFailure):
            diagnostic = result.to_diagnostic()
            logger.debug("Lexing failed: %s", diagnostic.message)
            return LexResult((), diagnostic)

        rest = result.cursor
        if not rest.is_eof:
            line, col = rest.compute_line_col()
            diagnostic = ErrorTemplate.unconsumed_input(
                rest.slice_to(rest.pos + SNIPPET_LENGTH + 1),
                SourceSpan(start=rest.pos, end=len(source), line=line, column=col),
            )
            logger.debug("Lexing stopped early: %s", diagnostic.message)
            return LexResult((), diagnostic)

        tokens = result.value if keep_comments else strip_comments(result.value)
        logger.debug(
            "Lexed %d top-level forms from %d characters", len(tokens), len(source)
        )
        return LexResult(tokens)
