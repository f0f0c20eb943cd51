"""Immutable cursor infrastructure for combinator lexing.

Implements the immutable cursor pattern: lexer state is a source string
plus an offset, and every step returns a NEW cursor. Alternatives in an
ordered choice therefore all start from the identical cursor object; no
alternative can disturb another's starting point.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - The unconsumed input is a view (source[pos:]), never a copy held in state
    - Nesting depth travels with the cursor, so recursion limits need no
      mutable counters
    - Line:column computed on-demand (O(n) only for errors)

Pattern Reference:
    - Rust nom parser combinator library
    - Haskell Parsec
    - F# FParsec
"""

import re
from dataclasses import dataclass, replace

from luxlex.diagnostics import Diagnostic, DiagnosticCode, SourceSpan

__all__ = ["Cursor", "ParseFailure", "ParseOutcome", "ParseResult"]


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Key Design Decisions:
        1. Frozen dataclass - Immutability enforced by Python
        2. Slots - Memory efficiency (one cursor per lexing step)
        3. Simple position - Just an integer offset
        4. Depth - Current nesting of structural forms and block comments

    Example:
        >>> cursor = Cursor("(a b)", 0)
        >>> cursor.remaining
        '(a b)'
        >>> inner = cursor.advance().enter()
        >>> inner.remaining, inner.depth
        ('a b)', 1)
        >>> cursor.pos  # Original unchanged (immutability)
        0
    """

    source: str
    pos: int
    depth: int = 0

    @property
    def is_eof(self) -> bool:
        """Check if at end of input."""
        return self.pos >= len(self.source)

    @property
    def remaining(self) -> str:
        """Unconsumed suffix of the source.

        Note:
            Copies the whole suffix. Lexers test input with startswith()/
            match(), and the driver quotes leftover input with a bounded
            slice_to(); this property is for inspection in tests and REPLs.
        """
        return self.source[self.pos :]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions.

        Args:
            count: Number of positions to advance (default: 1)

        Returns:
            New Cursor instance at new position (original unchanged)
        """
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos, self.depth)

    def startswith(self, prefix: str) -> bool:
        """Check whether the unconsumed input begins with prefix (no copy)."""
        return self.source.startswith(prefix, self.pos)

    def match(self, regex: re.Pattern[str]) -> re.Match[str] | None:
        """Match a compiled pattern anchored at the current position.

        Uses Pattern.match(source, pos) so no substring is allocated.
        Patterns must not rely on ``^``: with a non-zero pos it does not
        match at the cursor.
        """
        return regex.match(self.source, self.pos)

    def enter(self) -> "Cursor":
        """Return cursor one nesting level deeper."""
        return Cursor(self.source, self.pos, self.depth + 1)

    def leave(self) -> "Cursor":
        """Return cursor one nesting level shallower."""
        return Cursor(self.source, self.pos, max(0, self.depth - 1))

    def slice_to(self, end_pos: int) -> str:
        """Extract source slice from current position to end_pos."""
        return self.source[self.pos : end_pos]

    def compute_line_col(self) -> tuple[int, int]:
        """Compute line and column for current position.

        Returns:
            (line, column) tuple (1-indexed, like text editors)

        Performance:
            O(n) where n = current position
            Only call for error reporting, not during normal lexing!

        Example:
            >>> source = "line1\\nline2\\nline3"
            >>> Cursor(source, 0).compute_line_col()
            (1, 1)
            >>> Cursor(source, 8).compute_line_col()  # Middle of line2
            (2, 3)
        """
        line = self.source.count("\n", 0, self.pos) + 1
        last_newline = self.source.rfind("\n", 0, self.pos)
        col = self.pos - last_newline if last_newline >= 0 else self.pos + 1
        return (line, col)


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Successful lexer step: parsed value and the cursor after it.

    Type Parameters:
        T: The type of the parsed value

    Example:
        >>> cursor = Cursor("42 rest", 0)
        >>> result = ParseResult("42", cursor.advance(2))
        >>> result.value
        '42'
        >>> result.cursor.remaining
        ' rest'
    """

    value: T
    cursor: Cursor


@dataclass(frozen=True, slots=True)
class ParseFailure:
    """Failed lexer step.

    Design:
        - Stores cursor at the failure point (for line:column)
        - Carries a Diagnostic without span; to_diagnostic() adds it
        - committed=True means the input was recognised far enough that no
          other alternative may be tried: ordered choice, optional and
          repetition propagate it instead of recovering

    Example:
        >>> from luxlex.diagnostics import ErrorTemplate
        >>> cursor = Cursor("(1 2", 4)
        >>> failure = ParseFailure(ErrorTemplate.unbalanced_delimiter("(", ")"), cursor)
        >>> failure.to_diagnostic().span.column
        5
    """

    diagnostic: Diagnostic
    cursor: Cursor
    committed: bool = False

    @property
    def message(self) -> str:
        """Human-readable failure description."""
        return self.diagnostic.message

    @property
    def code(self) -> DiagnosticCode:
        """Diagnostic code of the failure."""
        return self.diagnostic.code

    @property
    def expected(self) -> tuple[str, ...]:
        """What the failing lexer expected to find."""
        return self.diagnostic.expected

    def commit(self) -> "ParseFailure":
        """Return this failure marked as committed."""
        if self.committed:
            return self
        return replace(self, committed=True)

    def to_diagnostic(self) -> Diagnostic:
        """Return the diagnostic with its source span attached."""
        line, col = self.cursor.compute_line_col()
        span = SourceSpan(
            start=self.cursor.pos, end=self.cursor.pos, line=line, column=col
        )
        return replace(self.diagnostic, span=span)


type ParseOutcome[T] = ParseResult[T] | ParseFailure
