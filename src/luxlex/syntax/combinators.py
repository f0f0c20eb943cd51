"""Monadic lexer combinators over the immutable cursor.

A parser is any callable taking a Cursor and returning a ParseOutcome:
either ParseResult(value, new_cursor) or ParseFailure. Combinators build
new parsers from existing ones; none of them mutate a cursor, so every
alternative of an ordered choice sees the same starting state.

Failure Semantics:
    Plain failures are local: ordered_choice tries the next alternative,
    optional succeeds with NOTHING, repeat_zero_or_more stops. A failure
    marked committed (see ParseFailure.commit) is never recovered from;
    these three combinators return it unchanged so it reaches the driver.

Termination:
    repeat_zero_or_more stops when its parser succeeds without consuming
    input. Parsers that can succeed on empty input (optional(...), patterns
    with ``*``) are still legal inside it; they simply end the repetition.

Python 3.13+. Zero external dependencies.
"""

import re
from collections.abc import Callable
from enum import Enum
from typing import Literal

from luxlex.constants import SNIPPET_LENGTH
from luxlex.diagnostics import ErrorTemplate

from .cursor import Cursor, ParseFailure, ParseOutcome, ParseResult
from .tokens import Span

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Types
    "Parser",
    "Nothing",
    "NOTHING",
    # Result constructors
    "succeed",
    "fail",
    "pure",
    # Core combinators
    "sequence",
    "transform",
    "optional",
    "repeat_zero_or_more",
    "ordered_choice",
    "commit",
    # Derived combinators
    "preceded_by",
    "followed_by",
    "between",
    "located",
    # Matchers
    "literal",
    "pattern",
    "close_delimiter",
]

type Parser[T] = Callable[[Cursor], ParseOutcome[T]]


class Nothing(Enum):
    """Marker value produced by optional() when its parser did not match."""

    NOTHING = "nothing"

    def __repr__(self) -> str:
        return "NOTHING"


NOTHING = Nothing.NOTHING


# =============================================================================
# Result constructors
# =============================================================================


def succeed[T](cursor: Cursor, value: T) -> ParseResult[T]:
    """Build a successful outcome at cursor."""
    return ParseResult(value, cursor)


def fail(cursor: Cursor, *expected: str, committed: bool = False) -> ParseFailure:
    """Build a pattern failure at cursor.

    Args:
        cursor: Position where nothing matched
        *expected: Display names of what would have matched, e.g. "'('"
        committed: Whether the failure must bypass ordered choice

    Returns:
        ParseFailure quoting the start of the unconsumed input
    """
    # One extra character lets the template know whether to add "..."
    ahead = cursor.source[cursor.pos : cursor.pos + SNIPPET_LENGTH + 1]
    return ParseFailure(
        ErrorTemplate.pattern_failure(expected, ahead), cursor, committed
    )


def pure[T](value: T) -> Parser[T]:
    """Parser that succeeds with value without consuming input."""

    def run(cursor: Cursor) -> ParseOutcome[T]:
        return ParseResult(value, cursor)

    return run


# =============================================================================
# Core combinators
# =============================================================================


def sequence[T, U](
    parser: Parser[T], continuation: Callable[[T], Parser[U]]
) -> Parser[U]:
    """Monadic bind: run parser, then the parser built from its value.

    State threads strictly left to right: the second parser starts where
    the first stopped. A failure from either step is returned unchanged.
    """

    def run(cursor: Cursor) -> ParseOutcome[U]:
        result = parser(cursor)
        if isinstance(result, ParseFailure):
            return result
        return continuation(result.value)(result.cursor)

    return run


def transform[T, U](parser: Parser[T], fn: Callable[[T], U]) -> Parser[U]:
    """Map fn over the success value of parser."""

    def run(cursor: Cursor) -> ParseOutcome[U]:
        result = parser(cursor)
        if isinstance(result, ParseFailure):
            return result
        return ParseResult(fn(result.value), result.cursor)

    return run


def optional[T](parser: Parser[T]) -> Parser[T | Literal[Nothing.NOTHING]]:
    """Run parser; on plain failure succeed with NOTHING, consuming nothing."""

    def run(cursor: Cursor) -> ParseOutcome[T | Literal[Nothing.NOTHING]]:
        result = parser(cursor)
        if isinstance(result, ParseFailure):
            if result.committed:
                return result
            return ParseResult(NOTHING, cursor)
        return result

    return run


def repeat_zero_or_more[T](parser: Parser[T]) -> Parser[tuple[T, ...]]:
    """Apply parser greedily, collecting values until it fails.

    The final failed attempt consumes nothing: the result cursor is the
    one after the last success. Iterative, so long runs do not grow the
    call stack.
    """

    def run(cursor: Cursor) -> ParseOutcome[tuple[T, ...]]:
        values: list[T] = []
        while True:
            result = parser(cursor)
            if isinstance(result, ParseFailure):
                if result.committed:
                    return result
                break
            if result.cursor.pos == cursor.pos:
                break
            values.append(result.value)
            cursor = result.cursor
        return ParseResult(tuple(values), cursor)

    return run


def ordered_choice[T](*parsers: Parser[T]) -> Parser[T]:
    """PEG ordered choice: first alternative to succeed wins.

    Every alternative runs against the same starting cursor. When all of
    them fail, the last alternative's failure is returned.

    Raises:
        ValueError: If called without alternatives
    """
    if not parsers:
        msg = "ordered_choice requires at least one alternative"
        raise ValueError(msg)

    def run(cursor: Cursor) -> ParseOutcome[T]:
        for parser in parsers:
            result = parser(cursor)
            if isinstance(result, ParseResult) or result.committed:
                return result
        return result

    return run


def commit[T](parser: Parser[T]) -> Parser[T]:
    """Mark every failure of parser as committed."""

    def run(cursor: Cursor) -> ParseOutcome[T]:
        result = parser(cursor)
        if isinstance(result, ParseFailure):
            return result.commit()
        return result

    return run


# =============================================================================
# Derived combinators
# =============================================================================


def preceded_by[T](leader: Parser[object], parser: Parser[T]) -> Parser[T]:
    """Run leader then parser, keeping parser's value."""
    return sequence(leader, lambda _: parser)


def followed_by[T](parser: Parser[T], trailer: Parser[object]) -> Parser[T]:
    """Run parser then trailer, keeping parser's value."""
    return sequence(parser, lambda value: transform(trailer, lambda _: value))


def between[T](
    opening: Parser[object], parser: Parser[T], closing: Parser[object]
) -> Parser[T]:
    """Run opening, parser, closing; keep parser's value."""
    return preceded_by(opening, followed_by(parser, closing))


def located[T, U](parser: Parser[T], build: Callable[[T, Span], U]) -> Parser[U]:
    """Build a value from parser's result and the span it consumed.

    Token classes take (text, span) positionally, so they can be passed
    directly as build: located(pattern(INT_RE, "integer"), Int).
    """

    def run(cursor: Cursor) -> ParseOutcome[U]:
        result = parser(cursor)
        if isinstance(result, ParseFailure):
            return result
        span = Span(cursor.pos, result.cursor.pos)
        return ParseResult(build(result.value, span), result.cursor)

    return run


# =============================================================================
# Matchers
# =============================================================================


def literal(text: str) -> Parser[str]:
    """Match text exactly at the cursor."""
    expected = f"'{text}'"

    def run(cursor: Cursor) -> ParseOutcome[str]:
        if cursor.startswith(text):
            return ParseResult(text, cursor.advance(len(text)))
        return fail(cursor, expected)

    return run


def pattern(regex: str | re.Pattern[str], label: str, group: int = 0) -> Parser[str]:
    """Match a regular expression anchored at the cursor.

    Args:
        regex: Pattern source or compiled pattern (must not use ``^``)
        label: Name used in failure messages, e.g. "integer"
        group: Match group returned as the value (whole match by default)

    Returns:
        Parser yielding the matched group text
    """
    compiled = re.compile(regex) if isinstance(regex, str) else regex

    def run(cursor: Cursor) -> ParseOutcome[str]:
        match = cursor.match(compiled)
        if match is None:
            return fail(cursor, label)
        return ParseResult(match.group(group), cursor.advance(match.end() - cursor.pos))

    return run


def close_delimiter(opening: str, closing: str, *, leave: bool = False) -> Parser[str]:
    """Match the closing delimiter of a construct whose opening was consumed.

    Failures are committed: once an opening delimiter is recognised, no
    other lexer can claim the input. End of input yields
    UNBALANCED_DELIMITER; any other character is a pattern failure naming
    the expected close.

    Args:
        opening: Opening delimiter (for the diagnostic)
        closing: Closing delimiter to match
        leave: Also step the cursor one nesting level out

    Returns:
        Parser yielding the closing delimiter text
    """
    expected = f"'{closing}'"

    def run(cursor: Cursor) -> ParseOutcome[str]:
        if cursor.startswith(closing):
            after = cursor.advance(len(closing))
            return ParseResult(closing, after.leave() if leave else after)
        if cursor.is_eof:
            return ParseFailure(
                ErrorTemplate.unbalanced_delimiter(opening, closing),
                cursor,
                committed=True,
            )
        return fail(cursor, expected, committed=True)

    return run
