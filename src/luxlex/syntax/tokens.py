"""Token definitions for the Lux lexer.

Tokens are the output of lexing: literals, identifiers, tags, comments,
and the three structural groupings. The set is closed; consumers dispatch
with ``match`` statements and ``typing.assert_never`` for exhaustiveness.

Literal tokens keep the matched lexeme as text (numbers are not converted
at this stage). Char and String hold decoded text. Every token has an
optional span that does not take part in equality, so tokens built by hand
compare equal to lexed ones.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass, field
from typing import TypeIs

from luxlex.enums import CommentStyle

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Base types
    "Span",
    # Literals
    "Boolean",
    "Float",
    "Int",
    "Char",
    "String",
    "Ident",
    "Tag",
    # Comments
    "Comment",
    # Structural
    "List",
    "Tuple",
    "Record",
    # Type aliases
    "Literal",
    "Structural",
    "Token",
]

# ============================================================================
# BASE TYPES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Span:
    """Source position span.

    Attributes:
        start: Starting character offset (inclusive)
        end: Ending character offset (exclusive)

    Example:
        Source: "(add 1 2)"
        List span: Span(start=0, end=9)
        Ident "add" span: Span(start=1, end=4)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate span invariants."""
        if self.start < 0:
            msg = f"Span start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"Span end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)


# ============================================================================
# LITERALS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Boolean:
    """Boolean literal: true | false"""

    text: str
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class Float:
    """Float literal: (0|[1-9][0-9]*).[0-9]+

    Example:
        3.14 → Float("3.14")
    """

    text: str
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class Int:
    """Integer literal: 0|[1-9][0-9]*"""

    text: str
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class Char:
    """Character literal.

    Example:
        #"x"  → Char("x")
        #"\\n" → Char("\\n")  (decoded newline)
    """

    text: str
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class String:
    """String literal with escapes decoded."""

    text: str
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class Ident:
    """Identifier.

    Examples:
        foo-bar!, ->, a.b/c
    """

    text: str
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class Tag:
    """Tag: # followed by an identifier. The # is not retained.

    Example:
        #ok → Tag("ok")
    """

    text: str
    span: Span | None = field(default=None, compare=False, repr=False)


# ============================================================================
# COMMENTS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Comment:
    """Line (##) or block (#( )#) comment.

    Block comment text keeps nested comments verbatim, delimiters included.
    """

    text: str
    style: CommentStyle = CommentStyle.LINE
    span: Span | None = field(default=None, compare=False, repr=False)

    @staticmethod
    def guard(token: object) -> TypeIs["Comment"]:
        """Type guard for Comment (filters comments out of lex_with_comments output)."""
        return isinstance(token, Comment)


# ============================================================================
# STRUCTURAL
# ============================================================================


@dataclass(frozen=True, slots=True)
class List:
    """Parenthesized group: ( members )"""

    members: tuple["Token", ...]
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class Tuple:
    """Bracketed group: [ members ]"""

    members: tuple["Token", ...]
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class Record:
    """Braced group: { members }"""

    members: tuple["Token", ...]
    span: Span | None = field(default=None, compare=False, repr=False)


# ============================================================================
# TYPE ALIASES
# ============================================================================

type Literal = Boolean | Float | Int | Char | String | Ident | Tag
type Structural = List | Tuple | Record
type Token = Literal | Comment | Structural
